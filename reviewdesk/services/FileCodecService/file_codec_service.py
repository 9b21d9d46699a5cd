from __future__ import annotations

import base64
import csv
import io
import logging
import re
from enum import Enum

from openpyxl import Workbook
from openpyxl.utils.exceptions import IllegalCharacterError

from reviewdesk.entities.message import Attachment
from reviewdesk.services.FileCodecService.file_codec_service_interface import (
    FileCodecServiceInterface,
)

SPREADSHEET_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
WORD_DOC_MIME_TYPE = "application/msword"
PLAIN_TEXT_MIME_TYPE = "text/plain"

SHEET_NAME = "Sheet1"

WORD_DOC_TEMPLATE = """
      <html xmlns:o='urn:schemas-microsoft-com:office:office' xmlns:w='urn:schemas-microsoft-com:office:word' xmlns='http://www.w3.org/TR/REC-html40'>
      <head><meta charset='utf-8'><title>Document</title></head>
      <body>{body}</body>
      </html>
    """

_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")
_DECIMAL_PATTERN = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?$")


class FileEncodingError(Exception):
    def __init__(self, filename: str, reason: str) -> None:
        self.filename = filename
        super().__init__(f"Cannot encode {filename}: {reason}")


class FileKind(Enum):
    SPREADSHEET = "spreadsheet"
    WORD_DOC = "word_doc"
    PLAIN_TEXT = "plain_text"

    @classmethod
    def from_filename(cls, filename: str) -> FileKind:
        # Suffixes are case-sensitive: "REPORT.XLSX" is plain text.
        if filename.endswith(".xlsx"):
            return cls.SPREADSHEET
        if filename.endswith((".doc", ".docx")):
            return cls.WORD_DOC
        return cls.PLAIN_TEXT


def utf8_to_b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def coerce_cell(raw: str) -> str | int | float | None:
    """Type a CSV field the way spreadsheet CSV imports do."""
    value = raw.strip()
    if not value:
        return None
    if _INTEGER_PATTERN.match(value):
        return int(value)
    if _DECIMAL_PATTERN.match(value):
        return float(value)
    return raw


class FileCodecService(FileCodecServiceInterface):
    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def encode(self, filename: str, content: str, declared_mime: str) -> Attachment:
        kind = FileKind.from_filename(filename)
        self.logger.debug(
            "Encoding %s as %s (declared mime: %s)", filename, kind.value, declared_mime
        )

        if kind is FileKind.SPREADSHEET:
            return {
                "name": filename,
                "mime_type": SPREADSHEET_MIME_TYPE,
                "data": self.build_spreadsheet(filename, content),
            }
        if kind is FileKind.WORD_DOC:
            # A .docx name is kept as-is even though the body is HTML-as-.doc.
            return {
                "name": filename,
                "mime_type": WORD_DOC_MIME_TYPE,
                "data": utf8_to_b64(WORD_DOC_TEMPLATE.format(body=content)),
            }
        return {
            "name": filename,
            "mime_type": PLAIN_TEXT_MIME_TYPE,
            "data": utf8_to_b64(content),
        }

    def build_spreadsheet(self, filename: str, csv_content: str) -> str:
        """
        Convert CSV text into a single-sheet workbook and return it as base64.

        Raises:
            FileEncodingError: If the CSV cannot be parsed or the workbook
                cannot be serialized.
        """
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = SHEET_NAME

        try:
            for row in csv.reader(io.StringIO(csv_content)):
                sheet.append([coerce_cell(field) for field in row])

            buffer = io.BytesIO()
            workbook.save(buffer)
        except (csv.Error, ValueError, IllegalCharacterError) as e:
            raise FileEncodingError(filename, str(e)) from e

        return base64.b64encode(buffer.getvalue()).decode("ascii")
