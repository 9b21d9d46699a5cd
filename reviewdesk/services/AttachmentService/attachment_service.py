from __future__ import annotations

import base64
import csv
import io
import logging
import mimetypes
from collections.abc import Iterable
from datetime import date, datetime, time
from pathlib import Path
from typing import Any

import xlrd
from openpyxl import load_workbook
from openpyxl.chartsheet import Chartsheet

from reviewdesk.entities.message import Attachment
from reviewdesk.services.AttachmentService.attachment_service_interface import (
    AttachmentServiceInterface,
    RawUpload,
)

DEFAULT_MIME_TYPE = "application/octet-stream"
JSON_MIME_TYPE = "application/json"
SPREADSHEET_SUFFIXES = (".xlsx", ".xls")
ZIP_MAGIC = b"PK\x03\x04"


class AttachmentProcessingError(Exception):
    """Base error for upload conversion failures."""


class UnreadableUploadError(AttachmentProcessingError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Cannot read upload {path}: {reason}")


class SpreadsheetExtractionError(AttachmentProcessingError):
    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        super().__init__(f"Cannot extract spreadsheet {name}: {reason}")


def encode_text(text: str) -> str:
    """Base64-encode text as UTF-8."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def format_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def sheet_rows_to_csv(rows: Iterable[Iterable[Any]]) -> str:
    """Render worksheet rows as comma-separated text, one line per row."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    for row in rows:
        writer.writerow([format_cell(value) for value in row])
    return buffer.getvalue().removesuffix("\n")


def _worksheet_csv(sheet: Any) -> str:
    if isinstance(sheet, Chartsheet):
        return ""
    return sheet_rows_to_csv(sheet.iter_rows(values_only=True))


def _read_ooxml_sheets(data: bytes) -> list[tuple[str, str]]:
    workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        return [
            (sheet_name, _worksheet_csv(workbook[sheet_name]))
            for sheet_name in workbook.sheetnames
        ]
    finally:
        workbook.close()


def _biff_cell_value(cell: xlrd.sheet.Cell, datemode: int) -> Any:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
        return None
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_ERROR:
        return xlrd.error_text_from_code.get(cell.value, "")
    return cell.value


def _read_biff_sheets(data: bytes) -> list[tuple[str, str]]:
    book = xlrd.open_workbook(file_contents=data)
    try:
        return [
            (
                sheet.name,
                sheet_rows_to_csv(
                    [_biff_cell_value(cell, book.datemode) for cell in row]
                    for row in sheet.get_rows()
                ),
            )
            for sheet in book.sheets()
        ]
    finally:
        book.release_resources()


class AttachmentService(AttachmentServiceInterface):
    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def to_attachment(self, upload: RawUpload) -> Attachment:
        mime_type = upload.mime_type or DEFAULT_MIME_TYPE

        if upload.name.endswith(".json") or mime_type == JSON_MIME_TYPE:
            text = upload.data.decode("utf-8", errors="replace")
            return {"name": upload.name, "mime_type": JSON_MIME_TYPE, "data": encode_text(text)}

        if upload.name.endswith(SPREADSHEET_SUFFIXES):
            extracted = self.extract_spreadsheet_text(upload.name, upload.data)
            # Sent as plain text so the model reads the cells, not the workbook binary.
            return {"name": upload.name, "mime_type": "text/plain", "data": encode_text(extracted)}

        return {
            "name": upload.name,
            "mime_type": mime_type,
            "data": base64.b64encode(upload.data).decode("ascii"),
        }

    def extract_spreadsheet_text(self, name: str, data: bytes) -> str:
        """
        Flatten every sheet of a workbook into one text blob.

        The blob starts with a ``Filename:`` banner, followed by one
        ``--- Sheet: <name> ---`` section per sheet in workbook order, each
        holding that sheet's CSV rendering. Chart sheets get an empty section.

        The parser is picked from the bytes, not the suffix: OOXML workbooks
        (zip containers) go through openpyxl, legacy BIFF workbooks through xlrd.

        Raises:
            SpreadsheetExtractionError: If the bytes are not a readable workbook.
        """
        reader = _read_ooxml_sheets if data.startswith(ZIP_MAGIC) else _read_biff_sheets
        try:
            sheets = reader(data)
        except Exception as e:
            raise SpreadsheetExtractionError(name, str(e)) from e

        sections = [f"Filename: {name}\n\n"]
        for sheet_name, csv_text in sheets:
            sections.append(f"--- Sheet: {sheet_name} ---\n{csv_text}\n\n")
        return "".join(sections)

    def process_uploads(self, uploads: Iterable[RawUpload]) -> list[Attachment]:
        attachments: list[Attachment] = []
        for upload in uploads:
            try:
                attachments.append(self.to_attachment(upload))
            except Exception as e:
                self.logger.warning(
                    "Failed to process file %s: %s", upload.name, e, exc_info=True
                )
        return attachments

    def process_paths(self, paths: Iterable[str | Path]) -> list[Attachment]:
        attachments: list[Attachment] = []
        for raw_path in paths:
            path = Path(raw_path)
            try:
                upload = self.read_upload(path)
                attachments.append(self.to_attachment(upload))
            except Exception as e:
                self.logger.warning(
                    "Failed to process file %s: %s", path.name, e, exc_info=True
                )
        self.logger.info("Processed %d file(s) into attachments", len(attachments))
        return attachments

    @staticmethod
    def read_upload(path: Path) -> RawUpload:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise UnreadableUploadError(path, e.strerror or str(e)) from e

        mime_type, _ = mimetypes.guess_type(path.name)
        return RawUpload(name=path.name, mime_type=mime_type or "", data=data)
