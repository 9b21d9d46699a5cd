"""
Unit tests for AttachmentService (upload ingestion).
"""

import base64
import io
import logging
from pathlib import Path

import pytest
import xlwt
from openpyxl import Workbook
from openpyxl.chart import BarChart, Reference

from reviewdesk.services.AttachmentService.attachment_service import (
    AttachmentService,
    SpreadsheetExtractionError,
    sheet_rows_to_csv,
)
from reviewdesk.services.AttachmentService.attachment_service_interface import (
    RawUpload,
)


def _decode(data: str) -> str:
    return base64.b64decode(data, validate=True).decode("utf-8")


def _workbook_bytes(sheets: dict[str, list[list]]) -> bytes:
    workbook = Workbook()
    workbook.remove(workbook.active)
    for title, rows in sheets.items():
        sheet = workbook.create_sheet(title)
        for row in rows:
            sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def _legacy_workbook_bytes(sheets: dict[str, list[list]]) -> bytes:
    workbook = xlwt.Workbook()
    for title, rows in sheets.items():
        sheet = workbook.add_sheet(title)
        for row_index, row in enumerate(rows):
            for col_index, value in enumerate(row):
                sheet.write(row_index, col_index, value)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def service() -> AttachmentService:
    return AttachmentService(logger=logging.getLogger("AttachmentServiceTest"))


class TestToAttachment:
    def test_json_by_extension_forces_json_mime(self, service: AttachmentService) -> None:
        text = '{"clause": "Käufer haftet"}'
        upload = RawUpload(name="terms.json", mime_type="text/plain", data=text.encode("utf-8"))

        attachment = service.to_attachment(upload)

        assert attachment["mime_type"] == "application/json"
        assert attachment["name"] == "terms.json"
        assert _decode(attachment["data"]) == text

    def test_json_by_mime_type(self, service: AttachmentService) -> None:
        upload = RawUpload(name="payload", mime_type="application/json", data=b"[1, 2]")

        attachment = service.to_attachment(upload)

        assert attachment["mime_type"] == "application/json"
        assert _decode(attachment["data"]) == "[1, 2]"

    def test_plain_text_round_trips(self, service: AttachmentService) -> None:
        text = "Résumé · 第1章\nline two"
        upload = RawUpload(name="notes.txt", mime_type="text/plain", data=text.encode("utf-8"))

        attachment = service.to_attachment(upload)

        assert attachment["mime_type"] == "text/plain"
        assert _decode(attachment["data"]) == text

    def test_binary_keeps_reported_mime(self, service: AttachmentService) -> None:
        payload = b"%PDF-1.7\x00\xff\xfe"
        upload = RawUpload(name="contract.pdf", mime_type="application/pdf", data=payload)

        attachment = service.to_attachment(upload)

        assert attachment["mime_type"] == "application/pdf"
        assert base64.b64decode(attachment["data"]) == payload

    def test_empty_mime_defaults_to_octet_stream(self, service: AttachmentService) -> None:
        upload = RawUpload(name="blob.bin", mime_type="", data=b"\x01\x02")

        attachment = service.to_attachment(upload)

        assert attachment["mime_type"] == "application/octet-stream"

    def test_spreadsheet_is_flattened_to_text(self, service: AttachmentService) -> None:
        data = _workbook_bytes(
            {
                "Budget": [["Item", "Cost"], ["Paper", 12], ["Ink, black", 3.5]],
                "Notes": [["ok"]],
            }
        )
        upload = RawUpload(
            name="costs.xlsx",
            mime_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            data=data,
        )

        attachment = service.to_attachment(upload)
        text = _decode(attachment["data"])

        assert attachment["mime_type"] == "text/plain"
        assert text.startswith("Filename: costs.xlsx\n\n")
        assert text.count("--- Sheet: ") == 2
        assert text.index("--- Sheet: Budget ---") < text.index("--- Sheet: Notes ---")
        assert '--- Sheet: Budget ---\nItem,Cost\nPaper,12\n"Ink, black",3.5\n\n' in text
        assert text.endswith("--- Sheet: Notes ---\nok\n\n")

    def test_legacy_xls_is_flattened_to_text(self, service: AttachmentService) -> None:
        upload = RawUpload(
            name="legacy.xls",
            mime_type="application/vnd.ms-excel",
            data=_legacy_workbook_bytes(
                {
                    "Ledger": [["Item", "Cost", "Paid"], ["Paper", 12, True]],
                    "Empty": [],
                }
            ),
        )

        attachment = service.to_attachment(upload)
        text = _decode(attachment["data"])

        assert attachment["mime_type"] == "text/plain"
        assert attachment["name"] == "legacy.xls"
        assert text.startswith("Filename: legacy.xls\n\n")
        assert "--- Sheet: Ledger ---\nItem,Cost,Paid\nPaper,12,TRUE\n\n" in text
        assert text.endswith("--- Sheet: Empty ---\n\n\n")

    def test_ooxml_bytes_with_xls_name_use_workbook_reader(
        self, service: AttachmentService
    ) -> None:
        upload = RawUpload(
            name="renamed.xls",
            mime_type="application/vnd.ms-excel",
            data=_workbook_bytes({"Data": [["a", 1]]}),
        )

        text = _decode(service.to_attachment(upload)["data"])

        assert "--- Sheet: Data ---\na,1\n\n" in text

    def test_chart_sheet_gets_empty_section(self, service: AttachmentService) -> None:
        workbook = Workbook()
        data_sheet = workbook.active
        data_sheet.title = "Data"
        for row in [["Quarter", "Revenue"], ["Q1", 10], ["Q2", 20]]:
            data_sheet.append(row)
        chart = BarChart()
        chart.add_data(
            Reference(data_sheet, min_col=2, min_row=1, max_row=3), titles_from_data=True
        )
        workbook.create_chartsheet("Chart").add_chart(chart)
        buffer = io.BytesIO()
        workbook.save(buffer)
        upload = RawUpload(name="report.xlsx", mime_type="", data=buffer.getvalue())

        attachments = service.process_uploads([upload])

        assert len(attachments) == 1
        text = _decode(attachments[0]["data"])
        assert "--- Sheet: Data ---\nQuarter,Revenue\nQ1,10\nQ2,20\n\n" in text
        assert text.endswith("--- Sheet: Chart ---\n\n\n")

    def test_corrupt_spreadsheet_raises(self, service: AttachmentService) -> None:
        upload = RawUpload(name="broken.xlsx", mime_type="", data=b"not a zip file")

        with pytest.raises(SpreadsheetExtractionError):
            service.to_attachment(upload)


class TestBatchProcessing:
    def test_failure_is_isolated_and_order_kept(self, service: AttachmentService) -> None:
        uploads = [
            RawUpload(name="a.txt", mime_type="text/plain", data=b"first"),
            RawUpload(name="bad.xlsx", mime_type="", data=b"garbage"),
            RawUpload(name="c.txt", mime_type="text/plain", data=b"third"),
        ]

        attachments = service.process_uploads(uploads)

        assert [a["name"] for a in attachments] == ["a.txt", "c.txt"]

    def test_process_paths_skips_missing_file(
        self, service: AttachmentService, tmp_path: Path
    ) -> None:
        present = tmp_path / "memo.txt"
        present.write_text("hello", encoding="utf-8")

        attachments = service.process_paths([tmp_path / "missing.txt", present])

        assert len(attachments) == 1
        assert attachments[0]["name"] == "memo.txt"
        assert attachments[0]["mime_type"] == "text/plain"
        assert _decode(attachments[0]["data"]) == "hello"

    def test_process_paths_reads_spreadsheet(
        self, service: AttachmentService, tmp_path: Path
    ) -> None:
        path = tmp_path / "sheet.xlsx"
        path.write_bytes(_workbook_bytes({"Only": [["x", "y"]]}))

        attachments = service.process_paths([path])

        assert attachments[0]["mime_type"] == "text/plain"
        assert "--- Sheet: Only ---\nx,y" in _decode(attachments[0]["data"])


def test_sheet_rows_to_csv_formats_cells() -> None:
    rows = [(None, True, 2.0, "a\"b"), ("line\nbreak", 1.25, None, None)]

    assert sheet_rows_to_csv(rows) == ',TRUE,2,"a""b"\n"line\nbreak",1.25,,'
