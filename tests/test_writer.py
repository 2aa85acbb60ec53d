"""Tests for workbook output."""

import io
import logging
import os
from datetime import datetime

import openpyxl

from sheet_translator.parser import TableParser
from sheet_translator.writer import save_workbook, write_workbook

from conftest import build_document


def load(data):
    return openpyxl.load_workbook(io.BytesIO(data))


class TestWriteWorkbook:
    """Test serialization to .xlsx."""

    def test_one_worksheet_per_sheet(self, sample_document):
        workbook = load(write_workbook(sample_document))
        assert workbook.sheetnames == ["Greetings", "Extra"]

    def test_header_is_union_of_keys(self, sample_document):
        worksheet = load(write_workbook(sample_document))["Greetings"]
        rows = list(worksheet.iter_rows(values_only=True))

        assert rows[0] == ("English", "Count", "Note")
        assert rows[1] == ("Hello", 1, None)
        assert rows[2] == ("world", 2, "Welcome file")
        assert worksheet["A1"].font.bold

    def test_native_types(self):
        doc = build_document({"S": [{"when": datetime(2024, 1, 2, 3, 4), "ok": True, "x": 1.5}]})
        worksheet = load(write_workbook(doc))["S"]
        assert worksheet["A2"].value == datetime(2024, 1, 2, 3, 4)
        assert worksheet["B2"].value is True
        assert worksheet["C2"].value == 1.5

    def test_empty_document_still_valid(self, make_document):
        workbook = load(write_workbook(make_document({})))
        assert workbook.sheetnames == ["Sheet1"]

    def test_formula_like_text_stays_text(self):
        doc = build_document({"S": [{"a": "=1+1", "b": "=SUM(A1:A2)"}]})
        worksheet = load(write_workbook(doc))["S"]

        assert worksheet["A2"].data_type == "s"
        assert worksheet["A2"].value == "=1+1"
        assert worksheet["B2"].data_type == "s"

    def test_control_characters_are_removed(self):
        doc = build_document({"S": [{"a": "bad\x01text"}]})
        worksheet = load(write_workbook(doc))["S"]
        assert worksheet["A2"].value == "badtext"

    def test_truncated_titles_stay_distinct(self, caplog):
        long_name = "Quarterly translation report for"
        doc = build_document({
            long_name + " 2023": [{"a": "x"}],
            long_name + " 2024": [{"a": "y"}],
        })

        with caplog.at_level(logging.WARNING):
            workbook = load(write_workbook(doc))

        assert workbook.sheetnames == [long_name[:31], long_name[:29] + "_1"]
        assert workbook.sheetnames[1] in caplog.text

    def test_round_trip_through_parser(self, sample_document):
        parsed = TableParser().parse(write_workbook(sample_document))
        assert parsed == sample_document

    def test_save_workbook(self, sample_document, tmp_path):
        path = os.path.join(tmp_path, "out.xlsx")
        save_workbook(sample_document, path)
        with open(path, "rb") as f:
            assert load(f.read()).sheetnames == ["Greetings", "Extra"]
