"""Tests for the document model."""

from datetime import date, datetime

import numpy as np
import pandas as pd
import pytest

from sheet_translator.models import Cell, CellKind, GroupEntry, Row, Sheet, TabularDocument


class TestCell:
    """Test typed cell values."""

    def test_from_python_kinds(self):
        """Test raw values map to the right kind."""
        assert Cell.from_python("abc").kind is CellKind.TEXT
        assert Cell.from_python(3).kind is CellKind.NUMBER
        assert Cell.from_python(2.5).kind is CellKind.NUMBER
        assert Cell.from_python(True).kind is CellKind.BOOLEAN
        assert Cell.from_python(date(2024, 1, 2)).kind is CellKind.DATE
        assert Cell.from_python(None).kind is CellKind.EMPTY
        assert Cell.from_python(float("nan")).kind is CellKind.EMPTY

    def test_from_python_numpy_and_pandas(self):
        """Test numpy scalars and pandas timestamps are unwrapped."""
        assert Cell.from_python(np.int64(7)) == Cell.number(7)
        assert Cell.from_python(np.float64(1.25)) == Cell.number(1.25)
        assert Cell.from_python(np.bool_(False)) == Cell.boolean(False)
        stamp = Cell.from_python(pd.Timestamp("2024-05-06 07:08:09"))
        assert stamp.kind is CellKind.DATE
        assert stamp.value == datetime(2024, 5, 6, 7, 8, 9)
        assert Cell.from_python(pd.NaT).is_empty

    def test_integral_float_becomes_int(self):
        """Test 3.0 is stored and shown as 3."""
        cell = Cell.from_python(3.0)
        assert cell.value == 3 and isinstance(cell.value, int)
        assert cell.display() == "3"

    def test_is_translatable(self):
        """Test only non-blank text is translatable."""
        assert Cell.text("hello").is_translatable
        assert not Cell.text("   ").is_translatable
        assert not Cell.text("").is_translatable
        assert not Cell.number(1).is_translatable
        assert not Cell.boolean(True).is_translatable
        assert not Cell.empty().is_translatable

    def test_display(self):
        """Test values render as a spreadsheet shows them."""
        assert Cell.boolean(True).display() == "TRUE"
        assert Cell.boolean(False).display() == "FALSE"
        assert Cell.date(date(2024, 1, 2)).display() == "2024-01-02"
        assert Cell.empty().display() == ""
        assert Cell.number(1.5).display() == "1.5"


class TestRow:
    """Test the ordered row mapping."""

    def test_preserves_insertion_order(self):
        row = Row([("b", 1), ("a", "x"), ("c", None)])
        assert list(row) == ["b", "a", "c"]
        assert row["a"] == Cell.text("x")
        assert row["c"].is_empty

    def test_keys_are_case_sensitive(self):
        row = Row({"Name": "a", "name": "b"})
        assert len(row) == 2
        assert row["Name"].value == "a"

    def test_with_values_returns_new_row(self):
        """Test updates never touch the source row."""
        row = Row({"a": "x", "b": 1})
        updated = row.with_values({"a": "y", "a_fr": "z"})
        assert row.to_dict() == {"a": "x", "b": 1}
        assert updated.to_dict() == {"a": "y", "b": 1, "a_fr": "z"}
        assert list(updated) == ["a", "b", "a_fr"]

    def test_equality_is_order_sensitive(self):
        assert Row({"a": 1, "b": 2}) == Row({"a": 1, "b": 2})
        assert Row({"a": 1, "b": 2}) != Row({"b": 2, "a": 1})

    def test_row_is_read_only(self):
        row = Row({"a": 1})
        with pytest.raises(TypeError):
            row["a"] = 2


class TestDocument:
    """Test sheets and documents."""

    def test_sheet_columns_union(self):
        """Test sparse rows contribute columns in first-encounter order."""
        sheet = Sheet("S", [Row({"a": 1}), Row({"b": 2, "a": 3}), Row({"c": 4})])
        assert sheet.columns == ["a", "b", "c"]
        assert isinstance(sheet.rows, tuple)

    def test_sheet_lookup(self):
        doc = TabularDocument((Sheet("One"), Sheet("Two", [Row({"a": "x"})])))
        assert doc.sheet_names == ["One", "Two"]
        assert doc.sheet("Two").rows[0]["a"].value == "x"
        assert doc.sheet("Three") is None

    def test_duplicate_sheet_names_rejected(self):
        with pytest.raises(ValueError, match="duplicate sheet name"):
            TabularDocument((Sheet("A"), Sheet("A")))

    def test_cell_counts(self):
        doc = TabularDocument((
            Sheet("A", [Row({"a": "hello", "b": 1, "c": " "})]),
            Sheet("B", [Row({"a": "world"})]),
        ))
        assert doc.cell_count() == 4
        assert doc.translatable_cell_count() == 2

    def test_documents_are_immutable(self):
        doc = TabularDocument((Sheet("A"),))
        with pytest.raises(AttributeError):
            doc.sheets = ()


class TestGroupEntry:
    def test_renders_quoted_pair(self):
        assert str(GroupEntry(3, "你好")) == '"3": "你好"'
