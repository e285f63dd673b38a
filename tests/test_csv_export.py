"""Tests for CSV export formatting."""
from datetime import date, datetime

from app.innovex.csv_export import rows_to_csv


class TestRowsToCsv:
    """Header from the first row, minimal quoting, no trailing newline."""

    def test_empty_rows(self):
        assert rows_to_csv([]) == ""

    def test_header_and_rows_in_key_order(self):
        rows = [{"Name": "Ana", "Email": "ana@example.com"}, {"Name": "Ben", "Email": "ben@example.com"}]
        assert rows_to_csv(rows) == "Name,Email\nAna,ana@example.com\nBen,ben@example.com"

    def test_comma_is_quoted(self):
        assert rows_to_csv([{"a": "x,y", "b": "z"}]) == 'a,b\n"x,y",z'

    def test_inner_quotes_are_doubled(self):
        assert rows_to_csv([{"q": 'He said "hi"'}]) == 'q\n"He said ""hi"""'

    def test_newline_is_quoted(self):
        assert rows_to_csv([{"a": "line1\nline2", "b": "ok"}]) == 'a,b\n"line1\nline2",ok'

    def test_none_renders_empty(self):
        assert rows_to_csv([{"a": None, "b": "x"}]) == "a,b\n,x"

    def test_missing_key_in_later_row_renders_empty(self):
        assert rows_to_csv([{"a": "1", "b": "2"}, {"a": "3"}]) == "a,b\n1,2\n3,"

    def test_dates_and_bools(self):
        rows = [{"d": date(2025, 1, 2), "t": datetime(2025, 1, 2, 3, 4, 5), "f": True}]
        assert rows_to_csv(rows) == "d,t,f\n2025-01-02,2025-01-02 03:04:05,true"

    def test_single_empty_cell_row(self):
        assert rows_to_csv([{"a": "x"}, {"a": ""}, {"a": "y"}]) == "a\nx\n\ny"
