"""Tests for record parsing and field coercion."""

import pytest

from credit_trends.data.errors import EmptyDatasetError, MalformedRowSkipped
from credit_trends.data.loader import (
    coerce_float,
    coerce_int,
    frame_to_records,
    load_csv_file,
    parse_line,
    parse_records,
    parse_records_with_stats,
    records_to_frame,
)
from credit_trends.data.schemas import TaxCreditRecord

from tests.conftest import HEADER, make_csv


class TestCoercion:
    """Per-field coercion never fails the row."""

    @pytest.mark.parametrize("token,expected", [
        ("2020", 2020),
        (" 2021 ", 2021),
        ("12.7", 12),
        ("3x", 3),
        ("-4", -4),
        ("", 0),
        ("abc", 0),
        (None, 0),
        ("99999999999999999999", 0),
        ("-99999999999999999999", 0),
        ("9223372036854775807", 9223372036854775807),
        ("9" * 5000, 0),
    ])
    def test_coerce_int(self, token, expected):
        assert coerce_int(token) == expected

    @pytest.mark.parametrize("token,expected", [
        ("1000", 1000.0),
        ("750.5", 750.5),
        ("1e3", 1000.0),
        ("12.5abc", 12.5),
        (".5", 0.5),
        ("", 0.0),
        ("n/a", 0.0),
        (None, 0.0),
    ])
    def test_coerce_float(self, token, expected):
        assert coerce_float(token) == expected


class TestParseLine:
    """Tests for single-line parsing."""

    def test_parses_by_position(self):
        record = parse_line("2020,CA,R&D,Tech,1000,2,High,IRS")
        assert record == TaxCreditRecord(2020, "CA", "R&D", "Tech", 1000.0, 2, "High", "IRS")

    def test_trims_string_fields(self):
        record = parse_line(" 2020 , CA , R&D , Tech , 10 , 1 , High , IRS ")
        assert record.state == "CA"
        assert record.credit_type == "R&D"
        assert record.source == "IRS"

    def test_bad_numbers_default_to_zero(self):
        record = parse_line("year,CA,R&D,Tech,lots,many,High,IRS")
        assert record.year == 0
        assert record.claimed_amount == 0.0
        assert record.claims_count == 0

    def test_empty_string_fields_kept_empty(self):
        record = parse_line("2020,,,,5,1,,")
        assert record.state == ""
        assert record.sector == ""
        assert record.source == ""

    def test_extra_fields_ignored(self):
        record = parse_line("2020,CA,R&D,Tech,5,1,High,IRS,extra,more")
        assert record.source == "IRS"

    def test_short_line_raises(self):
        with pytest.raises(MalformedRowSkipped) as exc:
            parse_line("2020,CA,R&D", line_number=7)
        assert exc.value.line_number == 7
        assert exc.value.token_count == 3

    def test_quoted_delimiter_not_special_cased(self):
        record = parse_line('2020,"Austin, TX",R&D,Tech,5,1,High,IRS')
        assert record.state == '"Austin'
        assert record.credit_type == 'TX"'


class TestParseRecords:
    """Tests for whole-text parsing."""

    def test_header_ignored_and_order_preserved(self, sample_records):
        assert len(sample_records) == 6
        assert [r.year for r in sample_records] == [2020, 2020, 2021, 2021, 2022, 2022]
        assert sample_records[4].claimed_amount == 750.5

    def test_header_content_not_matched(self):
        records = parse_records(make_csv(["2020,CA,R&D,Tech,5,1,High,IRS"], header="a,b,c"))
        assert records[0].state == "CA"

    def test_short_rows_are_skipped_and_counted(self):
        text = make_csv([
            "2020,CA,R&D,Tech,5,1,High,IRS",
            "2020,CA,R&D",
            "",
            "2021,TX,EITC,Retail,7,2,Low,IRS",
        ])
        records, skipped = parse_records_with_stats(text)
        assert len(records) == 2
        assert skipped == 2

    def test_windows_line_endings(self):
        text = HEADER + "\r\n" + "2020,CA,R&D,Tech,5,1,High,IRS\r\n"
        records = parse_records(text)
        assert records[0].source == "IRS"

    def test_only_newline_separates_records(self):
        text = HEADER + "\n" + "2020,CA,R&D,Tech,5,1,High,IRS\u2028note\x0bextra\n"
        records, skipped = parse_records_with_stats(text)
        assert len(records) == 1
        assert skipped == 0
        assert records[0].source == "IRS\u2028note\x0bextra"

    def test_oversized_integers_become_zero(self):
        text = HEADER + "\n" + "2020,CA,R&D,Tech,1000,99999999999999999999,High,IRS\n" + "9" * 5000 + ",TX,EITC,Retail,5,1,Low,IRS"
        records = parse_records(text)
        assert records[0].claims_count == 0
        assert records[1].year == 0
        df = records_to_frame(records)
        assert df["claims_count"].tolist() == [0, 1]

    def test_header_only_raises_empty_dataset(self):
        with pytest.raises(EmptyDatasetError) as exc:
            parse_records(HEADER)
        assert "8 columns" in str(exc.value)
        assert exc.value.expected_columns[0] == "Year"

    def test_empty_text_raises_empty_dataset(self):
        with pytest.raises(EmptyDatasetError):
            parse_records("")

    def test_all_rows_malformed_raises_empty_dataset(self):
        with pytest.raises(EmptyDatasetError):
            parse_records(make_csv(["1,2,3", "4,5"]))

    def test_empty_dataset_is_a_value_error(self):
        assert issubclass(EmptyDatasetError, ValueError)


class TestFrameConversion:
    """Tests for record ↔ frame conversion."""

    def test_round_trip(self, sample_records):
        assert frame_to_records(records_to_frame(sample_records)) == sample_records

    def test_dtypes(self, sample_df):
        assert str(sample_df["year"].dtype) == "int64"
        assert str(sample_df["claims_count"].dtype) == "int64"
        assert str(sample_df["claimed_amount"].dtype) == "float64"

    def test_empty_frame_has_columns(self):
        df = records_to_frame([])
        assert df.empty
        assert "claimed_amount" in df.columns


class TestLoadCsvFile:
    """Tests for reading from disk."""

    def test_reads_utf8_with_bom(self, tmp_path, sample_text):
        path = tmp_path / "credits.csv"
        path.write_bytes(("\ufeff" + sample_text).encode("utf-8"))
        records, skipped = load_csv_file(path)
        assert len(records) == 6
        assert skipped == 0
