"""Tests for LOG durations and date validation."""

import pytest

from supercommit.durations import parse_duration, parse_log, split_log_value, validate_date
from supercommit.errors import CalendarError, FormatError


class TestParseDuration:
    @pytest.mark.parametrize(
        ("text", "hours"),
        [
            ("2h", 2.0),
            ("1.5h", 1.5),
            ("2H", 2.0),
            ("0.25h", 0.25),
            ("1:30", 1.5),
            ("0:45", 0.75),
            ("2:5", 2 + 5 / 60),
            ("90m", 1.5),
            ("30M", 0.5),
        ],
    )
    def test_forms(self, text: str, hours: float) -> None:
        assert parse_duration(text) == pytest.approx(hours)

    @pytest.mark.parametrize("text", ["0h", "0:00", "0m", "0.0h"])
    def test_zero_rejected(self, text: str) -> None:
        with pytest.raises(FormatError, match="positive number"):
            parse_duration(text)

    @pytest.mark.parametrize("text", ["", "h", "1.h", ".5h", "1h30m", "1:300", "-1h", "1 h", "1h "])
    def test_unrecognized(self, text: str) -> None:
        with pytest.raises(FormatError, match="LOG must be"):
            parse_duration(text)

    def test_minutes_bound(self) -> None:
        with pytest.raises(FormatError, match="minutes must be < 60"):
            parse_duration("1:75")


class TestValidateDate:
    def test_valid(self) -> None:
        assert validate_date("2025-10-01") == "2025-10-01"

    @pytest.mark.parametrize("text", ["2025/01/01", "25-01-01", "2025-1-01", "2025-01-01T00:00", "today"])
    def test_pattern(self, text: str) -> None:
        with pytest.raises(FormatError, match="yyyy-mm-dd"):
            validate_date(text)

    @pytest.mark.parametrize("text", ["2025-02-30", "2025-00-10", "2025-12-32", "2023-02-29"])
    def test_calendar(self, text: str) -> None:
        with pytest.raises(CalendarError):
            validate_date(text)

    def test_trailing_newline_rejected(self) -> None:
        with pytest.raises(FormatError, match="yyyy-mm-dd"):
            validate_date("2025-10-18\n")

    @pytest.mark.parametrize("text", ["0000-01-01", "0050-01-01", "0099-12-31"])
    def test_two_digit_years_rejected(self, text: str) -> None:
        with pytest.raises(CalendarError):
            validate_date(text)

    def test_year_100_accepted(self) -> None:
        assert validate_date("0100-01-01") == "0100-01-01"


class TestSplitLogValue:
    def test_no_date(self) -> None:
        assert split_log_value("2h") == ("2h", None)

    def test_with_date(self) -> None:
        assert split_log_value("2h@ 2025-10-06 ") == ("2h", "2025-10-06")

    def test_bare_at(self) -> None:
        assert split_log_value("2h@") == ("2h", None)

    def test_time_part_not_trimmed(self) -> None:
        assert split_log_value("2h @2025-10-06") == ("2h ", "2025-10-06")


class TestParseLog:
    def test_inline_date(self) -> None:
        assert parse_log("1:30@2025-10-06") == (1.5, "2025-10-06")

    def test_fallback_date(self) -> None:
        assert parse_log("90m", fallback_date="2025-10-07") == (1.5, "2025-10-07")

    def test_no_date(self) -> None:
        assert parse_log("1h") == (1.0, None)

    def test_duration_checked_before_date(self) -> None:
        with pytest.raises(FormatError, match="LOG must be"):
            parse_log("x@2025-02-30")

    def test_space_before_at_rejected(self) -> None:
        with pytest.raises(FormatError, match="LOG must be"):
            parse_log("2h @2025-10-06")
