"""Tests for CSL date values."""

import pytest

from cslcff.csl.dates import CslDate, DateParts, date_from_csl


class TestDateParts:
    def test_str_forms(self) -> None:
        assert str(DateParts(2018)) == "2018"
        assert str(DateParts(2018, 7)) == "2018-07"
        assert str(DateParts(2018, 7, 2)) == "2018-07-02"

    def test_day_requires_month(self) -> None:
        with pytest.raises(ValueError):
            DateParts(2018, day=3)

    @pytest.mark.parametrize("month", [0, 13])
    def test_month_range(self, month: int) -> None:
        with pytest.raises(ValueError):
            DateParts(2018, month)

    def test_is_complete(self) -> None:
        assert DateParts(2018, 7, 2).is_complete
        assert not DateParts(2018, 7).is_complete

    def test_to_csl(self) -> None:
        assert DateParts(2018, 7).to_csl() == [2018, 7]


class TestCslDate:
    def test_needs_some_form(self) -> None:
        with pytest.raises(ValueError, match="unknown date format"):
            CslDate()

    def test_raw_only(self) -> None:
        date = CslDate(raw="spring 2001")

        assert not date.is_structured
        assert str(date) == "spring 2001"

    def test_range(self) -> None:
        date = CslDate(start=DateParts(2001), end=DateParts(2003))

        assert date.is_range
        assert str(date) == "2001/2003"


class TestDateFromCsl:
    """Tests for date_from_csl()."""

    def test_string_parts_normalised(self) -> None:
        date = date_from_csl({"date-parts": [["2022", "9", 14]]})

        assert date.start == DateParts(2022, 9, 14)

    def test_range(self) -> None:
        date = date_from_csl({"date-parts": [[2001, 1], [2003, 6]]})

        assert date.start == DateParts(2001, 1)
        assert date.end == DateParts(2003, 6)

    def test_padding_stripped(self) -> None:
        date = date_from_csl({"date-parts": [[2019, "", ""]]})

        assert date.start == DateParts(2019)

    def test_textual_forms_and_extra(self) -> None:
        date = date_from_csl({"literal": "n.d.", "circa": True, "source": "x"})

        assert date.literal == "n.d."
        assert date.circa is True
        assert date.extra == {"source": "x"}

    def test_empty_object_rejected(self) -> None:
        with pytest.raises(ValueError):
            date_from_csl({})

    def test_too_many_dates(self) -> None:
        with pytest.raises(ValueError):
            date_from_csl({"date-parts": [[2001], [2002], [2003]]})

    def test_bad_part(self) -> None:
        with pytest.raises(ValueError):
            date_from_csl({"date-parts": [["twenty"]]})

    def test_round_trip(self) -> None:
        data = {"date-parts": [[2018, 7, 2]], "season": 3}

        assert date_from_csl(data).to_csl() == data
