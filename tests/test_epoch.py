import calendar
from datetime import datetime, timezone

import pytest

from ephbpn.epoch import Epoch


# ──────────────────────────────────────────────
# Construction
# ──────────────────────────────────────────────


class TestEpochConstruction:
    def test_epoch_from_date(self):
        epc = Epoch(2016, 7, 23, 12, 59, 59)
        assert epc.caldate() == (2016, 7, 23, 12, 59, 59)

    def test_epoch_from_date_defaults(self):
        epc = Epoch(2000, 1, 1)
        assert epc.caldate() == (2000, 1, 1, 0, 0, 0)

    def test_epoch_fractional_second(self):
        epc = Epoch(2020, 6, 15, 10, 30, 15.123)
        assert epc.second == pytest.approx(15.123)

    def test_epoch_is_frozen(self):
        epc = Epoch(2016, 7, 23)
        with pytest.raises(AttributeError):
            epc.year = 2017

    def test_epoch_equality(self):
        assert Epoch(2016, 7, 23) == Epoch(2016, 7, 23, 0, 0, 0)
        assert Epoch(2016, 7, 23) != Epoch(2016, 7, 24)

    def test_leap_day(self):
        Epoch(2016, 2, 29)
        Epoch(2000, 2, 29)

    def test_negative_year(self):
        epc = Epoch(-4713, 11, 24, 12)
        assert float(epc.jd()) == pytest.approx(0.0, abs=1e-9)


class TestEpochValidation:
    @pytest.mark.parametrize(
        "fields",
        [
            (2016, 0, 1),
            (2016, 13, 1),
            (2016, 7, 0),
            (2016, 7, 32),
            (2016, 4, 31),
            (2015, 2, 29),
            (1900, 2, 29),
            (2016, 7, 23, 24, 0, 0),
            (2016, 7, 23, -1, 0, 0),
            (2016, 7, 23, 0, 60, 0),
            (2016, 7, 23, 0, 0, 60),
            (2016, 7, 23, 0, 0, -0.5),
        ],
    )
    def test_invalid_fields_raise(self, fields):
        with pytest.raises(ValueError, match="Invalid date-time"):
            Epoch(*fields)


# ──────────────────────────────────────────────
# String parsing
# ──────────────────────────────────────────────


class TestEpochFromString:
    def test_compact_date(self):
        assert Epoch.from_string("20160723") == Epoch(2016, 7, 23)

    def test_compact_date_time(self):
        assert Epoch.from_string("20160723125959") == Epoch(2016, 7, 23, 12, 59, 59)

    def test_iso_date(self):
        assert Epoch.from_string("2016-07-23") == Epoch(2016, 7, 23)

    def test_iso_date_time(self):
        assert Epoch.from_string("2016-07-23T12:59:59Z") == Epoch(2016, 7, 23, 12, 59, 59)

    def test_iso_fractional_seconds(self):
        epc = Epoch.from_string("2016-07-23T12:59:59.25Z")
        assert epc.second == pytest.approx(59.25)

    @pytest.mark.parametrize(
        "string",
        ["", "2016072", "201607231", "2016072312595", "201607231259599", "2016/07/23", "abcdefgh", "20160723 125959"],
    )
    def test_bad_format_raises(self, string):
        with pytest.raises(ValueError, match="Format: YYYYMMDD or YYYYMMDDHHMMSS"):
            Epoch.from_string(string)

    def test_bad_format_lists_iso_forms(self):
        with pytest.raises(ValueError, match=r"YYYY-MM-DD\[THH:MM:SS\[\.fff\]Z\]"):
            Epoch.from_string("2016/07/23")

    @pytest.mark.parametrize("string", ["20160732", "20150229", "20160723250000", "20160723126000"])
    def test_invalid_date_time_raises(self, string):
        with pytest.raises(ValueError, match="Invalid date-time"):
            Epoch.from_string(string)


# ──────────────────────────────────────────────
# Derived values
# ──────────────────────────────────────────────


class TestEpochDerived:
    def test_jd(self):
        assert float(Epoch(2016, 7, 23).jd()) == 2457592.5

    def test_jc(self):
        assert float(Epoch(2016, 7, 23).jc()) == pytest.approx(0.16557152635181382, abs=1e-16)

    def test_jd_j2000(self):
        assert float(Epoch(2000, 1, 1, 12).jd()) == 2451545.0

    def test_str(self):
        assert str(Epoch(2016, 7, 23, 12, 59, 59)) == "2016-07-23T12:59:59Z"

    def test_str_fractional(self):
        assert str(Epoch(2016, 7, 23, 12, 59, 59.5)) == "2016-07-23T12:59:59.500000Z"

    def test_str_rounds_to_microseconds(self):
        assert str(Epoch(2016, 7, 23, 12, 59, 12.3456789)) == "2016-07-23T12:59:12.345679Z"

    def test_str_rounding_carries_into_whole_second(self):
        assert str(Epoch(2016, 7, 23, 0, 0, 5.9999999)) == "2016-07-23T00:00:06Z"

    def test_str_rounding_never_reaches_sixty(self):
        assert str(Epoch(2016, 7, 23, 0, 0, 59.9999999)) == "2016-07-23T00:00:59.999999Z"

    def test_str_round_trips_through_from_string(self):
        epc = Epoch(2016, 7, 23, 1, 2, 3)
        assert Epoch.from_string(str(epc)) == epc

    def test_now(self):
        before = datetime.now(timezone.utc).replace(microsecond=0)
        epc = Epoch.now()
        after = datetime.now(timezone.utc)
        t = datetime(epc.year, epc.month, epc.day, epc.hour, epc.minute, int(epc.second), tzinfo=timezone.utc)
        assert before <= t <= after
        assert epc.second == int(epc.second)

    def test_leap_year_rule_matches_calendar(self):
        for year in (1600, 1700, 1900, 2000, 2023, 2024):
            if calendar.isleap(year):
                Epoch(year, 2, 29)
            else:
                with pytest.raises(ValueError):
                    Epoch(year, 2, 29)
