import logging
import os
import sys
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")

from asset_dashboard.services.device_fields import (
    device_age,
    find_software_serial,
    has_software,
    parse_software_ids,
    parse_software_serials,
    status_text,
)

NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.mark.parametrize(
    "raw, label",
    [
        (None, "Unknown"),
        ("enable", "Normal"),
        ("disable", "Deprecated"),
        ("repair", "Unknown"),
        ("", "Unknown"),
        ("ENABLE", "Unknown"),
    ],
)
def test_status_text(raw, label):
    assert status_text(raw) == label


def test_device_age_missing_start():
    assert device_age(None, now=NOW) == "N/A"
    assert device_age("", now=NOW) == "N/A"
    assert device_age("not a date", now=NOW) == "N/A"


def test_device_age_same_instant_is_less_than_a_day():
    assert device_age(NOW, now=NOW) == "Less than a day"
    assert device_age(NOW - timedelta(hours=23), now=NOW) == "Less than a day"


def test_device_age_future_start_is_invalid():
    assert device_age(NOW + timedelta(days=1), now=NOW) == "Invalid date"


def test_device_age_400_days():
    # 400 days = 1 year + 35 days; 35 days is one 30.4375-day month plus 4 days.
    assert device_age(NOW - timedelta(days=400), now=NOW) == "1 year(s) 1 month(s) 4 day(s)"


def test_device_age_skips_zero_components():
    assert device_age(NOW - timedelta(days=385), now=NOW) == "1 year(s) 20 day(s)"
    assert device_age(NOW - timedelta(days=365), now=NOW) == "1 year(s)"
    assert device_age(NOW - timedelta(days=3), now=NOW) == "3 day(s)"


def test_device_age_accepts_dates_and_iso_strings():
    assert device_age(date(2024, 5, 29), now=NOW) == "3 day(s)"
    assert device_age("2024-05-29", now=NOW) == "3 day(s)"


def test_device_age_mixed_timezones_compare_on_local_clock():
    aware_now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
    start = aware_now - timedelta(days=10)
    assert device_age(start, now=aware_now) == "10 day(s)"
    assert device_age(start.astimezone().replace(tzinfo=None), now=aware_now) == "10 day(s)"


def test_device_age_defaults_to_current_clock():
    assert device_age(datetime.now()) == "Less than a day"
    assert device_age(datetime.now() + timedelta(days=1)) == "Invalid date"


def test_software_membership():
    assert has_software("3, 7,12", 7) is True
    assert has_software("3, 7,12", 8) is False
    assert has_software(None, 7) is False
    assert has_software("", 7) is False


def test_software_membership_ignores_malformed_tokens():
    assert parse_software_ids("3, x, 7,,12 ") == [3, 7, 12]
    assert has_software("abc,7", 7) is True
    assert parse_software_ids("1_000, \u0663, 12abc, 0012, 4") == [12, 4]
    assert has_software("1_000", 1000) is False
    assert has_software("\u0663", 3) is False


def test_find_software_serial():
    mapping = '[{"7": "SN123"}]'
    assert find_software_serial(mapping, 7) == "SN123"
    assert find_software_serial(mapping, 9) is None
    assert find_software_serial(None, 7) is None


def test_find_software_serial_first_match_wins():
    mapping = '[{"7": "FIRST"}, {"9": "OTHER"}, {"7": "SECOND"}]'
    assert find_software_serial(mapping, 7) == "FIRST"
    assert find_software_serial(mapping, 9) == "OTHER"


def test_find_software_serial_found_but_empty():
    assert find_software_serial('[{"7": ""}]', 7) == ""


def test_find_software_serial_malformed_json_is_not_found(caplog):
    with caplog.at_level(logging.WARNING):
        assert find_software_serial("[{not json", 7) is None
    assert any(record.getMessage() == "device.software_sn_invalid" for record in caplog.records)


def test_parse_software_serials_tolerates_odd_shapes():
    assert parse_software_serials('{"4": "ABC"}') == [(4, "ABC")]
    assert parse_software_serials('[{"x": "1"}, "junk", {"5": 123}, {"6": null}]') == [(5, "123")]
    assert parse_software_serials('"just a string"') == []


def test_serial_keys_must_be_written_exactly():
    assert find_software_serial('[{"007": "PADDED"}, {"7": "EXACT"}]', 7) == "EXACT"
    assert find_software_serial('[{" 7": "SPACED"}, {"1_0": "X"}]', 7) is None
    assert parse_software_serials('[{"\u0663": "ARABIC"}, {"3": "OK"}]') == [(3, "OK")]


def test_calculators_are_idempotent():
    mapping = '[{"7": "SN123"}]'
    assert [find_software_serial(mapping, 7) for _ in range(3)] == ["SN123"] * 3
    assert [device_age(date(2023, 1, 1), now=NOW) for _ in range(2)] == [device_age(date(2023, 1, 1), now=NOW)] * 2
