"""Display values derived from raw device columns.

Every helper here is a pure function of its arguments (``device_age`` also
reads the clock unless ``now`` is given) so templates, the JSON API and the
software report can all share them.
"""

from __future__ import annotations

import json
import logging
import math
import re
from datetime import date, datetime
from typing import Any

logger = logging.getLogger(__name__)

SECONDS_PER_YEAR = 31_536_000  # 365 days
SECONDS_PER_MONTH = 2_628_000  # 30.4375 days, an average month
SECONDS_PER_DAY = 86_400

# Plain ASCII decimals only; "12abc", "1_000" and "٣" are malformed.
_SOFTWARE_ID = re.compile(r"[0-9]{1,19}")
# Serial entries are keyed by the id exactly as written: "7", never "07".
_SERIAL_KEY = re.compile(r"0|[1-9][0-9]{0,18}")

STATUS_LABELS = {
    "disable": "Deprecated",
    "enable": "Normal",
}


def status_text(device_status: str | None) -> str:
    """Map a raw ``device_status`` to its dashboard label."""

    return STATUS_LABELS.get(device_status, "Unknown") if isinstance(device_status, str) else "Unknown"


def _to_datetime(value: Any) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and value.strip():
        try:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


def device_age(start: date | datetime | str | None, now: datetime | None = None) -> str:
    """Render the time since ``start`` as ``"1 year(s) 2 month(s) 3 day(s)"``.

    Uses fixed year/month lengths rather than the calendar. Returns ``"N/A"``
    for a missing or unparseable start and ``"Invalid date"`` when the start
    lies in the future.
    """

    begin = _to_datetime(start)
    if begin is None:
        return "N/A"
    if now is None:
        now = datetime.now(begin.tzinfo) if begin.tzinfo else datetime.now()
    elif (now.tzinfo is None) != (begin.tzinfo is None):
        # Compare on the local clock when only one side carries a zone.
        if begin.tzinfo is not None:
            begin = begin.astimezone().replace(tzinfo=None)
        else:
            now = now.astimezone().replace(tzinfo=None)

    seconds = math.floor((now - begin).total_seconds())
    if seconds < 0:
        return "Invalid date"

    years, seconds = divmod(seconds, SECONDS_PER_YEAR)
    months, seconds = divmod(seconds, SECONDS_PER_MONTH)
    days = seconds // SECONDS_PER_DAY

    parts = []
    if years:
        parts.append(f"{years} year(s)")
    if months:
        parts.append(f"{months} month(s)")
    if days:
        parts.append(f"{days} day(s)")
    return " ".join(parts) if parts else "Less than a day"


def parse_software_ids(software: str | None) -> list[int]:
    """Split a ``"3, 7,12"`` style list into ints, dropping malformed tokens."""

    if not software:
        return []
    ids: list[int] = []
    for token in software.split(","):
        token = token.strip()
        if _SOFTWARE_ID.fullmatch(token):
            ids.append(int(token))
    return ids


def has_software(software: str | None, software_id: int) -> bool:
    return software_id in parse_software_ids(software)


def parse_software_serials(software_sn: str | None) -> list[tuple[int, str]]:
    """Decode a ``software_sn`` blob into ordered ``(software_id, serial)`` pairs.

    The stored shape is ``[{"7": "SN123"}, {"9": "ABC"}]``; a bare object is
    accepted as a single-entry list. Anything that cannot be decoded is logged
    and treated as an empty mapping.
    """

    if not software_sn or not software_sn.strip():
        return []
    try:
        decoded = json.loads(software_sn)
    except ValueError as exc:
        logger.warning(
            "device.software_sn_invalid",
            extra={"extra_data": {"error": str(exc)}},
        )
        return []

    if isinstance(decoded, dict):
        decoded = [decoded]
    if not isinstance(decoded, list):
        logger.warning(
            "device.software_sn_invalid",
            extra={"extra_data": {"error": f"unexpected {type(decoded).__name__}"}},
        )
        return []

    pairs: list[tuple[int, str]] = []
    for entry in decoded:
        if not isinstance(entry, dict):
            continue
        for key, value in entry.items():
            if not isinstance(key, str) or not _SERIAL_KEY.fullmatch(key):
                continue
            software_id = int(key)
            if value is None or isinstance(value, (dict, list)):
                continue
            pairs.append((software_id, str(value)))
    return pairs


def find_software_serial(software_sn: str | None, software_id: int) -> str | None:
    """Return the serial recorded for ``software_id`` or ``None`` if there is none.

    An empty string means the entry exists but holds no serial. Duplicate
    entries resolve to the first one.
    """

    for candidate, serial in parse_software_serials(software_sn):
        if candidate == software_id:
            return serial
    return None


__all__ = [
    "device_age",
    "find_software_serial",
    "has_software",
    "parse_software_ids",
    "parse_software_serials",
    "status_text",
]
