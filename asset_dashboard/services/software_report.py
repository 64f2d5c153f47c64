from __future__ import annotations

from collections import Counter
from typing import Any, Dict, Iterable, List

from sqlalchemy.orm import Session

from ..crud.devices import list_devices_with_software
from ..crud.software import list_software_details
from ..models.device import Device
from ..models.software import SoftwareDetail
from .device_fields import parse_software_ids, parse_software_serials

UNCATEGORIZED = "Uncategorized"


def _count_installs(devices: Iterable[Device]) -> tuple[Counter, Counter]:
    """One pass over devices: software id -> installs, software id -> serials."""

    installs: Counter = Counter()
    serials: Counter = Counter()
    for device in devices:
        installed = set(parse_software_ids(device.software))
        if not installed:
            continue
        # Any entry for an id, even a blank one, counts as a recorded serial.
        with_serial: set[int] = set()
        for software_id, _serial in parse_software_serials(device.software_sn):
            with_serial.add(software_id)
        installs.update(installed)
        serials.update(installed & with_serial)
    return installs, serials


def build_software_totals(
    details: Iterable[SoftwareDetail], devices: Iterable[Device]
) -> Dict[str, List[Dict[str, Any]]]:
    """Group catalog entries by type with install and serial counts."""

    installs, serials = _count_installs(devices)
    report: Dict[str, List[Dict[str, Any]]] = {}
    for detail in details:
        type_name = detail.type_name or UNCATEGORIZED
        report.setdefault(type_name, []).append(
            {
                "id": detail.id,
                "software_name": detail.software_detail,
                "total_install": installs[detail.id],
                "total_sn": serials[detail.id],
            }
        )
    return report


def calculate_software_totals(db: Session) -> Dict[str, List[Dict[str, Any]]]:
    """Aggregate software installation data across all devices."""

    details = list_software_details(db)
    devices = list_devices_with_software(db)
    return build_software_totals(details, devices)


__all__ = ["UNCATEGORIZED", "build_software_totals", "calculate_software_totals"]
