# asset_dashboard/crud/devices.py
from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from sqlalchemy import desc, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from ..models.device import CLOSED_JOB_STATUSES, MAX_ROW_ID, Device, Job
from ..models.software import SoftwareDetail
from ..schemas.device import DeviceSearchParams
from ..services.device_fields import device_age, parse_software_ids, parse_software_serials, status_text
from ..services.filters import build_device_filter, build_quick_search

logger = logging.getLogger(__name__)

DEVICE_STATUS_CHOICES = ("enable", "disable", "repair")

_DECIMAL_ID = re.compile(r"[0-9]+")


def _parse_identifier(identifier: int | str | None) -> int | None:
    """Positive 64-bit ids only; anything else cannot name a row."""
    if isinstance(identifier, bool):
        return None
    if isinstance(identifier, str):
        value = identifier.strip()
        if not _DECIMAL_ID.fullmatch(value) or len(value) > len(str(MAX_ROW_ID)):
            return None
        identifier = int(value)
    if isinstance(identifier, int) and 0 < identifier <= MAX_ROW_ID:
        return identifier
    return None


def _store_failed(db: Session, event: str, **details: object) -> None:
    logger.exception(event, extra={"extra_data": details} if details else None)
    try:
        db.rollback()
    except SQLAlchemyError:
        logger.warning("db.rollback_failed", exc_info=True)


def get_device(db: Session, identifier: int | str | None) -> Device | None:
    """
    Fetch a single device by primary key. Non-numeric ids are simply not found.
    """
    device_pk = _parse_identifier(identifier)
    if device_pk is None:
        return None
    try:
        device = db.get(Device, device_pk)
    except SQLAlchemyError:
        _store_failed(db, "device.get_failed", identifier=device_pk)
        return None
    if device is None:
        return None
    _attach_display_fields([device])
    return device


def search_devices(
    db: Session,
    params: DeviceSearchParams | None = None,
    *,
    query: str | None = None,
    order_by: ColumnElement | None = None,
) -> list[Device]:
    """
    Return every device matching the advanced filter AND the quick search,
    newest first unless ``order_by`` says otherwise.
    """
    device_filter = build_device_filter(params)
    quick = build_quick_search(query)
    stmt = (
        select(Device)
        .where(device_filter.clause(), quick.clause())
        .order_by(order_by if order_by is not None else desc(Device.id))
    )
    try:
        items = list(db.execute(stmt).unique().scalars().all())
    except SQLAlchemyError:
        _store_failed(db, "device.search_failed", filters=list(device_filter.fields), query=quick.query)
        return []
    _attach_display_fields(items)
    return items


def list_devices_with_software(db: Session) -> list[Device]:
    stmt = (
        select(Device)
        .where(Device.software.is_not(None), Device.software != "")
        .order_by(Device.id)
    )
    try:
        return list(db.execute(stmt).unique().scalars().all())
    except SQLAlchemyError:
        _store_failed(db, "device.software_list_failed")
        return []


def count_devices_by_status(db: Session, status: str) -> int:
    """
    Count devices for a dashboard badge. ``repair`` means the device has at
    least one job that is neither finished nor cancelled.
    """
    if status not in DEVICE_STATUS_CHOICES:
        raise ValueError(f"unknown device status: {status!r}")
    if status == "repair":
        open_job = select(Job.id).where(
            Job.device_id == Device.id,
            Job.job_status.not_in(CLOSED_JOB_STATUSES),
        )
        stmt = select(func.count()).select_from(Device).where(open_job.exists())
    else:
        stmt = select(func.count()).select_from(Device).where(Device.device_status == status)
    try:
        return db.scalar(stmt) or 0
    except SQLAlchemyError:
        _store_failed(db, "device.count_failed", status=status)
        return 0


def get_device_stats(db: Session) -> dict[str, int]:
    stats = {status: count_devices_by_status(db, status) for status in DEVICE_STATUS_CHOICES}
    try:
        stats["total"] = db.scalar(select(func.count()).select_from(Device)) or 0
    except SQLAlchemyError:
        _store_failed(db, "device.count_failed", status="total")
        stats["total"] = 0
    return stats


def list_device_software(device: Device, catalog: Iterable[SoftwareDetail]) -> list[dict[str, object]]:
    """
    Resolve a device's installed software ids against the catalog, in the
    order they are listed on the device. Unknown ids are skipped.
    """
    by_id = {detail.id: detail for detail in catalog}
    serials: dict[int, str] = {}
    for software_id, serial in parse_software_serials(device.software_sn):
        serials.setdefault(software_id, serial)

    rows: list[dict[str, object]] = []
    seen: set[int] = set()
    for software_id in parse_software_ids(device.software):
        detail = by_id.get(software_id)
        if detail is None or software_id in seen:
            continue
        seen.add(software_id)
        rows.append(
            {
                "id": detail.id,
                "software_name": detail.software_detail,
                "software_type": detail.type_name,
                "serial": serials.get(software_id),
            }
        )
    return rows


def _attach_display_fields(items: Sequence[Device]) -> None:
    for item in items:
        setattr(item, "status_label", status_text(item.device_status))
        setattr(item, "age", device_age(item.date_use))
