"""Beginner-friendly overview for this module.

WHAT: Read-only JSON endpoints for devices.
WHEN: Called by scripts or other services that want the dashboard data
without the HTML.
WHY: Exposes the same search, stats and detail views the pages use.
HOW: Thin wrappers over ``crud.devices``; a missing device is a 404.

File: asset_dashboard/routers/api_devices.py
"""


from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from ..crud.devices import get_device, get_device_stats, list_device_software, search_devices
from ..crud.software import list_software_details
from ..db.session import get_db
from ..schemas.device import DeviceDetailOut, DeviceOut, DeviceListQuery, DeviceStats, InstalledSoftwareOut

router = APIRouter(prefix="/api/v1/devices", tags=["devices"])


@router.get("", response_model=list[DeviceOut])
def api_list(
    params: Annotated[DeviceListQuery, Query()],
    db: Session = Depends(get_db),
):
    return search_devices(db, params, query=params.query)


@router.get("/stats", response_model=DeviceStats)
def api_stats(db: Session = Depends(get_db)):
    return get_device_stats(db)


@router.get("/{identifier}", response_model=DeviceDetailOut)
def api_get(identifier: str, db: Session = Depends(get_db)):
    device = get_device(db, identifier)
    if not device:
        raise HTTPException(404, "Device not found")
    payload = DeviceDetailOut.model_validate(device)
    payload.installed_software = [
        InstalledSoftwareOut(**row) for row in list_device_software(device, list_software_details(db))
    ]
    return payload
