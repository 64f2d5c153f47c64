"""Beginner-friendly overview for this module.

WHAT: The HTML pages of the dashboard: device list, device detail and the
software report.
WHEN: Every browser visit.
WHY: Keeps page handlers thin; all data shaping lives in ``crud`` and
``services`` so the JSON API and the pages agree.
HOW: Each handler loads data, then hands a context dict to a Jinja template.

File: asset_dashboard/routers/ui.py
"""


from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.jinja import get_templates
from ..crud.devices import get_device, get_device_stats, list_device_software, search_devices
from ..crud.software import list_software_details
from ..db.session import get_db
from ..models.lookup import Department, DeviceType
from ..schemas.device import DeviceListQuery
from ..services.filters import build_device_filter
from ..services.software_report import calculate_software_totals

templates = get_templates()

router = APIRouter()


def _lookup_options(db: Session) -> dict[str, list]:
    try:
        return {
            "device_types": db.execute(select(DeviceType).order_by(DeviceType.device_type)).scalars().all(),
            "departments": db.execute(select(Department).order_by(Department.department)).scalars().all(),
        }
    except SQLAlchemyError:
        db.rollback()
        return {"device_types": [], "departments": []}


@router.get("/", response_class=HTMLResponse)
def index_page(
    request: Request,
    params: Annotated[DeviceListQuery, Query()],
    db: Session = Depends(get_db),
):
    devices = search_devices(db, params, query=params.query)
    context = {
        "devices": devices,
        "stats": get_device_stats(db),
        "params": params,
        "filters_active": bool(build_device_filter(params).criteria),
        "query": params.query or "",
        **_lookup_options(db),
    }
    return templates.TemplateResponse(request, "index.html", context)


@router.get("/devices/{identifier}", response_class=HTMLResponse)
def device_detail_page(request: Request, identifier: str, db: Session = Depends(get_db)):
    device = get_device(db, identifier)
    if not device:
        return templates.TemplateResponse(
            request, "not_found.html", {"message": "Device not found"}, status_code=404
        )
    context = {
        "device": device,
        "installed_software": list_device_software(device, list_software_details(db)),
    }
    return templates.TemplateResponse(request, "device_detail.html", context)


@router.get("/software", response_class=HTMLResponse)
def software_report_page(request: Request, db: Session = Depends(get_db)):
    report = calculate_software_totals(db)
    return templates.TemplateResponse(request, "software.html", {"report": report})
