"""Beginner-friendly overview for this module.

WHAT: Pydantic shapes for device search input and device API output.
WHEN: Search params are parsed from query strings on every list request;
output models serialise ORM rows for the JSON API.
WHY: Keeping search criteria in one fixed-shape model means the filter
builder never has to guess which keys might be present.
HOW: Blank strings become ``None`` before validation so an empty form field
is the same as an omitted one.

File: asset_dashboard/schemas/device.py
"""


from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DeviceSearchParams(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    device_id: Optional[str] = None
    serial_no: Optional[str] = None
    device_brand: Optional[str] = None
    device_model: Optional[str] = None
    device_name: Optional[str] = None
    memory: Optional[str] = None
    cpu: Optional[str] = None
    harddisk: Optional[str] = None
    monitor: Optional[str] = None
    device_ip: Optional[str] = None
    device_status: Optional[str] = None
    device_type_id: Optional[int] = None
    department_id: Optional[int] = None

    @field_validator("*", mode="before")
    @classmethod
    def blank_to_none(cls, value: object) -> object:
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class DeviceListQuery(DeviceSearchParams):
    """Search criteria plus the dashboard's free-text box."""

    query: Optional[str] = None


class JobOut(BaseModel):
    id: int
    job_status: str
    job_detail: Optional[str] = None
    created_at: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class DeviceOut(BaseModel):
    id: int
    device_id: Optional[str] = None
    serial_no: Optional[str] = None
    device_name: Optional[str] = None
    device_brand: Optional[str] = None
    device_model: Optional[str] = None
    device_status: Optional[str] = None
    device_type_id: Optional[int] = None
    department_id: Optional[int] = None
    device_type_name: Optional[str] = None
    department_name: Optional[str] = None
    status_label: str = "Unknown"
    age: str = "N/A"

    model_config = ConfigDict(from_attributes=True)


class InstalledSoftwareOut(BaseModel):
    id: int
    software_name: str
    software_type: Optional[str] = None
    serial: Optional[str] = None


class DeviceDetailOut(DeviceOut):
    cpu: Optional[str] = None
    memory: Optional[str] = None
    harddisk: Optional[str] = None
    monitor: Optional[str] = None
    device_ip: Optional[str] = None
    mac: Optional[str] = None
    hardware_other: Optional[str] = None
    vender: Optional[str] = None
    device_price: Optional[Decimal] = None
    date_use: Optional[date] = None
    date_expire: Optional[date] = None
    warranty: Optional[str] = None
    jobs: list[JobOut] = Field(default_factory=list)
    installed_software: list[InstalledSoftwareOut] = Field(default_factory=list)


class DeviceStats(BaseModel):
    enable: int
    disable: int
    repair: int
    total: int
