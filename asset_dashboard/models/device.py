"""Beginner-friendly overview for this module.

WHAT: The inventoried devices and their repair/service jobs.
WHEN: Queried by every dashboard page and API endpoint.
WHY: A device row is the unit everything else (search, age, software report)
is computed from.
HOW: ``Device`` carries the descriptive columns plus two software fields:
``software`` (comma-separated catalog ids) and ``software_sn`` (a JSON list of
``{"<software id>": "<serial>"}`` objects). ``Job`` rows hang off a device.

File: asset_dashboard/models/device.py
"""


from __future__ import annotations

from sqlalchemy import Column, Date, ForeignKey, Integer, Numeric, Text
from sqlalchemy.orm import relationship

from ..db.session import Base

# Largest value a 64-bit INTEGER column (and the SQLite driver) accepts.
MAX_ROW_ID = 2**63 - 1
# Jobs in any other state mean the device is currently out for repair.
CLOSED_JOB_STATUSES = ("success", "cancel")


class Device(Base):
    __tablename__ = "devices"

    id = Column(Integer, primary_key=True, index=True)
    device_id = Column(Text, nullable=True, index=True)
    serial_no = Column(Text, nullable=True, index=True)
    device_name = Column(Text, nullable=True)
    device_brand = Column(Text, nullable=True)
    device_model = Column(Text, nullable=True)

    cpu = Column(Text, nullable=True)
    memory = Column(Text, nullable=True)
    harddisk = Column(Text, nullable=True)
    monitor = Column(Text, nullable=True)
    device_ip = Column(Text, nullable=True)
    mac = Column(Text, nullable=True)
    hardware_other = Column(Text, nullable=True)

    device_status = Column(Text, nullable=True, index=True)

    vender = Column(Text, nullable=True)
    device_price = Column(Numeric(12, 2), nullable=True)
    date_use = Column(Date, nullable=True)
    date_expire = Column(Date, nullable=True)
    warranty = Column(Text, nullable=True)

    software = Column(Text, nullable=True)
    software_sn = Column(Text, nullable=True)

    device_type_id = Column(Integer, ForeignKey("device_types.id"), nullable=True, index=True)
    department_id = Column(Integer, ForeignKey("departments.id"), nullable=True, index=True)
    created_at = Column(Text, nullable=True)

    device_type = relationship("DeviceType", lazy="joined")
    department = relationship("Department", lazy="joined")
    jobs = relationship("Job", back_populates="device", order_by="Job.id.desc()")

    @property
    def device_type_name(self) -> str | None:
        return self.device_type.device_type if self.device_type else None

    @property
    def department_name(self) -> str | None:
        return self.department.department if self.department else None


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, index=True)
    device_id = Column(Integer, ForeignKey("devices.id"), nullable=False, index=True)
    job_status = Column(Text, nullable=False, default="pending")
    job_detail = Column(Text, nullable=True)
    created_at = Column(Text, nullable=True)

    device = relationship("Device", back_populates="jobs")

    @property
    def is_open(self) -> bool:
        return self.job_status not in CLOSED_JOB_STATUSES
