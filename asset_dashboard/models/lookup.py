"""Lookup tables referenced by devices (device types and departments)."""

from __future__ import annotations

from sqlalchemy import Column, Integer, Text

from ..db.session import Base


class DeviceType(Base):
    __tablename__ = "device_types"

    id = Column(Integer, primary_key=True, index=True)
    device_type = Column(Text, nullable=False)


class Department(Base):
    __tablename__ = "departments"

    id = Column(Integer, primary_key=True, index=True)
    department = Column(Text, nullable=False)
