"""Beginner-friendly overview for this module.

WHAT: The software catalog: products that can be installed on devices and
the categories (types) they are grouped under.
WHEN: Loaded by the software report and by the device detail page.
WHY: Devices only store a comma-separated list of catalog ids, so these rows
give those ids a human-readable name and category.
HOW: Two plain tables linked by ``software_type_id``.

File: asset_dashboard/models/software.py
"""


from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, Text
from sqlalchemy.orm import relationship

from ..db.session import Base


class SoftwareType(Base):
    __tablename__ = "software_types"

    id = Column(Integer, primary_key=True, index=True)
    software_type = Column(Text, nullable=False)

    details = relationship("SoftwareDetail", back_populates="software_type")


class SoftwareDetail(Base):
    __tablename__ = "software_details"

    id = Column(Integer, primary_key=True, index=True)
    software_detail = Column(Text, nullable=False)
    software_type_id = Column(Integer, ForeignKey("software_types.id"), nullable=True, index=True)

    software_type = relationship("SoftwareType", back_populates="details")

    @property
    def type_name(self) -> str | None:
        return self.software_type.software_type if self.software_type else None
