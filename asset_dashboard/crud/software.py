# asset_dashboard/crud/software.py
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from ..models.software import SoftwareDetail

logger = logging.getLogger(__name__)


def list_software_details(db: Session) -> list[SoftwareDetail]:
    """
    Return the whole software catalog with each entry's type loaded.
    """
    stmt = (
        select(SoftwareDetail)
        .options(joinedload(SoftwareDetail.software_type))
        .order_by(SoftwareDetail.id)
    )
    try:
        return list(db.execute(stmt).scalars().all())
    except SQLAlchemyError:
        logger.exception("software.list_failed")
        db.rollback()
        return []
