from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..db.session import get_db
from ..schemas.software import SoftwareTotalsReport
from ..services.software_report import calculate_software_totals

router = APIRouter(prefix="/api/v1/software", tags=["software"])


@router.get("/totals", response_model=SoftwareTotalsReport)
def api_software_totals(db: Session = Depends(get_db)):
    return calculate_software_totals(db)
