from __future__ import annotations

from pydantic import BaseModel


class SoftwareTotal(BaseModel):
    id: int
    software_name: str
    total_install: int
    total_sn: int


# Keyed by software type name ("Uncategorized" for entries without a type).
SoftwareTotalsReport = dict[str, list[SoftwareTotal]]
