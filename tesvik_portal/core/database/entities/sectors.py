"""
Sector eligibility entity model.

One row per NACE code with the incentive flags and the minimum investment
amount required in each development region.
"""

from __future__ import annotations

from typing import Optional

from sqlmodel import Field

from ..base import Base


class SectorSearch(Base, table=True):
    """Table: sector_search"""

    __tablename__ = "sector_search"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    nace_kodu: str = Field(index=True, description="NACE code, e.g. 10.11.01")
    sektor: str = Field(description="Sector name")
    hedef_yatirim: bool = Field(default=False, description="Target investment")
    oncelikli_yatirim: bool = Field(default=False, description="Priority investment")
    yuksek_teknoloji: bool = Field(default=False, description="High-technology investment")
    orta_yuksek_teknoloji: bool = Field(default=False, description="Medium-high technology investment")
    sartlar: Optional[str] = Field(default=None, description="Eligibility conditions")
    bolge_1: Optional[float] = Field(default=None)
    bolge_2: Optional[float] = Field(default=None)
    bolge_3: Optional[float] = Field(default=None)
    bolge_4: Optional[float] = Field(default=None)
    bolge_5: Optional[float] = Field(default=None)
    bolge_6: Optional[float] = Field(default=None)

    def regional_minimums(self) -> list:
        return [self.bolge_1, self.bolge_2, self.bolge_3, self.bolge_4, self.bolge_5, self.bolge_6]
