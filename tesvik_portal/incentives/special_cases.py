"""Special investment cases that change what the calculator may offer."""

from __future__ import annotations

from typing import Optional

from tesvik_portal.core.text import contains_any

from .regions import canonical_province

ISTANBUL = "İstanbul"
MINING_NACE_PREFIXES = ("05", "06", "07", "08", "09")
RES_GES_NACE_CODES = ("35.12", "35.12.00")
RES_GES_KEYWORDS = ("güneş", "ges", "res", "rüzgar")

NOT_APPLICABLE_RES_GES = "Uygulanmaz (GES ve RES yatırımlarında)"

RES_GES_OVERRIDES = {
    "interest_support": NOT_APPLICABLE_RES_GES,
    "interest_support_cap": NOT_APPLICABLE_RES_GES,
}

ISTANBUL_MINING_WARNING = (
    "İstanbul ilinde madencilik yatırımları (NACE 05-09) teşvik kapsamında değerlendirilmez."
)
RES_GES_WARNING = "GES ve RES yatırımlarında faiz/kâr payı desteği uygulanmaz."
ISTANBUL_TARGET_WARNING = "İstanbul'daki hedef yatırımlar vergi indirimi desteğinden yararlanamaz."


def is_istanbul_mining_investment(province: str, nace_code: Optional[str]) -> bool:
    if canonical_province(province) != ISTANBUL or not nace_code:
        return False
    return nace_code.strip().startswith(MINING_NACE_PREFIXES)


def is_res_ges_investment(nace_code: Optional[str], sector_name: Optional[str]) -> bool:
    if not nace_code or nace_code.strip() not in RES_GES_NACE_CODES:
        return False
    return contains_any(sector_name or "", RES_GES_KEYWORDS)


def is_istanbul_target_investment(province: str, is_target: bool) -> bool:
    return canonical_province(province) == ISTANBUL and is_target is True
