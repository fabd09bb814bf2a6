"""
Calculator input and output models.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class IncentiveType(str, Enum):
    TECHNOLOGY = "Technology Initiative"
    LOCAL_DEVELOPMENT = "Local Development Initiative"
    STRATEGIC = "Strategic Initiative"


class SupportPreference(str, Enum):
    INTEREST = "Interest/Profit Share Support"
    MACHINERY = "Machinery Support"


class YesNo(str, Enum):
    YES = "Yes"
    NO = "No"


class SectorCategory(str, Enum):
    TARGET = "Target Sector"
    OTHER = "Other Sector"
    BOTH = "Both"


class IncentiveCalculatorInputs(BaseModel):
    """Investment described by the user in the calculator form."""

    incentive_type: IncentiveType
    province: str
    number_of_employees: int = 0
    land_cost: float = 0
    construction_cost: float = 0
    imported_machinery_cost: float = 0
    domestic_machinery_cost: float = 0
    other_expenses: float = 0
    bank_interest_rate: float = Field(default=0, description="Annual bank interest rate in percent")
    support_preference: SupportPreference
    loan_amount: float = 0
    loan_term_months: int = 0
    tax_reduction_support: YesNo = YesNo.YES
    sector_category: SectorCategory = SectorCategory.OTHER
    nace_code: Optional[str] = Field(default=None, description="NACE code of the investment, enables special-case notes")
    sector_name: Optional[str] = None
    is_target_investment: bool = False


class IncentiveCalculatorResults(BaseModel):
    total_fixed_investment: float
    sgk_employer_premium_support: float = 0
    sgk_employee_premium_support: float = 0
    machinery_support_amount: float = 0
    interest_profit_share_support_amount: float = 0
    tax_reduction_investment_contribution: float = 0
    vat_customs_exemption: str = "MEVCUT"
    region: Optional[int] = None
    is_eligible: bool
    validation_errors: List[str] = Field(default_factory=list)
    warning_messages: List[str] = Field(default_factory=list)
    overrides: Dict[str, str] = Field(default_factory=dict, description="Display texts replacing computed values")
