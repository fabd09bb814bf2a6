"""
Investment incentive domain.

- regions: province to development-region table and runtime overrides
- parameters: admin-configurable calculator constants
- calculator: the incentive calculation formulas
- special_cases: İstanbul mining, GES/RES and İstanbul target checks
- nace: NACE code / sector name lookup over the sector eligibility table
"""

from .calculator import calculate_incentives
from .models import IncentiveCalculatorInputs, IncentiveCalculatorResults
from .parameters import IncentiveParameters
from .regions import PROVINCE_REGIONS, is_region_6, province_region

__all__ = [
    "IncentiveCalculatorInputs",
    "IncentiveCalculatorResults",
    "IncentiveParameters",
    "PROVINCE_REGIONS",
    "calculate_incentives",
    "is_region_6",
    "province_region",
]
