"""Incentive calculation formulas.

Given an investment description, the calculator estimates the support items
of the incentive certificate:

- SGK employer (and, in region 6, employee) premium support
- machinery support or interest/profit-share support, depending on preference
- the investment contribution of the tax reduction support

All amounts are TL. The function is pure: parameters and region overrides are
passed in by the caller.
"""

from __future__ import annotations

from typing import Mapping, Optional, Tuple

from tesvik_portal.core.text import format_thousands

from .models import (
    IncentiveCalculatorInputs,
    IncentiveCalculatorResults,
    IncentiveType,
    SupportPreference,
    YesNo,
)
from .parameters import IncentiveParameters
from .regions import is_region_6, province_region
from .special_cases import (
    ISTANBUL_MINING_WARNING,
    ISTANBUL_TARGET_WARNING,
    RES_GES_OVERRIDES,
    RES_GES_WARNING,
    is_istanbul_mining_investment,
    is_istanbul_target_investment,
    is_res_ges_investment,
)

VAT_CUSTOMS_EXEMPTION = "MEVCUT"

# (rate on machinery, limit as share of total investment, monetary cap) by tax reduction choice
_MACHINERY_TERMS = {
    False: {YesNo.NO: (0.30, 0.20, 300_000_000), YesNo.YES: (0.25, 0.15, 240_000_000)},
    True: {YesNo.NO: (0.30, 0.20, 240_000_000), YesNo.YES: (0.25, 0.15, 180_000_000)},
}

# (bank rate multiplier, support rate ceiling %, monetary cap, investment cap share)
_INTEREST_TERMS = {
    False: {YesNo.NO: (0.40, 25, 300_000_000, 0.25), YesNo.YES: (0.40, 20, 240_000_000, 0.20)},
    True: {YesNo.NO: (0.30, 20, 240_000_000, 0.20), YesNo.YES: (0.30, 15, 180_000_000, 0.15)},
}


def _validate(inputs: IncentiveCalculatorInputs, total: float, parameters: IncentiveParameters) -> list:
    errors = []
    minimum = parameters.minimum_fixed_investment_amount
    if total < minimum:
        errors.append(
            f"Toplam sabit yatırım tutarı minimum {format_thousands(minimum)} TL olmalıdır. "
            f"Mevcut tutar: {format_thousands(total)} TL"
        )
    if inputs.number_of_employees <= 0:
        errors.append("Çalışan sayısı 0'dan büyük olmalıdır.")
    if inputs.support_preference == SupportPreference.INTEREST:
        if inputs.loan_amount <= 0:
            errors.append("Faiz/Kar Payı Desteği için kredi tutarı 0'dan büyük olmalıdır.")
        if inputs.loan_term_months <= 0:
            errors.append("Faiz/Kar Payı Desteği için kredi vadesi 0'dan büyük olmalıdır.")
    return errors


def sgk_premium_support(employees: int, region_6: bool, parameters: IncentiveParameters) -> Tuple[float, float]:
    """Employer and employee SGK premium support amounts."""
    if region_6:
        employer = 144 * parameters.sgk_employer_premium_rate * employees
        employee = 120 * parameters.sgk_employee_premium_rate * employees
    else:
        employer = 96 * (parameters.sgk_employer_premium_rate / 2) * employees
        employee = 0.0
    return employer, employee


def machinery_support(inputs: IncentiveCalculatorInputs, total: float) -> float:
    strategic = inputs.incentive_type == IncentiveType.STRATEGIC
    rate, limit_share, monetary_cap = _MACHINERY_TERMS[strategic][inputs.tax_reduction_support]
    machinery = inputs.imported_machinery_cost + inputs.domestic_machinery_cost
    return min(machinery * rate, total * limit_share, monetary_cap)


def total_loan_interest(principal: float, annual_rate_percent: float, months: int) -> float:
    """Total interest paid on an annuity loan.

    A zero rate has no interest: the payment is the principal divided evenly.
    """
    if months <= 0 or principal <= 0:
        return 0.0
    monthly_rate = annual_rate_percent / 100 / 12
    if monthly_rate == 0:
        return 0.0
    growth = (1 + monthly_rate) ** months
    payment = principal * (monthly_rate * growth) / (growth - 1)
    return payment * months - principal


def interest_support(inputs: IncentiveCalculatorInputs, total: float) -> float:
    strategic = inputs.incentive_type == IncentiveType.STRATEGIC
    multiplier, ceiling, monetary_cap, investment_share = _INTEREST_TERMS[strategic][inputs.tax_reduction_support]
    support_rate = min(inputs.bank_interest_rate * multiplier, ceiling)
    interest = total_loan_interest(inputs.loan_amount, inputs.bank_interest_rate, inputs.loan_term_months)
    preliminary = interest * (support_rate / 100)
    return min(preliminary, monetary_cap, total * investment_share)


def tax_reduction_contribution(inputs: IncentiveCalculatorInputs, total: float, support_amount: float) -> float:
    if inputs.tax_reduction_support == YesNo.NO:
        return 0.0
    share = 0.40 if inputs.incentive_type == IncentiveType.STRATEGIC else 0.50
    return (total - support_amount) * share


def calculate_incentives(
    inputs: IncentiveCalculatorInputs,
    parameters: Optional[IncentiveParameters] = None,
    region_overrides: Optional[Mapping[str, int]] = None,
) -> IncentiveCalculatorResults:
    """Run the incentive formulas for one investment.

    Args:
        inputs: The investment description
        parameters: Admin-configured constants; defaults when omitted
        region_overrides: Province to region overrides from the database

    Returns:
        The calculated support items. When validation fails the result is not
        eligible, carries the errors and every amount is 0.
    """
    parameters = parameters or IncentiveParameters()
    total = (
        inputs.land_cost
        + inputs.construction_cost
        + inputs.imported_machinery_cost
        + inputs.domestic_machinery_cost
        + inputs.other_expenses
    )

    warnings = []
    overrides = {}
    if inputs.nace_code:
        if is_istanbul_mining_investment(inputs.province, inputs.nace_code):
            warnings.append(ISTANBUL_MINING_WARNING)
        if is_res_ges_investment(inputs.nace_code, inputs.sector_name):
            warnings.append(RES_GES_WARNING)
            overrides.update(RES_GES_OVERRIDES)
    if is_istanbul_target_investment(inputs.province, inputs.is_target_investment):
        warnings.append(ISTANBUL_TARGET_WARNING)

    errors = _validate(inputs, total, parameters)
    if errors:
        return IncentiveCalculatorResults(
            total_fixed_investment=total,
            vat_customs_exemption=VAT_CUSTOMS_EXEMPTION,
            is_eligible=False,
            validation_errors=errors,
            warning_messages=warnings,
        )

    region = province_region(inputs.province, region_overrides)
    employer, employee = sgk_premium_support(
        inputs.number_of_employees, is_region_6(inputs.province, region_overrides), parameters
    )

    machinery_amount = 0.0
    interest_amount = 0.0
    if inputs.support_preference == SupportPreference.MACHINERY:
        machinery_amount = machinery_support(inputs, total)
        support_amount = machinery_amount
    else:
        interest_amount = interest_support(inputs, total)
        support_amount = interest_amount

    return IncentiveCalculatorResults(
        total_fixed_investment=total,
        sgk_employer_premium_support=employer,
        sgk_employee_premium_support=employee,
        machinery_support_amount=machinery_amount,
        interest_profit_share_support_amount=interest_amount,
        tax_reduction_investment_contribution=tax_reduction_contribution(inputs, total, support_amount),
        vat_customs_exemption=VAT_CUSTOMS_EXEMPTION,
        region=region,
        is_eligible=True,
        validation_errors=[],
        warning_messages=warnings,
        overrides=overrides,
    )
