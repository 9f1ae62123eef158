"""
Financing Plan Validation

Checks a plan before any figures are computed. Rules run in a fixed
order and the first failure wins, so the user always sees one message.
"""

import logging
from typing import Optional

from app.calculations.plan import FinancingPlan, MANUAL_ENTRY, MIN_EXPENSE_ITEMS

logger = logging.getLogger(__name__)


def validate(plan: FinancingPlan) -> Optional[str]:
    """
    Validate a financing plan.

    Args:
        plan: Plan to check

    Returns:
        None if the plan is valid, otherwise a message naming the first
        violated rule. Never raises.
    """
    error = _first_error(plan)
    if error:
        logger.debug("Plan rejected: %s", error)
    return error


def _first_error(plan: FinancingPlan) -> Optional[str]:
    if plan.loan_type == "":
        return "Type of Loan must be selected."
    if plan.loan_type == MANUAL_ENTRY and plan.custom_loan_type.strip() == "":
        return "Custom Loan Type cannot be empty."

    if plan.loan_amount < 0:
        return "Loan Amount cannot be negative."
    if plan.own_funds < 0:
        return "Own Funds cannot be negative."
    if plan.has_borrowed_funds and plan.borrowed_funds < 0:
        return "Borrowed Funds cannot be negative."

    # Whole months; a sub-month tenure truncates to zero
    if plan.tenure_months <= 0:
        return "Loan Tenure must be greater than zero."

    if plan.has_monthly_repayment and plan.annual_interest_rate < 0:
        return "Interest Per Annum cannot be negative."

    if plan.own_funds_annual_rate < 0:
        return "Own Funds Interest Rate cannot be negative."
    if plan.has_borrowed_funds and plan.borrowed_funds_annual_rate < 0:
        return "Borrowed Funds Interest Rate cannot be negative."

    if any(item.amount < 0 for item in plan.revenue_items):
        return "Revenue cannot be negative."

    if any(item.amount < 0 for item in plan.expense_items):
        return "Expenses cannot be negative."

    if len(plan.expense_items) < MIN_EXPENSE_ITEMS:
        return "At least two expenses are required."

    return None
