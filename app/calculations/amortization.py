"""
Loan Amortization Calculations

Fixed-principal amortization of the bank-financed portion of a plan.
The principal instalment is constant; interest is charged each month on
the balance outstanding at the start of that month, so the total
payment falls as the loan is repaid.
"""

import logging
import math
from typing import Iterator, List

from dateutil.relativedelta import relativedelta

from app.calculations.plan import (
    FinancingPlan,
    FinancingTerms,
    ScheduleEntry,
    YearlyTotal,
)

logger = logging.getLogger(__name__)


def monthly_interest(balance: float, annual_rate_percent: float) -> float:
    """Interest for one month on ``balance`` at an annual percentage rate."""
    return balance * (annual_rate_percent / 100) / 12


def fixed_monthly_principal(plan: FinancingPlan) -> float:
    """Constant principal instalment of the bank loan."""
    tenure_months = plan.tenure_months
    if not plan.has_monthly_repayment or tenure_months <= 0:
        return 0.0
    return plan.loan_amount / tenure_months


def compute_financing_terms(plan: FinancingPlan) -> FinancingTerms:
    """
    Calculate the monthly obligation of each funding source.

    Bank figures are those of the first month. Own funds always amortize
    over the tenure, whether or not the bank loan is being repaid.
    Borrowed funds count only when the plan uses them.

    Args:
        plan: Financing plan

    Returns:
        FinancingTerms with principal and interest per source
    """
    tenure_months = plan.tenure_months

    bank_interest = 0.0
    if plan.has_monthly_repayment:
        bank_interest = monthly_interest(plan.loan_amount, plan.annual_interest_rate)

    own_principal = plan.own_funds / tenure_months if tenure_months > 0 else 0.0
    own_interest = monthly_interest(plan.own_funds, plan.own_funds_annual_rate)

    borrowed_principal = 0.0
    borrowed_interest = 0.0
    if plan.has_borrowed_funds:
        if tenure_months > 0:
            borrowed_principal = plan.borrowed_funds / tenure_months
        borrowed_interest = monthly_interest(
            plan.borrowed_funds, plan.borrowed_funds_annual_rate
        )

    return FinancingTerms(
        tenure_months=tenure_months,
        bank_monthly_principal=fixed_monthly_principal(plan),
        bank_monthly_interest=bank_interest,
        own_funds_monthly_principal=own_principal,
        own_funds_monthly_interest=own_interest,
        borrowed_funds_monthly_principal=borrowed_principal,
        borrowed_funds_monthly_interest=borrowed_interest,
    )


def compute_schedule(plan: FinancingPlan) -> List[ScheduleEntry]:
    """
    Generate the month-by-month schedule for the bank loan.

    Args:
        plan: Financing plan

    Returns:
        One entry per month of the tenure. Empty when the tenure is zero.
        When monthly repayment is off every entry is zero-valued and the
        balance stays at the loan amount.
    """
    schedule = []
    principal_pmt = fixed_monthly_principal(plan)
    tenure_months = plan.tenure_months
    balance = plan.loan_amount

    for month in range(1, tenure_months + 1):
        interest = 0.0
        if plan.has_monthly_repayment:
            interest = monthly_interest(balance, plan.annual_interest_rate)

        # Balance from the month count; repeated subtraction drifts
        principal = principal_pmt
        ending_balance = max(0.0, plan.loan_amount - month * principal_pmt)
        if plan.has_monthly_repayment and month == tenure_months:
            # Final instalment clears whatever is left
            principal = balance
            ending_balance = 0.0

        payment_date = None
        if plan.start_date is not None:
            payment_date = plan.start_date + relativedelta(months=month - 1)

        schedule.append(
            ScheduleEntry(
                month=month,
                beginning_principal=balance,
                monthly_principal=principal,
                monthly_interest=interest,
                total_payment=principal + interest,
                ending_principal=ending_balance,
                payment_date=payment_date,
            )
        )

        balance = ending_balance

    logger.debug("Generated %d month schedule", len(schedule))
    return schedule


def iter_yearly_totals(schedule: List[ScheduleEntry]) -> Iterator[YearlyTotal]:
    """
    Fold a monthly schedule into yearly cumulative totals.

    Yields one total per 12-month window, plus one for a trailing partial
    year. Cumulative figures run from month 1; principal paid is the
    drop in balance since the first month.
    """
    if not schedule:
        return

    opening_principal = schedule[0].beginning_principal
    interest_paid = 0.0

    for index, entry in enumerate(schedule):
        interest_paid += entry.monthly_interest

        is_year_end = (index + 1) % 12 == 0
        is_last = index == len(schedule) - 1
        if is_year_end or is_last:
            yield YearlyTotal(
                year=index // 12 + 1,
                cumulative_principal_paid=opening_principal - entry.ending_principal,
                cumulative_interest_paid=interest_paid,
                remaining_principal=entry.ending_principal,
            )


def aggregate_yearly(schedule: List[ScheduleEntry]) -> List[YearlyTotal]:
    """Yearly totals for a schedule, as a list."""
    return list(iter_yearly_totals(schedule))


def calculate_total_interest(schedule: List[ScheduleEntry]) -> float:
    """Calculate total interest paid over loan term."""
    return sum(entry.monthly_interest for entry in schedule)


def calculate_total_principal(schedule: List[ScheduleEntry]) -> float:
    """Calculate total principal repaid over loan term."""
    return math.fsum(entry.monthly_principal for entry in schedule)


def calculate_total_payments(schedule: List[ScheduleEntry]) -> float:
    """Calculate total debt service (P+I) over loan term."""
    return sum(entry.total_payment for entry in schedule)
