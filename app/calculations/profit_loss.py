"""
Profit/Loss Projection

Combines the monthly financing obligations with normalized revenue and
expense streams. Works from the financing terms only; the month-by-month
schedule is not needed.
"""

from app.calculations.amortization import compute_financing_terms
from app.calculations.plan import FinancingPlan, FinancingSummary


def compute_summary(plan: FinancingPlan) -> FinancingSummary:
    """
    Project monthly and yearly profit/loss for a plan.

    Yearly figures are the monthly figure times 12. Revenue and expenses
    entered per year are spread evenly over the months.

    Args:
        plan: Financing plan

    Returns:
        FinancingSummary
    """
    terms = compute_financing_terms(plan)

    monthly_revenue = sum(item.monthly_amount for item in plan.revenue_items)
    monthly_expenses = sum(item.monthly_amount for item in plan.expense_items)

    monthly_profit_loss = monthly_revenue - (
        terms.monthly_financing_total + monthly_expenses
    )

    return FinancingSummary(
        loan_label=plan.display_loan_type,
        terms=terms,
        monthly_revenue=monthly_revenue,
        monthly_expenses=monthly_expenses,
        monthly_profit_loss=monthly_profit_loss,
        yearly_profit_loss=monthly_profit_loss * 12,
    )
