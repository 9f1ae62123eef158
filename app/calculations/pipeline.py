"""
Runs validation and every calculation for a plan in one call.
"""

from app.calculations.amortization import aggregate_yearly, compute_schedule
from app.calculations.plan import FinancingPlan, PlanCalculation
from app.calculations.profit_loss import compute_summary
from app.calculations.validation import validate


def calculate_plan(plan: FinancingPlan) -> PlanCalculation:
    """
    Validate a plan and, if it passes, compute all of its outputs.

    An invalid plan yields a result holding only the error message;
    nothing is computed for it.
    """
    error = validate(plan)
    if error:
        return PlanCalculation(error=error)

    schedule = compute_schedule(plan)

    return PlanCalculation(
        schedule=schedule,
        yearly_totals=aggregate_yearly(schedule),
        summary=compute_summary(plan),
    )
