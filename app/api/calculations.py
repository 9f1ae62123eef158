"""
Loan plan calculation API endpoints.

These endpoints accept a financing plan and return calculated results.
The front end calls them on every input change, so they never persist
anything.
"""

import logging
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date

from app.calculations.plan import (
    FinancingPlan,
    RevenueItem,
    ExpenseItem,
    Period,
    TenureUnit,
    PlanCalculation,
    LOAN_TYPE_OPTIONS,
    REVENUE_SLOTS,
    MAX_EXPENSE_ITEMS,
)
from app.calculations.pipeline import calculate_plan
from app.calculations.validation import validate
from app.calculations.amortization import (
    compute_schedule,
    aggregate_yearly,
    calculate_total_interest,
    calculate_total_principal,
)
from app.calculations.profit_loss import compute_summary

logger = logging.getLogger(__name__)

router = APIRouter()


class RevenueItemInput(BaseModel):
    """Revenue stream input."""

    amount: float = 0.0
    period: Period = Period.monthly


class ExpenseItemInput(BaseModel):
    """Expense input."""

    name: str = ""
    amount: float = 0.0
    period: Period = Period.monthly


def _default_revenue() -> List[RevenueItemInput]:
    return [RevenueItemInput() for _ in range(REVENUE_SLOTS)]


def _default_expenses() -> List[ExpenseItemInput]:
    return [ExpenseItemInput(name="Rates"), ExpenseItemInput(name="Insurance")]


class FinancingPlanInput(BaseModel):
    """Input schema for a financing plan. Rates are annual percentages."""

    # Loan type
    loan_type: str = ""
    custom_loan_type: str = ""

    # Bank loan
    loan_tenure: float = 0
    tenure_unit: TenureUnit = TenureUnit.months
    loan_amount: float = 0.0
    has_monthly_repayment: bool = True
    annual_interest_rate: float = 0.0

    # Owner capital
    own_funds: float = 0.0
    own_funds_annual_rate: float = 0.0

    # Borrowed capital
    has_borrowed_funds: bool = False
    borrowed_funds: float = 0.0
    borrowed_funds_annual_rate: float = 0.0

    # Revenue and expenses
    revenue_items: List[RevenueItemInput] = Field(
        default_factory=_default_revenue,
        min_length=REVENUE_SLOTS,
        max_length=REVENUE_SLOTS,
    )
    # The lower bound is a validation message, not a schema error
    expense_items: List[ExpenseItemInput] = Field(
        default_factory=_default_expenses, max_length=MAX_EXPENSE_ITEMS
    )

    # First payment date (optional)
    start_date: Optional[date] = None

    def to_plan(self) -> FinancingPlan:
        """Convert to the calculation engine's plan record."""
        return FinancingPlan(
            loan_type=self.loan_type,
            custom_loan_type=self.custom_loan_type,
            loan_tenure=self.loan_tenure,
            tenure_unit=self.tenure_unit,
            loan_amount=self.loan_amount,
            has_monthly_repayment=self.has_monthly_repayment,
            annual_interest_rate=self.annual_interest_rate,
            own_funds=self.own_funds,
            own_funds_annual_rate=self.own_funds_annual_rate,
            has_borrowed_funds=self.has_borrowed_funds,
            borrowed_funds=self.borrowed_funds,
            borrowed_funds_annual_rate=self.borrowed_funds_annual_rate,
            revenue_items=tuple(
                RevenueItem(amount=r.amount, period=r.period) for r in self.revenue_items
            ),
            expense_items=tuple(
                ExpenseItem(name=e.name, amount=e.amount, period=e.period)
                for e in self.expense_items
            ),
            start_date=self.start_date,
        )


class FinancingSummaryResponse(BaseModel):
    """Monthly obligations and profit/loss projection."""

    loan_label: str
    tenure_months: int

    # Bank loan
    bank_monthly_principal: float
    bank_monthly_interest: float
    bank_monthly_total: float

    # Own funds
    own_funds_monthly_principal: float
    own_funds_monthly_interest: float
    own_funds_monthly_total: float

    # Borrowed funds
    borrowed_funds_monthly_principal: float
    borrowed_funds_monthly_interest: float
    borrowed_funds_monthly_total: float

    # Profit/loss
    monthly_revenue: float
    monthly_expenses: float
    monthly_profit_loss: float
    yearly_profit_loss: float


class ValidationResponse(BaseModel):
    """Response for plan validation."""

    valid: bool
    error: Optional[str] = None


class ScheduleEntryResponse(BaseModel):
    """One month of the amortization schedule."""

    month: int
    beginning_principal: float
    monthly_principal: float
    monthly_interest: float
    total_payment: float
    ending_principal: float
    payment_date: Optional[date] = None

    class Config:
        from_attributes = True


class YearlyTotalResponse(BaseModel):
    """Cumulative loan position at the end of a year."""

    year: int
    cumulative_principal_paid: float
    cumulative_interest_paid: float
    remaining_principal: float

    class Config:
        from_attributes = True


class ScheduleResponse(BaseModel):
    """Response with the amortization schedule and its totals."""

    schedule: List[ScheduleEntryResponse]
    total_interest: float
    total_principal: float


class YearlyResponse(BaseModel):
    """Response with yearly totals."""

    yearly_totals: List[YearlyTotalResponse]


class EMIPlanResponse(BaseModel):
    """Response with every output for a plan."""

    summary: FinancingSummaryResponse
    schedule: List[ScheduleEntryResponse]
    yearly_totals: List[YearlyTotalResponse]


def schedule_to_response(schedule) -> List[ScheduleEntryResponse]:
    return [ScheduleEntryResponse.model_validate(entry) for entry in schedule]


def yearly_to_response(totals) -> List[YearlyTotalResponse]:
    return [YearlyTotalResponse.model_validate(total) for total in totals]


def validated_plan(inputs: FinancingPlanInput) -> FinancingPlan:
    """Build a plan and reject it with a 400 if validation fails."""
    plan = inputs.to_plan()
    error = validate(plan)
    if error:
        logger.info("Rejected plan: %s", error)
        raise HTTPException(status_code=400, detail=error)
    return plan


@router.get("/loan-types")
async def list_loan_types():
    """List the selectable loan types."""
    return {"loan_types": LOAN_TYPE_OPTIONS}


@router.post("/validate", response_model=ValidationResponse)
async def validate_plan(inputs: FinancingPlanInput):
    """Validate a plan without computing anything."""
    error = validate(inputs.to_plan())
    return ValidationResponse(valid=error is None, error=error)


@router.post("/schedule", response_model=ScheduleResponse)
async def calculate_schedule(inputs: FinancingPlanInput):
    """Generate the bank loan amortization schedule."""
    schedule = compute_schedule(validated_plan(inputs))

    return ScheduleResponse(
        schedule=schedule_to_response(schedule),
        total_interest=calculate_total_interest(schedule),
        total_principal=calculate_total_principal(schedule),
    )


@router.post("/yearly", response_model=YearlyResponse)
async def calculate_yearly(inputs: FinancingPlanInput):
    """Roll the amortization schedule up into yearly totals."""
    schedule = compute_schedule(validated_plan(inputs))

    return YearlyResponse(yearly_totals=yearly_to_response(aggregate_yearly(schedule)))


@router.post("/summary", response_model=FinancingSummaryResponse)
async def calculate_summary(inputs: FinancingPlanInput):
    """Calculate monthly obligations and profit/loss."""
    summary = compute_summary(validated_plan(inputs))
    return FinancingSummaryResponse(**summary.to_dict())


def calculation_to_response(result: PlanCalculation) -> EMIPlanResponse:
    """Convert a pipeline result to the response schema, or raise a 400."""
    if not result.is_valid:
        logger.info("Rejected plan: %s", result.error)
        raise HTTPException(status_code=400, detail=result.error)

    return EMIPlanResponse(
        summary=FinancingSummaryResponse(**result.summary.to_dict()),
        schedule=schedule_to_response(result.schedule),
        yearly_totals=yearly_to_response(result.yearly_totals),
    )


@router.post("/emi-plan", response_model=EMIPlanResponse)
async def calculate_emi_plan(inputs: FinancingPlanInput):
    """Calculate schedule, yearly totals and profit/loss in one call."""
    return calculation_to_response(calculate_plan(inputs.to_plan()))
