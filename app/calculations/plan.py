"""
Financing Plan Records

Immutable input and output records for the loan planning engine.
Every computation receives a FinancingPlan and returns freshly built
records; nothing here holds state between calls.
"""

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional, Tuple


MANUAL_ENTRY = "Manual Entry"

LOAN_TYPE_OPTIONS = [
    "Business Loan",
    "Vehicle Loan",
    "Electronics Loan",
    "House Loan",
    "Personal Loan",
    MANUAL_ENTRY,
]

REVENUE_SLOTS = 2
MIN_EXPENSE_ITEMS = 2
MAX_EXPENSE_ITEMS = 3


class TenureUnit(str, enum.Enum):
    """Unit the loan tenure is entered in."""
    months = "months"
    years = "years"


class Period(str, enum.Enum):
    """How often a revenue or expense amount recurs."""
    monthly = "monthly"
    yearly = "yearly"


def normalize_to_monthly(amount: float, period: Period) -> float:
    """Convert an amount to its monthly equivalent."""
    if period == Period.yearly:
        return amount / 12
    return amount


@dataclass(frozen=True)
class RevenueItem:
    """One of the two revenue streams of a plan."""

    amount: float = 0.0
    period: Period = Period.monthly

    @property
    def monthly_amount(self) -> float:
        return normalize_to_monthly(self.amount, self.period)


@dataclass(frozen=True)
class ExpenseItem:
    """A named recurring expense (rates, insurance, tax pass-through, ...)."""

    name: str = ""
    amount: float = 0.0
    period: Period = Period.monthly

    @property
    def monthly_amount(self) -> float:
        return normalize_to_monthly(self.amount, self.period)


def default_revenue_items() -> Tuple[RevenueItem, ...]:
    return tuple(RevenueItem() for _ in range(REVENUE_SLOTS))


def default_expense_items() -> Tuple[ExpenseItem, ...]:
    return (ExpenseItem(name="Rates"), ExpenseItem(name="Insurance"))


@dataclass(frozen=True)
class FinancingPlan:
    """
    A loan financing plan.

    Rates are annual percentages (6.0 means 6%). The tenure is converted
    to whole months through ``tenure_months``.

    Structural constraints (two revenue slots, at most three expenses) are
    enforced on construction. Numeric ranges are left to ``validate()`` so
    the caller can show a message instead of handling an exception.
    """

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

    revenue_items: Tuple[RevenueItem, ...] = field(default_factory=default_revenue_items)
    expense_items: Tuple[ExpenseItem, ...] = field(default_factory=default_expense_items)

    start_date: Optional[date] = None

    def __post_init__(self):
        # Lists are accepted for convenience but stored as tuples
        object.__setattr__(self, "revenue_items", tuple(self.revenue_items))
        object.__setattr__(self, "expense_items", tuple(self.expense_items))

        if len(self.revenue_items) != REVENUE_SLOTS:
            raise ValueError(
                f"A plan has exactly {REVENUE_SLOTS} revenue items, "
                f"got {len(self.revenue_items)}"
            )
        if len(self.expense_items) > MAX_EXPENSE_ITEMS:
            raise ValueError(
                f"A plan has at most {MAX_EXPENSE_ITEMS} expense items, "
                f"got {len(self.expense_items)}"
            )

    @property
    def tenure_months(self) -> int:
        """Loan tenure in whole months."""
        if self.tenure_unit == TenureUnit.years:
            months = self.loan_tenure * 12
        else:
            months = self.loan_tenure
        return max(0, int(months))

    @property
    def display_loan_type(self) -> str:
        """Label shown for the plan's loan type."""
        if self.loan_type == MANUAL_ENTRY:
            return self.custom_loan_type.strip() or "Not specified"
        return self.loan_type or "Not specified"


@dataclass(frozen=True)
class ScheduleEntry:
    """One month of the bank loan amortization schedule."""

    month: int
    beginning_principal: float
    monthly_principal: float
    monthly_interest: float
    total_payment: float
    ending_principal: float
    payment_date: Optional[date] = None


@dataclass(frozen=True)
class YearlyTotal:
    """Cumulative loan position at the end of a (possibly partial) year."""

    year: int
    cumulative_principal_paid: float
    cumulative_interest_paid: float
    remaining_principal: float


@dataclass(frozen=True)
class FinancingTerms:
    """Monthly obligations of each funding source, before revenue and expenses."""

    tenure_months: int

    bank_monthly_principal: float
    bank_monthly_interest: float

    own_funds_monthly_principal: float
    own_funds_monthly_interest: float

    borrowed_funds_monthly_principal: float
    borrowed_funds_monthly_interest: float

    @property
    def bank_monthly_total(self) -> float:
        return self.bank_monthly_principal + self.bank_monthly_interest

    @property
    def own_funds_monthly_total(self) -> float:
        return self.own_funds_monthly_principal + self.own_funds_monthly_interest

    @property
    def borrowed_funds_monthly_total(self) -> float:
        return self.borrowed_funds_monthly_principal + self.borrowed_funds_monthly_interest

    @property
    def monthly_financing_total(self) -> float:
        return (
            self.bank_monthly_total
            + self.own_funds_monthly_total
            + self.borrowed_funds_monthly_total
        )


@dataclass(frozen=True)
class FinancingSummary:
    """Monthly and yearly profit/loss projection for a plan."""

    loan_label: str
    terms: FinancingTerms
    monthly_revenue: float
    monthly_expenses: float
    monthly_profit_loss: float
    yearly_profit_loss: float

    def to_dict(self) -> dict:
        terms = self.terms
        return {
            "loan_label": self.loan_label,
            "tenure_months": terms.tenure_months,
            "bank_monthly_principal": terms.bank_monthly_principal,
            "bank_monthly_interest": terms.bank_monthly_interest,
            "bank_monthly_total": terms.bank_monthly_total,
            "own_funds_monthly_principal": terms.own_funds_monthly_principal,
            "own_funds_monthly_interest": terms.own_funds_monthly_interest,
            "own_funds_monthly_total": terms.own_funds_monthly_total,
            "borrowed_funds_monthly_principal": terms.borrowed_funds_monthly_principal,
            "borrowed_funds_monthly_interest": terms.borrowed_funds_monthly_interest,
            "borrowed_funds_monthly_total": terms.borrowed_funds_monthly_total,
            "monthly_revenue": self.monthly_revenue,
            "monthly_expenses": self.monthly_expenses,
            "monthly_profit_loss": self.monthly_profit_loss,
            "yearly_profit_loss": self.yearly_profit_loss,
        }


@dataclass(frozen=True)
class PlanCalculation:
    """Result of running the full pipeline; either an error or all outputs."""

    error: Optional[str] = None
    schedule: List[ScheduleEntry] = field(default_factory=list)
    yearly_totals: List[YearlyTotal] = field(default_factory=list)
    summary: Optional[FinancingSummary] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None
