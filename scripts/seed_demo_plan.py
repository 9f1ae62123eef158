"""
Seed a demo house-loan plan into the saved-plan store.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.api.calculations import FinancingPlanInput
from app.calculations.profit_loss import compute_summary
from app.calculations.validation import validate
from app.config import get_settings
from app.db.database import get_db_context, init_db
from app.db.models import SavedPlan

DEMO_NAME = "Demo Rental Property"


def demo_plan_inputs() -> FinancingPlanInput:
    return FinancingPlanInput(
        loan_type="House Loan",
        loan_tenure=25,
        tenure_unit="years",
        loan_amount=540000,
        has_monthly_repayment=True,
        annual_interest_rate=6.2,
        own_funds=135000,
        own_funds_annual_rate=4.0,
        revenue_items=[
            {"amount": 3200, "period": "monthly"},
            {"amount": 0, "period": "monthly"},
        ],
        expense_items=[
            {"name": "Council Rates", "amount": 2400, "period": "yearly"},
            {"name": "Insurance", "amount": 1800, "period": "yearly"},
            {"name": "Property Management", "amount": 250, "period": "monthly"},
        ],
        start_date="2025-07-01",
    )


def main():
    init_db()

    with get_db_context() as db:
        existing = db.query(SavedPlan).filter(SavedPlan.name == DEMO_NAME).first()
        if existing:
            print(f"Plan already exists: {existing.name}. Skipping.")
            return

        inputs = demo_plan_inputs()
        plan = inputs.to_plan()

        error = validate(plan)
        if error:
            print(f"Demo plan is invalid: {error}")
            return

        summary = compute_summary(plan)
        saved = SavedPlan(
            name=DEMO_NAME,
            loan_type=plan.loan_type,
            loan_label=summary.loan_label,
            plan=inputs.model_dump(mode="json"),
            summary=summary.to_dict(),
            currency=get_settings().currency,
        )
        db.add(saved)
        db.flush()

        print(f"\nCreated plan: {saved.name} (ID: {saved.id})")
        print(f"  Loan: ${plan.loan_amount:,.0f} over {plan.tenure_months} months")
        print(f"  Bank payment (month 1): ${summary.terms.bank_monthly_total:,.2f}")
        print(f"  Monthly P/L: ${summary.monthly_profit_loss:,.2f}")
        print(f"  Yearly P/L: ${summary.yearly_profit_loss:,.2f}")


if __name__ == "__main__":
    main()
