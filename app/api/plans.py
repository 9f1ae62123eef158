"""
Saved loan plan API endpoints.

A saved plan stores the plan inputs together with the summary computed
at save time. Plans are validated before they are stored.
"""

import logging
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from typing import Optional, List
from sqlalchemy.orm import Session

from app.api.calculations import (
    FinancingPlanInput,
    FinancingSummaryResponse,
    EMIPlanResponse,
    calculation_to_response,
    validated_plan,
)
from app.calculations.pipeline import calculate_plan
from app.calculations.profit_loss import compute_summary
from app.config import get_settings
from app.db.database import get_db
from app.db.models import SavedPlan

logger = logging.getLogger(__name__)

router = APIRouter()


class SavedPlanCreate(BaseModel):
    """Schema for saving a plan."""

    name: Optional[str] = None
    plan: FinancingPlanInput


class SavedPlanResponse(BaseModel):
    """Schema for saved plan response."""

    id: str
    name: str
    loan_type: str
    loan_label: str
    currency: Optional[str]
    plan: FinancingPlanInput
    summary: FinancingSummaryResponse
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    class Config:
        from_attributes = True


class SavedPlanListResponse(BaseModel):
    """Response for listing saved plans."""

    plans: List[SavedPlanResponse]
    total: int


def saved_plan_to_response(saved: SavedPlan) -> SavedPlanResponse:
    """Convert SavedPlan model to response schema."""
    return SavedPlanResponse(
        id=saved.id,
        name=saved.name,
        loan_type=saved.loan_type,
        loan_label=saved.loan_label,
        currency=saved.currency,
        plan=FinancingPlanInput(**saved.plan),
        summary=FinancingSummaryResponse(**saved.summary),
        created_at=saved.created_at.isoformat() if saved.created_at else None,
        updated_at=saved.updated_at.isoformat() if saved.updated_at else None,
    )


def get_saved_plan_or_404(db: Session, plan_id: str) -> SavedPlan:
    saved = (
        db.query(SavedPlan)
        .filter(SavedPlan.id == plan_id, SavedPlan.is_deleted == False)
        .first()
    )

    if not saved:
        raise HTTPException(status_code=404, detail="Plan not found")

    return saved


@router.get("/", response_model=SavedPlanListResponse)
async def list_plans(
    skip: int = 0,
    limit: int = 100,
    loan_type: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List saved plans, newest first."""
    query = db.query(SavedPlan).filter(SavedPlan.is_deleted == False)

    if loan_type:
        query = query.filter(SavedPlan.loan_type == loan_type)

    total = query.count()
    plans = (
        query.order_by(SavedPlan.created_at.desc()).offset(skip).limit(limit).all()
    )

    return SavedPlanListResponse(
        plans=[saved_plan_to_response(p) for p in plans],
        total=total,
    )


@router.post("/", response_model=SavedPlanResponse, status_code=201)
async def create_plan(
    plan_data: SavedPlanCreate,
    db: Session = Depends(get_db),
):
    """Validate, calculate and save a plan."""
    plan = validated_plan(plan_data.plan)
    summary = compute_summary(plan)

    saved = SavedPlan(
        name=plan_data.name or summary.loan_label,
        loan_type=plan.loan_type,
        loan_label=summary.loan_label,
        plan=plan_data.plan.model_dump(mode="json"),
        summary=summary.to_dict(),
        currency=get_settings().currency,
    )

    db.add(saved)
    db.commit()
    db.refresh(saved)

    logger.info("Saved plan %s (%s)", saved.id, saved.loan_label)
    return saved_plan_to_response(saved)


@router.get("/{plan_id}", response_model=SavedPlanResponse)
async def get_plan(
    plan_id: str,
    db: Session = Depends(get_db),
):
    """Get a saved plan by ID."""
    return saved_plan_to_response(get_saved_plan_or_404(db, plan_id))


@router.put("/{plan_id}", response_model=SavedPlanResponse)
async def update_plan(
    plan_id: str,
    plan_data: SavedPlanCreate,
    db: Session = Depends(get_db),
):
    """Replace a saved plan's inputs and recalculate its summary."""
    saved = get_saved_plan_or_404(db, plan_id)

    plan = validated_plan(plan_data.plan)
    summary = compute_summary(plan)

    if plan_data.name:
        saved.name = plan_data.name
    saved.loan_type = plan.loan_type
    saved.loan_label = summary.loan_label
    saved.plan = plan_data.plan.model_dump(mode="json")
    saved.summary = summary.to_dict()

    db.commit()
    db.refresh(saved)

    return saved_plan_to_response(saved)


@router.delete("/{plan_id}")
async def delete_plan(
    plan_id: str,
    db: Session = Depends(get_db),
):
    """Soft delete a saved plan."""
    saved = get_saved_plan_or_404(db, plan_id)

    saved.is_deleted = True
    db.commit()

    logger.info("Deleted plan %s", plan_id)
    return {"deleted": True, "id": plan_id}


@router.get("/{plan_id}/calculation", response_model=EMIPlanResponse)
async def replay_plan(
    plan_id: str,
    db: Session = Depends(get_db),
):
    """Recalculate every output of a saved plan from its stored inputs."""
    saved = get_saved_plan_or_404(db, plan_id)
    plan = FinancingPlanInput(**saved.plan).to_plan()
    return calculation_to_response(calculate_plan(plan))
