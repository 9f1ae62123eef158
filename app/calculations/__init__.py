"""
Loan Planning Calculation Engine

Pure calculation modules for EMI loan planning: validation, fixed-principal
amortization, yearly roll-ups and profit/loss projection.
None of these modules touch storage.
"""

from app.calculations import plan, validation, amortization, profit_loss, pipeline

__all__ = ["plan", "validation", "amortization", "profit_loss", "pipeline"]
