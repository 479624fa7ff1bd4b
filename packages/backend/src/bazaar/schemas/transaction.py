"""Pydantic schemas for the personal transaction ledger."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field


class TransactionCreate(BaseModel):
    type: str = Field(..., min_length=1, max_length=50)
    amount: float = Field(..., description="Accepts numbers or numeric strings")
    description: str = ""


class TransactionRead(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    type: str
    amount: float
    description: str
    created_at: datetime

    model_config = {"from_attributes": True}


class TransactionSummary(BaseModel):
    """Totals per transaction type for the requester."""
    count: int
    totals: dict[str, float]
