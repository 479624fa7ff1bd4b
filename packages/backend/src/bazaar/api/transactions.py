"""Transaction routes.

The whole router is mounted behind get_requester: an unauthenticated call
is rejected with 401 before any handler (or the database) is reached.
"""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.auth.dependencies import RequesterContext, get_requester
from bazaar.db.engine import get_db
from bazaar.schemas.community import MessageResponse
from bazaar.schemas.transaction import (
    TransactionCreate,
    TransactionRead,
    TransactionSummary,
)
from bazaar.services.transaction_service import TransactionService

router = APIRouter(prefix="/transactions")


def _svc(db: AsyncSession = Depends(get_db)) -> TransactionService:
    return TransactionService(db)


@router.post("", response_model=TransactionRead, status_code=201)
async def create_transaction(
    body: TransactionCreate,
    requester: RequesterContext = Depends(get_requester),
    svc: TransactionService = Depends(_svc),
):
    return await svc.create_transaction(requester, body)


@router.get("", response_model=list[TransactionRead])
async def list_transactions(
    requester: RequesterContext = Depends(get_requester),
    svc: TransactionService = Depends(_svc),
):
    """The requester's transactions, newest first."""
    return await svc.list_transactions(requester)


@router.get("/summary", response_model=TransactionSummary)
async def summarize_transactions(
    requester: RequesterContext = Depends(get_requester),
    svc: TransactionService = Depends(_svc),
):
    return await svc.summarize(requester)


@router.get("/{transaction_id}", response_model=TransactionRead)
async def get_transaction(
    transaction_id: uuid.UUID,
    requester: RequesterContext = Depends(get_requester),
    svc: TransactionService = Depends(_svc),
):
    return await svc.get_transaction(requester, transaction_id)


@router.delete("/{transaction_id}", response_model=MessageResponse)
async def delete_transaction(
    transaction_id: uuid.UUID,
    requester: RequesterContext = Depends(get_requester),
    svc: TransactionService = Depends(_svc),
):
    await svc.delete_transaction(requester, transaction_id)
    return {"message": "Transaction deleted successfully"}
