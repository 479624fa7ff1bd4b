"""Transaction service — a user's private ledger.

Every method is scoped to the requester: listings filter by requester,
and single-row reads and deletes go through the ownership guard after the
existence check.
"""

import uuid
from decimal import ROUND_HALF_UP, Decimal

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bazaar.auth.dependencies import RequesterContext
from bazaar.auth.ownership import authorize_mutation, require_owner
from bazaar.db.models import Transaction
from bazaar.db.repository import Repository
from bazaar.errors import NotFound, ValidationError
from bazaar.schemas.transaction import TransactionCreate

logger = structlog.get_logger()

# transactions.amount is NUMERIC(12, 2)
_CENT = Decimal("0.01")
_AMOUNT_LIMIT = Decimal("10000000000")


def _parse_amount(value: float) -> Decimal:
    """Round to cents and reject anything the amount column cannot hold."""
    amount = Decimal(str(value))
    if not amount.is_finite():
        raise ValidationError("amount must be a finite number")
    # Range check comes first: quantizing a huge value overflows the context.
    if abs(amount) < _AMOUNT_LIMIT:
        amount = amount.quantize(_CENT, rounding=ROUND_HALF_UP)
        if abs(amount) < _AMOUNT_LIMIT:
            return amount
    raise ValidationError(
        "amount is out of range",
        details={"max_abs": str(_AMOUNT_LIMIT - _CENT)},
    )


class TransactionService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.transactions = Repository(db, Transaction)

    async def create_transaction(
        self, requester: RequesterContext, body: TransactionCreate
    ) -> Transaction:
        amount = _parse_amount(body.amount)
        txn = await self.transactions.create(
            user_id=requester.user_uuid,
            type=body.type,
            amount=amount,
            description=body.description or "",
        )
        await self.db.commit()
        logger.info("transaction.created", transaction_id=str(txn.id), type=txn.type)
        return txn

    async def list_transactions(self, requester: RequesterContext) -> list[Transaction]:
        return await self.transactions.find_many(
            Transaction.user_id == requester.user_uuid,
            order_by=Transaction.created_at.desc(),
        )

    async def get_transaction(
        self, requester: RequesterContext, transaction_id: uuid.UUID
    ) -> Transaction:
        txn = await self.transactions.find_unique(id=transaction_id)
        if not txn:
            raise NotFound("Transaction not found")
        require_owner(
            authorize_mutation(requester.user_id, txn.user_id),
            "You are not authorized to view this transaction",
        )
        return txn

    async def delete_transaction(
        self, requester: RequesterContext, transaction_id: uuid.UUID
    ) -> None:
        txn = await self.transactions.find_unique(id=transaction_id)
        if not txn:
            raise NotFound("Transaction not found")
        require_owner(
            authorize_mutation(requester.user_id, txn.user_id),
            "You are not authorized to delete this transaction",
        )
        await self.transactions.delete(txn)
        await self.db.commit()
        logger.info("transaction.deleted", transaction_id=str(transaction_id))

    async def summarize(self, requester: RequesterContext) -> dict:
        """Count and per-type totals of the requester's ledger."""
        result = await self.db.execute(
            select(Transaction.type, func.count(), func.sum(Transaction.amount))
            .where(Transaction.user_id == requester.user_uuid)
            .group_by(Transaction.type)
        )
        count = 0
        totals: dict[str, float] = {}
        for txn_type, n, total in result.all():
            count += n
            totals[txn_type] = float(total or 0)
        return {"count": count, "totals": totals}
