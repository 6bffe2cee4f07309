"""Transaction Routes: record ledger entries and page through them.

Invariants:
    - POST applies the signed amount to the account balance in the same commit
    - GET pages are 1-based; limit is 1..100 (default 50); pages = ceil(total / limit)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_current_claim, get_ledger_mutator
from app.core.domain_types import AccountId, CategoryId, SessionClaim, TransactionType
from app.core.ledger_rules import page_count
from app.core.session_policy import API_PREFIX
from app.schemas.ledger import (
    Pagination, TransactionCreate, TransactionEnvelope, TransactionList, TransactionOut,
)
from app.services.ledger_mutator import LedgerMutator

router = APIRouter(prefix=f"{API_PREFIX}/transactions", tags=["transactions"])

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


@router.post(
    "", response_model=TransactionEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_transaction(
    body: TransactionCreate,
    claim: SessionClaim = Depends(get_current_claim),
    ledger: LedgerMutator = Depends(get_ledger_mutator),
):
    txn = await ledger.create_transaction(
        claim.user_id,
        AccountId(body.account_id),
        CategoryId(body.category_id),
        body.amount,
        body.type,
        occurred_at=body.date,
        description=body.description,
    )
    return TransactionEnvelope(transaction=TransactionOut.from_model(txn))


@router.get("", response_model=TransactionList)
async def list_transactions(
    account_id: UUID | None = Query(None, alias="accountId"),
    txn_type: TransactionType | None = Query(None, alias="type"),
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    claim: SessionClaim = Depends(get_current_claim),
    ledger: LedgerMutator = Depends(get_ledger_mutator),
):
    result = await ledger.list_transactions(
        claim.user_id,
        account_id=AccountId(account_id) if account_id else None,
        txn_type=txn_type,
        page=page,
        limit=limit,
    )
    return TransactionList(
        transactions=[TransactionOut.from_model(t) for t in result.items],
        pagination=Pagination(
            page=page, limit=limit, total=result.total,
            pages=page_count(result.total, limit),
        ),
    )
