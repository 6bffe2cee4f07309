"""Account Routes: create and list the signed-in user's accounts.

Invariants:
    - Creating an account creates the user's household first if it has none
    - Listing is newest first and never includes another user's accounts
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_current_claim, get_ledger_mutator
from app.core.domain_types import SessionClaim
from app.core.session_policy import API_PREFIX
from app.schemas.ledger import AccountCreate, AccountEnvelope, AccountList, AccountOut
from app.services.ledger_mutator import LedgerMutator

router = APIRouter(prefix=f"{API_PREFIX}/accounts", tags=["accounts"])


@router.post(
    "", response_model=AccountEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_account(
    body: AccountCreate,
    claim: SessionClaim = Depends(get_current_claim),
    ledger: LedgerMutator = Depends(get_ledger_mutator),
):
    account = await ledger.create_account(
        claim.user_id, body.name, body.type, body.balance,
    )
    return AccountEnvelope(account=AccountOut.from_model(account))


@router.get("", response_model=AccountList)
async def list_accounts(
    claim: SessionClaim = Depends(get_current_claim),
    ledger: LedgerMutator = Depends(get_ledger_mutator),
):
    accounts = await ledger.list_accounts(claim.user_id)
    return AccountList(accounts=[AccountOut.from_model(a) for a in accounts])
