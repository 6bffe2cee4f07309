"""Household Routes: explicit household creation for the signed-in user."""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_current_claim, get_household_service
from app.core.domain_types import SessionClaim
from app.core.session_policy import API_PREFIX
from app.schemas.auth import HouseholdOut
from app.schemas.ledger import HouseholdCreate, HouseholdEnvelope
from app.services.household_service import HouseholdService

router = APIRouter(prefix=f"{API_PREFIX}/households", tags=["households"])


@router.post(
    "", response_model=HouseholdEnvelope,
    status_code=status.HTTP_201_CREATED,
)
async def create_household(
    body: HouseholdCreate,
    claim: SessionClaim = Depends(get_current_claim),
    households: HouseholdService = Depends(get_household_service),
):
    household = await households.create(claim.user_id, body.name)
    return HouseholdEnvelope(household=HouseholdOut.from_model(household))
