"""Category Routes: the shared category catalogue, optionally filtered by type."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.dependencies import get_current_claim
from app.core.domain_types import CategoryType
from app.core.session_policy import API_PREFIX
from app.infrastructure.database import get_db
from app.models.category import Category
from app.schemas.ledger import CategoryList, CategoryOut

router = APIRouter(
    prefix=f"{API_PREFIX}/categories", tags=["categories"],
    dependencies=[Depends(get_current_claim)],
)


@router.get("", response_model=CategoryList)
async def list_categories(
    category_type: CategoryType | None = Query(None, alias="type"),
    db: AsyncSession = Depends(get_db),
):
    stmt = select(Category).order_by(Category.is_default.desc(), Category.name)
    if category_type is not None:
        stmt = stmt.where(Category.type == category_type.value)
    result = await db.execute(stmt)
    return CategoryList(categories=[CategoryOut.from_model(c) for c in result.scalars()])
