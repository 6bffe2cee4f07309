"""Shared schema building blocks: camelCase base model and JSON-number money."""

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts camelCase or snake_case input, emits camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


MoneyOut = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json"),
]


class MessageResponse(CamelModel):
    message: str
