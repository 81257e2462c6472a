from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

AS_NEEDED = "as needed"


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    UPSTREAM_FAILURE = "upstream_failure"
    MALFORMED_OUTPUT = "malformed_output"


class ParseTier(str, Enum):
    STRICT = "strict"
    FALLBACK = "fallback"


class GroceryItem(BaseModel):
    item: str = Field(min_length=1)
    quantity: str = Field(min_length=1)

    @field_validator("item")
    @classmethod
    def item_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("item must not be blank")
        return value


class GroceryList(BaseModel):
    """Wrapper shape shared by the model prompt and the HTTP response."""

    groceries: List[GroceryItem]


class RecipeRequest(BaseModel):
    recipe: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


class ExtractionSuccess(BaseModel):
    status: Literal["success"] = "success"
    groceries: List[GroceryItem]
    tier: ParseTier


class ExtractionFailure(BaseModel):
    status: Literal["failure"] = "failure"
    kind: ErrorKind
    message: str


ExtractionResult = Union[ExtractionSuccess, ExtractionFailure]
