from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
import logging

from ..models.grocery import (
    ErrorKind,
    ErrorResponse,
    ExtractionFailure,
    GroceryList,
    RecipeRequest,
)
from ..services.extraction import RECIPE_REQUIRED_MESSAGE, ExtractionService

log = logging.getLogger(__name__)
router = APIRouter(prefix="/api")


def get_extraction_service() -> ExtractionService:
    return ExtractionService()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


@router.post(
    "/groceries",
    response_model=GroceryList,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def create_grocery_list(
    request: Request,
    service: ExtractionService = Depends(get_extraction_service),
):
    """Turn recipe text into a grocery list."""
    # Body is read by hand so a missing or bad "recipe" is a 400, not FastAPI's 422
    try:
        payload = RecipeRequest.model_validate(await request.json())
    except (ValueError, ValidationError) as e:
        log.warning(f"Rejected request body: {e}")
        return _error(400, RECIPE_REQUIRED_MESSAGE)

    result = await service.extract(payload.recipe)

    if isinstance(result, ExtractionFailure):
        status_code = 400 if result.kind == ErrorKind.INVALID_INPUT else 500
        return _error(status_code, result.message)

    return GroceryList(groceries=result.groceries)
