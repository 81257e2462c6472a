"""
HTTP client for POST /api/groceries, used by the submission controller.
"""

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from ..models.grocery import GroceryItem, GroceryList

log = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Failed to process recipe"
INVALID_FORMAT_MESSAGE = "Invalid response format"
TRANSPORT_ERROR_MESSAGE = "Failed to generate grocery list. Please try again."


class GroceryClientError(Exception):
    """Carries a message that is safe to show to the user."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class GroceryClient:
    def __init__(self, base_url: str = "http://localhost:8000", transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url
        self.transport = transport

    async def fetch_groceries(self, recipe: str) -> List[GroceryItem]:
        try:
            async with httpx.AsyncClient(base_url=self.base_url, transport=self.transport) as client:
                response = await client.post("/api/groceries", json={"recipe": recipe})
            data = response.json()
        except httpx.HTTPError as e:
            log.error(f"❌ Request to grocery service failed: {e}")
            raise GroceryClientError(TRANSPORT_ERROR_MESSAGE) from e
        except ValueError as e:
            log.error(f"❌ Grocery service returned a non-JSON body: {e}")
            raise GroceryClientError(TRANSPORT_ERROR_MESSAGE) from e

        if not response.is_success:
            message = data.get("error") if isinstance(data, dict) else None
            raise GroceryClientError(message if isinstance(message, str) and message else DEFAULT_ERROR_MESSAGE)

        try:
            return GroceryList.model_validate(data).groceries
        except ValidationError as e:
            log.error(f"❌ Unexpected grocery response shape: {e}")
            raise GroceryClientError(INVALID_FORMAT_MESSAGE) from e
