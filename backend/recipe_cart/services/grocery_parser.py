"""
Two tiers: strict JSON first, fall back to line splitting when the model
ignores the requested format.
"""

import json
import logging
import re
from typing import List, Union

from pydantic import BaseModel, ValidationError

from ..models.grocery import AS_NEEDED, GroceryItem, GroceryList, ParseTier

log = logging.getLogger(__name__)


class StrictParseFailure(BaseModel):
    reason: str


class ParseOutcome(BaseModel):
    groceries: List[GroceryItem]
    tier: ParseTier


def parse_strict(raw: str) -> Union[GroceryList, StrictParseFailure]:
    """Tier 1. Any malformed element rejects the whole response."""
    text = GroceryParser.unwrap_fence(raw)
    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as e:
        return StrictParseFailure(reason=f"invalid JSON: {e}")

    if not isinstance(data, dict):
        return StrictParseFailure(reason="top-level value is not an object")
    if "groceries" not in data:
        return StrictParseFailure(reason="missing 'groceries' field")
    if not isinstance(data["groceries"], list):
        return StrictParseFailure(reason="'groceries' is not a list")

    try:
        return GroceryList.model_validate({"groceries": data["groceries"]})
    except ValidationError as e:
        return StrictParseFailure(reason=f"invalid grocery item: {e.error_count()} error(s)")


def parse_lines(raw: str) -> GroceryList:
    """Tier 2. One item per non-blank line, split at the first colon."""
    groceries: List[GroceryItem] = []
    for line in raw.splitlines():
        line = line.strip()
        if not line:
            continue

        item, sep, quantity = line.partition(":")
        item = item.strip()
        quantity = quantity.strip()
        if not sep:
            item = line
        elif not item:
            # ":2 cups" has nothing left of the colon
            item = line
            quantity = ""
        groceries.append(GroceryItem(item=item, quantity=quantity or AS_NEEDED))

    return GroceryList(groceries=groceries)


class GroceryParser:
    fence_pattern = re.compile(r"^\s*```[A-Za-z]*\s*\n(.*?)\n?\s*```\s*$", re.S)

    @classmethod
    def unwrap_fence(cls, raw: str) -> str:
        match = cls.fence_pattern.match(raw)
        if match:
            return match.group(1)
        return raw

    @classmethod
    def parse(cls, raw: str) -> ParseOutcome:
        strict = parse_strict(raw)
        if isinstance(strict, GroceryList):
            return ParseOutcome(groceries=strict.groceries, tier=ParseTier.STRICT)

        log.info(f"Strict parse failed ({strict.reason}), falling back to line parsing")
        fallback = parse_lines(raw)
        return ParseOutcome(groceries=fallback.groceries, tier=ParseTier.FALLBACK)
