"""
Recipe text in, grocery list (or a typed failure) out.
"""

import logging
from typing import Optional

from ..models.grocery import (
    ErrorKind,
    ExtractionFailure,
    ExtractionResult,
    ExtractionSuccess,
)
from .grocery_parser import GroceryParser
from .llm_client import TextGenerator, get_text_generator
from .prompts import build_grocery_prompt

log = logging.getLogger(__name__)

RECIPE_REQUIRED_MESSAGE = "Recipe is required"
PROCESSING_FAILED_MESSAGE = "Failed to process recipe. Please check your recipe text and try again."


class ExtractionService:
    """
    Stateless: one instance can serve concurrent requests.
    """

    def __init__(self, generator: Optional[TextGenerator] = None):
        self.generator = generator or get_text_generator()

    async def extract(self, recipe_text: Optional[str]) -> ExtractionResult:
        if not isinstance(recipe_text, str) or not recipe_text.strip():
            log.warning("Rejected empty recipe before calling the model")
            return ExtractionFailure(kind=ErrorKind.INVALID_INPUT, message=RECIPE_REQUIRED_MESSAGE)

        prompt = build_grocery_prompt(recipe_text)
        log.info(f"📝 Extracting groceries from recipe: {len(recipe_text)} characters")

        try:
            raw = await self.generator.generate(prompt)
        except Exception as e:
            log.error(f"❌ Text generation failed: {e}")
            return ExtractionFailure(kind=ErrorKind.UPSTREAM_FAILURE, message=PROCESSING_FAILED_MESSAGE)

        if not isinstance(raw, str):
            log.error(f"❌ Model returned no text (got {type(raw).__name__})")
            return ExtractionFailure(kind=ErrorKind.MALFORMED_OUTPUT, message=PROCESSING_FAILED_MESSAGE)

        outcome = GroceryParser.parse(raw)
        if not outcome.groceries:
            log.warning(f"⚠️ No ingredients recognized ({outcome.tier.value} tier)")
        else:
            log.info(f"✅ Extracted {len(outcome.groceries)} items ({outcome.tier.value} tier)")

        return ExtractionSuccess(groceries=outcome.groceries, tier=outcome.tier)
