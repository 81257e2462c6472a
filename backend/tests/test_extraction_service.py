import asyncio

from backend.recipe_cart.models.grocery import (
    ErrorKind,
    ExtractionFailure,
    ExtractionSuccess,
    GroceryItem,
    ParseTier,
)
from backend.recipe_cart.services.extraction import ExtractionService
from backend.recipe_cart.services.llm_client import GenerationError
from backend.recipe_cart.services.prompts import build_grocery_prompt


class StubGenerator:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def extract(service, text):
    return asyncio.run(service.extract(text))


def test_empty_recipe_never_reaches_model():
    stub = StubGenerator(reply='{"groceries": []}')
    service = ExtractionService(stub)

    for text in ["", "   ", "\n\t", None]:
        result = extract(service, text)
        assert isinstance(result, ExtractionFailure)
        assert result.kind == ErrorKind.INVALID_INPUT
        assert result.message == "Recipe is required"

    assert stub.prompts == []


def test_strict_json_reply():
    stub = StubGenerator(reply='{"groceries":[{"item":"Flour","quantity":"2 cups"}]}')

    result = extract(ExtractionService(stub), "Mix 2 cups flour")

    assert result == ExtractionSuccess(
        groceries=[GroceryItem(item="Flour", quantity="2 cups")],
        tier=ParseTier.STRICT,
    )
    assert stub.prompts == [build_grocery_prompt("Mix 2 cups flour")]


def test_fallback_reply():
    stub = StubGenerator(reply="Flour: 2 cups\nSugar\n\n")

    result = extract(ExtractionService(stub), "Mix flour and sugar")

    assert isinstance(result, ExtractionSuccess)
    assert result.tier == ParseTier.FALLBACK
    assert result.groceries == [
        GroceryItem(item="Flour", quantity="2 cups"),
        GroceryItem(item="Sugar", quantity="as needed"),
    ]


def test_upstream_failure_is_not_retried():
    stub = StubGenerator(error=GenerationError("quota exceeded"))

    result = extract(ExtractionService(stub), "Boil an egg")

    assert isinstance(result, ExtractionFailure)
    assert result.kind == ErrorKind.UPSTREAM_FAILURE
    assert "quota" not in result.message
    assert len(stub.prompts) == 1


def test_unexpected_generator_exception_is_contained():
    stub = StubGenerator(error=TimeoutError())

    result = extract(ExtractionService(stub), "Boil an egg")

    assert isinstance(result, ExtractionFailure)
    assert result.kind == ErrorKind.UPSTREAM_FAILURE


def test_missing_text_is_malformed_output():
    result = extract(ExtractionService(StubGenerator(reply=None)), "Boil an egg")

    assert isinstance(result, ExtractionFailure)
    assert result.kind == ErrorKind.MALFORMED_OUTPUT


def test_blank_reply_is_empty_success():
    result = extract(ExtractionService(StubGenerator(reply="\n \n")), "Boil an egg")

    assert result == ExtractionSuccess(groceries=[], tier=ParseTier.FALLBACK)


def test_same_input_same_output():
    stub = StubGenerator(reply="Eggs: 3\nMilk: 1 cup\nSalt")
    service = ExtractionService(stub)

    first = extract(service, "Scrambled eggs")
    second = extract(service, "Scrambled eggs")

    assert first == second
    assert stub.prompts[0] == stub.prompts[1]


def test_prompt_embeds_recipe_verbatim():
    recipe = "Mix {flour} and 50% sugar\n  then bake"

    prompt = build_grocery_prompt(recipe)

    assert prompt.endswith(f"Recipe: {recipe}\n")
    assert '"groceries"' in prompt
    assert "Only include the JSON output" in prompt
