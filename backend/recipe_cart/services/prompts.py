"""
Prompt template for grocery extraction. Output depends only on the recipe text.
"""

GROCERY_PROMPT_TEMPLATE = """Extract the ingredients list from this recipe and return them in the following JSON format:
{{
  "groceries": [
    {{
      "item": "ingredient name",
      "quantity": "amount with unit"
    }}
  ]
}}

Use "as needed" as the quantity when the recipe does not give an amount.
Only include the JSON output, no additional text.

Recipe: {recipe}
"""


def build_grocery_prompt(recipe: str) -> str:
    return GROCERY_PROMPT_TEMPLATE.format(recipe=recipe)
