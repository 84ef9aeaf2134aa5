"""OpenAI Responses API client for grocery list generation."""

import json
import logging
from dataclasses import dataclass

from openai import AsyncOpenAI

from meal_swipe.services.grocery import GroceryClient

GROCERY_INSTRUCTIONS = (
    "You are a meal-prep assistant. Answer only with the grocery list JSON "
    "requested by the schema. Use metric or common kitchen units."
)

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIGroceryClient(GroceryClient):
    """Grocery client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIGroceryClient":
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        schema: dict[str, object],
        prompt: str,
    ) -> dict[str, object]:
        """Request a schema-constrained grocery list and decode it."""
        request = _grocery_request(model, store, schema, prompt)
        if reasoning_effort:
            request["reasoning"] = {"effort": reasoning_effort}

        response = await self.client.responses.create(**request)
        if not response.output_text:
            raise RuntimeError("OpenAI returned an empty grocery list response")
        try:
            return json.loads(response.output_text)
        except json.JSONDecodeError as exc:
            _logger.warning("Grocery list response is not valid JSON: %s", exc)
            raise RuntimeError("OpenAI returned malformed grocery list JSON") from exc

    async def close(self) -> None:
        await self.client.close()


def _grocery_request(
    model: str, store: bool, schema: dict[str, object], prompt: str
) -> dict[str, object]:
    return {
        "model": model,
        "instructions": GROCERY_INSTRUCTIONS,
        "input": prompt,
        "text": {
            "format": {
                "type": "json_schema",
                "name": "grocery_list",
                "strict": True,
                "schema": schema,
            }
        },
        "store": store,
    }
