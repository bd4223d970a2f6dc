from __future__ import annotations
from typing import Any, Optional

import openai
from pydantic import BaseModel, Field, ValidationError

from flavorflow.core.menu.models import Draft
from flavorflow.infra.settings import settings
from flavorflow.ports.extraction import DishExtractionPort, ExtractionError

SYSTEM_PROMPT = (
    "You turn a restaurant owner's description of a dish into a menu entry. "
    "Reply with a JSON object with exactly these keys: "
    '"title" (catchy dish name), "description" (one or two professional sentences), '
    '"price" (number, no currency sign), "isVeg" (boolean), '
    '"category" (e.g. "Main Course", "Sides", "Beverage", "Dessert").'
)


class ParsedDish(BaseModel):
    title: str = Field(min_length=1)
    description: str
    price: float = Field(ge=0, allow_inf_nan=False)
    isVeg: bool
    category: str

    def to_draft(self) -> Draft:
        return Draft(
            title=self.title.strip(),
            description=self.description.strip(),
            price=self.price,
            is_veg=self.isVeg,
            category=self.category.strip(),
        )


class OpenAIDishExtractor(DishExtractionPort):
    def __init__(self, client: Optional[Any] = None, model: Optional[str] = None):
        self.model = model or settings.EXTRACT_MODEL
        if client is None and settings.OPENAI_API_KEY:
            client = openai.OpenAI(api_key=settings.OPENAI_API_KEY)
        self._client = client

    @property
    def available(self) -> bool:
        return self._client is not None

    def extract(self, text: str) -> Draft:
        if not self.available:
            raise ExtractionError("OpenAI client not configured")
        try:
            resp = self._client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": f'Input: "{text}"'},
                ],
                response_format={"type": "json_object"},
                temperature=0.2,
            )
        except openai.OpenAIError as e:
            raise ExtractionError(str(e)) from e

        content = resp.choices[0].message.content if resp.choices else None
        if not content:
            raise ExtractionError("The AI returned an empty response.")
        try:
            return ParsedDish.model_validate_json(content).to_draft()
        except ValidationError as e:
            raise ExtractionError(f"Unusable extraction: {e}") from e
