from __future__ import annotations
import base64
import binascii
import logging
from typing import Any, Optional

import openai

from flavorflow.infra.settings import settings
from flavorflow.ports.image_generation import (
    GenerationResult, ImageGenerated, ImageGenerationPort, ImagePayload,
    QuotaExceeded, TransientFailure,
)

log = logging.getLogger("flavorflow.images")

PROMPT = ("A professional food photography shot of {title}. High resolution, bokeh background, "
          "commercial lighting, delicious presentation.")


class OpenAIImageGenerator(ImageGenerationPort):
    def __init__(self, client: Optional[Any] = None, model: Optional[str] = None):
        self.model = model or settings.IMAGE_MODEL
        if client is None and settings.OPENAI_API_KEY:
            client = openai.OpenAI(api_key=settings.OPENAI_API_KEY)
        self._client = client

    @property
    def available(self) -> bool:
        return self._client is not None

    def generate(self, descriptor: str) -> GenerationResult:
        if not self.available:
            return TransientFailure("OpenAI client not configured")
        kwargs = dict(model=self.model, prompt=PROMPT.format(title=descriptor), size="1024x1024", n=1)
        if self.model.startswith("dall-e"):
            kwargs["response_format"] = "b64_json"
        try:
            resp = self._client.images.generate(**kwargs)
        except openai.RateLimitError as e:
            # 429, including insufficient_quota
            log.warning("image generation rate limited: %s", e)
            return QuotaExceeded(str(e))
        except openai.OpenAIError as e:
            log.error("image generation failed: %s", e)
            return TransientFailure(str(e))

        if not resp.data:
            # an empty candidate list is how a throttled plan answers
            return QuotaExceeded("no image candidates returned")
        b64 = resp.data[0].b64_json
        if not b64:
            return TransientFailure("No image data returned.")
        try:
            raw = base64.b64decode(b64, validate=True)
        except (binascii.Error, ValueError) as e:
            return TransientFailure(f"bad image payload: {e}")
        return ImageGenerated(ImagePayload(data=raw, mime_type="image/png"))
