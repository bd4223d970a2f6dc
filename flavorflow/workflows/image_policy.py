from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from flavorflow.adapters.keyword_images import keyword_image_url
from flavorflow.ports.image_generation import (
    ImageGenerated, ImageGenerationPort, QuotaExceeded, to_data_uri,
)
from .notices import Notice, NoticeKind

log = logging.getLogger("flavorflow.images")

QUOTA_MESSAGE = ("AI Generation is currently restricted in your region/plan. "
                 "Switched to professional search fallback.")
FAILED_MESSAGE = "AI Generation failed. Try Unsplash or Upload instead."


class ImageSource(str, Enum):
    AI = "ai"
    KEYWORD = "keyword"
    UPLOAD = "upload"


@dataclass(frozen=True)
class PendingImage:
    source: ImageSource
    uri: str


@dataclass(frozen=True)
class Resolution:
    image: Optional[PendingImage]
    notice: Optional[Notice] = None


class ImageResolutionPolicy:
    """Which image backs the draft, and how a failed AI call falls back."""

    def __init__(
        self,
        generator: Optional[ImageGenerationPort] = None,
        fallback: Callable[[str], str] = keyword_image_url,
    ):
        self.generator = generator
        self.fallback = fallback

    @property
    def ai_available(self) -> bool:
        return self.generator is not None and self.generator.available

    def keyword(self, title: str) -> PendingImage:
        return PendingImage(ImageSource.KEYWORD, self.fallback(title))

    # a fresh draft always starts with a publishable default
    initial = keyword

    def request_ai(self, title: str, current: Optional[PendingImage]) -> Resolution:
        if not self.ai_available:
            return Resolution(current, Notice(NoticeKind.CONFIG, "Image generation is not configured."))
        result = self.generator.generate(title)
        if isinstance(result, ImageGenerated):
            return Resolution(PendingImage(ImageSource.AI, result.payload.data_uri()))
        if isinstance(result, QuotaExceeded):
            log.info("quota hit for %r, using keyword image", title)
            return Resolution(self.keyword(title), Notice(NoticeKind.QUOTA, QUOTA_MESSAGE))
        log.warning("AI image for %r failed: %s", title, result.message)
        return Resolution(current, Notice(NoticeKind.API, FAILED_MESSAGE))

    def upload(self, data: bytes, mime_type: str) -> PendingImage:
        return PendingImage(ImageSource.UPLOAD, to_data_uri(data, mime_type or "application/octet-stream"))
