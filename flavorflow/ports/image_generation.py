from __future__ import annotations
import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

@dataclass(frozen=True)
class ImagePayload:
    data: bytes
    mime_type: str = "image/png"

    def data_uri(self) -> str:
        return to_data_uri(self.data, self.mime_type)

def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"

# Result variants, decided once by the adapter
@dataclass(frozen=True)
class ImageGenerated:
    payload: ImagePayload

@dataclass(frozen=True)
class QuotaExceeded:
    message: str = "quota exhausted"

@dataclass(frozen=True)
class TransientFailure:
    message: str

GenerationResult = Union[ImageGenerated, QuotaExceeded, TransientFailure]

class ImageGenerationPort(ABC):
    @property
    def available(self) -> bool:
        return True

    @abstractmethod
    def generate(self, descriptor: str) -> GenerationResult:
        """Generate a product photo for the dish title. Never raises."""
        pass
