from typing import Dict, Optional
from flavorflow.ports.blob_store import BlobStorePort

class MemoryBlobStore(BlobStorePort):
    """Session-only store; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        self.data[key] = value
