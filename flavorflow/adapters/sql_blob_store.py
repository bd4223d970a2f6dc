from __future__ import annotations
from typing import Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from flavorflow.infra.db import engine as default_engine, init_db
from flavorflow.ports.blob_store import BlobStorePort, StorageError

class SqlBlobStore(BlobStorePort):
    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine or default_engine

    def ensure_table(self) -> None:
        try:
            init_db(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"cannot create blobs table: {e}") from e

    def load(self, key: str) -> Optional[str]:
        try:
            with self.engine.connect() as conn:
                row = conn.execute(
                    text("SELECT value FROM blobs WHERE key = :k"), {"k": key}
                ).first()
        except SQLAlchemyError as e:
            raise StorageError(f"load {key!r} failed: {e}") from e
        return row[0] if row else None

    def save(self, key: str, value: str) -> None:
        try:
            with self.engine.begin() as conn:
                # ON CONFLICT works on both sqlite (>= 3.24) and Postgres
                conn.execute(
                    text("""
                    INSERT INTO blobs (key, value, updated_at)
                    VALUES (:k, :v, CURRENT_TIMESTAMP)
                    ON CONFLICT (key) DO UPDATE
                       SET value = excluded.value, updated_at = CURRENT_TIMESTAMP
                    """),
                    {"k": key, "v": value},
                )
        except SQLAlchemyError as e:
            raise StorageError(f"save {key!r} failed: {e}") from e
