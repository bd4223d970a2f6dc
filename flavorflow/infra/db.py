from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

from flavorflow.infra.settings import settings


def _make_engine(url: str) -> Engine:
    u = make_url(url)
    if u.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True, future=True)
    if u.database and u.database != ":memory:":
        Path(u.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(url, future=True)
    # in-memory sqlite: one shared connection, otherwise every checkout sees an empty db
    return create_engine(
        url,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )


engine = _make_engine(settings.DATABASE_URL)

def init_db(eng: Optional[Engine] = None) -> None:
    """Create tables when they do not exist yet."""
    eng = eng or engine
    # sqlite autoincrements INTEGER PRIMARY KEY, Postgres needs BIGSERIAL
    id_col = "BIGSERIAL PRIMARY KEY" if eng.dialect.name == "postgresql" else "INTEGER PRIMARY KEY"
    with eng.begin() as conn:
        conn.exec_driver_sql(f"""
        CREATE TABLE IF NOT EXISTS logs (
          id      {id_col},
          ts      TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
          level   VARCHAR(10) NOT NULL,
          msg     TEXT NOT NULL
        );
        """)

        # Key/value blobs (the catalog lives under one key)
        conn.exec_driver_sql("""
        CREATE TABLE IF NOT EXISTS blobs (
          key         VARCHAR(200) PRIMARY KEY,
          value       TEXT NOT NULL,
          updated_at  TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
        """)
