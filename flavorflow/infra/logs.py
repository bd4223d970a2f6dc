import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import text

from .db import engine, init_db

# ---------- DB logging handler ----------

class DBHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        # the INSERT below would log itself again
        if record.name.startswith("sqlalchemy"):
            return
        msg = self.format(record)
        lvl = record.levelname
        try:
            with engine.begin() as conn:
                conn.execute(
                    text("INSERT INTO logs (level, msg) VALUES (:lvl, :msg)"),
                    {"lvl": lvl, "msg": msg},
                )
        except Exception:
            # drop the record if the db hiccups
            pass


def setup_logging(level: int = logging.INFO) -> None:
    init_db()
    root = logging.getLogger()
    root.setLevel(level)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        sh = logging.StreamHandler()
        sh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        root.addHandler(sh)
    if not any(isinstance(h, DBHandler) for h in root.handlers):
        dbh = DBHandler()
        dbh.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        root.addHandler(dbh)

# ---------- Queries for the studio ----------

def recent_logs(
    limit: int = 100,
    level: Optional[str] = None,
    q: Optional[str] = None,
) -> List[Dict[str, Any]]:
    sql = "SELECT ts, level, msg FROM logs"
    conds: List[str] = []
    params: Dict[str, Any] = {}
    if level in ("INFO", "WARNING", "ERROR"):
        conds.append("level = :lvl")
        params["lvl"] = level
    if q:
        conds.append("msg LIKE :q")
        params["q"] = f"%{q}%"
    if conds:
        sql += " WHERE " + " AND ".join(conds)
    sql += f" ORDER BY id DESC LIMIT {int(limit)}"
    with engine.connect() as conn:
        rows = conn.execute(text(sql), params).mappings().all()
    return [dict(r) for r in rows]
