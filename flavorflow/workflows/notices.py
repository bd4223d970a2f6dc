from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from flavorflow.core.menu.models import Dish

class NoticeKind(str, Enum):
    CONFIG = "config"    # capability missing, fix outside the app
    USER = "user"        # input could not be understood
    QUOTA = "quota"      # rate limited, already recovered via fallback
    API = "api"          # other capability failure
    STATE = "state"      # action not valid in the current workflow state
    BUSY = "busy"        # same action still in flight

@dataclass(frozen=True)
class Notice:
    kind: NoticeKind
    message: str

    @property
    def blocking(self) -> bool:
        return self.kind is not NoticeKind.QUOTA

    def as_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message, "blocking": self.blocking}

@dataclass(frozen=True)
class Outcome:
    ok: bool
    notice: Optional[Notice] = None
    dish: Optional[Dish] = None

    @classmethod
    def done(cls, notice: Optional[Notice] = None, dish: Optional[Dish] = None) -> "Outcome":
        return cls(True, notice, dish)

    @classmethod
    def refused(cls, kind: NoticeKind, message: str) -> "Outcome":
        return cls(False, Notice(kind, message))
