from __future__ import annotations
import logging
import math
import threading
import time
import uuid
from enum import Enum
from typing import Callable, Optional

from flavorflow.core.menu.catalog import MenuCatalog
from flavorflow.core.menu.models import Dish, Draft
from flavorflow.ports.extraction import DishExtractionPort, ExtractionError
from .image_policy import ImageResolutionPolicy, PendingImage
from .notices import Notice, NoticeKind, Outcome

log = logging.getLogger("flavorflow.studio")

PARSE_FAILED = "Failed to parse dish. Please try describing it more clearly."
NOT_CONFIGURED = "API Key is missing. Please check your .env file."


class DraftState(str, Enum):
    IDLE = "idle"
    DRAFTED = "drafted"


def _now_ms() -> int:
    return int(time.time() * 1000)


def _new_id() -> str:
    return uuid.uuid4().hex


class DraftWorkflow:
    """
    Merchant studio: description -> draft (+ image) -> published dish.

    Every action returns an Outcome; the latest notice stays on
    `self.notice` so the studio can re-render it.
    """

    def __init__(
        self,
        catalog: MenuCatalog,
        extractor: Optional[DishExtractionPort] = None,
        images: Optional[ImageResolutionPolicy] = None,
        clock: Callable[[], int] = _now_ms,
        id_factory: Callable[[], str] = _new_id,
    ):
        self.catalog = catalog
        self.extractor = extractor
        self.images = images or ImageResolutionPolicy()
        self.clock = clock
        self.id_factory = id_factory

        self.state = DraftState.IDLE
        self.draft: Optional[Draft] = None
        self.pending_image: Optional[PendingImage] = None
        self.notice: Optional[Notice] = None
        # loading sub-states; only the matching action is refused while set
        self.extracting = False
        self.generating = False
        # bumped whenever the draft is replaced, so late image results can be dropped
        self._draft_seq = 0
        self._lock = threading.RLock()

    # -------- helpers --------

    def _finish(self, outcome: Outcome) -> Outcome:
        self.notice = outcome.notice
        return outcome

    def _require_draft(self) -> Optional[Outcome]:
        if self.state is not DraftState.DRAFTED or self.draft is None:
            return self._finish(Outcome.refused(NoticeKind.STATE, "No draft to work on. Describe a dish first."))
        return None

    def _reset(self) -> None:
        self._draft_seq += 1
        self.state = DraftState.IDLE
        self.draft = None
        self.pending_image = None

    # -------- transitions --------
    # State changes happen under self._lock; capability calls run outside it.

    def submit(self, text: str) -> Outcome:
        with self._lock:
            if self.extracting:
                return Outcome.refused(NoticeKind.BUSY, "Still reading the previous description.")
            if self.state is DraftState.DRAFTED:
                return self._finish(Outcome.refused(NoticeKind.STATE, "Publish or discard the current draft first."))
            text = (text or "").strip()
            if not text:
                return self._finish(Outcome.refused(NoticeKind.USER, "Describe the dish first."))
            if self.extractor is None or not self.extractor.available:
                return self._finish(Outcome.refused(NoticeKind.CONFIG, NOT_CONFIGURED))
            self.extracting = True
            self.notice = None

        draft: Optional[Draft] = None
        try:
            draft = self.extractor.extract(text)
        except ExtractionError as e:
            log.info("extraction failed: %s", e)
        finally:
            with self._lock:
                self.extracting = False

        with self._lock:
            if draft is None:
                return self._finish(Outcome.refused(NoticeKind.USER, PARSE_FAILED))
            self._draft_seq += 1
            self.draft = draft
            self.pending_image = self.images.initial(draft.title)
            self.state = DraftState.DRAFTED
            log.info("draft ready: %s (%s)", draft.title, draft.category)
            return self._finish(Outcome.done())

    def discard(self) -> Outcome:
        with self._lock:
            self._reset()
            return self._finish(Outcome.done())

    def request_ai_image(self) -> Outcome:
        with self._lock:
            refused = self._require_draft()
            if refused:
                return refused
            if self.generating:
                return Outcome.refused(NoticeKind.BUSY, "An image is already being generated.")
            self.generating = True
            self.notice = None
            seq = self._draft_seq
            title, current = self.draft.title, self.pending_image

        try:
            res = self.images.request_ai(title, current)
        finally:
            with self._lock:
                self.generating = False

        with self._lock:
            # discarded or replaced while the image was generating: the result belongs to the old draft
            if self._draft_seq != seq or self.state is not DraftState.DRAFTED:
                log.info("dropping AI image for %r, draft changed", title)
                return self._finish(Outcome.refused(NoticeKind.STATE, "The draft changed while the image was generating."))
            self.pending_image = res.image
            if res.notice and res.notice.blocking:
                return self._finish(Outcome(False, res.notice))
            return self._finish(Outcome.done(res.notice))

    def use_keyword_fallback(self) -> Outcome:
        with self._lock:
            refused = self._require_draft()
            if refused:
                return refused
            self.pending_image = self.images.keyword(self.draft.title)
            return self._finish(Outcome.done())

    def upload_custom(self, data: bytes, mime_type: str) -> Outcome:
        with self._lock:
            refused = self._require_draft()
            if refused:
                return refused
            if not data:
                return self._finish(Outcome.refused(NoticeKind.USER, "The uploaded file is empty."))
            self.pending_image = self.images.upload(data, mime_type)
            return self._finish(Outcome.done())

    def publish(self) -> Outcome:
        with self._lock:
            refused = self._require_draft()
            if refused:
                return refused
            if self.pending_image is None:
                return self._finish(Outcome.refused(NoticeKind.STATE, "Pick an image before publishing."))
            d = self.draft
            if not d.title.strip():
                return self._finish(Outcome.refused(NoticeKind.USER, "The dish needs a title."))
            if not math.isfinite(d.price) or d.price < 0:
                return self._finish(Outcome.refused(NoticeKind.USER, "Price must be a non-negative amount."))

            dish = Dish(
                id=self.id_factory(),
                title=d.title,
                description=d.description,
                price=d.price,
                image_url=self.pending_image.uri,
                is_veg=d.is_veg,
                category=d.category,
                created_at=self.clock(),
            )
            self.catalog.add(dish)
            self._reset()
            return self._finish(Outcome.done(dish=dish))
