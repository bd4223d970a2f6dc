from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from flavorflow.app.schemas import DescribeIn, dish_out, studio_out
from flavorflow.app.state import Storefront, get_storefront
from flavorflow.infra.logs import recent_logs
from flavorflow.workflows.notices import NoticeKind, Outcome
from flavorflow.workflows.share import share_link, share_text

router = APIRouter(prefix="/studio", tags=["studio"])

_STATUS = {
    NoticeKind.CONFIG: 503,
    NoticeKind.BUSY: 409,
    NoticeKind.STATE: 409,
}


def _respond(sf: Storefront, outcome: Outcome) -> dict:
    if not outcome.ok and outcome.notice is not None:
        raise HTTPException(status_code=_STATUS.get(outcome.notice.kind, 400),
                            detail=outcome.notice.as_dict())
    body = studio_out(sf.studio)
    if outcome.notice is not None:
        body["notice"] = outcome.notice.as_dict()
    if outcome.dish is not None:
        body["dish"] = dish_out(outcome.dish)
    return body


# -------- draft workflow --------

@router.post("/describe", summary="Free text -> draft")
def describe(payload: DescribeIn, sf: Storefront = Depends(get_storefront)):
    return _respond(sf, sf.studio.submit(payload.text))


@router.get("/draft")
def get_draft(sf: Storefront = Depends(get_storefront)):
    return studio_out(sf.studio)


@router.post("/image/ai")
def image_ai(sf: Storefront = Depends(get_storefront)):
    return _respond(sf, sf.studio.request_ai_image())


@router.post("/image/fallback")
def image_fallback(sf: Storefront = Depends(get_storefront)):
    return _respond(sf, sf.studio.use_keyword_fallback())


@router.post("/image/upload")
async def image_upload(file: UploadFile = File(...), sf: Storefront = Depends(get_storefront)):
    data = await file.read()
    return _respond(sf, sf.studio.upload_custom(data, file.content_type or "image/jpeg"))


@router.post("/publish")
def publish(sf: Storefront = Depends(get_storefront)):
    return _respond(sf, sf.studio.publish())


@router.post("/discard")
def discard(sf: Storefront = Depends(get_storefront)):
    return _respond(sf, sf.studio.discard())


# -------- published dishes --------

@router.get("/dishes")
def list_dishes(sf: Storefront = Depends(get_storefront)):
    return {"items": [dish_out(d) for d in sf.catalog.list()], "degraded": sf.catalog.degraded}


@router.delete("/dishes/{dish_id}")
def delete_dish(dish_id: str, sf: Storefront = Depends(get_storefront)):
    removed = sf.catalog.remove(dish_id)
    return {"ok": True, "removed": removed}


@router.get("/dishes/{dish_id}/share")
def share_dish(dish_id: str, base_url: Optional[str] = None, sf: Storefront = Depends(get_storefront)):
    dish = sf.catalog.get(dish_id)
    if dish is None:
        raise HTTPException(status_code=404, detail=f"unknown dish: {dish_id}")
    return {"text": share_text(dish, base_url), "link": share_link(dish, base_url)}


@router.get("/logs")
def studio_logs(limit: int = 100, level: Optional[str] = None, q: Optional[str] = None):
    return {"items": recent_logs(limit, level=level, q=q)}
