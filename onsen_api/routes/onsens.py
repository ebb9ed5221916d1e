"""温泉エンドポイント"""
from typing import Optional
from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas import (
    OnsenListOut, OnsenDetailOut, OnsenListResponse, ReviewIn, ReviewOut,
)
from ..services.criteria import normalize
from ..services.geo import distance_km
from ..services.reviews import list_reviews, create_review
from ..services.search import search_onsens_db, get_onsen_detail

router = APIRouter(prefix="/api/v1", tags=["onsens"])


def _onsen_to_list(onsen, distance=None) -> OnsenListOut:
    return OnsenListOut(
        id=onsen.id,
        name=onsen.name,
        tags=onsen.tags,
        latitude=onsen.latitude,
        longitude=onsen.longitude,
        distance_km=distance,
    )


# lat/lng/radius_kmは文字列で受ける。不正値は422にせずnormalizeで位置フィルタ無効として扱う
@router.get("/onsens", response_model=OnsenListResponse)
def list_onsens(
    q: Optional[str] = Query(None, description="フリーワード（名称・説明）"),
    tags: Optional[str] = Query(None, description="タグ（カンマ区切り、いずれか一致）"),
    lat: Optional[str] = Query(None, description="緯度"),
    lng: Optional[str] = Query(None, description="経度"),
    radius_km: Optional[str] = Query(None, description="半径 (km, 1〜50に丸める)"),
    db: Session = Depends(get_db),
):
    criteria = normalize({"q": q, "tags": tags, "lat": lat, "lng": lng, "radius_km": radius_km})
    onsens = search_onsens_db(db, criteria)

    if criteria.has_location:
        c_lat, c_lng = criteria.center
        data = [
            _onsen_to_list(o, round(distance_km(c_lat, c_lng, o.latitude, o.longitude), 2))
            for o in onsens
        ]
    else:
        data = [_onsen_to_list(o) for o in onsens]

    return OnsenListResponse(data=data, total=len(data))


@router.get("/onsens/{onsen_id}", response_model=OnsenDetailOut)
def onsen_detail(onsen_id: int, db: Session = Depends(get_db)):
    onsen = get_onsen_detail(db, onsen_id)
    if not onsen:
        raise HTTPException(status_code=404, detail="温泉が見つかりません")

    return OnsenDetailOut(
        id=onsen.id,
        name=onsen.name,
        description=onsen.description,
        tags=onsen.tags,
        latitude=onsen.latitude,
        longitude=onsen.longitude,
        reviews=[ReviewOut.model_validate(r) for r in list_reviews(db, onsen.id)],
    )


@router.post("/onsens/{onsen_id}/reviews", response_model=ReviewOut, status_code=201)
def post_review(onsen_id: int, body: ReviewIn, db: Session = Depends(get_db)):
    if not get_onsen_detail(db, onsen_id):
        raise HTTPException(status_code=404, detail="温泉が見つかりません")
    return create_review(db, onsen_id, rating=body.rating, comment=body.comment)


@router.get("/health")
def health():
    return {"status": "ok"}
