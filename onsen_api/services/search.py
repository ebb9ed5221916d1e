"""検索サービス — フリーワード→タグ→バウンディングボックス→haversine精密計算"""
import logging
from typing import Iterable, List, Optional

from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..models import Onsen
from .criteria import DEFAULT_CONFIG, SearchConfig, SearchCriteria, clamp_radius
from .geo import bounding_box, distance_km
from .matching import matches_text, matches_tags

logger = logging.getLogger(__name__)


class CatalogEntry(BaseModel):
    """検索対象の1件（DBを使わない場合の入力）

    検索は属性名だけを参照するので、Onsenモデルの行もそのまま渡せる。
    """
    id: int
    name: str
    description: Optional[str] = None
    tags: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    class Config:
        frozen = True
        from_attributes = True


def _has_coords(entry) -> bool:
    return entry.latitude is not None and entry.longitude is not None


def search_onsens(
    entries: Iterable,
    criteria: SearchCriteria,
    config: SearchConfig = DEFAULT_CONFIG,
) -> List:
    """条件に一致する要素を入力順のまま返す。並べ替え・追加は行わない"""
    results = list(entries)
    logger.debug(f"search: {len(results)} candidates")

    if criteria.text_query:
        results = [e for e in results if matches_text(e, criteria.text_query)]
        logger.debug(f"search: {len(results)} after text {criteria.text_query!r}")

    if criteria.tag_filter:
        results = [e for e in results if matches_tags(e, criteria.tag_filter)]
        logger.debug(f"search: {len(results)} after tags {criteria.tag_filter!r}")

    if criteria.has_location:
        lat, lng = criteria.center
        radius_km = clamp_radius(criteria.radius_km, config)

        # 矩形で粗く絞ってから精密距離で確定
        bbox = bounding_box(
            lat, lng, radius_km,
            km_per_degree=config.km_per_degree,
            min_cos_lat=config.min_cos_lat,
            earth_radius_km=config.earth_radius_km,
        )
        results = [
            e for e in results
            if _has_coords(e) and bbox.contains(e.latitude, e.longitude)
        ]
        logger.debug(f"search: {len(results)} inside {bbox}")

        results = [
            e for e in results
            if distance_km(lat, lng, e.latitude, e.longitude, config.earth_radius_km) <= radius_km
        ]
        logger.debug(f"search: {len(results)} within {radius_km}km")

    return results


def search_onsens_db(
    db: Session,
    criteria: SearchCriteria,
    config: SearchConfig = DEFAULT_CONFIG,
) -> List[Onsen]:
    """DB版の検索 — バウンディングボックスを範囲条件としてSQLに渡す"""
    query = db.query(Onsen)

    if criteria.has_location:
        lat, lng = criteria.center
        bbox = bounding_box(
            lat, lng, clamp_radius(criteria.radius_km, config),
            km_per_degree=config.km_per_degree,
            min_cos_lat=config.min_cos_lat,
            earth_radius_km=config.earth_radius_km,
        )
        query = query.filter(
            Onsen.latitude.isnot(None),
            Onsen.longitude.isnot(None),
            Onsen.latitude >= bbox.lat_min,
            Onsen.latitude <= bbox.lat_max,
            Onsen.longitude >= bbox.lng_min,
            Onsen.longitude <= bbox.lng_max,
        )

    candidates = query.order_by(Onsen.id).all()
    return search_onsens(candidates, criteria, config)


def get_onsen_detail(db: Session, onsen_id: int) -> Optional[Onsen]:
    """温泉詳細"""
    return db.query(Onsen).filter(Onsen.id == onsen_id).first()
