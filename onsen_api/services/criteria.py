"""検索条件の正規化

HTTPクエリ等の型なしパラメータを一度だけ検証し、SearchCriteriaに変換する。
検索本体は生のdictを参照しない。
"""
import logging
import math
from typing import Any, Mapping, Optional, Tuple

from pydantic import BaseModel

from ..config import (
    EARTH_RADIUS_KM, KM_PER_DEGREE, MIN_COS_LAT, RADIUS_MIN_KM, RADIUS_MAX_KM,
)

logger = logging.getLogger(__name__)


class SearchConfig(BaseModel):
    """位置検索の定数（テストで差し替え可能）"""
    earth_radius_km: float = EARTH_RADIUS_KM
    km_per_degree: float = KM_PER_DEGREE
    radius_min_km: float = RADIUS_MIN_KM
    radius_max_km: float = RADIUS_MAX_KM
    min_cos_lat: float = MIN_COS_LAT

    class Config:
        frozen = True


DEFAULT_CONFIG = SearchConfig()


class SearchCriteria(BaseModel):
    text_query: Optional[str] = None
    tag_filter: Optional[str] = None
    center: Optional[Tuple[float, float]] = None  # (lat, lng)
    radius_km: Optional[float] = None

    class Config:
        frozen = True

    @property
    def has_location(self) -> bool:
        return self.center is not None and self.radius_km is not None


def _clean(v: Any) -> Optional[str]:
    """前後の空白を除去。空文字やNoneはNone"""
    if v is None:
        return None
    s = str(v).strip()
    return s or None


def safe_float(v: Any) -> Optional[float]:
    """数値に変換できなければNone（NaN・無限大も不正扱い）"""
    s = _clean(v)
    if s is None:
        return None
    try:
        f = float(s)
    except ValueError:
        return None
    return f if math.isfinite(f) else None


def clamp_radius(radius_km: float, config: SearchConfig = DEFAULT_CONFIG) -> float:
    return float(min(max(radius_km, config.radius_min_km), config.radius_max_km))


def _parse_location(
    raw_params: Mapping[str, Any], config: SearchConfig
) -> Tuple[Optional[Tuple[float, float]], Optional[float]]:
    raw_lat = _clean(raw_params.get("lat"))
    raw_lng = _clean(raw_params.get("lng"))
    raw_radius = _clean(raw_params.get("radius_km"))

    # 3つ揃わなければ位置検索しない（エラーではない）
    if raw_lat is None or raw_lng is None or raw_radius is None:
        return None, None

    lat = safe_float(raw_lat)
    lng = safe_float(raw_lng)
    radius = safe_float(raw_radius)
    if lat is None or lng is None or radius is None:
        logger.warning(
            f"Location filter disabled: unparsable lat={raw_lat!r} lng={raw_lng!r} radius_km={raw_radius!r}"
        )
        return None, None
    if not (-90.0 <= lat <= 90.0) or not (-180.0 <= lng <= 180.0):
        logger.warning(f"Location filter disabled: out of range lat={lat} lng={lng}")
        return None, None

    return (lat, lng), clamp_radius(radius, config)


def normalize(
    raw_params: Mapping[str, Any], config: SearchConfig = DEFAULT_CONFIG
) -> SearchCriteria:
    """生パラメータ（q, tags, lat, lng, radius_km）をSearchCriteriaに変換

    例外は投げない。数値が解釈できない場合は位置フィルタを無効にし、
    半径は[radius_min_km, radius_max_km]に丸める。
    """
    center, radius_km = _parse_location(raw_params, config)
    return SearchCriteria(
        text_query=_clean(raw_params.get("q")),
        tag_filter=_clean(raw_params.get("tags")),
        center=center,
        radius_km=radius_km,
    )
