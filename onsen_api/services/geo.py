"""位置計算ユーティリティ — DB非依存のhaversine実装"""
import math
from typing import NamedTuple

from ..config import EARTH_RADIUS_KM, KM_PER_DEGREE, MIN_COS_LAT


class BoundingBox(NamedTuple):
    """緯度経度の矩形（粗いフィルタ用、検索1回ごとに使い捨て）"""
    lat_min: float
    lat_max: float
    lng_min: float
    lng_max: float

    def contains(self, lat: float, lng: float) -> bool:
        return (
            self.lat_min <= lat <= self.lat_max
            and self.lng_min <= lng <= self.lng_max
        )


def distance_km(
    lat1: float,
    lng1: float,
    lat2: float,
    lng2: float,
    earth_radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """2点間の距離をkmで返す（haversine公式）"""
    lat1, lng1, lat2, lng2 = map(math.radians, [lat1, lng1, lat2, lng2])
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    a = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    a = min(max(a, 0.0), 1.0)  # 丸め誤差で[0,1]を外れるとsqrt(1-a)が失敗する
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return earth_radius_km * c


def bounding_box(
    lat: float,
    lng: float,
    radius_km: float,
    km_per_degree: float = KM_PER_DEGREE,
    min_cos_lat: float = MIN_COS_LAT,
    earth_radius_km: float = EARTH_RADIUS_KM,
) -> BoundingBox:
    """半径radius_kmの円を必ず内包する矩形を返す

    幅は「1度≈km_per_degree km」の近似と球面上の厳密な広がりの大きい方を使う。
    小半径では近似の方が広く、大半径では厳密値の方が広い。

    極付近（cos(lat) < min_cos_lat）、極を含む円、日付変更線をまたぐ円では
    経度を制約しない（-180〜180）。矩形は常に2つの範囲条件で表せる。
    """
    angle = radius_km / earth_radius_km  # 中心角（ラジアン）
    dlat = max(radius_km / km_per_degree, math.degrees(angle))
    lat_min = max(lat - dlat, -90.0)
    lat_max = min(lat + dlat, 90.0)

    cos_lat = math.cos(math.radians(lat))
    if cos_lat < min_cos_lat or lat_min <= -90.0 or lat_max >= 90.0:
        return BoundingBox(lat_min, lat_max, -180.0, 180.0)

    ratio = math.sin(angle) / cos_lat
    if ratio >= 1.0:
        return BoundingBox(lat_min, lat_max, -180.0, 180.0)

    dlng = max(radius_km / (km_per_degree * cos_lat), math.degrees(math.asin(ratio)))
    lng_min = lng - dlng
    lng_max = lng + dlng
    if lng_min < -180.0 or lng_max > 180.0:
        return BoundingBox(lat_min, lat_max, -180.0, 180.0)

    return BoundingBox(lat_min, lat_max, lng_min, lng_max)
