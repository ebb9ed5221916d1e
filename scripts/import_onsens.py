#!/usr/bin/env python3
"""温泉CSVをDBにインポート

列: name, description, tags, latitude, longitude
（latitude/longitudeの代わりに geo_lat/geo_lng も可）
"""

import argparse
import csv
import logging
import sys
from pathlib import Path
from typing import Optional

# プロジェクトルートをパスに追加
sys.path.insert(0, str(Path(__file__).parent.parent))

from onsen_api.database import SessionLocal, init_db
from onsen_api.models import Onsen
from onsen_api.services.criteria import safe_float

logger = logging.getLogger(__name__)


def _text(v) -> Optional[str]:
    if v is None:
        return None
    s = v.strip()
    return s or None


def parse_row(row: dict) -> Optional[dict]:
    """CSVの1行をOnsenの属性にする。名称がなければNone

    座標は片方でも欠損・範囲外なら両方None（位置検索の対象外になる）。
    """
    name = _text(row.get("name"))
    if not name:
        return None

    lat = safe_float(row.get("latitude", row.get("geo_lat")))
    lng = safe_float(row.get("longitude", row.get("geo_lng")))
    if lat is None or lng is None or not (-90.0 <= lat <= 90.0) or not (-180.0 <= lng <= 180.0):
        if lat is not None or lng is not None:
            logger.warning(f"{name}: invalid coordinates lat={lat} lng={lng}, stored without location")
        lat = lng = None

    return {
        "name": name,
        "description": _text(row.get("description")),
        "tags": _text(row.get("tags")),
        "latitude": lat,
        "longitude": lng,
    }


def import_onsen_file(session, path: Path, replace: bool = False) -> int:
    """CSVを読み込んで温泉を登録。登録件数を返す"""
    if replace:
        for onsen in session.query(Onsen).all():
            session.delete(onsen)

    count = 0
    with open(path, encoding="utf-8-sig", newline="") as f:
        for lineno, row in enumerate(csv.DictReader(f), start=2):
            attrs = parse_row(row)
            if attrs is None:
                logger.warning(f"{path.name}:{lineno}: name is empty, skipped")
                continue
            session.add(Onsen(**attrs))
            count += 1

    session.commit()
    return count


def main(argv=None):
    parser = argparse.ArgumentParser(description="温泉CSVをDBにインポート")
    parser.add_argument("csv_path", type=Path)
    parser.add_argument("--replace", action="store_true", help="既存の温泉を削除してから登録")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    print("🗄️  テーブル作成...")
    init_db()

    session = SessionLocal()
    try:
        print(f"♨️  {args.csv_path.name}...")
        n = import_onsen_file(session, args.csv_path, replace=args.replace)
        print(f"   ✅ {n:,}件")
        print("\n🎉 インポート完了!")
    finally:
        session.close()


if __name__ == "__main__":
    main()
