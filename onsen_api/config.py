"""アプリケーション設定"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).parent.parent

DATABASE_URL = os.getenv(
    "DATABASE_URL",
    f"sqlite:///{BASE_DIR / 'data' / 'onsen.db'}"
)

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# 位置検索
EARTH_RADIUS_KM = float(os.getenv("EARTH_RADIUS_KM", "6371.0"))
KM_PER_DEGREE = float(os.getenv("KM_PER_DEGREE", "111.0"))  # 緯度1度≈111km
RADIUS_MIN_KM = float(os.getenv("RADIUS_MIN_KM", "1"))
RADIUS_MAX_KM = float(os.getenv("RADIUS_MAX_KM", "50"))
MIN_COS_LAT = float(os.getenv("MIN_COS_LAT", "0.1"))  # これ未満は経度制約なし（約84.3度以上）
