"""Pydantic スキーマ定義"""
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, Field


# === リクエスト ===

class ReviewIn(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)


# === レスポンス ===

class ReviewOut(BaseModel):
    id: int
    rating: int
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
    class Config:
        from_attributes = True


class OnsenListOut(BaseModel):
    """一覧用（軽量）"""
    id: int
    name: str
    tags: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    distance_km: Optional[float] = None  # 位置検索時のみ
    class Config:
        from_attributes = True


class OnsenDetailOut(BaseModel):
    """詳細用"""
    id: int
    name: str
    description: Optional[str] = None
    tags: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    reviews: List[ReviewOut] = []
    class Config:
        from_attributes = True


class OnsenListResponse(BaseModel):
    data: List[OnsenListOut]
    total: int
