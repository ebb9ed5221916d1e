"""SQLAlchemy モデル定義"""
from datetime import datetime
from sqlalchemy import (
    Column, Text, Integer, SmallInteger, Float, DateTime, ForeignKey, Index,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from .database import Base


class Onsen(Base):
    """温泉"""
    __tablename__ = "onsens"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    tags = Column(Text)          # カンマ区切り "露天風呂,家族風呂"
    latitude = Column(Float)
    longitude = Column(Float)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    reviews = relationship(
        "Review",
        back_populates="onsen",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("idx_onsens_latlng", "latitude", "longitude"),
    )


class Review(Base):
    """口コミ"""
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    onsen_id = Column(Integer, ForeignKey("onsens.id", ondelete="CASCADE"), nullable=False, index=True)
    rating = Column(SmallInteger, nullable=False)  # 1-5
    comment = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    onsen = relationship("Onsen", back_populates="reviews")

    __table_args__ = (
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_reviews_rating"),
    )
