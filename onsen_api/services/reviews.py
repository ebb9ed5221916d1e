"""口コミサービス"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..models import Review

logger = logging.getLogger(__name__)


def list_reviews(db: Session, onsen_id: int) -> List[Review]:
    """口コミ一覧（新しい順）"""
    return (
        db.query(Review)
        .filter(Review.onsen_id == onsen_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )


def create_review(db: Session, onsen_id: int, rating: int, comment: Optional[str] = None) -> Review:
    review = Review(onsen_id=onsen_id, rating=rating, comment=comment)
    db.add(review)
    db.commit()
    db.refresh(review)
    logger.info(f"Review {review.id} created for onsen {onsen_id}")
    return review
