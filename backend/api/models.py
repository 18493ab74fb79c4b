"""
SQLAlchemy models for recorded game scores.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.orm import Session

from .database import Base


class GameScore(Base):
    __tablename__ = "game_scores"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    game_name = Column(String(64), nullable=False)  # engine game_id, e.g. "snake"
    score = Column(Integer, nullable=False)
    stars = Column(Integer, nullable=False, default=0)
    completed_at = Column(DateTime, default=datetime.utcnow)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "game_name": self.game_name,
            "score": self.score,
            "stars": self.stars,
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
        }


def create_score(db: Session, user_id: int, game_name: str, score: int, stars: int) -> GameScore:
    """Insert one score record and return it. Records are never updated afterwards."""
    row = GameScore(user_id=user_id, game_name=game_name, score=score, stars=stars)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def list_scores(db: Session, user_id: int) -> list[GameScore]:
    return (
        db.query(GameScore)
        .filter(GameScore.user_id == user_id)
        .order_by(GameScore.completed_at, GameScore.id)
        .all()
    )


def delete_scores(db: Session, user_id: int) -> int:
    """Delete every score of a user. Returns the number of rows removed."""
    count = db.query(GameScore).filter(GameScore.user_id == user_id).delete()
    db.commit()
    return count
