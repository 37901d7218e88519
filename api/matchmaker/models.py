from sqlalchemy import CheckConstraint, Column, DateTime, Enum, Float, ForeignKey, Index, Integer, String, UniqueConstraint, func

from .database import Base

GENDERS = ("male", "female", "other")


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=True)
    gender = Column(Enum(*GENDERS, name="user_gender"), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    diet_type = Column(String(50), nullable=True)
    age = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("latitude BETWEEN -90 AND 90", name="ck_users_latitude"),
        CheckConstraint("longitude BETWEEN -180 AND 180", name="ck_users_longitude"),
        CheckConstraint("age > 0", name="ck_users_age"),
    )


class Like(Base):
    __tablename__ = "likes"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    liked_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("user_id", "liked_user_id", name="uq_likes_direction"),
        CheckConstraint("user_id <> liked_user_id", name="ck_likes_not_self"),
        Index("idx_likes_liked_user_id", "liked_user_id"),
    )


class Match(Base):
    __tablename__ = "matches"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    matched_user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # canonical unordered pair: user_low = min(a, b), user_high = max(a, b)
    user_low = Column(Integer, nullable=False)
    user_high = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("user_low", "user_high", name="uq_matches_pair"),
        CheckConstraint("user_low < user_high", name="ck_matches_pair_order"),
        Index("idx_matches_user_id", "user_id"),
        Index("idx_matches_matched_user_id", "matched_user_id"),
    )
