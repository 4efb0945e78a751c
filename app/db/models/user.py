# app/db/models/user.py
from __future__ import annotations

"""
👤 MovieReview — User (accounts & auth)
======================================

Account entity holding the login identity and the bcrypt password hash.

Notes
-----
• `username` is unique and is the login handle.
• `hashed_password` never leaves the persistence/auth layers.
• `reviews` is a back-reference only; review lifecycle is owned by the
  review service, not by the user.
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import CheckConstraint, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base_class import Base, PKMixin, TimestampMixin

if TYPE_CHECKING:  # pragma: no cover
    from app.db.models.review import Review


class User(PKMixin, TimestampMixin, Base):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True, index=True)
    email: Mapped[str] = mapped_column(String(256), nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False, doc="bcrypt hash")

    __mapper_args__ = {"eager_defaults": True}

    __table_args__ = (
        CheckConstraint("length(trim(username)) > 0", name="username_not_blank"),
        CheckConstraint("length(trim(email)) > 0", name="email_not_blank"),
    )

    # Never loaded implicitly; query reviews through the review repository.
    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="user",
        lazy="raise",
        passive_deletes=True,
    )
