"""Account model."""

from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from account_service.database import Base
from account_service.models.mixins import TimestampMixin


class Account(Base, TimestampMixin):
    """Balance record, exactly one per user."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False, index=True
    )
    balance = Column(Integer, nullable=False, default=0)

    user = relationship("User", back_populates="account")
