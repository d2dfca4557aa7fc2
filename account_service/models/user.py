"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from account_service.database import Base
from account_service.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and profile data."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)

    account = relationship("Account", back_populates="user", uselist=False)
