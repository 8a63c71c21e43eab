"""ORM model for application users."""

from sqlalchemy import Column, DateTime, Integer, String, func

from remix.models.base import Base


class User(Base):
    """
    User account for JWT authentication.

    Only the bcrypt hash of the password is stored; tokens never carry it.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(30), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
