"""ORM model for staff accounts (auth and RBAC)."""

from enum import Enum

from sqlalchemy import Column, Date, DateTime, Integer, String, Text, func
from sqlalchemy import Enum as SAEnum

from storefront.models.base import Base


class Role(str, Enum):
    admin = "admin"
    staff = "staff"


class User(Base):
    """
    Staff account for JWT authentication and role-based access control.

    email and username are unique; the database constraint is the authority.
    """

    __tablename__ = "users"

    account_id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(255), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=True)
    birth_date = Column(Date, nullable=True)
    gender = Column(String(16), nullable=True)
    phone = Column(String(32), nullable=True)
    address = Column(Text, nullable=True)
    role = Column(
        SAEnum(Role, name="user_role", native_enum=False, length=32),
        nullable=False,
        default=Role.staff,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
