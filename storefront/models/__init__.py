"""SQLAlchemy ORM models and Core tables."""

from storefront.models import commerce
from storefront.models.base import Base
from storefront.models.refresh_token import RefreshToken
from storefront.models.user import Role, User

__all__ = ["Base", "RefreshToken", "Role", "User", "commerce"]
