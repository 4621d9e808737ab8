"""
Create a staff account (e.g. the first admin). Run from project root:
  python -m storefront.scripts.create_user EMAIL USERNAME PASSWORD [role]
Example:
  python -m storefront.scripts.create_user admin@example.com admin your-secure-password admin
"""
import argparse
import sys

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from storefront.core.config import get_settings
from storefront.core.database import SessionLocal
from storefront.core.errors import ConflictError, StorageError
from storefront.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, USERNAME_MAX_LEN, TokenService
from storefront.models import Role
from storefront.services.auth import AuthService
from storefront.services.credentials import CredentialStore


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Storefront staff account.")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars, unique)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument(
        "role", nargs="?", default=Role.staff.value, choices=[r.value for r in Role]
    )
    args = parser.parse_args()

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1
    try:
        email = TypeAdapter(EmailStr).validate_python(args.email.strip())
    except PydanticValidationError:
        print("Invalid email address.", file=sys.stderr)
        return 1

    settings = get_settings()
    db = SessionLocal()
    try:
        auth = AuthService(
            CredentialStore(db),
            TokenService.from_settings(settings),
            bcrypt_rounds=settings.BCRYPT_ROUNDS,
        )
        user_id = auth.register(
            email=email, username=username, password=args.password, role=Role(args.role)
        )
    except ConflictError as e:
        print(e.message, file=sys.stderr)
        return 1
    except StorageError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{username}' (id {user_id}) with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
