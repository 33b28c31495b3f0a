# storefront/services/user_service.py
import re
from typing import Any, Dict, List

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import NotFound, Unauthorized, ValidationError
from storefront.domain.schemas import UserRead
from storefront.repos.user_repo import UserRepo
from storefront.services.identity_provider import GoogleIdentityClient
from storefront.services.token_service import TokenService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

EMAIL_RE = re.compile(r"^[\w.+-]+@([\w-]+\.)+[\w-]{2,}$")
SPECIAL_RE = re.compile(r"[!@#$%^&*(),.?\":{}|<>]")
#limit bcrypt
MAX_PASSWORD_BYTES = 72


def validate_password(password: str) -> List[str]:
    errors = []
    if len(password) < 8:
        errors.append("Password must be at least 8 characters long")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors.append("Password must be at most 72 bytes long")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"\d", password):
        errors.append("Password must contain at least one number")
    if not SPECIAL_RE.search(password):
        errors.append("Password must contain at least one special character")
    return errors


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=10)).decode("utf-8")


def check_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class UserService:
    def __init__(
        self,
        db: Session,
        token_service: TokenService,
        google: GoogleIdentityClient | None = None,
    ):
        self.repo = UserRepo(db)
        self.tokens = token_service
        self.google = google

    def _auth_payload(self, user: UserModel, message: str | None = None) -> Dict[str, Any]:
        return {
            "success": True,
            "message": message,
            "token": self.tokens.issue(user.id, user.is_admin),
            "user": UserRead.model_validate(user),
        }

    def register(self, name: str, email: str, password: str) -> Dict[str, Any]:
        name = (name or "").strip()
        email = (email or "").strip().lower()

        if not name or not email or not password:
            raise ValidationError("All fields are required")

        if not EMAIL_RE.match(email):
            raise ValidationError("Please enter a valid email address")

        errors = validate_password(password)
        if errors:
            raise ValidationError("Password is not strong enough", errors=errors)

        if len(name) < 2:
            raise ValidationError("Name must be at least 2 characters long")

        if self.repo.get_by_email(email):
            raise ValidationError("Email is already registered")

        try:
            user = self.repo.create_user(
                UserModel(name=name, email=email, password_hash=hash_password(password), is_admin=False)
            )
        except IntegrityError:
            self.repo.rollback()
            raise ValidationError("Email is already registered")

        logger.info(f"Registered user {user.id}")
        return self._auth_payload(user)

    def login(self, email: str, password: str) -> Dict[str, Any]:
        if not email or not password:
            raise ValidationError("Email and password are required")

        user = self.repo.get_by_email(email)
        if not user or not check_password(password, user.password_hash):
            logger.info("Failed login attempt")
            raise Unauthorized("Invalid email or password")

        return self._auth_payload(user, "Authentication successful")

    def google_login(self, credential: str) -> Dict[str, Any]:
        if self.google is None:
            raise ValidationError("Google login is not available")

        profile = self.google.verify(credential)

        user = self.repo.get_by_email(profile.email)
        if not user:
            try:
                user = self.repo.create_user(
                    UserModel(
                        name=profile.name,
                        email=profile.email,
                        password_hash=None,
                        is_admin=False,
                        picture=profile.picture,
                    )
                )
                logger.info(f"Created federated user {user.id}")
            except IntegrityError:
                #rownolegle pierwsze logowanie
                self.repo.rollback()
                user = self.repo.get_by_email(profile.email)

        return self._auth_payload(user, "Authentication successful")

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def update_profile(self, user_id: int, changes: Dict[str, Any]) -> UserModel:
        user = self.get_user(user_id)

        password = changes.pop("password", None)
        if password is not None:
            errors = validate_password(password)
            if errors:
                raise ValidationError("Password is not strong enough", errors=errors)
            user.password_hash = hash_password(password)

        for key, value in changes.items():
            if value is not None:
                setattr(user, key, value.strip() if isinstance(value, str) else value)

        user = self.repo.save(user)
        logger.info(f"User {user_id} updated profile")
        return user

    def list_users(self) -> List[UserModel]:
        return self.repo.list_users()

    def count(self) -> int:
        return self.repo.count()
