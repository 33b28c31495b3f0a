# storefront/services/token_service.py
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt

from storefront.domain.errors import Unauthorized
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

JWT_ALGO = "HS256"


@dataclass(frozen=True)
class Identity:
    """Zweryfikowany podmiot z tokena - jedyny dowod tozsamosci w systemie."""

    subject_id: int
    is_admin: bool
    token_id: str | None = None
    expires_at: datetime | None = None


class TokenService:
    def __init__(self, secret: str, lifetime_seconds: int = 24 * 60 * 60):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self.secret = secret
        self.lifetime = timedelta(seconds=lifetime_seconds)

    def issue(self, subject_id: int, is_admin: bool) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "subjectId": subject_id,
            "isAdmin": bool(is_admin),
            "iat": now,
            "exp": now + self.lifetime,
            "jti": uuid.uuid4().hex,
        }
        return jwt.encode(payload, self.secret, algorithm=JWT_ALGO)

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[JWT_ALGO],
                options={"require": ["exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise Unauthorized("Token expired")
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected token: {e}")
            raise Unauthorized("Invalid token")

        subject_id = payload.get("subjectId")
        if isinstance(subject_id, bool) or not isinstance(subject_id, int):
            raise Unauthorized("Invalid token payload")

        return Identity(
            subject_id=subject_id,
            is_admin=payload.get("isAdmin") is True,
            token_id=payload.get("jti"),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
