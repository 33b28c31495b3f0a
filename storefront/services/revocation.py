# storefront/services/revocation.py
from datetime import datetime, timezone
from typing import Protocol

import redis

from storefront.utils.logging import get_logger
from storefront.utils.retry import redis_retry

logger = get_logger(__name__)


class RevocationList(Protocol):
    def is_revoked(self, token_id: str | None) -> bool: ...

    def revoke(self, token_id: str, expires_at: datetime | None) -> None: ...


class NeverRevoked:
    """
    Domyslna polityka: token jest wazny przez caly swoj czas zycia,
    nie ma wylogowania po stronie serwera.
    """

    def is_revoked(self, token_id: str | None) -> bool:
        return False

    def revoke(self, token_id: str, expires_at: datetime | None) -> None:
        logger.info(f"Revocation disabled, token {token_id} stays valid until expiry")


class RedisRevocationList:
    """
    -czarna lista jti w redisie
    -klucz wygasa razem z tokenem, nie trzeba recznie czyscic
    """

    def __init__(self, url: str | None = None, client: redis.Redis | None = None):
        if client is None and url is None:
            raise ValueError("RedisRevocationList needs a url or a client")
        self.redis = client or redis.Redis.from_url(url, decode_responses=True)

    @staticmethod
    def _key(token_id: str) -> str:
        return f"token:{token_id}:revoked"

    @redis_retry()
    def is_revoked(self, token_id: str | None) -> bool:
        if not token_id:
            return False
        return bool(self.redis.exists(self._key(token_id)))

    @redis_retry()
    def revoke(self, token_id: str, expires_at: datetime | None) -> None:
        ttl = 1
        if expires_at is not None:
            ttl = max(int((expires_at - datetime.now(timezone.utc)).total_seconds()), 1)

        logger.info(f"Revoke token {token_id} for {ttl}s")
        #SET token:<jti>:revoked 1 EX <ttl>
        self.redis.set(name=self._key(token_id), value="1", ex=ttl)


def build_revocation_list(redis_url: str | None) -> RevocationList:
    if redis_url:
        return RedisRevocationList(url=redis_url)
    return NeverRevoked()
