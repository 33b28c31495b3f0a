from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from storefront.services.revocation import (
    NeverRevoked,
    RedisRevocationList,
    build_revocation_list,
)


@pytest.fixture
def redis_client():
    return MagicMock()


def test_never_revoked():
    revocation = NeverRevoked()
    revocation.revoke("jti-1", None)

    assert revocation.is_revoked("jti-1") is False


def test_revoke_sets_key_until_expiry(redis_client):
    revocation = RedisRevocationList(client=redis_client)
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=10)

    revocation.revoke("jti-1", expires_at)

    kwargs = redis_client.set.call_args.kwargs
    assert kwargs["name"] == "token:jti-1:revoked"
    assert 590 <= kwargs["ex"] <= 600


def test_revoke_expired_token_keeps_minimal_ttl(redis_client):
    revocation = RedisRevocationList(client=redis_client)

    revocation.revoke("jti-1", datetime.now(timezone.utc) - timedelta(minutes=1))

    assert redis_client.set.call_args.kwargs["ex"] == 1


def test_is_revoked_checks_key(redis_client):
    redis_client.exists.return_value = 1
    revocation = RedisRevocationList(client=redis_client)

    assert revocation.is_revoked("jti-1") is True
    redis_client.exists.assert_called_once_with("token:jti-1:revoked")


def test_token_without_jti_not_revoked(redis_client):
    assert RedisRevocationList(client=redis_client).is_revoked(None) is False
    redis_client.exists.assert_not_called()


def test_requires_url_or_client():
    with pytest.raises(ValueError):
        RedisRevocationList()


def test_build_revocation_list_default():
    assert isinstance(build_revocation_list(None), NeverRevoked)
