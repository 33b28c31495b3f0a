import jwt
import pytest

from storefront.domain.errors import Unauthorized
from storefront.services.token_service import JWT_ALGO, TokenService


def test_issue_and_verify():
    svc = TokenService("s3cret")

    identity = svc.verify(svc.issue(42, False))

    assert identity.subject_id == 42
    assert identity.is_admin is False
    assert identity.token_id
    assert identity.expires_at is not None


def test_payload_claims():
    token = TokenService("s3cret", lifetime_seconds=3600).issue(5, True)

    payload = jwt.decode(token, "s3cret", algorithms=[JWT_ALGO])

    assert payload["subjectId"] == 5
    assert payload["isAdmin"] is True
    assert payload["exp"] - payload["iat"] == 3600
    assert "jti" in payload


def test_each_token_has_own_id():
    svc = TokenService("s3cret")

    assert svc.verify(svc.issue(1, False)).token_id != svc.verify(svc.issue(1, False)).token_id


def test_expired_token():
    svc = TokenService("s3cret", lifetime_seconds=-1)

    with pytest.raises(Unauthorized, match="Token expired"):
        svc.verify(svc.issue(1, False))


def test_wrong_secret():
    with pytest.raises(Unauthorized, match="Invalid token"):
        TokenService("a").verify(TokenService("b").issue(1, False))


def test_token_without_exp_rejected():
    token = jwt.encode({"subjectId": 1, "isAdmin": False}, "s3cret", algorithm=JWT_ALGO)

    with pytest.raises(Unauthorized):
        TokenService("s3cret").verify(token)


@pytest.mark.parametrize("subject", ["1", None, True, 1.5])
def test_subject_must_be_integer(subject):
    svc = TokenService("s3cret")
    token = jwt.encode({"subjectId": subject, "exp": 9999999999}, "s3cret", algorithm=JWT_ALGO)

    with pytest.raises(Unauthorized, match="Invalid token payload"):
        svc.verify(token)


def test_none_algorithm_rejected():
    token = jwt.encode({"subjectId": 1, "isAdmin": True, "exp": 9999999999}, None, algorithm="none")

    with pytest.raises(Unauthorized):
        TokenService("s3cret").verify(token)


def test_empty_secret_not_allowed():
    with pytest.raises(ValueError):
        TokenService("")
