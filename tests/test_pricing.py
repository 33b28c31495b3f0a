from decimal import Decimal

import pytest

from storefront.domain.errors import ValidationError
from storefront.services.pricing import (
    CatalogTotalVerifier,
    TrustClientTotal,
    build_price_verifier,
    to_money,
)

LINES = [(Decimal("19.99"), 2), (Decimal("5.00"), 1)]


def test_to_money_rounds_half_up():
    assert to_money("1.005") == Decimal("1.01")
    assert to_money(5) == Decimal("5.00")


def test_trust_stores_client_total():
    assert TrustClientTotal().verify(LINES, Decimal("1")) == Decimal("1.00")


def test_catalog_verifier_accepts_matching_total():
    assert CatalogTotalVerifier().verify(LINES, Decimal("44.98")) == Decimal("44.98")


def test_catalog_verifier_tolerates_one_cent():
    assert CatalogTotalVerifier().verify(LINES, Decimal("44.99")) == Decimal("44.98")


def test_catalog_verifier_rejects_mismatch():
    with pytest.raises(ValidationError, match="44.98"):
        CatalogTotalVerifier().verify(LINES, Decimal("40.00"))


@pytest.mark.parametrize("mode, cls", [("trust", TrustClientTotal), ("catalog", CatalogTotalVerifier)])
def test_build_price_verifier(mode, cls):
    assert isinstance(build_price_verifier(mode), cls)


def test_build_price_verifier_unknown_mode():
    with pytest.raises(ValueError):
        build_price_verifier("magic")
