# storefront/services/pricing.py
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Protocol

from storefront.domain.errors import ValidationError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


class PriceVerifier(Protocol):
    def verify(self, lines: Iterable[tuple[Decimal, int]], total_price: Decimal) -> Decimal:
        """(cena jednostkowa, ilosc) dla kazdej linii + total od klienta -> total do zapisu."""
        ...


class TrustClientTotal:
    """Total z requestu zapisywany bez przeliczania."""

    def verify(self, lines, total_price: Decimal) -> Decimal:
        return to_money(total_price)


class CatalogTotalVerifier:
    """Przelicza sume z cen katalogu i odrzuca total rozny o wiecej niz tolerance."""

    def __init__(self, tolerance: Decimal = CENT):
        self.tolerance = tolerance

    def verify(self, lines, total_price: Decimal) -> Decimal:
        expected = to_money(sum((price * qty for price, qty in lines), Decimal("0")))
        given = to_money(total_price)

        if abs(expected - given) > self.tolerance:
            logger.warning(f"Total price mismatch: client {given}, catalog {expected}")
            raise ValidationError(f"Total price {given} does not match catalog total {expected}")

        return expected


def build_price_verifier(mode: str) -> PriceVerifier:
    if mode == "trust":
        return TrustClientTotal()
    if mode == "catalog":
        return CatalogTotalVerifier()
    raise ValueError(f"Unknown PRICE_VERIFICATION mode: {mode}")
