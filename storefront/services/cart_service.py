# storefront/services/cart_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.domain.errors import ValidationError
from storefront.repos.cart_repo import CartRepo
from storefront.services.catalog import Catalog
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Koszyk uzytkownika - jeden na usera, tworzony leniwie.
    owner_id zawsze pochodzi ze zweryfikowanego tokena, nigdy z body/sciezki.
    commands (add, set, remove, clear) modyfikuja stan
    query (get) tylko odczyt + join z katalogiem do wyswietlenia
    """

    def __init__(self, db: Session, catalog: Catalog):
        self.repo = CartRepo(db)
        self.catalog = catalog

    #query - odczyt
    def get_or_create_cart(self, owner_id: int) -> List[Dict[str, Any]]:
        cart = self.repo.get_or_create_cart(owner_id)
        self.repo.commit()
        return self._lines(cart.id)

    def _lines(self, cart_id: int) -> List[Dict[str, Any]]:
        items = self.repo.get_cart_items(cart_id)
        products = self.catalog.resolve_many(i.product_id for i in items)

        #join tylko do odczytu, nic nie zapisujemy na linii
        return [
            {
                "product_id": i.product_id,
                "quantity": i.quantity,
                "product": products[i.product_id].brief() if i.product_id in products else None,
            }
            for i in items
        ]

    #commands
    def add_item(self, owner_id: int, product_id: str, quantity: int = 1) -> List[Dict[str, Any]]:
        if quantity <= 0:
            raise ValidationError("Quantity must be greater than 0")

        #NotFound gdy produkt nie istnieje
        self.catalog.resolve_product(product_id)

        cart = self.repo.get_or_create_cart(owner_id)
        try:
            self.repo.increment_item(cart.id, product_id, quantity)
            self.repo.touch(cart.id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Added {quantity} x {product_id} to cart {cart.id} of user {owner_id}")
        return self._lines(cart.id)

    def set_quantity(self, owner_id: int, product_id: str, quantity: int) -> List[Dict[str, Any]]:
        cart = self.repo.get_or_create_cart(owner_id)

        if quantity <= 0:
            changed = self.repo.delete_cart_item(cart.id, product_id)
        else:
            changed = self.repo.set_item_quantity(cart.id, product_id, quantity)

        #brak linii = no-op, bez NotFound
        if changed:
            self.repo.touch(cart.id)
            logger.info(f"Set quantity of {product_id} in cart {cart.id} to {quantity}")
        self.repo.commit()

        return self._lines(cart.id)

    def remove_item(self, owner_id: int, product_id: str) -> List[Dict[str, Any]]:
        cart = self.repo.get_or_create_cart(owner_id)

        if self.repo.delete_cart_item(cart.id, product_id):
            self.repo.touch(cart.id)
            logger.info(f"Removed {product_id} from cart {cart.id}")
        self.repo.commit()

        return self._lines(cart.id)

    def clear(self, owner_id: int) -> None:
        cart = self.repo.get_cart_by_user(owner_id)
        if not cart:
            return

        removed = self.repo.clear(cart.id)
        self.repo.touch(cart.id)
        self.repo.commit()
        logger.info(f"Cart {cart.id} cleared ({removed} lines)")
