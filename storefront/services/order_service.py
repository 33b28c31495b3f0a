# storefront/services/order_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import NotFound, ValidationError
from storefront.domain.schemas import OrderStatus
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.authz import assert_owner_or_admin
from storefront.services.catalog import Catalog, ProductSummary
from storefront.services.notification_service import NotificationService
from storefront.services.pricing import PriceVerifier, TrustClientTotal
from storefront.services.token_service import Identity
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ADDRESS_FIELDS = ("address", "city", "state", "zip", "country", "phone")

#uzywane tylko przy STRICT_ORDER_TRANSITIONS
ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.COMPLETED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
    OrderStatus.COMPLETED: set(),
}


def parse_status(value: str) -> OrderStatus:
    try:
        return OrderStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Invalid status '{value}', expected one of: {allowed}")


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Zamowienie to niezmienna kopia linii + adres + total; zmienia sie tylko status.
    """

    def __init__(
        self,
        db: Session,
        catalog: Catalog,
        price_verifier: PriceVerifier | None = None,
        notifications: NotificationService | None = None,
        strict_transitions: bool = False,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.catalog = catalog
        self.price_verifier = price_verifier or TrustClientTotal()
        self.notifications = notifications or NotificationService()
        self.strict_transitions = strict_transitions

    def _serialize(self, order: OrderModel, live: Dict[str, ProductSummary]) -> Dict[str, Any]:
        return {
            "id": order.id,
            "user_id": order.user_id,
            "status": order.status,
            "total_price": order.total_price,
            "shipping_address": {f: getattr(order, f) for f in ADDRESS_FIELDS},
            "order_items": [
                {
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "name": i.name,
                    "unit_price": i.unit_price,
                    "image": i.image,
                    "product": live[i.product_id].brief() if i.product_id in live else None,
                }
                for i in order.items
            ],
            "created_at": order.created_at,
        }

    def _serialize_many(self, orders: List[OrderModel]) -> List[Dict[str, Any]]:
        live = self.catalog.resolve_many(i.product_id for o in orders for i in o.items)
        return [self._serialize(o, live) for o in orders]

    def create_order(
        self,
        owner_id: int,
        order_items: List[Dict[str, Any]],
        shipping_address: Dict[str, str],
        total_price,
        clear_cart: bool = True,
    ) -> Dict[str, Any]:
        """
        Use Case: checkout.

        1. Waliduje kazda linie w katalogu (wszystko albo nic)
        2. Weryfikuje total przez PriceVerifier
        3. Zapisuje zamowienie ze snapshotem nazwy/ceny/obrazka, status Pending
        4. Czysci koszyk w tej samej transakcji
        """
        if not order_items:
            raise ValidationError("Order must contain at least one item")

        missing = [f for f in ADDRESS_FIELDS if not (shipping_address.get(f) or "").strip()]
        if missing:
            raise ValidationError(f"Missing shipping address fields: {', '.join(missing)}")

        resolved = self.catalog.resolve_many(line["product_id"] for line in order_items)
        unknown = sorted({line["product_id"] for line in order_items} - resolved.keys())
        if unknown:
            raise ValidationError(f"Unknown products: {', '.join(unknown)}")

        for line in order_items:
            if line["quantity"] <= 0:
                raise ValidationError("Quantity must be greater than 0")

        total = self.price_verifier.verify(
            ((resolved[line["product_id"]].price, line["quantity"]) for line in order_items),
            total_price,
        )

        order = OrderModel(
            user_id=owner_id,
            status=OrderStatus.PENDING.value,
            total_price=total,
            **{f: shipping_address[f] for f in ADDRESS_FIELDS},
        )
        for line in order_items:
            product = resolved[line["product_id"]]
            order.items.append(
                OrderItemModel(
                    product_id=product.id,
                    quantity=line["quantity"],
                    name=product.name,
                    unit_price=product.price,
                    image=product.image,
                )
            )

        try:
            self.repo.add_order(order)
            if clear_cart:
                cart = self.cart_repo.get_cart_by_user(owner_id)
                if cart:
                    self.cart_repo.clear(cart.id)
                    self.cart_repo.touch(cart.id)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {order.id} created for user {owner_id} ({len(order_items)} lines, total {total})")

        self.notifications.order_created(owner_id, order.id)

        return self._serialize(order, resolved)

    def _load(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFound("Order not found")
        return order

    def get_order(self, order_id: int, caller: Identity) -> Dict[str, Any]:
        order = self._load(order_id)
        assert_owner_or_admin(order.user_id, caller, "order")
        return self._serialize_many([order])[0]

    def list_by_user(self, owner_id: int) -> List[Dict[str, Any]]:
        return self._serialize_many(self.repo.list_for_user(owner_id))

    def list_all(self) -> List[Dict[str, Any]]:
        return self._serialize_many(self.repo.list_all())

    def set_status(self, order_id: int, new_status: str, caller: Identity) -> Dict[str, Any]:
        status = parse_status(new_status)
        order = self._load(order_id)
        assert_owner_or_admin(order.user_id, caller, "order")

        current = OrderStatus(order.status)
        if self.strict_transitions and status != current and status not in ALLOWED_TRANSITIONS[current]:
            raise ValidationError(f"Cannot change order status from {current.value} to {status.value}")

        self.repo.update_order_status(order_id, status.value)
        self.repo.commit()

        logger.info(f"Order {order_id} status {current.value} -> {status.value}")
        if status != current:
            self.notifications.order_status_changed(order.user_id, order_id, status.value)

        return self._serialize_many([self._load(order_id)])[0]

    def delete_order(self, order_id: int, caller: Identity) -> None:
        order = self._load(order_id)
        assert_owner_or_admin(order.user_id, caller, "order")

        try:
            self.repo.delete_order(order)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Order {order_id} deleted by user {caller.subject_id}")

    def count(self) -> int:
        return self.repo.count()

    def total_sales(self):
        return self.repo.total_sales()
