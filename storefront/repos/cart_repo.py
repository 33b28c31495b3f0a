# storefront/repos/cart_repo.py
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel

#dialekty z natywnym INSERT ... ON CONFLICT
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CartRepo:
    """Dostep do koszyka. Repo nie commituje - transakcja nalezy do serwisu."""

    def __init__(self, db: Session):
        self.db = db

    def _upsert_insert(self):
        return _UPSERT_INSERTS.get(self.db.get_bind().dialect.name)

    def get_cart_by_user(self, user_id: int) -> CartModel | None:
        return self.db.execute(
            select(CartModel).where(CartModel.user_id == user_id)
        ).scalar_one_or_none()

    def get_or_create_cart(self, user_id: int) -> CartModel:
        cart = self.get_cart_by_user(user_id)
        if cart:
            return cart

        insert = self._upsert_insert()
        if insert is not None:
            #dwa rownolegle pierwsze odczyty - drugi insert nic nie robi
            self.db.execute(
                insert(CartModel)
                .values(user_id=user_id, updated_at=datetime.now(timezone.utc))
                .on_conflict_do_nothing(index_elements=["user_id"])
            )
        else:
            self.db.add(CartModel(user_id=user_id))
            self.db.flush()

        return self.get_cart_by_user(user_id)

    def get_cart_items(self, cart_id: int) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .order_by(CartItemModel.id)
                .execution_options(populate_existing=True)
            ).scalars().all()
        )

    def get_cart_item(self, cart_id: int, product_id: str) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            ).execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def increment_item(self, cart_id: int, product_id: str, quantity: int) -> None:
        """
        Atomowy upsert: UPDATE quantity = quantity + :q jesli linia jest,
        INSERT jesli nie ma. Jedno zapytanie, bez read-modify-write.
        """
        insert = self._upsert_insert()

        if insert is not None:
            stmt = insert(CartItemModel).values(
                cart_id=cart_id,
                product_id=product_id,
                quantity=quantity,
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["cart_id", "product_id"],
                set_={"quantity": CartItemModel.quantity + stmt.excluded.quantity},
            )
            self.db.execute(stmt)
            return

        rowcount = self._add_to_quantity(cart_id, product_id, quantity)
        if rowcount == 0:
            self.db.add(CartItemModel(cart_id=cart_id, product_id=product_id, quantity=quantity))
            self.db.flush()

    def _add_to_quantity(self, cart_id: int, product_id: str, quantity: int) -> int:
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=CartItemModel.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def set_item_quantity(self, cart_id: int, product_id: str, quantity: int) -> int:
        result = self.db.execute(
            update(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .values(quantity=quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_cart_item(self, cart_id: int, product_id: str) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def clear(self, cart_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel)
            .where(CartItemModel.cart_id == cart_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def touch(self, cart_id: int) -> None:
        self.db.execute(
            update(CartModel)
            .where(CartModel.id == cart_id)
            .values(updated_at=datetime.now(timezone.utc))
            .execution_options(synchronize_session=False)
        )

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
