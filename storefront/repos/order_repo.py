# storefront/repos/order_repo.py
from decimal import Decimal

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.id == order_id)
            .options(selectinload(OrderModel.items))
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def list_for_user(self, user_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .options(selectinload(OrderModel.items))
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars().all()
        )

    def list_all(self) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .options(selectinload(OrderModel.items))
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars().all()
        )

    def update_order_status(self, order_id: int, status: str) -> int:
        #tylko status - pozostale pola zamowienia sa niezmienne
        result = self.db.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id)
            .values(status=status)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def delete_order(self, order: OrderModel) -> None:
        #cascade="all, delete-orphan" usuwa linie w tej samej transakcji
        self.db.delete(order)
        self.db.flush()

    def count(self) -> int:
        return self.db.execute(select(func.count(OrderModel.id))).scalar_one()

    def total_sales(self) -> Decimal:
        total = self.db.execute(select(func.coalesce(func.sum(OrderModel.total_price), 0))).scalar_one()
        return Decimal(str(total)).quantize(Decimal("0.01"))

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
