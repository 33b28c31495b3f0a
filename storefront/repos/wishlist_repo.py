# storefront/repos/wishlist_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from storefront.data.models.wishlist_item import WishlistItemModel


class WishlistRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_item(self, item_id: int) -> WishlistItemModel | None:
        return self.db.get(WishlistItemModel, item_id)

    def find(self, user_id: int, product_id: str) -> WishlistItemModel | None:
        return self.db.execute(
            select(WishlistItemModel).where(
                WishlistItemModel.user_id == user_id,
                WishlistItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def list_for_user(self, user_id: int) -> list[WishlistItemModel]:
        return list(
            self.db.execute(
                select(WishlistItemModel)
                .where(WishlistItemModel.user_id == user_id)
                .order_by(WishlistItemModel.added_at.desc(), WishlistItemModel.id.desc())
            ).scalars().all()
        )

    def add(self, item: WishlistItemModel) -> WishlistItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete(self, item: WishlistItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
