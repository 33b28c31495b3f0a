# storefront/services/wishlist_service.py
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.wishlist_item import WishlistItemModel
from storefront.domain.errors import Conflict, NotFound
from storefront.repos.wishlist_repo import WishlistRepo
from storefront.services.authz import assert_owner_or_admin
from storefront.services.catalog import Catalog, ProductSummary
from storefront.services.token_service import Identity
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _entry(item: WishlistItemModel, product: ProductSummary | None) -> Dict[str, Any]:
    return {
        "id": item.id,
        "user_id": item.user_id,
        "product_id": item.product_id,
        "note": item.note,
        "added_at": item.added_at,
        "product": product.brief() if product else None,
    }


class WishlistService:
    def __init__(self, db: Session, catalog: Catalog):
        self.repo = WishlistRepo(db)
        self.catalog = catalog

    def add(self, owner_id: int, product_id: str, note: str | None = None) -> Dict[str, Any]:
        product = self.catalog.resolve_product(product_id)

        if self.repo.find(owner_id, product_id):
            raise Conflict("Product already in wishlist")

        try:
            item = self.repo.add(WishlistItemModel(user_id=owner_id, product_id=product_id, note=note))
            self.repo.commit()
        except IntegrityError:
            #rownolegly add tej samej pary - constraint u_wishlist_user_product
            self.repo.rollback()
            raise Conflict("Product already in wishlist")

        logger.info(f"User {owner_id} added {product_id} to wishlist (entry {item.id})")
        return _entry(item, product)

    def list(self, owner_id: int) -> List[Dict[str, Any]]:
        items = self.repo.list_for_user(owner_id)
        products = self.catalog.resolve_many(i.product_id for i in items)
        return [_entry(i, products.get(i.product_id)) for i in items]

    def remove(self, caller: Identity, entry_id: int) -> None:
        item = self.repo.get_item(entry_id)
        if not item:
            raise NotFound("Wishlist item not found")

        assert_owner_or_admin(item.user_id, caller, "wishlist item")

        self.repo.delete(item)
        self.repo.commit()
        logger.info(f"Wishlist entry {entry_id} removed by user {caller.subject_id}")
