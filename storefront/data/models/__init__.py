#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.user import UserModel
from storefront.data.models.catalog import CollectionModel, ProductModel
from storefront.data.models.cart import CartModel
from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.wishlist_item import WishlistItemModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel

__all__ = [
    "UserModel",
    "CollectionModel",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "WishlistItemModel",
    "OrderModel",
    "OrderItemModel",
]
