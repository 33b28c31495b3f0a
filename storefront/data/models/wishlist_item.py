from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, UniqueConstraint

from storefront.data.database import Base, UTCDateTime


class WishlistItemModel(Base):
    __tablename__ = "wishlist_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(String(64), nullable=False)
    note = Column(String(500), nullable=True)
    added_at = Column(UTCDateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    __table_args__ = (UniqueConstraint("user_id", "product_id", name="u_wishlist_user_product"),)
