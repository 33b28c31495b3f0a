from sqlalchemy import Column, Integer, ForeignKey, String, Numeric
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class OrderItemModel(Base):
    """Linia zamowienia - kopia, nie referencja do produktu (snapshot ceny/nazwy)."""

    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(String(64), nullable=False)
    quantity = Column(Integer, nullable=False)

    name = Column(String(255), nullable=False)
    unit_price = Column(Numeric(10, 2), nullable=False)
    image = Column(String(500), nullable=False, default="")

    order = relationship("OrderModel", back_populates="items")
