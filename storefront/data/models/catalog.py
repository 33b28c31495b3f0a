# storefront/data/models/catalog.py
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, Numeric, Boolean, Integer, ForeignKey
from sqlalchemy.orm import relationship

from storefront.data.database import Base, UTCDateTime


class CollectionModel(Base):
    __tablename__ = "collections"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=False, unique=True)
    image = Column(String(500), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=False, default=0)

    products = relationship("ProductModel", back_populates="category")


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    price = Column(Numeric(10, 2), nullable=False)
    image = Column(String(500), nullable=False, default="")
    category_id = Column(String(64), ForeignKey("collections.id"), nullable=True, index=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(UTCDateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    category = relationship("CollectionModel", back_populates="products")
