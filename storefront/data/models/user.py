from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean
from storefront.data.database import Base, UTCDateTime


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    #NULL dla kont zalozonych tylko przez logowanie Google
    password_hash = Column(String(255), nullable=True)
    is_admin = Column(Boolean, nullable=False, default=False)

    phone = Column(String(50), nullable=False, default="")
    street = Column(String(255), nullable=False, default="")
    apartment = Column(String(50), nullable=False, default="")
    city = Column(String(100), nullable=False, default="")
    zip = Column(String(20), nullable=False, default="")
    country = Column(String(100), nullable=False, default="")
    picture = Column(String(500), nullable=False, default="")

    created_at = Column(UTCDateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
