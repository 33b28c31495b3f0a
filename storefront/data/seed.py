# storefront/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.catalog import CollectionModel, ProductModel
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

COLLECTIONS = [
    ("sports-cars", "Sports Cars", "High-performance sports cars from legendary manufacturers", "/hotwheels/Sports_car.webp"),
    ("off-road", "Off-Road", "Rugged vehicles built for adventure and tough terrain", "/hotwheels/Off_road.webp"),
    ("classics", "Classics", "Timeless vintage cars that defined automotive history", "/hotwheels/Classics.webp"),
]

PRODUCTS = [
    ("porsche-911-gt3-rs", "Porsche 911 GT3 RS", "19.99", "sports-cars", True, "/hotwheels/p1.webp"),
    ("ferrari-f8-tributo", "Ferrari F8 Tributo", "22.99", "sports-cars", True, "/hotwheels/f1.webp"),
    ("land-rover-defender", "Land Rover Defender", "18.99", "off-road", False, "/hotwheels/l1.webp"),
    ("ford-bronco", "Ford Bronco", "19.99", "off-road", False, "/hotwheels/fb1.webp"),
    ("mercedes-300sl", "Mercedes-Benz 300SL", "21.99", "classics", False, "/hotwheels/m1.webp"),
]


def seed(db: Session) -> bool:
    #tylko pusta baza, bez nadpisywania
    if db.query(ProductModel).first():
        return False

    for position, (cid, name, description, image) in enumerate(COLLECTIONS):
        db.add(CollectionModel(id=cid, name=name, slug=cid, description=description, image=image, sort_order=position))

    for pid, name, price, category, featured, image in PRODUCTS:
        db.add(
            ProductModel(
                id=pid,
                name=name,
                price=Decimal(price),
                category_id=category,
                is_featured=featured,
                image=image,
            )
        )

    db.commit()
    logger.info(f"Seeded {len(COLLECTIONS)} collections and {len(PRODUCTS)} products")
    return True


if __name__ == "__main__":
    from storefront.data.database import build_engine, build_session_factory, init_db
    from storefront.utils.logging import configure_logging
    from storefront.utils.settings import Settings

    settings = Settings.from_env()
    configure_logging(settings.log_level)
    engine = build_engine(settings.database_url)
    init_db(engine)

    session = build_session_factory(engine)()
    try:
        seed(session)
    finally:
        session.close()
