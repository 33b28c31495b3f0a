from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from storefront.data.database import build_engine, build_session_factory, init_db
from storefront.data.models.cart import CartModel
from storefront.data.models.catalog import ProductModel
from storefront.data.models.user import UserModel
from storefront.domain.errors import NotFound, ValidationError
from storefront.repos.cart_repo import CartRepo
from storefront.services.cart_service import CartService
from storefront.services.catalog import SqlCatalog


@pytest.fixture
def svc(db, catalog, products):
    return CartService(db=db, catalog=catalog)


def quantities(lines):
    return [(line["product_id"], line["quantity"]) for line in lines]


def test_empty_cart_created_lazily(svc, db, users):
    alice = users["alice"].id

    assert svc.get_or_create_cart(alice) == []
    assert svc.get_or_create_cart(alice) == []

    carts = db.execute(select(func.count(CartModel.id)).where(CartModel.user_id == alice)).scalar_one()
    assert carts == 1


def test_add_merge_then_remove_by_zero(svc, users):
    alice = users["alice"].id

    assert quantities(svc.add_item(alice, "prod-1", 2)) == [("prod-1", 2)]
    assert quantities(svc.add_item(alice, "prod-1", 3)) == [("prod-1", 5)]
    assert svc.set_quantity(alice, "prod-1", 0) == []


def test_add_defaults_to_one(svc, users):
    assert quantities(svc.add_item(users["alice"].id, "prod-2")) == [("prod-2", 1)]


def test_lines_keep_insertion_order(svc, users):
    alice = users["alice"].id
    svc.add_item(alice, "prod-2", 1)
    svc.add_item(alice, "prod-1", 1)

    lines = svc.add_item(alice, "prod-2", 4)

    assert quantities(lines) == [("prod-2", 5), ("prod-1", 1)]


def test_lines_are_joined_with_catalog(svc, users):
    lines = svc.add_item(users["alice"].id, "prod-1", 1)

    product = lines[0]["product"]
    assert product["name"] == "Porsche 911 GT3 RS"
    assert str(product["price"]) == "19.99"
    assert product["image"] == "/hotwheels/p1.webp"


def test_unknown_product_not_found(svc, users):
    with pytest.raises(NotFound):
        svc.add_item(users["alice"].id, "missing", 1)

    assert svc.get_or_create_cart(users["alice"].id) == []


@pytest.mark.parametrize("quantity", [0, -3])
def test_add_requires_positive_quantity(svc, users, quantity):
    with pytest.raises(ValidationError):
        svc.add_item(users["alice"].id, "prod-1", quantity)


def test_set_quantity_overwrites(svc, users):
    alice = users["alice"].id
    svc.add_item(alice, "prod-1", 2)

    assert quantities(svc.set_quantity(alice, "prod-1", 7)) == [("prod-1", 7)]


def test_set_quantity_negative_removes(svc, users):
    alice = users["alice"].id
    svc.add_item(alice, "prod-1", 2)
    svc.add_item(alice, "prod-2", 1)

    assert quantities(svc.set_quantity(alice, "prod-1", -1)) == [("prod-2", 1)]


def test_set_quantity_on_absent_line_is_noop(svc, users):
    alice = users["alice"].id
    svc.add_item(alice, "prod-1", 2)

    assert quantities(svc.set_quantity(alice, "prod-2", 4)) == [("prod-1", 2)]


def test_remove_item(svc, users):
    alice = users["alice"].id
    svc.add_item(alice, "prod-1", 2)
    svc.add_item(alice, "prod-2", 1)

    assert quantities(svc.remove_item(alice, "prod-1")) == [("prod-2", 1)]
    assert quantities(svc.remove_item(alice, "prod-1")) == [("prod-2", 1)]


def test_clear_empties_but_keeps_cart(svc, db, users):
    alice = users["alice"].id
    svc.add_item(alice, "prod-1", 2)
    svc.add_item(alice, "prod-2", 1)

    svc.clear(alice)

    assert svc.get_or_create_cart(alice) == []
    assert db.execute(select(CartModel).where(CartModel.user_id == alice)).scalar_one_or_none() is not None


def test_clear_without_cart_is_noop(svc, users):
    svc.clear(users["bob"].id)


def test_carts_are_per_user(svc, users):
    svc.add_item(users["alice"].id, "prod-1", 2)
    svc.add_item(users["bob"].id, "prod-1", 1)

    assert quantities(svc.get_or_create_cart(users["alice"].id)) == [("prod-1", 2)]
    assert quantities(svc.get_or_create_cart(users["bob"].id)) == [("prod-1", 1)]


def test_line_for_product_removed_from_catalog(svc, db, users):
    from storefront.data.models.catalog import ProductModel

    alice = users["alice"].id
    svc.add_item(alice, "prod-2", 1)
    db.delete(db.get(ProductModel, "prod-2"))
    db.commit()

    lines = svc.get_or_create_cart(alice)

    assert lines == [{"product_id": "prod-2", "quantity": 1, "product": None}]


def test_fallback_increment_without_upsert(svc, db, users, monkeypatch):
    #dialekt bez ON CONFLICT: UPDATE quantity + q, a gdy nic nie trafil - INSERT
    monkeypatch.setattr(CartRepo, "_upsert_insert", lambda self: None)
    alice = users["alice"].id

    assert quantities(svc.add_item(alice, "prod-1", 2)) == [("prod-1", 2)]
    assert quantities(svc.add_item(alice, "prod-1", 3)) == [("prod-1", 5)]
    assert quantities(svc.add_item(alice, "prod-2", 1)) == [("prod-1", 5), ("prod-2", 1)]

    carts = db.execute(select(func.count(CartModel.id)).where(CartModel.user_id == alice)).scalar_one()
    assert carts == 1


@pytest.fixture
def file_db(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'carts.db'}")
    init_db(engine)
    factory = build_session_factory(engine)

    with factory() as session:
        session.add(ProductModel(id="prod-1", name="Porsche 911 GT3 RS", price=Decimal("19.99")))
        user = UserModel(name="Alice", email="alice@example.com")
        session.add(user)
        session.commit()
        user_id = user.id

    yield factory, user_id
    engine.dispose()


def test_concurrent_adds_are_not_lost(file_db):
    factory, user_id = file_db
    workers, adds = 4, 20

    def add_many():
        with factory() as session:
            cart = CartService(db=session, catalog=SqlCatalog(session))
            for _ in range(adds):
                cart.add_item(user_id, "prod-1", 1)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        for future in [pool.submit(add_many) for _ in range(workers)]:
            future.result()

    with factory() as session:
        lines = CartService(db=session, catalog=SqlCatalog(session)).get_or_create_cart(user_id)

    assert quantities(lines) == [("prod-1", workers * adds)]
