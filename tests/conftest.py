from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from storefront.api import create_app
from storefront.data.models.catalog import CollectionModel, ProductModel
from storefront.data.models.user import UserModel
from storefront.services.catalog import SqlCatalog
from storefront.utils.settings import Settings

SECRET = "test-secret"


class FakeRevocationList:
    def __init__(self):
        self.revoked = set()

    def is_revoked(self, token_id):
        return token_id in self.revoked

    def revoke(self, token_id, expires_at):
        self.revoked.add(token_id)


@pytest.fixture
def settings():
    return Settings(
        jwt_secret=SECRET,
        database_url="sqlite://",
        celery_task_always_eager=True,
        log_level="WARNING",
    )


@pytest.fixture
def revocation():
    return FakeRevocationList()


@pytest.fixture
def app(settings, revocation):
    return create_app(settings, revocation=revocation)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture
def products(db):
    db.add(CollectionModel(id="col-1", name="Sports Cars", slug="sports-cars"))
    db.add_all(
        [
            ProductModel(
                id="prod-1",
                name="Porsche 911 GT3 RS",
                description="Track-focused 911",
                price=Decimal("19.99"),
                image="/hotwheels/p1.webp",
                category_id="col-1",
                is_featured=True,
            ),
            ProductModel(
                id="prod-2",
                name="Land Rover Defender",
                description="All-terrain",
                price=Decimal("5.00"),
                image="/hotwheels/l1.webp",
            ),
        ]
    )
    db.commit()
    return ["prod-1", "prod-2"]


@pytest.fixture
def users(db):
    alice = UserModel(name="Alice", email="alice@example.com")
    bob = UserModel(name="Bob", email="bob@example.com")
    admin = UserModel(name="Admin", email="admin@example.com", is_admin=True)
    db.add_all([alice, bob, admin])
    db.commit()
    return {"alice": alice, "bob": bob, "admin": admin}


@pytest.fixture
def catalog(db):
    return SqlCatalog(db)


@pytest.fixture
def client(app, products, users):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth(app, users):
    """auth("alice") -> naglowki z tokenem Bearer."""

    def _headers(name: str) -> dict:
        user = users[name]
        token = app.state.token_service.issue(user.id, user.is_admin)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def identity(app, users):
    def _identity(name: str):
        user = users[name]
        return app.state.token_service.verify(app.state.token_service.issue(user.id, user.is_admin))

    return _identity


@pytest.fixture
def shipping():
    return {
        "address": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip": "62701",
        "country": "US",
        "phone": "555-0100",
    }
