# storefront/api/deps.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import Unauthorized
from storefront.services.authz import assert_admin
from storefront.services.catalog import Catalog, SqlCatalog
from storefront.services.token_service import Identity
from storefront.utils.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def current_identity(request: Request) -> Identity:
    identity = getattr(request.state, "identity", None)
    if identity is None:
        raise Unauthorized()
    return identity


def admin_identity(identity: Identity = Depends(current_identity)) -> Identity:
    assert_admin(identity)
    return identity


def get_catalog(request: Request, db: Session = Depends(get_db)) -> Catalog:
    remote = request.app.state.remote_catalog
    return remote if remote is not None else SqlCatalog(db)
