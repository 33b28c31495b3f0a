# storefront/api/routers/catalog.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_catalog
from storefront.data.database import get_db
from storefront.domain.schemas import CollectionOut, CountOut, ProductOut
from storefront.services.catalog import Catalog, SqlCatalog

#publiczne trasy odczytu katalogu (bramka przepuszcza GET bez tokena)
products_router = APIRouter(prefix="/products", tags=["catalog"])
collections_router = APIRouter(prefix="/collections", tags=["catalog"])
search_router = APIRouter(prefix="/search", tags=["catalog"])


@products_router.get("", response_model=List[ProductOut])
def list_products(
    category: str | None = None,
    sort: str | None = None,
    limit: int = Query(0, ge=0),
    catalog: Catalog = Depends(get_catalog),
):
    return [p.as_dict() for p in catalog.list_products(category=category, sort=sort, limit=limit)]


@products_router.get("/get/count", response_model=CountOut)
def count_products(category: str | None = None, db: Session = Depends(get_db)):
    return {"count": SqlCatalog(db).count(category=category)}


@products_router.get("/get/featured/{count}", response_model=List[ProductOut])
def featured_products(count: int, db: Session = Depends(get_db)):
    return [p.as_dict() for p in SqlCatalog(db).featured(max(count, 0))]


@products_router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, catalog: Catalog = Depends(get_catalog)):
    return catalog.resolve_product(product_id).as_dict()


@collections_router.get("", response_model=List[CollectionOut])
def list_collections(db: Session = Depends(get_db)):
    return SqlCatalog(db).list_collections()


@collections_router.get("/{collection_id}", response_model=CollectionOut)
def get_collection(collection_id: str, db: Session = Depends(get_db)):
    return SqlCatalog(db).get_collection(collection_id)


@search_router.get("", response_model=List[ProductOut])
def search_products(
    q: str = Query(..., min_length=1, max_length=100),
    limit: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return [p.as_dict() for p in SqlCatalog(db).search(q, limit=limit)]
