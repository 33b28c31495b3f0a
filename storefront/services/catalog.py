# storefront/services/catalog.py
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Protocol

import requests
from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from storefront.data.models.catalog import CollectionModel, ProductModel
from storefront.domain.errors import Internal, NotFound, ValidationError
from storefront.utils.logging import get_logger
from storefront.utils.retry import http_retry

logger = get_logger(__name__)

#nazwy pol sortowania z API -> kolumny
SORT_FIELDS = {
    "name": ProductModel.name,
    "price": ProductModel.price,
    "dateCreated": ProductModel.created_at,
    "createdAt": ProductModel.created_at,
}


@dataclass(frozen=True)
class ProductSummary:
    id: str
    name: str
    price: Decimal
    image: str = ""
    description: str = ""
    category_id: str | None = None
    is_featured: bool = False

    def brief(self) -> dict:
        return {"id": self.id, "name": self.name, "price": self.price, "image": self.image}

    def as_dict(self) -> dict:
        return {
            **self.brief(),
            "description": self.description,
            "category_id": self.category_id,
            "is_featured": self.is_featured,
        }


def parse_sort(sort: str | None) -> tuple[str, bool] | None:
    """'-price' -> ('price', malejaco)."""
    if not sort:
        return None
    descending = sort.startswith("-")
    name = sort[1:] if descending else sort
    if name not in SORT_FIELDS:
        raise ValidationError(f"Unsupported sort field: {name}")
    return name, descending


def escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class Catalog(Protocol):
    def resolve_product(self, product_id: str) -> ProductSummary: ...

    def resolve_many(self, product_ids: Iterable[str]) -> dict[str, ProductSummary]: ...

    def list_products(
        self,
        category: str | None = None,
        sort: str | None = None,
        limit: int = 0,
    ) -> list[ProductSummary]: ...


def _summary(p: ProductModel) -> ProductSummary:
    return ProductSummary(
        id=p.id,
        name=p.name,
        price=Decimal(p.price),
        image=p.image or "",
        description=p.description or "",
        category_id=p.category_id,
        is_featured=bool(p.is_featured),
    )


class SqlCatalog:
    """Katalog w tej samej bazie - tylko odczyt."""

    def __init__(self, db: Session):
        self.db = db

    def resolve_product(self, product_id: str) -> ProductSummary:
        product = self.db.get(ProductModel, product_id)
        if not product:
            raise NotFound("Product not found")
        return _summary(product)

    def resolve_many(self, product_ids: Iterable[str]) -> dict[str, ProductSummary]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self.db.execute(select(ProductModel).where(ProductModel.id.in_(ids))).scalars().all()
        return {p.id: _summary(p) for p in rows}

    def list_products(
        self,
        category: str | None = None,
        sort: str | None = None,
        limit: int = 0,
    ) -> list[ProductSummary]:
        stmt = select(ProductModel)

        if category:
            stmt = stmt.where(ProductModel.category_id == category)

        parsed = parse_sort(sort)
        if parsed:
            column = SORT_FIELDS[parsed[0]]
            stmt = stmt.order_by(column.desc() if parsed[1] else column.asc())
        else:
            stmt = stmt.order_by(ProductModel.created_at.asc(), ProductModel.id.asc())

        #limit 0 = bez limitu
        if limit:
            stmt = stmt.limit(limit)

        return [_summary(p) for p in self.db.execute(stmt).scalars().all()]

    def featured(self, count: int) -> list[ProductSummary]:
        stmt = select(ProductModel).where(ProductModel.is_featured.is_(True)).order_by(ProductModel.id)
        if count:
            stmt = stmt.limit(count)
        return [_summary(p) for p in self.db.execute(stmt).scalars().all()]

    def count(self, category: str | None = None) -> int:
        stmt = select(func.count(ProductModel.id))
        if category:
            stmt = stmt.where(ProductModel.category_id == category)
        return self.db.execute(stmt).scalar_one()

    def search(self, query: str, limit: int = 0) -> list[ProductSummary]:
        #% i _ z zapytania to zwykle znaki, nie wildcardy
        pattern = f"%{escape_like(query.lower())}%"
        stmt = (
            select(ProductModel)
            .where(
                or_(
                    func.lower(ProductModel.name).like(pattern, escape="\\"),
                    func.lower(ProductModel.description).like(pattern, escape="\\"),
                )
            )
            .order_by(ProductModel.name)
        )
        if limit:
            stmt = stmt.limit(limit)
        return [_summary(p) for p in self.db.execute(stmt).scalars().all()]

    def list_collections(self) -> list[CollectionModel]:
        stmt = (
            select(CollectionModel)
            .where(CollectionModel.is_active.is_(True))
            .order_by(CollectionModel.sort_order, CollectionModel.name)
        )
        return list(self.db.execute(stmt).scalars().all())

    def get_collection(self, collection_id: str) -> CollectionModel:
        collection = self.db.get(CollectionModel, collection_id)
        if not collection:
            raise NotFound("Collection not found")
        return collection


def _from_payload(data: dict) -> ProductSummary:
    return ProductSummary(
        id=str(data.get("id")),
        name=data["name"],
        price=Decimal(str(data["price"])),
        image=data.get("image") or "",
        description=data.get("description") or "",
        category_id=data.get("categoryId"),
        is_featured=bool(data.get("isFeatured", False)),
    )


class HttpCatalog:
    """Zdalny product-service (PRODUCT_SERVICE_URL)."""

    def __init__(self, base_url: str, timeout: int = 2, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    @http_retry()
    def _get(self, path: str, params: dict | None = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.info(f"HttpCatalog GET {url}")
        return self.http.get(url, params=params, timeout=self.timeout)

    def resolve_product(self, product_id: str) -> ProductSummary:
        resp = self._get(f"/products/{product_id}")
        if resp.status_code == 404:
            raise NotFound("Product not found")
        if not resp.ok:
            logger.error(f"Product service returned {resp.status_code} for {product_id}")
            raise Internal("Catalog unavailable")
        return _from_payload(resp.json())

    def resolve_many(self, product_ids: Iterable[str]) -> dict[str, ProductSummary]:
        found = {}
        for pid in set(product_ids):
            try:
                found[pid] = self.resolve_product(pid)
            except NotFound:
                continue
        return found

    def list_products(
        self,
        category: str | None = None,
        sort: str | None = None,
        limit: int = 0,
    ) -> list[ProductSummary]:
        params = {k: v for k, v in {"category": category, "sort": sort, "limit": limit}.items() if v}
        resp = self._get("/products", params=params)
        if not resp.ok:
            logger.error(f"Product service returned {resp.status_code} for product list")
            raise Internal("Catalog unavailable")
        return [_from_payload(item) for item in resp.json()]
