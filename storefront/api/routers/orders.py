# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from storefront.api.deps import admin_identity, current_identity, get_catalog, get_settings
from storefront.data.database import get_db
from storefront.domain.schemas import (
    CountOut,
    MessageOut,
    OrderCreate,
    OrderOut,
    OrderStatusIn,
    TotalSalesOut,
)
from storefront.services.catalog import Catalog
from storefront.services.order_service import OrderService
from storefront.services.token_service import Identity
from storefront.utils.settings import Settings

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(
    request: Request,
    db: Session = Depends(get_db),
    catalog: Catalog = Depends(get_catalog),
    settings: Settings = Depends(get_settings),
):
    return OrderService(
        db=db,
        catalog=catalog,
        price_verifier=request.app.state.price_verifier,
        notifications=request.app.state.notifications,
        strict_transitions=settings.strict_order_transitions,
    )


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    identity: Identity = Depends(current_identity),
    svc: OrderService = Depends(get_service),
):
    """
    Checkout: zapisuje niezmienna kopie linii i czysci koszyk w jednej transakcji.
    """
    return svc.create_order(
        owner_id=identity.subject_id,
        order_items=[line.model_dump() for line in payload.order_items],
        shipping_address=payload.shipping_address.model_dump(),
        total_price=payload.total_price,
        clear_cart=payload.clear_cart,
    )


@router.get("/user", response_model=List[OrderOut])
def get_my_orders(
    identity: Identity = Depends(current_identity),
    svc: OrderService = Depends(get_service),
):
    return svc.list_by_user(identity.subject_id)


@router.get("", response_model=List[OrderOut])
def list_orders(
    _: Identity = Depends(admin_identity),
    svc: OrderService = Depends(get_service),
):
    return svc.list_all()


@router.get("/get/count", response_model=CountOut)
def count_orders(
    _: Identity = Depends(admin_identity),
    svc: OrderService = Depends(get_service),
):
    return {"count": svc.count()}


@router.get("/get/totalsales", response_model=TotalSalesOut)
def total_sales(
    _: Identity = Depends(admin_identity),
    svc: OrderService = Depends(get_service),
):
    return {"totalsales": svc.total_sales()}


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    identity: Identity = Depends(current_identity),
    svc: OrderService = Depends(get_service),
):
    return svc.get_order(order_id, identity)


@router.put("/{order_id}", response_model=OrderOut)
def update_order_status(
    order_id: int,
    payload: OrderStatusIn,
    identity: Identity = Depends(current_identity),
    svc: OrderService = Depends(get_service),
):
    return svc.set_status(order_id, payload.status, identity)


@router.delete("/{order_id}", response_model=MessageOut)
def delete_order(
    order_id: int,
    identity: Identity = Depends(current_identity),
    svc: OrderService = Depends(get_service),
):
    svc.delete_order(order_id, identity)
    return {"message": "the order is deleted"}
