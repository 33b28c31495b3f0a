#storefront/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import current_identity, get_catalog
from storefront.data.database import get_db
from storefront.domain.schemas import CartItemIn, CartOut, CartQuantityIn, MessageOut
from storefront.services.cart_service import CartService
from storefront.services.catalog import Catalog
from storefront.services.token_service import Identity

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session = Depends(get_db), catalog: Catalog = Depends(get_catalog)):
    return CartService(db=db, catalog=catalog)


#wlasciciel koszyka zawsze z tokena, nigdy z body ani sciezki
@router.get("", response_model=CartOut)
def get_cart(
    identity: Identity = Depends(current_identity),
    svc: CartService = Depends(get_service),
):
    return {"items": svc.get_or_create_cart(identity.subject_id)}


@router.post("", response_model=CartOut)
def add_item(
    payload: CartItemIn,
    identity: Identity = Depends(current_identity),
    svc: CartService = Depends(get_service),
):
    return {"items": svc.add_item(identity.subject_id, payload.product_id, payload.quantity)}


@router.put("/{product_id}", response_model=CartOut)
def set_quantity(
    product_id: str,
    payload: CartQuantityIn,
    identity: Identity = Depends(current_identity),
    svc: CartService = Depends(get_service),
):
    return {"items": svc.set_quantity(identity.subject_id, product_id, payload.quantity)}


@router.delete("/{product_id}", response_model=CartOut)
def remove_item(
    product_id: str,
    identity: Identity = Depends(current_identity),
    svc: CartService = Depends(get_service),
):
    return {"items": svc.remove_item(identity.subject_id, product_id)}


@router.delete("", response_model=MessageOut)
def clear_cart(
    identity: Identity = Depends(current_identity),
    svc: CartService = Depends(get_service),
):
    svc.clear(identity.subject_id)
    return {"message": "Cart cleared"}
