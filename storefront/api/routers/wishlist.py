# storefront/api/routers/wishlist.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import current_identity, get_catalog
from storefront.data.database import get_db
from storefront.domain.schemas import MessageOut, WishlistIn, WishlistItemOut
from storefront.services.catalog import Catalog
from storefront.services.token_service import Identity
from storefront.services.wishlist_service import WishlistService

router = APIRouter(prefix="/wishlist", tags=["wishlist"])


def get_service(db: Session = Depends(get_db), catalog: Catalog = Depends(get_catalog)):
    return WishlistService(db=db, catalog=catalog)


@router.post("", response_model=WishlistItemOut, status_code=201)
def add_to_wishlist(
    payload: WishlistIn,
    identity: Identity = Depends(current_identity),
    svc: WishlistService = Depends(get_service),
):
    return svc.add(identity.subject_id, payload.product_id, payload.note)


@router.get("", response_model=List[WishlistItemOut])
def get_wishlist(
    identity: Identity = Depends(current_identity),
    svc: WishlistService = Depends(get_service),
):
    return svc.list(identity.subject_id)


@router.delete("/{entry_id}", response_model=MessageOut)
def remove_from_wishlist(
    entry_id: int,
    identity: Identity = Depends(current_identity),
    svc: WishlistService = Depends(get_service),
):
    svc.remove(identity, entry_id)
    return {"message": "Wishlist item removed"}
