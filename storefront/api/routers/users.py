from typing import List

from fastapi import APIRouter, Depends

from storefront.api.deps import admin_identity, current_identity
from storefront.api.routers.auth import get_user_service
from storefront.domain.schemas import AuthOut, CountOut, LoginIn, RegisterIn, UserRead, UserUpdate
from storefront.services.token_service import Identity
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, service: UserService = Depends(get_user_service)):
    return service.register(payload.name, payload.email, payload.password)


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, service: UserService = Depends(get_user_service)):
    return service.login(payload.email, payload.password)


@router.get("/me", response_model=UserRead)
def get_me(
    identity: Identity = Depends(current_identity),
    service: UserService = Depends(get_user_service),
):
    return service.get_user(identity.subject_id)


@router.put("/me", response_model=UserRead)
def update_me(
    payload: UserUpdate,
    identity: Identity = Depends(current_identity),
    service: UserService = Depends(get_user_service),
):
    return service.update_profile(identity.subject_id, payload.model_dump(exclude_unset=True))


@router.get("", response_model=List[UserRead])
def list_users(
    _: Identity = Depends(admin_identity),
    service: UserService = Depends(get_user_service),
):
    return service.list_users()


@router.get("/get/count", response_model=CountOut)
def count_users(
    _: Identity = Depends(admin_identity),
    service: UserService = Depends(get_user_service),
):
    return {"count": service.count()}
