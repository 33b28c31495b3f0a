# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from storefront.api.deps import current_identity
from storefront.data.database import get_db
from storefront.domain.schemas import AuthOut, GoogleLoginIn, LoginIn, MessageOut, RegisterIn
from storefront.services.token_service import Identity
from storefront.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def get_user_service(request: Request, db: Session = Depends(get_db)) -> UserService:
    return UserService(
        db=db,
        token_service=request.app.state.token_service,
        google=request.app.state.google,
    )


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, svc: UserService = Depends(get_user_service)):
    return svc.register(payload.name, payload.email, payload.password)


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, svc: UserService = Depends(get_user_service)):
    return svc.login(payload.email, payload.password)


@router.post("/google", response_model=AuthOut)
def google_login(payload: GoogleLoginIn, svc: UserService = Depends(get_user_service)):
    return svc.google_login(payload.credential)


@router.post("/logout", response_model=MessageOut)
def logout(request: Request, identity: Identity = Depends(current_identity)):
    #przy domyslnym NeverRevoked token dalej dziala do wygasniecia
    if identity.token_id:
        request.app.state.revocation.revoke(identity.token_id, identity.expires_at)
    return {"message": "Logged out"}
