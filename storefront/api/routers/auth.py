# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from storefront.api.deps import RequestContext, get_context
from storefront.api.errors import to_http
from storefront.data.database import get_db
from storefront.domain.exceptions import StorefrontError
from storefront.domain.schemas import (
    Message,
    RequestResetIn,
    ResetPasswordIn,
    SigninIn,
    SignupIn,
    UserRead,
)
from storefront.services.security import issue_session_token
from storefront.services.user_service import UserService
from storefront.utils.settings import SESSION_COOKIE_NAME, SESSION_MAX_AGE_SECONDS

router = APIRouter(prefix="/auth", tags=["auth"])


def set_session_cookie(response: Response, user_id: int) -> None:
    response.set_cookie(
        SESSION_COOKIE_NAME,
        issue_session_token(user_id),
        max_age=SESSION_MAX_AGE_SECONDS,
        httponly=True,
        samesite="lax",
    )


@router.post("/signup", response_model=UserRead, status_code=201)
def signup(payload: SignupIn, response: Response, db: Session = Depends(get_db)):
    try:
        user = UserService(db).signup(payload)
    except StorefrontError as e:
        raise to_http(e)
    set_session_cookie(response, user.id)
    return user


@router.post("/signin", response_model=UserRead)
def signin(payload: SigninIn, response: Response, db: Session = Depends(get_db)):
    try:
        user = UserService(db).signin(payload)
    except StorefrontError as e:
        raise to_http(e)
    set_session_cookie(response, user.id)
    return user


@router.post("/signout", response_model=Message)
def signout(response: Response):
    response.delete_cookie(SESSION_COOKIE_NAME)
    return {"message": "Goodbye!"}


@router.get("/me", response_model=UserRead | None)
def me(ctx: RequestContext = Depends(get_context)):
    """Zalogowany uzytkownik albo null."""
    return ctx.user


@router.post("/request-reset", response_model=Message)
def request_reset(payload: RequestResetIn, db: Session = Depends(get_db)):
    try:
        UserService(db).request_reset(payload.email)
    except StorefrontError as e:
        raise to_http(e)
    return {"message": "Thanks"}


@router.post("/reset-password", response_model=UserRead)
def reset_password(payload: ResetPasswordIn, response: Response, db: Session = Depends(get_db)):
    try:
        user = UserService(db).reset_password(payload)
    except StorefrontError as e:
        raise to_http(e)
    set_session_cookie(response, user.id)
    return user
