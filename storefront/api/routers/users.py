from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_user
from storefront.api.errors import to_http
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.exceptions import StorefrontError
from storefront.domain.schemas import PermissionsUpdate, UserRead
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=List[UserRead])
def list_users(user: UserModel = Depends(require_user), db: Session = Depends(get_db)):
    try:
        return UserService(db).list_users(user)
    except StorefrontError as e:
        raise to_http(e)


@router.put("/{user_id}/permissions", response_model=UserRead)
def update_permissions(
    user_id: int,
    payload: PermissionsUpdate,
    user: UserModel = Depends(require_user),
    db: Session = Depends(get_db),
):
    try:
        return UserService(db).update_permissions(user, user_id, payload.permissions)
    except StorefrontError as e:
        raise to_http(e)
