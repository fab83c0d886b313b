# storefront/api/routers/items.py
from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import require_user
from storefront.api.errors import to_http
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.exceptions import StorefrontError
from storefront.domain.schemas import ItemCreate, ItemOut, ItemsCount, ItemUpdate
from storefront.services.item_service import ItemService

router = APIRouter(prefix="/items", tags=["items"])


@router.get("/", response_model=List[ItemOut])
def list_items(
    page: int = Query(1, ge=1),
    search: str | None = Query(None, description="Fragment tytulu lub opisu"),
    db: Session = Depends(get_db),
):
    return ItemService(db).list_items(page=page, search=search)


@router.get("/count", response_model=ItemsCount)
def count_items(search: str | None = Query(None), db: Session = Depends(get_db)):
    return {"count": ItemService(db).count_items(search=search)}


@router.get("/{item_id}", response_model=ItemOut)
def get_item(item_id: int, db: Session = Depends(get_db)):
    try:
        return ItemService(db).get_item(item_id)
    except StorefrontError as e:
        raise to_http(e)


@router.post("/", response_model=ItemOut, status_code=201)
def create_item(
    payload: ItemCreate,
    user: UserModel = Depends(require_user),
    db: Session = Depends(get_db),
):
    return ItemService(db).create_item(user, payload)


@router.patch("/{item_id}", response_model=ItemOut)
def update_item(
    item_id: int,
    payload: ItemUpdate,
    user: UserModel = Depends(require_user),
    db: Session = Depends(get_db),
):
    try:
        return ItemService(db).update_item(user, item_id, payload)
    except StorefrontError as e:
        raise to_http(e)


@router.delete("/{item_id}", response_model=ItemOut)
def delete_item(
    item_id: int,
    user: UserModel = Depends(require_user),
    db: Session = Depends(get_db),
):
    try:
        return ItemService(db).delete_item(user, item_id)
    except StorefrontError as e:
        raise to_http(e)
