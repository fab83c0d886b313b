# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import List
from datetime import datetime

from storefront.domain.permissions import Permission


class Message(BaseModel):
    message: str


# ---------- users / auth ----------

class SignupIn(BaseModel):
    """Schema dla rejestracji."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=1)


class SigninIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RequestResetIn(BaseModel):
    email: EmailStr


class ResetPasswordIn(BaseModel):
    reset_token: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    confirm_password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    """Schema dla uzytkownika (response). Bez hasla i tokenu resetu."""

    id: int
    name: str
    email: str
    permissions: List[Permission]

    model_config = ConfigDict(from_attributes=True)


class PermissionsUpdate(BaseModel):
    permissions: List[Permission]


# ---------- items ----------

class ItemCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: int = Field(..., ge=0, description="Cena w najmniejszej jednostce waluty")
    image: str | None = None
    large_image: str | None = None


class ItemUpdate(BaseModel):
    title: str | None = Field(None, min_length=1)
    description: str | None = Field(None, min_length=1)
    price: int | None = Field(None, ge=0)
    image: str | None = None
    large_image: str | None = None


class ItemOut(BaseModel):
    id: int
    title: str
    description: str
    price: int
    image: str | None = None
    large_image: str | None = None
    user_id: int | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ItemsCount(BaseModel):
    count: int


# ---------- cart ----------

class CartItemOut(BaseModel):
    """Schema dla produktu w koszyku (response)."""

    id: int
    quantity: int
    item: ItemOut

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    user_id: int
    items: List[CartItemOut]
    total: int


# ---------- orders ----------

class CheckoutIn(BaseModel):
    """
    Jedyne wejscie checkoutu to jednorazowy token platnosci.
    Suma jest zawsze liczona po stronie serwera.
    """

    token: str = Field(..., min_length=1)


class OrderItemOut(BaseModel):
    id: int
    title: str
    description: str
    image: str | None = None
    large_image: str | None = None
    price: int
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: int
    user_id: int
    total: int
    charge: str
    items: List[OrderItemOut]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
