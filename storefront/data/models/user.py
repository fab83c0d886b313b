from sqlalchemy import Column, Integer, String, BigInteger, JSON
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True, index=True)
    password = Column(String, nullable=False)

    # lista tokenow z Permission, np. ["USER", "ADMIN"]
    permissions = Column(JSON, nullable=False, default=list)

    reset_token = Column(String, nullable=True, index=True)
    # epoch w sekundach
    reset_token_expiry = Column(BigInteger, nullable=True)

    cart = relationship(
        "CartItemModel",
        back_populates="user",
        cascade="all, delete-orphan",
    )
