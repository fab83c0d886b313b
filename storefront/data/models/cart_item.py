from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("items.id", ondelete="CASCADE"), nullable=False)

    quantity = Column(Integer, nullable=False, default=1)

    user = relationship("UserModel", back_populates="cart")
    item = relationship("ItemModel", lazy="joined")

    # jeden wiersz na (user, item), upsert opiera sie na tym ograniczeniu
    __table_args__ = (UniqueConstraint("user_id", "item_id", name="u_cart_user_item"),)
