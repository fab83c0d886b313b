from sqlalchemy import Column, Integer, ForeignKey, String, Text, DateTime
from datetime import datetime, timezone

from storefront.data.database import Base


class ItemModel(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    image = Column(String, nullable=True)
    large_image = Column(String, nullable=True)

    # cena w groszach / centach
    price = Column(Integer, nullable=False)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
