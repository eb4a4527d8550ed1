from storefront.db import Base
from storefront.models.cart_item import CartItem
from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.orm import relationship


class Cart(Base):
    __tablename__ = "carts"
    id = Column(Integer, primary_key=True, index=True)
    cart_uuid = Column(
        String(64), unique=True, index=True, nullable=False
    )  # guest identifier, kept in a cookie
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    checked_out = Column(Boolean, default=False, nullable=False)

    items = relationship(
        CartItem,
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItem.id",
    )

    @property
    def subtotal(self) -> int:
        return sum(it.price_snapshot * it.quantity for it in self.items)

    @property
    def item_count(self) -> int:
        return sum(it.quantity for it in self.items)
