from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from storefront.db import Base
from storefront.models.product import Product


class CartItem(Base):
    __tablename__ = "cart_items"
    __table_args__ = (
        UniqueConstraint("cart_id", "product_id", name="uq_cart_items_product"),
        CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),
    )
    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(
        Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id = Column(
        String(64), ForeignKey("products.id"), nullable=False, index=True
    )
    quantity = Column(Integer, nullable=False, default=1)
    price_snapshot = Column(
        Integer, nullable=False, default=0
    )  # price at time of add, in rupiah

    cart = relationship("Cart", back_populates="items")
    product = relationship(Product)

    @property
    def name(self) -> str:
        return self.product.name

    @property
    def price(self) -> int:
        return self.price_snapshot
