from sqlalchemy import CheckConstraint, Column, Integer, String, Text
from storefront.db import Base

class Product(Base):
    __tablename__ = "products"
    __table_args__ = (CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)

    id = Column(String(64), primary_key=True, index=True)
    name = Column(String(256), nullable=False, index=True)
    category = Column(String(128), nullable=False, default="")
    price = Column(Integer, nullable=False, default=0)  # rupiah
    display_price = Column(String(64), nullable=False, default="")
    image = Column(Text, nullable=True)  # URL or data URI
    description = Column(Text, nullable=True)
    stock = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<Product id={self.id} name={self.name}>"
