from typing import List, Optional

from storefront.models.product import Product
from sqlalchemy import func, or_
from sqlalchemy.orm import Session


class ProductRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: str) -> Optional[Product]:
        return self.db.get(Product, product_id)

    def get_by_name(self, name: str) -> Optional[Product]:
        return self.db.query(Product).filter(Product.name == name).first()

    def list(self, q: Optional[str] = None) -> List[Product]:
        """
        All products ordered by name, optionally narrowed to those whose
        name or category contains `q` (case-insensitive).
        """
        query = self.db.query(Product)
        if q:
            like = f"%{q.lower()}%"
            query = query.filter(
                or_(func.lower(Product.name).like(like), func.lower(Product.category).like(like))
            )
        return query.order_by(Product.name).all()

    def add(self, product: Product) -> Product:
        self.db.add(product)
        self.db.flush()
        return product

    def replace(self, product: Product, **fields) -> Product:
        for key, value in fields.items():
            setattr(product, key, value)
        self.db.flush()
        return product
