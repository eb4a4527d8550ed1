from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from storefront.models.category import Category


class CategoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, name: str) -> Optional[Category]:
        return self.db.query(Category).filter(Category.name == name).first()

    def list_names(self, q: Optional[str] = None) -> List[str]:
        query = self.db.query(Category)
        if q:
            query = query.filter(func.lower(Category.name).like(f"%{q.lower()}%"))
        return [c.name for c in query.order_by(Category.id).all()]

    def add(self, name: str) -> Category:
        c = Category(name=name)
        self.db.add(c)
        self.db.flush()
        return c

    def delete(self, category: Category):
        self.db.delete(category)
        self.db.flush()
