from typing import List, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from storefront.models.product import Product
from storefront.repositories.category_repo import CategoryRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.services.exceptions import NotFoundError, ValidationError
from storefront.services.ledger import format_rupiah
from storefront.utils.log import get_logger

log = get_logger("storefront.catalog", prefix="catalog")

PRODUCT_FIELDS = ("name", "category", "price", "image", "description", "stock")


def unit_suffix(category: str) -> str:
    if "Undangan" in category or "Buku" in category:
        return "/ pcs"
    if "Kartu" in category:
        return "/ Box"
    return ""


def display_price(price: int, category: str) -> str:
    """Price label shown next to a product, e.g. "Rp 5.000 / pcs"."""
    return f"{format_rupiah(price)} {unit_suffix(category)}".strip()


class CatalogService:
    def __init__(self, db: Session):
        self.db = db
        self.products = ProductRepository(db)
        self.categories = CategoryRepository(db)

    # products

    def list_products(self, q: Optional[str] = None) -> List[Product]:
        return self.products.list(q=q)

    def get_product(self, product_id: str) -> Product:
        p = self.products.get(product_id)
        if not p:
            raise NotFoundError("Product not found")
        return p

    def _validate(self, data: dict):
        if not (data.get("name") or "").strip():
            raise ValidationError("Product name is required")
        if int(data.get("price") or 0) < 0:
            raise ValidationError("Price must not be negative")
        if int(data.get("stock") or 0) < 0:
            raise ValidationError("Stock must not be negative")

    def add_product(self, data: dict) -> Product:
        """
        data: {id?, name, category, price, image, description, stock}
        display_price is always derived from price and category.
        """
        self._validate(data)
        product_id = data.get("id") or f"PROD-{uuid4().hex[:10].upper()}"
        if self.products.get(product_id):
            raise ValidationError(f"Product id already exists: {product_id}")
        fields = {k: data.get(k) for k in PRODUCT_FIELDS}
        fields["category"] = fields["category"] or ""
        fields["price"] = int(fields["price"] or 0)
        fields["stock"] = int(fields["stock"] or 0)
        p = Product(id=product_id, display_price=display_price(fields["price"], fields["category"]), **fields)
        self.products.add(p)
        self.db.commit()
        log.info(f"product added id={p.id} name={p.name!r}")
        return p

    def update_product(self, product_id: str, data: dict) -> Product:
        """Replace a product with a full snapshot; partial patches are not supported."""
        p = self.get_product(product_id)
        self._validate(data)
        fields = {k: data.get(k) for k in PRODUCT_FIELDS}
        fields["category"] = fields["category"] or ""
        fields["price"] = int(fields["price"] or 0)
        fields["stock"] = int(fields["stock"] or 0)
        fields["display_price"] = display_price(fields["price"], fields["category"])
        self.products.replace(p, **fields)
        self.db.commit()
        log.info(f"product updated id={p.id} stock={p.stock}")
        return p

    # categories

    def list_categories(self, q: Optional[str] = None) -> List[str]:
        return self.categories.list_names(q=q)

    def add_category(self, name: str) -> List[str]:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        if not self.categories.get(name):
            self.categories.add(name)
            self.db.commit()
            log.info(f"category added {name!r}")
        return self.list_categories()

    def delete_category(self, name: str) -> List[str]:
        """Products still pointing at the category keep it as free text."""
        c = self.categories.get(name)
        if not c:
            raise NotFoundError("Category not found")
        self.categories.delete(c)
        self.db.commit()
        log.info(f"category deleted {name!r}")
        return self.list_categories()

    @staticmethod
    def to_dict(p: Product) -> dict:
        return {
            "id": p.id,
            "name": p.name,
            "category": p.category,
            "price": p.price,
            "display_price": p.display_price,
            "image": p.image,
            "description": p.description,
            "stock": p.stock,
        }
