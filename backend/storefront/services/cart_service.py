import uuid
from typing import Optional

from sqlalchemy.orm import Session

from storefront.models.cart import Cart
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.product_repo import ProductRepository
from storefront.services.exceptions import NotFoundError, ValidationError


class CartService:
    def __init__(self, db: Session):
        self.db = db
        self.cart_repo = CartRepository(db)
        self.product_repo = ProductRepository(db)

    def get_or_create_cart_for_guest(self, cart_uuid: Optional[str] = None) -> Cart:
        if cart_uuid:
            c = self.cart_repo.get_by_uuid(cart_uuid)
            if c:
                return c
        # a checked-out cart's uuid is never reused
        new_uuid = uuid.uuid4().hex
        c = self.cart_repo.create_guest_cart(new_uuid)
        self.db.commit()
        return c

    def add_item(self, cart: Cart, product_id: str, qty: int = 1):
        """Add `qty` units; adding a product already in the cart increases its quantity."""
        product = self.product_repo.get(product_id)
        if not product:
            raise NotFoundError("Product not found")
        if qty <= 0:
            raise ValidationError("Quantity must be positive")
        item = self.cart_repo.add_or_increment_item(cart, product.id, qty, product.price)
        self.db.commit()
        return item

    def update_quantity(self, cart: Cart, product_id: str, qty: int):
        item = self.cart_repo.find_item(cart, product_id)
        if not item:
            raise NotFoundError("Item not in cart")
        item = self.cart_repo.set_quantity(item, max(1, qty))
        self.db.commit()
        return item

    def remove_item(self, cart: Cart, product_id: str):
        self.cart_repo.remove_item(cart, product_id)
        self.db.commit()

    def clear(self, cart: Cart):
        self.cart_repo.clear(cart)
        self.db.commit()

    @staticmethod
    def to_dict(cart: Cart) -> dict:
        return {
            "cart_uuid": cart.cart_uuid,
            "items": [
                {
                    "product_id": it.product_id,
                    "name": it.name,
                    "display_price": it.product.display_price,
                    "quantity": it.quantity,
                    "price": it.price,
                    "line_total": it.price * it.quantity,
                }
                for it in cart.items
            ],
            "item_count": cart.item_count,
            "subtotal": cart.subtotal,
        }
