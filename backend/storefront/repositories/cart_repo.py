from sqlalchemy.orm import Session
from typing import Optional
from storefront.models.cart import Cart
from storefront.models.cart_item import CartItem

class CartRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_by_uuid(self, cart_uuid: str) -> Optional[Cart]:
        return self.db.query(Cart).filter(Cart.cart_uuid == cart_uuid, Cart.checked_out == False).first()

    def create_guest_cart(self, cart_uuid: str) -> Cart:
        c = Cart(cart_uuid=cart_uuid)
        self.db.add(c)
        self.db.flush()
        return c

    def find_item(self, cart: Cart, product_id: str) -> Optional[CartItem]:
        return next((it for it in cart.items if it.product_id == product_id), None)

    def add_or_increment_item(self, cart: Cart, product_id: str, qty: int, price_snapshot: int) -> CartItem:
        item = self.find_item(cart, product_id)
        if item:
            item.quantity += qty
        else:
            item = CartItem(cart_id=cart.id, product_id=product_id, quantity=qty, price_snapshot=price_snapshot)
            cart.items.append(item)
        self.db.flush()
        return item

    def set_quantity(self, item: CartItem, qty: int) -> CartItem:
        item.quantity = qty
        self.db.flush()
        return item

    def remove_item(self, cart: Cart, product_id: str):
        it = self.find_item(cart, product_id)
        if it:
            cart.items.remove(it)
            self.db.flush()
        return

    def clear(self, cart: Cart):
        cart.items.clear()
        self.db.flush()
