import os
import tempfile
from datetime import date
from typing import Iterable, Optional
from uuid import uuid4

from filelock import FileLock, Timeout
from sqlalchemy.orm import Session

from storefront.adapters.mock_gateway import MockCheckoutGateway
from storefront.config import settings
from storefront.models.transaction import Transaction
from storefront.repositories.cart_repo import CartRepository
from storefront.repositories.transaction_repo import TransactionRepository
from storefront.services.exceptions import (
    CheckoutInProgressError,
    NotFoundError,
    ValidationError,
)
from storefront.utils.log import get_logger

log = get_logger("storefront.checkout", prefix="checkout")


def parse_amount(value, field: str) -> int:
    """
    Parse a form amount. Blank means 0; anything that is not a whole number
    is rejected. Clamping to >= 0 is left to the caller.
    """
    if value is None:
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}")
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if not text:
        return 0
    try:
        return int(text)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value!r}")


def _lock_dir() -> str:
    d = settings.LOCK_DIR or os.path.join(tempfile.gettempdir(), "storefront_locks")
    os.makedirs(d, exist_ok=True)
    return d


class CheckoutService:
    def __init__(self, db: Session, gateway: Optional[MockCheckoutGateway] = None):
        self.db = db
        self.transactions = TransactionRepository(db)
        self.carts = CartRepository(db)
        self.gateway = gateway or MockCheckoutGateway(delay_ms=settings.CHECKOUT_DELAY_MS)

    def _today(self) -> date:
        return date.today()

    def _gen_transaction_id(self, today: date) -> str:
        while True:
            tx_id = f"TRX-{uuid4().hex[:8].upper()}-{today.year}"
            if not self.transactions.exists(tx_id):
                return tx_id

    def checkout(
        self,
        cart_items: Iterable,
        customer_name: str,
        customer_address: str,
        discount_input=None,
        paid_input=None,
    ) -> Transaction:
        """
        Turn cart lines into a ledger transaction.

        cart_items: objects with name, price and quantity (CartItem rows or equivalent)
        discount_input / paid_input: raw form values, blank means 0

        Raises ValidationError (nothing is written) when the customer name or
        address is blank, the cart is empty or an amount is malformed.
        Product stock is left untouched.
        """
        name = (customer_name or "").strip()
        address = (customer_address or "").strip()
        if not name or not address:
            raise ValidationError("Customer name and address are required")
        lines = [
            {"name": it.name, "quantity": int(it.quantity), "price": int(it.price)}
            for it in cart_items
        ]
        if not lines:
            raise ValidationError("Cart is empty")

        subtotal = sum(l["price"] * l["quantity"] for l in lines)
        discount = max(0, parse_amount(discount_input, "discount"))
        final_total = max(0, subtotal - discount)
        paid = max(0, parse_amount(paid_input, "paid amount"))

        today = self._today()
        tx_id = self._gen_transaction_id(today)

        # the only wait in checkout; the gateway never fails
        confirmation = self.gateway.confirm(tx_id, final_total)

        tx = Transaction.new(
            id=tx_id,
            date=today,
            customer_name=name,
            customer_address=address,
            items=lines,
            total_amount=final_total,
            paid_amount=paid,
            discount=discount if discount > 0 else None,
        )
        self.transactions.add(tx)
        self.db.commit()
        log.info(
            f"checkout {tx.id} total={final_total} paid={paid} status={tx.status} "
            f"confirmation={confirmation['confirmation_id']}"
        )
        return tx

    def checkout_cart(
        self,
        cart_uuid: Optional[str],
        customer_name: str,
        customer_address: str,
        discount_input=None,
        paid_input=None,
    ) -> Transaction:
        """
        Check out a guest cart. Only one checkout per cart may be in flight;
        the cart is emptied only after the transaction is recorded.
        """
        cart = self.carts.get_by_uuid(cart_uuid) if cart_uuid else None
        if not cart:
            raise NotFoundError("Cart not found")

        lock = FileLock(os.path.join(_lock_dir(), f"checkout_{cart.cart_uuid}.lock"))
        try:
            lock.acquire(timeout=0)
        except Timeout:
            raise CheckoutInProgressError("Checkout already in progress for this cart")
        try:
            tx = self.checkout(
                cart.items, customer_name, customer_address, discount_input, paid_input
            )
            self.carts.clear(cart)
            self.db.commit()
        finally:
            lock.release()
        return tx
