from datetime import date as date_type
from typing import Iterable, Optional

from sqlalchemy import Column, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from storefront.db import Base
from storefront.services.ledger import PaymentStatus, as_date, derive_status


class Transaction(Base):
    """
    A sale recorded in the ledger.

    `total_amount`, `paid_amount` and `status` are read-only: they are written
    together by `new()` and `set_amounts()` so the status always matches the
    payment. A record may leave `paid_amount` unrecorded, in which case it is
    either settled (Lunas) or unpaid (Pending).
    """

    __tablename__ = "transactions"
    seq = Column(Integer, primary_key=True, autoincrement=True)  # insertion order
    id = Column(String(32), unique=True, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    customer_name = Column(String(256), nullable=False)
    customer_address = Column(Text, nullable=True)
    discount = Column(Integer, nullable=True)
    _total_amount = Column("total_amount", Integer, nullable=False, default=0)
    _paid_amount = Column("paid_amount", Integer, nullable=True)
    _status = Column("status", String(16), nullable=False)

    items = relationship(
        "TransactionItem",
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionItem.position",
    )

    @classmethod
    def new(
        cls,
        id: str,
        date,
        customer_name: str,
        items: Iterable[dict],
        total_amount: int,
        paid_amount: Optional[int] = None,
        customer_address: Optional[str] = None,
        discount: Optional[int] = None,
        settled: bool = False,
    ) -> "Transaction":
        """
        items: iterable of {name, quantity, price}
        settled: only consulted when paid_amount is None; marks an unrecorded
                 payment as received in full.
        """
        tx = cls(
            id=id,
            date=as_date(date),
            customer_name=customer_name,
            customer_address=customer_address,
            discount=discount,
        )
        tx.items = [
            TransactionItem(
                position=i, name=it["name"], quantity=it["quantity"], price=it["price"]
            )
            for i, it in enumerate(items)
        ]
        if paid_amount is None:
            tx._total_amount = total_amount
            tx._paid_amount = None
            tx._status = (
                PaymentStatus.LUNAS.value if settled else derive_status(total_amount, 0).value
            )
        else:
            tx.set_amounts(total_amount, paid_amount)
        return tx

    def set_amounts(self, total_amount: int, paid_amount: int) -> PaymentStatus:
        status = derive_status(total_amount, paid_amount)
        self._total_amount = total_amount
        self._paid_amount = paid_amount
        self._status = status.value
        return status

    @property
    def total_amount(self) -> int:
        return self._total_amount

    @property
    def paid_amount(self) -> Optional[int]:
        return self._paid_amount

    @property
    def status(self) -> str:
        return self._status

    @property
    def subtotal(self) -> int:
        return sum(it.line_total for it in self.items)

    @property
    def date_iso(self) -> str:
        d = self.date
        return d.isoformat() if isinstance(d, date_type) else str(d)

    def __repr__(self):
        return f"<Transaction id={self.id} status={self._status} total={self._total_amount}>"


class TransactionItem(Base):
    __tablename__ = "transaction_items"
    id = Column(Integer, primary_key=True, autoincrement=True)
    transaction_seq = Column(
        Integer, ForeignKey("transactions.seq", ondelete="CASCADE"), nullable=False, index=True
    )
    position = Column(Integer, nullable=False, default=0)
    name = Column(String(256), nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Integer, nullable=False)

    transaction = relationship("Transaction", back_populates="items")

    @property
    def line_total(self) -> int:
        return self.price * self.quantity
