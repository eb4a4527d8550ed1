from typing import Iterable, List, Optional

from sqlalchemy.orm import Session

from storefront.models.transaction import Transaction
from storefront.repositories.transaction_repo import TransactionRepository
from storefront.services import ledger
from storefront.services.exceptions import NotFoundError, ValidationError
from storefront.utils.log import get_logger

log = get_logger("storefront.transactions", prefix="transactions")


class TransactionService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = TransactionRepository(db)

    def list_transactions(self) -> List[Transaction]:
        """Display order: newest date first, same-day entries most recently recorded first."""
        rows = list(reversed(self.repo.all()))
        return sorted(rows, key=lambda t: t.date, reverse=True)

    def get(self, tx_id: str) -> Transaction:
        tx = self.repo.get(tx_id)
        if not tx:
            raise NotFoundError(f"Transaction not found: {tx_id}")
        return tx

    def record_transaction(
        self,
        tx_id: str,
        date,
        customer_name: str,
        items: Iterable[dict],
        total_amount: int,
        paid_amount: Optional[int] = None,
        customer_address: Optional[str] = None,
        discount: Optional[int] = None,
        settled: bool = False,
    ) -> Transaction:
        """Operator entry of a sale made outside the storefront."""
        items = list(items)
        if not items:
            raise ValidationError("A transaction needs at least one item")
        if not (customer_name or "").strip():
            raise ValidationError("Customer name is required")
        if self.repo.exists(tx_id):
            raise ValidationError(f"Transaction id already exists: {tx_id}")
        tx = Transaction.new(
            id=tx_id,
            date=date,
            customer_name=customer_name.strip(),
            customer_address=customer_address,
            items=items,
            total_amount=total_amount,
            paid_amount=paid_amount,
            discount=discount,
            settled=settled,
        )
        self.repo.add(tx)
        self.db.commit()
        log.info(f"recorded {tx.id} status={tx.status}")
        return tx

    def edit_transaction(self, tx_id: str, new_total: int, new_paid: int) -> Transaction:
        """
        Replace the bill and the amount received; status follows. Items, date
        and customer are untouched. Paying more than the total is allowed.
        """
        tx = self.get(tx_id)
        status = tx.set_amounts(new_total, new_paid)
        self.db.commit()
        log.info(f"edited {tx.id} total={new_total} paid={new_paid} status={status.value}")
        return tx

    @staticmethod
    def to_dict(tx: Transaction) -> dict:
        return {
            "id": tx.id,
            "date": tx.date_iso,
            "customer_name": tx.customer_name,
            "customer_address": tx.customer_address,
            "total_amount": tx.total_amount,
            "discount": tx.discount,
            "paid_amount": tx.paid_amount,
            "status": tx.status,
            "remaining": ledger.remaining_balance(tx),
            "overpayment": ledger.overpayment(tx),
            "items": [
                {"name": it.name, "quantity": it.quantity, "price": it.price}
                for it in tx.items
            ],
        }


def build_invoice(tx: Transaction) -> dict:
    """Everything an invoice needs, amounts both raw and formatted as rupiah."""
    paid = ledger.effective_paid(tx)
    discount = tx.discount or 0
    lines = [
        {
            "name": it.name,
            "quantity": it.quantity,
            "price": it.price,
            "line_total": it.line_total,
            "line_total_label": ledger.format_rupiah(it.line_total),
        }
        for it in tx.items
    ]
    amounts = {
        "subtotal": tx.subtotal,
        "discount": discount,
        "total": tx.total_amount,
        "paid": paid,
        "remaining": ledger.remaining_balance(tx),
        "overpayment": ledger.overpayment(tx),
    }
    return {
        "invoice_no": tx.id,
        "date": tx.date_iso,
        "customer_name": tx.customer_name,
        "customer_address": tx.customer_address,
        "status": tx.status,
        "lines": lines,
        **amounts,
        "labels": {k: ledger.format_rupiah(v) for k, v in amounts.items()},
    }
