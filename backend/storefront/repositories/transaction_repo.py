from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from storefront.models.transaction import Transaction


class TransactionRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, tx_id: str) -> Optional[Transaction]:
        return self.db.query(Transaction).filter(Transaction.id == tx_id).first()

    def exists(self, tx_id: str) -> bool:
        return self.get(tx_id) is not None

    def all(self) -> List[Transaction]:
        """Every transaction in insertion order, items loaded."""
        return (
            self.db.query(Transaction)
            .options(selectinload(Transaction.items))
            .order_by(Transaction.seq)
            .all()
        )

    def add(self, tx: Transaction) -> Transaction:
        self.db.add(tx)
        self.db.flush()
        return tx
