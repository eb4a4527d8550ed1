from typing import Dict, Optional

from sqlalchemy.orm import Session

from storefront.repositories.product_repo import ProductRepository
from storefront.repositories.transaction_repo import TransactionRepository
from storefront.services import ledger
from storefront.services.ledger import ReportMode
from storefront.services.transaction_service import TransactionService


class ReportService:
    """Back-office reports, recomputed from the full ledger on every call."""

    def __init__(self, db: Session):
        self.db = db
        self.transactions = TransactionRepository(db)
        self.products = ProductRepository(db)

    def period_report(self, mode, params: Optional[Dict] = None) -> dict:
        mode = ReportMode(mode)
        params = params or {}
        if mode == ReportMode.ANNUAL:
            return self.annual_report(params.get("year"))
        rows = ledger.filter_by_period(self.transactions.all(), mode, params)
        return {
            "mode": mode.value,
            "transactions": [TransactionService.to_dict(t) for t in rows],
            "transaction_count": len(rows),
            "revenue": ledger.aggregate_revenue(rows),
        }

    def annual_report(self, year) -> dict:
        recap = ledger.aggregate_annual(self.transactions.all(), year)
        count, revenue = ledger.annual_totals(recap)
        return {
            "mode": ReportMode.ANNUAL.value,
            "year": int(year),
            "months": [
                {
                    "month": m.month,
                    "name": m.name,
                    "transaction_count": m.transaction_count,
                    "revenue": m.revenue,
                }
                for m in recap
            ],
            "transaction_count": count,
            "revenue": revenue,
        }

    def receivables_report(self) -> dict:
        receivables = ledger.list_receivables(self.transactions.all())
        return {
            "items": [
                {
                    **TransactionService.to_dict(r.transaction),
                    "remaining": r.remaining,
                }
                for r in receivables
            ],
            "total_receivable": ledger.total_receivable(receivables),
        }

    def stock_report(self, q: Optional[str] = None) -> dict:
        txs = self.transactions.all()
        rows = []
        for p in self.products.list(q=q):
            sold = ledger.compute_sold(p, txs)
            rows.append(
                {
                    "id": p.id,
                    "name": p.name,
                    "category": p.category,
                    "display_price": p.display_price,
                    "total_stock": p.stock + sold,
                    "sold": sold,
                    "stock": p.stock,
                    "label": ledger.stock_label(p.stock),
                }
            )
        return {"items": rows}
