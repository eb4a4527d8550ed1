"""
Ledger and report arithmetic.

Every function here is pure: it reads transactions/products (ORM instances or
any object with the same attributes) and never mutates them, so reports can be
recomputed on every request.

Dates are `datetime.date` internally. ISO `YYYY-MM-DD` strings are accepted
anywhere a date is expected, since that is the format exchanged with clients.
"""
import enum
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from storefront.services.exceptions import ValidationError


class PaymentStatus(str, enum.Enum):
    LUNAS = "Lunas"  # paid in full
    DP = "DP"  # down payment, balance outstanding
    PENDING = "Pending"  # nothing paid


class ReportMode(str, enum.Enum):
    DAILY = "daily"
    RANGE = "range"
    MONTHLY = "monthly"
    ANNUAL = "annual"


SAFE_STOCK_THRESHOLD = 50
CRITICAL_STOCK_THRESHOLD = 10

MONTH_NAMES = [
    "Januari", "Februari", "Maret", "April", "Mei", "Juni",
    "Juli", "Agustus", "September", "Oktober", "November", "Desember",
]


@dataclass(frozen=True)
class MonthlyRecap:
    month: int
    name: str
    transaction_count: int
    revenue: int


@dataclass(frozen=True)
class Receivable:
    transaction: Any
    remaining: int


def derive_status(total: int, paid: int) -> PaymentStatus:
    """
    Payment status for a bill of `total` with `paid` received so far.
    Overpayment is still Lunas; a zero bill is Lunas.
    """
    if paid >= total:
        return PaymentStatus.LUNAS
    if paid > 0:
        return PaymentStatus.DP
    return PaymentStatus.PENDING


def as_date(value) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str) and len(value) == 10:
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def _as_int(value, field: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field} {value!r}")


def _status(tx) -> PaymentStatus:
    return PaymentStatus(tx.status)


def effective_paid(tx) -> int:
    """Amount received; records without a recorded payment count as fully paid only when Lunas."""
    if tx.paid_amount is not None:
        return tx.paid_amount
    return tx.total_amount if _status(tx) == PaymentStatus.LUNAS else 0


def remaining_balance(tx) -> int:
    return max(0, tx.total_amount - effective_paid(tx))


def overpayment(tx) -> int:
    return max(0, effective_paid(tx) - tx.total_amount)


def filter_by_period(transactions: Iterable, mode, params: Optional[Dict] = None) -> List:
    """
    Transactions falling in a daily, range or monthly window, newest first.

    params:
      daily   -> {"date": "2024-05-01"}
      range   -> {"start": "2024-05-01", "end": "2024-05-31"}  (inclusive, not validated)
      monthly -> {"month": 5, "year": 2024}

    Transactions on the same date keep their input order.
    """
    mode = ReportMode(mode)
    params = params or {}

    if mode == ReportMode.ANNUAL:
        raise ValueError("annual reports are aggregated per month, use aggregate_annual")

    if mode == ReportMode.DAILY:
        day = as_date(params.get("date"))

        def keep(d):
            return d == day

    elif mode == ReportMode.RANGE:
        start = as_date(params.get("start"))
        end = as_date(params.get("end"))

        def keep(d):
            return start <= d <= end

    else:
        month = _as_int(params.get("month"), "month")
        year = _as_int(params.get("year"), "year")

        def keep(d):
            return d.month == month and d.year == year

    matches = [t for t in transactions if keep(as_date(t.date))]
    # sorted() is stable with reverse=True, ties keep input order
    return sorted(matches, key=lambda t: as_date(t.date), reverse=True)


def revenue_contribution(tx) -> int:
    status = _status(tx)
    if status == PaymentStatus.PENDING:
        return 0
    if tx.paid_amount is not None:
        return tx.paid_amount
    return tx.total_amount if status == PaymentStatus.LUNAS else 0


def aggregate_revenue(transactions: Iterable) -> int:
    return sum(revenue_contribution(t) for t in transactions)


def aggregate_annual(transactions: Iterable, year) -> List[MonthlyRecap]:
    """Twelve month buckets (always all twelve) of paid/partially paid transactions in `year`."""
    year = _as_int(year, "year")
    counts = [0] * 12
    revenue = [0] * 12
    for t in transactions:
        d = as_date(t.date)
        if d.year != year or _status(t) == PaymentStatus.PENDING:
            continue
        counts[d.month - 1] += 1
        revenue[d.month - 1] += revenue_contribution(t)
    return [
        MonthlyRecap(month=i + 1, name=MONTH_NAMES[i], transaction_count=counts[i], revenue=revenue[i])
        for i in range(12)
    ]


def annual_totals(recap: Iterable[MonthlyRecap]) -> Tuple[int, int]:
    recap = list(recap)
    return (
        sum(m.transaction_count for m in recap),
        sum(m.revenue for m in recap),
    )


def list_receivables(transactions: Iterable) -> List[Receivable]:
    return [
        Receivable(transaction=t, remaining=t.total_amount - (t.paid_amount or 0))
        for t in transactions
        if _status(t) == PaymentStatus.DP
    ]


def total_receivable(receivables: Iterable[Receivable]) -> int:
    return sum(r.remaining for r in receivables)


def compute_sold(product, transactions: Iterable) -> int:
    """Units of `product` on any transaction, matched by exact item name, whatever the status."""
    return sum(
        item.quantity
        for t in transactions
        for item in t.items
        if item.name == product.name
    )


def total_stock_estimate(product, transactions: Iterable) -> int:
    return product.stock + compute_sold(product, transactions)


def stock_label(stock: int) -> str:
    if stock > SAFE_STOCK_THRESHOLD:
        return "safe"
    if stock > CRITICAL_STOCK_THRESHOLD:
        return "low"
    return "critical"


def format_rupiah(amount: int) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}Rp {abs(amount):,}".replace(",", ".")
