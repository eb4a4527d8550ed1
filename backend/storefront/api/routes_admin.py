from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from storefront.api.deps import admin_role, current_role
from storefront.db import get_db
from storefront.schemas.transaction_schema import TransactionEditIn, TransactionIn
from storefront.services.exceptions import NotFoundError, ValidationError
from storefront.services.ledger import ReportMode
from storefront.services.report_service import ReportService
from storefront.services.transaction_service import TransactionService, build_invoice

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(current_role)])


@router.get("/transactions", summary="List transactions, newest first")
def list_transactions(db: Session = Depends(get_db)):
    svc = TransactionService(db)
    return {"items": [TransactionService.to_dict(t) for t in svc.list_transactions()]}


@router.post(
    "/transactions",
    summary="Record a transaction by hand",
    dependencies=[Depends(admin_role)],
)
def record_transaction(payload: TransactionIn, db: Session = Depends(get_db)):
    svc = TransactionService(db)
    try:
        tx = svc.record_transaction(
            payload.id,
            payload.date,
            payload.customer_name,
            [it.model_dump() for it in payload.items],
            payload.total_amount,
            paid_amount=payload.paid_amount,
            customer_address=payload.customer_address,
            discount=payload.discount,
            settled=payload.settled,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return TransactionService.to_dict(tx)


@router.get("/transactions/{tx_id}", summary="Get transaction")
def get_transaction(tx_id: str, db: Session = Depends(get_db)):
    try:
        tx = TransactionService(db).get(tx_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TransactionService.to_dict(tx)


@router.patch(
    "/transactions/{tx_id}",
    summary="Edit total and amount paid",
    dependencies=[Depends(admin_role)],
)
def edit_transaction(tx_id: str, payload: TransactionEditIn, db: Session = Depends(get_db)):
    svc = TransactionService(db)
    try:
        tx = svc.edit_transaction(tx_id, payload.total_amount, payload.paid_amount)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return TransactionService.to_dict(tx)


@router.get("/transactions/{tx_id}/invoice", summary="Invoice data for a transaction")
def get_invoice(tx_id: str, db: Session = Depends(get_db)):
    try:
        tx = TransactionService(db).get(tx_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return build_invoice(tx)


@router.get("/reports/period", summary="Daily, range, monthly or annual income report")
def period_report(
    mode: ReportMode = Query(ReportMode.DAILY),
    date: Optional[str] = Query(None, description="YYYY-MM-DD, daily mode"),
    start: Optional[str] = Query(None, description="YYYY-MM-DD, range mode"),
    end: Optional[str] = Query(None, description="YYYY-MM-DD, range mode"),
    month: Optional[int] = Query(None, ge=1, le=12),
    year: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    params = {"date": date, "start": start, "end": end, "month": month, "year": year}
    try:
        return ReportService(db).period_report(mode, params)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/reports/annual", summary="Per-month income recap for a year")
def annual_report(year: int = Query(...), db: Session = Depends(get_db)):
    return ReportService(db).annual_report(year)


@router.get("/reports/receivables", summary="Outstanding down-payment balances")
def receivables_report(db: Session = Depends(get_db)):
    return ReportService(db).receivables_report()


@router.get("/reports/stock", summary="Stock versus sold per product")
def stock_report(q: Optional[str] = Query(None), db: Session = Depends(get_db)):
    return ReportService(db).stock_report(q=q)
