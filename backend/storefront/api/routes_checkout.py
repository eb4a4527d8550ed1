from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session
from storefront.api.routes_cart import CART_COOKIE
from storefront.db import get_db
from storefront.schemas.transaction_schema import CheckoutIn
from storefront.services.checkout_service import CheckoutService
from storefront.services.exceptions import CheckoutInProgressError, NotFoundError, ValidationError
from storefront.services.transaction_service import TransactionService, build_invoice
from storefront.utils.log import get_logger

router = APIRouter(tags=["checkout"])
log = get_logger("storefront.api.checkout", prefix="checkout")

@router.post("", summary="Check out the current cart")
def checkout(payload: CheckoutIn, request: Request, db: Session = Depends(get_db)):
    svc = CheckoutService(db)
    try:
        tx = svc.checkout_cart(
            request.cookies.get(CART_COOKIE),
            payload.customer_name,
            payload.customer_address,
            payload.discount,
            payload.paid_amount,
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except CheckoutInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        log.error(f"CRITICAL ERROR: {type(e).__name__}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Internal server error: {type(e).__name__}")
    return {
        "transaction": TransactionService.to_dict(tx),
        "invoice": build_invoice(tx),
    }
