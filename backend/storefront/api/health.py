from storefront.adapters.mock_gateway import MockCheckoutGateway
from storefront.config import settings
from storefront.db import engine
from fastapi import APIRouter
from sqlalchemy import text

router = APIRouter()


@router.get("/health", tags=["health"])
def health():
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        db_ok = False
    gateway_ok = MockCheckoutGateway(delay_ms=0).health_check()

    return {
        "status": "ok" if db_ok and gateway_ok else "degraded",
        "db": db_ok,
        "checkout_gateway": gateway_ok,
        "ai_configured": bool(settings.GEMINI_API_KEY),
    }
