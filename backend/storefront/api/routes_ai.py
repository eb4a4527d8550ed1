from fastapi import APIRouter, HTTPException

from storefront.adapters.invitation_ai import (
    AIConfigurationError,
    AIServiceError,
    InvitationRequest,
    InvitationWriter,
)

router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/invitation", summary="Draft invitation wording")
def draft_invitation(payload: InvitationRequest):
    writer = InvitationWriter()
    try:
        text = writer.generate(payload)
    except AIConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except AIServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return {"text": text}
