from fastapi import APIRouter, Depends, HTTPException, Request

from gradpass.config import get_settings
from gradpass.middleware.rate_limit import limiter
from gradpass.schemas.ticket import TicketResponse
from gradpass.schemas.validation import ValidateTicketRequest, ValidationResponse
from gradpass.services.validation import ValidationService
from gradpass.store import TicketStore, get_store

router = APIRouter(prefix="/validation", tags=["validation"])
settings = get_settings()


@router.post("", response_model=ValidationResponse)
@limiter.limit(settings.validation_rate_limit)
def validate_ticket(
    request: Request,
    payload: ValidateTicketRequest,
    store: TicketStore = Depends(get_store)
):
    """
    Redeem a ticket. already_used and not_found are normal outcomes and
    come back with status 200.
    """
    try:
        result = ValidationService(store).validate(payload.code, payload.validator_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    ticket = TicketResponse.model_validate(result.ticket) if result.ticket is not None else None
    return ValidationResponse(status=result.status, ticket=ticket)
