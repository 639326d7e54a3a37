from fastapi import APIRouter, Depends, HTTPException

from gradpass.schemas.issuer import IssuerCreate, IssuerResponse, IssuerSummaryResponse
from gradpass.services.issuers import IssuerService
from gradpass.store import TicketStore, get_store

router = APIRouter(prefix="/issuers", tags=["issuers"])


@router.post("", response_model=IssuerResponse, status_code=201)
def register_issuer(
    payload: IssuerCreate,
    store: TicketStore = Depends(get_store)
):
    try:
        issuer = IssuerService(store).register(
            payload.name,
            payload.credential,
            max_tickets=payload.max_tickets
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return IssuerResponse.model_validate(issuer)


@router.get("/{name}", response_model=IssuerSummaryResponse)
def issuer_summary(
    name: str,
    store: TicketStore = Depends(get_store)
):
    summary = IssuerService(store).summary(name)
    return IssuerSummaryResponse(
        issuer=IssuerResponse.model_validate(summary.issuer),
        counts=summary.counts,
        remaining=summary.remaining
    )
