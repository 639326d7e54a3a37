from fastapi import APIRouter, Depends, HTTPException
from typing import Optional

from gradpass.models.ticket import TicketType
from gradpass.schemas.ticket import (
    ErrorResponse,
    IssueTicketRequest,
    TicketResponse,
    TicketStatsResponse,
)
from gradpass.services.issuance import IssuanceService
from gradpass.services.reporting import TicketQueryService
from gradpass.store import TicketStore, get_store

router = APIRouter(prefix="/tickets", tags=["tickets"])


@router.post(
    "",
    response_model=TicketResponse,
    status_code=201,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}}
)
def issue_ticket(
    payload: IssueTicketRequest,
    store: TicketStore = Depends(get_store)
):
    ticket = IssuanceService(store).issue(
        issuer_name=payload.issuer_name,
        requested_type=payload.ticket_type,
        guest_name=payload.guest_name,
        special_notes=payload.special_notes
    )
    return TicketResponse.model_validate(ticket)


@router.get("", response_model=list[TicketResponse])
def list_tickets(
    issuer: Optional[str] = None,
    ticket_type: Optional[TicketType] = None,
    status: str = "all",
    search: Optional[str] = None,
    store: TicketStore = Depends(get_store)
):
    try:
        tickets = TicketQueryService(store).list_tickets(
            issuer_name=issuer,
            ticket_type=ticket_type,
            status=status,
            search=search
        )
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return [TicketResponse.model_validate(t) for t in tickets]


@router.get("/stats", response_model=TicketStatsResponse)
def ticket_stats(
    issuer: Optional[str] = None,
    store: TicketStore = Depends(get_store)
):
    stats = TicketQueryService(store).stats(issuer_name=issuer)
    return TicketStatsResponse(
        total=stats.total,
        used=stats.used,
        available=stats.available,
        by_type=stats.by_type
    )


@router.get("/{code}", response_model=TicketResponse, responses={404: {"model": ErrorResponse}})
def get_ticket(
    code: str,
    store: TicketStore = Depends(get_store)
):
    return TicketResponse.model_validate(TicketQueryService(store).get_by_code(code))
