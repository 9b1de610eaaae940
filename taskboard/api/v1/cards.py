"""Card endpoints, including the batch update used for moving and reordering."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from taskboard.api.v1.auth import get_current_principal
from taskboard.api.v1.paging import PageParams, page_params
from taskboard.core.database import get_db
from taskboard.schemas.auth import Principal
from taskboard.schemas.boards import CardBatchRequest, CardRequest, CardResponse
from taskboard.schemas.common import Page
from taskboard.services import cards as card_service

router = APIRouter()


@router.post("", response_model=CardResponse)
def create_card(
    body: CardRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> CardResponse:
    card = card_service.create_card(
        db,
        principal,
        title=body.title,
        description=body.description,
        due_date=body.due_date,
        priority=body.priority,
        list_id=body.list_id,
    )
    return CardResponse.model_validate(card)


@router.get("", response_model=Page[CardResponse])
def list_cards(
    list_id: Annotated[int, Query(description="List whose cards to return")],
    paging: Annotated[PageParams, Depends(page_params)],
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> Page[CardResponse]:
    cards, total = card_service.list_cards_under_list(
        db, principal, list_id, paging.page, paging.size
    )
    return Page[CardResponse](
        items=[CardResponse.model_validate(c) for c in cards],
        total=total,
        page=paging.page,
        size=paging.size,
    )


@router.put("", response_model=list[CardResponse])
def update_cards(
    body: CardBatchRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> list[CardResponse]:
    """Update several cards at once; a denial on any card rejects the whole batch."""
    cards = card_service.update_cards(db, principal, body.cards)
    return [CardResponse.model_validate(c) for c in cards]


@router.get("/{card_id}", response_model=CardResponse)
def get_card(
    card_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> CardResponse:
    return CardResponse.model_validate(card_service.get_card(db, principal, card_id))


@router.put("/{card_id}", response_model=CardResponse)
def update_card(
    card_id: int,
    body: CardRequest,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> CardResponse:
    card = card_service.update_card(
        db,
        principal,
        card_id,
        title=body.title,
        description=body.description,
        due_date=body.due_date,
        priority=body.priority,
        list_id=body.list_id,
    )
    return CardResponse.model_validate(card)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
def retire_card(
    card_id: int,
    principal: Annotated[Principal, Depends(get_current_principal)],
    db: Annotated[Session, Depends(get_db)],
) -> Response:
    card_service.retire_card(db, principal, card_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
