"""Cards within lists, ordered by priority. Cards may move between lists."""

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from taskboard.core.exceptions import BadOperationError, NotFoundError
from taskboard.models import Card
from taskboard.schemas.auth import Principal
from taskboard.schemas.boards import CardBatchItem
from taskboard.services.authorization import require_access, require_move
from taskboard.services.lists import find_list
from taskboard.services.pagination import paginate

logger = logging.getLogger(__name__)


def find_card(db: Session, card_id: int) -> Card:
    card = db.query(Card).filter(Card.id == card_id, Card.retired.is_(False)).first()
    if card is None:
        logger.warning("Could not find card with ID '%s'", card_id)
        raise NotFoundError(f"Could not find card with ID '{card_id}'")
    return card


def create_card(
    db: Session,
    principal: Principal,
    title: str,
    description: str,
    due_date: datetime | None,
    priority: int,
    list_id: int,
) -> Card:
    board_list = find_list(db, list_id)
    require_access(db, principal, board_list)
    card = Card(
        title=title,
        description=description,
        due_date=due_date,
        priority=priority,
        list_id=board_list.id,
    )
    db.add(card)
    db.commit()
    logger.info("User %s created card %s in list %s", principal.id, card.id, board_list.id)
    return card


def get_card(db: Session, principal: Principal, card_id: int) -> Card:
    card = find_card(db, card_id)
    require_access(db, principal, card)
    return card


def list_cards_under_list(
    db: Session,
    principal: Principal,
    list_id: int,
    page: int,
    size: int,
) -> tuple[list[Card], int]:
    """Active cards of the list, lowest priority first."""
    board_list = find_list(db, list_id)
    require_access(db, principal, board_list)
    query = (
        db.query(Card)
        .filter(Card.list_id == board_list.id, Card.retired.is_(False))
        .order_by(Card.priority, Card.id)
    )
    return paginate(query, page, size)


def _authorize_card_update(db: Session, principal: Principal, card: Card, list_id: int) -> None:
    if list_id != card.list_id:
        require_move(db, principal, card, find_list(db, list_id))
    else:
        require_access(db, principal, card)


def _apply(card: Card, item: CardBatchItem) -> None:
    card.title = item.title
    card.description = item.description
    card.due_date = item.due_date
    card.priority = item.priority
    card.list_id = item.list_id


def update_card(
    db: Session,
    principal: Principal,
    card_id: int,
    title: str,
    description: str,
    due_date: datetime | None,
    priority: int,
    list_id: int,
) -> Card:
    """Update a card; a different list_id moves it, which needs access to both lists."""
    card = find_card(db, card_id)
    _authorize_card_update(db, principal, card, list_id)
    card.title = title
    card.description = description
    card.due_date = due_date
    card.priority = priority
    card.list_id = list_id
    db.commit()
    logger.info("Updated card %s", card.id)
    return card


def update_cards(
    db: Session,
    principal: Principal,
    items: Sequence[CardBatchItem],
) -> list[Card]:
    """
    Update several cards together, possibly moving them between lists.

    All cards (and any destination lists) are authorized before the first one is
    changed, then the batch commits as one transaction. A denial anywhere leaves
    every card untouched.
    """
    ids = [item.id for item in items]
    if len(set(ids)) != len(ids):
        raise BadOperationError("A card may appear only once in a batch update")

    cards = [find_card(db, card_id) for card_id in ids]
    for card, item in zip(cards, items):
        _authorize_card_update(db, principal, card, item.list_id)

    try:
        for card, item in zip(cards, items):
            _apply(card, item)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("User %s updated %d card(s)", principal.id, len(cards))
    return cards


def retire_card(db: Session, principal: Principal, card_id: int) -> None:
    card = find_card(db, card_id)
    require_access(db, principal, card)
    card.retire()
    db.commit()
    logger.info("Retired card %s", card.id)
