"""Calendar event operations."""

import uuid
import logging
from typing import List
from sqlalchemy.orm import Session

from adminpanel.exceptions import AuthorizationError, NotFoundError, ValidationError
from adminpanel.models import CalendarEvent, User
from adminpanel.schemas import CalendarEventCreate

logger = logging.getLogger(__name__)


def create_event(db: Session, user_id: uuid.UUID, event_data: CalendarEventCreate) -> CalendarEvent:
    """
    Create a calendar event owned by ``user_id``.

    Raises:
        ValidationError: If the title is empty or the event ends before it starts
    """
    if not event_data.title or not event_data.title.strip():
        raise ValidationError("The event name cannot be empty")

    if event_data.end_time is not None and event_data.end_time < event_data.start_time:
        raise ValidationError("The event cannot end before it starts")

    event = CalendarEvent(
        id=uuid.uuid4(),
        title=event_data.title,
        description=event_data.description,
        start_time=event_data.start_time,
        end_time=event_data.end_time,
        all_day=event_data.all_day,
        user_id=user_id,
    )
    db.add(event)
    db.commit()
    db.refresh(event)

    logger.info(f"Created calendar event {event.id} for user {user_id}")
    return event


def list_events(db: Session, user_id: uuid.UUID) -> List[CalendarEvent]:
    events = (
        db.query(CalendarEvent)
        .filter(CalendarEvent.user_id == user_id)
        .order_by(CalendarEvent.start_time.asc())
        .all()
    )
    logger.info(f"Found {len(events)} calendar events for user {user_id}")
    return events


def delete_event(db: Session, event_id: uuid.UUID, current_user: User) -> None:
    event = db.get(CalendarEvent, event_id)
    if event is None:
        logger.warning(f"Calendar event not found: {event_id}")
        raise NotFoundError("Event not found")

    if event.user_id != current_user.id and not current_user.is_superuser:
        logger.warning(f"User {current_user.id} may not delete event {event_id}")
        raise AuthorizationError("Not enough permissions")

    db.delete(event)
    db.commit()
    logger.info(f"Calendar event {event_id} deleted")
