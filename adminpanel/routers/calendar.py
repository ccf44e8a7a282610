"""Calendar router for the current user's events."""

import logging
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from adminpanel.auth import get_current_user
from adminpanel.database import get_db
from adminpanel.models import User
from adminpanel.schemas import CalendarEventCreate, CalendarEventPublic, CalendarEventsPublic, Message
from adminpanel.services import calendar as calendar_service
from adminpanel.utils import parse_id

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/calendar", tags=["Calendar"])


@router.get("/events", response_model=CalendarEventsPublic)
def list_events(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    events = calendar_service.list_events(db, current_user.id)
    return CalendarEventsPublic(
        data=[CalendarEventPublic.model_validate(e) for e in events],
        count=len(events)
    )


@router.post("/events", status_code=status.HTTP_201_CREATED, response_model=CalendarEventPublic)
def create_event(
    event_data: CalendarEventCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    return calendar_service.create_event(db, current_user.id, event_data)


@router.delete("/events/{event_id}", response_model=Message)
def delete_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    calendar_service.delete_event(db, parse_id(event_id, "Event ID"), current_user)
    return {"message": "Event deleted successfully"}
