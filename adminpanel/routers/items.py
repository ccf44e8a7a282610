"""Items router."""

import logging
from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from adminpanel.auth import get_current_user
from adminpanel.database import get_db
from adminpanel.models import User
from adminpanel.schemas import ItemCreate, ItemPublic, ItemsPublic
from adminpanel.services import items as item_service

# Configure logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/items", tags=["Items"])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=ItemPublic)
def create_item(
    item_data: ItemCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create an item with optional properties.

    Raises:
        ValidationError: If the title is empty or the price negative
    """
    item = item_service.create_item(db, current_user.id, item_data)
    return item_service.to_public(db, item)


@router.get("/", response_model=ItemsPublic)
def list_items(
    region: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's items, filtered by language when ``region`` is given."""
    return item_service.list_items(db, current_user.id, language=region, skip=skip, limit=limit)
