"""Item and item property operations."""

import uuid
import logging
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from adminpanel.exceptions import ValidationError
from adminpanel.models import Item, Property
from adminpanel.schemas import ItemCreate, ItemPublic, ItemsPublic
from adminpanel.services.media import media_urls_by_content_id

logger = logging.getLogger(__name__)


def create_item(db: Session, owner_id: uuid.UUID, item_data: ItemCreate) -> Item:
    """
    Create an item, and its property row when properties are supplied.

    Raises:
        ValidationError: If the title is empty or the price is negative
    """
    if not item_data.title or not item_data.title.strip():
        raise ValidationError("The item title cannot be empty")

    if item_data.price is not None and item_data.price < 0:
        raise ValidationError("The item price cannot be negative")

    logger.info(f"Creating item: {item_data.title}")

    item = Item(
        id=uuid.uuid4(),
        title=item_data.title,
        content=item_data.content,
        price=item_data.price,
        position=item_data.position,
        language=item_data.language,
        item_url=item_data.item_url,
        category=item_data.category,
        status=item_data.status,
        owner_id=owner_id,
    )
    if item_data.properties is not None:
        item.properties = Property(id=uuid.uuid4(), **item_data.properties.model_dump())

    db.add(item)
    db.commit()
    db.refresh(item)

    logger.info(f"Created item with ID: {item.id}")
    return item


def list_items(
    db: Session,
    owner_id: uuid.UUID,
    language: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> ItemsPublic:
    """Page through an owner's items, optionally for one language, with properties and images."""
    query = db.query(Item).filter(Item.owner_id == owner_id)
    if language:
        query = query.filter(Item.language == language)

    count = query.with_entities(func.count(Item.id)).scalar()
    items = (
        query.options(selectinload(Item.properties))
        .order_by(Item.position.asc(), Item.created_at.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )
    images = media_urls_by_content_id(db, [item.id for item in items])

    data = [
        ItemPublic.model_validate(item).model_copy(update={"images": images.get(item.id, [])})
        for item in items
    ]
    logger.info(f"Found {len(data)} of {count} items for owner {owner_id}")
    return ItemsPublic(data=data, count=count)


def to_public(db: Session, item: Item) -> ItemPublic:
    images = media_urls_by_content_id(db, [item.id])
    return ItemPublic.model_validate(item).model_copy(update={"images": images.get(item.id, [])})
