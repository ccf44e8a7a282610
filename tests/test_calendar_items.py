import uuid
from datetime import datetime

import pytest

from adminpanel.exceptions import ValidationError
from adminpanel.models import Media, Property
from adminpanel.schemas import CalendarEventCreate, ItemCreate
from adminpanel.services import calendar as calendar_service
from adminpanel.services import items as item_service


def test_create_and_list_events(client, user, auth_headers):
    headers = auth_headers(user)
    later = client.post(
        "/api/v1/calendar/events",
        json={"title": "Review", "start_time": "2026-05-02T10:00:00", "end_time": "2026-05-02T11:00:00"},
        headers=headers,
    )
    sooner = client.post(
        "/api/v1/calendar/events",
        json={"title": "Standup", "start_time": "2026-05-01T09:00:00", "all_day": False},
        headers=headers,
    )
    assert later.status_code == 201
    assert sooner.status_code == 201

    response = client.get("/api/v1/calendar/events", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 2
    assert [e["title"] for e in body["data"]] == ["Standup", "Review"]


def test_events_are_scoped_to_owner(client, db, user, make_user, auth_headers):
    calendar_service.create_event(
        db, user.id, CalendarEventCreate(title="Private", start_time=datetime(2026, 1, 1, 8))
    )

    response = client.get("/api/v1/calendar/events", headers=auth_headers(make_user()))

    assert response.json()["count"] == 0


@pytest.mark.parametrize(
    "payload",
    [
        {"title": "", "start_time": datetime(2026, 1, 1, 8)},
        {"title": "Backwards", "start_time": datetime(2026, 1, 1, 8), "end_time": datetime(2026, 1, 1, 7)},
    ],
    ids=["empty-title", "ends-before-start"],
)
def test_create_event_validation(db, user, payload):
    with pytest.raises(ValidationError):
        calendar_service.create_event(db, user.id, CalendarEventCreate(**payload))


def test_delete_event(client, db, user, make_user, auth_headers):
    event = calendar_service.create_event(
        db, user.id, CalendarEventCreate(title="Dentist", start_time=datetime(2026, 3, 3, 15))
    )

    assert client.delete(f"/api/v1/calendar/events/{event.id}", headers=auth_headers(make_user())).status_code == 403
    assert client.delete(f"/api/v1/calendar/events/{event.id}", headers=auth_headers(user)).status_code == 200
    assert client.delete(f"/api/v1/calendar/events/{event.id}", headers=auth_headers(user)).status_code == 404


def test_create_item_with_properties(client, db, user, auth_headers):
    response = client.post(
        "/api/v1/items/",
        json={
            "title": "Vase",
            "content": "<p>Blue vase</p>",
            "price": 19.5,
            "language": "en",
            "category": "decor",
            "properties": {"height": "30cm", "material": "glass", "color": "blue"},
        },
        headers=auth_headers(user),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["properties"]["material"] == "glass"
    assert body["properties"]["brand"] is None
    assert body["images"] == []
    assert db.query(Property).filter(Property.item_id == uuid.UUID(body["id"])).count() == 1


def test_create_item_without_properties(db, user):
    item = item_service.create_item(db, user.id, ItemCreate(title="Plain"))

    assert item.properties is None
    assert db.query(Property).count() == 0


@pytest.mark.parametrize("payload", [{"title": " "}, {"title": "Cheap", "price": -1}])
def test_create_item_validation(db, user, payload):
    with pytest.raises(ValidationError):
        item_service.create_item(db, user.id, ItemCreate(**payload))


def test_list_items_filters_by_region_and_pages(client, db, user, make_user, auth_headers):
    for position, language in enumerate(["pl", "en", "pl", "de", "pl"]):
        item_service.create_item(
            db, user.id, ItemCreate(title=f"item-{position}", position=position, language=language)
        )
    item_service.create_item(db, make_user().id, ItemCreate(title="foreign", language="pl"))

    response = client.get(
        "/api/v1/items/",
        params={"region": "pl", "skip": 1, "limit": 1},
        headers=auth_headers(user),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 3
    assert [i["title"] for i in body["data"]] == ["item-2"]


def test_list_items_includes_images(db, user):
    item = item_service.create_item(db, user.id, ItemCreate(title="Lamp"))
    db.add(Media(url="https://cdn.test/lamp.png", type="image/png", key="lamp.png", content_id=item.id))
    db.commit()

    result = item_service.list_items(db, user.id)

    assert result.count == 1
    assert result.data[0].images == ["https://cdn.test/lamp.png"]
