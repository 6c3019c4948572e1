"""API tests for system settings, technicians and ticket assignment."""

import uuid

import pytest
from hypothesis import given, strategies as st
from pydantic import ValidationError
from sqlalchemy import func, select

from conftest import auth_headers
from helpdesk.models import Role, SystemSettings, Ticket
from helpdesk.schemas.system_settings import SystemSettingsUpdateRequest

SETTINGS_URL = "/api/v1/admin/settings"
TECHNICIANS_URL = "/api/v1/admin/technicians"


def settings_payload(**overrides) -> dict:
    payload = {
        "appName": "Support Desk",
        "supportEmail": "help@example.com",
        "supportPhone": "+98 21 1234",
        "defaultLanguage": "fa",
        "defaultTheme": "system",
        "timezone": "Asia/Tehran",
        "defaultPriority": "High",
        "defaultStatus": "New",
        "responseSlaHours": 48,
        "autoAssignEnabled": True,
        "allowClientAttachments": True,
        "maxAttachmentSizeMB": 20,
        "emailNotificationsEnabled": True,
        "smsNotificationsEnabled": False,
        "notifyOnTicketCreated": True,
        "notifyOnTicketAssigned": True,
        "notifyOnTicketReplied": False,
        "notifyOnTicketClosed": True,
        "passwordMinLength": 10,
        "require2FA": True,
        "sessionTimeoutMinutes": 120,
        "allowedEmailDomains": ["Example.com", "@corp.example.com", " "],
    }
    payload.update(overrides)
    return payload


async def settings_rows(session_factory) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(SystemSettings))
        return result.scalar_one()


# ============== System settings ==============


async def test_defaults_are_served_without_a_row(client, admin_user, session_factory):
    response = await client.get(SETTINGS_URL, headers=auth_headers(admin_user))

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["appName"] == "Helpdesk"
    assert data["responseSlaHours"] == 24
    assert data["maxAttachmentSizeMB"] == 10
    assert data["require2FA"] is False
    assert data["updatedAt"] is None
    assert await settings_rows(session_factory) == 0


async def test_admin_saves_settings(client, admin_user, session_factory):
    headers = auth_headers(admin_user)

    response = await client.put(SETTINGS_URL, headers=headers, json=settings_payload())
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["responseSlaHours"] == 48
    assert data["maxAttachmentSizeMB"] == 20
    assert data["require2FA"] is True
    assert data["allowedEmailDomains"] == ["example.com", "corp.example.com"]

    response = await client.put(
        SETTINGS_URL, headers=headers, json=settings_payload(responseSlaHours=72)
    )
    assert response.json()["data"]["responseSlaHours"] == 72
    assert await settings_rows(session_factory) == 1

    data = (await client.get(SETTINGS_URL, headers=headers)).json()["data"]
    assert data["responseSlaHours"] == 72
    assert data["updatedAt"] is not None


@pytest.mark.parametrize("method", ["GET", "PUT"])
async def test_non_admin_is_denied(client, client_user, method):
    response = await client.request(
        method,
        SETTINGS_URL,
        headers=auth_headers(client_user),
        json=settings_payload() if method == "PUT" else None,
    )

    assert response.status_code == 403
    body = response.json()
    assert body["status"] == "error"
    assert "data" not in body


async def test_settings_without_token(client):
    response = await client.get(SETTINGS_URL)

    assert response.status_code == 401


INVALID_SETTINGS = {"appName": "", "responseSlaHours": 0}


async def test_non_admin_with_invalid_body_is_denied_before_validation(client, client_user):
    response = await client.put(
        SETTINGS_URL, headers=auth_headers(client_user), json=INVALID_SETTINGS
    )

    assert response.status_code == 403
    body = response.json()
    assert "data" not in body
    assert body.get("errors") is None


@pytest.mark.parametrize(
    "method, url",
    [
        ("PUT", SETTINGS_URL),
        ("POST", TECHNICIANS_URL),
        ("PUT", f"/api/v1/tickets/{uuid.uuid4()}/assign-technician"),
    ],
)
async def test_anonymous_invalid_body_gets_401(client, method, url):
    response = await client.request(method, url, json=INVALID_SETTINGS)

    assert response.status_code == 401


@pytest.mark.parametrize(
    "field, value",
    [
        ("responseSlaHours", 0),
        ("responseSlaHours", 169),
        ("maxAttachmentSizeMB", 0),
        ("maxAttachmentSizeMB", 101),
        ("passwordMinLength", 3),
        ("passwordMinLength", 33),
        ("sessionTimeoutMinutes", 4),
        ("sessionTimeoutMinutes", 1441),
        ("defaultPriority", "Urgent"),
        ("supportEmail", "not-an-email"),
    ],
)
async def test_out_of_range_values_are_rejected(client, admin_user, session_factory, field, value):
    response = await client.put(
        SETTINGS_URL,
        headers=auth_headers(admin_user),
        json=settings_payload(**{field: value}),
    )

    assert response.status_code == 400
    body = response.json()
    assert body["errors"][0]["field"] == field
    assert body["message"] == body["errors"][0]["message"]
    assert await settings_rows(session_factory) == 0


@given(st.integers(min_value=-1000, max_value=1000))
def test_sla_hours_range(hours):
    payload = settings_payload(responseSlaHours=hours)
    if 1 <= hours <= 168:
        assert SystemSettingsUpdateRequest.model_validate(payload).response_sla_hours == hours
    else:
        with pytest.raises(ValidationError):
            SystemSettingsUpdateRequest.model_validate(payload)


@given(st.integers(min_value=-500, max_value=500))
def test_attachment_size_range(size):
    payload = settings_payload(maxAttachmentSizeMB=size)
    if 1 <= size <= 100:
        assert SystemSettingsUpdateRequest.model_validate(payload).max_attachment_size_mb == size
    else:
        with pytest.raises(ValidationError):
            SystemSettingsUpdateRequest.model_validate(payload)


# ============== Technicians ==============


async def create_technician(client, admin_user, **overrides):
    payload = {
        "fullName": "Sara Ahmadi",
        "email": "sara@example.com",
        "phone": "0912",
        "department": "Network",
    }
    payload.update(overrides)
    return await client.post(TECHNICIANS_URL, headers=auth_headers(admin_user), json=payload)


async def test_technician_lifecycle(client, admin_user):
    headers = auth_headers(admin_user)

    response = await create_technician(client, admin_user)
    assert response.status_code == 201
    technician = response.json()["data"]
    assert technician["isActive"] is True
    technician_id = technician["id"]

    response = await client.put(
        f"{TECHNICIANS_URL}/{technician_id}",
        headers=headers,
        json={"department": "Hardware"},
    )
    assert response.status_code == 200
    assert response.json()["data"]["department"] == "Hardware"
    assert response.json()["data"]["fullName"] == "Sara Ahmadi"

    response = await client.patch(
        f"{TECHNICIANS_URL}/{technician_id}/status",
        headers=headers,
        json={"isActive": False},
    )
    assert response.status_code == 200
    assert response.json()["data"]["isActive"] is False

    response = await client.get(f"{TECHNICIANS_URL}/{technician_id}", headers=headers)
    assert response.json()["data"]["isActive"] is False

    listing = (await client.get(TECHNICIANS_URL, headers=headers)).json()["data"]
    assert [t["id"] for t in listing] == [technician_id]


async def test_duplicate_technician_email_conflicts(client, admin_user):
    await create_technician(client, admin_user)

    response = await create_technician(client, admin_user, email="SARA@example.com", fullName="Other")

    assert response.status_code == 409


async def test_technician_linked_to_unknown_user_is_rejected(client, admin_user):
    response = await create_technician(client, admin_user, userId=str(uuid.uuid4()))

    assert response.status_code == 400
    body = response.json()
    assert body["errors"][0]["field"] == "userId"
    listing = (await client.get(TECHNICIANS_URL, headers=auth_headers(admin_user))).json()["data"]
    assert listing == []


async def test_technician_linked_to_existing_user(client, admin_user, make_user):
    account = await make_user(email="sara.account@example.com", role=Role.TECHNICIAN)

    response = await create_technician(client, admin_user, userId=str(account.id))

    assert response.status_code == 201
    assert response.json()["data"]["userId"] == str(account.id)


async def test_unknown_technician_is_not_found(client, admin_user):
    response = await client.get(f"{TECHNICIANS_URL}/{uuid.uuid4()}", headers=auth_headers(admin_user))

    assert response.status_code == 404
    assert response.json()["message"] == "Technician not found"


async def test_technicians_are_admin_only(client, client_user):
    response = await client.get(TECHNICIANS_URL, headers=auth_headers(client_user))

    assert response.status_code == 403


# ============== Ticket assignment ==============


async def store_ticket(session_factory) -> Ticket:
    async with session_factory() as session:
        ticket = Ticket(title="Printer is offline")
        session.add(ticket)
        await session.commit()
        await session.refresh(ticket)
        return ticket


async def test_assign_active_technician(client, admin_user, session_factory):
    ticket = await store_ticket(session_factory)
    technician_id = (await create_technician(client, admin_user)).json()["data"]["id"]

    response = await client.put(
        f"/api/v1/tickets/{ticket.id}/assign-technician",
        headers=auth_headers(admin_user),
        json={"technicianId": technician_id},
    )

    assert response.status_code == 200
    assert response.json()["data"]["assignedTechnicianId"] == technician_id


async def test_inactive_technician_cannot_be_assigned(client, admin_user, session_factory):
    ticket = await store_ticket(session_factory)
    technician_id = (
        await create_technician(client, admin_user, isActive=False)
    ).json()["data"]["id"]

    response = await client.put(
        f"/api/v1/tickets/{ticket.id}/assign-technician",
        headers=auth_headers(admin_user),
        json={"technicianId": technician_id},
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "technicianId"


async def test_assign_to_missing_ticket(client, admin_user):
    technician_id = (await create_technician(client, admin_user)).json()["data"]["id"]

    response = await client.put(
        f"/api/v1/tickets/{uuid.uuid4()}/assign-technician",
        headers=auth_headers(admin_user),
        json={"technicianId": technician_id},
    )

    assert response.status_code == 404
