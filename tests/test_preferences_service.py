"""Tests for preference defaults, derived direction and legacy-row healing."""

import pytest
from hypothesis import given, settings, strategies as st
from sqlalchemy import delete, func, select

from helpdesk.models import User, UserPreferences
from helpdesk.schemas.preferences import (
    NotificationPreferencesUpdateRequest,
    UserPreferencesUpdateRequest,
)
from helpdesk.services.preferences_service import (
    default_preferences,
    derive_direction,
    get_preferences_service,
    to_preferences_response,
)

DEFAULT_CHANNELS = {
    "email_enabled": True,
    "push_enabled": True,
    "sms_enabled": False,
    "desktop_enabled": True,
}


# ============== Derivation ==============


def test_persian_is_right_to_left():
    assert derive_direction("fa") == "rtl"


def test_english_is_left_to_right():
    assert derive_direction("en") == "ltr"


@settings(max_examples=100)
@given(st.one_of(st.none(), st.text(max_size=10)))
def test_direction_is_rtl_only_for_persian(language):
    expected = "rtl" if language == "fa" else "ltr"
    assert derive_direction(language) == expected


@settings(max_examples=100)
@given(
    theme=st.sampled_from(["light", "dark", "system"]),
    font_size=st.sampled_from(["sm", "md", "lg"]),
    language=st.sampled_from(["fa", "en"]),
    channels=st.fixed_dictionaries({
        "email_enabled": st.booleans(),
        "push_enabled": st.booleans(),
        "sms_enabled": st.booleans(),
        "desktop_enabled": st.booleans(),
    }),
)
def test_stored_row_response_derives_direction(theme, font_size, language, channels):
    row = UserPreferences(
        theme=theme,
        font_size=font_size,
        language=language,
        timezone="UTC",
        notifications_migrated=True,
        **channels,
    )

    response = to_preferences_response(row)

    assert response.direction == ("rtl" if language == "fa" else "ltr")
    assert response.theme == theme
    assert response.font_size == font_size
    assert response.notifications.model_dump() == channels


def test_default_bundle():
    defaults = default_preferences()

    assert defaults.theme == "system"
    assert defaults.font_size == "md"
    assert defaults.language == "fa"
    assert defaults.direction == "rtl"
    assert defaults.timezone == "Asia/Tehran"
    assert defaults.notifications.model_dump() == DEFAULT_CHANNELS


# ============== Store access ==============


async def count_rows(db_session) -> int:
    result = await db_session.execute(select(func.count()).select_from(UserPreferences))
    return result.scalar_one()


async def test_read_without_row_returns_defaults_and_creates_nothing(db_session, client_user):
    service = get_preferences_service()

    preferences = await service.get_preferences(db_session, client_user.id)
    notifications = await service.get_notification_preferences(db_session, client_user.id)

    assert preferences == default_preferences()
    assert notifications.model_dump() == DEFAULT_CHANNELS
    assert await count_rows(db_session) == 0


async def test_update_creates_then_updates_single_row(db_session, client_user):
    service = get_preferences_service()

    first = await service.update_preferences(
        db_session,
        client_user.id,
        UserPreferencesUpdateRequest(theme="dark", font_size="lg", language="en", timezone="UTC"),
    )
    second = await service.update_preferences(
        db_session,
        client_user.id,
        UserPreferencesUpdateRequest(theme="light", font_size="sm", language="fa", timezone="UTC"),
    )

    assert first.direction == "ltr"
    assert second.direction == "rtl"
    assert second.theme == "light"
    assert await count_rows(db_session) == 1


async def test_first_appearance_save_uses_default_channels(db_session, client_user):
    service = get_preferences_service()

    result = await service.update_preferences(
        db_session,
        client_user.id,
        UserPreferencesUpdateRequest(theme="dark", font_size="md", language="fa", timezone="UTC"),
    )

    assert result.notifications.model_dump() == DEFAULT_CHANNELS


async def test_appearance_update_keeps_notification_channels(db_session, client_user):
    service = get_preferences_service()
    channels = NotificationPreferencesUpdateRequest(
        email_enabled=False, push_enabled=True, sms_enabled=True, desktop_enabled=False
    )
    await service.update_notification_preferences(db_session, client_user.id, channels)

    result = await service.update_preferences(
        db_session,
        client_user.id,
        UserPreferencesUpdateRequest(theme="dark", font_size="lg", language="en", timezone="UTC"),
    )

    assert result.notifications.model_dump() == channels.model_dump()


async def test_notification_update_keeps_appearance(db_session, client_user):
    service = get_preferences_service()
    await service.update_preferences(
        db_session,
        client_user.id,
        UserPreferencesUpdateRequest(theme="dark", font_size="lg", language="en", timezone="UTC"),
    )

    await service.update_notification_preferences(
        db_session,
        client_user.id,
        NotificationPreferencesUpdateRequest(
            email_enabled=False, push_enabled=False, sms_enabled=True, desktop_enabled=False
        ),
    )
    result = await service.get_preferences(db_session, client_user.id)

    assert (result.theme, result.font_size, result.language, result.timezone) == (
        "dark", "lg", "en", "UTC",
    )
    assert result.direction == "ltr"


# ============== Legacy rows ==============


async def store_legacy_row(db_session, user_id, migrated=False) -> UserPreferences:
    row = UserPreferences(
        user_id=user_id,
        theme="light",
        font_size="md",
        language="fa",
        timezone="Asia/Tehran",
        email_enabled=False,
        push_enabled=False,
        sms_enabled=False,
        desktop_enabled=False,
        notifications_migrated=migrated,
    )
    db_session.add(row)
    await db_session.commit()
    return row


@pytest.mark.parametrize("read", ["get_preferences", "get_notification_preferences"])
async def test_legacy_all_off_row_is_healed_and_persisted(db_session, client_user, read):
    await store_legacy_row(db_session, client_user.id)
    service = get_preferences_service()

    result = await getattr(service, read)(db_session, client_user.id)

    channels = result.notifications if read == "get_preferences" else result
    assert channels.model_dump() == DEFAULT_CHANNELS

    db_session.expire_all()
    row = await service.get_row(db_session, client_user.id)
    assert row.notifications_migrated is True
    assert (row.email_enabled, row.push_enabled, row.sms_enabled, row.desktop_enabled) == (
        True, True, False, True,
    )

    again = await service.get_notification_preferences(db_session, client_user.id)
    assert again.model_dump() == DEFAULT_CHANNELS


async def test_explicit_all_off_choice_is_kept(db_session, client_user):
    service = get_preferences_service()
    all_off = NotificationPreferencesUpdateRequest(
        email_enabled=False, push_enabled=False, sms_enabled=False, desktop_enabled=False
    )

    await service.update_notification_preferences(db_session, client_user.id, all_off)
    result = await service.get_notification_preferences(db_session, client_user.id)

    assert result.model_dump() == all_off.model_dump()


async def test_migrated_all_off_row_is_not_healed(db_session, client_user):
    await store_legacy_row(db_session, client_user.id, migrated=True)

    result = await get_preferences_service().get_notification_preferences(
        db_session, client_user.id
    )

    assert not any(result.model_dump().values())


async def test_legacy_row_with_a_channel_on_is_left_alone(db_session, client_user):
    row = await store_legacy_row(db_session, client_user.id)
    row.sms_enabled = True
    await db_session.commit()

    result = await get_preferences_service().get_notification_preferences(
        db_session, client_user.id
    )

    assert result.model_dump() == {
        "email_enabled": False,
        "push_enabled": False,
        "sms_enabled": True,
        "desktop_enabled": False,
    }


# ============== Ownership ==============


async def save_some_preferences(db_session, user_id) -> None:
    await get_preferences_service().update_preferences(
        db_session,
        user_id,
        UserPreferencesUpdateRequest(theme="dark", language="en", font_size="lg", timezone="UTC"),
    )


async def test_preferences_are_deleted_with_their_user(db_session, session_factory, client_user):
    await save_some_preferences(db_session, client_user.id)
    assert await count_rows(db_session) == 1

    async with session_factory() as session:
        user = await session.get(User, client_user.id)
        await session.delete(user)
        await session.commit()

    assert await count_rows(db_session) == 0


async def test_database_cascades_user_delete_to_preferences(
    db_session, session_factory, client_user, admin_user
):
    await save_some_preferences(db_session, client_user.id)
    await save_some_preferences(db_session, admin_user.id)

    async with session_factory() as session:
        await session.execute(delete(User).where(User.id == client_user.id))
        await session.commit()

    remaining = (await db_session.execute(select(UserPreferences.user_id))).scalars().all()
    assert remaining == [admin_user.id]
