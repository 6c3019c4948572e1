"""Tests for avatar checks, translations, permissions and session tokens."""

import uuid
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from helpdesk.models import Role
from helpdesk.services.i18n_service import I18nService
from helpdesk.utils.avatars import (
    AvatarRejected,
    encode_data_url,
    parse_data_url,
    validate_avatar,
    validate_avatar_data_url,
)
from helpdesk.utils.permissions import PermissionChecker
from helpdesk.utils.security import create_access_token, read_access_token

MAX_BYTES = 5 * 1024 * 1024


@pytest.mark.parametrize("content_type", ["image/jpeg", "image/jpg", "image/png", "image/gif", "IMAGE/PNG"])
def test_allowed_avatar_types(content_type):
    validate_avatar(content_type, MAX_BYTES)


@pytest.mark.parametrize("content_type", ["image/webp", "application/pdf", "", None])
def test_disallowed_avatar_types(content_type):
    with pytest.raises(AvatarRejected) as exc_info:
        validate_avatar(content_type, 10)
    assert exc_info.value.reason == "type"


def test_avatar_size_limit_is_inclusive():
    validate_avatar("image/png", MAX_BYTES)
    with pytest.raises(AvatarRejected) as exc_info:
        validate_avatar("image/png", MAX_BYTES + 1)
    assert exc_info.value.reason == "size"


def test_data_url_parsing():
    content_type, content = parse_data_url(encode_data_url("image/png", b"abc"))

    assert content_type == "image/png"
    assert content == b"abc"


@pytest.mark.parametrize("value", ["not a data url", "data:image/png,abc", "data:image/png;base64,@@@"])
def test_malformed_data_urls(value):
    with pytest.raises(AvatarRejected) as exc_info:
        validate_avatar_data_url(value)
    assert exc_info.value.reason == "format"


def test_translation_lookup_and_interpolation():
    i18n = I18nService()

    assert i18n.t("avatar.too_large_description", lang="en", size=5) == "The maximum allowed size is 5MB"
    assert i18n.t("notifications.saved", lang="fa") == "تنظیمات اعلان‌ها ذخیره شد"


def test_translation_falls_back_to_english_then_key():
    i18n = I18nService()
    i18n.translations["fa"] = {}

    assert i18n.t("common.error", lang="fa") == "Error"
    assert i18n.t("missing.key", lang="fa") == "missing.key"


def test_permission_checker():
    assert PermissionChecker(Role.ADMIN.value).can_manage_settings()
    assert PermissionChecker(Role.ADMIN.value).can_manage_technicians()
    assert not PermissionChecker(Role.TECHNICIAN.value).can_manage_settings()
    assert not PermissionChecker(None).is_admin
    assert PermissionChecker(Role.CLIENT.value).has_role(Role.CLIENT, "TECHNICIAN")


def test_access_token_carries_session_claims():
    user_id = uuid.uuid4()
    before = datetime.now(timezone.utc)

    claims = read_access_token(create_access_token(user_id, Role.ADMIN.value, 30))

    assert claims.user_id == user_id
    assert claims.is_admin
    assert before + timedelta(minutes=29) < claims.expires_at <= before + timedelta(minutes=31)


def test_expired_access_token_is_ignored():
    token = create_access_token(uuid.uuid4(), Role.CLIENT.value, session_timeout_minutes=-1)

    assert read_access_token(token) is None


@pytest.mark.parametrize(
    "token",
    [
        create_access_token(uuid.uuid4(), "ROOT", 60),
        jwt.encode({"sub": str(uuid.uuid4()), "role": "ADMIN", "type": "access",
                    "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
                   "someone-elses-secret", algorithm="HS256"),
        jwt.encode({"sub": "not-a-uuid", "role": "ADMIN", "type": "access",
                    "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
                   "test-secret-key", algorithm="HS256"),
        "not-a-jwt",
    ],
    ids=["unknown-role", "foreign-signature", "malformed-subject", "garbage"],
)
def test_unusable_access_tokens_are_ignored(token):
    assert read_access_token(token) is None
