"""
Tests for default account bootstrap and credential verification.
"""

import pytest

from records_api.app.core.errors import CredentialsMissingError
from records_api.app.services.auth_service import AuthService


async def account_rows(store, username):
    return await store.all("SELECT * FROM accounts WHERE username = ?", (username,))


@pytest.mark.asyncio
async def test_bootstrap_is_idempotent(store):
    service = AuthService(store)

    assert await service.bootstrap_default_account() is True
    assert await service.bootstrap_default_account() is False

    rows = await account_rows(store, "admin")
    assert len(rows) == 1


@pytest.mark.asyncio
async def test_bootstrap_stores_hash_not_password(store):
    await AuthService(store).bootstrap_default_account()

    row = (await account_rows(store, "admin"))[0]
    assert row["password_hash"] != "1234"
    assert row["password_hash"].startswith("pbkdf2_sha256$")


@pytest.mark.asyncio
async def test_bootstrap_keeps_existing_password(store):
    service = AuthService(store)
    await service.bootstrap_default_account(password="changed")

    await service.bootstrap_default_account()

    assert await service.verify("admin", "changed") is True
    assert await service.verify("admin", "1234") is False


@pytest.mark.asyncio
async def test_verify_default_account(store):
    service = AuthService(store)
    await service.bootstrap_default_account()

    assert await service.verify("admin", "1234") is True


@pytest.mark.asyncio
async def test_wrong_password_and_unknown_user_are_rejected_alike(store):
    service = AuthService(store)
    await service.bootstrap_default_account()

    wrong_password = await service.verify("admin", "wrong")
    unknown_user = await service.verify("nouser", "anything")

    assert wrong_password is False
    assert unknown_user is False


@pytest.mark.asyncio
async def test_username_is_case_sensitive(store):
    service = AuthService(store)
    await service.bootstrap_default_account()

    assert await service.verify("Admin", "1234") is False


@pytest.mark.asyncio
async def test_malformed_stored_hash_is_rejected(store):
    await store.run(
        "INSERT INTO accounts (username, password_hash) VALUES (?, ?)", ("legacy", "1234")
    )

    assert await AuthService(store).verify("legacy", "1234") is False


@pytest.mark.asyncio
@pytest.mark.parametrize("username, password", [(None, "1234"), ("admin", None), ("", ""), ("admin", "")])
async def test_missing_credentials_fail_before_store_access(failing_store, username, password):
    with pytest.raises(CredentialsMissingError):
        await AuthService(failing_store).verify(username, password)

    assert failing_store.calls == []
