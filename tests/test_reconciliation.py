"""Tests for mapping external identities onto local accounts."""

import pytest
from sqlalchemy import func, select

from app.core.exceptions import IncompleteIdentityException
from app.core.identity import FIREBASE, SUPABASE, ExternalIdentity
from app.core.security import verify_password
from app.models.users import users
from app.services.reconciliation_service import AccountReconciler


def identity(**overrides) -> ExternalIdentity:
    values = {
        "subject": "sb-user-1",
        "email": "Grace@Example.com",
        "provider": SUPABASE,
        "name": "Grace Hopper",
    }
    values.update(overrides)
    return ExternalIdentity(**values)


async def count_users(db_session) -> int:
    return (await db_session.execute(select(func.count()).select_from(users))).scalar_one()


async def test_first_sign_in_creates_account(db_session, cipher):
    reconciler = AccountReconciler(cipher, auto_consent=True, kvkk_version="1.0.0")

    user = await reconciler.reconcile(db_session, identity())

    assert user["supabase_id"] == "sb-user-1"
    assert user["google_id"] is None
    assert cipher.decrypt(user["email"]) == "grace@example.com"
    assert user["full_name"] == "Grace Hopper"
    assert user["role"] == "patient"
    assert user["kvkk_consent"] is True
    assert user["kvkk_version"] == "1.0.0"
    assert user["last_login_at"] is not None
    assert not verify_password("", user["password_hash"])


async def test_reconcile_is_idempotent(db_session, cipher):
    reconciler = AccountReconciler(cipher)

    first = await reconciler.reconcile(db_session, identity())
    second = await reconciler.reconcile(db_session, identity())

    assert first["id"] == second["id"]
    assert await count_users(db_session) == 1


async def test_email_match_ignores_case(db_session, cipher):
    reconciler = AccountReconciler(cipher)

    first = await reconciler.reconcile(db_session, identity(email="grace@example.com"))
    second = await reconciler.reconcile(db_session, identity(email="  GRACE@EXAMPLE.COM "))

    assert first["id"] == second["id"]


async def test_subject_match_survives_email_change(db_session, cipher):
    reconciler = AccountReconciler(cipher)

    first = await reconciler.reconcile(db_session, identity())
    second = await reconciler.reconcile(db_session, identity(email="new-address@example.com"))

    assert first["id"] == second["id"]
    assert cipher.decrypt(second["email"]) == "grace@example.com"


async def test_existing_password_account_gets_bound(db_session, cipher):
    await db_session.execute(
        users.insert().values(
            full_name="Grace",
            email=cipher.encrypt("grace@example.com"),
            phone="",
            address="",
            password_hash="x",  # pragma: allowlist secret
        )
    )
    await db_session.commit()

    user = await AccountReconciler(cipher).reconcile(db_session, identity())

    assert user["supabase_id"] == "sb-user-1"
    assert await count_users(db_session) == 1


async def test_firebase_subject_uses_google_column(db_session, cipher):
    user = await AccountReconciler(cipher).reconcile(
        db_session, identity(provider=FIREBASE, subject="fb-uid", auth_provider="google")
    )

    assert user["google_id"] == "fb-uid"
    assert user["supabase_id"] is None
    assert user["auth_provider"] == "google"


async def test_existing_binding_is_not_overwritten(db_session, cipher):
    reconciler = AccountReconciler(cipher)
    await reconciler.reconcile(db_session, identity())

    user = await reconciler.reconcile(db_session, identity(subject="sb-user-2"))

    assert user["supabase_id"] == "sb-user-1"


async def test_consent_not_assumed_when_disabled(db_session, cipher):
    user = await AccountReconciler(cipher, auto_consent=False).reconcile(db_session, identity())

    assert user["kvkk_consent"] is False
    assert user["kvkk_accepted_at"] is None


async def test_identity_without_email_or_subject_is_rejected(db_session, cipher):
    with pytest.raises(IncompleteIdentityException):
        await AccountReconciler(cipher).reconcile(db_session, identity(email=None, subject=None))
    assert await count_users(db_session) == 0


async def test_unknown_subject_without_email_cannot_create(db_session, cipher):
    with pytest.raises(IncompleteIdentityException):
        await AccountReconciler(cipher).reconcile(db_session, identity(email=None))


async def test_concurrent_first_sign_in_resolves_to_one_account(db_session, cipher):
    existing = await AccountReconciler(cipher).reconcile(db_session, identity())

    racer = AccountReconciler(cipher)
    real_find = racer._find
    calls = {"n": 0}

    async def stale_find(*args):
        calls["n"] += 1
        if calls["n"] == 1:
            return None
        return await real_find(*args)

    racer._find = stale_find  # type: ignore[method-assign]

    user = await racer.reconcile(db_session, identity())

    assert user["id"] == existing["id"]
    assert calls["n"] == 2
    assert await count_users(db_session) == 1
