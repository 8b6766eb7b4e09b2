"""Accounts, password hashing and access token unit tests."""

import pytest
from fastapi import HTTPException

from ballotbox.crud import (
    create_account,
    get_pending_accounts,
    login_account,
    seed_owner_account,
    update_account_status,
)
from ballotbox.schemas import AccountCreate
from ballotbox.security import create_access_token, decode_access_token, hash_password, verify_password
from ballotbox.storage import MemoryStorage
from tests.conftest import ADDR1, ADDR2, OWNER


@pytest.mark.unit
class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password("secret-password")
        assert hashed != "secret-password"
        assert verify_password("secret-password", hashed)
        assert not verify_password("wrong-password", hashed)


@pytest.mark.unit
class TestAccessTokens:
    def test_round_trip(self):
        token = create_access_token({"sub": ADDR1})
        assert decode_access_token(token) == ADDR1

    def test_expired_token(self):
        token = create_access_token({"sub": ADDR1}, expires_delta=-1)
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token(token)
        assert exc_info.value.status_code == 401

    def test_garbage_token(self):
        with pytest.raises(HTTPException) as exc_info:
            decode_access_token("not-a-token")
        assert exc_info.value.status_code == 401

    def test_token_without_subject(self):
        with pytest.raises(HTTPException):
            decode_access_token(create_access_token({"role": "voter"}))


@pytest.mark.unit
class TestAccounts:
    def test_new_account_is_pending_until_approved(self):
        storage = MemoryStorage()
        created = create_account(storage, AccountCreate(address=ADDR1, password="secret-password"), owner=OWNER)
        assert created["address"] == ADDR1
        assert created["status"] == "pending"
        assert "hashed_password" not in created

        assert login_account(storage, ADDR1, "secret-password") == (None, "Account is not approved.")

        approved = update_account_status(storage, ADDR1, "approved")
        assert approved["status"] == "approved"
        account, error = login_account(storage, ADDR1, "secret-password")
        assert error is None
        assert account["address"] == ADDR1

    def test_rejected_account_cannot_login(self):
        storage = MemoryStorage()
        create_account(storage, AccountCreate(address=ADDR1, password="secret-password"), owner=OWNER)
        update_account_status(storage, ADDR1, "rejected")
        assert login_account(storage, ADDR1, "secret-password") == (None, "Account is not approved.")
        # Only pending accounts can change status.
        assert update_account_status(storage, ADDR1, "approved") is None

    def test_invalid_status(self):
        storage = MemoryStorage()
        create_account(storage, AccountCreate(address=ADDR1, password="secret-password"), owner=OWNER)
        with pytest.raises(ValueError):
            update_account_status(storage, ADDR1, "pending")

    def test_pending_accounts(self):
        storage = MemoryStorage()
        create_account(storage, AccountCreate(address=ADDR1, password="secret-password"), owner=OWNER)
        create_account(storage, AccountCreate(address=ADDR2, password="secret-password"), owner=OWNER)
        update_account_status(storage, ADDR2, "approved")

        pending = get_pending_accounts(storage)
        assert [a["address"] for a in pending] == [ADDR1]
        assert "hashed_password" not in pending[0]

    def test_owner_address_cannot_be_registered(self):
        storage = MemoryStorage()
        assert create_account(storage, AccountCreate(address=OWNER, password="attacker-password"), owner=OWNER) is None
        assert storage.get_account(OWNER) is None

    def test_duplicate_account(self):
        storage = MemoryStorage()
        create_account(storage, AccountCreate(address=ADDR1, password="secret-password"), owner=OWNER)
        assert create_account(storage, AccountCreate(address=ADDR1, password="other-password"), owner=OWNER) is None

    def test_login_failures(self):
        storage = MemoryStorage()
        create_account(storage, AccountCreate(address=ADDR1, password="secret-password"), owner=OWNER)
        update_account_status(storage, ADDR1, "approved")
        assert login_account(storage, ADDR1, "wrong-password") == (None, "Invalid address or password")
        assert login_account(storage, ADDR2, "secret-password") == (None, "Invalid address or password")


@pytest.mark.unit
class TestOwnerAccount:
    def test_seeded_owner_can_login(self):
        storage = MemoryStorage()
        seed_owner_account(storage, OWNER, "owner-password")
        account, error = login_account(storage, OWNER, "owner-password")
        assert error is None
        assert account["status"] == "approved"

    def test_seed_replaces_a_planted_owner_account(self):
        storage = MemoryStorage()
        storage.save_account(
            {"address": OWNER, "hashed_password": hash_password("attacker-password"), "status": "approved"}
        )
        seed_owner_account(storage, OWNER, "owner-password")

        assert login_account(storage, OWNER, "attacker-password") == (None, "Invalid address or password")
        assert login_account(storage, OWNER, "owner-password")[1] is None

    def test_seed_approves_a_pending_owner_account(self):
        storage = MemoryStorage()
        storage.save_account({"address": OWNER, "hashed_password": hash_password("owner-password"), "status": "pending"})
        seed_owner_account(storage, OWNER, "owner-password")
        assert storage.get_account(OWNER)["status"] == "approved"

    def test_seed_is_idempotent(self):
        storage = MemoryStorage()
        seed_owner_account(storage, OWNER, "owner-password")
        hashed = storage.get_account(OWNER)["hashed_password"]
        seed_owner_account(storage, OWNER, "owner-password")
        assert storage.get_account(OWNER)["hashed_password"] == hashed
