import logging
from datetime import datetime, timezone

from .schemas import AccountCreate
from .security import hash_password, verify_password

logger = logging.getLogger(__name__)

STATUS_PENDING = "pending"
STATUS_APPROVED = "approved"
STATUS_REJECTED = "rejected"


def _public(account):
    account = dict(account)
    account.pop("hashed_password", None)
    return account


# Create a new account with hashed password. It stays pending until the owner approves it.
def create_account(storage, data: AccountCreate, owner: str):
    if data.address == owner:
        logger.warning(f"Refused self-registration for the owner address {owner}.")
        return None
    account = data.model_dump()
    account["hashed_password"] = hash_password(account.pop("password"))
    account["status"] = STATUS_PENDING
    account["created_at"] = datetime.now(timezone.utc).isoformat()
    if not storage.save_account(account):
        logger.warning(f"Account {data.address} already exists.")
        return None
    return _public(storage.get_account(data.address))


def seed_owner_account(storage, owner: str, password: str):
    """Create or reset the owner's account from configuration, already approved."""
    hashed = hash_password(password)
    existing = storage.get_account(owner)
    if existing is None:
        storage.save_account(
            {
                "address": owner,
                "hashed_password": hashed,
                "status": STATUS_APPROVED,
                "created_at": datetime.now(timezone.utc).isoformat(),
            }
        )
        logger.info(f"Seeded owner account {owner}")
    elif existing.get("status") != STATUS_APPROVED or not verify_password(password, existing["hashed_password"]):
        storage.update_account(owner, {"hashed_password": hashed, "status": STATUS_APPROVED})
        logger.info(f"Reset owner account {owner} from configuration")


# Get all pending accounts
def get_pending_accounts(storage):
    return [_public(a) for a in storage.list_accounts() if a.get("status") == STATUS_PENDING]


# Update account status
def update_account_status(storage, address: str, new_status: str):
    if new_status not in [STATUS_APPROVED, STATUS_REJECTED]:
        raise ValueError("Status must be 'approved' or 'rejected'")
    account = storage.get_account(address)
    if not account or account.get("status") != STATUS_PENDING:
        return None
    storage.update_account(address, {"status": new_status})
    return _public(storage.get_account(address))


# Login account
def login_account(storage, address: str, password: str):
    account = storage.get_account(address)
    if not account:
        return None, "Invalid address or password"

    if not verify_password(password, account["hashed_password"]):
        return None, "Invalid address or password"

    if account.get("status") != STATUS_APPROVED:
        return None, "Account is not approved."

    return account, None
