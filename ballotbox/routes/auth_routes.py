from typing import List

from fastapi import APIRouter, Depends, Form, HTTPException

from ..crud import create_account, get_pending_accounts, login_account, update_account_status
from ..dependencies import get_engine, get_storage
from ..engine import ElectionEngine
from ..errors import Unauthorized
from ..schemas import AccountCreate, AccountOut, StatusUpdateRequest, Token
from ..security import create_access_token, get_current_caller

router = APIRouter(prefix="/auth", tags=["Auth"])


def _require_owner(caller: str, engine: ElectionEngine) -> None:
    if caller != engine.owner:
        raise Unauthorized(f"Caller {caller} is not the owner")


@router.post("/register", response_model=AccountOut, status_code=201)
def register(account: AccountCreate, storage=Depends(get_storage), engine: ElectionEngine = Depends(get_engine)):
    """Request an account. It can log in once the owner approves it."""
    created = create_account(storage, account, owner=engine.owner)
    if not created:
        raise HTTPException(status_code=400, detail="Could not create account. Address may already exist.")
    return created


@router.get("/accounts/pending", response_model=List[AccountOut])
def list_pending_accounts(
    caller: str = Depends(get_current_caller),
    storage=Depends(get_storage),
    engine: ElectionEngine = Depends(get_engine),
):
    _require_owner(caller, engine)
    return get_pending_accounts(storage)


@router.patch("/accounts/{address}/status", response_model=AccountOut)
def patch_status(
    address: str,
    status_update: StatusUpdateRequest,
    caller: str = Depends(get_current_caller),
    storage=Depends(get_storage),
    engine: ElectionEngine = Depends(get_engine),
):
    _require_owner(caller, engine)
    updated = update_account_status(storage, address, status_update.status)
    if not updated:
        raise HTTPException(status_code=404, detail="Account not found or not in 'pending' state.")
    return updated


@router.post("/login", response_model=Token)
def login(
    username: str = Form(...),
    password: str = Form(...),
    storage=Depends(get_storage),
    engine: ElectionEngine = Depends(get_engine),
):
    # OAuth2 password form: the username is the caller address.
    # get_engine seeds the owner account on first use.
    account, error = login_account(storage, username, password)
    if error:
        raise HTTPException(status_code=401, detail=error)
    token = create_access_token({"sub": account["address"]})
    return Token(access_token=token)
