from fastapi import APIRouter, Depends, status

from ..core.dependencies import get_account_store
from ..core.errors import AccountNotFoundError
from ..models import (
    AccountCreate,
    AccountIdResponse,
    AccountResponse,
    BalanceUpdate,
    TransferRequest,
    TransferResponse,
)
from ..services import AccountStore


router = APIRouter(prefix="/account", tags=["accounts"])

@router.get("", response_model=list[AccountResponse])
def list_accounts(store: AccountStore = Depends(get_account_store)) -> list[AccountResponse]:
    accounts = store.get_accounts()
    if not accounts:
        raise AccountNotFoundError("No accounts found")
    return [AccountResponse.model_validate(account) for account in accounts]

@router.post("", response_model=AccountIdResponse, status_code=status.HTTP_201_CREATED)
def create_account(
    payload: AccountCreate,
    store: AccountStore = Depends(get_account_store),
) -> AccountIdResponse:
    account_id = store.create_account(payload.first_name, payload.last_name)
    return AccountIdResponse(id=account_id)

@router.get("/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    store: AccountStore = Depends(get_account_store),
) -> AccountResponse:
    return AccountResponse.model_validate(store.get_account_by_id(account_id))

@router.delete("/{account_id}", response_model=AccountIdResponse)
def delete_account(
    account_id: int,
    store: AccountStore = Depends(get_account_store),
) -> AccountIdResponse:
    return AccountIdResponse(id=store.delete_account(account_id))

@router.put("/{account_id}", response_model=AccountIdResponse)
def update_account_balance(
    account_id: int,
    payload: BalanceUpdate,
    store: AccountStore = Depends(get_account_store),
) -> AccountIdResponse:
    updated_id = store.update_account_balance(account_id, payload.number, payload.balance)
    return AccountIdResponse(id=updated_id)

transfer_router = APIRouter(prefix="/transfer", tags=["transfers"])

@transfer_router.post("", response_model=TransferResponse)
def create_transfer(
    payload: TransferRequest,
    store: AccountStore = Depends(get_account_store),
) -> TransferResponse:
    store.transfer_money(payload.from_account_no, payload.to_account_no, payload.amount)
    return TransferResponse()

__all__ = ["router", "transfer_router"]
