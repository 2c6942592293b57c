from .db import Account as AccountModel
from .schemas import (
    AccountCreate,
    AccountIdResponse,
    AccountResponse,
    BalanceUpdate,
    TransferRequest,
    TransferResponse,
)

__all__ = [
    "AccountCreate",
    "AccountIdResponse",
    "AccountResponse",
    "BalanceUpdate",
    "TransferRequest",
    "TransferResponse",
    "AccountModel",
]
