from abc import ABC, abstractmethod
from decimal import Decimal

from ..models import AccountModel


class AccountStore(ABC):
    """Storage contract the request handlers depend on.

    Failures are reported with the exceptions in ``core.errors``; a missing
    account is always ``AccountNotFoundError``, never a ``None`` result.
    """

    @abstractmethod
    def create_account(self, first_name: str, last_name: str) -> int:
        """Create an account with a fresh random number and zero balance."""

    @abstractmethod
    def get_account_by_id(self, account_id: int) -> AccountModel:
        pass

    @abstractmethod
    def get_accounts(self) -> list[AccountModel]:
        """Return the first page of accounts, ascending by id."""

    @abstractmethod
    def delete_account(self, account_id: int) -> int:
        pass

    @abstractmethod
    def update_account_balance(
        self, account_id: int, number: int, new_balance: Decimal
    ) -> int:
        """Overwrite the balance of the account matching both id and number."""

    @abstractmethod
    def transfer_money(self, from_number: int, to_number: int, amount: Decimal) -> None:
        """Atomically move ``amount`` between two accounts addressed by number."""
