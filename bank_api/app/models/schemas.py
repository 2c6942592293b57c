from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class AccountCreate(CamelModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)

    model_config = ConfigDict(str_strip_whitespace=True)

class AccountResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    number: int
    balance: Decimal = Field(..., ge=0, description="Balance with two decimal places")
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

class AccountIdResponse(BaseModel):
    id: int

class BalanceUpdate(CamelModel):
    balance: Decimal = Field(..., ge=0, max_digits=15, decimal_places=2)
    number: int = Field(..., gt=0, description="Must match the stored account number")

class TransferRequest(CamelModel):
    from_account_no: int = Field(..., gt=0)
    to_account_no: int = Field(..., gt=0)
    amount: Decimal = Field(..., gt=0, max_digits=15, decimal_places=2)

    @model_validator(mode="after")
    def check_distinct_accounts(self) -> "TransferRequest":
        if self.from_account_no == self.to_account_no:
            raise ValueError("Cannot transfer to the same account")
        return self

class TransferResponse(BaseModel):
    status: Literal["success"] = "success"
