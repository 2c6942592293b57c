from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.errors import (
    AccountNotFoundError,
    BankError,
    ConflictError,
    InsufficientFundsError,
    InvalidArgumentError,
    UnavailableError,
)


logger = logging.getLogger(__name__)

# Checked in order; subclasses before BankError.
ERROR_STATUS_CODES: list[tuple[type[BankError], int]] = [
    (AccountNotFoundError, 404),
    (InvalidArgumentError, 400),
    (InsufficientFundsError, 409),
    (ConflictError, 409),
    (UnavailableError, 503),
]


def status_code_for(exc: BankError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BankError)
    async def bank_error_handler(request: Request, exc: BankError) -> JSONResponse:
        status_code = status_code_for(exc)
        if status_code >= 500:
            logger.error(
                "request.failed",
                extra={"path": request.url.path, "error": type(exc).__name__},
            )
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=400, content={"detail": jsonable_encoder(exc.errors())}
        )
