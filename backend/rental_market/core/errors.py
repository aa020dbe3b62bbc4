# rental_market/core/errors.py
"""
Domain errors raised by the service layer.

All of them are expected outcomes (bad input, wrong actor, missing record,
illegal transition). Routers never catch them; the handlers registered in
main.py turn them into JSON responses.
"""
import logging
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class MarketplaceError(Exception):
    """Base class for every expected business-rule failure."""

    message = "Request could not be processed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class ValidationError(MarketplaceError):
    """
    One or more fields are missing or out of range.

    `errors` maps field name -> list of human readable messages, so the
    caller can show every problem at once.
    """

    message = "Validation failed"

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        super().__init__(message)
        self.errors = errors


class AuthorizationError(MarketplaceError):
    message = "Forbidden"


class NotFoundError(MarketplaceError):
    message = "Not found"


class InvalidStateError(MarketplaceError):
    message = "Operation not allowed in the current state"


def add_error(errors: Dict[str, List[str]], field: str, message: str) -> None:
    errors.setdefault(field, []).append(message)


# ---------------------------
# HTTP mapping
# ---------------------------

async def _validation_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"detail": exc.message, "errors": exc.errors},
    )


async def _authorization_handler(request: Request, exc: AuthorizationError) -> JSONResponse:
    # never say why
    logger.info("forbidden: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={"detail": "Forbidden"},
    )


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Not found"},
    )


async def _invalid_state_handler(request: Request, exc: InvalidStateError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": exc.message},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, _validation_handler)
    app.add_exception_handler(AuthorizationError, _authorization_handler)
    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.add_exception_handler(InvalidStateError, _invalid_state_handler)
