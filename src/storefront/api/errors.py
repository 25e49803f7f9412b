"""Exception handlers mapping storefront errors to HTTP responses."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from protean.integrations.fastapi import register_exception_handlers

from storefront.exceptions import DuplicateVariantError, StorefrontError, TransactionAbortError


def _storefront_error(request: Request, exc: StorefrontError) -> JSONResponse:
    status_code = 409 if isinstance(exc, DuplicateVariantError) else 400
    return JSONResponse(status_code=status_code, content={"error": exc.messages, "details": exc.details})


def _transaction_abort(request: Request, exc: TransactionAbortError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"error": exc.reason, "details": exc.details})


def register_error_handlers(app: FastAPI) -> None:
    """Register Protean's handlers, then the storefront-specific ones.

    Not-found errors are left to Protean's handler, which answers 404.
    """
    register_exception_handlers(app)
    app.add_exception_handler(StorefrontError, _storefront_error)
    app.add_exception_handler(TransactionAbortError, _transaction_abort)
