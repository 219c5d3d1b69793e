"""API error handling

ClientError carries a use case Error up to the exception handler, which
renders it as {"error": {"code", "message", "reason"?}}.
"""

import logging
from typing import Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    # Not found
    "CUSTOMER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "INVOICE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PAYMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "DELIVERY_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "PRODUCT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "AREA_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SUBSCRIPTION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ASSIGNMENT_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    # Conflicts
    "DUPLICATE_ENTRY": status.HTTP_409_CONFLICT,
    "USER_EXISTS": status.HTTP_409_CONFLICT,
    "INVOICE_HAS_PAYMENTS": status.HTTP_409_CONFLICT,
    "PAYMENT_HAS_ALLOCATIONS": status.HTTP_409_CONFLICT,
    "AREA_HAS_CUSTOMERS": status.HTTP_409_CONFLICT,
    "PRODUCT_IN_USE": status.HTTP_409_CONFLICT,
    "CUSTOMER_HAS_BILLING_HISTORY": status.HTTP_409_CONFLICT,
    "DELIVERY_INVOICED": status.HTTP_409_CONFLICT,
    "ASSIGNMENT_EXISTS": status.HTTP_409_CONFLICT,
    "INVALID_SUBSCRIPTION_STATUS": status.HTTP_409_CONFLICT,
    # Authentication
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "NOT_AUTHENTICATED": status.HTTP_401_UNAUTHORIZED,
    "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED,
    "TOKEN_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "USER_INACTIVE": status.HTTP_403_FORBIDDEN,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
}


def status_for(error: Error) -> int:
    """HTTP status for a use case error; unexpected failures are 500, the rest 400"""
    if error.code in ERROR_STATUS:
        return ERROR_STATUS[error.code]
    if error.code.endswith("_FAILED"):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


class ClientError(Exception):
    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or status_for(error)


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    body = {"code": exc.error.code, "message": exc.error.message}
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.error.code} {exc.error.reason}")
    elif exc.error.reason:
        body["reason"] = exc.error.reason
    return JSONResponse(status_code=exc.status_code, content={"error": body})
