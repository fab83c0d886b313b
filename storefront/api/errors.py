# storefront/api/errors.py
from fastapi import HTTPException

from storefront.domain.exceptions import (
    AuthenticationRequired,
    AuthorizationDenied,
    CheckoutInProgress,
    NotFound,
    OrderFinalizationError,
    OwnershipDenied,
    PaymentDeclined,
    StorefrontError,
    UpstreamFailure,
    ValidationFailure,
)

# kolejnosc ma znaczenie: podklasy przed klasami bazowymi
_STATUS = (
    (AuthenticationRequired, 401),
    (AuthorizationDenied, 403),
    (OwnershipDenied, 403),
    (NotFound, 404),
    (ValidationFailure, 400),
    (CheckoutInProgress, 409),
    (PaymentDeclined, 402),
    (UpstreamFailure, 502),
    (OrderFinalizationError, 500),
)


def to_http(error: StorefrontError) -> HTTPException:
    for cls, status in _STATUS:
        if isinstance(error, cls):
            return HTTPException(status_code=status, detail=error.message)
    return HTTPException(status_code=500, detail=error.message)
