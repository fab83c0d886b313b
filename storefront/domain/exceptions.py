"""
Wyjatki domenowe sklepu.

Routery tlumacza je na HTTPException (patrz ``storefront.api.errors``).
"""


class StorefrontError(Exception):
    """
    Bazowy wyjatek dla wszystkich bledow sklepu.

    Attributes:
        message: komunikat dla uzytkownika
        details: dodatkowy kontekst (id encji itp.), trafia do logow
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.__class__.__name__}('{self.message}', {details_str})"
        return f"{self.__class__.__name__}('{self.message}')"


class AuthenticationRequired(StorefrontError):
    def __init__(self, message: str = "You must be signed in to do that!"):
        super().__init__(message)


class AuthorizationDenied(StorefrontError):
    """Brak wymaganej roli."""

    def __init__(self, required: list[str], held: list[str]):
        super().__init__(
            f"You do not have sufficient permissions: {', '.join(required)}. You have: {', '.join(held)}",
            details={"required": required, "held": held},
        )
        self.required = required
        self.held = held


class OwnershipDenied(StorefrontError):
    """Obiekt nalezy do innego uzytkownika."""

    def __init__(self, resource: str, resource_id: int, user_id: int):
        super().__init__(
            f"This is not your {resource}",
            details={"resource": resource, "resource_id": resource_id, "user_id": user_id},
        )
        self.resource = resource
        self.resource_id = resource_id


class NotFound(StorefrontError):
    def __init__(self, resource: str, **lookup):
        where = ", ".join(f"{k} {v}" for k, v in lookup.items())
        super().__init__(
            f"No {resource} found for {where}" if where else f"No {resource} found",
            details={"resource": resource, **lookup},
        )
        self.resource = resource


class ValidationFailure(StorefrontError):
    pass


class EmptyCart(ValidationFailure):
    def __init__(self, user_id: int):
        super().__init__("Your cart is empty", details={"user_id": user_id})
        self.user_id = user_id


class CheckoutInProgress(StorefrontError):
    def __init__(self, user_id: int):
        super().__init__(
            "A checkout is already in progress for this account",
            details={"user_id": user_id},
        )
        self.user_id = user_id


class UpstreamFailure(StorefrontError):
    """Zewnetrzny serwis (provider platnosci, redis) odrzucil wywolanie."""


class PaymentFailed(UpstreamFailure):
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message, details)


class PaymentDeclined(PaymentFailed):
    """Provider odrzucil karte/token (HTTP 402)."""


class PaymentOutcomeUnknown(UpstreamFailure):
    """
    Zadanie moglo dotrzec do providera, ale nie wiemy czy obciazyl karte
    (timeout odczytu, nieczytelna odpowiedz 2xx). Rekord zostaje PENDING.
    """

    def __init__(self, idempotency_key: str, cause: Exception):
        super().__init__(
            "We could not confirm your payment. Please check your orders before trying again.",
            details={"idempotency_key": idempotency_key, "cause": repr(cause)},
        )
        self.idempotency_key = idempotency_key
        self.cause = cause


class OrderFinalizationError(StorefrontError):
    """
    Pieniadze pobrane, zamowienie nie zapisane.

    Nigdy nie traktowac jak zwyklego bledu walidacji: rekord obciazenia
    zostaje w stanie CHARGED i zadanie reconcile domyka zamowienie.
    """

    def __init__(self, charge_id: str, charge_record_id: int, cause: Exception):
        super().__init__(
            "Your payment was received but the order could not be recorded. "
            "It will be completed automatically; please do not pay again.",
            details={"charge_id": charge_id, "charge_record_id": charge_record_id, "cause": repr(cause)},
        )
        self.charge_id = charge_id
        self.charge_record_id = charge_record_id
        self.cause = cause
