"""Payment settlement exceptions."""

from .base import ConflictException, DomainException, UpstreamException, ValidationException


class InvalidPaymentRequestException(ValidationException):
    """Raised when a checkout or settlement request is invalid."""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="INVALID_PAYMENT_REQUEST",
        )


class PaymentIncompleteException(DomainException):
    """Raised when the processor reports a session as not paid."""

    def __init__(self, session_id: str, payment_status: str | None):
        super().__init__(
            message=f"Payment not completed (status: {payment_status or 'unknown'})",
            code="PAYMENT_INCOMPLETE",
        )
        self.session_id = session_id
        self.payment_status = payment_status


class ApplicationFeeAlreadyPaidException(ConflictException):
    """Raised when a checkout is requested for an application whose fee is paid."""

    def __init__(self, application_id: str):
        super().__init__(
            message=f"Application fee already paid: {application_id}",
            code="FEE_ALREADY_PAID",
        )
        self.application_id = application_id


class ApplicationNotPayableException(ConflictException):
    """Raised when a checkout is requested for an application that is no longer pending."""

    def __init__(self, application_id: str, current_status: str):
        super().__init__(
            message=f"Application {application_id} is {current_status} and cannot be paid for",
            code="APPLICATION_NOT_PAYABLE",
        )
        self.application_id = application_id
        self.current_status = current_status


class PaymentProviderException(UpstreamException):
    """Raised when the payment processor returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code="PAYMENT_PROVIDER_ERROR",
            status_code=status_code,
        )


class PaymentProviderTimeoutException(PaymentProviderException):
    """Raised when the payment processor times out."""

    def __init__(self):
        super().__init__(
            message="Payment provider request timed out",
            status_code=None,
        )
        self.code = "PAYMENT_PROVIDER_TIMEOUT"
