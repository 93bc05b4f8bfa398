"""
Domain errors and their HTTP mapping.

Services raise the domain errors below; the API layer turns them into
HTTPException through BusinessError. Insufficient stock is not an error:
the request simply ends up Rejected.
"""
from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)


class BloodBankError(Exception):
    """Base class for every error the ledger raises on purpose."""


class ValidationError(BloodBankError):
    """A write violated a constraint. `field` names the offending column."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class NotFoundError(BloodBankError):
    def __init__(self, resource: str, resource_id):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} {resource_id} not found")


class ConflictError(BloodBankError):
    """A conditional update lost a race with another writer. Safe to retry."""

    def __init__(self, resource: str, detail: str):
        self.resource = resource
        self.detail = detail
        super().__init__(f"{resource}: {detail}")


class StockConflictError(ConflictError):
    def __init__(self, blood_group: str, detail: str = "stock changed concurrently, retry"):
        self.blood_group = blood_group
        super().__init__(f"stock {blood_group}", detail)


class BusinessError:
    """HTTPException factories with safe messages."""

    @staticmethod
    def not_found(resource: str = "Resource", reason: str = "") -> HTTPException:
        if reason:
            logger.info(f"Not found: {resource} - {reason}")
        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )

    @staticmethod
    def bad_request(detail: str, field: str | None = None) -> HTTPException:
        """
        400 for input validation errors.

        OK to include specific details here since the caller caused the issue.
        """
        logger.info(f"Bad request: {detail}")
        body = {"message": detail}
        if field:
            body["field"] = field
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=body,
        )

    @staticmethod
    def conflict(detail: str) -> HTTPException:
        """409 for writes that lost a race and should be retried by the client."""
        logger.info(f"Conflict: {detail}")
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            headers={"Retry-After": "1"},
        )

    @staticmethod
    def server_error(original_error: Exception = None) -> HTTPException:
        """
        Generic 500 - logs actual error internally, hides from user.

        Never expose stack traces, SQL errors, or internal paths to callers.
        """
        if original_error:
            logger.error(
                f"Internal server error: {type(original_error).__name__}: {str(original_error)}",
                exc_info=original_error,
            )
        else:
            logger.error("Internal server error occurred", exc_info=True)

        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred. Please try again later.",
        )

    @staticmethod
    def from_domain(error: BloodBankError) -> HTTPException:
        if isinstance(error, ValidationError):
            return BusinessError.bad_request(error.message, field=error.field)
        if isinstance(error, NotFoundError):
            return BusinessError.not_found(error.resource, reason=f"id={error.resource_id}")
        if isinstance(error, ConflictError):
            return BusinessError.conflict(str(error))
        return BusinessError.server_error(error)
