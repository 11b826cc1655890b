"""
Exceptions for the clinic services and the HTTP boundary.

Services are permissive by default: not-found targets are ignored and nothing
is raised. The domain errors below only surface when a strict policy is
switched on in settings.

The API layer turns domain errors into HTTPExceptions through BusinessError,
which keeps messages generic and logs the details internally.
"""
from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)


class ClinicError(Exception):
    """Base class for domain errors raised by the stores."""


class InsufficientStockError(ClinicError):
    """A sale would drive a medicine's stock below zero (strict policy only)."""

    def __init__(self, medicine_id: str, requested: int, available: int):
        self.medicine_id = medicine_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {medicine_id}: requested {requested}, available {available}"
        )


class InvalidTransitionError(ClinicError):
    """Appointment status change outside the allowed state machine."""

    def __init__(self, appointment_id: str, current: str, requested: str):
        self.appointment_id = appointment_id
        self.current = current
        self.requested = requested
        super().__init__(
            f"Appointment {appointment_id} cannot move from {current} to {requested}"
        )


class BusinessError:
    """Business-domain HTTP errors with safe (non-leaky) messages."""

    @staticmethod
    def not_found(resource: str = "Resource", reason: str = "") -> HTTPException:
        """
        Generic 404.

        Only used for reads; edits and deletes of unknown ids are no-ops.
        """
        if reason:
            logger.warning(f"Not found: {resource} - {reason}")

        return HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found",
        )

    @staticmethod
    def unauthorized(reason: str = "") -> HTTPException:
        """
        Generic 401 for all login failures.

        Same response for wrong password and unknown user.
        """
        logger.warning(f"Failed login attempt: {reason}")
        return HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password",
        )

    @staticmethod
    def bad_request(detail: str) -> HTTPException:
        """
        400 for input validation / business precondition errors.

        OK to include specific details here since the caller caused the issue.
        Examples: "Insufficient stock! Available: 12"
        """
        logger.info(f"Bad request: {detail}")
        return HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )

    @staticmethod
    def conflict(detail: str) -> HTTPException:
        """
        409 for state conflicts.
        Example: "Appointment a1 cannot move from COMPLETED to CANCELLED"
        """
        logger.info(f"Conflict: {detail}")
        return HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )

    @staticmethod
    def server_error(original_error: Exception = None) -> HTTPException:
        """
        Generic 500 - logs actual error internally, hides from user.
        """
        if original_error:
            logger.error(
                f"Internal server error: {type(original_error).__name__}: {str(original_error)}",
                exc_info=True
            )
        else:
            logger.error("Internal server error occurred", exc_info=True)

        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An internal error occurred. Please try again later.",
        )

    @staticmethod
    def from_domain(error: ClinicError) -> HTTPException:
        """Map a domain error raised by a store to an HTTP error."""
        if isinstance(error, InsufficientStockError):
            return BusinessError.bad_request(
                f"Insufficient stock! Available: {error.available}"
            )
        if isinstance(error, InvalidTransitionError):
            return BusinessError.conflict(str(error))
        return BusinessError.server_error(error)
