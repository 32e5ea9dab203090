"""
Exception hierarchy for taskquest

Every error logs itself once on creation and serializes to the JSON body
the CLI writes to stderr.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger(__name__)


class TaskQuestError(Exception):
    """
    Base exception for all taskquest errors

    Args:
        message: Developer-facing description
        user_id: Player the failing record belongs to, when known
        operation: Parser or scoring step that failed
        context: Extra fields for the log record
        cause: Underlying exception
        user_message: Text safe to show the player
    """

    default_user_message = "An error occurred. Please try again."

    def __init__(
        self,
        message: str,
        user_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.user_id = user_id
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or self.default_user_message
        self.request_id = str(uuid4())
        self.timestamp = datetime.now(timezone.utc)

        self._log_error()

    def _log_error(self) -> None:
        # 'message' is reserved on LogRecord
        extra = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,
            "request_id": self.request_id,
            "user_id": self.user_id,
            "operation": self.operation,
            "error_context": self.context,
        }
        logger.error(
            f"{self.__class__.__name__}: {self.message}",
            extra=extra,
            exc_info=self.cause,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the CLI error output"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "operation": self.operation,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (Backend Records)
# ==========================================

class ValidationError(TaskQuestError):
    """
    Raised when a record handed over by the backend fails validation

    Examples:
    - User payload without an id
    - Non-numeric totalXp or completionTime
    - Habit completion without a completedAt timestamp
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        context = kwargs.pop("context", None) or {}
        context.update({"field": field, "value": value})
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context=context,
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(TaskQuestError):
    """An env setting is malformed or out of range"""

    default_user_message = "The system is not properly configured. Please contact support."

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        self.config_key = config_key
        super().__init__(message=message, context={"config_key": config_key}, **kwargs)


def wrap_validation_error(
    error: PydanticValidationError,
    operation: str,
    user_id: Optional[str] = None
) -> ValidationError:
    """
    Convert a pydantic failure into a ValidationError naming the first bad field

    Nested locations are dotted, so the second history entry's flag reads
    ``1.completed``.

    Example:
        try:
            user = User.model_validate(payload)
        except pydantic.ValidationError as e:
            raise wrap_validation_error(e, operation="parse_user") from e
    """
    errors = error.errors()
    first = errors[0] if errors else {}
    field = ".".join(str(part) for part in first.get("loc", ())) or None
    return ValidationError(
        message=first.get("msg", str(error)),
        field=field,
        value=first.get("input"),
        user_id=user_id,
        operation=operation,
        cause=error
    )
