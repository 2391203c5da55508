"""Custom exception hierarchy for wpdeploy-core.

This module defines the exception classes used throughout wpdeploy:
- WpDeployError: Base exception for all wpdeploy errors
- ConfigurationError: Raised when a parameter source cannot be read
- NamingTableError: Raised when the resource naming table is malformed

Rule violations found while validating deployment parameters are NOT
exceptions. They are returned as Violation records in a ValidationResult.
Exceptions are reserved for input that cannot be read at all and for a
broken constant table.

Security:
- Error messages to users MUST NOT contain secret values
- Technical details logged internally only
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class WpDeployError(Exception):
    """Base exception for wpdeploy.

    User-facing messages are safe to display; technical details are
    logged internally.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but NEVER exposed to the user.

    Example:
        >>> raise WpDeployError(
        ...     "Could not read deployment parameters",
        ...     internal_details="UnicodeDecodeError at byte 12",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize WpDeployError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "wpdeploy_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(WpDeployError):
    """Raised when a parameter source file cannot be parsed.

    Use this exception when:
    - A YAML parameter file has a syntax error
    - A parameter file does not contain a flat mapping
    - An azd env dump cannot be decoded

    Attributes:
        file_path: Path to the source file (if known).
        line_number: Line number in the file where the error occurred (if known).

    Example:
        >>> raise ConfigurationError(
        ...     "Parameter file must contain a mapping",
        ...     file_path="wpdeploy.yaml",
        ...     line_number=3,
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        line_number: int | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with context.

        Args:
            user_message: Safe message to display to the user.
            file_path: Path to the source file (optional).
            line_number: Line number in the file (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if line_number:
            context_parts.append(f"line {line_number}")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.line_number = line_number


class NamingTableError(WpDeployError):
    """Raised when the resource naming table itself is malformed.

    This never happens with the shipped table. It signals a programming
    error (an unknown template placeholder, a non-positive length limit, a
    duplicate resource key) rather than bad user input.

    Attributes:
        resource: Key of the offending rule.
    """

    def __init__(self, resource: str, problem: str) -> None:
        """Initialize NamingTableError.

        Args:
            resource: Key of the offending naming rule.
            problem: Description of what is wrong with the rule.
        """
        super().__init__(f"Naming rule '{resource}' is invalid: {problem}")
        self.resource = resource
