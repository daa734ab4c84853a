"""Custom exceptions for triangulr.

Every call-level failure is raised as a subclass of ``TriangulrError``
tagged with a ``TriErrorKind``. The error carries the offending argument,
its value and the violated rule so callers can inspect it programmatically.
"""

from typing import Optional, Dict, Any, List
from enum import Enum


class TriErrorKind(Enum):
    """Tags identifying which validation rule failed."""
    INVALID_PARAMETER = "invalid_parameter"
    RECYCLE = "recycle"
    FLAG = "flag"
    COUNT = "count"
    SYSTEM = "system"


class TriangulrError(Exception):
    """Base exception for all triangulr errors.

    Provides structured error information with context and recovery
    suggestions.
    """

    def __init__(
        self,
        message: str,
        kind: TriErrorKind = TriErrorKind.SYSTEM,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize structured error.

        Args:
            message: Human-readable error description
            kind: Tag of the violated rule
            error_code: Unique error identifier
            context: Additional error context
            recovery_suggestions: List of recovery suggestions
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        self.cause = cause

    def _generate_error_code(self) -> str:
        """Generate error code from class name."""
        return f"TRI_{self.__class__.__name__.upper()}"

    @property
    def argument(self) -> Optional[str]:
        """Name of the offending argument, if known."""
        return self.context.get('argument')

    @property
    def value(self) -> Any:
        """Offending value, if known."""
        return self.context.get('value')

    @property
    def rule(self) -> Optional[str]:
        """Violated rule, if known."""
        return self.context.get('rule')

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            'error_code': self.error_code,
            'message': self.message,
            'kind': self.kind.value,
            'context': self.context,
            'recovery_suggestions': self.recovery_suggestions,
            'exception_type': self.__class__.__name__,
            'cause': str(self.cause) if self.cause else None
        }


class _ArgumentError(TriangulrError):
    """Shared constructor for errors raised against a single argument."""

    kind = TriErrorKind.SYSTEM
    default_suggestions: List[str] = []

    def __init__(
        self,
        message: str,
        argument: Optional[str] = None,
        value: Any = None,
        rule: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop('context', {})
        context.update({
            'argument': argument,
            'value': value,
            'rule': rule
        })
        recovery_suggestions = kwargs.pop('recovery_suggestions', list(self.default_suggestions))

        super().__init__(
            message,
            kind=type(self).kind,
            context=context,
            recovery_suggestions=recovery_suggestions,
            **kwargs
        )


class InvalidParameterError(_ArgumentError):
    """Raised when an input is not numeric or min/max/mode are invalid."""

    kind = TriErrorKind.INVALID_PARAMETER
    default_suggestions = [
        "Pass numeric scalars, sequences or arrays",
        "Ensure min < max and min <= mode <= max",
        "Ensure min, max and mode are finite"
    ]


class RecycleError(_ArgumentError):
    """Raised when vector lengths cannot be recycled to a common length."""

    kind = TriErrorKind.RECYCLE
    default_suggestions = [
        "Give every vector either length 1 or the common length",
    ]

    def __init__(self, message: str, argument: Optional[str] = None,
                 size: Optional[int] = None, common_size: Optional[int] = None, **kwargs):
        context = kwargs.pop('context', {})
        context['common_size'] = common_size
        super().__init__(
            message,
            argument=argument,
            value=size,
            rule="length must be 1 or the common length",
            context=context,
            **kwargs
        )


class FlagError(_ArgumentError):
    """Raised when a logical option is not a single boolean."""

    kind = TriErrorKind.FLAG
    default_suggestions = [
        "Pass True or False",
    ]


class CountError(_ArgumentError):
    """Raised when the sampler count is not a single finite number >= 1."""

    kind = TriErrorKind.COUNT
    default_suggestions = [
        "Pass a single positive number of observations",
    ]


def handle_exception(
    exception: Exception,
    logger,
    context: Optional[Dict[str, Any]] = None,
    reraise: bool = True
) -> Optional[TriangulrError]:
    """Handle exception with proper logging and conversion.

    Args:
        exception: Original exception
        logger: Logger instance
        context: Additional context information
        reraise: Whether to reraise the exception

    Returns:
        Converted TriangulrError if not reraising

    Raises:
        TriangulrError: If reraise is True
    """
    if isinstance(exception, TriangulrError):
        tri_error = exception
    else:
        tri_error = TriangulrError(
            str(exception),
            context=context,
            cause=exception
        )

    logger.error(
        f"{tri_error.error_code}: {tri_error.message}",
        extra={'error': tri_error.to_dict()},
    )

    if reraise:
        raise tri_error
    return tri_error
