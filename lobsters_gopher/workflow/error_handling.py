"""Error taxonomy for the mirror pipeline.

Every failure the pipeline distinguishes has its own exception class so the
driver can decide between aborting the run and skipping a single output:

- TransportError: network, TLS or non-2xx HTTP failure
- DecodeError: malformed JSON or an unexpected payload shape
- RenderError: template lookup or formatting failure
- WriteError: the rendered text could not be persisted

None of these are retried.
"""

import logging
import time
from typing import Any, Optional

logger = logging.getLogger(__name__)


class MirrorError(Exception):
    """Base exception for mirror pipeline errors."""

    def __init__(self, message: str, **context):
        """Initialize mirror error with context.

        Args:
            message: Error message
            **context: Additional context information
        """
        super().__init__(message)
        self.context = context
        self.timestamp = time.time()


class TransportError(MirrorError):
    """Error while talking to the upstream API."""

    def __init__(
        self,
        message: str,
        url: str,
        status_code: Optional[int] = None,
        **context,
    ):
        """Initialize transport error.

        Args:
            message: Error message
            url: Requested URL
            status_code: HTTP status code if a response was received
            **context: Additional context
        """
        super().__init__(message, **context)
        self.url = url
        self.status_code = status_code

    def __str__(self):
        """String representation with the failing URL."""
        return f"{super().__str__()} ({self.url})"


class DecodeError(MirrorError):
    """Error when a response body does not match the expected shape."""

    def __init__(self, message: str, source: Optional[str] = None, **context):
        """Initialize decode error.

        Args:
            message: Error message
            source: URL or label of the payload being decoded
            **context: Additional context
        """
        super().__init__(message, **context)
        self.source = source


class RenderError(MirrorError):
    """Error while rendering a template."""

    def __init__(self, message: str, template_name: Optional[str] = None, **context):
        super().__init__(message, **context)
        self.template_name = template_name


class WriteError(MirrorError):
    """Error while writing rendered output to disk."""

    def __init__(self, message: str, path: Optional[str] = None, **context):
        super().__init__(message, **context)
        self.path = path


class ErrorContext:
    """Context manager recording duration and context of an operation.

    Failures are only traced at debug level and re-raised; reporting them is
    left to whoever catches the exception.

    Usage:
        with ErrorContext("story.abc123") as ctx:
            # Code that might fail
            ctx.add_info("title", story.title)
    """

    def __init__(self, operation: str):
        """Initialize error context.

        Args:
            operation: Name of operation being performed
        """
        self.operation = operation
        self.info: dict[str, Any] = {}
        self.start_time = None

    def __enter__(self):
        """Enter context, recording start time."""
        self.start_time = time.time()
        logger.debug(f"Starting operation: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context, tracing duration and outcome."""
        duration = time.time() - self.start_time if self.start_time else 0

        if exc_type is None:
            logger.debug(f"Operation '{self.operation}' completed successfully in {duration:.2f}s")
        else:
            logger.debug(
                f"Operation '{self.operation}' failed after {duration:.2f}s: {exc_val}",
                extra={"context": self.info},
            )

        # Don't suppress the exception
        return False

    def add_info(self, key: str, value: Any):
        """Add contextual information.

        Args:
            key: Information key
            value: Information value
        """
        self.info[key] = value


__all__ = [
    "MirrorError",
    "TransportError",
    "DecodeError",
    "RenderError",
    "WriteError",
    "ErrorContext",
]
