"""
Custom exceptions for the E2E environment tooling with structured error context.

Every failure raised by the tooling carries a context dictionary for
debugging and an exit code the CLI hands back to the shell.

Exception Hierarchy:
    E2EException (base)
    ├── ConfigurationError
    │   └── ConfigFileError
    ├── ComposeError
    │   ├── ComposeBuildError
    │   ├── ComposeUpError
    │   ├── ComposeDownError
    │   └── ComposeStatusError
    ├── DatabaseResetError
    │   ├── MySQLResetError
    │   └── SQLiteResetError
    ├── HealthCheckError
    │   ├── ServiceNotReadyError
    │   └── ContainerNotRunningError
    └── RetryableError / NonRetryableError (mixins)
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class E2EException(Exception):
    """
    Base exception for all E2E environment errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (command, file, database, etc.)
        original_exception: The original exception that was caught (if any)
        exit_code: Process exit status the CLI reports for this error
    """

    exit_code = 1

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        self.context["error_timestamp"] = self.timestamp.isoformat()

        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "exit_code": self.exit_code,
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(E2EException):
    """Invalid settings, unknown variant or unsafe identifier."""
    pass


class ConfigFileError(ConfigurationError):
    """
    Exception raised when a config file cannot be injected.

    Context should include:
        - file_path: Path to the TOML file
    """
    pass


# ============================================================================
# Orchestration Errors
# ============================================================================

class ComposeError(E2EException):
    """
    Base exception for failed orchestration commands.

    The exit code is the orchestration tool's own return code so that
    failures surface to the caller unchanged.

    Context should include:
        - command: The command line that failed
        - returncode: Exit status of the command
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        returncode: int = 1
    ):
        super().__init__(message, context, original_exception)
        self.returncode = returncode
        self.context["returncode"] = returncode

    @property
    def exit_code(self) -> int:
        # Killed by a signal: report it the way a shell would (128 + signal)
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode or 1


class ComposeBuildError(ComposeError):
    """Image build failed."""
    pass


class ComposeUpError(ComposeError):
    """Containers could not be started."""
    pass


class ComposeDownError(ComposeError):
    """Containers could not be stopped or removed."""
    pass


class ComposeStatusError(ComposeError):
    """Container status could not be queried or parsed."""
    pass


# ============================================================================
# Database Reset Errors
# ============================================================================

class DatabaseResetError(E2EException):
    """
    Base exception for database reset failures.

    Context should include:
        - database: Database name or file path
        - operation: Operation that failed (drop, create, delete, vacuum)
    """
    pass


class MySQLResetError(DatabaseResetError):
    """The index relational database could not be dropped or recreated."""
    pass


class SQLiteResetError(DatabaseResetError):
    """A SQLite database file could not be deleted or recreated."""
    pass


# ============================================================================
# Retry Strategy Mixins
# ============================================================================

class RetryableError(E2EException):
    """
    Mixin for errors that a later attempt may not hit.

    Use this for transient conditions like:
    - Services still starting up
    - Connection refused while containers boot
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        max_retries: int = 3,
        retry_delay: float = 1.0
    ):
        super().__init__(message, context, original_exception)
        self.max_retries = max_retries
        self.retry_delay = retry_delay


class NonRetryableError(E2EException):
    """
    Mixin for errors that retrying cannot fix.

    Use this for permanent conditions like:
    - Containers that exited
    - Invalid configuration
    """
    pass


# ============================================================================
# Health Check Errors
# ============================================================================

class HealthCheckError(E2EException):
    """Base exception for readiness failures after the environment is up."""
    pass


class ServiceNotReadyError(RetryableError, HealthCheckError):
    """
    A service did not answer its health check within the wait window.

    Context should include:
        - url: Health check URL
        - last_status: Last HTTP status seen (if any)
        - last_error: Last transport error seen (if any)
    """
    pass


class ContainerNotRunningError(NonRetryableError, HealthCheckError):
    """
    One or more containers are not in the running state.

    Context should include:
        - containers: Names and states of the stopped containers
    """
    pass
