"""
Base command wrapper with error parsing and command generation
"""
import re
import logging
from enum import Enum
from dataclasses import dataclass
from typing import Optional
logger = logging.getLogger(__name__)


class ErrorType(Enum):
    """Error types that can be detected in command output"""
    NONE = "none"
    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    INVALID_ARGUMENT = "invalid_argument"
    RESOURCE_BUSY = "resource_busy"
    COMMAND_FAILED = "command_failed"
    PACKAGE_ERROR = "package_error"
    UNKNOWN = "unknown"


@dataclass
class CommandResult:
    """Structured result from command execution"""
    success: bool
    output: Optional[str]
    error_type: ErrorType
    error_message: Optional[str]
    exit_code: Optional[int]

    def __bool__(self):
        """Allow truthiness check: True when command succeeded."""
        return self.success

    @property
    def failed(self) -> bool:
        """Convenience property: True when command failed."""
        return not self.success


class CommandWrapper:  # pylint: disable=too-few-public-methods
    """Base wrapper for CLI commands - generates command strings and parses results"""
    def __init__(self) -> None:
        """Prevent direct instantiation; subclasses define their own state."""
        raise RuntimeError("CommandWrapper should not be instantiated")
    # Error patterns: (pattern, error_type, description)
    ERROR_PATTERNS = [
        (r"timeout|timed out", ErrorType.TIMEOUT, "Command timed out"),
        (
            r"connection (?:refused|reset|closed|failed)|unable to connect|no route to host|"
            r"is not connected|transport endpoint",
            ErrorType.CONNECTION_ERROR,
            "Connection error",
        ),
        (r"permission denied|operation not permitted", ErrorType.PERMISSION_DENIED, "Permission denied"),
        (
            r"no such file|no such device|command not found|does not exist|not found",
            ErrorType.NOT_FOUND,
            "Resource not found",
        ),
        (
            r"already exists|already in peer list|already started|already mounted|already part",
            ErrorType.ALREADY_EXISTS,
            "Resource already exists",
        ),
        (r"device or resource busy|target is busy", ErrorType.RESOURCE_BUSY, "Resource busy"),
        (r"invalid (?:argument|option)|usage:|unknown option", ErrorType.INVALID_ARGUMENT, "Invalid argument"),
        (r"no package .* available|nothing to do|error: nothing provides", ErrorType.PACKAGE_ERROR, "Package error"),
        (r"(?<![-a-z0-9])(error|failed|failure|fatal)(?![-a-z0-9])", ErrorType.COMMAND_FAILED, "Command failed"),
    ]

    @classmethod
    def parse_result(cls, output: Optional[str], exit_code: Optional[int] = None) -> CommandResult:
        """
        Parse command output and return structured result
        Args:
            output: Command output (stdout/stderr combined)
            exit_code: Exit code if available
        Returns:
            CommandResult object
        """
        error_type, error_msg = cls._parse_error(output, exit_code)
        # "already exists" keeps re-runs of guarded steps successful
        success = error_type in (ErrorType.NONE, ErrorType.ALREADY_EXISTS)
        if exit_code is not None and exit_code != 0 and error_type != ErrorType.ALREADY_EXISTS:
            success = False
        return CommandResult(
            success=success,
            output=output,
            error_type=error_type,
            error_message=error_msg,
            exit_code=exit_code if exit_code is not None else (0 if success else 1),
        )

    @classmethod
    def _parse_error(cls, output: Optional[str], exit_code: Optional[int] = None) -> tuple[ErrorType, Optional[str]]:
        """
        Identify error type and message from command output
        Args:
            output: Command output (stdout/stderr combined)
            exit_code: Exit code if available
        Returns:
            Tuple of (ErrorType, error_message)
        """
        if output is None:
            if exit_code is None:
                return ErrorType.TIMEOUT, "Command produced no output (possible timeout)"
            if exit_code != 0:
                return ErrorType.COMMAND_FAILED, "Command failed with no output"
            return ErrorType.UNKNOWN, "Command produced no output"
        # Empty string is valid - command succeeded with no output
        if output == "" and not exit_code:
            return ErrorType.NONE, None
        for pattern, error_type, description in cls.ERROR_PATTERNS:
            if re.search(pattern, output, re.IGNORECASE):
                return error_type, cls._extract_error_message(output, pattern) or description
        if exit_code is not None and exit_code != 0:
            return ErrorType.COMMAND_FAILED, f"Command failed with exit code {exit_code}"
        return ErrorType.NONE, None

    @staticmethod
    def _extract_error_message(output: str, pattern: str) -> Optional[str]:
        """Return the first output line matching pattern, truncated"""
        for line in output.splitlines():
            if re.search(pattern, line, re.IGNORECASE):
                msg = line.strip()
                if len(msg) > 200:
                    msg = msg[:197] + "..."
                return msg
        return None
