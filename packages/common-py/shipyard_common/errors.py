"""
Shipyard Exception Classes

This module defines the exception hierarchy for all Shipyard packages.
All custom exceptions inherit from ShipyardError to enable consistent error handling.

Usage:
    from shipyard_common.errors import ParseError, ForbiddenDependencyError

    if not match:
        raise ParseError("No dependency tree found", raw_output=stdout)
"""

from typing import List, Optional


class ShipyardError(Exception):
    """
    Base exception for all Shipyard errors.

    All custom Shipyard exceptions should inherit from this class to enable
    consistent error handling across packages.

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
    """

    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """
        Serialize error to dictionary for CLI or JSON output.

        Returns:
            dict with error details including class name, code, and message
        """
        return {
            "error": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code='{self.code}', message='{self.message}')"


class ValidationError(ShipyardError):
    """
    Raised when input validation fails.

    Use this for:
    - Invalid Bundlefile configuration
    - Empty or malformed package names in a policy
    - Unsupported Bundlefile versions

    Example:
        if not root_module:
            raise ValidationError("root_module cannot be empty")
    """

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class ParseError(ShipyardError):
    """
    Raised when package-manager output cannot be parsed.

    The raw captured output is kept on the exception so the caller can
    show what the tool actually printed.

    Example:
        raise ParseError("Not able to find a dependency tree", raw_output=stdout)
    """

    def __init__(self, message: str, raw_output: str = "", command: Optional[str] = None):
        self.raw_output = raw_output
        self.command = command
        super().__init__(message, code="PARSE_ERROR")


class ModuleNotFoundInGraphError(ShipyardError, LookupError):
    """
    Raised when the root module is absent from the dependency graph.

    Also a builtin LookupError, so callers catching lookup failures
    generically keep working.
    """

    def __init__(self, module: str):
        self.module = module
        super().__init__(
            f"The initial module {module} was not found in dependencies",
            code="ROOT_MODULE_NOT_FOUND",
        )


class PolicyViolationError(ShipyardError):
    """
    Raised when a resolution policy is violated.

    Use this for:
    - Forbidden packages reachable from the root module

    Example:
        raise PolicyViolationError("Package 'webpack' is not allowed")
    """

    def __init__(self, message: str, code: str = "POLICY_VIOLATION"):
        super().__init__(message, code=code)


class ForbiddenDependencyError(PolicyViolationError):
    """
    Raised when a non-excluded dependency matches the forbidden set.

    Attributes:
        packages: The forbidden module names that were found
        parent: The module that depends on them
        dependencies: The parent's non-excluded children at the time of failure
    """

    def __init__(self, packages: List[str], parent: str, dependencies: Optional[List[str]] = None):
        self.packages = list(packages)
        self.parent = parent
        self.dependencies = list(dependencies or [])
        super().__init__(
            f"Forbidden dependencies {', '.join(self.packages)} have been found "
            f"as dependencies of {parent}. "
            f"Current dependencies: {', '.join(self.dependencies)}",
            code="FORBIDDEN_DEPENDENCY",
        )


class ExecutionError(ShipyardError):
    """
    Raised when an external command cannot be run or exits with a non-zero code.

    Attributes:
        command: The command line that was executed
        exit_code: Process exit code, None if the process never started
        stderr: Captured standard error (may be empty)
    """

    def __init__(
        self,
        message: str,
        command: str = "",
        exit_code: Optional[int] = None,
        stderr: str = "",
    ):
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr
        super().__init__(message, code="EXECUTION_ERROR")


class CommandTimeoutError(ShipyardError):
    """
    Raised when an external command does not finish within its time bound.

    Kept apart from ExecutionError: the process did not fail, it was killed.
    """

    def __init__(self, command: str, timeout: float):
        self.command = command
        self.timeout = timeout
        super().__init__(
            f"Command '{command}' did not complete within {timeout:g}s",
            code="COMMAND_TIMEOUT",
        )


class MissingDependencyError(ShipyardError):
    """
    Raised when a resolved dependency directory does not exist on disk.

    Example:
        if not path.is_dir():
            raise MissingDependencyError(str(path))
    """

    def __init__(self, path: str):
        self.path = path
        super().__init__(
            f"The dependency {path} is referenced but is not available on the filesystem",
            code="MISSING_DEPENDENCY",
        )
