"""Custom exceptions for cppgrep.

This module defines the small hierarchy of exceptions raised around the grep
engine. The engine itself never raises for source-level problems: malformed
C++ simply yields fewer entries. These exceptions cover setup and usage.

Usage:
    from cppgrep.core.exceptions import FrontEndError

    try:
        frontend = get_frontend("clang")
    except FrontEndError as e:
        print(f"Cannot use {e.frontend}: {e.details}")
"""


class CppGrepException(Exception):
    """Base exception for all cppgrep operations.

    All custom exceptions in cppgrep inherit from this class,
    allowing for broad exception catching when needed.
    """
    pass


class FrontEndError(CppGrepException):
    """Raised when a C++ front end cannot be initialized.

    Attributes:
        frontend: Name of the front end that failed
        details: Specific error details
    """

    def __init__(self, frontend: str, details: str):
        self.frontend = frontend
        self.details = details
        super().__init__(f"Failed to initialize front end '{frontend}': {details}")


class ConfigurationError(CppGrepException):
    """Raised when configuration is invalid.

    This covers failures related to:
    - Unknown front end names
    - Unknown category bucket names
    """
    pass


class UsageError(CppGrepException):
    """Raised by the command line for malformed arguments or missing files."""
    pass
