"""
Validation Utilities
Helper functions for validating command names, prefixes and user input
"""

import re
from typing import Any, Optional

# Zero-width characters some clients insert into pasted text
ZERO_WIDTH_REGEX = re.compile(r"[\u200B-\u200D\uFEFF]")
# Control characters str.split() treats as separators
SEPARATOR_CHAR_REGEX = re.compile(r"[\r\x0B\x0C\x1C-\x1F\x85]")
# Remaining control characters except tab and newline
CONTROL_CHAR_REGEX = re.compile(r"[\x00-\x08\x0E-\x1B\x7F-\x84\x86-\x9F]")
WHITESPACE_REGEX = re.compile(r"\s")


class ValidationResult:
    """Result of a validation operation."""

    def __init__(
        self,
        valid: bool,
        error: Optional[str] = None,
        sanitized: Optional[str] = None,
        value: Optional[Any] = None,
    ):
        self.valid = valid
        self.error = error
        self.sanitized = sanitized
        self.value = value

    def __bool__(self) -> bool:
        return self.valid


class ValidationUtils:
    """Utility class for input validation."""

    @staticmethod
    def validate_command_name(name: Any, prefix: str = "/") -> ValidationResult:
        """
        Validate a command name or alias before registration.

        Args:
            name: Name to validate
            prefix: Configured command prefix

        Returns:
            ValidationResult with the lower-cased name as sanitized value
        """
        if not isinstance(name, str) or not name:
            return ValidationResult(valid=False, error="Command name must be a non-empty string")

        if WHITESPACE_REGEX.search(name):
            return ValidationResult(valid=False, error=f"Command name must not contain whitespace: {name!r}")

        if prefix and name.startswith(prefix):
            return ValidationResult(
                valid=False,
                error=f"Command name must not start with the prefix {prefix!r}: {name!r}",
            )

        return ValidationResult(valid=True, sanitized=name.lower())

    @staticmethod
    def validate_prefix(prefix: Any) -> ValidationResult:
        """
        Validate the command prefix symbol.

        Args:
            prefix: Prefix to validate

        Returns:
            ValidationResult with valid status
        """
        if not isinstance(prefix, str) or len(prefix) != 1:
            return ValidationResult(valid=False, error="Command prefix must be a single character")

        if prefix.isalnum() or prefix.isspace():
            return ValidationResult(valid=False, error=f"Command prefix must be a symbol: {prefix!r}")

        return ValidationResult(valid=True, sanitized=prefix)

    @staticmethod
    def sanitize_input(input_value: str) -> str:
        """
        Strip zero-width and control characters from user input; the
        control characters that separate words become spaces.

        Args:
            input_value: Input to sanitize

        Returns:
            Sanitized input string
        """
        if not isinstance(input_value, str):
            return ""

        sanitized = ZERO_WIDTH_REGEX.sub("", input_value)
        sanitized = SEPARATOR_CHAR_REGEX.sub(" ", sanitized)
        sanitized = CONTROL_CHAR_REGEX.sub("", sanitized)
        sanitized = sanitized.strip()

        return sanitized
