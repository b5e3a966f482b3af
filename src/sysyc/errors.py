"""
SysY Toolkit Error Hierarchy
============================

This module defines the exception hierarchy for the SysY toolkit.
All exceptions inherit from SysYError, allowing callers to catch every
toolkit failure with a single except clause if desired.

Exception Hierarchy
-------------------
SysYError (base)
├── SourceReadError - source file missing or not decodable
└── SourceErrorsFound - compilation finished with recorded source errors

Design Philosophy
-----------------
Problems *inside* the compiled program (illegal characters, missing
semicolons, ...) are never raised. The lexer and parser record them as
ErrorRecord values and keep going, so that one run always produces the
complete error report. Exceptions are reserved for the driver layer: a file
that cannot be read, or a caller explicitly asking to fail on errors via
CompileResult.raise_if_errors().

Error messages follow this format:
    filename: error: description
    hint: suggestion for fixing (when available)
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class SysYError(Exception):
    """
    Base exception for all SysY toolkit errors.

    Attributes:
        message: The error description
        filename: Source file the error relates to (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        filename: Optional[str] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.filename = filename
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with filename and hint.

        Example output:
            testfile.txt: error: cannot decode source with utf-8, gbk
            hint: re-save the file as UTF-8
        """
        parts = []

        if self.filename:
            parts.append(f"{self.filename}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


# =============================================================================
# Driver Exceptions
# =============================================================================

class SourceReadError(SysYError):
    """
    Source file could not be read.

    Raised when the input file does not exist, cannot be opened, or its
    bytes cannot be decoded with any of the configured encodings.
    """
    pass


class SourceErrorsFound(SysYError):
    """
    Compilation finished but recorded lexical or syntactic errors.

    The message is the already formatted "<line> <code>" report and is
    passed through unchanged.

    Attributes:
        report: The sorted error report text
        error_count: Number of records in the report
    """

    def __init__(self, report: str, error_count: int, filename: Optional[str] = None):
        self.report = report
        self.error_count = error_count
        super().__init__(report, filename=filename)

    def _format_message(self) -> str:
        """Return the report as-is - it's already the external format."""
        return self.message
