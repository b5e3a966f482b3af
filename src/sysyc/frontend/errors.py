"""
SysY Front-End Error Records
============================

This module defines the error taxonomy of the front end and the collector
that accumulates errors while the lexer and parser run.

Errors in the compiled program are *values*, not exceptions: the lexer and
parser append an ErrorRecord and keep going, so one run always yields the
complete report.

Error Taxonomy
--------------
| Category  | Kind                        | Code |
|-----------|-----------------------------|------|
| lexical   | ILLEGAL_SYMBOL              | a    |
| syntactic | MISSING_SEMICOLON           | i    |
| syntactic | MISSING_RPARENT             | j    |
| syntactic | MISSING_RBRACK              | k    |
| semantic  | NAME_REDEFINED              | b    |
| semantic  | NAME_UNDEFINED              | c    |
| semantic  | PARAM_COUNT_MISMATCH        | d    |
| semantic  | PARAM_TYPE_MISMATCH         | e    |
| semantic  | VOID_FUNC_RETURNS_VALUE     | f    |
| semantic  | MISSING_RETURN              | g    |
| semantic  | CONST_ASSIGNMENT            | h    |
| semantic  | PRINTF_ARG_MISMATCH         | l    |
| semantic  | BREAK_CONTINUE_OUTSIDE_LOOP | m    |

Semantic kinds are reserved for a later analysis pass; the front end only
produces lexical and syntactic records.

Report Format
-------------
One record per line, ascending by line number:

    5 i
    7 a
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Set
import threading


# =============================================================================
# Error Kinds
# =============================================================================

class ErrorCategory(Enum):
    """Which compiler stage an error kind belongs to."""
    LEXICAL = "lexical"
    SYNTACTIC = "syntactic"
    SEMANTIC = "semantic"


class ErrorKind(Enum):
    """
    Every error the compiler can report.

    Each member's value is a (code, category) pair. The one-character code
    is the only thing that appears in the external report.
    """

    # === Lexical ===
    ILLEGAL_SYMBOL = ("a", ErrorCategory.LEXICAL)

    # === Syntactic ===
    MISSING_SEMICOLON = ("i", ErrorCategory.SYNTACTIC)
    MISSING_RPARENT = ("j", ErrorCategory.SYNTACTIC)
    MISSING_RBRACK = ("k", ErrorCategory.SYNTACTIC)

    # === Semantic (not produced by the front end) ===
    NAME_REDEFINED = ("b", ErrorCategory.SEMANTIC)
    NAME_UNDEFINED = ("c", ErrorCategory.SEMANTIC)
    PARAM_COUNT_MISMATCH = ("d", ErrorCategory.SEMANTIC)
    PARAM_TYPE_MISMATCH = ("e", ErrorCategory.SEMANTIC)
    VOID_FUNC_RETURNS_VALUE = ("f", ErrorCategory.SEMANTIC)
    MISSING_RETURN = ("g", ErrorCategory.SEMANTIC)
    CONST_ASSIGNMENT = ("h", ErrorCategory.SEMANTIC)
    PRINTF_ARG_MISMATCH = ("l", ErrorCategory.SEMANTIC)
    BREAK_CONTINUE_OUTSIDE_LOOP = ("m", ErrorCategory.SEMANTIC)

    @property
    def code(self) -> str:
        """The stable one-character report code."""
        return self.value[0]

    @property
    def category(self) -> ErrorCategory:
        return self.value[1]

    @property
    def is_lexical(self) -> bool:
        return self.category is ErrorCategory.LEXICAL

    @classmethod
    def from_code(cls, code: str) -> "ErrorKind":
        """
        Look up a kind by its report code.

        Raises:
            ValueError: If no kind uses the code
        """
        for kind in cls:
            if kind.code == code:
                return kind
        raise ValueError(f"unknown error code {code!r}")


# =============================================================================
# Error Record
# =============================================================================

@dataclass(frozen=True)
class ErrorRecord:
    """
    One reported error.

    Attributes:
        line: 1-based source line the error is attributed to
        kind: The ErrorKind
    """
    line: int
    kind: ErrorKind

    def __str__(self) -> str:
        """Format as '<line> <code>' for the error report."""
        return f"{self.line} {self.kind.code}"

    @classmethod
    def parse(cls, text: str) -> "ErrorRecord":
        """
        Parse a '<line> <code>' report line back into a record.

        Raises:
            ValueError: If the line is not in report format
        """
        parts = text.split()
        if len(parts) != 2:
            raise ValueError(f"malformed error report line: {text!r}")
        return cls(int(parts[0]), ErrorKind.from_code(parts[1]))


# =============================================================================
# Error Collection
# =============================================================================

class ErrorCollector:
    """
    Collects error records for one compilation run.

    A collector is created by the driver and handed to the lexer and then
    the parser, so each run owns its errors and tests simply build a fresh
    collector. Besides the records it keeps the set of lines that already
    carry a lexical error; the parser consults it to drop syntactic errors
    on those lines.

    Appends are serialised with a lock, so several writers may share one
    collector.

    Example:
        errors = ErrorCollector()
        tokens = scan(source, errors)
        Parser(tokens, errors).parse()

        if errors.has_errors():
            print(errors.report(), end="")
    """

    def __init__(self):
        self._records: List[ErrorRecord] = []
        self._lexical_lines: Set[int] = set()
        self._lock = threading.Lock()

    def add(self, line: int, kind: ErrorKind) -> ErrorRecord:
        """Record an error of the given kind on a line."""
        record = ErrorRecord(line, kind)
        self.add_record(record)
        return record

    def add_record(self, record: ErrorRecord) -> None:
        """Append an existing record."""
        with self._lock:
            self._records.append(record)
            if record.kind.is_lexical:
                self._lexical_lines.add(record.line)

    def has_lexical_error_on(self, line: int) -> bool:
        """Return True if a lexical error was recorded on this line."""
        return line in self._lexical_lines

    def errors_on_line(self, line: int) -> List[ErrorRecord]:
        """Return the records attributed to a line, in insertion order."""
        with self._lock:
            return [r for r in self._records if r.line == line]

    def records(self) -> List[ErrorRecord]:
        """
        Return all records sorted by line.

        The sort is stable: records on the same line keep the order in
        which they were reported.
        """
        with self._lock:
            return sorted(self._records, key=lambda r: r.line)

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self._records) > 0

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self._records)

    def first_error_line(self) -> Optional[int]:
        """Return the smallest line with an error, or None."""
        with self._lock:
            if not self._records:
                return None
            return min(r.line for r in self._records)

    def report(self) -> str:
        """Format all records as '<line> <code>' lines."""
        return "".join(f"{record}\n" for record in self.records())

    def clear(self) -> None:
        """Clear all collected errors."""
        with self._lock:
            self._records.clear()
            self._lexical_lines.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ErrorRecord]:
        return iter(self.records())
