"""
SysY Lexer (Scanner)
====================

This module implements the lexical scanner for SysY, a small C-like
teaching language. It converts source text into a sequence of tokens for
the parser, recording illegal characters in an ErrorCollector instead of
raising.

Token Categories
----------------
- Keywords: const, int, static, break, continue, if, else, for, return,
  void, main, printf
- Identifiers: [A-Za-z_][A-Za-z0-9_]*
- Integer literals: decimal digits only
- String literals: "double quoted", kept verbatim including the quotes
- Operators: + - * / % < <= > >= == != = ! && ||
- Delimiters: ; , ( ) [ ] { }

Comments
--------
- Single-line: // comment
- Multi-line: /* comment */  (an unterminated one runs to end of input)

Token Names
-----------
Each TokenKind member name (IDENFR, INTCON, SEMICN, ...) is the exact
category name used in the token listing and in the parser's derivation
trace, so str(token) is already the external format:

>>> from sysyc.frontend.errors import ErrorCollector
>>> from sysyc.frontend.lexer import scan
>>> for token in scan('int main() { return 0; }', ErrorCollector()):
...     print(token)
INTTK int
MAINTK main
LPARENT (
RPARENT )
LBRACE {
RETURNTK return
INTCON 0
SEMICN ;
RBRACE }
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, Optional
import logging
import string

from sysyc.frontend.errors import ErrorCollector, ErrorKind

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Token kinds for the SysY language.

    The member names are part of the output format and must not be
    renamed.
    """

    # === Keywords ===
    CONSTTK = auto()        # const
    INTTK = auto()          # int
    STATICTK = auto()       # static
    BREAKTK = auto()        # break
    CONTINUETK = auto()     # continue
    IFTK = auto()           # if
    ELSETK = auto()         # else
    FORTK = auto()          # for
    RETURNTK = auto()       # return
    VOIDTK = auto()         # void
    MAINTK = auto()         # main
    PRINTFTK = auto()       # printf

    # === Identifiers and Literals ===
    IDENFR = auto()         # Variable/function names
    INTCON = auto()         # Integer literals
    STRCON = auto()         # String literals "..."

    # === Arithmetic Operators ===
    PLUS = auto()           # +
    MINU = auto()           # -
    MULT = auto()           # *
    DIV = auto()            # /
    MOD = auto()            # %

    # === Relational Operators ===
    LSS = auto()            # <
    LEQ = auto()            # <=
    GRE = auto()            # >
    GEQ = auto()            # >=
    EQL = auto()            # ==
    NEQ = auto()            # !=

    # === Assignment and Logical Operators ===
    ASSIGN = auto()         # =
    NOT = auto()            # !
    AND = auto()            # &&
    OR = auto()             # ||

    # === Delimiters ===
    SEMICN = auto()         # ;
    COMMA = auto()          # ,
    LPARENT = auto()        # (
    RPARENT = auto()        # )
    LBRACK = auto()         # [
    RBRACK = auto()         # ]
    LBRACE = auto()         # {
    RBRACE = auto()         # }


# =============================================================================
# Keyword Mapping
# =============================================================================

# Keywords are case-sensitive and matched on the whole identifier only
KEYWORDS: dict[str, TokenKind] = {
    "const": TokenKind.CONSTTK,
    "int": TokenKind.INTTK,
    "static": TokenKind.STATICTK,
    "break": TokenKind.BREAKTK,
    "continue": TokenKind.CONTINUETK,
    "if": TokenKind.IFTK,
    "else": TokenKind.ELSETK,
    "for": TokenKind.FORTK,
    "return": TokenKind.RETURNTK,
    "void": TokenKind.VOIDTK,
    "main": TokenKind.MAINTK,
    "printf": TokenKind.PRINTFTK,
}


# =============================================================================
# Token Data Classes
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token scanned from SysY source.

    Attributes:
        kind: The TokenKind classification
        text: The exact source text of the token
        line: Line of the token's first character (1-indexed)
        offset: Index of the token's first character in the source.
                Informational only; not part of token equality.
    """
    kind: TokenKind
    text: str
    line: int
    offset: int = field(default=-1, compare=False)

    def __str__(self) -> str:
        """Format as '<KIND_NAME> <text>', the listing and trace format."""
        return f"{self.kind.name} {self.text}"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, line {self.line})"

    def is_keyword(self) -> bool:
        """Return True if this token is a reserved word."""
        return self.kind in KEYWORDS.values()


@dataclass(frozen=True)
class EndOfInput:
    """
    Marker returned by parser lookahead past the last token.

    It deliberately has no kind, so it never matches a kind test.

    Attributes:
        line: Line of the last real token, or 1 for empty input
    """
    line: int

    def __str__(self) -> str:
        return "EOF"


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes SysY source code.

    The lexer makes a single forward pass. Characters that cannot start
    any token, and a lone '&' or '|', are recorded as ILLEGAL_SYMBOL on the
    current line and produce no token; scanning then carries on with the
    next character.

    Two constructs are tolerated silently: an unterminated /* comment and
    an unterminated string literal both consume the rest of the input
    without a token or an error.

    Usage:
        errors = ErrorCollector()
        lexer = Lexer(source_text, errors)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        errors: Collector receiving lexical errors
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters + "_"

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    # Discarded without producing a token ('\n' is handled by _advance)
    WHITESPACE = " \t\r\n"

    SINGLE_TOKENS = {
        "+": TokenKind.PLUS,
        "-": TokenKind.MINU,
        "*": TokenKind.MULT,
        "%": TokenKind.MOD,
        ";": TokenKind.SEMICN,
        ",": TokenKind.COMMA,
        "(": TokenKind.LPARENT,
        ")": TokenKind.RPARENT,
        "[": TokenKind.LBRACK,
        "]": TokenKind.RBRACK,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
    }

    # Operators that become a two-character token when followed by '='
    EQUALS_SUFFIXED = {
        "!": (TokenKind.NOT, TokenKind.NEQ),
        "=": (TokenKind.ASSIGN, TokenKind.EQL),
        "<": (TokenKind.LSS, TokenKind.LEQ),
        ">": (TokenKind.GRE, TokenKind.GEQ),
    }

    # Operators that only exist doubled
    DOUBLED = {
        "&": TokenKind.AND,
        "|": TokenKind.OR,
    }

    def __init__(
        self,
        source: str,
        errors: ErrorCollector,
        line_number: int = 1,
    ):
        """
        Initialize the lexer with source code.

        Args:
            source: The SysY source code to tokenize
            errors: Collector that receives ILLEGAL_SYMBOL records
            line_number: Starting line number
        """
        self.source = source
        self.errors = errors

        # Current position in source
        self._pos = 0
        self._line = line_number

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects in source order
        """
        count = 0
        errors_before = self.errors.error_count()

        while not self._at_end():
            token = self._scan_token()
            if token is not None:
                count += 1
                yield token

        logger.debug(
            "scanned %d tokens over %d lines, %d illegal symbols",
            count,
            self._line,
            self.errors.error_count() - errors_before,
        )

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        """Check if we've reached the end of source."""
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """
        Look at character at current position + offset without advancing.

        Returns empty string if past end of source.
        """
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """
        Consume and return the current character, advancing position.

        Every newline bumps the line counter, wherever it appears.
        """
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume next character if it matches expected."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(self, kind: TokenKind, start_pos: int, start_line: int) -> Token:
        """Create a token spanning from start_pos to the current position."""
        return Token(
            kind=kind,
            text=self.source[start_pos:self._pos],
            line=start_line,
            offset=start_pos,
        )

    def _illegal_symbol(self) -> None:
        """Record an illegal character on the current line."""
        self.errors.add(self._line, ErrorKind.ILLEGAL_SYMBOL)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Optional[Token]:
        """
        Scan the next lexical element.

        Returns:
            The next Token, or None for whitespace, comments, illegal
            characters and unterminated strings
        """
        start_pos = self._pos
        start_line = self._line

        char = self._advance()

        if char in self.WHITESPACE:
            return None

        if char in self.SINGLE_TOKENS:
            return self._make_token(self.SINGLE_TOKENS[char], start_pos, start_line)

        if char in self.EQUALS_SUFFIXED:
            single, double = self.EQUALS_SUFFIXED[char]
            kind = double if self._match("=") else single
            return self._make_token(kind, start_pos, start_line)

        if char in self.DOUBLED:
            if self._match(char):
                return self._make_token(self.DOUBLED[char], start_pos, start_line)
            self._illegal_symbol()
            return None

        if char == "/":
            if self._match("/"):
                self._skip_single_line_comment()
                return None
            if self._match("*"):
                self._skip_multi_line_comment()
                return None
            return self._make_token(TokenKind.DIV, start_pos, start_line)

        if char == '"':
            return self._scan_string(start_pos, start_line)

        if char in string.digits:
            return self._scan_number(start_pos, start_line)

        if char in self.IDENT_START:
            return self._scan_identifier(start_pos, start_line)

        # Unknown character
        self._illegal_symbol()
        return None

    def _skip_single_line_comment(self) -> None:
        """Skip a // comment up to, not including, the newline."""
        while not self._at_end() and self._peek() != "\n":
            self._advance()

    def _skip_multi_line_comment(self) -> None:
        """Skip a /* ... */ comment; runs to end of input if unterminated."""
        while not self._at_end():
            if self._peek() == "*" and self._peek(1) == "/":
                self._advance()  # consume *
                self._advance()  # consume /
                return
            self._advance()

    def _scan_string(self, start_pos: int, start_line: int) -> Optional[Token]:
        """
        Scan a string literal after its opening quote.

        Newlines are allowed inside and escapes are not interpreted; the
        token text keeps both quotes.
        """
        while not self._at_end() and self._peek() != '"':
            self._advance()

        if self._at_end():
            # Unterminated: the rest of the input is swallowed, no token
            return None

        self._advance()  # consume closing "
        return self._make_token(TokenKind.STRCON, start_pos, start_line)

    def _scan_number(self, start_pos: int, start_line: int) -> Token:
        """Scan a run of decimal digits."""
        while self._peek() and self._peek() in string.digits:
            self._advance()
        return self._make_token(TokenKind.INTCON, start_pos, start_line)

    def _scan_identifier(self, start_pos: int, start_line: int) -> Token:
        """Scan an identifier or keyword."""
        while self._peek() and self._peek() in self.IDENT_CHARS:
            self._advance()

        name = self.source[start_pos:self._pos]
        kind = KEYWORDS.get(name, TokenKind.IDENFR)
        return self._make_token(kind, start_pos, start_line)


# =============================================================================
# Convenience Functions
# =============================================================================

def scan(source: str, errors: ErrorCollector) -> tuple[Token, ...]:
    """
    Tokenize SysY source into an immutable token sequence.

    Args:
        source: The SysY source code
        errors: Collector receiving lexical errors

    Returns:
        Tuple of tokens in source order
    """
    return tuple(Lexer(source, errors).tokenize())


def format_tokens(tokens) -> str:
    """Render tokens as the '<KIND_NAME> <text>' listing, one per line."""
    return "".join(f"{token}\n" for token in tokens)
