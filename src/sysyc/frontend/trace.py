"""
Derivation Trace
================

The parser does not build a syntax tree. Its visible product is a flat,
ordered trace from which the tree can be rebuilt externally:

- one '<KIND_NAME> <text>' line per consumed token, and
- one '<Nonterminal>' line each time a grammar procedure completes.

Lines appear in completion order, so a nonterminal's marker always follows
the tokens and markers of everything it derived.
"""

from typing import Iterator, List, Optional, TextIO

from sysyc.frontend.lexer import Token


class DerivationTrace:
    """
    Ordered collection of trace lines.

    A disabled trace accepts every call and records nothing, which lets
    the parser run unconditionally when trace output is switched off.

    Attributes:
        enabled: Whether lines are recorded
    """

    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self._lines: List[str] = []

    def token(self, token: Token) -> None:
        """Record a consumed token."""
        if self.enabled:
            self._lines.append(str(token))

    def nonterminal(self, name: str) -> None:
        """Record a completed nonterminal."""
        if self.enabled:
            self._lines.append(f"<{name}>")

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def nonterminals(self) -> List[str]:
        """Return just the nonterminal names, in emission order."""
        return [line[1:-1] for line in self._lines if line.startswith("<")]

    def last(self) -> Optional[str]:
        """Return the most recent line, or None if the trace is empty."""
        return self._lines[-1] if self._lines else None

    def render(self) -> str:
        """Return the trace as newline-terminated text."""
        return "".join(f"{line}\n" for line in self._lines)

    def write_to(self, stream: TextIO) -> None:
        """Write the rendered trace to an open text stream."""
        stream.write(self.render())

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)
