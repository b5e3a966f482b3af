"""
SysY Recursive Descent Parser
=============================

This module implements a predictive recursive descent parser for SysY.
It consumes the token sequence from the lexer and, instead of building an
AST, emits a derivation trace (see sysyc.frontend.trace): every consumed
token and every completed nonterminal, in completion order.

Grammar (EBNF; nonterminals in <> are emitted to the trace)
----------------------------------------------------------
<CompUnit>     ::= {Decl} {<FuncDef>} <MainFuncDef>
Decl           ::= <ConstDecl> | <VarDecl>
<ConstDecl>    ::= 'const' BType <ConstDef> {',' <ConstDef>} ';'
<VarDecl>      ::= ['static'] BType <VarDef> {',' <VarDef>} ';'
<ConstDef>     ::= Ident ['[' <ConstExp> ']'] '=' <ConstInitVal>
<VarDef>       ::= Ident ['[' <ConstExp> ']'] ['=' <InitVal>]
<ConstInitVal> ::= <ConstExp> | '{' [<ConstExp> {',' <ConstExp>}] '}'
<InitVal>      ::= <Exp> | '{' [<Exp> {',' <Exp>}] '}'
<FuncDef>      ::= <FuncType> Ident '(' [<FuncFParams>] ')' <Block>
<MainFuncDef>  ::= 'int' 'main' '(' ')' <Block>
<FuncFParam>   ::= BType Ident ['[' ']']
<Block>        ::= '{' {Decl | <Stmt>} '}'
<Stmt>         ::= if | for | break | continue | return | printf
                 | <Block> | ';' | <LVal> '=' <Exp> ';' | <Exp> ';'
<ForStmt>      ::= <LVal> '=' <Exp> {',' <LVal> '=' <Exp>}

Expression Layers (loosest to tightest, all left-associative)
-------------------------------------------------------------
1. <LOrExp>   ||
2. <LAndExp>  &&
3. <EqExp>    == !=
4. <RelExp>   < > <= >=
5. <AddExp>   + -
6. <MulExp>   * / %
7. <UnaryExp> prefix + - !, call, or <PrimaryExp>

Error Recovery
--------------
The parser never raises on bad input. Required tokens go through
_expect(), which records a syntactic error on the line of the previously
consumed token and returns a Missing result. Two further mechanisms keep
the parser moving:

- after the ')' of an if/for header, a bounded skip discards tokens up to
  the missing ')' but never past '{', '}' or ';'
- a block that sees an item consume nothing discards exactly one token
  itself, which guarantees termination on arbitrary input

Example Usage
-------------
>>> from sysyc.frontend.errors import ErrorCollector
>>> from sysyc.frontend.lexer import scan
>>> from sysyc.frontend.parser import Parser
>>> errors = ErrorCollector()
>>> tokens = scan('int main() { return 0; }', errors)
>>> trace = Parser(tokens, errors).parse()
>>> trace.last()
'<CompUnit>'
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union
import logging
import sys

from sysyc.frontend.errors import ErrorCollector, ErrorKind
from sysyc.frontend.lexer import EndOfInput, Token, TokenKind, scan
from sysyc.frontend.trace import DerivationTrace

logger = logging.getLogger(__name__)


# =============================================================================
# Expectation Results
# =============================================================================

@dataclass(frozen=True)
class Consumed:
    """The expected token was present and has been consumed."""
    token: Token

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Missing:
    """
    The expected token was absent.

    Attributes:
        kind: The kind that was expected
        line: Line the failure is attributed to
        reported: True if an error record was added for it
    """
    kind: TokenKind
    line: int
    reported: bool

    @property
    def ok(self) -> bool:
        return False


ExpectResult = Union[Consumed, Missing]


# =============================================================================
# Parser
# =============================================================================

class Parser:
    """
    Recursive descent parser for SysY.

    One method per grammar nonterminal. Each method consumes its tokens,
    recurses into nested nonterminals and finally emits its own marker.
    The only state is the cursor into the token sequence; the Python call
    stack is the current path through the parse tree.

    Attributes:
        tokens: Immutable token sequence from the lexer
        errors: Collector receiving syntactic errors
        trace: Derivation trace being produced
        forced_skips: Tokens discarded by block-level recovery
        panic_skips: Tokens discarded by the bounded ')' skip
    """

    # Tokens the bounded skip must never swallow
    SKIP_BOUNDARIES = frozenset({
        TokenKind.LBRACE,
        TokenKind.RBRACE,
        TokenKind.SEMICN,
    })

    DECL_STARTS = (TokenKind.CONSTTK, TokenKind.INTTK, TokenKind.STATICTK)

    UNARY_OPS = (TokenKind.PLUS, TokenKind.MINU, TokenKind.NOT)
    MUL_OPS = (TokenKind.MULT, TokenKind.DIV, TokenKind.MOD)
    ADD_OPS = (TokenKind.PLUS, TokenKind.MINU)
    REL_OPS = (TokenKind.LSS, TokenKind.LEQ, TokenKind.GRE, TokenKind.GEQ)
    EQ_OPS = (TokenKind.EQL, TokenKind.NEQ)

    # Upper bound on Python frames one token of nesting can add; '(' costs
    # seven, from one UnaryExp down to the next
    FRAMES_PER_TOKEN = 10

    def __init__(
        self,
        tokens: Sequence[Token],
        errors: ErrorCollector,
        trace: Optional[DerivationTrace] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Tokens from the lexer
            errors: Collector shared with the lexer, so lexical errors
                    can suppress syntactic ones on the same line
            trace: Trace to append to (a fresh enabled one if None)
        """
        self.tokens = tuple(tokens)
        self.errors = errors
        self.trace = trace if trace is not None else DerivationTrace()

        # Current position in token stream
        self._pos = 0

        self.forced_skips = 0
        self.panic_skips = 0

    def parse(self) -> DerivationTrace:
        """
        Parse the whole token sequence as a compilation unit.

        Nesting depth becomes recursion depth, so the interpreter's
        recursion limit is raised to fit the token count for the duration
        of the parse and restored afterwards.

        Returns:
            The derivation trace (also available as self.trace)
        """
        old_limit = sys.getrecursionlimit()
        needed = old_limit + self.FRAMES_PER_TOKEN * len(self.tokens)
        if needed > old_limit:
            sys.setrecursionlimit(needed)
        try:
            self._parse_comp_unit()
        finally:
            sys.setrecursionlimit(old_limit)

        logger.debug(
            "parsed %d/%d tokens, %d trace lines, %d forced skips, %d panic skips",
            self._pos,
            len(self.tokens),
            len(self.trace),
            self.forced_skips,
            self.panic_skips,
        )
        return self.trace

    @property
    def position(self) -> int:
        """Index of the next unconsumed token."""
        return self._pos

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _peek(self, offset: int = 0) -> Union[Token, EndOfInput]:
        """Look at token at current position + offset."""
        pos = self._pos + offset
        if pos < len(self.tokens):
            return self.tokens[pos]
        return self._end_of_input()

    def _end_of_input(self) -> EndOfInput:
        """Build the end marker, carrying the last token's line."""
        if self.tokens:
            return EndOfInput(self.tokens[-1].line)
        return EndOfInput(1)

    def _at_end(self) -> bool:
        """Check if we've reached the end of tokens."""
        return self._pos >= len(self.tokens)

    def _check(self, *kinds: TokenKind) -> bool:
        """Check if current token is one of the given kinds."""
        return self._check_at(0, *kinds)

    def _check_at(self, offset: int, *kinds: TokenKind) -> bool:
        """Check the token at an offset; EndOfInput never matches."""
        token = self._peek(offset)
        return isinstance(token, Token) and token.kind in kinds

    def _advance(self) -> Optional[Token]:
        """
        Consume the current token and record it in the trace.

        Returns:
            The consumed token, or None at end of input (nothing happens)
        """
        if self._at_end():
            return None
        token = self.tokens[self._pos]
        self._pos += 1
        self.trace.token(token)
        return token

    def _match(self, *kinds: TokenKind) -> Optional[Token]:
        """
        Consume current token if it matches one of the kinds.

        Returns:
            The consumed token, or None if no match
        """
        if self._check(*kinds):
            return self._advance()
        return None

    def _emit(self, name: str) -> None:
        """Record a completed nonterminal."""
        self.trace.nonterminal(name)

    # =========================================================================
    # Expectation and Recovery
    # =========================================================================

    def _expect(
        self,
        kind: TokenKind,
        error_kind: Optional[ErrorKind],
        skip_to_target: bool = False,
    ) -> ExpectResult:
        """
        Expect and consume a specific token kind.

        Args:
            kind: The expected token kind
            error_kind: Error to record when missing; None for structural
                        punctuation whose absence is not reported
            skip_to_target: After a miss, discard tokens until the kind
                            turns up, stopping at '{', '}', ';' or end
                            of input

        Returns:
            Consumed(token) or Missing(kind, line, reported)
        """
        if self._check(kind):
            return Consumed(self._advance())

        line = self._error_line()
        reported = False
        if error_kind is not None:
            reported = self._report(line, error_kind)

        if skip_to_target:
            token = self._skip_to(kind)
            if token is not None:
                return Consumed(token)

        return Missing(kind, line, reported)

    def _error_line(self) -> int:
        """Line for a missing token: that of the last consumed token."""
        if self._pos > 0:
            return self.tokens[self._pos - 1].line
        return self._peek().line

    def _report(self, line: int, error_kind: ErrorKind) -> bool:
        """
        Record a syntactic error unless the line has a lexical error.

        Returns:
            True if the error was recorded
        """
        if self.errors.has_lexical_error_on(line):
            logger.debug("suppressed %s on line %d (lexical error)", error_kind.name, line)
            return False
        self.errors.add(line, error_kind)
        return True

    def _skip_to(self, kind: TokenKind) -> Optional[Token]:
        """
        Discard tokens until one of the given kind, and consume it.

        Stops without consuming at a skip boundary or end of input.

        Returns:
            The target token if it was reached, otherwise None
        """
        while not self._at_end() and not self._check(kind):
            if self._check(*self.SKIP_BOUNDARIES):
                break
            self._advance()
            self.panic_skips += 1

        return self._match(kind)

    def _recover_stalled_item(self) -> None:
        """
        Discard one token after a block item made no progress.

        This is what guarantees that block parsing terminates: every pass
        of the block loop either consumes through a block item or here.
        """
        token = self._advance()
        self.forced_skips += 1
        logger.debug("block recovery discarded %r", token)

    # =========================================================================
    # Compilation Unit
    # =========================================================================

    def _parse_comp_unit(self) -> None:
        """CompUnit -> {Decl} {FuncDef} MainFuncDef"""
        while self._starts_global_declaration():
            self._parse_decl()

        while self._starts_function_definition():
            self._parse_func_def()

        if self._check(TokenKind.INTTK) and self._check_at(1, TokenKind.MAINTK):
            self._parse_main_func_def()

        if not self._at_end():
            logger.debug(
                "%d tokens after the main function were not parsed",
                len(self.tokens) - self._pos,
            )

        self._emit("CompUnit")

    def _starts_global_declaration(self) -> bool:
        """
        Check for a declaration at file scope.

        'int' only starts a declaration when the token two ahead is not
        '(' (which would make it 'int name(' - a function).
        """
        if self._check(TokenKind.CONSTTK, TokenKind.STATICTK):
            return True
        return (
            self._check(TokenKind.INTTK)
            and not self._check_at(2, TokenKind.LPARENT)
        )

    def _starts_function_definition(self) -> bool:
        """Check for a non-main function definition."""
        if self._check(TokenKind.VOIDTK):
            return True
        return (
            self._check(TokenKind.INTTK)
            and not self._check_at(1, TokenKind.MAINTK)
        )

    # =========================================================================
    # Declarations
    # =========================================================================

    def _parse_decl(self) -> None:
        """Decl -> ConstDecl | VarDecl (not emitted)"""
        if self._check(TokenKind.CONSTTK):
            self._parse_const_decl()
        else:
            self._parse_var_decl()

    def _parse_const_decl(self) -> None:
        """ConstDecl -> 'const' BType ConstDef { ',' ConstDef } ';'"""
        self._advance()  # 'const'
        self._parse_btype()
        self._parse_const_def()
        while self._match(TokenKind.COMMA):
            self._parse_const_def()
        self._expect(TokenKind.SEMICN, ErrorKind.MISSING_SEMICOLON)
        self._emit("ConstDecl")

    def _parse_var_decl(self) -> None:
        """VarDecl -> [ 'static' ] BType VarDef { ',' VarDef } ';'"""
        self._match(TokenKind.STATICTK)
        self._parse_btype()
        self._parse_var_def()
        while self._match(TokenKind.COMMA):
            self._parse_var_def()
        self._expect(TokenKind.SEMICN, ErrorKind.MISSING_SEMICOLON)
        self._emit("VarDecl")

    def _parse_btype(self) -> None:
        """BType -> 'int' (not emitted)"""
        self._match(TokenKind.INTTK)

    def _parse_const_def(self) -> None:
        """ConstDef -> Ident [ '[' ConstExp ']' ] '=' ConstInitVal"""
        self._match(TokenKind.IDENFR)
        self._parse_array_dimension()
        self._expect(TokenKind.ASSIGN, None)
        self._parse_initializer("ConstInitVal", self._parse_const_exp)
        self._emit("ConstDef")

    def _parse_var_def(self) -> None:
        """VarDef -> Ident [ '[' ConstExp ']' ] [ '=' InitVal ]"""
        self._match(TokenKind.IDENFR)
        self._parse_array_dimension()
        if self._match(TokenKind.ASSIGN):
            self._parse_initializer("InitVal", self._parse_exp)
        self._emit("VarDef")

    def _parse_array_dimension(self) -> None:
        """Optional '[' ConstExp ']' after a defined name."""
        if self._match(TokenKind.LBRACK):
            self._parse_const_exp()
            self._expect(TokenKind.RBRACK, ErrorKind.MISSING_RBRACK)

    def _parse_initializer(self, name: str, element_parser: Callable[[], None]) -> None:
        """
        InitVal / ConstInitVal -> element | '{' [ element { ',' element } ] '}'

        Args:
            name: Nonterminal to emit ("InitVal" or "ConstInitVal")
            element_parser: Parses one element (Exp or ConstExp)
        """
        if self._match(TokenKind.LBRACE):
            if not self._check(TokenKind.RBRACE):
                element_parser()
                while self._match(TokenKind.COMMA):
                    element_parser()
            self._expect(TokenKind.RBRACE, None)
        else:
            element_parser()
        self._emit(name)

    # =========================================================================
    # Functions
    # =========================================================================

    def _parse_func_def(self) -> None:
        """FuncDef -> FuncType Ident '(' [FuncFParams] ')' Block"""
        self._parse_func_type()
        self._match(TokenKind.IDENFR)
        self._expect(TokenKind.LPARENT, None)
        if not self._check(TokenKind.RPARENT):
            self._parse_func_fparams()
        self._expect(TokenKind.RPARENT, ErrorKind.MISSING_RPARENT)
        self._parse_block()
        self._emit("FuncDef")

    def _parse_main_func_def(self) -> None:
        """MainFuncDef -> 'int' 'main' '(' ')' Block"""
        self._match(TokenKind.INTTK)
        self._match(TokenKind.MAINTK)
        self._expect(TokenKind.LPARENT, None)
        self._expect(TokenKind.RPARENT, ErrorKind.MISSING_RPARENT)
        self._parse_block()
        self._emit("MainFuncDef")

    def _parse_func_type(self) -> None:
        """FuncType -> 'void' | 'int'"""
        self._match(TokenKind.VOIDTK, TokenKind.INTTK)
        self._emit("FuncType")

    def _parse_func_fparams(self) -> None:
        """FuncFParams -> FuncFParam { ',' FuncFParam }"""
        self._parse_func_fparam()
        while self._match(TokenKind.COMMA):
            self._parse_func_fparam()
        self._emit("FuncFParams")

    def _parse_func_fparam(self) -> None:
        """FuncFParam -> BType Ident ['[' ']']"""
        self._parse_btype()
        self._match(TokenKind.IDENFR)
        if self._match(TokenKind.LBRACK):
            self._expect(TokenKind.RBRACK, ErrorKind.MISSING_RBRACK)
        self._emit("FuncFParam")

    # =========================================================================
    # Blocks and Statements
    # =========================================================================

    def _parse_block(self) -> None:
        """Block -> '{' { BlockItem } '}'"""
        self._expect(TokenKind.LBRACE, None)

        while not self._check(TokenKind.RBRACE) and not self._at_end():
            before = self._pos
            self._parse_block_item()
            if (
                self._pos == before
                and not self._check(TokenKind.RBRACE)
                and not self._at_end()
            ):
                self._recover_stalled_item()

        self._expect(TokenKind.RBRACE, None)
        self._emit("Block")

    def _parse_block_item(self) -> None:
        """BlockItem -> Decl | Stmt (not emitted)"""
        if self._check(*self.DECL_STARTS):
            self._parse_decl()
        else:
            self._parse_stmt()

    def _parse_stmt(self) -> None:
        """Parse any statement; every form emits <Stmt>."""
        if self._check(TokenKind.IFTK):
            self._parse_if_stmt()
        elif self._check(TokenKind.FORTK):
            self._parse_for_stmt()
        elif self._check(TokenKind.BREAKTK, TokenKind.CONTINUETK):
            self._advance()
            self._expect(TokenKind.SEMICN, ErrorKind.MISSING_SEMICOLON)
        elif self._check(TokenKind.RETURNTK):
            self._parse_return_stmt()
        elif self._check(TokenKind.PRINTFTK):
            self._parse_printf_stmt()
        elif self._check(TokenKind.LBRACE):
            self._parse_block()
        elif self._check(TokenKind.SEMICN):
            # Empty statement
            self._advance()
        else:
            self._parse_simple_stmt()

        self._emit("Stmt")

    def _parse_if_stmt(self) -> None:
        """'if' '(' Cond ')' Stmt [ 'else' Stmt ]"""
        self._advance()  # 'if'
        self._expect(TokenKind.LPARENT, None)
        self._parse_cond()
        self._expect(TokenKind.RPARENT, ErrorKind.MISSING_RPARENT, skip_to_target=True)
        self._parse_stmt()
        if self._match(TokenKind.ELSETK):
            self._parse_stmt()

    def _parse_for_stmt(self) -> None:
        """'for' '(' [ForStmt] ';' [Cond] ';' [ForStmt] ')' Stmt"""
        self._advance()  # 'for'
        self._expect(TokenKind.LPARENT, None)

        if not self._check(TokenKind.SEMICN):
            self._parse_for_clause()
        self._expect(TokenKind.SEMICN, None)

        if not self._check(TokenKind.SEMICN):
            self._parse_cond()
        self._expect(TokenKind.SEMICN, None)

        if not self._check(TokenKind.RPARENT):
            self._parse_for_clause()
        self._expect(TokenKind.RPARENT, ErrorKind.MISSING_RPARENT, skip_to_target=True)

        self._parse_stmt()

    def _parse_return_stmt(self) -> None:
        """'return' [Exp] ';'"""
        self._advance()  # 'return'
        if not self._check(TokenKind.SEMICN):
            self._parse_exp()
        self._expect(TokenKind.SEMICN, ErrorKind.MISSING_SEMICOLON)

    def _parse_printf_stmt(self) -> None:
        """'printf' '(' StringConst { ',' Exp } ')' ';'"""
        self._advance()  # 'printf'
        self._expect(TokenKind.LPARENT, None)
        self._expect(TokenKind.STRCON, None)
        while self._match(TokenKind.COMMA):
            self._parse_exp()
        self._expect(TokenKind.RPARENT, ErrorKind.MISSING_RPARENT)
        self._expect(TokenKind.SEMICN, ErrorKind.MISSING_SEMICOLON)

    def _parse_simple_stmt(self) -> None:
        """LVal '=' Exp ';' | Exp ';'"""
        if self._check(TokenKind.IDENFR) and self._is_assignment_stmt():
            self._parse_lval()
            self._expect(TokenKind.ASSIGN, None)
            self._parse_exp()
            self._expect(TokenKind.SEMICN, ErrorKind.MISSING_SEMICOLON)
        elif not self._at_end():
            # Covers unexpected leading tokens too; if nothing is consumed
            # the enclosing block's recovery moves past the token
            self._parse_exp()
            self._expect(TokenKind.SEMICN, ErrorKind.MISSING_SEMICOLON)

    def _is_assignment_stmt(self) -> bool:
        """
        Decide between 'LVal = Exp;' and 'Exp;' for an identifier start.

        Scans forward from the cursor, without consuming, for whichever of
        '=' and ';' comes first. '=' means assignment; ';' or running out of
        tokens means expression statement. There is no bound other than the
        input length. (An '=' inside a subscript, as in a[b=1], is taken at
        face value.)
        """
        for index in range(self._pos, len(self.tokens)):
            kind = self.tokens[index].kind
            if kind is TokenKind.SEMICN:
                return False
            if kind is TokenKind.ASSIGN:
                return True
        return False

    def _parse_for_clause(self) -> None:
        """ForStmt -> LVal '=' Exp { ',' LVal '=' Exp }"""
        self._parse_lval()
        self._expect(TokenKind.ASSIGN, None)
        self._parse_exp()
        while self._match(TokenKind.COMMA):
            self._parse_lval()
            self._expect(TokenKind.ASSIGN, None)
            self._parse_exp()
        self._emit("ForStmt")

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_exp(self) -> None:
        """Exp -> AddExp"""
        self._parse_add_exp()
        self._emit("Exp")

    def _parse_cond(self) -> None:
        """Cond -> LOrExp"""
        self._parse_lor_exp()
        self._emit("Cond")

    def _parse_const_exp(self) -> None:
        """ConstExp -> AddExp"""
        self._parse_add_exp()
        self._emit("ConstExp")

    def _parse_lval(self) -> None:
        """LVal -> Ident ['[' Exp ']']"""
        self._expect(TokenKind.IDENFR, None)
        if self._match(TokenKind.LBRACK):
            self._parse_exp()
            self._expect(TokenKind.RBRACK, ErrorKind.MISSING_RBRACK)
        self._emit("LVal")

    def _parse_primary_exp(self) -> None:
        """PrimaryExp -> '(' Exp ')' | LVal | Number"""
        if self._match(TokenKind.LPARENT):
            self._parse_exp()
            self._expect(TokenKind.RPARENT, ErrorKind.MISSING_RPARENT)
        elif self._check(TokenKind.INTCON):
            self._parse_number()
        else:
            self._parse_lval()
        self._emit("PrimaryExp")

    def _parse_number(self) -> None:
        """Number -> IntConst"""
        self._expect(TokenKind.INTCON, None)
        self._emit("Number")

    def _parse_unary_exp(self) -> None:
        """UnaryExp -> PrimaryExp | Ident '(' [FuncRParams] ')' | UnaryOp UnaryExp"""
        if self._check(*self.UNARY_OPS):
            self._parse_unary_op()
            self._parse_unary_exp()
        elif self._check(TokenKind.IDENFR) and self._check_at(1, TokenKind.LPARENT):
            self._advance()  # Ident
            self._advance()  # '('
            if not self._check(TokenKind.RPARENT):
                self._parse_func_rparams()
            self._expect(TokenKind.RPARENT, ErrorKind.MISSING_RPARENT)
        else:
            self._parse_primary_exp()
        self._emit("UnaryExp")

    def _parse_unary_op(self) -> None:
        """UnaryOp -> '+' | '-' | '!'"""
        self._match(*self.UNARY_OPS)
        self._emit("UnaryOp")

    def _parse_func_rparams(self) -> None:
        """FuncRParams -> Exp { ',' Exp }"""
        self._parse_exp()
        while self._match(TokenKind.COMMA):
            self._parse_exp()
        self._emit("FuncRParams")

    def _parse_binary(
        self,
        name: str,
        operand_parser: Callable[[], None],
        operators: tuple[TokenKind, ...],
    ) -> None:
        """
        Generic left-associative layer.

        Emits the layer's marker after the first operand and again after
        every further operator/operand pair, which is how the left-recursive
        grammar rule shows up in the trace.

        Args:
            name: Nonterminal to emit
            operand_parser: Parses one operand of the next-tighter layer
            operators: Token kinds belonging to this layer
        """
        operand_parser()
        self._emit(name)
        while self._check(*operators):
            self._advance()
            operand_parser()
            self._emit(name)

    def _parse_mul_exp(self) -> None:
        """MulExp -> UnaryExp { ('*' | '/' | '%') UnaryExp }"""
        self._parse_binary("MulExp", self._parse_unary_exp, self.MUL_OPS)

    def _parse_add_exp(self) -> None:
        """AddExp -> MulExp { ('+' | '-') MulExp }"""
        self._parse_binary("AddExp", self._parse_mul_exp, self.ADD_OPS)

    def _parse_rel_exp(self) -> None:
        """RelExp -> AddExp { ('<' | '>' | '<=' | '>=') AddExp }"""
        self._parse_binary("RelExp", self._parse_add_exp, self.REL_OPS)

    def _parse_eq_exp(self) -> None:
        """EqExp -> RelExp { ('==' | '!=') RelExp }"""
        self._parse_binary("EqExp", self._parse_rel_exp, self.EQ_OPS)

    def _parse_land_exp(self) -> None:
        """LAndExp -> EqExp { '&&' EqExp }"""
        self._parse_binary("LAndExp", self._parse_eq_exp, (TokenKind.AND,))

    def _parse_lor_exp(self) -> None:
        """LOrExp -> LAndExp { '||' LAndExp }"""
        self._parse_binary("LOrExp", self._parse_land_exp, (TokenKind.OR,))


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_tokens(
    tokens: Sequence[Token],
    errors: ErrorCollector,
    emit_trace: bool = True,
) -> DerivationTrace:
    """
    Parse an already scanned token sequence.

    Args:
        tokens: Tokens from the lexer
        errors: Collector used during scanning
        emit_trace: Record trace lines (False still parses and reports)

    Returns:
        The derivation trace
    """
    trace = DerivationTrace(enabled=emit_trace)
    return Parser(tokens, errors, trace).parse()


def parse_source(
    source: str,
    errors: Optional[ErrorCollector] = None,
) -> tuple[DerivationTrace, ErrorCollector]:
    """
    Scan and parse SysY source in one call.

    Args:
        source: The SysY source code
        errors: Collector to use (a fresh one if None)

    Returns:
        (trace, errors) tuple
    """
    if errors is None:
        errors = ErrorCollector()
    tokens = scan(source, errors)
    return parse_tokens(tokens, errors), errors
