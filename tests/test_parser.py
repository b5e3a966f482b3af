# =============================================================================
# test_parser.py - SysY Parser Unit Tests
# =============================================================================
# Tests for the recursive descent parser and its derivation trace.
#
# Test coverage includes:
#   - Trace shape for declarations, functions, statements and expressions
#   - Assignment vs expression statement disambiguation
#   - Missing ';' ')' ']' errors and their line attribution
#   - Suppression of syntactic errors on lines with lexical errors
#   - Bounded skip after if/for headers, block-level recovery
#   - End-of-input handling
# =============================================================================

import sys

from sysyc.frontend import compile_source
from sysyc.frontend.errors import ErrorCollector, ErrorKind
from sysyc.frontend.lexer import EndOfInput, Token, TokenKind, scan
from sysyc.frontend.parser import (
    Consumed,
    Missing,
    Parser,
    parse_source,
    parse_tokens,
)


# =============================================================================
# Helper Functions
# =============================================================================

def parse(source: str):
    """Scan and parse source; return (parser, trace lines, errors)."""
    errors = ErrorCollector()
    tokens = scan(source, errors)
    parser = Parser(tokens, errors)
    trace = parser.parse()
    return parser, trace.lines, errors


def report(errors: ErrorCollector) -> list:
    return [str(record) for record in errors.records()]


def in_main(body: str) -> str:
    """Wrap statements in a main function."""
    return "int main() {\n" + body + "\n}\n"


def between(lines: list, start: str, end: str) -> list:
    """Return the trace lines strictly between the first start and the next end."""
    i = lines.index(start)
    j = lines.index(end, i + 1)
    return lines[i + 1:j]


# =============================================================================
# Reference Scenarios
# =============================================================================

class TestScenarios:
    """End-to-end behaviour on the reference programs."""

    def test_minimal_program(self):
        """A well-formed main yields the full trace and no errors."""
        _, lines, errors = parse("int main(){return 0;}")
        assert not errors.has_errors()
        assert lines == [
            "INTTK int",
            "MAINTK main",
            "LPARENT (",
            "RPARENT )",
            "LBRACE {",
            "RETURNTK return",
            "INTCON 0",
            "<Number>",
            "<PrimaryExp>",
            "<UnaryExp>",
            "<MulExp>",
            "<AddExp>",
            "<Exp>",
            "SEMICN ;",
            "<Stmt>",
            "RBRACE }",
            "<Block>",
            "<MainFuncDef>",
            "<CompUnit>",
        ]

    def test_missing_semicolon(self):
        _, _, errors = parse("int main(){return 0}")
        assert report(errors) == ["1 i"]

    def test_lone_ampersand_suppresses_syntax_error(self):
        """The illegal '&' is reported; the missing ';' on its line is not."""
        _, _, errors = parse("int x = 1 & 2;")
        assert report(errors) == ["1 a"]

    def test_assignment_statement_shape(self):
        """'a = 5;' takes the assignment production."""
        _, lines, errors = parse(in_main("a = 5;"))
        assert not errors.has_errors()
        stmt = between(lines, "LBRACE {", "<Stmt>")
        assert stmt[:3] == ["IDENFR a", "<LVal>", "ASSIGN ="]
        assert stmt[-1] == "SEMICN ;"

    def test_expression_statement_shape(self):
        """'a + 5;' takes the expression production."""
        _, lines, errors = parse(in_main("a + 5;"))
        assert not errors.has_errors()
        stmt = between(lines, "LBRACE {", "<Stmt>")
        assert stmt[:3] == ["IDENFR a", "<LVal>", "<PrimaryExp>"]
        assert "ASSIGN =" not in stmt


# =============================================================================
# Declaration Tests
# =============================================================================

class TestDeclarations:
    """Test constant and variable declarations."""

    def test_global_and_local_declarations(self):
        source = (
            "const int N = 10, M[2] = {1, 2};\n"
            "static int s;\n"
            "int g[3] = {};\n"
            "int main() { int x; static int y = 1; return 0; }\n"
        )
        parser, lines, errors = parse(source)
        assert not errors.has_errors()
        names = parser.trace.nonterminals()
        assert names.count("ConstDecl") == 1
        assert names.count("ConstDef") == 2
        assert names.count("VarDecl") == 4
        assert names.count("VarDef") == 4
        assert names.count("InitVal") == 2
        assert names.count("ConstInitVal") == 2

    def test_const_def_trace(self):
        _, lines, _ = parse("const int N = 3;\nint main(){return 0;}")
        assert lines[:12] == [
            "CONSTTK const",
            "INTTK int",
            "IDENFR N",
            "ASSIGN =",
            "INTCON 3",
            "<Number>",
            "<PrimaryExp>",
            "<UnaryExp>",
            "<MulExp>",
            "<AddExp>",
            "<ConstExp>",
            "<ConstInitVal>",
        ]
        assert lines[12:15] == ["<ConstDef>", "SEMICN ;", "<ConstDecl>"]

    def test_btype_is_not_emitted(self):
        _, lines, _ = parse("int a;\nint main(){return 0;}")
        assert "<BType>" not in lines
        assert "<Decl>" not in lines

    def test_missing_rbrack_in_declaration(self):
        _, _, errors = parse("int a[10;\nint main(){return 0;}")
        assert report(errors) == ["1 k"]

    def test_missing_semicolon_after_declaration(self):
        """The error belongs to the line of the last consumed token."""
        _, _, errors = parse(in_main("int a = 1\nreturn 0;"))
        assert report(errors) == ["2 i"]

    def test_static_in_block(self):
        parser, _, errors = parse(in_main("static int counter = 0;"))
        assert not errors.has_errors()
        assert "VarDecl" in parser.trace.nonterminals()


# =============================================================================
# Function Tests
# =============================================================================

class TestFunctions:
    """Test function definitions and calls."""

    SOURCE = (
        "int add(int a, int b[]) { return a; }\n"
        "void f() { }\n"
        "int main() { f(); return add(1, 2); }\n"
    )

    def test_function_definitions(self):
        parser, _, errors = parse(self.SOURCE)
        assert not errors.has_errors()
        names = parser.trace.nonterminals()
        assert names.count("FuncDef") == 2
        assert names.count("FuncType") == 2
        assert names.count("FuncFParams") == 1
        assert names.count("FuncFParam") == 2
        assert names.count("FuncRParams") == 1
        assert names[-2:] == ["MainFuncDef", "CompUnit"]

    def test_func_type_emitted_before_name(self):
        _, lines, _ = parse("void f() { }\nint main(){return 0;}")
        assert lines[:3] == ["VOIDTK void", "<FuncType>", "IDENFR f"]

    def test_function_between_globals_and_main(self):
        parser, _, errors = parse("int g;\nint f() { return g; }\nint main(){return f();}")
        assert not errors.has_errors()
        assert parser.trace.nonterminals().index("VarDecl") < parser.trace.nonterminals().index("FuncDef")

    def test_missing_rparent_in_parameters(self):
        _, _, errors = parse("int f(int a { return a; }\nint main(){return 0;}")
        assert report(errors) == ["1 j"]

    def test_missing_rbrack_in_parameter(self):
        _, _, errors = parse("void f(int a[) { }\nint main(){return 0;}")
        assert report(errors) == ["1 k"]

    def test_missing_rparent_in_call(self):
        _, _, errors = parse(in_main("f(1;\nreturn 0;"))
        assert report(errors) == ["2 j"]

    def test_missing_rparent_in_main(self):
        _, _, errors = parse("int main( { return 0; }")
        assert report(errors) == ["1 j"]


# =============================================================================
# Statement Tests
# =============================================================================

class TestStatements:
    """Test statement forms."""

    def test_if_else(self):
        parser, _, errors = parse(in_main("if (a == 1 && b != 2 || !c) x = 1; else { }"))
        assert not errors.has_errors()
        names = parser.trace.nonterminals()
        assert names.count("Cond") == 1
        assert names.count("LOrExp") == 2
        assert names.count("LAndExp") == 3
        assert names.count("Stmt") == 3

    def test_for_statement(self):
        parser, _, errors = parse(in_main("for (i = 0; i < 10; i = i + 1) { }"))
        assert not errors.has_errors()
        names = parser.trace.nonterminals()
        assert names.count("ForStmt") == 2
        assert names.count("Cond") == 1

    def test_for_with_empty_header(self):
        parser, _, errors = parse(in_main("for (;;) break;"))
        assert not errors.has_errors()
        names = parser.trace.nonterminals()
        assert "ForStmt" not in names
        assert "Cond" not in names

    def test_for_clause_with_several_assignments(self):
        parser, _, errors = parse(in_main("for (i = 0, j = 1; ; ) continue;"))
        assert not errors.has_errors()
        assert parser.trace.nonterminals().count("ForStmt") == 1
        assert parser.trace.nonterminals().count("LVal") == 2

    def test_break_and_continue_need_semicolons(self):
        _, _, errors = parse(in_main("break\ncontinue"))
        assert report(errors) == ["2 i", "3 i"]

    def test_printf(self):
        _, lines, errors = parse(in_main('printf("%d\\n", x);'))
        assert not errors.has_errors()
        assert lines[5:8] == ["PRINTFTK printf", "LPARENT (", 'STRCON "%d\\n"']
        assert "COMMA ," in lines

    def test_printf_missing_rparent(self):
        _, _, errors = parse(in_main('printf("x";'))
        assert report(errors) == ["2 j"]

    def test_nested_block_is_a_statement(self):
        _, lines, _ = parse(in_main("{ }"))
        i = lines.index("RBRACE }")
        assert lines[i + 1:i + 3] == ["<Block>", "<Stmt>"]

    def test_empty_statement(self):
        _, lines, errors = parse(in_main(";"))
        assert not errors.has_errors()
        i = lines.index("SEMICN ;")
        assert lines[i + 1] == "<Stmt>"

    def test_return_without_value(self):
        _, _, errors = parse("void f() { return; }\nint main(){return 0;}")
        assert not errors.has_errors()

    def test_array_assignment(self):
        _, lines, errors = parse(in_main("a[i + 1] = 2;"))
        assert not errors.has_errors()
        assert lines[5:7] == ["IDENFR a", "LBRACK ["]

    def test_assignment_scan_starts_at_cursor(self):
        """Only tokens from the current statement onwards decide the form."""
        _, lines, errors = parse(in_main("a = 1;\nb;\nc = b;"))
        assert not errors.has_errors()
        assert lines.count("ASSIGN =") == 2
        assert lines.count("<LVal>") == 4

    def test_many_identifier_statements(self):
        count = 20000
        parser, _, errors = parse(in_main("a;\n" * count))
        assert not errors.has_errors()
        assert parser.trace.nonterminals().count("Stmt") == count
        assert parser.position == len(parser.tokens)


# =============================================================================
# Expression Tests
# =============================================================================

class TestExpressions:
    """Test expression layering and associativity."""

    def test_precedence(self):
        """'1 + 2 * 3' groups the product under a single AddExp operand."""
        _, lines, _ = parse(in_main("return 1 + 2 * 3;"))
        assert between(lines, "RETURNTK return", "SEMICN ;") == [
            "INTCON 1", "<Number>", "<PrimaryExp>", "<UnaryExp>", "<MulExp>", "<AddExp>",
            "PLUS +",
            "INTCON 2", "<Number>", "<PrimaryExp>", "<UnaryExp>", "<MulExp>",
            "MULT *",
            "INTCON 3", "<Number>", "<PrimaryExp>", "<UnaryExp>", "<MulExp>",
            "<AddExp>",
            "<Exp>",
        ]

    def test_left_associative_markers(self):
        """Each extra operand of a layer re-emits the layer's marker."""
        parser, _, _ = parse(in_main("return 1 - 2 - 3;"))
        assert parser.trace.nonterminals().count("AddExp") == 3

    def test_unary_operators(self):
        parser, _, errors = parse(in_main("return -!+x;"))
        assert not errors.has_errors()
        assert parser.trace.nonterminals().count("UnaryOp") == 3
        assert parser.trace.nonterminals().count("UnaryExp") == 4

    def test_parenthesised_expression(self):
        _, _, errors = parse(in_main("return (1 + 2) * 3;"))
        assert not errors.has_errors()

    def test_missing_rparent_in_parentheses(self):
        _, _, errors = parse(in_main("return (1 + 2;"))
        assert report(errors) == ["2 j"]

    def test_relational_layers(self):
        parser, _, _ = parse(in_main("if (a < b == c >= d) ;"))
        names = parser.trace.nonterminals()
        assert names.count("EqExp") == 2
        assert names.count("RelExp") == 4


# =============================================================================
# Expectation Result Tests
# =============================================================================

class TestExpect:
    """Test the typed expectation results."""

    def test_consumed(self):
        errors = ErrorCollector()
        parser = Parser(scan(";", errors), errors)
        result = parser._expect(TokenKind.SEMICN, ErrorKind.MISSING_SEMICOLON)
        assert result == Consumed(Token(TokenKind.SEMICN, ";", 1))
        assert result.ok

    def test_missing_is_reported_on_previous_line(self):
        errors = ErrorCollector()
        parser = Parser(scan("x\n\ny", errors), errors)
        parser._advance()
        result = parser._expect(TokenKind.SEMICN, ErrorKind.MISSING_SEMICOLON)
        assert result == Missing(TokenKind.SEMICN, 1, True)
        assert not result.ok
        assert report(errors) == ["1 i"]

    def test_missing_before_any_token_uses_lookahead_line(self):
        errors = ErrorCollector()
        parser = Parser(scan("\n\ny", errors), errors)
        result = parser._expect(TokenKind.SEMICN, ErrorKind.MISSING_SEMICOLON)
        assert result.line == 3

    def test_unreported_structural_token(self):
        errors = ErrorCollector()
        parser = Parser(scan("x", errors), errors)
        result = parser._expect(TokenKind.LBRACE, None)
        assert result == Missing(TokenKind.LBRACE, 1, False)
        assert not errors.has_errors()

    def test_suppressed_on_lexical_line(self):
        _, _, errors = parse(in_main("int a = 1 @\nreturn 0;"))
        assert report(errors) == ["2 a"]

    def test_not_suppressed_on_other_lines(self):
        _, _, errors = parse(in_main("@\nint a = 1\nreturn 0;"))
        assert report(errors) == ["2 a", "3 i"]


# =============================================================================
# Recovery Tests
# =============================================================================

class TestRecovery:
    """Test bounded skipping and block-level recovery."""

    def test_if_missing_rparent_before_brace(self):
        _, _, errors = parse("int main(){\nif (a > 1 {\n}\nreturn 0;\n}")
        assert report(errors) == ["2 j"]

    def test_skip_reaches_rparent(self):
        """Stray tokens before ')' are discarded and ')' is consumed."""
        parser, _, errors = parse(in_main("if (a b c) x = 1;"))
        assert report(errors) == ["2 j"]
        assert parser.panic_skips == 2
        assert parser.position == len(parser.tokens)

    def test_skip_crosses_commas(self):
        parser, _, errors = parse(in_main("if (a, b) ;"))
        assert report(errors) == ["2 j"]
        assert parser.panic_skips == 2

    def test_skip_stops_at_semicolon(self):
        parser, _, errors = parse("int main(){ if (a b; return 0; }")
        assert report(errors) == ["1 j"]
        assert parser.panic_skips == 1

    def test_for_header_skip(self):
        parser, _, errors = parse(in_main("for (i = 0; i < 3; i = i + 1 x) ;"))
        assert report(errors) == ["2 j"]
        assert parser.panic_skips == 1

    def test_block_recovery_makes_progress(self):
        """A block body that cannot start any item is consumed token by token."""
        parser, _, errors = parse("int main(){ ))) }")
        assert parser.forced_skips == 3
        assert parser.position == len(parser.tokens)
        assert report(errors) == ["1 i", "1 i", "1 i"]

    def test_recovery_then_valid_statement(self):
        parser, lines, _ = parse(in_main("] return 0;"))
        assert parser.forced_skips == 1
        assert "RETURNTK return" in lines
        assert lines[-1] == "<CompUnit>"

    def test_truncated_program_terminates(self):
        parser, lines, _ = parse("int main() {")
        assert parser.position == len(parser.tokens)
        assert lines[-3:] == ["<Block>", "<MainFuncDef>", "<CompUnit>"]

    def test_deeply_nested_parentheses(self):
        """Nesting depth is not bounded by the default recursion limit."""
        depth = 1000
        source = "int main(){ return " + "(" * depth + "1" + ")" * depth + "; }"
        parser, lines, errors = parse(source)
        assert not errors.has_errors()
        assert parser.position == len(parser.tokens)
        assert lines.count("<PrimaryExp>") == depth + 1
        assert lines[-1] == "<CompUnit>"

    def test_deeply_nested_unclosed_blocks(self):
        parser, lines, _ = parse("int main(){ " + "{" * 1000 + " }")
        assert parser.position == len(parser.tokens)
        assert lines.count("<Block>") == 1001
        assert lines[-1] == "<CompUnit>"

    def test_recursion_limit_restored(self):
        before = sys.getrecursionlimit()
        parse("int main(){ return " + "(" * 500 + "1" + ")" * 500 + "; }")
        assert sys.getrecursionlimit() == before

    def test_compile_source_survives_deep_nesting(self):
        result = compile_source("int main(){ return " + "-(" * 800 + "x" + ")" * 800 + "; }")
        assert result.success
        assert result.trace[-1] == "<CompUnit>"

    def test_missing_semicolon_at_end_of_input(self):
        _, _, errors = parse("int main() { return 0")
        assert report(errors) == ["1 i"]


# =============================================================================
# End of Input Tests
# =============================================================================

class TestEndOfInput:
    """Test lookahead and consumption past the last token."""

    def test_empty_input(self):
        parser, lines, errors = parse("")
        assert lines == ["<CompUnit>"]
        assert not errors.has_errors()

    def test_end_marker_line(self):
        errors = ErrorCollector()
        parser = Parser(scan("int\nx", errors), errors)
        assert parser._peek(2) == EndOfInput(2)

    def test_end_marker_for_empty_sequence(self):
        parser = Parser((), ErrorCollector())
        assert parser._peek() == EndOfInput(1)

    def test_end_marker_never_matches(self):
        parser = Parser((), ErrorCollector())
        assert not parser._check(*TokenKind)

    def test_advance_at_end_is_noop(self):
        parser = Parser((), ErrorCollector())
        assert parser._advance() is None
        assert len(parser.trace) == 0
        assert parser.position == 0

    def test_tokens_after_main_are_ignored(self):
        parser, lines, errors = parse("int main(){return 0;} int x;")
        assert not errors.has_errors()
        assert "IDENFR x" not in lines
        assert lines[-1] == "<CompUnit>"
        assert parser.position < len(parser.tokens)


# =============================================================================
# Convenience Function Tests
# =============================================================================

class TestConvenience:
    """Test parse_tokens and parse_source."""

    def test_parse_source(self):
        trace, errors = parse_source("int main(){return 0;}")
        assert trace.last() == "<CompUnit>"
        assert not errors.has_errors()

    def test_parse_source_uses_given_collector(self):
        errors = ErrorCollector()
        _, returned = parse_source("int main(){return 0}", errors)
        assert returned is errors
        assert report(errors) == ["1 i"]

    def test_disabled_trace_still_reports(self):
        errors = ErrorCollector()
        tokens = scan("int main(){return 0}", errors)
        trace = parse_tokens(tokens, errors, emit_trace=False)
        assert len(trace) == 0
        assert report(errors) == ["1 i"]
