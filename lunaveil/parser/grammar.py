"""Recursive-descent grammar routines for the modeled Lua subset."""

from types import MappingProxyType
from typing import Final, Mapping

from lunaveil.ast import (
    Assignment,
    BinaryOp,
    Block,
    Break,
    Continue,
    Expression,
    ExpressionStatement,
    LocalAssignment,
    Number,
    Return,
    Statement,
    String,
    Variable,
)
from lunaveil.diagnostics import (
    PARSER_EXPECTED_EXPRESSION,
    PARSER_REDUNDANT_SEMICOLON,
    PARSER_UNSUPPORTED_CONTINUE,
)
from lunaveil.dialect import AUGMENTED_ASSIGNMENT_SYMBOLS, LuaVersion
from lunaveil.lexer import TokenKind
from lunaveil.parser.parser import Parser

# Binding power per binary operator. Operators on the same level associate
# left unless listed in RIGHT_ASSOCIATIVE. Adding Lua's remaining operators
# means adding rows here.
BINARY_PRECEDENCE: Final[Mapping[str, int]] = MappingProxyType(
    {
        "+": 1,
        "-": 1,
    }
)
RIGHT_ASSOCIATIVE: Final[frozenset[str]] = frozenset()


def parse_block(parser: Parser) -> Block:
    statements: list[Statement] = []
    while not parser.at(TokenKind.EOF):
        if parser.at_symbol(";"):
            semicolon = parser.bump()
            if parser.dialect == LuaVersion.LUAU:
                parser.warn(PARSER_REDUNDANT_SEMICOLON, semicolon)
            continue
        statements.append(parse_statement(parser))
    return Block(statements=tuple(statements))


def parse_statement(parser: Parser) -> Statement:
    token = parser.current
    if token.kind == TokenKind.KEYWORD:
        match token.value:
            case "local":
                return parse_local_assignment(parser)
            case "return":
                return parse_return(parser)
            case "break":
                parser.bump()
                return Break()
            case "continue":
                if not parser.conventions.is_keyword("continue"):
                    parser.error(PARSER_UNSUPPORTED_CONTINUE, token)
                parser.bump()
                return Continue()

    return parse_assignment_or_expression(parser)


def parse_local_assignment(parser: Parser) -> LocalAssignment:
    parser.bump()
    name = parser.expect_kind(TokenKind.IDENT, "identifier", "after `local`")
    parser.expect_symbol("=", f"after local name `{name.text}`")
    return LocalAssignment(name=str(name.value), expr=parse_expression(parser))


def parse_return(parser: Parser) -> Return:
    parser.bump()
    if parser.at(TokenKind.EOF) or parser.at_symbol(";") or parser.at(TokenKind.KEYWORD):
        return Return(expr=None)
    return Return(expr=parse_expression(parser))


def parse_assignment_or_expression(parser: Parser) -> Statement:
    token = parser.current
    if token.kind == TokenKind.IDENT:
        following = parser.nth(1)
        if following.is_symbol("="):
            parser.bump()
            parser.bump()
            return Assignment(name=str(token.value), expr=parse_expression(parser))

        if (
            following.kind == TokenKind.SYMBOL
            and following.value in AUGMENTED_ASSIGNMENT_SYMBOLS
            and following.value in parser.conventions.symbols
        ):
            # `a op= b` is sugar for `a = a op b`
            parser.bump()
            operator = str(parser.bump().value)[:-1]
            name = str(token.value)
            return Assignment(
                name=name,
                expr=BinaryOp(left=Variable(name=name), operator=operator, right=parse_expression(parser)),
            )

    return ExpressionStatement(expr=parse_expression(parser))


def parse_expression(parser: Parser, min_precedence: int = 1) -> Expression:
    left = parse_primary(parser)
    while True:
        token = parser.current
        if token.kind != TokenKind.SYMBOL:
            break
        precedence = BINARY_PRECEDENCE.get(str(token.value))
        if precedence is None or precedence < min_precedence:
            break
        parser.bump()
        next_min = precedence if token.value in RIGHT_ASSOCIATIVE else precedence + 1
        right = parse_expression(parser, next_min)
        left = BinaryOp(left=left, operator=str(token.value), right=right)
    return left


def parse_primary(parser: Parser) -> Expression:
    token = parser.current
    match token.kind:
        case TokenKind.NUMBER:
            parser.bump()
            return Number(value=float(token.value))
        case TokenKind.STRING:
            parser.bump()
            return String(value=str(token.value))
        case TokenKind.IDENT:
            parser.bump()
            return Variable(name=str(token.value))
        case TokenKind.SYMBOL if token.value == "(":
            parser.enter_nested(token)
            parser.bump()
            inner = parse_expression(parser)
            parser.expect_symbol(")", "to close parenthesized expression")
            parser.exit_nested()
            return inner

    parser.error(PARSER_EXPECTED_EXPRESSION, token, detail=f"got {token.describe()}")
