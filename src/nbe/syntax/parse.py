"""Parser for the kernel term notation.

Grammar summary::

    λ[x:A].b   \\[x:A].b      lambda abstraction
    Π[x:A].B                  dependent function type
    f a b      [f, a, b]      application (left-associative)
    ✳  □  Type  Kind          sorts
    @name  @name(a, b)        global references
    (t : T)                   ascription
"""

from __future__ import annotations

from typing import cast

import ply.lex as lex  # type: ignore[import-untyped]
import ply.yacc as yacc  # type: ignore[import-untyped]

from nbe.syntax.ast import KIND, TYPE, App, Ascription, Ref, Sort, Term, Var, lam, pi
from nbe.syntax.span import ParseError, Span
from nbe.syntax.util import apply_term

_SOURCE: str = ""

reserved = {
    "Type": "SORT",
    "Kind": "SORT",
}

tokens = (
    "IDENT",
    "SORT",
    "LAMBDA",
    "PI",
    "REF",
    "REFCALL",
    "COLON",
    "DOT",
    "COMMA",
    "LPAREN",
    "RPAREN",
    "LBRACKET",
    "RBRACKET",
)

t_LAMBDA = r"λ|\\"
t_PI = r"Π"
t_COLON = r":"
t_DOT = r"\."
t_COMMA = r","
t_LPAREN = r"\("
t_RPAREN = r"\)"
t_LBRACKET = r"\["
t_RBRACKET = r"\]"

t_ignore = " \t"

_IDENT = r"[A-Za-z_][A-Za-z0-9_']*"


def t_newline(t: lex.LexToken) -> None:
    r"\n+"
    t.lexer.lineno += len(t.value)


@lex.TOKEN(r"@" + _IDENT + r"\(")
def t_REFCALL(t: lex.LexToken) -> lex.LexToken:
    t.end = t.lexpos + len(t.value)
    t.value = t.value[1:-1]
    return t


@lex.TOKEN(r"@" + _IDENT)
def t_REF(t: lex.LexToken) -> lex.LexToken:
    t.end = t.lexpos + len(t.value)
    t.value = t.value[1:]
    return t


def t_SORT(t: lex.LexToken) -> lex.LexToken:
    r"✳|□"
    t.end = t.lexpos + len(t.value)
    t.value = TYPE if t.value == "✳" else KIND
    return t


@lex.TOKEN(_IDENT)
def t_IDENT(t: lex.LexToken) -> lex.LexToken:
    t.end = t.lexpos + len(t.value)
    t.type = reserved.get(t.value, "IDENT")
    return t


def t_error(t: lex.LexToken) -> None:
    span = Span(t.lexpos, t.lexpos + 1)
    raise ParseError(f"Unexpected character {t.value[0]!r}", span, _SOURCE)


def _tok_span(tok: lex.LexToken) -> Span:
    end = getattr(tok, "end", tok.lexpos + len(str(tok.value)))
    return Span(tok.lexpos, end)


def p_term_lambda(p: yacc.YaccProduction) -> None:
    "term : LAMBDA LBRACKET IDENT COLON term RBRACKET DOT term"
    p[0] = lam(p[3], p[5], p[8])


def p_term_pi(p: yacc.YaccProduction) -> None:
    "term : PI LBRACKET IDENT COLON term RBRACKET DOT term"
    p[0] = pi(p[3], p[5], p[8])


def p_term_app(p: yacc.YaccProduction) -> None:
    "term : app"
    p[0] = p[1]


def p_app_chain(p: yacc.YaccProduction) -> None:
    "app : app atom"
    p[0] = App(p[1], p[2])


def p_app_atom(p: yacc.YaccProduction) -> None:
    "app : atom"
    p[0] = p[1]


def p_atom_ident(p: yacc.YaccProduction) -> None:
    "atom : IDENT"
    p[0] = Var(p[1])


def p_atom_sort(p: yacc.YaccProduction) -> None:
    "atom : SORT"
    p[0] = Sort(p[1])


def p_atom_ref(p: yacc.YaccProduction) -> None:
    "atom : REF"
    p[0] = Ref(p[1])


def p_atom_ref_call(p: yacc.YaccProduction) -> None:
    "atom : REFCALL term_list RPAREN"
    p[0] = Ref(p[1], tuple(p[2]))


def p_atom_ref_call_empty(p: yacc.YaccProduction) -> None:
    "atom : REFCALL RPAREN"
    p[0] = Ref(p[1])


def p_atom_bracket_app(p: yacc.YaccProduction) -> None:
    "atom : LBRACKET term_list RBRACKET"
    head, *args = p[2]
    p[0] = apply_term(head, *args)


def p_atom_paren(p: yacc.YaccProduction) -> None:
    "atom : LPAREN term RPAREN"
    p[0] = p[2]


def p_atom_ascription(p: yacc.YaccProduction) -> None:
    "atom : LPAREN term COLON term RPAREN"
    p[0] = Ascription(p[2], p[4])


def p_term_list_multi(p: yacc.YaccProduction) -> None:
    "term_list : term_list COMMA term"
    p[0] = [*p[1], p[3]]


def p_term_list_single(p: yacc.YaccProduction) -> None:
    "term_list : term"
    p[0] = [p[1]]


def p_error(p: lex.LexToken | None) -> None:
    if p is None:
        span = Span(len(_SOURCE), len(_SOURCE))
        raise ParseError("Unexpected end of input", span, _SOURCE)
    span = _tok_span(cast(lex.LexToken, p))
    raise ParseError("Unexpected token", span, _SOURCE)


_PARSER = None


def parse_term(source: str) -> Term:
    global _SOURCE, _PARSER
    _SOURCE = source
    lexer = lex.lex()
    if _PARSER is None:
        _PARSER = yacc.yacc(start="term", debug=False, write_tables=False)
    term = cast("Term | None", _PARSER.parse(source, lexer=lexer))
    if term is None:
        span = Span(len(source), len(source))
        raise ParseError("Unexpected end of input", span, source)
    return term


__all__ = ["parse_term"]
