from typing import Any

import pytest

from nbe.env.context import Context
from nbe.env.environment import Environment
from nbe.errors import UnsupportedTermShape
from nbe.reduce.evaluate import apply_value, evaluate
from nbe.reduce.values import (
    EMPTY_BINDINGS,
    Bindings,
    VApp,
    VAscription,
    VClosure,
    VRef,
    VSort,
    VVar,
    Value,
    extend,
)
from nbe.syntax.ast import BinderKind, Sort, Term, Var
from nbe.syntax.parse import parse_term


def _eval(
    src: str, env: Environment = Environment(), bindings: Bindings = EMPTY_BINDINGS
) -> Value:
    return evaluate(env, Context(), bindings, parse_term(src))


def test_free_variable_is_neutral() -> None:
    assert _eval("a") == VVar("a")


def test_bound_variable_is_looked_up() -> None:
    bindings = extend(EMPTY_BINDINGS, "a", VSort(Sort()))
    assert _eval("a", bindings=bindings) == VSort(Sort())


def test_sort_is_wrapped() -> None:
    assert _eval("✳") == VSort(Sort())


def test_binder_defers_its_body() -> None:
    # the body references an unknown definition; evaluating it would fail
    value = _eval("λ[x:✳].@missing")
    assert isinstance(value, VClosure)
    assert value.kind is BinderKind.LAMBDA
    assert value.name == "x"
    assert value.domain == VSort(Sort())


def test_force_substitutes_argument() -> None:
    value = _eval("λ[x:✳].[f, x]")
    assert isinstance(value, VClosure)
    assert value.force(VVar("y")) == VApp(VVar("f"), VVar("y"))


def test_force_calls_do_not_share_bindings() -> None:
    value = _eval("λ[x:✳].x")
    assert isinstance(value, VClosure)
    assert value.force(VVar("a")) == VVar("a")
    assert value.force(VVar("b")) == VVar("b")
    assert value.bindings == {}


def test_force_extends_typing_context() -> None:
    seen: list[Context] = []

    def resolver(name, entry, args, context: Context) -> Term:
        seen.append(context)
        return Var("x")

    env = Environment().implicit("hole", Sort())
    value = evaluate(
        env, Context(), EMPTY_BINDINGS, parse_term("λ[x:✳].@hole"), resolver=resolver
    )
    assert isinstance(value, VClosure)
    assert value.force(VVar("x0")) == VVar("x0")
    assert seen[0].lookup("x") == Sort()


def test_beta_redex_is_reduced() -> None:
    assert _eval("(λ[a:✳].a) b") == VVar("b")


def test_nested_redex_reduces_fully() -> None:
    assert _eval("(λ[x:✳].λ[y:✳].[x, y]) z t") == VApp(VVar("z"), VVar("t"))


def test_stuck_application_on_neutral_head() -> None:
    value = _eval("f (λ[a:✳].a) b")
    assert isinstance(value, VApp)
    assert value.arg == VVar("b")
    inner = value.func
    assert isinstance(inner, VApp)
    assert inner.func == VVar("f")
    assert isinstance(inner.arg, VClosure)


def test_pi_closure_does_not_beta_reduce() -> None:
    value = _eval("(Π[a:✳].a) b")
    assert isinstance(value, VApp)
    assert isinstance(value.func, VClosure)
    assert value.func.kind is BinderKind.PI
    assert value.arg == VVar("b")


def test_apply_value_on_neutral() -> None:
    assert apply_value(VVar("f"), VVar("x")) == VApp(VVar("f"), VVar("x"))


def test_reference_unfolds_under_current_bindings() -> None:
    env = Environment().define("k", Sort(), Var("a"), params=[("a", Sort())])
    assert _eval("(λ[y:✳].@k(y)) z", env) == VVar("z")


def test_opaque_reference_evaluates_its_arguments() -> None:
    env = Environment().axiom("ax", Sort(), params=[("a", Sort())])
    assert _eval("@ax((λ[a:✳].a) b)", env) == VRef("ax", (VVar("b"),))


def test_partial_reference_then_applied() -> None:
    env = Environment().define(
        "const", Var("A"), Var("a"), params=[("A", Sort()), ("a", Var("A"))]
    )
    assert _eval("@const(✳) x", env) == VVar("x")


def test_ascription_keeps_both_sides() -> None:
    assert _eval("(z : (λ[x:✳].x) y)") == VAscription(VVar("z"), VVar("y"))


def test_ascription_does_not_reduce_when_applied() -> None:
    value = _eval("(λ[x:✳].x : ✳) y")
    assert isinstance(value, VApp)
    assert isinstance(value.func, VAscription)


def test_unsupported_term_shape() -> None:
    bogus: Any = "not a term"
    with pytest.raises(UnsupportedTermShape):
        evaluate(Environment(), Context(), EMPTY_BINDINGS, bogus)
