from nbe.syntax.ast import App, Sort, Var, lam, pi
from nbe.syntax.names import (
    alpha_equiv,
    bound_names,
    free_vars,
    fresh_name,
    fresh_variant,
    subst,
)
from nbe.syntax.parse import parse_term


# ------------- free variables -------------


def test_free_vars_excludes_bound_names() -> None:
    assert free_vars(parse_term("λ[x:A].f x y")) == {"A", "f", "y"}


def test_free_vars_domain_is_outside_binder_scope() -> None:
    # the x in the domain refers to an outer x
    assert free_vars(parse_term("λ[x:x].x")) == {"x"}


def test_free_vars_of_references_and_ascriptions() -> None:
    assert free_vars(parse_term("(@c(a, λ[b:✳].b) : T)")) == {"a", "T"}


def test_bound_names() -> None:
    assert bound_names(parse_term("λ[x:✳].[f, Π[y:✳].y]")) == {"x", "y"}


# ------------- fresh names -------------


def test_fresh_name_uses_level() -> None:
    assert fresh_name("x", 0) == "x0"
    assert fresh_name("x", 3) == "x3"


def test_fresh_name_replaces_trailing_digits_and_primes() -> None:
    assert fresh_name("x12", 4) == "x4"
    assert fresh_name("y2'", 1) == "y1"


def test_fresh_name_skips_avoided() -> None:
    assert fresh_name("x", 0, {"x0"}) == "x0'"
    assert fresh_name("x", 0, {"x0", "x0'"}) == "x0''"


def test_fresh_name_of_degenerate_base() -> None:
    assert fresh_name("_", 2) == "_2"
    assert fresh_name("''", 2) == "x2"


def test_fresh_variant() -> None:
    assert fresh_variant("a", {"b"}) == "a"
    assert fresh_variant("a", {"a", "a'"}) == "a''"


# ------------- substitution -------------


def test_subst_replaces_free_occurrences() -> None:
    assert subst(parse_term("f x x"), "x", Var("y")) == parse_term("f y y")


def test_subst_stops_at_shadowing_binder() -> None:
    term = parse_term("λ[x:x].x")
    assert subst(term, "x", Var("y")) == parse_term("λ[x:y].x")


def test_subst_avoids_capture() -> None:
    # (λy. x)[x := y] must not become λy. y
    result = subst(parse_term("λ[y:✳].x"), "x", Var("y"))
    assert alpha_equiv(result, parse_term("λ[z:✳].y"))
    assert not alpha_equiv(result, parse_term("λ[z:✳].z"))


def test_subst_renamed_binder_avoids_body_names() -> None:
    result = subst(parse_term("λ[y:✳].[x, y']"), "x", Var("y"))
    assert alpha_equiv(result, parse_term("λ[z:✳].[y, y']"))


def test_subst_into_reference_args() -> None:
    result = subst(parse_term("@c(x, λ[x:✳].x)"), "x", Var("a"))
    assert result == parse_term("@c(a, λ[x:✳].x)")


# ------------- alpha equivalence -------------


def test_alpha_equiv_renamed_binders() -> None:
    assert alpha_equiv(parse_term("λ[a:✳].a"), parse_term("λ[b:✳].b"))
    assert alpha_equiv(
        parse_term("λ[x:✳].λ[y:✳].[x, y]"), parse_term("λ[y:✳].λ[x:✳].[y, x]")
    )


def test_alpha_equiv_distinguishes_binding_structure() -> None:
    assert not alpha_equiv(
        parse_term("λ[x:✳].λ[y:✳].x"), parse_term("λ[x:✳].λ[y:✳].y")
    )


def test_alpha_equiv_free_variables_must_match_by_name() -> None:
    assert alpha_equiv(Var("a"), Var("a"))
    assert not alpha_equiv(Var("a"), Var("b"))
    # a bound name never matches a free one
    assert not alpha_equiv(parse_term("λ[x:✳].x"), parse_term("λ[y:✳].x"))


def test_alpha_equiv_binder_kind_matters() -> None:
    assert not alpha_equiv(lam("x", Sort(), Var("x")), pi("x", Sort(), Var("x")))


def test_alpha_equiv_shadowing() -> None:
    assert alpha_equiv(parse_term("λ[x:✳].λ[x:✳].x"), parse_term("λ[a:✳].λ[b:✳].b"))


def test_alpha_equiv_references() -> None:
    assert alpha_equiv(parse_term("@c(λ[a:✳].a)"), parse_term("@c(λ[b:✳].b)"))
    assert not alpha_equiv(parse_term("@c(a)"), parse_term("@c(a, a)"))
    assert not alpha_equiv(parse_term("@c(a)"), parse_term("@d(a)"))


def test_alpha_equiv_mismatched_shapes() -> None:
    assert not alpha_equiv(App(Var("f"), Var("a")), Var("f"))
