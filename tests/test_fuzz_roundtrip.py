from __future__ import annotations

from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from arithpy import EvalError, compile_to_rpn, evaluate, evaluate_rpn, parse, parse_source, tokenize


_WORDS = ["0", "7", "42", "+", "-", "*", "/", "(", ")"]


def _signed_literal() -> st.SearchStrategy[str]:
    signs = st.text(alphabet=["+", "-"], max_size=3)
    return st.builds(lambda s, n: s + str(n), signs, st.integers(min_value=0, max_value=10_000))


def _space() -> st.SearchStrategy[str]:
    return st.text(alphabet=[" ", "\t"], max_size=2)


def _expressions() -> st.SearchStrategy[str]:
    # Unary signs only in front of literals, see compile_to_rpn.
    def extend(inner: st.SearchStrategy[str]) -> st.SearchStrategy[str]:
        binop = st.builds(
            lambda l, s1, op, s2, r: l + s1 + op + s2 + r,
            inner,
            _space(),
            st.sampled_from(["+", "-", "*", "/"]),
            _space(),
            inner,
        )
        parens = st.builds(lambda e: "(" + e + ")", inner)
        return st.one_of(binop, parens)

    return st.recursive(_signed_literal(), extend, max_leaves=24)


@given(
    st.lists(st.sampled_from(_WORDS), max_size=20),
    st.lists(st.text(alphabet=[" ", "\t", "\n"], min_size=1, max_size=3), min_size=21, max_size=21),
)
def test_whitespace_does_not_change_token_values(words: list[str], seps: list[str]) -> None:
    tight = " ".join(words)
    loose = seps[-1] + "".join(w + sep for w, sep in zip(words, seps))
    assert [(t.kind, t.number) for t in tokenize(tight)] == [(t.kind, t.number) for t in tokenize(loose)]


@given(_expressions())
@settings(max_examples=300, suppress_health_check=[HealthCheck.too_slow])
def test_rpn_evaluates_like_the_tree(src: str) -> None:
    tree = parse_source(src)
    rpn = compile_to_rpn(tree)
    try:
        expected = evaluate(tree)
    except EvalError as e:
        try:
            evaluate_rpn(rpn)
        except EvalError as e2:
            assert e2.kind is e.kind
        else:
            raise AssertionError(f"postfix form of {src!r} did not fail") from e
        return
    assert evaluate_rpn(rpn) == expected


@given(_expressions())
def test_reparse_is_idempotent(src: str) -> None:
    toks = tokenize(src)
    assert parse(toks) == parse(toks)
    assert parse(toks) == parse_source(src)
