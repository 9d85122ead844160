from __future__ import annotations

from gradlestep.macro import replace_macro


def test_braced_and_bare_variables():
    env = {"FOO": "1", "BAR": "2"}
    assert replace_macro("${FOO}-$BAR", env) == "1-2"


def test_unknown_variables_stay_literal():
    assert replace_macro("-Dx=${MISSING} $ALSO_MISSING", {}) == "-Dx=${MISSING} $ALSO_MISSING"


def test_dotted_names_need_braces():
    env = {"a.b": "x", "a": "y"}
    assert replace_macro("${a.b} $a.b", env) == "x y.b"


def test_values_are_not_expanded_again():
    env = {"A": "$B", "B": "nope"}
    assert replace_macro("$A", env) == "$B"


def test_callable_resolver_and_none():
    assert replace_macro("${X}", lambda k: "v" if k == "X" else None) == "v"
    assert replace_macro(None, {}) is None
