"""Tests for placeholder substitution."""
from core.replacement import resolve


def test_resolve_positional_placeholders():
    assert resolve(("full", "10", "5"), "$1 $2") == "10 5"


def test_resolve_missing_group_becomes_empty():
    assert resolve(("full", "10", "5"), "$1-$4") == "10-"


def test_resolve_non_participating_group_becomes_empty():
    assert resolve(("full", None, "5"), "[$1][$2]") == "[][5]"


def test_resolve_never_substitutes_full_match():
    assert resolve(("full", "a"), "$0$1") == "$0a"


def test_resolve_template_without_placeholders():
    assert resolve(("full", "a", "b"), "Mobile Safari") == "Mobile Safari"


def test_resolve_repeated_placeholder():
    assert resolve(("full", "x"), "$1$1") == "xx"


def test_resolve_only_up_to_four():
    """$5 is not a placeholder and stays literal."""
    captures = ("full", "1", "2", "3", "4", "5")
    assert resolve(captures, "$4.$5") == "4.$5"
