"""Tests for placeholder expansion."""

from __future__ import annotations

import pytest

from dataprops.interpolate import Interpolator
from dataprops.store import PropertyStore


@pytest.fixture()
def store() -> PropertyStore:
    return PropertyStore()


@pytest.fixture()
def interp(store, environ) -> Interpolator:
    return Interpolator(store, environ)


def test_plain_text_unchanged(interp):
    assert interp.expand("no placeholders here") == "no placeholders here"


def test_none_and_empty_pass_through(interp):
    assert interp.expand(None) is None
    assert interp.expand("") == ""


def test_property_reference(store, interp):
    store.set("name", "demo")
    assert interp.expand("hello ${name}!") == "hello demo!"


def test_property_lookup_is_case_insensitive(store, interp):
    store.set("Server.Host", "localhost")
    assert interp.expand("${SERVER.host}") == "localhost"


def test_environment_takes_precedence(store, environ, interp):
    """${FOO} matches the environment variable; ${foo} falls back to the property."""
    environ["FOO"] = "env"
    store.set("foo", "local")
    assert interp.expand("${FOO}") == "env"
    assert interp.expand("${foo}") == "local"


def test_environment_can_be_empty(environ, interp):
    environ["EMPTY"] = ""
    assert interp.expand("[${EMPTY:default}]") == "[]"


def test_missing_reference_is_removed(interp):
    assert interp.expand("a${missing}b") == "ab"


def test_default_used_for_unusable_values(store, interp):
    store.set("nil", None)
    store.set("blank", "")
    assert interp.expand("${missing:fallback}") == "fallback"
    assert interp.expand("${nil:fallback}") == "fallback"
    assert interp.expand("${blank:fallback}") == "fallback"


def test_default_runs_to_end_of_body(interp):
    assert interp.expand("${missing:a|b:c}") == "a|b:c"


def test_default_may_contain_placeholders(store, interp):
    store.set("other", "x")
    assert interp.expand("${missing:${other}-y}") == "x-y"


def test_context_relative_reference(store, interp):
    store.set("version", "1")
    store.set("nested.version", "3")
    assert interp.expand("${.version}", "nested") == "3"
    assert interp.expand("${version}", "nested") == "1"


def test_context_relative_reference_missing_in_context(store, interp):
    store.set("version", "1")
    assert interp.expand("[${.version}]", "nested") == "[]"


def test_context_relative_reference_without_context(store, interp):
    store.set("version", "1")
    assert interp.expand("${.version}") == "1"


def test_definedness(store, interp):
    store.set("nil", None)
    store.set("blank", "")
    store.set("full", "yes")
    assert interp.expand("${nil?}") == ""
    assert interp.expand("${missing?}") == ""
    assert interp.expand("${blank?}") == "1"
    assert interp.expand("${full?}") == "1"


def test_definedness_of_environment_variable(environ, interp):
    environ["SET_BUT_EMPTY"] = ""
    assert interp.expand("${SET_BUT_EMPTY?|defined|undefined}") == "defined"


def test_definedness_composition(store, interp):
    store.set("a", None)
    store.set("x", "")
    store.set("v", "text")
    template = "${%s?|${%s|value|empty}|undef}"
    assert interp.expand(template % ("a", "a")) == "undef"
    assert interp.expand(template % ("x", "x")) == "empty"
    assert interp.expand(template % ("v", "v")) == "value"
    assert interp.expand(template % ("missing", "missing")) == "undef"


def test_alternatives(store, interp):
    store.set("on", "yes")
    assert interp.expand("${on|enabled|disabled}") == "enabled"
    assert interp.expand("${off|enabled|disabled}") == "disabled"
    assert interp.expand("${off|enabled}") == ""


def test_empty_then_yields_value(store, interp):
    store.set("port", "8080")
    assert interp.expand("${port||80}") == "8080"
    assert interp.expand("${other||80}") == "80"


def test_self_reference_in_branch(store, interp):
    store.set("user", "ann")
    assert interp.expand("${user|user=${}|anonymous}") == "user=ann"


def test_only_chosen_branch_is_expanded(store, environ, interp):
    store.set("flag", "1")
    assert interp.expand("${flag|${HOME}|${USER}}") == "/home/tester"
    assert interp.expand("${noflag|${HOME}|${USER}}") == "tester"


def test_computed_key(store, interp):
    store.set("env", "prod")
    store.set("db.prod.host", "db.example.com")
    assert interp.expand("${db.${env}.host}") == "db.example.com"


def test_unparseable_placeholder_left_alone(interp):
    assert interp.expand("cost: ${ 5 }") == "cost: ${ 5 }"
    assert interp.expand("open ${name") == "open ${name"


def test_substituted_values_are_not_rescanned(store, interp):
    store.set("raw", "${other}")
    store.set("other", "x")
    assert interp.expand("${raw}") == "${other}"


def test_tilde_expansion(interp):
    assert interp.expand("~/data") == "/home/tester/data"
    assert interp.expand("~") == "/home/tester"
    assert interp.expand("~user/data") == "~user/data"
    assert interp.expand("a/~/b") == "a/~/b"


def test_tilde_without_home(store):
    assert Interpolator(store, {}).expand("~/x") == "/x"


def test_non_ascii_placeholder_is_left_alone(interp):
    assert interp.expand("x ${café} y") == "x ${café} y"
