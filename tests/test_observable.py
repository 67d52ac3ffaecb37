"""Tests for the observable model and subscription handles."""

import pytest

from pyqt_formbind.core import ABSENT, ObservableModel, SubscriptionGroup


def test_unset_attribute_is_absent():
    model = ObservableModel({"foo": 1})
    assert model.get("missing") is ABSENT
    assert not ABSENT
    assert model.get("missing", "fallback") == "fallback"


def test_set_emits_key_then_generic_change():
    model = ObservableModel({"foo": "A"})
    calls = []
    model.on("change", lambda m, k, v, prev, opts: calls.append(("change", k, v, prev)))
    model.on("change:foo", lambda m, k, v, prev, opts: calls.append(("change:foo", k, v, prev)))

    model.set("foo", "B")

    assert calls == [("change:foo", "foo", "B", "A"), ("change", "foo", "B", "A")]


def test_set_same_value_is_silent():
    model = ObservableModel({"foo": "A"})
    calls = []
    model.on("change", lambda *args: calls.append(args))
    model.set("foo", "A")
    assert calls == []


def test_options_are_forwarded_verbatim():
    model = ObservableModel()
    token = object()
    options = {"origin": token}
    seen = []
    model.on("change:foo", lambda m, k, v, prev, opts: seen.append(opts))

    model.set("foo", 1, options)
    model.set("foo", 2)

    assert seen[0] is options
    assert seen[1] == {}


def test_update_and_unset():
    model = ObservableModel()
    keys = []
    model.on("change", lambda m, k, v, prev, opts: keys.append(k))

    model.update({"foo": 1, "bar": 2})
    model.unset("foo")

    assert keys == ["foo", "bar", "foo"]
    assert not model.has("foo")
    assert model.to_dict() == {"bar": 2}


def test_nested_set_runs_depth_first():
    first = ObservableModel()
    second = ObservableModel()
    order = []
    first.on("change:x", lambda m, k, v, prev, opts: (order.append("first"), second.set("y", v)))
    second.on("change:y", lambda *args: order.append("second"))
    first.on("change", lambda *args: order.append("first:change"))

    first.set("x", 1)

    assert order == ["first", "second", "first:change"]


def test_subscription_dispose_is_idempotent():
    model = ObservableModel()
    calls = []
    subscription = model.on("change:foo", lambda *args: calls.append(args))

    subscription.dispose()
    subscription.dispose()
    model.set("foo", 1)

    assert calls == []
    assert not subscription.active
    assert model.listener_count() == 0


def test_subscription_group_releases_everything():
    model = ObservableModel()
    group = SubscriptionGroup()
    group.add(model.on("change:foo", lambda *args: None))
    group.add(model.on("change", lambda *args: None))
    assert model.listener_count() == 2

    group.dispose()

    assert model.listener_count() == 0
    assert len(group) == 0


def test_listener_may_unsubscribe_during_dispatch():
    model = ObservableModel()
    calls = []

    def once(*args):
        calls.append("once")
        subscription.dispose()

    subscription = model.on("change:foo", once)
    model.on("change:foo", lambda *args: calls.append("other"))

    model.set("foo", 1)
    model.set("foo", 2)

    assert calls == ["once", "other", "other"]


def test_listener_errors_propagate():
    model = ObservableModel()

    def broken(*args):
        raise RuntimeError("boom")

    model.on("change:foo", broken)
    with pytest.raises(RuntimeError):
        model.set("foo", 1)


def test_values_of_different_types_are_a_change():
    model = ObservableModel({"flag": 1, "count": 0})
    calls = []
    model.on("change", lambda m, k, v, prev, opts: calls.append((k, v)))

    model.set("flag", True)
    model.set("count", False)
    model.set("flag", True)

    assert calls == [("flag", True), ("count", False)]
    assert model.get("flag") is True
