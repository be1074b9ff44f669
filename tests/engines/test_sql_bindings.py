"""Unit tests for engines.sql.bindings."""

import pytest

from sqlbind.engines.sql import BindingStore, Scalar, ValueList


class TestBind:
    def test_single_value_is_scalar(self):
        store = BindingStore()
        assert store.bind("id", 1) == Scalar(1)

    def test_several_values_are_list(self):
        store = BindingStore()
        assert store.bind("code", "T", "V") == ValueList(("T", "V"))

    def test_single_list_argument_is_list(self):
        store = BindingStore()
        assert store.bind("ids", [1, 2, 3]) == ValueList((1, 2, 3))
        assert store.bind("ids", (4,)) == ValueList((4,))

    def test_string_is_scalar_not_sequence(self):
        store = BindingStore()
        assert store.bind("name", "abc") == Scalar("abc")

    def test_none_is_null_scalar(self):
        store = BindingStore()
        assert store.bind("x", None) == Scalar(None)
        assert "x" in store

    def test_empty_values_rejected(self):
        store = BindingStore()
        with pytest.raises(ValueError):
            store.bind("x")
        with pytest.raises(ValueError):
            store.bind("x", [])

    def test_empty_name_rejected(self):
        with pytest.raises(ValueError):
            BindingStore().bind("", 1)

    def test_rebind_overwrites_only_that_name(self):
        store = BindingStore()
        store.bind("a", 1)
        store.bind("b", 2)
        store.bind("a", 3, 4)
        assert store.get("a") == ValueList((3, 4))
        assert store.get("b") == Scalar(2)
        assert len(store) == 2

    def test_clear(self):
        store = BindingStore()
        store.bind("a", 1)
        store.clear()
        assert len(store) == 0
        assert store.get("a") is None


class TestBindingValues:
    def test_lengths(self):
        assert len(Scalar("x")) == 1
        assert len(ValueList((1, 2, 3))) == 3

    def test_scalar_values_tuple(self):
        assert Scalar(5).values == (5,)
