"""Unit tests for engines.sql.compiler."""

from datetime import date

import pytest

from sqlbind.engines.sql import BindingStore, CompileMode, compile_statement, render_debug
from sqlbind.exceptions import MissingParameterError

MULTI_INSERT = "INSERT INTO t (id, code) VALUES (:id1,:code),(:id2,:code)"
SELECT_IN = "SELECT id FROM t WHERE id < :id AND code IN (:code)"


def _store(**values) -> BindingStore:
    store = BindingStore()
    for name, value in values.items():
        store.bind(name, value)
    return store


class TestExecuteMode:
    def test_no_markers(self):
        out = compile_statement("SELECT 1", BindingStore())
        assert out.sql == "SELECT 1"
        assert out.values == ()
        assert out.placeholder_count == 0

    def test_multi_insert_repeated_marker(self):
        out = compile_statement(MULTI_INSERT, _store(id1=2, id2=3, code="T"))
        assert out.sql == "INSERT INTO t (id, code) VALUES (?,?),(?,?)"
        assert out.values == (2, "T", 3, "T")
        assert out.placeholder_count == 4

    def test_list_expansion(self):
        store = _store(id=10)
        store.bind("code", "T", "V")
        out = compile_statement(SELECT_IN, store)
        assert out.sql == "SELECT id FROM t WHERE id < ? AND code IN (?,?)"
        assert out.values == (10, "T", "V")

    def test_list_length_changes_shape(self):
        store = _store(id=10)
        store.bind("code", "T", "V")
        two = compile_statement(SELECT_IN, store)
        store.bind("code", ["T"])
        one = compile_statement(SELECT_IN, store)
        assert two.placeholder_count == 3
        assert one.placeholder_count == 2
        assert one.sql == "SELECT id FROM t WHERE id < ? AND code IN (?)"

    def test_repeated_list_marker_expands_each_time(self):
        store = BindingStore()
        store.bind("ids", 1, 2)
        out = compile_statement("a IN (:ids) OR b IN (:ids)", store)
        assert out.sql == "a IN (?,?) OR b IN (?,?)"
        assert out.values == (1, 2, 1, 2)

    def test_none_binds_null_placeholder(self):
        out = compile_statement("UPDATE t SET a = :a", _store(a=None))
        assert out.sql == "UPDATE t SET a = ?"
        assert out.values == (None,)

    def test_missing_reports_all_names(self):
        with pytest.raises(MissingParameterError) as ei:
            compile_statement(MULTI_INSERT, _store(id1=1))
        assert ei.value.missing == {"id2", "code"}
        assert "'code'" in str(ei.value) and "'id2'" in str(ei.value)

    def test_unused_bindings_ignored(self):
        out = compile_statement("SELECT :a", _store(a=1, b=2))
        assert out.values == (1,)

    def test_deterministic(self):
        store = _store(id1=2, id2=3, code="T")
        assert compile_statement(MULTI_INSERT, store) == compile_statement(MULTI_INSERT, store)


class TestParamstyles:
    def test_format_style_doubles_percent(self):
        out = compile_statement(
            "SELECT * FROM t WHERE name LIKE 'a%' AND id = :id", _store(id=1), paramstyle="format"
        )
        assert out.sql == "SELECT * FROM t WHERE name LIKE 'a%%' AND id = %s"

    def test_pyformat_style(self):
        out = compile_statement(MULTI_INSERT, _store(id1=2, id2=3, code="T"), paramstyle="pyformat")
        assert out.sql == "INSERT INTO t (id, code) VALUES (%s,%s),(%s,%s)"

    def test_numeric_style_positions(self):
        store = _store(id=10)
        store.bind("code", "T", "V")
        out = compile_statement(SELECT_IN, store, paramstyle="numeric")
        assert out.sql == "SELECT id FROM t WHERE id < :1 AND code IN (:2,:3)"

    def test_qmark_keeps_percent(self):
        out = compile_statement("SELECT '100%' , :a", _store(a=1))
        assert out.sql == "SELECT '100%' , ?"

    def test_unsupported_paramstyle(self):
        with pytest.raises(ValueError):
            compile_statement("SELECT :a", _store(a=1), paramstyle="named")


class TestDebugMode:
    def test_bound_inline_unbound_literal(self):
        sql = render_debug("SELECT * FROM t WHERE id = :id AND code = :code", _store(id=10))
        assert sql == "SELECT * FROM t WHERE id = 10 AND code = :code"

    def test_list_inline(self):
        store = BindingStore()
        store.bind("code", "T", "V")
        assert render_debug("code IN (:code)", store) == "code IN ('T','V')"

    def test_debug_has_no_values_and_never_raises(self):
        out = compile_statement(MULTI_INSERT, BindingStore(), CompileMode.DEBUG)
        assert out.sql == MULTI_INSERT
        assert out.values == ()

    def test_date_and_percent_untouched(self):
        out = compile_statement(
            "SELECT '5%' WHERE d = :d", _store(d=date(2018, 9, 12)), CompileMode.DEBUG, paramstyle="format"
        )
        assert out.sql == "SELECT '5%' WHERE d = '2018-09-12'"
