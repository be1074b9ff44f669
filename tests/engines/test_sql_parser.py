"""Unit tests for engines.sql.parser."""

from sqlbind.engines.sql import parse_markers, parse_parameters


class TestParseMarkers:
    def test_no_markers(self):
        assert parse_markers("SELECT 1") == []

    def test_single(self):
        (m,) = parse_markers("WHERE id = :id")
        assert m.name == "id"
        assert (m.start, m.end, m.index) == (11, 14, 0)

    def test_repeated_names_keep_every_occurrence(self):
        names = [m.name for m in parse_markers("(:id1,:code),(:id2,:code)")]
        assert names == ["id1", "code", "id2", "code"]

    def test_occurrence_index(self):
        assert [m.index for m in parse_markers(":a :b :a")] == [0, 1, 2]

    def test_word_characters(self):
        assert [m.name for m in parse_markers("x = :a_1 + :B2;")] == ["a_1", "B2"]

    def test_lone_colon_is_not_marker(self):
        assert parse_markers("SELECT ':' , a : b") == []
        assert parse_markers("a = : b") == []

    def test_postgres_cast_is_not_marker(self):
        names = [m.name for m in parse_markers("SELECT :v::int, x::text")]
        assert names == ["v"]

    def test_quoted_literals_skipped(self):
        sql = "SELECT '10:30', \"col:x\", 'it''s :no' FROM t WHERE a = :yes"
        assert [m.name for m in parse_markers(sql)] == ["yes"]

    def test_comments_skipped(self):
        sql = "SELECT a -- :ignored\nFROM t /* :also */ WHERE b = :b"
        assert [m.name for m in parse_markers(sql)] == ["b"]

    def test_unterminated_literal_consumes_rest(self):
        assert parse_markers("SELECT 'abc :x") == []

    def test_backslash_is_ordinary_character(self):
        sql = r"SELECT 'C:\' AS p, :id AS i"
        assert [m.name for m in parse_markers(sql)] == ["id"]

    def test_backslash_before_doubled_quote(self):
        sql = r"SELECT 'a\''b' AS p WHERE x = :x"
        assert [m.name for m in parse_markers(sql)] == ["x"]

    def test_dollar_quoted_body_skipped(self):
        sql = "SELECT $$it's :no$$ AS a, :id AS b"
        assert [m.name for m in parse_markers(sql)] == ["id"]

    def test_unterminated_dollar_quote_consumes_rest(self):
        assert parse_markers("SELECT $$abc :x") == []

    def test_marker_span_matches_template(self):
        sql = "UPDATE t SET a = :alpha WHERE id = :id"
        for m in parse_markers(sql):
            assert sql[m.start : m.end] == ":" + m.name


class TestParseParameters:
    def test_distinct_in_first_occurrence_order(self):
        assert parse_parameters(":b :a :b :c :a") == ["b", "a", "c"]

    def test_empty(self):
        assert parse_parameters("SELECT 1") == []
