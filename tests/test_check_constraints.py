# ============================================================================
# CHECK CONSTRAINT EXTRACTOR TESTS
# ============================================================================
# STATUS: Tests - CHECK (col IN (...)) enum extraction
# PURPOSE: Verify recognised shapes, rejected shapes and column enrichment
# CREATED: 11 OCT 2026
# ============================================================================
"""
Check Constraint Extractor Tests

Covers:
1. Basic IN lists (column-level and table-level, quoted column names)
2. Literal decoding (escaped quotes, unicode, whitespace, commas)
3. Rejected shapes (NOT IN, AND chains, subqueries, comparisons)
4. Keyword case, newlines and CONSTRAINT names
5. enrich_table copy semantics

Run with:
    pytest tests/test_check_constraints.py -v
"""

import pytest

from introspection.check_constraints import (
    enrich_table,
    extract_check_bodies,
    parse_check_constraints,
    parse_in_constraint,
)
from introspection.metadata import ColumnMetadata, TableMetadata


def _make_table(*column_names: str) -> TableMetadata:
    return TableMetadata(
        name="accounts",
        columns=[ColumnMetadata(name=name, data_type="TEXT") for name in column_names],
    )


# ============================================================================
# RECOGNISED SHAPES
# ============================================================================


class TestBasicExtraction:
    def test_column_level_constraint(self):
        sql = "CREATE TABLE t (status TEXT CHECK (status IN ('public','private','restricted')))"
        assert parse_check_constraints(sql) == {"status": ["public", "private", "restricted"]}

    def test_table_level_constraint(self):
        sql = """
            CREATE TABLE t (
                id INTEGER PRIMARY KEY,
                role TEXT NOT NULL,
                CHECK (role IN ('admin', 'member'))
            )
        """
        assert parse_check_constraints(sql) == {"role": ["admin", "member"]}

    def test_multiple_columns(self):
        sql = """
            CREATE TABLE t (
                status TEXT CHECK (status IN ('on', 'off')),
                size TEXT CHECK (size IN ('s', 'm', 'l'))
            )
        """
        assert parse_check_constraints(sql) == {
            "status": ["on", "off"],
            "size": ["s", "m", "l"],
        }

    @pytest.mark.parametrize("quoted", ['"status"', "`status`", "'status'"])
    def test_quoted_column_name(self, quoted):
        sql = f"CREATE TABLE t (status TEXT CHECK ({quoted} IN ('a', 'b')))"
        assert parse_check_constraints(sql) == {"status": ["a", "b"]}

    def test_column_key_lowercased(self):
        sql = "CREATE TABLE t (Status TEXT CHECK (Status IN ('a')))"
        assert parse_check_constraints(sql) == {"status": ["a"]}

    def test_double_quoted_literals(self):
        sql = 'CREATE TABLE t (kind TEXT CHECK (kind IN ("x", "y")))'
        assert parse_check_constraints(sql) == {"kind": ["x", "y"]}

    def test_later_constraint_overwrites_earlier(self):
        sql = """
            CREATE TABLE t (
                status TEXT CHECK (status IN ('a')),
                CHECK (status IN ('b', 'c'))
            )
        """
        assert parse_check_constraints(sql) == {"status": ["b", "c"]}

    def test_named_constraint(self):
        sql = """
            CREATE TABLE t (
                status TEXT,
                CONSTRAINT status_check CHECK (status IN ('draft', 'live'))
            )
        """
        assert parse_check_constraints(sql) == {"status": ["draft", "live"]}


class TestLiteralDecoding:
    def test_escaped_single_quote(self):
        sql = "CREATE TABLE t (note TEXT CHECK (note IN ('it''s ok', 'fine')))"
        assert parse_check_constraints(sql) == {"note": ["it's ok", "fine"]}

    def test_escaped_double_quote(self):
        sql = 'CREATE TABLE t (note TEXT CHECK (note IN ("say ""hi""")))'
        assert parse_check_constraints(sql) == {"note": ['say "hi"']}

    def test_unicode_values(self):
        sql = "CREATE TABLE t (mood TEXT CHECK (mood IN ('😀', 'café', 'naïve')))"
        assert parse_check_constraints(sql) == {"mood": ["😀", "café", "naïve"]}

    def test_internal_whitespace_preserved(self):
        sql = "CREATE TABLE t (label TEXT CHECK (label IN ('  padded  ', 'two words')))"
        assert parse_check_constraints(sql) == {"label": ["  padded  ", "two words"]}

    def test_comma_and_paren_inside_literal(self):
        sql = "CREATE TABLE t (label TEXT CHECK (label IN ('a, b', 'c (d)')))"
        assert parse_check_constraints(sql) == {"label": ["a, b", "c (d)"]}

    def test_empty_string_literal(self):
        sql = "CREATE TABLE t (label TEXT CHECK (label IN ('', 'x')))"
        assert parse_check_constraints(sql) == {"label": ["", "x"]}

    def test_unquoted_tokens_not_captured(self):
        column, values = parse_in_constraint("n IN ('a', 1, 'b')")
        assert column == "n"
        assert values == ["a", "b"]


class TestFormatting:
    def test_lowercase_keywords(self):
        sql = "create table t (status text check (status in ('a', 'b')))"
        assert parse_check_constraints(sql) == {"status": ["a", "b"]}

    def test_mixed_case_keywords(self):
        sql = "CREATE TABLE t (status TEXT ChEcK (status In ('a')))"
        assert parse_check_constraints(sql) == {"status": ["a"]}

    def test_newlines_inside_list(self):
        sql = """CREATE TABLE t (
            status TEXT CHECK (
                status IN (
                    'a',
                    'b'
                )
            )
        )"""
        assert parse_check_constraints(sql) == {"status": ["a", "b"]}

    def test_no_space_before_paren(self):
        sql = "CREATE TABLE t (status TEXT CHECK(status IN('a','b')))"
        assert parse_check_constraints(sql) == {"status": ["a", "b"]}


# ============================================================================
# REJECTED SHAPES
# ============================================================================


class TestRejectedShapes:
    def test_not_in(self):
        sql = "CREATE TABLE t (status TEXT CHECK (status NOT IN ('banned','deleted')))"
        assert parse_check_constraints(sql) == {}

    def test_trailing_and_condition(self):
        sql = "CREATE TABLE t (status TEXT CHECK (status IN ('a','b') AND length(status)>0))"
        assert parse_check_constraints(sql) == {}

    def test_trailing_or_condition(self):
        sql = "CREATE TABLE t (status TEXT CHECK (status IN ('a') OR status IS NULL))"
        assert parse_check_constraints(sql) == {}

    def test_subquery(self):
        sql = "CREATE TABLE t (status TEXT CHECK (status IN (SELECT name FROM statuses)))"
        assert parse_check_constraints(sql) == {}

    def test_comparison(self):
        sql = "CREATE TABLE t (age INTEGER CHECK (age > 0))"
        assert parse_check_constraints(sql) == {}

    def test_numeric_in_list(self):
        sql = "CREATE TABLE t (level INTEGER CHECK (level IN (1, 2, 3)))"
        assert parse_check_constraints(sql) == {}

    def test_no_constraints(self):
        assert parse_check_constraints("CREATE TABLE t (id INTEGER)") == {}

    def test_empty_and_none(self):
        assert parse_check_constraints("") == {}
        assert parse_check_constraints(None) == {}

    def test_unterminated_check_skipped(self):
        assert extract_check_bodies("CREATE TABLE t (s TEXT CHECK (s IN ('a')") == []

    def test_rejected_constraint_does_not_hide_others(self):
        sql = """
            CREATE TABLE t (
                status TEXT CHECK (status NOT IN ('x')),
                kind TEXT CHECK (kind IN ('a', 'b'))
            )
        """
        assert parse_check_constraints(sql) == {"kind": ["a", "b"]}


class TestExtractBodies:
    def test_nested_parentheses(self):
        bodies = extract_check_bodies("CHECK (length(trim(name)) > 0)")
        assert bodies == ["length(trim(name)) > 0"]

    def test_paren_in_literal_ignored(self):
        bodies = extract_check_bodies("CHECK (s IN (')', '('))")
        assert bodies == ["s IN (')', '(')"]

    def test_source_order(self):
        bodies = extract_check_bodies("CHECK (a IN ('1')) CHECK (b IN ('2'))")
        assert bodies == ["a IN ('1')", "b IN ('2')"]


# ============================================================================
# ENRICHMENT
# ============================================================================


class TestEnrichTable:
    def test_matching_column_gets_values(self):
        table = _make_table("id", "status")
        enriched = enrich_table(table, {"status": ["a", "b"]})

        assert enriched.columns[1].enum_values == ("a", "b")
        assert enriched.columns[0].enum_values is None

    def test_unmatched_columns_pass_through(self):
        table = _make_table("id", "status")
        enriched = enrich_table(table, {"status": ["a"]})

        assert enriched is not table
        assert enriched.columns[0] is table.columns[0]
        assert enriched.columns[1] is not table.columns[1]

    def test_input_not_mutated(self):
        table = _make_table("status")
        enrich_table(table, {"status": ["a"]})
        assert table.columns[0].enum_values is None

    def test_no_match_returns_same_table(self):
        table = _make_table("id")
        assert enrich_table(table, {"status": ["a"]}) is table
        assert enrich_table(table, {}) is table

    def test_case_insensitive_column_match(self):
        table = _make_table("Status")
        enriched = enrich_table(table, parse_check_constraints(
            "CREATE TABLE accounts (Status TEXT CHECK (STATUS IN ('a')))"
        ))
        assert enriched.columns[0].enum_values == ("a",)
