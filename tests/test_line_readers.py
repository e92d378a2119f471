"""Tests for the per-line metadata readers."""

import pytest
from conftest import make_file

from sourcevault.duplication import Duplicate, Duplication, TextBlock
from sourcevault.report import HighlightingType, LineCoverage, Symbol, SyntaxHighlightingRule, TextRange
from sourcevault.scm import Changeset, ScmInfo
from sourcevault.source import LineBuilder
from sourcevault.source.linereader import (
    CoverageLineReader,
    DuplicationLineReader,
    HighlightingLineReader,
    RangeOffsetConverter,
    ScmLineReader,
    SymbolsLineReader,
)
from sourcevault.utils.logging import logger


def read_lines(reader, sources):
    builders = []
    for number, source in enumerate(sources, start=1):
        builder = LineBuilder(line=number, source=source)
        reader.read(builder)
        builders.append(builder)
    return builders


@pytest.fixture
def warnings():
    messages = []
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    yield messages
    logger.remove(handler_id)


class TestCoverageLineReader:
    def test_sets_hits_and_conditions(self):
        reader = CoverageLineReader(iter([
            LineCoverage(1, hits=True),
            LineCoverage(3, hits=False, conditions=4, covered_conditions=2),
        ]))
        lines = read_lines(reader, ["a", "b", "c", "d"])

        assert lines[0].line_hits == 1
        assert lines[1].line_hits is None
        assert (lines[2].line_hits, lines[2].conditions, lines[2].covered_conditions) == (0, 4, 2)
        assert lines[3].line_hits is None

    def test_conditions_without_hits(self):
        reader = CoverageLineReader(iter([LineCoverage(1, conditions=2, covered_conditions=1)]))
        line = read_lines(reader, ["a"])[0]
        assert line.line_hits is None
        assert (line.conditions, line.covered_conditions) == (2, 1)

    def test_records_for_passed_lines_are_skipped(self):
        reader = CoverageLineReader(iter([
            LineCoverage(2, hits=True),
            LineCoverage(1, hits=True),
            LineCoverage(3, hits=False),
        ]))
        lines = read_lines(reader, ["a", "b", "c"])
        assert [line.line_hits for line in lines] == [None, 1, 0]

    def test_records_beyond_file_are_ignored(self):
        reader = CoverageLineReader(iter([LineCoverage(10, hits=True)]))
        assert all(line.line_hits is None for line in read_lines(reader, ["a", "b"]))


class TestScmLineReader:
    def test_sets_author_date_and_revision(self):
        first = Changeset(date=100, author="ann", revision="r1")
        second = Changeset(date=200, revision="r2")
        reader = ScmLineReader(ScmInfo([first, None, second]))

        lines = read_lines(reader, ["a", "b", "c", "d"])

        assert (lines[0].scm_author, lines[0].scm_date, lines[0].scm_revision) == ("ann", 100, "r1")
        assert (lines[1].scm_author, lines[1].scm_date, lines[1].scm_revision) == (None, None, None)
        assert (lines[2].scm_author, lines[2].scm_date, lines[2].scm_revision) == (None, 200, "r2")
        assert lines[3].scm_date is None
        assert reader.latest_change_with_revision == second

    def test_latest_change_is_most_recent_by_date(self):
        newest = Changeset(date=300, author="bob", revision="r3")
        reader = ScmLineReader(ScmInfo([newest, Changeset(date=100, author="ann", revision="r1")]))
        read_lines(reader, ["a", "b"])
        assert reader.latest_change_with_revision == newest

    def test_equal_dates_keep_last_seen(self):
        reader = ScmLineReader(ScmInfo([Changeset(100, "ann", "r1"), Changeset(100, "bob", "r2")]))
        read_lines(reader, ["a", "b"])
        assert reader.latest_change_with_revision.revision == "r2"

    def test_changeset_without_revision_is_not_latest(self):
        reader = ScmLineReader(ScmInfo([Changeset(500, "ann"), Changeset(100, "bob", "r1")]))
        lines = read_lines(reader, ["a", "b"])

        assert lines[0].scm_date == 500
        assert lines[0].scm_revision is None
        assert reader.latest_change_with_revision.revision == "r1"

    def test_no_revision_at_all(self):
        reader = ScmLineReader(ScmInfo([Changeset(500, "ann")]))
        read_lines(reader, ["a"])
        assert reader.latest_change_with_revision is None


def highlighting_reader(rules):
    return HighlightingLineReader(make_file(), iter(rules), RangeOffsetConverter())


class TestHighlightingLineReader:
    def test_segments_of_one_line(self):
        reader = highlighting_reader([
            SyntaxHighlightingRule(TextRange(1, 0, 1, 3), HighlightingType.KEYWORD),
            SyntaxHighlightingRule(TextRange(1, 4, 1, 7), HighlightingType.HIGHLIGHTING_STRING),
        ])
        assert read_lines(reader, ["def foo"])[0].highlighting == "0,3,k;4,7,s"

    def test_multi_line_rule(self):
        reader = highlighting_reader([SyntaxHighlightingRule(TextRange(1, 4, 3, 2), HighlightingType.COMMENT)])
        lines = read_lines(reader, ["abcdefgh", "xyz", "12345", "end"])
        assert [line.highlighting for line in lines] == ["4,8,cd", "0,3,cd", "0,2,cd", None]

    def test_multi_line_rule_crossing_a_blank_line(self):
        reader = highlighting_reader([SyntaxHighlightingRule(TextRange(1, 0, 3, 3), HighlightingType.COMMENT)])
        lines = read_lines(reader, ['"""doc', "", 'x"""'])
        assert [line.highlighting for line in lines] == ["0,6,cd", None, "0,3,cd"]

    def test_multi_line_rule_starting_at_end_of_line(self):
        reader = highlighting_reader([SyntaxHighlightingRule(TextRange(1, 3, 2, 2), HighlightingType.COMMENT)])
        lines = read_lines(reader, ["abc", "xyz"])
        assert [line.highlighting for line in lines] == [None, "0,2,cd"]

    def test_pending_rule_comes_before_rules_starting_on_the_line(self):
        reader = highlighting_reader([
            SyntaxHighlightingRule(TextRange(1, 0, 2, 3), HighlightingType.COMMENT),
            SyntaxHighlightingRule(TextRange(2, 0, 2, 1), HighlightingType.KEYWORD),
        ])
        lines = read_lines(reader, ["abcd", "xyzw"])
        assert lines[0].highlighting == "0,4,cd"
        assert lines[1].highlighting == "0,3,cd;0,1,k"

    def test_every_css_class(self):
        rules = [
            SyntaxHighlightingRule(TextRange(n, 0, n, 1), highlighting_type)
            for n, highlighting_type in enumerate(HighlightingType, start=1)
        ]
        lines = read_lines(highlighting_reader(rules), ["x"] * len(rules))
        assert [line.highlighting.split(",")[2] for line in lines] == ["a", "c", "cd", "cppd", "j", "k", "s", "h", "p"]

    def test_inconsistent_range_disables_highlighting_for_the_file(self, warnings):
        reader = highlighting_reader([
            SyntaxHighlightingRule(TextRange(1, 0, 1, 50), HighlightingType.KEYWORD),
            SyntaxHighlightingRule(TextRange(2, 0, 2, 1), HighlightingType.KEYWORD),
        ])
        lines = read_lines(reader, ["abc", "def"])

        assert [line.highlighting for line in lines] == [None, None]
        assert len(warnings) == 1
        assert "Highlighting will be ignored for file 'proj:src/a.py'" in warnings[0]


def symbols_reader(symbols):
    return SymbolsLineReader(make_file(), iter(symbols), RangeOffsetConverter())


class TestSymbolsLineReader:
    def test_ids_follow_declaration_order(self):
        foo = Symbol(TextRange(1, 4, 1, 7), (TextRange(3, 0, 3, 3),))
        x = Symbol(TextRange(2, 0, 2, 1), (TextRange(3, 6, 3, 7),))
        reader = symbols_reader([x, foo])

        lines = read_lines(reader, ["def foo():", "x = 1", "foo = x"])

        assert lines[0].symbols == "4,7,1"
        assert lines[1].symbols == "0,1,2"
        assert lines[2].symbols == "0,3,1;6,7,2"

    def test_declaration_listed_before_references(self):
        symbol = Symbol(TextRange(1, 6, 1, 7), (TextRange(1, 0, 1, 1),))
        assert read_lines(symbols_reader([symbol]), ["a = 1 a"])[0].symbols == "6,7,1;0,1,1"

    def test_lines_without_symbols(self):
        symbol = Symbol(TextRange(2, 0, 2, 1))
        lines = read_lines(symbols_reader([symbol]), ["abc", "x", "abc"])
        assert [line.symbols for line in lines] == [None, "0,1,1", None]

    def test_inconsistent_range_disables_symbols_for_the_file(self, warnings):
        symbol = Symbol(TextRange(1, 0, 1, 9), (TextRange(2, 0, 2, 1),))
        lines = read_lines(symbols_reader([symbol]), ["abc", "def"])

        assert [line.symbols for line in lines] == [None, None]
        assert "Symbols will be ignored for file 'proj:src/a.py'" in warnings[0]


class TestDuplicationLineReader:
    def test_blocks_numbered_in_natural_order(self):
        duplications = [
            Duplication(
                original=TextBlock(1, 3),
                duplicates=(Duplicate(TextBlock(5, 7)), Duplicate(TextBlock(2, 4), file_key="proj:other.py")),
            ),
            Duplication(original=TextBlock(2, 6), duplicates=(Duplicate(TextBlock(10, 14), "proj:x.py"),)),
        ]
        lines = read_lines(DuplicationLineReader(duplications), ["l"] * 8)

        # (1,3) -> 1, (2,6) -> 2, (5,7) -> 3; the block in other.py is not ours
        assert [line.duplication for line in lines] == [[1], [1, 2], [1, 2], [2], [2, 3], [2, 3], [3], []]

    def test_same_block_indexed_once(self):
        duplications = [
            Duplication(original=TextBlock(1, 2), duplicates=(Duplicate(TextBlock(4, 5)),)),
            Duplication(original=TextBlock(4, 5), duplicates=(Duplicate(TextBlock(1, 2)),)),
        ]
        lines = read_lines(DuplicationLineReader(duplications), ["l"] * 5)
        assert [line.duplication for line in lines] == [[1], [1], [], [2], [2]]

    def test_no_duplications(self):
        assert read_lines(DuplicationLineReader([]), ["a"])[0].duplication == []
