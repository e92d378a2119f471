"""End to end tests of the persist step over real reports and a real database."""

import pytest
from conftest import PROJECT_KEY, run_step

from sourcevault.component import component_uuid
from sourcevault.duplication import Duplicate, Duplication, TextBlock
from sourcevault.exceptions import PersistSourcesError
from sourcevault.report import HighlightingType, LineCoverage, LineSignificantCode, SyntaxHighlightingRule, TextRange
from sourcevault.scm import Changeset
from sourcevault.source import decode_source_data
from sourcevault.store import FileSourceDao
from sourcevault.utils.constants import DATA_TYPE_TEST
from sourcevault.utils.helpers import md5_hex


def stored(database, path):
    return FileSourceDao(database).select_by_file_uuid(component_uuid(f"{PROJECT_KEY}:{path}"))


def count_rows(database):
    return database.conn.execute("SELECT COUNT(*) FROM file_sources").fetchone()[0]


class TestScenarios:
    def test_unchanged_file_is_not_written(self, new_report, database, clock):
        """Scenario A: three plain lines already stored with the same hashes."""
        report = new_report()
        report.add_file("a.txt", "one\ntwo\nthree")
        reader = report.build()
        run_step(reader, database, clock)
        changes_before = database.conn.total_changes

        clock.advance(5_000)
        stats = run_step(reader, database, clock)

        assert (stats.inserted, stats.updated, stats.skipped) == (0, 0, 1)
        assert database.conn.total_changes == changes_before
        assert stored(database, "a.txt").updated_at == 1_000

    def test_new_file_is_inserted(self, new_report, database, clock):
        """Scenario B: five lines, nothing stored yet."""
        report = new_report()
        report.add_file("b.py", "a\nb\nc\nd\ne")

        stats = run_step(report.build(), database, clock)

        assert (stats.inserted, stats.updated, stats.skipped) == (1, 0, 0)
        dto = stored(database, "b.py")
        assert len(dto.line_hashes) == 5
        assert dto.created_at == dto.updated_at == 1_000
        assert dto.src_hash == md5_hex("a\nb\nc\nd\ne")
        assert dto.data_hash == md5_hex(dto.binary_data)
        assert dto.revision is None

    def test_new_revision_alone_updates(self, new_report, database, clock):
        """Scenario C: same text, the SCM revision moves from abc123 to def456."""
        first = new_report()
        first.add_file("c.py", "x = 1\ny = 2", changesets=[Changeset(10, "ann", "abc123")] * 2)
        run_step(first.build(), database, clock)
        previous = stored(database, "c.py")
        assert previous.revision == "abc123"

        clock.set_now(2_000)
        second = new_report()
        second.add_file("c.py", "x = 1\ny = 2", changesets=[Changeset(10, "ann", "def456")] * 2)
        stats = run_step(second.build(), database, clock)

        assert (stats.inserted, stats.updated) == (0, 1)
        dto = stored(database, "c.py")
        assert dto.revision == "def456"
        assert dto.src_hash == previous.src_hash
        assert (dto.created_at, dto.updated_at) == (1_000, 2_000)


class TestIncrementalPersistence:
    def test_second_run_writes_nothing(self, new_report, database, clock):
        report = new_report()
        report.add_file(
            "a.py",
            "def f():\n    return 1\n",
            coverage=[LineCoverage(1, hits=True), LineCoverage(2, hits=False)],
            highlighting=[SyntaxHighlightingRule(TextRange(1, 0, 1, 3), HighlightingType.KEYWORD)],
            changesets=[Changeset(10, "ann", "r1"), Changeset(20, "bob", "r2")],
        )
        report.add_file("b.txt", "")
        reader = report.build()

        first = run_step(reader, database, clock)
        changes = database.conn.total_changes
        second = run_step(reader, database, clock)

        assert (first.inserted, second.inserted, second.updated, second.skipped) == (2, 0, 0, 2)
        assert database.conn.total_changes == changes

    def test_changed_metadata_updates_and_keeps_created(self, new_report, database, clock):
        first = new_report()
        first.add_file("a.py", "a\nb")
        run_step(first.build(), database, clock)
        before = stored(database, "a.py")

        clock.set_now(9_000)
        second = new_report()
        second.add_file("a.py", "a\nb", coverage=[LineCoverage(2, hits=True)])
        stats = run_step(second.build(), database, clock)

        after = stored(database, "a.py")
        assert stats.updated == 1
        assert after.data_hash != before.data_hash
        assert after.src_hash == before.src_hash
        assert (after.created_at, after.updated_at) == (1_000, 9_000)

    def test_line_hash_version_change_alone_updates(self, new_report, database, clock):
        """Significant code showing up changes the line hash algorithm, which is written."""
        first = new_report()
        first.add_file("a.py", "x = 1")
        run_step(first.build(), database, clock)

        second = new_report()
        second.add_file("a.py", "x = 1", significant_code=[LineSignificantCode(1, 0, 5)])
        stats = run_step(second.build(), database, clock)

        assert stats.updated == 1
        dto = stored(database, "a.py")
        assert dto.line_hashes_version == 1
        assert dto.line_hashes == (md5_hex("x=1"),)

    def test_records_of_other_data_types_ignored(self, new_report, database, clock):
        report = new_report()
        report.add_file("a.py", "x")
        reader = report.build()
        run_step(reader, database, clock)
        dto = stored(database, "a.py")
        database.conn.execute(
            "UPDATE file_sources SET data_type = ? WHERE file_uuid = ?", (DATA_TYPE_TEST, dto.file_uuid)
        )
        database.commit()

        stats = run_step(reader, database, clock)

        assert stats.inserted == 1
        assert count_rows(database) == 2

    def test_empty_file_produces_empty_record(self, new_report, database, clock):
        report = new_report()
        report.add_file("empty.txt", "")
        run_step(report.build(), database, clock)

        dto = stored(database, "empty.txt")
        assert dto.line_hashes == ()
        assert decode_source_data(dto.binary_data) == []


class TestMergedData:
    def test_lines_carry_every_kind_of_metadata(self, new_report, database, clock):
        report = new_report()
        report.add_file(
            "a.py",
            "def f():\n    return 1",
            coverage=[LineCoverage(2, hits=True)],
            highlighting=[SyntaxHighlightingRule(TextRange(1, 0, 1, 3), HighlightingType.KEYWORD)],
            changesets=[Changeset(10, "ann", "r1"), Changeset(20, "bob", "r2")],
            duplications=[Duplication(TextBlock(1, 2), (Duplicate(TextBlock(5, 6), "proj:b.py"),))],
        )
        run_step(report.build(), database, clock)

        lines = decode_source_data(stored(database, "a.py").binary_data)
        assert lines == [
            {
                "line": 1,
                "source": "def f():",
                "scm_author": "ann",
                "scm_date": 10,
                "scm_revision": "r1",
                "highlighting": "0,3,k",
                "duplication": [1],
            },
            {
                "line": 2,
                "source": "    return 1",
                "line_hits": 1,
                "scm_author": "bob",
                "scm_date": 20,
                "scm_revision": "r2",
                "duplication": [1],
            },
        ]

    def test_revision_is_latest_changeset_with_revision(self, new_report, database, clock):
        report = new_report()
        report.add_file(
            "a.py",
            "a\nb\nc",
            changesets=[Changeset(300, "ann", "newest"), Changeset(100, "bob", "old"), Changeset(900, "eve")],
        )
        run_step(report.build(), database, clock)
        assert stored(database, "a.py").revision == "newest"

    def test_bad_highlighting_does_not_fail_the_file(self, new_report, database, clock):
        report = new_report()
        report.add_file(
            "a.py",
            "ab",
            highlighting=[SyntaxHighlightingRule(TextRange(1, 0, 1, 30), HighlightingType.KEYWORD)],
        )
        stats = run_step(report.build(), database, clock)

        assert stats.inserted == 1
        assert "highlighting" not in decode_source_data(stored(database, "a.py").binary_data)[0]


class TestFailures:
    def test_failure_names_the_file_and_keeps_earlier_commits(self, new_report, database, clock):
        report = new_report()
        report.add_file("ok.py", "fine")
        report.add_file("broken.py", None)
        report.add_file("never.py", "not reached")

        with pytest.raises(PersistSourcesError) as excinfo:
            run_step(report.build(), database, clock)

        assert excinfo.value.file_key == "proj:broken.py"
        assert str(excinfo.value) == "Cannot persist sources of proj:broken.py"
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)
        assert stored(database, "ok.py") is not None
        assert stored(database, "never.py") is None
        assert not database.conn.in_transaction

    def test_malformed_stream_aborts(self, new_report, database, clock):
        report = new_report()
        ref = report.add_file("a.py", "x")
        reader = report.build()
        (report.report_dir / f"coverages-{ref}.jsonl").write_text("{broken\n")

        with pytest.raises(PersistSourcesError, match="proj:a.py"):
            run_step(reader, database, clock)
        assert count_rows(database) == 0
