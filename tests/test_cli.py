"""
CLI tests: argument validation, listing output and safe deletion.
The trash is always mocked: these tests must never remove real files.
"""
import sys
import pytest
from pathlib import Path
from unittest import mock

from pdfdupes.cli import CLIApplication, main
from pdfdupes.services.file_service import FileService
from conftest import write_file, write_raw_name, patterned


def run_cli(argv):
    CLIApplication().run(argv)


@pytest.fixture
def dated_duplicates(tmp_path):
    content = patterned(9000, seed=11)
    return {
        "root": tmp_path,
        "old": write_file(tmp_path / "old.pdf", content, mtime_ms=1_000_000_000_000).resolve(),
        "mid": write_file(tmp_path / "sub" / "mid.pdf", content, mtime_ms=1_100_000_000_000).resolve(),
        "new": write_file(tmp_path / "new.pdf", content, mtime_ms=1_200_000_000_000).resolve(),
    }


class TestArgumentValidation:
    def test_input_is_required(self):
        with pytest.raises(SystemExit) as exc:
            run_cli([])
        assert exc.value.code == 2

    def test_list_and_keep_are_exclusive(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            run_cli(["-i", str(tmp_path), "--list", "--keep", "newest"])
        assert exc.value.code == 2

    def test_invalid_keep_choice(self, tmp_path):
        with pytest.raises(SystemExit):
            run_cli(["-i", str(tmp_path), "--keep", "largest"])

    def test_force_requires_keep(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(["-i", str(tmp_path), "--force"])
        assert exc.value.code == 1
        assert "--force can only be used with --keep" in capsys.readouterr().err

    def test_missing_directory(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(["-i", str(tmp_path / "missing")])
        assert exc.value.code == 1
        assert "Directory not found" in capsys.readouterr().err

    def test_file_instead_of_directory(self, tmp_path, capsys):
        f = write_file(tmp_path / "doc.pdf", b"x")
        with pytest.raises(SystemExit) as exc:
            run_cli(["-i", str(f)])
        assert exc.value.code == 1
        assert "Path is not a directory" in capsys.readouterr().err

    def test_keep_without_force_needs_terminal(self, dated_duplicates):
        """Pytest has no TTY, so the interactive prompt must be refused up front."""
        with mock.patch.object(FileService, "move_to_trash") as trash:
            with pytest.raises(SystemExit) as exc:
                run_cli(["-i", str(dated_duplicates["root"]), "--keep", "newest"])
        assert exc.value.code == 1
        trash.assert_not_called()


class TestListing:
    def test_list_prints_one_path_per_line(self, pdf_tree, capsys):
        run_cli(["-i", str(pdf_tree["root"]), "--list"])
        out = capsys.readouterr()
        listed = sorted(Path(line).name for line in out.out.splitlines() if line)
        assert listed == ["a.pdf", "a_copy.PDF", "b.pdf", "c.pdf", "unique.pdf"]
        assert "Found 5 PDF files" in out.err

    def test_list_info_prints_size_and_time(self, tmp_path, capsys):
        write_file(tmp_path / "doc.pdf", b"x" * 2048, mtime_ms=1_600_000_000_000)
        run_cli(["-i", str(tmp_path), "--list-info"])
        line = capsys.readouterr().out.splitlines()[0]
        path, size, modified = line.split("\t")
        assert Path(path).name == "doc.pdf"
        assert size == "2.00KB"
        assert modified != "unknown"

    def test_quiet_list_has_no_summary(self, pdf_tree, capsys):
        run_cli(["-i", str(pdf_tree["root"]), "--list", "-q"])
        assert capsys.readouterr().err == ""

    @pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts arbitrary bytes in names")
    def test_list_survives_non_utf8_name(self, tmp_path, capsys):
        write_raw_name(tmp_path, b"\xff.pdf", b"x")
        write_file(tmp_path / "good.pdf", b"y")
        run_cli(["-i", str(tmp_path), "--list"])
        out = capsys.readouterr()
        assert [Path(line).name for line in out.out.splitlines() if line] == ["good.pdf"]
        assert "Found 1 PDF files" in out.err


class TestDuplicateReport:
    def test_reports_groups(self, pdf_tree, capsys):
        run_cli(["-i", str(pdf_tree["root"])])
        out = capsys.readouterr().out
        assert "Found 1 duplicate groups (3 files)" in out
        assert "a_copy.PDF" in out
        assert "a_trashed.pdf" not in out

    def test_no_duplicates(self, tmp_path, capsys):
        write_file(tmp_path / "only.pdf", b"x")
        run_cli(["-i", str(tmp_path)])
        assert "No duplicate groups found." in capsys.readouterr().out

    @pytest.mark.skipif(sys.platform != "linux", reason="needs a filesystem that accepts arbitrary bytes in names")
    def test_report_survives_non_utf8_names(self, tmp_path, capsys):
        content = patterned(9000, seed=12)
        write_raw_name(tmp_path, b"\xff1.pdf", content)
        write_raw_name(tmp_path, b"\xff2.pdf", content)
        write_file(tmp_path / "a.pdf", content)
        write_file(tmp_path / "b.pdf", content)
        run_cli(["-i", str(tmp_path)])
        assert "Found 1 duplicate groups (2 files)" in capsys.readouterr().out

    def test_verbose_prints_statistics(self, pdf_tree, capsys):
        run_cli(["-i", str(pdf_tree["root"]), "-v"])
        assert "Deduplication Statistics:" in capsys.readouterr().out

    def test_report_never_deletes(self, pdf_tree):
        with mock.patch.object(FileService, "move_to_trash") as trash:
            run_cli(["-i", str(pdf_tree["root"])])
        trash.assert_not_called()


class TestKeep:
    def test_keep_newest_trashes_older_copies(self, dated_duplicates):
        with mock.patch.object(FileService, "move_to_trash") as trash:
            run_cli(["-i", str(dated_duplicates["root"]), "--keep", "newest", "--force"])
        deleted = {str(call.args[0]) for call in trash.call_args_list}
        assert deleted == {str(dated_duplicates["old"]), str(dated_duplicates["mid"])}

    def test_keep_oldest_trashes_newer_copies(self, dated_duplicates):
        with mock.patch.object(FileService, "move_to_trash") as trash:
            run_cli(["-i", str(dated_duplicates["root"]), "--keep", "oldest", "--force"])
        deleted = {str(call.args[0]) for call in trash.call_args_list}
        assert deleted == {str(dated_duplicates["new"]), str(dated_duplicates["mid"])}

    def test_preview_and_summary_are_printed(self, dated_duplicates, capsys):
        with mock.patch.object(FileService, "move_to_trash"):
            run_cli(["-i", str(dated_duplicates["root"]), "--keep", "newest", "--force"])
        out = capsys.readouterr().out
        assert f"[KEEP] {dated_duplicates['new']}" in out
        assert "2 files deleted" in out
        assert "Successfully moved 2 files to trash." in out

    def test_failed_deletion_is_reported_and_others_continue(self, dated_duplicates, capsys):
        def flaky(path):
            if path.endswith("mid.pdf"):
                raise RuntimeError("Failed to move to trash: permission denied")

        with mock.patch.object(FileService, "move_to_trash", side_effect=flaky) as trash:
            run_cli(["-i", str(dated_duplicates["root"]), "--keep", "newest", "--force"])
        assert trash.call_count == 2
        assert "Partial success: 1/2" in capsys.readouterr().out

    def test_no_duplicates_nothing_deleted(self, tmp_path, capsys):
        write_file(tmp_path / "only.pdf", b"x")
        with mock.patch.object(FileService, "move_to_trash") as trash:
            run_cli(["-i", str(tmp_path), "--keep", "newest", "--force"])
        trash.assert_not_called()
        assert "No duplicate groups found." in capsys.readouterr().out


class TestMain:
    def test_keyboard_interrupt_exits_130(self):
        with mock.patch.object(CLIApplication, "run", side_effect=KeyboardInterrupt):
            with pytest.raises(SystemExit) as exc:
                main()
        assert exc.value.code == 130

    def test_unexpected_error_exits_1(self, capsys, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        with mock.patch.object(CLIApplication, "run", side_effect=ValueError("boom")):
            with pytest.raises(SystemExit) as exc:
                main()
        assert exc.value.code == 1
        assert "Unexpected error: boom" in capsys.readouterr().err

    def test_main_reads_sys_argv(self, pdf_tree, capsys):
        with mock.patch.object(sys, "argv", ["pdfdupes", "-i", str(pdf_tree["root"]), "--list", "-q"]):
            main()
        assert len([line for line in capsys.readouterr().out.splitlines() if line]) == 5
