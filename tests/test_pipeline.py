"""
Tests for the file-processing pipeline stage.
"""

import io
from pathlib import Path

from rich.console import Console

from sass_dependents.pipeline import DependentPartials, FileRecord, create_records

from conftest import write_files


def make_stage(root: Path):
    output = io.StringIO()
    console = Console(file=output, width=200)
    stage = DependentPartials(base_dir=str(root), console=console)
    return stage, output


class TestFileRecord:
    def test_from_path_reads_contents(self, temp_dir: Path):
        write_files(temp_dir, {"a.scss": "body {}\n"})
        record = FileRecord.from_path(temp_dir / "a.scss", base=temp_dir)
        assert record.contents == b"body {}\n"
        assert record.relative == "a.scss"
        assert not record.is_null

    def test_create_records(self, temp_dir: Path):
        write_files(temp_dir, {"a.scss": "", "b.scss": ""})
        records = create_records([str(temp_dir / "a.scss"), str(temp_dir / "b.scss")], base=temp_dir)
        assert [r.relative for r in records] == ["a.scss", "b.scss"]


class TestDependentPartials:
    """Tests for re-emitting dependents of changed partials."""

    def test_defaults(self):
        stage = DependentPartials()
        assert stage.base_dir == "./"
        assert stage.load_paths == ["./"]

    def test_single_load_path_accepted(self, temp_dir: Path):
        stage = DependentPartials(base_dir=str(temp_dir), load_paths=str(temp_dir))
        assert stage.load_paths == [str(temp_dir)]

    def test_null_record_passes_through(self, temp_dir: Path):
        stage, output = make_stage(temp_dir)
        record = FileRecord(path=str(temp_dir / "dir"), base=str(temp_dir))
        assert stage.process(record) == [record]
        assert stage.graph is None
        assert output.getvalue() == ""

    def test_partial_emits_dependents_first(self, stylesheet_tree: Path):
        stage, output = make_stage(stylesheet_tree)
        record = FileRecord.from_path(stylesheet_tree / "_variables.scss", base=stylesheet_tree)

        emitted = stage.process(record)

        assert [r.path for r in emitted] == [
            str(stylesheet_tree / "main.scss"),
            str(stylesheet_tree / "print.scss"),
            str(stylesheet_tree / "theme.sass"),
            str(stylesheet_tree / "_variables.scss"),
        ]
        assert emitted[-1] is record
        assert emitted[0].contents == (stylesheet_tree / "main.scss").read_bytes()

        text = output.getvalue()
        assert "Generating SASS files graph..." in text
        assert "SASS graph is ready." in text
        assert text.count("Push file to stream") == 3

    def test_non_partial_passes_alone(self, stylesheet_tree: Path):
        stage, output = make_stage(stylesheet_tree)
        record = FileRecord.from_path(stylesheet_tree / "main.scss", base=stylesheet_tree)
        assert stage.process(record) == [record]
        assert "Push file to stream" not in output.getvalue()

    def test_graph_built_once_then_refreshed(self, stylesheet_tree: Path):
        stage, output = make_stage(stylesheet_tree)
        stage.process(FileRecord.from_path(stylesheet_tree / "main.scss"))
        graph = stage.graph

        write_files(stylesheet_tree, {"print.scss": '@import "mixins";\n'})
        emitted = stage([FileRecord.from_path(stylesheet_tree / "print.scss")])
        assert stage.graph is graph
        assert output.getvalue().count("Generating SASS files graph...") == 1

        emitted = stage.process(FileRecord.from_path(stylesheet_tree / "_mixins.scss"))
        assert [r.path for r in emitted[:-1]] == [
            str(stylesheet_tree / "main.scss"),
            str(stylesheet_tree / "print.scss"),
        ]
