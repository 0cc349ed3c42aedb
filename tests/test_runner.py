# tests/test_runner.py
"""
Tests for the run orchestrator: per-file isolation, de-duplication across
configurations, dump generation and result merging.
"""

import sys
from pathlib import Path

import pytest

import ptrcmp.loader as loader
import ptrcmp.runner as runner_mod
from ptrcmp.config import AnalysisConfig
from ptrcmp.errors import DumpGenerationError
from ptrcmp.loader import DumpFile
from ptrcmp.runner import RunResult, Runner, scan_dump
from tests.conftest import (
    compare,
    deref,
    fake_cppcheckdata,
    layout,
    make_cfg,
    make_data,
    ptr,
    var,
)


def _unit(file, n_hits=1, name=""):
    """A configuration with ``n_hits`` basic-pointer comparisons."""
    stmts = [
        compare("==", var("a", ptr("int")), var("b", ptr("int")))
        for _ in range(n_hits)
    ]
    stmts.append(compare("==", deref(var("a", ptr("int"))), deref(var("b", ptr("int")))))
    return make_cfg(layout(*stmts, file=file), name=name)


@pytest.fixture
def dumps(tmp_path, monkeypatch):
    """Write empty dump files and serve mock data for them."""
    table = {}

    def add(name, *cfgs):
        path = tmp_path / name
        path.write_text("<dumps/>")
        if cfgs:
            table[str(path)] = make_data(list(cfgs))
        return path

    monkeypatch.setattr(loader, "_cppcheckdata", fake_cppcheckdata(table))
    return add


class TestScanDump:

    def test_deduplicates_across_configurations(self):
        dump = DumpFile(Path("a.c.dump"), [_unit("a.c", name="A"), _unit("a.c", name="B")])
        diags = scan_dump(dump)
        assert len(diags) == 1

    def test_keeps_distinct_findings_in_order(self):
        dump = DumpFile(Path("a.c.dump"), [_unit("a.c", n_hits=2), _unit("a.c", n_hits=3)])
        assert [d.line for d in scan_dump(dump)] == [1, 2, 3]

    def test_no_configurations(self):
        assert scan_dump(DumpFile(Path("empty.dump"))) == []


class TestRunner:

    def test_merges_in_input_order(self, dumps):
        a = dumps("a.c.dump", _unit("a.c", n_hits=2))
        b = dumps("b.c.dump", _unit("b.c", n_hits=1))
        result = Runner().run([b, a])
        assert [d.file for d in result.diagnostics] == ["b.c", "a.c", "a.c"]
        assert result.files_scanned == 2
        assert result.exit_code == 1

    def test_clean_run(self, dumps):
        a = dumps("a.c.dump", _unit("a.c", n_hits=0))
        result = Runner().run([a])
        assert result.diagnostics == []
        assert result.exit_code == 0

    def test_bad_file_does_not_abort_run(self, dumps):
        bad = dumps("bad.c.dump")
        good = dumps("good.c.dump", _unit("good.c"))
        result = Runner().run([bad, good])
        assert len(result.diagnostics) == 1
        assert result.files_scanned == 1
        assert list(result.failures) == [str(bad)]
        assert "cannot parse dump" in result.failures[str(bad)]

    def test_broken_cppcheckdata_is_recorded_per_file(self, tmp_path, monkeypatch):
        addons = tmp_path / "addons"
        addons.mkdir()
        (addons / "cppcheckdata.py").write_text("import no_such_module_for_ptrcmp\n")
        monkeypatch.setitem(sys.modules, "cppcheckdata", None)
        monkeypatch.setenv("CPPCHECK_ADDONS_DIR", str(addons))
        a = tmp_path / "a.c.dump"
        a.write_text("<dumps/>")
        result = Runner().run([a])
        assert result.files_scanned == 0
        assert "cannot load cppcheckdata" in result.failures[str(a)]

    def test_sources_skipped_without_generation(self, tmp_path, dumps):
        (tmp_path / "a.c").write_text("int x;\n")
        result = Runner().run([tmp_path])
        assert result.files_scanned == 0
        assert result.failures == {}

    def test_unknown_file_kind_skipped(self, tmp_path):
        notes = tmp_path / "notes.txt"
        notes.write_text("")
        result = Runner().run([notes])
        assert result.files_scanned == 0

    def test_generates_dumps_for_sources(self, tmp_path, dumps, monkeypatch):
        source = tmp_path / "a.c"
        source.write_text("int x;\n")
        calls = []

        def fake_generate(path, cppcheck, timeout, extra_args):
            calls.append((Path(path), cppcheck, tuple(extra_args)))
            return dumps("a.c.dump", _unit("a.c"))

        monkeypatch.setattr(runner_mod, "generate_dump", fake_generate)
        config = AnalysisConfig(generate_dumps=True, cppcheck="cc", cppcheck_args=("-q",))
        result = Runner(config).run([source])
        assert calls == [(source, "cc", ("-q",))]
        assert len(result.diagnostics) == 1

    def test_source_and_its_dump_scanned_once(self, tmp_path, dumps, monkeypatch):
        (tmp_path / "a.c").write_text("int x;\n")
        dumps("a.c.dump", _unit("a.c"))

        def fake_generate(path, **kwargs):
            return loader.dump_path_for(path)

        monkeypatch.setattr(runner_mod, "generate_dump", fake_generate)
        result = Runner(AnalysisConfig(generate_dumps=True)).run([tmp_path])
        assert result.files_scanned == 1
        assert len(result.diagnostics) == 1

    def test_generation_failure_recorded(self, tmp_path, monkeypatch):
        source = tmp_path / "a.c"
        source.write_text("int x;\n")

        def fake_generate(path, **kwargs):
            raise DumpGenerationError("cppcheck exited with status 1", path)

        monkeypatch.setattr(runner_mod, "generate_dump", fake_generate)
        result = Runner(AnalysisConfig(generate_dumps=True)).run([source])
        assert result.failures == {str(source): "cppcheck exited with status 1"}

    def test_parallel_jobs_keep_order(self, dumps):
        paths = [dumps(f"f{i}.c.dump", _unit(f"f{i}.c")) for i in range(6)]
        result = Runner(AnalysisConfig(jobs=3)).run(paths)
        assert [d.file for d in result.diagnostics] == [f"f{i}.c" for i in range(6)]


class TestRunResult:

    def test_summary(self, dumps):
        bad = dumps("bad.c.dump")
        good = dumps("good.c.dump", _unit("good.c", n_hits=2))
        summary = Runner().run([good, bad]).summary()
        assert summary.startswith("Scanned 1 files: 2 pointer comparisons found")
        assert f"skipped {bad}" in summary

    def test_empty(self):
        result = RunResult()
        assert result.exit_code == 0
        assert result.files_scanned == 0
