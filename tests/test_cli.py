"""Tests for auto_tune_ceph.cli.main - command-line interface."""

import json

from typer.testing import CliRunner

from auto_tune_ceph.cli import main as cli
from auto_tune_ceph.core.errors import BenchmarkError

runner = CliRunner()

CATALOG = """\
- name: cache_size
  type: int
  min: 100
  max: 200
"""


def write_catalog(tmp_path, text=CATALOG):
    path = tmp_path / "options.yaml"
    path.write_text(text)
    return path


def patch_control(monkeypatch, fake_control, **kwargs):
    created = []

    def factory(cluster, benchmark):
        control = fake_control(**kwargs)
        control.benchmark_config = benchmark
        created.append(control)
        return control

    monkeypatch.setattr(cli, "CephControlSurface", factory)
    return created


def test_validate_ok(tmp_path):
    result = runner.invoke(cli.app, ["validate", "--conf", str(write_catalog(tmp_path))])
    assert result.exit_code == 0
    assert "Configuration is valid" in result.output
    assert "cache_size" in result.output


def test_validate_empty_catalog(tmp_path):
    result = runner.invoke(cli.app, ["validate", "--conf", str(write_catalog(tmp_path, "[]"))])
    assert result.exit_code == 1
    assert "at least one config option" in result.output


def test_optimize_runs_search(tmp_path, monkeypatch, fake_control):
    created = patch_control(monkeypatch, fake_control, scores=[50])
    output = tmp_path / "best.json"
    result = runner.invoke(
        cli.app,
        [
            "optimize", "--conf", str(write_catalog(tmp_path)),
            "--timeout", "3", "--conf-sleep", "0", "--bench-time", "5",
            "--seed", "3", "--output", str(output), "--log-file", str(tmp_path / "debug.log"),
        ],
    )
    assert result.exit_code == 0, result.output
    control = created[0]
    assert control.benchmarks == 3
    assert control.benchmark_config.seconds == 5
    data = json.loads(output.read_text())
    assert data["highest_score"] == 50
    assert data["trials"] == 3
    assert [entry["name"] for entry in data["best_config"]] == ["cache_size"]
    assert (tmp_path / "debug.log").exists()


def test_optimize_empty_catalog_never_touches_cluster(tmp_path, monkeypatch, fake_control):
    created = patch_control(monkeypatch, fake_control)
    result = runner.invoke(cli.app, ["optimize", "--conf", str(write_catalog(tmp_path, "[]"))])
    assert result.exit_code == 1
    assert created == []


def test_optimize_benchmark_failure(tmp_path, monkeypatch, fake_control):
    created = patch_control(monkeypatch, fake_control, scores=[BenchmarkError("no score")])
    result = runner.invoke(
        cli.app,
        [
            "optimize", "--conf", str(write_catalog(tmp_path)), "--conf-sleep", "0",
            "--log-file", str(tmp_path / "debug.log"),
        ],
    )
    assert result.exit_code == 1
    assert "Optimization aborted" in result.output
    assert created[0].calls[-1] == ("destroy_pool",)


def test_check_env_reports_missing_binaries(tmp_path):
    path = write_catalog(
        tmp_path,
        "options: [{name: x, type: bool}]\n"
        "cluster: {ceph_binary: /nonexistent/ceph, rados_binary: /nonexistent/rados}\n",
    )
    result = runner.invoke(cli.app, ["check-env", "--conf", str(path)])
    assert result.exit_code == 1
    assert "Missing commands" in result.output
