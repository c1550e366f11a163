"""Tests for auto_tune_ceph.utils.commands - running external tools."""

import subprocess

import pytest

from auto_tune_ceph.core.errors import CommandError
from auto_tune_ceph.utils import commands
from auto_tune_ceph.utils.commands import run_command


def fake_run(returncode=0, stdout="", stderr="", raises=None):
    calls = []

    def run(cmd, **kwargs):
        calls.append((cmd, kwargs))
        if raises is not None:
            raise raises
        return subprocess.CompletedProcess(cmd, returncode, stdout=stdout, stderr=stderr)

    run.calls = calls
    return run


def test_returns_stdout(monkeypatch):
    run = fake_run(stdout="8\n")
    monkeypatch.setattr(commands.subprocess, "run", run)
    assert run_command("/usr/bin/ceph", ["config", "get", "osd.0", "x"], timeout=5) == "8\n"
    cmd, kwargs = run.calls[0]
    assert cmd == ["/usr/bin/ceph", "config", "get", "osd.0", "x"]
    assert kwargs["timeout"] == 5
    assert kwargs["capture_output"] is True


def test_exit_status_22_is_tolerated(monkeypatch):
    monkeypatch.setattr(commands.subprocess, "run", fake_run(returncode=22, stdout="partial"))
    assert run_command("/usr/bin/ceph", ["config", "get"]) == "partial"


def test_other_exit_status_raises(monkeypatch):
    monkeypatch.setattr(
        commands.subprocess, "run", fake_run(returncode=1, stdout="out", stderr="Error EPERM")
    )
    with pytest.raises(CommandError, match="exit status 1") as excinfo:
        run_command("/usr/bin/ceph", ["osd", "pool", "delete"])
    assert excinfo.value.returncode == 1
    assert excinfo.value.output == "out"
    assert "EPERM" in str(excinfo.value)


def test_missing_binary(monkeypatch):
    monkeypatch.setattr(commands.subprocess, "run", fake_run(raises=FileNotFoundError()))
    with pytest.raises(CommandError, match="Command not found"):
        run_command("/nope/ceph", [])


def test_timeout(monkeypatch):
    monkeypatch.setattr(
        commands.subprocess, "run", fake_run(raises=subprocess.TimeoutExpired("rados", 1))
    )
    with pytest.raises(CommandError, match="timed out"):
        run_command("/usr/bin/rados", ["bench"], timeout=1)
