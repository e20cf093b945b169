import subprocess

import pytest

from kswitch.errors import SelectionFailed
from kswitch.selection import (
    FzfChooser,
    Outcome,
    SelectionResult,
    mark_candidates,
    select,
    strip_marker,
)
from tests.conftest import FakeChooser


# ---------------- Marking ---------------- #

def test_only_current_is_marked():
    assert mark_candidates(["a", "b", "c"], "b") == ["a", "b *", "c"]


def test_nothing_marked_without_current():
    assert mark_candidates(["a", "b"], None) == ["a", "b"]
    assert mark_candidates(["a", "b"], "z") == ["a", "b"]


def test_strip_marker_restores_name():
    for name in ["ctx1", "with space", ""]:
        assert strip_marker(f"{name} *") == name
    assert strip_marker("plain") == "plain"
    assert strip_marker("double * *") == "double *"


# ---------------- select ---------------- #

def test_select_returns_unmarked_choice():
    chooser = FakeChooser("ctx1 *")
    result = select(["ctx1", "ctx2"], chooser, current="ctx1")

    assert result == SelectionResult.chosen("ctx1")
    assert chooser.calls == [["ctx1 *", "ctx2"]]


def test_select_abort_is_cancelled():
    result = select(["ctx1"], FakeChooser(None))
    assert result.outcome is Outcome.CANCELLED


@pytest.mark.parametrize("answer", ["", " *"])
def test_select_empty_label_is_not_cancellation(answer):
    result = select(["a"], FakeChooser(answer))
    assert result.outcome is Outcome.EMPTY
    assert result.label == ""


# ---------------- fzf ---------------- #

class _Completed:
    def __init__(self, returncode, stdout=""):
        self.returncode = returncode
        self.stdout = stdout


@pytest.fixture
def fake_run(monkeypatch):
    calls = []

    def install(returncode, stdout=""):
        def run(command, **kwargs):
            calls.append((command, kwargs))
            return _Completed(returncode, stdout)

        monkeypatch.setattr(subprocess, "run", run)
        return calls

    return install


def test_fzf_returns_chosen_line(fake_run):
    calls = fake_run(0, "ns-b\n")
    assert FzfChooser().choose(["ns-a *", "ns-b"]) == "ns-b"

    command, kwargs = calls[0]
    assert command == ["fzf", "--height", "40%", "--reverse"]
    assert kwargs["input"] == "ns-a *\nns-b"


def test_fzf_no_match_is_empty(fake_run):
    fake_run(1)
    assert FzfChooser().choose(["a"]) == ""


def test_fzf_interrupt_is_abort(fake_run):
    fake_run(130)
    assert FzfChooser().choose(["a"]) is None


def test_fzf_other_failure(fake_run):
    fake_run(2)
    with pytest.raises(SelectionFailed):
        FzfChooser().choose(["a"])


def test_fzf_missing_binary(monkeypatch):
    def run(command, **kwargs):
        raise FileNotFoundError(command[0])

    monkeypatch.setattr(subprocess, "run", run)
    with pytest.raises(SelectionFailed, match="sk"):
        FzfChooser(binary="sk").choose(["a"])


def test_fzf_from_env():
    chooser = FzfChooser.from_env({"KSWITCH_FZF": "/opt/fzf", "KSWITCH_FZF_OPTS": "--height '50%' --no-sort"})
    assert chooser.binary == "/opt/fzf"
    assert chooser.options == ["--height", "50%", "--no-sort"]

    default = FzfChooser.from_env({})
    assert default.binary == "fzf"
    assert default.options == ["--height", "40%", "--reverse"]
