# kswitch/selection.py

import logging
import os
import shlex
import subprocess
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Optional, Protocol, Sequence

from kswitch.errors import SelectionFailed

logger = logging.getLogger(__name__)

MARKER = " *"

FZF_ENV = "KSWITCH_FZF"
FZF_OPTS_ENV = "KSWITCH_FZF_OPTS"
DEFAULT_FZF = "fzf"
DEFAULT_FZF_OPTS = ["--height", "40%", "--reverse"]

# fzf exit codes
FZF_NO_MATCH = 1
FZF_INTERRUPTED = 130


# ---------------- Outcome ---------------- #

class Outcome(Enum):
    CHOSEN = "chosen"
    EMPTY = "empty"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SelectionResult:
    outcome: Outcome
    label: str = ""

    @classmethod
    def chosen(cls, label: str) -> "SelectionResult":
        return cls(Outcome.CHOSEN, label)

    @classmethod
    def empty(cls) -> "SelectionResult":
        return cls(Outcome.EMPTY)

    @classmethod
    def cancelled(cls) -> "SelectionResult":
        return cls(Outcome.CANCELLED)


# ---------------- Marking ---------------- #

def mark_candidates(candidates: Sequence[str], current: Optional[str]) -> list[str]:
    """Append the marker to the candidate equal to `current`; order is kept."""
    return [
        f"{label}{MARKER}" if current is not None and label == current else label
        for label in candidates
    ]


def strip_marker(label: str) -> str:
    if label.endswith(MARKER):
        return label[: -len(MARKER)]
    return label


# ---------------- Choosers ---------------- #

class Chooser(Protocol):
    def choose(self, labels: Sequence[str]) -> Optional[str]:
        """
        Block until the user picks a line.

        Returns the chosen line, "" when nothing was picked, None on abort.
        """


class FzfChooser:
    """Runs fzf with the labels on stdin and reads the chosen line from stdout."""

    def __init__(self, binary: str = DEFAULT_FZF, options: Optional[Sequence[str]] = None):
        self.binary = binary
        self.options = list(DEFAULT_FZF_OPTS if options is None else options)

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "FzfChooser":
        binary = env.get(FZF_ENV) or DEFAULT_FZF
        raw_opts = env.get(FZF_OPTS_ENV)
        options = shlex.split(raw_opts) if raw_opts else None
        return cls(binary=binary, options=options)

    def choose(self, labels: Sequence[str]) -> Optional[str]:
        command = [self.binary, *self.options]
        logger.debug(f"Running picker: {shlex.join(command)} with {len(labels)} candidate(s)")

        # stderr is left attached to the terminal; fzf draws its UI there
        try:
            result = subprocess.run(
                command,
                input="\n".join(labels),
                stdout=subprocess.PIPE,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise SelectionFailed(
                f"'{self.binary}' not found; install fzf or set {FZF_ENV}"
            ) from e

        if result.returncode == 0:
            return result.stdout.rstrip("\n")
        if result.returncode == FZF_NO_MATCH:
            return ""
        if result.returncode == FZF_INTERRUPTED:
            return None
        raise SelectionFailed(f"{self.binary} exited with status {result.returncode}")


# ---------------- Protocol ---------------- #

def select(
    candidates: Sequence[str],
    chooser: Chooser,
    current: Optional[str] = None,
) -> SelectionResult:
    """
    Ask the user to pick one of `candidates`, marking `current` with " *".

    The returned label never carries the marker. An empty label is
    reported as Outcome.EMPTY, an abort as Outcome.CANCELLED.
    """
    picked = chooser.choose(mark_candidates(candidates, current))
    if picked is None:
        logger.debug("Picker aborted")
        return SelectionResult.cancelled()

    label = strip_marker(picked)
    if not label:
        return SelectionResult.empty()
    return SelectionResult.chosen(label)
