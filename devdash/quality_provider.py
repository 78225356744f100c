"""Local code quality figures from cargo."""

from __future__ import annotations

import json
import os
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from devdash.models import QualityMetrics

_CLIPPY = ("cargo", "clippy", "--message-format=json", "-q")
_TEST = ("cargo", "test", "--", "--format=terse")
_NUMBER = re.compile(r"\+?[0-9]+")


def cargo_path() -> str:
    """The PATH that cargo commands run with."""
    home = os.environ.get("HOME", "")
    return f"{home}/.cargo/bin:/usr/local/bin:/usr/bin:/bin"


def _is_message(line: str, level: str) -> bool:
    try:
        value = json.loads(line)
    except ValueError:
        return False
    if not isinstance(value, dict):
        return False
    message = value.get("message")
    return (
        value.get("reason") == "compiler-message"
        and isinstance(message, dict)
        and message.get("level") == level
    )


def count_messages(output: str, level: str) -> int:
    """Count compiler messages of the given level in JSON-lines output."""
    return sum(1 for line in output.splitlines() if _is_message(line, level))


def _last_number(text: str) -> int:
    words = text.split()
    if not words or not _NUMBER.fullmatch(words[-1]):
        return 0
    return int(words[-1])


def estimate_coverage(output: str) -> float:
    """Percentage of passed tests from the ``test result:`` summary lines."""
    passed = total = 0
    for line in output.splitlines():
        if "test result:" not in line:
            continue
        passed += _last_number(line.split("passed", 1)[0])
        total += passed + _last_number(line.split("failed", 1)[0])
    return passed / total * 100.0 if total > 0 else 0.0


@dataclass
class LocalQualityProvider:
    """Runs clippy and the test suite in a project directory."""

    path: Path

    def __post_init__(self) -> None:
        self.path = Path(self.path)

    def _run(self, command: tuple[str, ...]) -> tuple[str, str] | None:
        try:
            result = subprocess.run(
                list(command),
                cwd=self.path,
                env={**os.environ, "PATH": cargo_path()},
                capture_output=True,
                check=False,
            )
        except OSError:
            return None
        return (
            result.stdout.decode("utf-8", errors="replace"),
            result.stderr.decode("utf-8", errors="replace"),
        )

    def fetch_metrics(self) -> QualityMetrics:
        clippy = self._run(_CLIPPY)
        clippy_out = clippy[0] if clippy else ""
        tests = self._run(_TEST)
        return QualityMetrics(
            test_coverage=estimate_coverage(tests[1]) if tests else 0.0,
            lint_warnings=count_messages(clippy_out, "warning"),
            lint_errors=count_messages(clippy_out, "error"),
            security_issues=0,
        )