import json

from devdash.models import QualityMetrics
from devdash.quality_provider import (
    LocalQualityProvider,
    cargo_path,
    count_messages,
    estimate_coverage,
)

WARNING = json.dumps({"reason": "compiler-message", "message": {"level": "warning"}})
ERROR = json.dumps({"reason": "compiler-message", "message": {"level": "error"}})
ARTIFACT = json.dumps({"reason": "compiler-artifact", "message": {"level": "warning"}})


def test_count_messages_by_level():
    output = "\n".join([WARNING, ERROR, WARNING, ARTIFACT, "not json", "[1, 2]"])
    assert count_messages(output, "warning") == 2
    assert count_messages(output, "error") == 1


def test_count_messages_empty():
    assert count_messages("", "warning") == 0


def test_estimate_coverage_single_line():
    output = "running 4 tests\ntest result: ok. 3 passed; 1 failed; 0 ignored\n"
    assert estimate_coverage(output) == 75.0


def test_estimate_coverage_all_passed():
    assert estimate_coverage("test result: ok. 8 passed; 0 failed;") == 100.0


def test_estimate_coverage_without_results():
    assert estimate_coverage("compiling\nfinished\n") == 0.0


def test_estimate_coverage_stays_in_range():
    output = "\n".join(
        [
            "test result: ok. 5 passed; 2 failed;",
            "test result: FAILED. 1 passed; 4 failed;",
            "test result: ok. garbage passed; x failed;",
        ]
    )
    assert 0.0 <= estimate_coverage(output) <= 100.0


def test_cargo_path_uses_home(monkeypatch):
    monkeypatch.setenv("HOME", "/home/dev")
    assert cargo_path() == "/home/dev/.cargo/bin:/usr/local/bin:/usr/bin:/bin"


def test_missing_project_gives_zero_metrics(tmp_path):
    provider = LocalQualityProvider(tmp_path / "missing")
    assert provider.fetch_metrics() == QualityMetrics(
        test_coverage=0.0, lint_warnings=0, lint_errors=0, security_issues=0
    )


def test_fetch_metrics_runs_cargo_from_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    bin_dir = home / ".cargo" / "bin"
    bin_dir.mkdir(parents=True)
    script = bin_dir / "cargo"
    script.write_text(
        "#!/bin/sh\n"
        'if [ "$1" = "clippy" ]; then\n'
        "cat <<'EOF'\n"
        f"{WARNING}\n{WARNING}\n{ERROR}\n{ARTIFACT}\n"
        "EOF\n"
        "else\n"
        'echo "test result: ok. 3 passed; 1 failed; 0 ignored" >&2\n'
        "fi\n"
    )
    script.chmod(0o755)
    project = tmp_path / "project"
    project.mkdir()
    monkeypatch.setenv("HOME", str(home))

    metrics = LocalQualityProvider(project).fetch_metrics()

    assert metrics.lint_warnings == 2
    assert metrics.lint_errors == 1
    assert metrics.security_issues == 0
    assert metrics.test_coverage == 75.0