"""Repository status read through the git command."""

from __future__ import annotations

import os
import subprocess
from datetime import datetime, timezone
from pathlib import Path

from devdash.models import BranchInfo, CommitInfo, GitStatus

_COMMIT_LIMIT = 20
_FIELD = "\x1f"
_RECORD = "\x1e"
_UNMERGED = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}


class GitError(Exception):
    """Raised when the repository cannot be read."""


class GitProvider:
    """Reads branch, history and working-tree counts of one repository."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def _git(self, *args: str, error: str) -> str:
        # Only the given directory is treated as a repository; parents are not searched.
        env = {**os.environ, "GIT_CEILING_DIRECTORIES": str(self.path.resolve().parent)}
        try:
            result = subprocess.run(
                ["git", "-C", str(self.path), *args],
                capture_output=True,
                env=env,
                check=False,
            )
        except OSError as exc:
            raise GitError(error) from exc
        if result.returncode != 0:
            detail = result.stderr.decode("utf-8", errors="replace").strip()
            raise GitError(f"{error}: {detail}" if detail else error)
        return result.stdout.decode("utf-8", errors="replace")

    def fetch_status(self) -> GitStatus:
        self._git("rev-parse", "--git-dir", error="Failed to open git repository")
        branch = self._current_branch()
        commits = self._recent_commits(_COMMIT_LIMIT)
        branches = self._list_branches()
        changed, staged = self._file_counts()
        return GitStatus(
            branch=branch,
            commits=commits,
            branches=branches,
            changed_files=changed,
            staged_files=staged,
        )

    def _current_branch(self) -> str:
        name = self._git("rev-parse", "--abbrev-ref", "HEAD", error="Failed to get HEAD").strip()
        return name or "detached"

    def _recent_commits(self, limit: int) -> list[CommitInfo]:
        output = self._git(
            "log",
            f"-n{limit}",
            "--format=%H%x1f%s%x1f%an%x1f%at%x1e",
            "HEAD",
            error="Failed to walk history",
        )
        commits = []
        for record in output.split(_RECORD):
            record = record.strip("\n")
            if not record:
                continue
            parts = record.split(_FIELD)
            if len(parts) != 4:
                continue
            full_hash, message, author, seconds = parts
            try:
                timestamp = datetime.fromtimestamp(int(seconds), timezone.utc)
            except (ValueError, OverflowError, OSError):
                timestamp = datetime.now(timezone.utc)
            commits.append(
                CommitInfo(hash=full_hash[:7], message=message, author=author, timestamp=timestamp)
            )
        return commits

    def _list_branches(self) -> list[BranchInfo]:
        output = self._git(
            "for-each-ref",
            "--format=%(refname)%1f%(HEAD)%1f%(objectname)",
            "refs/heads/",
            error="Failed to list branches",
        )
        branches = []
        for line in output.splitlines():
            parts = line.split(_FIELD)
            if len(parts) != 3:
                continue
            ref, head_mark, object_name = parts
            branches.append(
                BranchInfo(
                    name=ref.removeprefix("refs/heads/") or "unknown",
                    is_head=head_mark == "*",
                    last_commit=object_name[:7],
                )
            )
        return branches

    def _file_counts(self) -> tuple[int, int]:
        output = self._git(
            "status",
            "--porcelain=v1",
            "-z",
            "--untracked-files=all",
            "--no-renames",
            error="Failed to read status",
        )
        changed = staged = 0
        for entry in output.split("\0"):
            if len(entry) < 2:
                continue
            code = entry[:2]
            if code in _UNMERGED:
                continue
            index, worktree = code
            if code == "??" or worktree in "MD" and worktree != " ":
                changed += 1
            if index in "AMDR" and index != " ":
                staged += 1
        return changed, staged