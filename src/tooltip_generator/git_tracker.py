# tooltip-generator - Unity tooltip attributes from XML documentation comments
# Copyright (C) 2026 Michael Doyle
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.

"""Git-based detection of source files edited since the last tooltip run."""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

_GIT_TIMEOUT_SECONDS = 10


@dataclass
class GitChangeSet:
    """Relative paths changed since a ref, split by kind of change."""

    modified: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.modified and not self.added and not self.deleted

    @property
    def to_visit(self) -> list[str]:
        """Paths that still exist and may need tooltips."""
        return sorted(set(self.modified) | set(self.added))


def _run_git(root_path: str, args: list[str]) -> str | None:
    """Run a git command in root_path; None if git is missing or it fails."""
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=root_path,
            capture_output=True,
            text=True,
            timeout=_GIT_TIMEOUT_SECONDS,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.debug("git %s failed: %s", " ".join(args), e)
        return None
    if result.returncode != 0:
        return None
    return result.stdout


def is_git_repo(root_path: str) -> bool:
    out = _run_git(root_path, ["rev-parse", "--is-inside-work-tree"])
    return out is not None and out.strip() == "true"


def get_head_commit(root_path: str) -> str | None:
    out = _run_git(root_path, ["rev-parse", "HEAD"])
    if out is None:
        return None
    return out.strip() or None


def _collect_name_status(
    output: str | None, changes: dict[str, set[str]]
) -> None:
    """Fold `git diff --name-status` lines into the modified/added/deleted sets."""
    if not output:
        return
    for line in output.splitlines():
        parts = line.split("\t")
        if len(parts) < 2:
            continue
        status, path = parts[0], parts[1]
        if status[:1] in ("R", "C") and len(parts) >= 3:
            if status.startswith("R"):
                changes["deleted"].add(path)
            changes["added"].add(parts[2])
        elif status == "A":
            changes["added"].add(path)
        elif status == "D":
            changes["deleted"].add(path)
        else:
            # M and T leave the file in place with new content
            changes["modified"].add(path)


def get_changed_files(root_path: str, since_ref: str | None) -> GitChangeSet:
    """Committed, staged, unstaged and untracked changes since since_ref.

    With no ref there is nothing to compare against, so the result is empty
    and callers fall back to a full run.
    """
    if since_ref is None:
        return GitChangeSet()

    changes: dict[str, set[str]] = {"modified": set(), "added": set(), "deleted": set()}
    _collect_name_status(_run_git(root_path, ["diff", "--name-status", since_ref, "HEAD"]), changes)
    _collect_name_status(_run_git(root_path, ["diff", "--name-status"]), changes)
    _collect_name_status(_run_git(root_path, ["diff", "--name-status", "--cached"]), changes)

    untracked = _run_git(root_path, ["ls-files", "--others", "--exclude-standard"])
    if untracked:
        changes["added"].update(p.strip() for p in untracked.splitlines() if p.strip())

    # Deleted then re-added in a later layer means the file was rewritten
    overlap = changes["added"] & changes["deleted"]
    changes["modified"] |= overlap
    changes["added"] -= overlap
    changes["deleted"] -= overlap

    return GitChangeSet(
        modified=sorted(changes["modified"]),
        added=sorted(changes["added"]),
        deleted=sorted(changes["deleted"]),
    )
