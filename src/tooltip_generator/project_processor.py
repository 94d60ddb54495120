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

"""Project-wide tooltip generation.

Walks a Unity project, computes the eligible class names from every C#
file it finds, and rewrites each file whose documented fields need new
or updated tooltips.
"""

import fnmatch
import logging
import os
import time
from pathlib import Path

from tooltip_generator.eligibility import DEFAULT_BASE_NAMES, collect_eligible_names
from tooltip_generator.generator import TooltipGenerator
from tooltip_generator.git_tracker import get_changed_files, get_head_commit, is_git_repo
from tooltip_generator.models import FileOutcome, ProcessingReport

logger = logging.getLogger(__name__)

# Path fragments that are never rewritten (package cache and build output).
ILLEGAL_PATH_FRAGMENTS = ("Packages/", "Library/")


def is_valid_path(path: str) -> bool:
    """A path is processed only if it is a .cs file outside Packages/ and Library/."""
    normalized = path.replace(os.sep, "/")
    if os.path.splitext(normalized)[1] != ".cs":
        return False
    return not any(fragment in normalized for fragment in ILLEGAL_PATH_FRAGMENTS)


class ProjectProcessor:
    """Generates tooltips for every eligible C# file under a project root."""

    def __init__(
        self,
        root_path: str,
        include_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
        max_file_size_bytes: int = 1_000_000,
        base_names: tuple[str, ...] = DEFAULT_BASE_NAMES,
        generator: TooltipGenerator | None = None,
        encoding: str = "utf-8",
    ):
        self.root_path = os.path.abspath(root_path)
        self.include_patterns = include_patterns or ["**/*.cs"]
        self.exclude_patterns = exclude_patterns or [
            "Packages/**",
            "Library/**",
            "Temp/**",
            "Logs/**",
            "obj/**",
            "**/.git/**",
        ]
        self.max_file_size_bytes = max_file_size_bytes
        self.base_names = base_names
        self.encoding = encoding
        self.generator = generator or TooltipGenerator()
        self.last_processed_git_ref: str | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def refresh_eligible_names(self) -> frozenset[str]:
        """Rescan the project for eligible classes and swap in a new generator.

        Returns the new name set.
        """
        sources: list[str] = []
        for fpath in self.discover_files():
            try:
                sources.append(self._read_file(fpath))
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping %s while collecting classes: %s", fpath, e)

        names = collect_eligible_names(sources, self.base_names)
        self.generator = self.generator.with_eligible_names(names)
        logger.info("Found %d eligible class names in %s", len(names), self.root_path)
        return names

    def process_all(self) -> ProcessingReport:
        """Refresh eligible names, then process every discovered file."""
        self.refresh_eligible_names()
        report = self._process(self.discover_files())
        self._remember_head()
        return report

    def process_paths(self, paths: list[str]) -> ProcessingReport:
        """Process the given paths (absolute or relative to the root).

        Paths outside the include/exclude rules are ignored, matching how
        the editor hook skipped non-script assets.
        """
        selected: list[str] = []
        for path in paths:
            abs_path = path if os.path.isabs(path) else os.path.join(self.root_path, path)
            rel_path = os.path.relpath(abs_path, self.root_path)
            if not is_valid_path(rel_path) or self._is_excluded(rel_path):
                logger.debug("Ignoring %s", rel_path)
                continue
            if not os.path.isfile(abs_path):
                continue
            selected.append(os.path.abspath(abs_path))

        if not selected:
            return ProcessingReport(
                root_path=self.root_path,
                eligible_class_count=len(self.generator.eligible_names),
            )

        self.refresh_eligible_names()
        return self._process(selected)

    def process_changed(self, since_ref: str | None = None) -> ProcessingReport:
        """Process files changed in git since since_ref (or the last run).

        Falls back to a full run when the root is not a git repository or
        there is no ref to compare against.
        """
        ref = since_ref or self.last_processed_git_ref
        if ref is None or not is_git_repo(self.root_path):
            return self.process_all()

        changeset = get_changed_files(self.root_path, ref)
        logger.info(
            "Changes since %s: %d modified, %d added, %d deleted",
            ref,
            len(changeset.modified),
            len(changeset.added),
            len(changeset.deleted),
        )
        report = self.process_paths(changeset.to_visit)
        self._remember_head()
        return report

    # ------------------------------------------------------------------
    # File discovery
    # ------------------------------------------------------------------

    def discover_files(self) -> list[str]:
        """Absolute paths of C# files matching the include/exclude rules."""
        root = Path(self.root_path)
        matched: set[str] = set()

        for pattern in self.include_patterns:
            for p in root.glob(pattern):
                if not p.is_file():
                    continue
                rel_str = os.path.relpath(str(p), self.root_path)
                if not is_valid_path(rel_str) or self._is_excluded(rel_str):
                    continue
                try:
                    size = p.stat().st_size
                except OSError:
                    continue
                if size > self.max_file_size_bytes:
                    logger.debug("Skipping %s (size %d > %d)", rel_str, size, self.max_file_size_bytes)
                    continue
                matched.add(str(p))

        return sorted(matched)

    def _is_excluded(self, rel_path: str) -> bool:
        normalized = rel_path.replace(os.sep, "/")
        return any(fnmatch.fnmatch(normalized, pattern) for pattern in self.exclude_patterns)

    def _read_file(self, abs_path: str) -> str:
        with open(abs_path, "r", encoding=self.encoding, newline="") as f:
            return f.read()

    # ------------------------------------------------------------------
    # Processing
    # ------------------------------------------------------------------

    def _process(self, file_paths: list[str]) -> ProcessingReport:
        start_time = time.monotonic()
        report = ProcessingReport(
            root_path=self.root_path,
            eligible_class_count=len(self.generator.eligible_names),
        )

        for fpath in file_paths:
            rel_path = os.path.relpath(fpath, self.root_path)
            outcome = self.generator.update_file(fpath, encoding=self.encoding)
            if outcome is FileOutcome.UPDATED:
                report.updated.append(rel_path)
            elif outcome is FileOutcome.FAILED:
                report.failed.append(rel_path)
            else:
                report.unchanged.append(rel_path)

        report.elapsed_seconds = time.monotonic() - start_time
        logger.info(
            "Processed %d files in %.2fs: %d updated",
            report.total_files,
            report.elapsed_seconds,
            len(report.updated),
        )
        return report

    def _remember_head(self) -> None:
        if is_git_repo(self.root_path):
            self.last_processed_git_ref = get_head_commit(self.root_path)
