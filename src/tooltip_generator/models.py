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

"""Configuration and result models for tooltip generation."""

import enum
import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from tooltip_generator.errors import ConfigurationError

# Token replaced by each visibility variant in a locate pattern template.
VISIBILITY_PLACEHOLDER = "<validFieldsKey>"

# Named groups every locate pattern must define.
REQUIRED_GROUPS = ("documentation", "tooltip", "tooltip_content", "field", "beginning")

# One `///` line; group 1 is the text after the marker and an optional space.
DOC_COMMENT_LINE_RE = re.compile(r"^[ \t]*///[ \t]?([^\r\n]*)", re.MULTILINE)


@dataclass(frozen=True)
class PatternConfiguration:
    """A family of locate patterns, one per accepted field visibility.

    The template is compiled once per variant at construction time, so a
    malformed configuration fails here rather than on the first file.
    """

    visibility_variants: tuple[str, ...]
    locate_pattern_template: str
    extract_pattern: re.Pattern | str | None = None
    line_pattern: re.Pattern = DOC_COMMENT_LINE_RE
    strict_extraction: bool = False  # raise instead of using "" when extraction fails
    compiled_patterns: tuple[re.Pattern, ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        variants = tuple(self.visibility_variants)
        if not variants:
            raise ConfigurationError("At least one visibility variant is required.")
        if VISIBILITY_PLACEHOLDER not in self.locate_pattern_template:
            raise ConfigurationError(
                f"Locate pattern template has no {VISIBILITY_PLACEHOLDER} placeholder."
            )
        object.__setattr__(self, "visibility_variants", variants)

        compiled: list[re.Pattern] = []
        for variant in variants:
            source = self.locate_pattern_template.replace(VISIBILITY_PLACEHOLDER, variant)
            try:
                pattern = re.compile(source, re.MULTILINE)
            except re.error as e:
                raise ConfigurationError(
                    f"Invalid locate pattern for variant {variant!r}: {e}"
                ) from e
            missing = [g for g in REQUIRED_GROUPS if g not in pattern.groupindex]
            if missing:
                raise ConfigurationError(
                    f"Locate pattern for variant {variant!r} is missing groups: "
                    + ", ".join(missing)
                )
            compiled.append(pattern)
        object.__setattr__(self, "compiled_patterns", tuple(compiled))

        extractor = self.extract_pattern
        if isinstance(extractor, str):
            try:
                extractor = re.compile(extractor)
            except re.error as e:
                raise ConfigurationError(f"Invalid extract pattern: {e}") from e
            object.__setattr__(self, "extract_pattern", extractor)
        if extractor is not None and "comment" not in extractor.groupindex:
            raise ConfigurationError("Extract pattern must define a 'comment' group.")

        if self.line_pattern.groups < 1:
            raise ConfigurationError("Line pattern must capture the line text in group 1.")

    def patterns(self) -> Iterator[tuple[str, re.Pattern]]:
        """Yield (variant, compiled pattern) pairs in declared order."""
        yield from zip(self.visibility_variants, self.compiled_patterns)


class FileOutcome(enum.Enum):
    """Result of processing one file."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"
    FAILED = "failed"


@dataclass
class ProcessingReport:
    """Outcome of processing a batch of files."""

    root_path: str
    updated: list[str] = field(default_factory=list)
    unchanged: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    eligible_class_count: int = 0
    elapsed_seconds: float = 0.0

    @property
    def total_files(self) -> int:
        return len(self.updated) + len(self.unchanged) + len(self.failed)

    def to_dict(self) -> dict:
        return {
            "root_path": self.root_path,
            "total_files": self.total_files,
            "updated": self.updated,
            "unchanged_count": len(self.unchanged),
            "failed": self.failed,
            "eligible_class_count": self.eligible_class_count,
            "elapsed_seconds": round(self.elapsed_seconds, 3),
        }
