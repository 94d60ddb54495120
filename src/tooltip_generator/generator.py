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

"""Rewrites C# source so documented fields carry matching tooltips.

Each pattern pass runs ``finditer`` over the buffer as it stood when the
pass began, then splices edits into that buffer in match order. Offsets
from the match are relative to the unedited buffer, so every edit is
applied at ``match offset + offset_delta`` where ``offset_delta`` is the
net length change of all earlier edits in the pass. Later passes rescan
the edited buffer.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Sequence

from tooltip_generator.csharp_patterns import CLOSE_TOKEN, choose_open_token, default_configurations
from tooltip_generator.documentation import build_tooltip_content, escape_newline
from tooltip_generator.eligibility import DEFAULT_BASE_NAMES, is_eligible
from tooltip_generator.errors import ConfigurationError
from tooltip_generator.models import FileOutcome, PatternConfiguration

logger = logging.getLogger(__name__)


def process_text(
    text: str,
    eligible_names: Iterable[str],
    configurations: Sequence[PatternConfiguration],
    newline: str = os.linesep,
) -> tuple[bool, str]:
    """Add or update tooltips in text.

    Returns (changed, result). When changed is False, result is text.
    """
    if not is_eligible(text, eligible_names):
        return False, text

    open_token = choose_open_token(text)
    escaped_newline = escape_newline(newline)
    result = text
    changed = False

    for config in configurations:
        for variant, pattern in config.patterns():
            offset_delta = 0
            edits = 0
            for match in pattern.finditer(result):
                block = match.group("documentation")
                lines = [m.group(1) for m in config.line_pattern.finditer(block)]
                content = build_tooltip_content(
                    lines,
                    config.extract_pattern,
                    escaped_newline,
                    strict=config.strict_extraction,
                )
                if content == (match.group("tooltip_content") or ""):
                    continue

                tooltip = (
                    match.group("beginning") + open_token + content + CLOSE_TOKEN + newline
                )

                old_start, old_end = match.span("tooltip")
                if old_start >= 0 and old_end > old_start:
                    start = old_start + offset_delta
                    result = result[:start] + result[start + (old_end - old_start):]
                    offset_delta -= old_end - old_start

                insert_at = match.start("field") + offset_delta
                result = result[:insert_at] + tooltip + result[insert_at:]
                offset_delta += len(tooltip)

                edits += 1
                changed = True

            if edits:
                logger.debug("Variant %r: %d tooltip(s) written", variant, edits)

    return changed, result


class TooltipGenerator:
    """Generates Unity ``[Tooltip]`` attributes from ``///`` summaries.

    Holds only immutable state: pattern configurations, the eligible class
    names and the line break used in generated code. Use
    with_eligible_names() to get a generator for an updated name set.
    """

    def __init__(
        self,
        configurations: Sequence[PatternConfiguration] | None = None,
        eligible_names: Iterable[str] | None = None,
        newline: str = os.linesep,
    ):
        self.newline = newline
        self.configurations: tuple[PatternConfiguration, ...] = tuple(
            configurations if configurations is not None else default_configurations(newline)
        )
        if not self.configurations:
            raise ConfigurationError("At least one pattern configuration is required.")
        self.eligible_names: frozenset[str] = frozenset(
            eligible_names if eligible_names is not None else DEFAULT_BASE_NAMES
        )

    def with_eligible_names(self, eligible_names: Iterable[str]) -> TooltipGenerator:
        """Return a generator sharing this one's configuration with new names."""
        return TooltipGenerator(self.configurations, eligible_names, self.newline)

    def is_eligible(self, text: str) -> bool:
        return is_eligible(text, self.eligible_names)

    def process(self, text: str) -> tuple[bool, str]:
        return process_text(text, self.eligible_names, self.configurations, self.newline)

    def update_file(
        self,
        input_path: str,
        output_path: str | None = None,
        encoding: str = "utf-8",
    ) -> FileOutcome:
        """Process a file and write the result if any tooltip changed.

        Args:
            input_path: File to read.
            output_path: Destination; defaults to input_path.
            encoding: Text encoding for both reading and writing.

        Returns:
            UPDATED if the output file was written, UNCHANGED if no tooltip
            needed changing, FAILED if the input could not be read or the
            write was denied. Failures are logged, never raised.
        """
        if output_path is None:
            output_path = input_path

        try:
            # newline="" keeps CRLF files byte-identical outside the edits
            with open(input_path, "r", encoding=encoding, newline="") as f:
                source = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read %s: %s", input_path, e)
            return FileOutcome.FAILED

        changed, processed = self.process(source)
        if not changed:
            return FileOutcome.UNCHANGED

        try:
            with open(output_path, "w", encoding=encoding, newline="") as f:
                f.write(processed)
        except PermissionError as e:
            logger.warning("Cannot write %s: %s", output_path, e)
            return FileOutcome.FAILED

        logger.debug("Updated tooltips in %s", output_path)
        return FileOutcome.UPDATED

    def process_file(
        self,
        input_path: str,
        output_path: str | None = None,
        encoding: str = "utf-8",
    ) -> bool:
        """True if the output file was written; see update_file."""
        return self.update_file(input_path, output_path, encoding) is FileOutcome.UPDATED
