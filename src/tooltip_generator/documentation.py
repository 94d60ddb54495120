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

"""Turns captured documentation lines into tooltip text."""

import re
from collections.abc import Sequence

from tooltip_generator.errors import DocumentationParseError
from tooltip_generator.sanitizer import sanitize_tooltip_content


def escape_newline(newline: str) -> str:
    r"""Return the literal form of a line break, e.g. "\r\n" -> '\\r\\n'."""
    return newline.replace("\r", r"\r").replace("\n", r"\n")


def join_documentation(lines: Sequence[str], escaped_newline: str = r"\n") -> str:
    """Join documentation lines with an escaped line break between them."""
    return escaped_newline.join(lines)


def build_tooltip_content(
    lines: Sequence[str],
    extract_pattern: re.Pattern | None = None,
    escaped_newline: str = r"\n",
    strict: bool = False,
) -> str:
    """Build sanitized tooltip content from documentation lines.

    When an extract pattern is given, its ``comment`` group narrows the
    joined documentation (e.g. to the body of ``<summary>``). A failed
    extraction produces empty content, or raises
    DocumentationParseError when ``strict`` is set.
    """
    documentation = join_documentation(lines, escaped_newline)

    if extract_pattern is not None:
        match = extract_pattern.search(documentation)
        if match is None:
            if strict:
                raise DocumentationParseError(documentation)
            content = ""
        else:
            content = match.group("comment") or ""
    else:
        content = documentation

    return sanitize_tooltip_content(content)
