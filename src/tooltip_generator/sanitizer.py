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

"""Escaping for text embedded in a single-line, double-quoted C# string."""

import re

# A backslash plus the escape letter that makes it legal, if any.
_BACKSLASH_RE = re.compile(r"\\([nrtfvb\\])?")


def _replace_backslash(match: re.Match) -> str:
    if match.group(1):
        return match.group(0)
    return "/"


def sanitize_tooltip_content(content: str) -> str:
    """Make content safe to place between the quotes of a tooltip attribute.

    Double quotes become single quotes. Backslashes are scanned left to
    right: a recognized escape pair (``\\n``, ``\\r``, ``\\t``, ``\\f``,
    ``\\v``, ``\\b`` or ``\\\\``) is kept as one unit, any other backslash
    (including a trailing one) becomes a forward slash.
    """
    content = content.replace('"', "'")
    return _BACKSLASH_RE.sub(_replace_backslash, content)
