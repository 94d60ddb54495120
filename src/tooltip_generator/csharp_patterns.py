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

"""Pattern configuration for Unity C# fields documented with ``///`` comments.

The locate pattern matches, in order:
  1. one or more ``///`` documentation lines
  2. any attributes other than Tooltip
  3. an optional existing ``[Tooltip("...")]`` or ``[UnityEngine.Tooltip("...")]``
  4. any attributes other than Tooltip
  5. a single-line field declaration starting with the visibility variant
"""

import os
import re

from tooltip_generator.documentation import escape_newline
from tooltip_generator.models import VISIBILITY_PLACEHOLDER, PatternConfiguration

USING_DIRECTIVE = "using UnityEngine;"
SHORT_OPEN_TOKEN = '[Tooltip("'
QUALIFIED_OPEN_TOKEN = '[UnityEngine.Tooltip("'
CLOSE_TOKEN = '")]'

DEFAULT_VISIBILITY_VARIANTS = (
    "public",
    r"\[SerializeField\] private",
)

_DOCUMENTATION_BLOCK = r"(?P<documentation>(?:^[ \t]*///[^\r\n]*\r?\n)+)"

_NON_TOOLTIP_ATTRIBUTES = (
    r"(?:^[ \t]*\[(?![ \t]*(?:UnityEngine\.)?Tooltip)[^\]]+\]\s*(?=^))*"
)

_EXISTING_TOOLTIP = (
    r"(?P<tooltip>^[ \t]*\[(?:UnityEngine\.)?Tooltip\(\"(?P<tooltip_content>[^\"]*)\"\)\]"
    r"\s*(?=^))?"
)

# Field with an optional single-statement initializer, e.g. `public int x = 5;`
_FIELD = (
    r"(?P<field>(?P<beginning>^[ \t]*)" + VISIBILITY_PLACEHOLDER
    + r"\s+[^\s;=]+\s+[^\s;=]+\s*(?:=[^;]+)?;)"
)

LOCATE_PATTERN_TEMPLATE = (
    _DOCUMENTATION_BLOCK
    + r"\s*(?=^)"
    + _NON_TOOLTIP_ATTRIBUTES
    + _EXISTING_TOOLTIP
    + _NON_TOOLTIP_ATTRIBUTES
    + _FIELD
)


def summary_extractor(newline: str = os.linesep) -> re.Pattern:
    """Pattern whose ``comment`` group is the text inside ``<summary>``.

    Works on documentation already joined with the escaped newline, so the
    optional line breaks around the summary body are literal backslash
    sequences.
    """
    escaped = re.escape(escape_newline(newline))
    return re.compile(
        r"\s*<summary>\s*(?:" + escaped + r")?"
        r"(?P<comment>.*?(?=(?:" + escaped + r")?\s*</summary\s*))"
    )


def unity_configuration(
    newline: str = os.linesep,
    visibility_variants: tuple[str, ...] = DEFAULT_VISIBILITY_VARIANTS,
    strict_extraction: bool = False,
) -> PatternConfiguration:
    return PatternConfiguration(
        visibility_variants=visibility_variants,
        locate_pattern_template=LOCATE_PATTERN_TEMPLATE,
        extract_pattern=summary_extractor(newline),
        strict_extraction=strict_extraction,
    )


def default_configurations(newline: str = os.linesep) -> tuple[PatternConfiguration, ...]:
    return (unity_configuration(newline),)


def choose_open_token(text: str) -> str:
    """Use the short attribute name only when UnityEngine is imported."""
    if USING_DIRECTIVE in text:
        return SHORT_OPEN_TOKEN
    return QUALIFIED_OPEN_TOKEN
