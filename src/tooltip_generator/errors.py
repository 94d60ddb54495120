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

"""Exception hierarchy for tooltip generation."""


class TooltipGeneratorError(RuntimeError):
    """Base exception for tooltip generation failures."""


class ConfigurationError(TooltipGeneratorError):
    """Raised when a pattern configuration cannot be built.

    Covers invalid regex syntax, a template without the visibility
    placeholder, missing named groups, and empty variant lists.
    """


class DocumentationParseError(TooltipGeneratorError):
    """Raised in strict mode when the extraction pattern finds no comment."""

    def __init__(self, documentation: str):
        super().__init__(
            f"Could not parse the following documentation: {documentation!r}"
        )
        self.documentation = documentation
