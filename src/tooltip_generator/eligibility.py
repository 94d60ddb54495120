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

"""Decides which classes can carry tooltips.

Unity honours ``[Tooltip]`` on fields of MonoBehaviour and ScriptableObject
subclasses and of ``[Serializable]`` types. The eligible names are computed
up front (see collect_eligible_names) and only tested for membership here.
"""

import re
from collections.abc import Iterable

DEFAULT_BASE_NAMES: tuple[str, ...] = (
    "MonoBehaviour",
    "ScriptableObject",
    "StateMachineBehaviour",
)

_CLASS_KEYWORD = "class "

# Class declaration with optional leading attributes and base list.
_CLASS_DECL_RE = re.compile(
    r"(?P<attributes>(?:\[[^\]\[]*\]\s*)*)"
    r"(?:\b(?:public|internal|private|protected|sealed|abstract|static|partial|unsafe|new)\s+)*"
    r"\bclass\s+(?P<name>\w+)(?:\s*<[^>{]*>)?"
    r"(?:\s*:\s*(?P<bases>[^{]+?))?"
    r"\s*(?:\bwhere\b[^{]*)?\{"
)

_SERIALIZABLE_ATTR_RE = re.compile(r"\b(?:System\s*\.\s*)?Serializable\b")
_GENERIC_ARGS_RE = re.compile(r"<[^<>]*>")


def is_eligible(text: str, eligible_names: Iterable[str]) -> bool:
    """Check whether any class header in text mentions an eligible name.

    The header is everything between ``class `` and the first ``{``.
    Matching is by substring, so ``MyMonoBehaviourHelper`` counts for
    ``MonoBehaviour``.
    """
    names = tuple(eligible_names)
    if not names:
        return False
    for fragment in text.split(_CLASS_KEYWORD)[1:]:
        brace = fragment.find("{")
        if brace < 0:
            continue
        header = fragment[:brace]
        for name in names:
            if name in header:
                return True
    return False


def _split_bases(bases: str | None) -> list[str]:
    """Split a base list into simple type names without namespaces or generics."""
    if not bases:
        return []
    previous = None
    while previous != bases:
        previous = bases
        bases = _GENERIC_ARGS_RE.sub("", bases)
    result: list[str] = []
    for part in bases.split(","):
        name = part.strip().rsplit(".", 1)[-1].strip()
        if name:
            result.append(name)
    return result


def parse_class_declarations(text: str) -> list[tuple[str, list[str], bool]]:
    """Return (name, base names, is_serializable) for each class in text."""
    declarations: list[tuple[str, list[str], bool]] = []
    for m in _CLASS_DECL_RE.finditer(text):
        serializable = bool(_SERIALIZABLE_ATTR_RE.search(m.group("attributes")))
        declarations.append((m.group("name"), _split_bases(m.group("bases")), serializable))
    return declarations


def collect_eligible_names(
    sources: Iterable[str],
    base_names: Iterable[str] = DEFAULT_BASE_NAMES,
) -> frozenset[str]:
    """Compute eligible class names from a set of source texts.

    Starts from base_names plus every ``[Serializable]`` class, then adds
    classes deriving from a name already in the set until nothing changes,
    so ``C : B`` with ``B : MonoBehaviour`` in another file is found.
    """
    declarations: list[tuple[str, list[str], bool]] = []
    for text in sources:
        declarations.extend(parse_class_declarations(text))

    names = set(base_names)
    names.update(name for name, _, serializable in declarations if serializable)

    changed = True
    while changed:
        changed = False
        for name, bases, _ in declarations:
            if name in names:
                continue
            if any(base in names for base in bases):
                names.add(name)
                changed = True

    return frozenset(names)
