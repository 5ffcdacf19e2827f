"""Parser for the restricted YAML subset used by foreign-resources.yaml.

Only string scalars and nested mappings are supported, indented with exactly
two spaces per level. A key without a value starts out undetermined: it
becomes a mapping when a deeper line assigns into it and stays ``None``
otherwise.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union, cast

from apps.frm.src.domain.errors import ManifestParseError

ODD_INDENTATION = "odd indentation"
TOO_MUCH_INDENTATION = "too much indentation"
MISSING_COLON = "missing colon"

ManifestValue = Union[str, "dict[str, ManifestValue]", None]


@dataclass(slots=True)
class _Slot:
    """Value cell shared by its parent mapping and the depth stack."""

    value: str | dict[str, _Slot] | None = None

    def container(self) -> dict[str, _Slot]:
        if self.value is None:
            self.value = {}
        # Only the root and empty-valued keys are ever pushed on the stack.
        return cast("dict[str, _Slot]", self.value)


def _unwrap(slot: _Slot) -> ManifestValue:
    if isinstance(slot.value, dict):
        return {key: _unwrap(child) for key, child in slot.value.items()}
    return slot.value


def parse_manifest_text(text: str) -> dict[str, ManifestValue]:
    """Parse manifest text into nested dictionaries.

    Raises :class:`ManifestParseError` with the 1-based line number when a
    line has odd indentation, is indented more than one level deeper than the
    open containers allow, or lacks a colon.
    """

    root = _Slot({})
    stack: list[_Slot] = [root]
    previous_depth = 0

    for line_number, raw in enumerate(text.splitlines(), start=1):
        trimmed = raw.lstrip(" ")
        if not trimmed or trimmed.startswith("#"):
            continue

        indent = len(raw) - len(trimmed)
        if indent % 2 != 0:
            raise ManifestParseError(line_number, ODD_INDENTATION)

        depth = indent // 2
        if depth < previous_depth:
            # Closed branches cannot be re-entered.
            del stack[depth + 1 :]
        if depth >= len(stack):
            raise ManifestParseError(line_number, TOO_MUCH_INDENTATION)
        if ":" not in trimmed:
            raise ManifestParseError(line_number, MISSING_COLON)

        target = stack[depth].container()
        key, _, remainder = trimmed.partition(":")
        value = remainder.lstrip(" ")
        if value:
            target[key] = _Slot(value)
        else:
            slot = _Slot()
            target[key] = slot
            del stack[depth + 1 :]
            stack.append(slot)

        previous_depth = depth

    return cast("dict[str, ManifestValue]", _unwrap(root))


__all__ = [
    "MISSING_COLON",
    "ODD_INDENTATION",
    "TOO_MUCH_INDENTATION",
    "ManifestValue",
    "parse_manifest_text",
]
