"""Template substitution — fill ``{propertyName}`` placeholders from part data."""
from __future__ import annotations
import re
from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from ..errors import MissingPropertyError
from .label_types import LabelContent, LineConfiguration, PartLabelTemplate

_PLACEHOLDER = re.compile(r"\{([^}]+)\}")
_MISSING = object()


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _lookup_property(data: Any, name: str) -> Any:
    # Property names are matched with their first letter upper-cased first
    candidates = dict.fromkeys([name[0].upper() + name[1:], name, _snake_case(name)])
    for key in candidates:
        if isinstance(data, Mapping):
            value = data.get(key, _MISSING)
        else:
            value = getattr(data, key, _MISSING)
        if value is not _MISSING:
            return value
    raise MissingPropertyError(name, data)


def apply_case(text: str, line: LineConfiguration) -> str:
    if line.upper_case:
        return text.upper()
    if line.lower_case:
        return text.lower()
    return text


def substitute_template(data: Any, line: LineConfiguration) -> str:
    value = line.content or ""
    match = _PLACEHOLDER.search(value)
    if match and match.group(1).strip():
        prop = _lookup_property(data, match.group(1).strip())
        value = value.replace(match.group(0), "" if prop is None else str(prop))
    return apply_case(value, line)


def fill_template_slots(content: LabelContent, template: PartLabelTemplate) -> LabelContent:
    """Return a copy of ``content`` with every empty slot filled from ``template``."""
    updates = {
        name: substitute_template(content.part, line)
        for name, line in template.slots()
        if getattr(content, name) is None
    }
    return replace(content, **updates)
