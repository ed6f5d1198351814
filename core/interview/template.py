"""Placeholder filling for prompt and question templates."""

import re
from typing import Any, Mapping, Optional

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def fill_template(template: Optional[str], variables: Optional[Mapping[str, Any]] = None) -> str:
    """Replace every known ``{name}`` placeholder with ``str(value)``.

    Placeholders without an entry (or whose value is None) are left verbatim,
    braces included. A None or empty template yields "".
    """
    if not template:
        return ""
    variables = variables or {}

    def _replace(match: "re.Match[str]") -> str:
        value = variables.get(match.group(1))
        if value is None:
            return match.group(0)
        return str(value)

    return _PLACEHOLDER.sub(_replace, template)
