"""Placeholder substitution for email bodies."""

import re
from collections.abc import Mapping
from typing import Any


def parse_body(body: str, parameters: Mapping[str, Any]) -> str:
    """Replace ``{{key}}`` placeholders with the matching parameter values.

    Substitution is done in a single pass: values containing placeholders are
    not expanded again. Placeholders without a matching key are left as-is.

    Example:
        >>> parse_body("Hello {{name}}, {{unused}}", {"name": "Sam"})
        'Hello Sam, {{unused}}'
    """
    if not parameters:
        return body

    values = {"{{" + str(key) + "}}": str(value) for key, value in parameters.items()}
    # Longest first so a key never shadows a longer one sharing its prefix
    pattern = re.compile("|".join(re.escape(p) for p in sorted(values, key=len, reverse=True)))
    return pattern.sub(lambda match: values[match.group(0)], body)
