from __future__ import annotations

import re

_TOKEN = re.compile(r"%(%|val|min|max)")


def render(template: str, min: int, max: int, val: int) -> str:
    """Expand ``%val``, ``%min``, ``%max`` and ``%%`` in one pass.

    Substituted text is never scanned again. A ``%`` that does not start a
    known token is kept as is.
    """

    values = {"%": "%", "val": str(val), "min": str(min), "max": str(max)}
    return _TOKEN.sub(lambda m: values[m.group(1)], template)
