from __future__ import annotations

import re
from functools import lru_cache
from typing import Mapping


@lru_cache(maxsize=256)
def _wildcard_regex(pattern: str) -> re.Pattern[str]:
    # '*' spans anything (dots included); every other char is literal.
    parts = (re.escape(p) for p in pattern.split("*"))
    return re.compile(".*".join(parts), re.DOTALL)


def str_is(pattern: str, value: str) -> bool:
    """Return True if ``value`` matches the glob-style ``pattern``.

    Only ``*`` is special. The match is anchored at both ends and case-sensitive,
    so ``items.*.name`` matches ``items.0.name`` and ``items.a.b.name`` but not
    ``items.0.name.first``.
    """
    if pattern == value:
        return True
    return _wildcard_regex(pattern).fullmatch(value) is not None


def replace_placeholders(template: str, replacements: Mapping[str, str]) -> str:
    """Replace each placeholder token in ``template``, one token after another.

    Tokens are applied in mapping order and every step rescans the result, so
    with ``{":message": ..., ":key": ...}`` a message that itself contains
    ``:key`` gets the key substituted too.
    """
    for token, value in replacements.items():
        template = template.replace(token, value)
    return template
