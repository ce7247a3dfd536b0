from __future__ import annotations

import json
from typing import Any


def dumps_json(data: Any, **options: Any) -> str:
    """Serialize ``data`` to a JSON string.

    ``options`` go straight to :func:`json.dumps` (``indent``, ``sort_keys``,
    ``separators``...). Non-ASCII text is kept as-is unless the caller passes
    ``ensure_ascii=True``.
    """
    options.setdefault("ensure_ascii", False)
    try:
        return json.dumps(data, **options)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Failed to serialize item to JSON: {e}") from e
