"""Keyed collection of validation/feedback messages.

Typical usage
-------------
from message_bag import MessageBag

errors = MessageBag({"email": ["required"]})
errors.add("name", "too short").first("name")   # "too short"
errors.get("items.*.name")                        # wildcard lookup
"""

from __future__ import annotations

from .bag import MessageBag
from .config import default_format, load_config, reload_config
from .schema import MessagesModel
from .typing import Arrayable, MessageBagContract, MessageProvider, Messages

__all__ = [
    "MessageBag",
    "MessageBagContract",
    "MessageProvider",
    "Arrayable",
    "Messages",
    "MessagesModel",
    "default_format",
    "load_config",
    "reload_config",
    "__version__",
    "get_version",
]

# ---------------------------------------------------------------------
# Version handling
# ---------------------------------------------------------------------
__version__ = "0.1.0"


def get_version() -> str:
    """Return the package version."""
    return __version__
