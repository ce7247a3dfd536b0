"""Keyed, deduplicated collection of human-readable messages."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

from utils.io import dumps_json
from utils.strings import replace_placeholders, str_is

from . import config
from .schema import parse_messages_json, validate_messages
from .typing import Arrayable, Format, KeyArg, Messages, MessageProvider

logger = logging.getLogger(__name__)


# -----------------------------
# Helpers
# -----------------------------
def _as_list(value: Any) -> List[Any]:
    """Coerce a single message, a collection or an Arrayable to a list."""
    if isinstance(value, Arrayable):
        value = value.to_array()
    if value is None:
        return []
    if isinstance(value, (str, bytes)):
        return [value]
    if isinstance(value, Mapping):
        return list(value.values())
    if isinstance(value, Iterable):
        return list(value)
    return [value]


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        out.append(item)
    return out


def _key_list(key: KeyArg, more: Iterable[str]) -> List[str]:
    if key is None:
        return list(more)
    if isinstance(key, str):
        return [key, *more]
    return [*key, *more]


# -----------------------------
# MessageBag
# -----------------------------
class MessageBag:
    """Mapping of keys (usually field names) to ordered, unique messages.

    Messages are rendered through a template containing ``:message`` and
    ``:key`` placeholders. The default template comes from
    :func:`message_bag.config.default_format` (``config/default.yaml``, the
    ``MESSAGE_BAG_CONFIG`` file or ``MESSAGE_BAG__BAG__FORMAT``), falling back
    to ``":message"``.

    ``len(bag)`` is the number of messages, while iterating a bag yields its
    keys, so ``len(bag)`` and ``len(list(bag))`` usually differ.

    Mutators (``add``, ``merge``, ``set_format``) return the bag itself so
    calls can be chained::

        bag = MessageBag().add("email", "required").add("name", "too short")
        bag.first("email")  # "required"
    """

    def __init__(
        self,
        messages: Optional[Mapping[str, Any]] = None,
        *,
        format: Format = None,
    ) -> None:
        if messages is None:
            messages = {}
        if not isinstance(messages, Mapping):
            raise TypeError(
                f"messages must be a mapping of key -> messages, got {type(messages).__name__}"
            )
        validated = validate_messages({key: _as_list(value) for key, value in messages.items()})
        self._messages: Messages = {key: _dedupe(items) for key, items in validated.items()}
        self._format: str = format or config.default_format()

    @classmethod
    def from_json(cls, data: Union[str, bytes], *, format: Format = None) -> "MessageBag":
        """Build a bag from the JSON object produced by :meth:`to_json`."""
        return cls(parse_messages_json(data), format=format)

    # --------- mutation ----------
    def add(self, key: str, message: str) -> "MessageBag":
        """Add ``message`` under ``key`` unless that exact message is already there."""
        if self._is_unique(key, message):
            self._messages.setdefault(key, []).append(message)
        return self

    def merge(self, messages: Union[Mapping[str, Any], MessageProvider]) -> "MessageBag":
        """Merge another bag (or raw mapping) into this one.

        Lists for shared keys are concatenated as-is; unlike :meth:`add`, no
        deduplication happens here.
        """
        if isinstance(messages, MessageProvider):
            messages = messages.get_message_bag().get_messages()
        if not isinstance(messages, Mapping):
            raise TypeError(
                f"merge expects a mapping or a message provider, got {type(messages).__name__}"
            )

        incoming = validate_messages({key: _as_list(value) for key, value in messages.items()})
        for key, items in incoming.items():
            if key in self._messages:
                self._messages[key].extend(items)
            else:
                self._messages[key] = items
        logger.debug("merged %d key(s) into message bag", len(incoming))
        return self

    def set_format(self, format: str = ":message") -> "MessageBag":
        self._format = format
        return self

    # --------- queries ----------
    def has(self, key: KeyArg = None, *keys: str) -> bool:
        """True if every given key has at least one message."""
        if self.is_empty():
            return False
        if key is None and not keys:
            return self.any()

        for k in _key_list(key, keys):
            if self.first(k) == "":
                return False
        return True

    def has_any(self, keys: KeyArg = (), *more: str) -> bool:
        """True if at least one of the given keys has a message.

        An explicit ``None`` falls through to ``has(None)``, i.e. :meth:`any`.
        """
        if self.is_empty():
            return False

        candidates = [None] if keys is None else _key_list(keys, more)
        for k in candidates:
            if self.has(k):
                return True
        return False

    def first(self, key: Optional[str] = None, format: Format = None) -> str:
        """First message for ``key`` (or for the whole bag), or ``""``."""
        messages = self.all(format) if key is None else self.get(key, format)

        # Wildcard lookups come back keyed by the matched key.
        if isinstance(messages, dict):
            messages = list(messages.values())
        if not messages:
            return ""

        first = messages[0]
        if isinstance(first, list):
            return first[0] if first else ""
        return first

    def get(self, key: str, format: Format = None) -> Union[List[str], Dict[str, List[str]]]:
        """Rendered messages for ``key``.

        A literal key returns a list. A key containing ``*`` that is not
        stored literally is matched against every stored key and returns a
        dict of ``matched key -> rendered messages``. Unknown keys give ``[]``.
        """
        if key in self._messages:
            return self._transform(self._messages[key], self._check_format(format), key)

        if "*" in key:
            return self._get_messages_for_wildcard_key(key, format)

        return []

    def all(self, format: Format = None) -> List[str]:
        """Every rendered message, in key order."""
        format = self._check_format(format)

        out: List[str] = []
        for key, messages in self._messages.items():
            out.extend(self._transform(messages, format, key))
        return out

    def unique(self, format: Format = None) -> List[str]:
        return _dedupe(self.all(format))

    def keys(self) -> List[str]:
        return list(self._messages)

    def messages(self) -> Messages:
        """The raw underlying mapping; nothing is rendered."""
        return self._messages

    def get_messages(self) -> Messages:
        return self.messages()

    def get_message_bag(self) -> "MessageBag":
        return self

    def get_format(self) -> str:
        return self._format

    def is_empty(self) -> bool:
        return not self.any()

    def is_not_empty(self) -> bool:
        return self.any()

    def any(self) -> bool:
        return self.count() > 0

    def count(self) -> int:
        """Total number of messages across all keys (not the number of keys)."""
        return sum(len(messages) for messages in self._messages.values())

    # --------- serialization ----------
    def to_array(self) -> Messages:
        return self.get_messages()

    def json_serialize(self) -> Messages:
        return self.to_array()

    def to_json(self, **options: Any) -> str:
        """JSON object of raw messages; ``options`` are passed to ``json.dumps``."""
        return dumps_json(self.json_serialize(), **options)

    # --------- python protocols ----------
    def __str__(self) -> str:
        return self.to_json()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._messages!r}, format={self._format!r})"

    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        return self.any()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MessageBag):
            return NotImplemented
        return self._messages == other._messages and self._format == other._format

    __hash__ = None  # type: ignore[assignment]

    # --------- internals ----------
    def _is_unique(self, key: str, message: str) -> bool:
        return key not in self._messages or message not in self._messages[key]

    def _get_messages_for_wildcard_key(self, key: str, format: Format) -> Dict[str, List[str]]:
        format = self._check_format(format)
        return {
            message_key: self._transform(messages, format, message_key)
            for message_key, messages in self._messages.items()
            if str_is(key, message_key)
        }

    @staticmethod
    def _transform(messages: Iterable[str], format: str, message_key: str) -> List[str]:
        # :message goes in first, so a ":key" inside the message text is expanded too.
        return [
            replace_placeholders(format, {":message": message, ":key": message_key})
            for message in messages
        ]

    def _check_format(self, format: Format) -> str:
        return format or self._format
