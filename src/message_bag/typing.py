from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Protocol, Union, runtime_checkable

Messages = Dict[str, List[str]]
Format = Optional[str]
KeyArg = Union[str, Iterable[str], None]


@runtime_checkable
class Arrayable(Protocol):
    """Anything that can hand back a plain list/dict of itself."""

    def to_array(self) -> Any: ...


@runtime_checkable
class MessageBagContract(Protocol):
    """Query/mutate surface shared by every message bag implementation."""

    def keys(self) -> List[str]: ...
    def add(self, key: str, message: str) -> "MessageBagContract": ...
    def merge(self, messages: Any) -> "MessageBagContract": ...
    def has(self, key: KeyArg = None, *keys: str) -> bool: ...
    def first(self, key: Optional[str] = None, format: Format = None) -> str: ...
    def get(self, key: str, format: Format = None) -> Any: ...
    def all(self, format: Format = None) -> List[str]: ...
    def get_messages(self) -> Messages: ...
    def get_format(self) -> str: ...
    def set_format(self, format: str = ":message") -> "MessageBagContract": ...
    def is_empty(self) -> bool: ...
    def is_not_empty(self) -> bool: ...
    def any(self) -> bool: ...
    def count(self) -> int: ...


@runtime_checkable
class MessageProvider(Protocol):
    """Object exposing a message bag (validators, form objects, other bags)."""

    def get_message_bag(self) -> MessageBagContract: ...
