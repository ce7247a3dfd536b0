"""Pydantic schema for the raw ``key -> [message, ...]`` mapping."""
from __future__ import annotations

from typing import Any, Dict, List, Union

from pydantic import RootModel, StrictStr

from .typing import Messages


class MessagesModel(RootModel[Dict[StrictStr, List[StrictStr]]]):
    """Serialized form of a message bag: a JSON object of string lists."""


def validate_messages(obj: Any) -> Messages:
    """Validate a raw mapping and return a fresh ``dict`` with copied lists.

    Raises ``pydantic.ValidationError`` if a key or message is not a string.
    """
    return MessagesModel.model_validate(obj).root


def parse_messages_json(data: Union[str, bytes]) -> Messages:
    """Parse and validate the JSON form produced by ``MessageBag.to_json``."""
    return MessagesModel.model_validate_json(data).root
