"""Validation helpers."""
from typing import Type


def ensure(condition: bool, message: str, exc_type: Type[Exception] = ValueError) -> None:
    if not condition:
        raise exc_type(message)
