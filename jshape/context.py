"""
Strictness of the value model.

By default the validators accept Python-native look-alikes of JSON values:
any Mapping is an object, any non-string Sequence is an array and any real
number (bool excluded) is a number. Strict mode narrows these to exactly
what ``json.loads`` returns. The setting is held in a ContextVar, so it
follows threads and asyncio tasks rather than being process-global.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

_strict_values: ContextVar[bool] = ContextVar("jshape_strict_values", default=False)


def is_strict() -> bool:
    """Whether value predicates accept only the exact json.loads types."""
    return _strict_values.get()


@contextmanager
def validation_context(*, strict: bool = False) -> Iterator[None]:
    """
    Scope a value-model setting to a block.

    Example:
        numbers = Array(Number())
        numbers.validate((1, 2.5))      # [] (a tuple is a Sequence)

        with validation_context(strict=True):
            numbers.validate((1, 2.5))  # [value_must_be_array]
            numbers.validate([1, 2.5])  # []
    """
    token = _strict_values.set(strict)
    try:
        yield
    finally:
        _strict_values.reset(token)
