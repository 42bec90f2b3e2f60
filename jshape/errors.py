"""
Exceptions raised by jshape.

Validation itself never raises for malformed data; it returns violations.
These exceptions cover programmer errors at composition time and the
opt-in ``assert_valid`` entry point.
"""

from __future__ import annotations

from typing import Iterable

from .types import Violation


class SchemaError(ValueError):
    """A validator tree was composed incorrectly."""


class ValidationFailed(ValueError):
    """Raised by ``Validator.assert_valid`` when a value is rejected."""

    def __init__(self, violations: Iterable[Violation]):
        self.violations = list(violations)
        messages = [str(v) for v in self.violations]
        super().__init__(f"Validation failed: {'; '.join(messages)}")
