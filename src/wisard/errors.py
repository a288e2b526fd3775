"""
Exception taxonomy for WiSARD models.

All user-facing errors derive from WisardError and also from ValueError,
so code that already guards model calls with `except ValueError` keeps working.

	WisardError
	├── ConfigurationError    invalid construction parameters (fatal)
	├── EncodingError         malformed or out-of-domain raw input (per sample)
	│   ├── LengthMismatchError
	│   └── UnknownCategoryError
	└── UnknownLabelError     fit() with a label outside the declared set

Internal invariant violations (e.g. an address count that does not match a
discriminator's node count) are programming errors and surface as AssertionError.
"""

from typing import Any, Hashable


class WisardError(Exception):
	"""Base class for all WiSARD errors."""


class ConfigurationError(WisardError, ValueError):
	"""Invalid construction parameters. Never recoverable by retrying."""


class EncodingError(WisardError, ValueError):
	"""A raw sample could not be encoded. Model state is never touched."""


class LengthMismatchError(EncodingError):
	"""Input has the wrong number of bits (or features)."""

	def __init__(self, expected: int, actual: int, what: str = "bits"):
		self.expected = expected
		self.actual = actual
		super().__init__(f"Expected {expected} {what}, got {actual}")


class UnknownCategoryError(EncodingError):
	"""Categorical value outside the declared category set."""

	def __init__(self, category: Any):
		self.category = category
		super().__init__(f"Unknown category: {category!r}")


class UnknownLabelError(WisardError, ValueError):
	"""Label outside the model's declared label set."""

	def __init__(self, label: Hashable, labels: list):
		self.label = label
		super().__init__(f"Unknown label {label!r}. Declared labels: {labels}")


__all__ = [
	'WisardError',
	'ConfigurationError',
	'EncodingError',
	'LengthMismatchError',
	'UnknownCategoryError',
	'UnknownLabelError',
]
