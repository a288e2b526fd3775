"""
Concatenating encoder for records with heterogeneous fields.

	encoder = ConcatEncoder([
		CategoricalEncoder(["red", "green", "blue"]),
		ThermometerEncoder.from_range(0.0, 100.0, resolution=8),
	])
	encoder.encode(("green", 42.0))		# [3 + 8] bits
"""

from typing import Any, Sequence

from torch import cat, Tensor
from torch.nn import ModuleList

from wisard.enums import EncodingMode
from wisard.errors import ConfigurationError, LengthMismatchError
from wisard.representations.base import BitEncoder


class ConcatEncoder(BitEncoder):
	"""Encodes a record field by field and concatenates the bits."""

	mode = EncodingMode.CONCAT

	def __init__(self, encoders: Sequence[BitEncoder]):
		super().__init__()
		if not encoders:
			raise ConfigurationError("ConcatEncoder needs at least one sub-encoder")
		self.encoders = ModuleList(encoders)

	@classmethod
	def from_config(cls, config: dict) -> "ConcatEncoder":
		from wisard.factories.encoder import EncoderFactory
		return cls([EncoderFactory.from_config(sub) for sub in config['encoders']])

	@property
	def n_bits(self) -> int:
		return sum(encoder.n_bits for encoder in self.encoders)

	def encode(self, value: Any) -> Tensor:
		if isinstance(value, (str, bytes)) or not hasattr(value, '__len__'):
			raise LengthMismatchError(len(self.encoders), 1, what="fields")
		if len(value) != len(self.encoders):
			raise LengthMismatchError(len(self.encoders), len(value), what="fields")
		return cat([encoder.encode(field) for encoder, field in zip(self.encoders, value)])

	def get_config(self) -> dict:
		return {
			'mode': int(self.mode),
			'encoders': [encoder.get_config() for encoder in self.encoders],
		}

	def __repr__(self) -> str:
		inner = ", ".join(repr(encoder) for encoder in self.encoders)
		return f"ConcatEncoder([{inner}])"
