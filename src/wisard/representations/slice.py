"""
Slice encoder: keeps a bit range of fixed-width integer values.

Typical use is dropping the low-order bits of 8-bit pixels:
SliceEncoder(value_bits=8, start=5, end=8, n_values=784) keeps the three
most significant bits of every pixel.
"""

from typing import Any

from torch import Tensor, arange, float64, int64
from torch import bool as tbool

from wisard.enums import EncodingMode
from wisard.errors import ConfigurationError, EncodingError, LengthMismatchError
from wisard.representations.base import BitEncoder, as_flat_tensor

MAX_VALUE_BITS = 62


class SliceEncoder(BitEncoder):
	"""
	Keeps bits [start, end) of each of n_values integers of value_bits bits.

	Bit i of a value is its i-th least significant bit. Two input forms:
		- n_values integers in [0, 2^value_bits)
		- n_values * value_bits {0, 1} values, each group least significant bit first
	Output is n_values * (end - start) bits, value by value, lowest kept bit first.
	"""

	mode = EncodingMode.SLICE

	def __init__(self, value_bits: int, start: int, end: int, n_values: int = 1):
		super().__init__()
		if not 1 <= value_bits <= MAX_VALUE_BITS:
			raise ConfigurationError(f"value_bits must be in [1, {MAX_VALUE_BITS}], got {value_bits}")
		if not 0 <= start < end <= value_bits:
			raise ConfigurationError(f"need 0 <= start < end <= value_bits, got start={start} end={end} value_bits={value_bits}")
		if n_values <= 0:
			raise ConfigurationError(f"n_values must be positive, got {n_values}")
		self.value_bits = int(value_bits)
		self.start = int(start)
		self.end = int(end)
		self.n_values = int(n_values)

	@property
	def n_bits(self) -> int:
		return self.n_values * (self.end - self.start)

	def encode(self, value: Any) -> Tensor:
		flat = as_flat_tensor(value)
		if flat.numel() == self.n_values * self.value_bits:
			return self._slice_bits(flat)
		if flat.numel() == self.n_values:
			return self._slice_ints(flat)
		raise LengthMismatchError(self.n_values * self.value_bits, flat.numel())

	def _slice_bits(self, bits: Tensor) -> Tensor:
		if bits.dtype != tbool:
			if not ((bits == 0) | (bits == 1)).all():
				raise EncodingError("Bit input must only contain 0/1 values")
			bits = bits != 0
		return bits.reshape(self.n_values, self.value_bits)[:, self.start:self.end].reshape(-1)

	def _slice_ints(self, values: Tensor) -> Tensor:
		if values.dtype == tbool or values.is_complex():
			raise EncodingError(f"Slice input must be integers, got {values.dtype}")
		if values.is_floating_point() and not (values == values.round()).all():
			raise EncodingError("Slice input must be integers")
		values = values.to(float64) if values.is_floating_point() else values.to(int64)
		if (values < 0).any() or (values >= 2 ** self.value_bits).any():
			raise EncodingError(f"Slice input must be in [0, 2^{self.value_bits})")
		shifts = arange(self.start, self.end, dtype=int64)
		return ((values.to(int64).unsqueeze(1) >> shifts) & 1).bool().reshape(-1)

	def get_config(self) -> dict:
		return {
			'mode': int(self.mode),
			'value_bits': self.value_bits,
			'start': self.start,
			'end': self.end,
			'n_values': self.n_values,
		}

	def __repr__(self) -> str:
		return f"SliceEncoder(value_bits={self.value_bits}, bits=[{self.start}, {self.end}), values={self.n_values})"
