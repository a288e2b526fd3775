"""
Binary pass-through encoder: the value already is the bit-vector.
"""

from typing import Any

from torch import Tensor
from torch import bool as tbool

from wisard.enums import EncodingMode
from wisard.errors import ConfigurationError, EncodingError, LengthMismatchError
from wisard.representations.base import BitEncoder, as_flat_tensor


class BinaryEncoder(BitEncoder):
	"""
	Validates and converts an already-binary input.

	Accepts lists, tuples, numpy arrays or tensors of {0, 1} / bool values.
	Multi-dimensional inputs are flattened row-major, so a 28x28 binary image
	is accepted by BinaryEncoder(784).
	"""

	mode = EncodingMode.BINARY

	def __init__(self, size: int):
		super().__init__()
		if size <= 0:
			raise ConfigurationError(f"size must be positive, got {size}")
		self._size = int(size)

	@property
	def n_bits(self) -> int:
		return self._size

	def encode(self, value: Any) -> Tensor:
		bits = as_flat_tensor(value)
		if bits.numel() != self._size:
			raise LengthMismatchError(self._size, bits.numel())
		if bits.dtype != tbool:
			if not ((bits == 0) | (bits == 1)).all():
				raise EncodingError("Binary input must only contain 0/1 values")
			bits = bits != 0
		return bits

	def get_config(self) -> dict:
		return {'mode': int(self.mode), 'size': self._size}

	def __repr__(self) -> str:
		return f"BinaryEncoder(bits={self._size})"
