"""
Bit Encoder base class.

A bit encoder is the first stage of the pipeline:
	raw sample → BitEncoder → bit-vector → AddressMapper → addresses

Encoders are pure functions of (value, configuration). They are
torch.nn.Module subclasses so that any configuration tensors (e.g.
thermometer break points) live in buffers and travel with the model's
state_dict.
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable

import numpy as np
from torch import as_tensor, stack, zeros, Tensor
from torch import bool as tbool
from torch.nn import Module

from wisard.enums import EncodingMode
from wisard.errors import EncodingError


def as_flat_tensor(value: Any) -> Tensor:
	"""
	Convert a list, tuple, numpy array, scalar or Tensor to a 1-D CPU tensor.
	Multi-dimensional inputs (e.g. images) are flattened row-major.
	"""
	if isinstance(value, Tensor):
		tensor = value.detach().cpu()
	else:
		try:
			tensor = as_tensor(np.asarray(value))
		except (TypeError, ValueError) as e:
			raise EncodingError(f"Cannot convert {type(value).__name__} to a tensor: {e}") from e
	return tensor.reshape(-1)


class BitEncoder(Module, ABC):
	"""
	Base class for raw value → bit-vector encoders.

	Subclasses must implement:
	- n_bits: length of every encoded bit-vector
	- encode(value) -> [n_bits] bool tensor
	- get_config() -> dict (must include 'mode')
	"""

	mode: EncodingMode

	@property
	@abstractmethod
	def n_bits(self) -> int:
		...

	@abstractmethod
	def encode(self, value: Any) -> Tensor:
		"""
		Encode a single raw value.

		Returns:
			[n_bits] bool tensor

		Raises:
			EncodingError: value is malformed or outside the encoder's domain
		"""
		...

	@abstractmethod
	def get_config(self) -> dict:
		...

	@classmethod
	def from_config(cls, config: dict) -> "BitEncoder":
		params = {k: v for k, v in config.items() if k != 'mode'}
		return cls(**params)

	def encode_batch(self, values: Iterable[Any]) -> Tensor:
		"""
		Encode several values.

		Returns:
			[N, n_bits] bool tensor
		"""
		encoded = [self.encode(value) for value in values]
		if not encoded:
			return zeros((0, self.n_bits), dtype=tbool)
		return stack(encoded, dim=0)

	def forward(self, value: Any) -> Tensor:
		return self.encode(value)
