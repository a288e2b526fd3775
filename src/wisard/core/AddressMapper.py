"""
Address Mapper: bit-vector → one integer address per RAM node.

Construction:
	1. permutation of the input positions 0..input_size-1 (seeded SplitMix64
	   Durstenfeld shuffle, or identity when permute=False)
	2. the permuted positions are cut into consecutive tuples of addr_size
	3. the last tuple is zero-padded: missing slots point at a constant-zero
	   pseudo bit (index input_size)

Mapping:
	address[t] = bits of tuple t read MSB-first
	e.g. tuple bits [1, 0, 1] -> 0b101 = 5

With input_size=5, addr_size=2 and the identity permutation:
	tuples = [[0, 1], [2, 3], [4, PAD]]
	bits [1, 1, 0, 1, 1] -> addresses [3, 1, 2]

The same tuple order indexes the RAM nodes of every discriminator.
"""

from math import ceil

from torch import arange
from torch import cat
from torch import int64
from torch import long
from torch import tensor
from torch import Tensor
from torch import zeros
from torch import bool as tbool

from wisard.core import hashing
from wisard.core.base import RAMComponent


class AddressMapper(RAMComponent):
	"""
	Deterministic bit-vector → addresses mapping, shared read-only by all discriminators.

	- permutation: [input_size] long, the shuffled input positions
	- tuples: [num_tuples, addr_size] long, positions read by each RAM node
	  (pad slots hold input_size)

	Both are persistent buffers: a reloaded model reads its permutation from
	the saved state, never from a fresh shuffle.
	"""

	def __init__(self, input_size: int, addr_size: int, seed: int, permute: bool = True) -> None:
		super().__init__()
		assert input_size > 0
		assert addr_size > 0

		self.input_size = int(input_size)
		self.addr_size = int(addr_size)
		self.seed = int(seed)
		self.permute = bool(permute)
		self.num_tuples = ceil(self.input_size / self.addr_size)
		self.pad_index = self.input_size

		order = hashing.permutation(self.input_size, self.seed) if self.permute else list(range(self.input_size))
		padded = order + [self.pad_index] * (self.num_tuples * self.addr_size - self.input_size)

		self.register_buffer("permutation", tensor(order, dtype=long))
		self.register_buffer("tuples", tensor(padded, dtype=long).view(self.num_tuples, self.addr_size))
		# MSB-first for sanity... [1, 0] => 2, not 1
		self.register_buffer("weights", 2 ** arange(self.addr_size - 1, -1, -1, dtype=int64), persistent=False)

	def __repr__(self):
		return (
			f"AddressMapper"
			f"("
			f"input_size={self.input_size}, "
			f"addr_size={self.addr_size}, "
			f"tuples={self.num_tuples}, "
			f"permute={self.permute}"
			f")"
		)

	def forward(self, bits: Tensor) -> Tensor:
		"""
		Args:
			bits: [input_size] or [batch, input_size], bool or {0,1}

		Returns:
			[num_tuples] or [batch, num_tuples] int64 addresses in [0, 2^addr_size)
		"""
		single = bits.ndim == 1
		if single:
			bits = bits.unsqueeze(0)
		assert bits.ndim == 2 and bits.shape[1] == self.input_size, \
			f"expected [batch, {self.input_size}] bits, got {tuple(bits.shape)}"

		bits = bits.to(device=self.tuples.device, dtype=tbool)
		pad = zeros(bits.shape[0], 1, dtype=tbool, device=bits.device)
		padded = cat([bits, pad], dim=1)											# [B, input_size + 1]
		tuple_bits = padded[:, self.tuples].to(int64)								# [B, num_tuples, addr_size]
		addresses = (tuple_bits * self.weights).sum(dim=-1)						# [B, num_tuples]
		return addresses[0] if single else addresses

	def positions(self) -> list[list[int]]:
		"""Input positions read by each tuple, pad slots excluded."""
		return [[i for i in row if i != self.pad_index] for row in self.tuples.tolist()]
