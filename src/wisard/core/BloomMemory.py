"""
Counting Bloom filter RAM node.

Memory-efficient storage for large address spaces where each node only
ever sees a small fraction of its 2^addr_size addresses.

Key differences from dense memories:
- Storage: O(capacity) cells instead of O(2^addr_size)
- Lookup: k hashed cells per address, membership = min(counters) > threshold
- False positives with probability ~error_rate at `capacity` distinct
  addresses; never false negatives

Sizing (capacity m, error rate p):
	size       = ceil(-m * ln(p) / ln(2)^2)
	num_hashes = max(1, round(size / m * ln(2)))

Repeated writes of one address only raise its own counters, so the set of
occupied cells, and with it the false-positive rate at threshold 0, does
not grow.
"""

from math import ceil, log

from torch import int64
from torch import tensor
from torch import Tensor
from torch import uint8
from torch import zeros

from wisard.core.base import MemoryNode
from wisard.core.hashing import bloom_indices


def bloom_size(capacity: int, error_rate: float) -> int:
	return max(1, ceil(-capacity * log(error_rate) / (log(2) ** 2)))


def bloom_num_hashes(size: int, capacity: int) -> int:
	return max(1, round(size / capacity * log(2)))


class BloomMemory(MemoryNode):
	"""Probabilistic RAM node backed by a counting Bloom filter."""

	def __init__(
		self,
		addr_size: int,
		capacity: int,
		error_rate: float = 0.01,
		counter_bits: int = 8,
		threshold: int = 0,
		hash_seed: int = 0,
	) -> None:
		"""
		Args:
			addr_size: Address width in bits
			capacity: Expected number of distinct addresses written
			error_rate: Target false-positive probability at `capacity`
			counter_bits: Width of each saturating counter (1..8)
			threshold: Membership requires min(counters) > threshold
			hash_seed: Seed of the hash family
		"""
		super().__init__(addr_size, threshold=threshold)
		assert capacity > 0
		assert 0.0 < error_rate < 1.0
		assert 1 <= counter_bits <= 8

		self.capacity = int(capacity)
		self.error_rate = float(error_rate)
		self.counter_bits = int(counter_bits)
		self.max_count = (1 << self.counter_bits) - 1
		self.hash_seed = int(hash_seed)
		self.size = bloom_size(self.capacity, self.error_rate)
		self.num_hashes = bloom_num_hashes(self.size, self.capacity)
		assert threshold < self.max_count

		self.register_buffer("counters", zeros(self.size, dtype=uint8))

	def __repr__(self):
		return (
			f"BloomMemory"
			f"("
			f"addr_size={self.addr_size}, "
			f"size={self.size}, "
			f"num_hashes={self.num_hashes}, "
			f"capacity={self.capacity}, "
			f"error_rate={self.error_rate}, "
			f"written={self.written()}"
			f")"
		)

	@property
	def num_cells(self) -> int:
		return self.size

	def _indices(self, address: int) -> list[int]:
		return bloom_indices(address, self.num_hashes, self.size, self.hash_seed)

	def write(self, address: int) -> None:
		address = self._check_address(address)
		# set() so a cell hit twice by one address is counted once
		for index in set(self._indices(address)):
			if int(self.counters[index]) < self.max_count:
				self.counters[index] += 1

	def counter(self, address: int) -> int:
		"""Estimated write count of `address` (never an underestimate)."""
		return int(self.counts(tensor([self._check_address(address)], dtype=int64))[0].item())

	def counts(self, addresses: Tensor) -> Tensor:
		if addresses.numel() == 0:
			return zeros(0, dtype=int64, device=self.counters.device)
		indices = tensor(
			[self._indices(int(address)) for address in addresses.tolist()],
			dtype=int64,
			device=self.counters.device,
		)												# [K, num_hashes]
		return self.counters[indices].to(int64).min(dim=1).values

	def written(self) -> int:
		return int((self.counters > 0).sum().item())

	def false_positive_rate(self) -> float:
		"""Current false-positive estimate at threshold 0: fill_ratio ^ num_hashes."""
		return self.fill_ratio() ** self.num_hashes

	def reset(self) -> None:
		self.counters.zero_()
