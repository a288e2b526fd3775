from torch import int64
from torch import Tensor
from torch import uint8
from torch import zeros

from wisard.core.base import MemoryNode


class CountingMemory(MemoryNode):
	"""
	Dense RAM node with saturating counters.

	- counters: [2^addr_size] uint8, incremented on every write, saturating
	  at 2^counter_bits - 1
	- an address is a member when its counter exceeds `threshold`

	With threshold=0 membership matches ExactMemory, while the counters keep
	the multiplicities needed for bleaching.
	"""

	def __init__(self, addr_size: int, counter_bits: int = 8, threshold: int = 0) -> None:
		super().__init__(addr_size, threshold=threshold)
		assert 1 <= counter_bits <= 8
		self.counter_bits = int(counter_bits)
		self.max_count = (1 << self.counter_bits) - 1
		assert threshold < self.max_count
		self.register_buffer("counters", zeros(self.address_space, dtype=uint8))

	def __repr__(self):
		return (
			f"CountingMemory"
			f"("
			f"addr_size={self.addr_size}, "
			f"counter_bits={self.counter_bits}, "
			f"threshold={self.threshold}, "
			f"written={self.written()}"
			f")"
		)

	@property
	def num_cells(self) -> int:
		return self.address_space

	def write(self, address: int) -> None:
		address = self._check_address(address)
		if int(self.counters[address]) < self.max_count:
			self.counters[address] += 1

	def counter(self, address: int) -> int:
		return int(self.counters[self._check_address(address)].item())

	def counts(self, addresses: Tensor) -> Tensor:
		return self.counters[addresses].to(int64)

	def written(self) -> int:
		return int((self.counters > 0).sum().item())

	def reset(self) -> None:
		self.counters.zero_()
