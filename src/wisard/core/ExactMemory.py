from torch import int64
from torch import Tensor
from torch import zeros
from torch import bool as tbool

from wisard.core.base import MemoryNode


class ExactMemory(MemoryNode):
	"""
	Dense bit-set RAM node.

	- cells: [2^addr_size] bool, True once the address has been written
	- contains() is exact: no false positives, no false negatives
	- storage is O(2^addr_size) regardless of how much data is seen
	"""

	def __init__(self, addr_size: int) -> None:
		super().__init__(addr_size, threshold=0)
		self.register_buffer("cells", zeros(self.address_space, dtype=tbool))

	def __repr__(self):
		return (
			f"ExactMemory"
			f"("
			f"addr_size={self.addr_size}, "
			f"written={self.written()}"
			f")"
		)

	@property
	def num_cells(self) -> int:
		return self.address_space

	def write(self, address: int) -> None:
		self.cells[self._check_address(address)] = True

	def counts(self, addresses: Tensor) -> Tensor:
		return self.cells[addresses].to(int64)

	def forward(self, addresses: Tensor, threshold: int | None = None) -> Tensor:
		if threshold:
			return self.counts(addresses) > threshold
		return self.cells[addresses]

	def written(self) -> int:
		return int(self.cells.sum().item())

	def reset(self) -> None:
		self.cells.zero_()
