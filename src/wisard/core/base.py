"""
RAM Base Classes

Common interfaces for the WiSARD building blocks.

1. RAMComponent - Tensor→Tensor modules (AddressMapper, MemoryNode, Discriminator)
2. MemoryNode   - RAM node storage backends (Exact, Counting, Bloom)

A memory node stores which addresses were observed at one tuple position
of one discriminator. All backends share one capability contract:

	write(address)                 record an address (idempotent in effect)
	contains(address) -> bool      membership query, never a false negative
	counts(addresses) -> Tensor    per-address multiplicity estimate
	forward(addresses) -> Tensor   vectorized membership: counts > threshold

Usage:
	class MyMemory(MemoryNode):
		def write(self, address: int) -> None: ...
		def counts(self, addresses: Tensor) -> Tensor: ...
		def written(self) -> int: ...
		def reset(self) -> None: ...
"""

from abc import ABC, abstractmethod

from torch import int64, tensor, Tensor
from torch.nn import Module


class RAMComponent(Module, ABC):
	"""
	Base class for low-level WiSARD components.

	Subclasses must implement:
	- forward(x: Tensor) -> Tensor
	"""

	@abstractmethod
	def forward(self, x: Tensor) -> Tensor:
		...


class MemoryNode(RAMComponent):
	"""
	Base class for RAM node backends.

	Subclasses must implement:
	- write(address: int) -> None
	- counts(addresses: Tensor) -> Tensor   [K] int64
	- written() -> int                      number of occupied cells
	- reset() -> None
	"""

	def __init__(self, addr_size: int, threshold: int = 0):
		super().__init__()
		assert addr_size > 0
		assert threshold >= 0
		self.addr_size = int(addr_size)
		self.threshold = int(threshold)

	@property
	def address_space(self) -> int:
		return 1 << self.addr_size

	def _check_address(self, address: int) -> int:
		address = int(address)
		assert 0 <= address < self.address_space, f"address {address} outside [0, 2^{self.addr_size})"
		return address

	@abstractmethod
	def write(self, address: int) -> None:
		...

	@abstractmethod
	def counts(self, addresses: Tensor) -> Tensor:
		"""
		Args:
			addresses: [K] int64 addresses in [0, 2^addr_size)

		Returns:
			[K] int64 stored counts (0 = never written)
		"""
		...

	@abstractmethod
	def written(self) -> int:
		...

	@abstractmethod
	def reset(self) -> None:
		...

	@property
	@abstractmethod
	def num_cells(self) -> int:
		...

	def fill_ratio(self) -> float:
		"""Fraction of storage cells in use."""
		return self.written() / self.num_cells

	def forward(self, addresses: Tensor, threshold: int | None = None) -> Tensor:
		"""
		Vectorized membership.

		Args:
			addresses: [K] int64
			threshold: Override the node's membership threshold (bleaching)

		Returns:
			[K] bool
		"""
		threshold = self.threshold if threshold is None else threshold
		return self.counts(addresses) > threshold

	def contains(self, address: int) -> bool:
		address = self._check_address(address)
		return bool(self.forward(tensor([address], dtype=int64, device=self._device()))[0])

	def _device(self):
		buffer = next(self.buffers(), None)
		return buffer.device if buffer is not None else None


__all__ = [
	'RAMComponent',
	'MemoryNode',
]
