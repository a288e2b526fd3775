from threading import Lock

from torch import as_tensor
from torch import int64
from torch import Tensor
from torch import zeros
from torch.nn import ModuleList

from wisard.config import MemoryConfig
from wisard.core.base import RAMComponent
from wisard.factories.memory import MemoryFactory


class Discriminator(RAMComponent):
	"""
	The learned memory of one class label: one RAM node per tuple position.

	- train(addresses): write addresses[i] into node i (exclusive, per-discriminator lock)
	- score(addresses): number of nodes that contain their address, in [0, num_nodes]

	Node i always receives address i of the AddressMapper output, for every
	discriminator of a model.
	"""

	def __init__(self, num_nodes: int, addr_size: int, memory_config: MemoryConfig | None = None) -> None:
		super().__init__()
		assert num_nodes > 0
		self.num_nodes = int(num_nodes)
		self.addr_size = int(addr_size)
		self.memory_config = memory_config or MemoryConfig()
		self.nodes = ModuleList(MemoryFactory.create(self.memory_config, self.addr_size) for _ in range(self.num_nodes))
		self._lock = Lock()

	def __repr__(self):
		return (
			f"Discriminator"
			f"("
			f"nodes={self.num_nodes}, "
			f"addr_size={self.addr_size}, "
			f"backend={self.memory_config.backend.name}, "
			f"written={self.written()}"
			f")"
		)

	def __str__(self):
		lines = [f"=== Discriminator ({self.num_nodes} nodes) ==="]
		for i, node in enumerate(self.nodes):
			lines.append(f"\tnode {i}: {node!r}")
		return "\n".join(lines)

	# Locks cannot be pickled or deep-copied
	def __getstate__(self):
		state = self.__dict__.copy()
		state.pop('_lock', None)
		return state

	def __setstate__(self, state):
		super().__setstate__(state)
		self._lock = Lock()

	def _check_addresses(self, addresses: Tensor) -> Tensor:
		if not isinstance(addresses, Tensor):
			addresses = as_tensor(addresses, dtype=int64)
		assert addresses.shape[-1] == self.num_nodes, \
			f"got {addresses.shape[-1]} addresses for {self.num_nodes} nodes (mismatched model construction)"
		return addresses

	def _write(self, addresses: list[int]) -> None:
		# Pairs are built before any write so a wrong-length row changes nothing
		pairs = list(zip(self.nodes, addresses, strict=True))
		for node, address in pairs:
			node.write(address)

	def train(self, addresses: Tensor | bool = True):
		"""
		Write one address per node.

		Args:
			addresses: [num_nodes] int64 addresses in tuple order

		A bool argument keeps nn.Module.train(mode) semantics.
		"""
		if isinstance(addresses, bool):
			return super().train(addresses)

		addresses = self._check_addresses(addresses)
		assert addresses.ndim == 1, "train() takes the addresses of a single sample"
		with self._lock:
			self._write(addresses.tolist())

	def train_batch(self, addresses: Tensor) -> None:
		"""
		Args:
			addresses: [batch, num_nodes] int64
		"""
		addresses = self._check_addresses(addresses)
		with self._lock:
			for row in addresses.tolist():
				self._write(row)

	def forward(self, addresses: Tensor, threshold: int | None = None) -> Tensor:
		"""
		Args:
			addresses: [batch, num_nodes] int64
			threshold: Membership threshold override (bleaching)

		Returns:
			[batch] int64 scores in [0, num_nodes]
		"""
		addresses = self._check_addresses(addresses)
		scores = zeros(addresses.shape[0], dtype=int64)
		for node, column in zip(self.nodes, addresses.unbind(dim=1), strict=True):
			scores += node(column, threshold).to(device=scores.device, dtype=int64)
		return scores

	def score(self, addresses: Tensor, threshold: int | None = None) -> int:
		"""Number of nodes whose address was seen in training (single sample)."""
		addresses = self._check_addresses(addresses)
		assert addresses.ndim == 1, "score() takes the addresses of a single sample"
		return int(self.forward(addresses.unsqueeze(0), threshold)[0].item())

	def max_count(self) -> int:
		"""Highest counter value any node can hold (1 for bit-sets)."""
		return getattr(self.nodes[0], 'max_count', 1)

	def written(self) -> int:
		"""Total occupied cells across nodes."""
		return sum(node.written() for node in self.nodes)

	def fill_ratio(self) -> float:
		return self.written() / sum(node.num_cells for node in self.nodes)
