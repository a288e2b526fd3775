"""
Memory Factory

Factory for creating RAM nodes based on MemoryConfig.backend.
"""

from wisard.config import MemoryConfig
from wisard.enums import MemoryBackend


class MemoryFactory:
	"""Factory for creating RAM node backends."""

	@staticmethod
	def create(config: MemoryConfig, addr_size: int):
		"""
		Create one RAM node.

		Args:
			config: Memory backend configuration
			addr_size: Address width of the node

		Returns:
			MemoryNode instance
		"""
		from wisard.core.ExactMemory import ExactMemory
		from wisard.core.CountingMemory import CountingMemory
		from wisard.core.BloomMemory import BloomMemory

		config.validate_for(addr_size)

		match config.backend:
			case MemoryBackend.EXACT:
				return ExactMemory(addr_size)
			case MemoryBackend.COUNTING:
				return CountingMemory(addr_size, counter_bits=config.counter_bits, threshold=config.threshold)
			case MemoryBackend.BLOOM:
				return BloomMemory(
					addr_size,
					capacity=config.capacity_for(addr_size),
					error_rate=config.error_rate,
					counter_bits=config.counter_bits,
					threshold=config.threshold,
					hash_seed=config.hash_seed,
				)
			case _:
				raise ValueError(f"Unsupported MemoryBackend: {config.backend}")
