"""
Configuration Dataclasses

Typed configuration for the memory backends of a WiSARD model.
Validation happens at construction time, so a bad configuration fails
before any discriminator is allocated.
"""

from dataclasses import dataclass, asdict

from wisard.enums import MemoryBackend
from wisard.errors import ConfigurationError


# Addresses are int64 tensors
MAX_ADDR_SIZE = 62

# Dense backends allocate 2^addr_size cells per node
MAX_DENSE_ADDR_SIZE = 30

# Bloom capacity used when none is given (capped at 2^addr_size)
DEFAULT_BLOOM_CAPACITY = 1024


@dataclass(frozen=True)
class MemoryConfig:
	"""
	Memory backend configuration shared by every node of every discriminator.

	Attributes:
		backend: Storage backend (EXACT, COUNTING or BLOOM)
		capacity: Expected distinct addresses per node (BLOOM only, None = default)
		error_rate: Target false-positive probability (BLOOM only)
		counter_bits: Width of each saturating counter, 1..8 (COUNTING, BLOOM)
		threshold: A cell is a member when its count exceeds this value
		hash_seed: Seed of the Bloom hash family (BLOOM only)
	"""
	backend: MemoryBackend = MemoryBackend.EXACT
	capacity: int | None = None
	error_rate: float = 0.01
	counter_bits: int = 8
	threshold: int = 0
	hash_seed: int = 0

	def __post_init__(self):
		# Accept plain ints (e.g. from a saved config)
		object.__setattr__(self, 'backend', MemoryBackend(self.backend))

		if not 0.0 < self.error_rate < 1.0:
			raise ConfigurationError(f"error_rate must be in (0, 1), got {self.error_rate}")
		if not 1 <= self.counter_bits <= 8:
			raise ConfigurationError(f"counter_bits must be in [1, 8], got {self.counter_bits}")
		if self.capacity is not None and self.capacity <= 0:
			raise ConfigurationError(f"capacity must be positive, got {self.capacity}")
		if self.threshold < 0:
			raise ConfigurationError(f"threshold must be non-negative, got {self.threshold}")
		if self.backend == MemoryBackend.EXACT and self.threshold != 0:
			raise ConfigurationError("EXACT memory is a bit-set: threshold must be 0")
		if self.backend.is_counting and self.threshold >= self.max_count:
			raise ConfigurationError(
				f"threshold={self.threshold} can never be exceeded by "
				f"{self.counter_bits}-bit counters (max {self.max_count})"
			)

	@property
	def max_count(self) -> int:
		"""Saturation value of a counter."""
		return (1 << self.counter_bits) - 1

	def validate_for(self, addr_size: int) -> None:
		"""Check that this configuration can back nodes of `addr_size` bits."""
		if self.backend.is_dense and addr_size > MAX_DENSE_ADDR_SIZE:
			raise ConfigurationError(
				f"{self.backend.name} memory needs 2^{addr_size} cells per node; "
				f"use addr_size <= {MAX_DENSE_ADDR_SIZE} or the BLOOM backend"
			)

	def capacity_for(self, addr_size: int) -> int:
		"""Expected distinct addresses per node, never more than the address space."""
		capacity = self.capacity if self.capacity is not None else DEFAULT_BLOOM_CAPACITY
		return min(capacity, 1 << addr_size)

	def to_dict(self) -> dict:
		config = asdict(self)
		config['backend'] = int(self.backend)
		return config

	@classmethod
	def from_dict(cls, config: dict) -> "MemoryConfig":
		return cls(**config)
