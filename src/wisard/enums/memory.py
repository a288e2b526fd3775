"""
Memory-related enumerations.
"""

from enum import IntEnum


class MemoryBackend(IntEnum):
	"""
	Storage backend for the RAM nodes of a discriminator:
	- EXACT    = 0   dense bit-set of 2^addr_size cells
	- COUNTING = 1   dense saturating counters with a membership threshold
	- BLOOM    = 2   counting Bloom filter with a bounded false-positive rate
	"""
	EXACT		= 0
	COUNTING	= 1
	BLOOM		= 2

	@property
	def is_dense(self) -> bool:
		"""Dense backends allocate every address up front."""
		return self in (MemoryBackend.EXACT, MemoryBackend.COUNTING)

	@property
	def is_counting(self) -> bool:
		"""Counting backends keep multiplicities (needed for bleaching)."""
		return self in (MemoryBackend.COUNTING, MemoryBackend.BLOOM)
