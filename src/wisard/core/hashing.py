"""
Deterministic 64-bit mixing and pseudo-random streams.

The address permutation must be rebuilt bit-exactly from a stored seed on
any platform and any torch/numpy version, so it does not rely on library
RNGs. Everything here is SplitMix64 (Steele, Lea & Flood), with the
Stafford "variant 13" finalizer:

	state += 0x9E3779B97F4A7C15
	z = state
	z = (z ^ (z >> 30)) * 0xBF58476D1CE4E5B9
	z = (z ^ (z >> 27)) * 0x94D049BB133111EB
	return z ^ (z >> 31)

All arithmetic is modulo 2^64. PERMUTATION_VERSION identifies this exact
procedure; bump it if the algorithm ever changes.
"""

PERMUTATION_VERSION = 1

MASK64 = (1 << 64) - 1
GOLDEN_GAMMA = 0x9E3779B97F4A7C15


def mix64(z: int) -> int:
	"""SplitMix64 finalizer: bijective avalanche mix of a 64-bit integer."""
	z &= MASK64
	z = ((z ^ (z >> 30)) * 0xBF58476D1CE4E5B9) & MASK64
	z = ((z ^ (z >> 27)) * 0x94D049BB133111EB) & MASK64
	return z ^ (z >> 31)


class SplitMix64:
	"""SplitMix64 pseudo-random generator."""

	def __init__(self, seed: int):
		self.state = seed & MASK64

	def next_u64(self) -> int:
		self.state = (self.state + GOLDEN_GAMMA) & MASK64
		return mix64(self.state)

	def below(self, bound: int) -> int:
		"""Integer in [0, bound). Modulo reduction; bias is below 2^-40 for bound < 2^24."""
		return self.next_u64() % bound


def permutation(n: int, seed: int) -> list[int]:
	"""
	Seeded Durstenfeld shuffle of range(n).

		for i = n-1 down to 1:
			j = next_u64() mod (i + 1)
			swap(i, j)
	"""
	rng = SplitMix64(seed)
	perm = list(range(n))
	for i in range(n - 1, 0, -1):
		j = rng.below(i + 1)
		perm[i], perm[j] = perm[j], perm[i]
	return perm


def bloom_indices(item: int, num_hashes: int, size: int, seed: int = 0) -> list[int]:
	"""
	Cell indices of `item` in a Bloom filter of `size` cells.

	Double hashing (Kirsch & Mitzenmacher): index_i = (h1 + i * h2) mod size,
	with h1, h2 two SplitMix64 mixes of the item and an odd h2.
	"""
	h1 = mix64((item + GOLDEN_GAMMA) ^ mix64(seed))
	h2 = mix64(h1 ^ GOLDEN_GAMMA) | 1
	return [(h1 + i * h2) % size for i in range(num_hashes)]
