"""
Categorical encoder over a fixed, pre-declared category set.

	categories = ["low", "mid", "high"]

	ONE_HOT:      "mid" -> [0, 1, 0]
	THERMOMETER:  "mid" -> [1, 1, 0]

Thermometer layout suits ordinal categories: neighbouring categories share
all but one bit, so RAM nodes that miss the differing bit generalize
across them.
"""

from typing import Any, Hashable, Sequence

from torch import Tensor
from torch import zeros
from torch import bool as tbool

from wisard.enums import CategoricalMode, EncodingMode
from wisard.errors import ConfigurationError, UnknownCategoryError
from wisard.representations.base import BitEncoder


class CategoricalEncoder(BitEncoder):
	"""Encodes one categorical value into len(categories) bits."""

	mode = EncodingMode.CATEGORICAL

	def __init__(
		self,
		categories: Sequence[Hashable],
		categorical_mode: CategoricalMode = CategoricalMode.ONE_HOT,
	):
		"""
		Args:
			categories: Ordered category set (order fixes the bit layout)
			categorical_mode: ONE_HOT or THERMOMETER layout
		"""
		super().__init__()
		categories = list(categories)
		if not categories:
			raise ConfigurationError("categories must not be empty")

		index = {}
		for i, category in enumerate(categories):
			if category in index:
				raise ConfigurationError(f"Duplicate category: {category!r}")
			index[category] = i

		self.categories = categories
		self.categorical_mode = CategoricalMode(categorical_mode)
		self._index = index

	@property
	def n_bits(self) -> int:
		return len(self.categories)

	def index_of(self, value: Any) -> int:
		if isinstance(value, Tensor) and value.ndim == 0:
			value = value.item()
		try:
			return self._index[value]
		except (KeyError, TypeError):
			raise UnknownCategoryError(value) from None

	def encode(self, value: Any) -> Tensor:
		i = self.index_of(value)
		bits = zeros(self.n_bits, dtype=tbool)
		match self.categorical_mode:
			case CategoricalMode.ONE_HOT:
				bits[i] = True
			case CategoricalMode.THERMOMETER:
				bits[:i + 1] = True
		return bits

	def get_config(self) -> dict:
		return {
			'mode': int(self.mode),
			'categories': list(self.categories),
			'categorical_mode': int(self.categorical_mode),
		}

	def __repr__(self) -> str:
		return f"CategoricalEncoder(categories={len(self.categories)}, mode={self.categorical_mode.name})"
