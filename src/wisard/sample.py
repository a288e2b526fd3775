"""
Samples and datasets.

A Sample pairs a value (a bit-vector, or a raw value understood by the
model's encoder) with an optional label. A Dataset is an ordered list of
samples with a few conveniences for training loops.
"""

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Iterator, Optional


@dataclass(frozen=True)
class Sample:
	"""
	Immutable (value, label) pair.

	Attributes:
		value: Bit-vector or raw value (list, tuple, numpy array, Tensor, scalar)
		label: Class label, None for unlabelled samples
	"""
	value: Any
	label: Optional[Hashable] = None


class Dataset:
	"""Ordered collection of samples."""

	def __init__(self, samples: Optional[Iterable[Sample]] = None):
		self._samples: list[Sample] = list(samples) if samples is not None else []

	@classmethod
	def from_pairs(cls, values: Iterable[Any], labels: Iterable[Hashable]) -> "Dataset":
		"""Build a dataset from parallel value/label iterables."""
		values = list(values)
		labels = list(labels)
		if len(values) != len(labels):
			raise ValueError(f"Got {len(values)} values but {len(labels)} labels")
		return cls(Sample(value, label) for value, label in zip(values, labels))

	def append(self, sample: Sample) -> None:
		self._samples.append(sample)

	def labels(self) -> set:
		"""Distinct labels present in the dataset (unlabelled samples ignored)."""
		return {sample.label for sample in self._samples if sample.label is not None}

	def __len__(self) -> int:
		return len(self._samples)

	def __iter__(self) -> Iterator[Sample]:
		return iter(self._samples)

	def __getitem__(self, index: int) -> Sample:
		return self._samples[index]

	def __repr__(self) -> str:
		return f"Dataset(samples={len(self._samples)}, labels={len(self.labels())})"
