"""
WiSARD: Wilkie, Stonham & Aleksander's Recognition Device.

A weightless classifier with one discriminator per label:

	raw sample → BitEncoder → bits → AddressMapper → addresses
	fit:     addresses written into the sample label's discriminator
	predict: addresses scored against every discriminator, highest score wins

Ties are broken by label order: the first label (in the model's label order)
among the maximum scores wins. Labels given as a sequence keep their order;
labels given as a set are sorted.

Usage:
	model = WiSARD(input_size=8, addr_size=2, labels=["cold", "hot"], permute=False)
	model.fit(Sample([1, 1, 1, 0, 0, 0, 0, 0], "cold"))
	model.fit(Sample([0, 0, 0, 0, 1, 1, 1, 1], "hot"))
	model.predict([1, 1, 1, 0, 0, 0, 0, 0])          # "cold"
	model.predict_scores([1, 1, 1, 0, 0, 0, 0, 0])   # {"cold": 4, "hot": 0}
"""

import logging
import operator
import random
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Hashable, Iterable, Optional, Sequence

from torch import stack
from torch import Tensor
from torch.nn import ModuleList

from wisard.config import MemoryConfig, MAX_ADDR_SIZE
from wisard.core.AddressMapper import AddressMapper
from wisard.core.base import RAMComponent
from wisard.core.Discriminator import Discriminator
from wisard.errors import ConfigurationError, UnknownLabelError
from wisard.factories.encoder import EncoderFactory
from wisard.logger import LogFn
from wisard.representations import BinaryEncoder, BitEncoder
from wisard.sample import Sample


_log = logging.getLogger("wisard.model")

# Warn when dense memories would take more than this many bytes
LARGE_MEMORY_BYTES = 1 << 30


def _as_size(value: Any, name: str) -> int:
	"""Plain int from any integer type (int, numpy integers, 0-d integer tensors)."""
	try:
		return operator.index(value)
	except TypeError:
		raise ConfigurationError(f"{name} must be an integer, got {value!r}") from None


def canonical_labels(labels: Iterable[Hashable]) -> list:
	"""Fixed label order: sequences keep theirs, sets are sorted (by repr for mixed types)."""
	if isinstance(labels, (set, frozenset)):
		try:
			return sorted(labels)
		except TypeError:
			return sorted(labels, key=repr)
	return list(labels)


class WiSARD(RAMComponent):
	"""
	WiSARD classifier.

	Owns the encoder, the AddressMapper and one Discriminator per label.
	The structure is fixed at construction; only RAM node contents change,
	monotonically, through fit().
	"""

	def __init__(
		self,
		input_size: int,
		addr_size: int,
		labels: Iterable[Hashable],
		seed: Optional[int] = None,
		permute: bool = True,
		memory: MemoryConfig | dict | None = None,
		encoder: Optional[BitEncoder] = None,
		bleaching: bool = False,
		logger: Optional[LogFn] = None,
	):
		"""
		Args:
			input_size: Number of input bits
			addr_size: Address width of every RAM node (bits per tuple)
			labels: Closed label set
			seed: Permutation seed (None draws a random 64-bit seed, kept in .seed)
			permute: Shuffle input positions before tupling (False = identity)
			memory: RAM node backend configuration (default: EXACT)
			encoder: Raw value → bits encoder (default: BinaryEncoder(input_size))
			bleaching: Resolve ties by raising the membership threshold (counting backends)
			logger: Optional Callable[[str], None] for progress messages
		"""
		super().__init__()

		input_size = _as_size(input_size, "input_size")
		addr_size = _as_size(addr_size, "addr_size")
		if input_size <= 0:
			raise ConfigurationError(f"input_size must be a positive integer, got {input_size!r}")
		if not 1 <= addr_size <= MAX_ADDR_SIZE:
			raise ConfigurationError(f"addr_size must be an integer in [1, {MAX_ADDR_SIZE}], got {addr_size!r}")

		labels = canonical_labels(labels)
		if not labels:
			raise ConfigurationError("labels must not be empty")
		label_index = {}
		for i, label in enumerate(labels):
			try:
				duplicate = label in label_index
			except TypeError:
				raise ConfigurationError(f"labels must be hashable, got {label!r}") from None
			if duplicate:
				raise ConfigurationError(f"Duplicate label: {label!r}")
			label_index[label] = i

		if isinstance(memory, dict):
			memory = MemoryConfig.from_dict(memory)
		memory = memory or MemoryConfig()
		memory.validate_for(addr_size)

		if bleaching and not memory.backend.is_counting:
			raise ConfigurationError(f"bleaching needs a counting backend, got {memory.backend.name}")

		encoder = encoder if encoder is not None else BinaryEncoder(input_size)
		if encoder.n_bits != input_size:
			raise ConfigurationError(f"encoder produces {encoder.n_bits} bits but input_size is {input_size}")

		self.input_size = input_size
		self.addr_size = addr_size
		self.seed = int(seed) if seed is not None else random.getrandbits(64)
		self.permute = bool(permute)
		self.memory_config = memory
		self.bleaching = bool(bleaching)
		self.log = logger or (lambda message: None)
		self._labels = labels
		self._label_index = label_index

		self.encoder = encoder
		self.mapper = AddressMapper(input_size, addr_size, seed=self.seed, permute=self.permute)
		self.discriminators = ModuleList(
			Discriminator(self.mapper.num_tuples, addr_size, memory) for _ in labels
		)

		if memory.backend.is_dense:
			dense_bytes = len(labels) * self.num_nodes * (1 << addr_size)
			if dense_bytes > LARGE_MEMORY_BYTES:
				_log.warning(
					"Dense %s memory allocates %.1f GiB; consider the BLOOM backend",
					memory.backend.name, dense_bytes / (1 << 30),
				)

		self.log(
			f"WiSARD: {len(labels)} labels, {self.num_nodes} nodes x {addr_size}-bit addresses, "
			f"backend={memory.backend.name}, seed={self.seed}"
		)

	def __repr__(self):
		return (
			f"WiSARD"
			f"("
			f"input_size={self.input_size}, "
			f"addr_size={self.addr_size}, "
			f"labels={len(self._labels)}, "
			f"nodes={self.num_nodes}, "
			f"backend={self.memory_config.backend.name}"
			f")"
		)

	def __str__(self):
		lines = ["=== WiSARD ===", f"encoder = {self.encoder!r}", f"mapper  = {self.mapper!r}"]
		for label, discriminator in zip(self._labels, self.discriminators):
			lines.append(f"\t{label!r}: {discriminator!r}")
		return "\n".join(lines)

	@property
	def labels(self) -> list:
		return list(self._labels)

	@property
	def num_nodes(self) -> int:
		return self.mapper.num_tuples

	def discriminator(self, label: Hashable) -> Discriminator:
		try:
			return self.discriminators[self._label_index[label]]
		except (KeyError, TypeError):
			raise UnknownLabelError(label, self._labels) from None

	# ------------------------------------------------------------------
	# Encoding
	# ------------------------------------------------------------------

	@staticmethod
	def _value(sample: Sample | Any) -> Any:
		return sample.value if isinstance(sample, Sample) else sample

	def encode(self, sample: Sample | Any) -> Tensor:
		"""Raw value (or Sample) → [input_size] bool bits."""
		return self.encoder.encode(self._value(sample))

	def addresses(self, sample: Sample | Any) -> Tensor:
		"""Raw value (or Sample) → [num_nodes] int64 addresses."""
		return self.mapper(self.encode(sample))

	# ------------------------------------------------------------------
	# Training
	# ------------------------------------------------------------------

	def fit(self, sample: Sample | Any, label: Optional[Hashable] = None) -> None:
		"""
		Train the discriminator of the sample's label.

		Args:
			sample: Sample, or a raw value together with `label`
			label: Overrides sample.label when given

		Raises:
			EncodingError: the value cannot be encoded (nothing is written)
			UnknownLabelError: the label is not declared (nothing is written)
		"""
		if label is None and isinstance(sample, Sample):
			label = sample.label
		addresses = self.addresses(sample)
		self.discriminator(label).train(addresses)

	def fit_dataset(self, samples: Iterable[Sample], n_workers: int = 1) -> int:
		"""
		Train on many labelled samples.

		Every sample is encoded and its label checked before the first write,
		so an invalid sample leaves the model untouched. Writes are then
		drained per discriminator, in parallel when n_workers > 1.

		Returns:
			Number of samples trained
		"""
		start = time.time()
		queues: dict[int, list[Tensor]] = {}
		count = 0
		for sample in samples:
			addresses = self.addresses(sample)
			label = sample.label if isinstance(sample, Sample) else None
			try:
				index = self._label_index[label]
			except (KeyError, TypeError):
				raise UnknownLabelError(label, self._labels) from None
			queues.setdefault(index, []).append(addresses)
			count += 1

		batches = [(self.discriminators[i], stack(rows, dim=0)) for i, rows in queues.items()]
		if n_workers > 1 and len(batches) > 1:
			with ThreadPoolExecutor(max_workers=n_workers) as executor:
				futures = [executor.submit(discriminator.train_batch, rows) for discriminator, rows in batches]
				for future in futures:
					future.result()
		else:
			for discriminator, rows in batches:
				discriminator.train_batch(rows)

		self.log(f"Trained {count} samples into {len(batches)} discriminators in {time.time() - start:.2f}s")
		return count

	# ------------------------------------------------------------------
	# Inference
	# ------------------------------------------------------------------

	def _scores(self, addresses: Tensor, threshold: Optional[int] = None) -> Tensor:
		"""[batch, num_nodes] addresses → [batch, num_labels] scores."""
		return stack([discriminator(addresses, threshold) for discriminator in self.discriminators], dim=1)

	def forward(self, bits: Tensor, threshold: Optional[int] = None) -> Tensor:
		"""
		Args:
			bits: [input_size] or [batch, input_size] encoded bits

		Returns:
			[num_labels] or [batch, num_labels] int64 scores, in label order
		"""
		single = bits.ndim == 1
		addresses = self.mapper(bits.unsqueeze(0) if single else bits)
		scores = self._scores(addresses, threshold)
		return scores[0] if single else scores

	def _bleach(self, addresses: Tensor) -> list[int]:
		"""
		Raise the membership threshold while the top score is tied and
		still above zero; keep the last scores that were non-empty.
		"""
		threshold = self.memory_config.threshold
		scores = self._scores(addresses.unsqueeze(0), threshold)[0].tolist()
		max_count = self.discriminators[0].max_count()
		while threshold + 1 < max_count:
			top = max(scores)
			if top == 0 or scores.count(top) == 1:
				break
			bleached = self._scores(addresses.unsqueeze(0), threshold + 1)[0].tolist()
			if max(bleached) == 0:
				break
			scores = bleached
			threshold += 1
		return scores

	def _decide(self, scores: Sequence[int]) -> Hashable:
		best = 0
		for i, score in enumerate(scores):
			if score > scores[best]:
				best = i
		return self._labels[best]

	def predict_scores(self, sample: Sample | Any) -> dict:
		"""Raw per-label scores (no bleaching, no normalization), in label order."""
		scores = self._scores(self.addresses(sample).unsqueeze(0))[0].tolist()
		return dict(zip(self._labels, scores))

	def predict(self, sample: Sample | Any) -> Hashable:
		"""Label with the highest score; ties go to the earliest label."""
		addresses = self.addresses(sample)
		if self.bleaching:
			scores = self._bleach(addresses)
		else:
			scores = self._scores(addresses.unsqueeze(0))[0].tolist()
		return self._decide(scores)

	def predict_batch(self, samples: Iterable[Sample | Any]) -> list:
		"""Predict several samples at once."""
		bits = self.encoder.encode_batch(self._value(sample) for sample in samples)
		if bits.shape[0] == 0:
			return []
		addresses = self.mapper(bits)
		if self.bleaching:
			return [self._decide(self._bleach(row)) for row in addresses]
		return [self._decide(row) for row in self._scores(addresses).tolist()]

	def score(self, samples: Iterable[Sample]) -> float:
		"""Accuracy over labelled samples."""
		samples = list(samples)
		if not samples:
			return 0.0
		predictions = self.predict_batch(samples)
		correct = sum(prediction == sample.label for prediction, sample in zip(predictions, samples))
		return correct / len(samples)

	def report(self) -> dict:
		"""Occupancy per label, also sent to the logger."""
		stats = {label: discriminator.fill_ratio() for label, discriminator in zip(self._labels, self.discriminators)}
		for label, ratio in stats.items():
			self.log(f"  {label!r}: fill={ratio:.4%}")
		return stats

	# ------------------------------------------------------------------
	# Serialization support
	# ------------------------------------------------------------------

	def get_config(self) -> dict:
		"""Get configuration dict for model recreation."""
		return {
			'input_size': self.input_size,
			'addr_size': self.addr_size,
			'labels': list(self._labels),
			'seed': self.seed,
			'permute': self.permute,
			'memory': self.memory_config.to_dict(),
			'encoder': self.encoder.get_config(),
			'bleaching': self.bleaching,
		}

	@classmethod
	def from_config(cls, config: dict, logger: Optional[LogFn] = None) -> "WiSARD":
		"""Create a WiSARD model from a configuration dict."""
		config = dict(config)
		config['encoder'] = EncoderFactory.from_config(config['encoder'])
		return cls(**config, logger=logger)

	def save(self, path: str | Path) -> None:
		"""Save model to file."""
		from wisard.core.serialization import save_model
		save_model(self, path)

	@classmethod
	def load(cls, path: str | Path, device: str = 'cpu') -> "WiSARD":
		"""Load model from file."""
		from wisard.core.serialization import load_model
		return load_model(path, model_class=cls, device=device)
