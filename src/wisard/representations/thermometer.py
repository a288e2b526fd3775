"""
Thermometer (unary threshold) encoder for continuous values.

Each feature is compared against `resolution` ascending break points:

	thresholds = [0.25, 0.5, 0.75]
	0.1 -> [0, 0, 0]
	0.6 -> [1, 1, 0]
	9.0 -> [1, 1, 1]      (saturates, no bounds check)

Break points come from:
- explicit values
- ThermometerEncoder.from_range(low, high, ...)     equally spaced (or geometric with log=True)
- ThermometerEncoder.from_quantiles(data, ...)      training-data quantiles per feature

Multiple features are encoded feature-major: all bits of feature 0, then
all bits of feature 1, and so on.
"""

from typing import Any, Sequence

import numpy as np
from torch import float64, tensor, Tensor

from wisard.enums import EncodingMode
from wisard.errors import ConfigurationError, LengthMismatchError
from wisard.representations.base import BitEncoder, as_flat_tensor


class ThermometerEncoder(BitEncoder):
	"""Unary encoding of one or more continuous features."""

	mode = EncodingMode.THERMOMETER

	def __init__(self, thresholds: Sequence[float] | Sequence[Sequence[float]] | np.ndarray | Tensor):
		"""
		Args:
			thresholds: [resolution] break points shared by a single feature, or
				[n_features, resolution] break points, strictly increasing per row
		"""
		super().__init__()
		if isinstance(thresholds, Tensor):
			thresholds = thresholds.detach().cpu().numpy()
		array = np.asarray(thresholds, dtype=np.float64)
		if array.ndim == 1:
			array = array[None, :]
		if array.ndim != 2 or array.shape[0] == 0 or array.shape[1] == 0:
			raise ConfigurationError(
				f"thresholds must be [resolution] or [n_features, resolution], got shape {array.shape}"
			)
		if not np.isfinite(array).all():
			raise ConfigurationError("thresholds must be finite")
		if not (np.diff(array, axis=1) > 0).all():
			raise ConfigurationError("thresholds must be strictly increasing for every feature")

		self.register_buffer("thresholds", tensor(array, dtype=float64))

	@classmethod
	def from_range(
		cls,
		low: float,
		high: float,
		resolution: int,
		n_features: int = 1,
		log: bool = False,
	) -> "ThermometerEncoder":
		"""
		Interior break points of [low, high], spaced linearly (or geometrically).

		With resolution=3 over [0, 1]: thresholds 0.25, 0.5, 0.75.
		"""
		if resolution <= 0 or n_features <= 0:
			raise ConfigurationError("resolution and n_features must be positive")
		if high <= low:
			raise ConfigurationError(f"high must exceed low, got [{low}, {high}]")
		if log:
			if low <= 0:
				raise ConfigurationError("Logarithmic thermometer needs low > 0")
			points = np.geomspace(low, high, resolution + 2)[1:-1]
		else:
			points = np.linspace(low, high, resolution + 2)[1:-1]
		return cls(np.tile(points, (n_features, 1)))

	@classmethod
	def from_quantiles(cls, data: Any, resolution: int) -> "ThermometerEncoder":
		"""
		Per-feature quantile break points of training data.

		Args:
			data: [N] samples of one feature or [N, n_features]
			resolution: Bits per feature; break points at quantiles (i+1)/(resolution+1)
		"""
		if resolution <= 0:
			raise ConfigurationError("resolution must be positive")
		if isinstance(data, Tensor):
			data = data.detach().cpu().numpy()
		data = np.asarray(data, dtype=np.float64)
		if data.ndim == 1:
			data = data[:, None]
		if data.ndim != 2 or data.shape[0] == 0:
			raise ConfigurationError(f"data must be [N] or [N, n_features] with N > 0, got shape {data.shape}")

		q = np.arange(1, resolution + 1) / (resolution + 1)
		points = np.quantile(data, q, axis=0).T						# [n_features, resolution]

		# Tied quantiles (discrete data) are nudged upward to keep rows strictly increasing
		for row in points:
			for i in range(1, resolution):
				if row[i] <= row[i - 1]:
					row[i] = np.nextafter(row[i - 1], np.inf)
		return cls(points)

	@property
	def n_features(self) -> int:
		return int(self.thresholds.shape[0])

	@property
	def resolution(self) -> int:
		return int(self.thresholds.shape[1])

	@property
	def n_bits(self) -> int:
		return self.n_features * self.resolution

	def encode(self, value: Any) -> Tensor:
		values = as_flat_tensor(value).to(device=self.thresholds.device, dtype=float64)
		if values.numel() != self.n_features:
			raise LengthMismatchError(self.n_features, values.numel(), what="features")
		# [n_features, 1] > [n_features, resolution]
		return (values.unsqueeze(1) > self.thresholds).reshape(-1)

	def get_config(self) -> dict:
		return {'mode': int(self.mode), 'thresholds': self.thresholds.tolist()}

	def __repr__(self) -> str:
		return f"ThermometerEncoder(features={self.n_features}, resolution={self.resolution})"
