"""
Bit encoders: raw sample values -> fixed-length bit-vectors.

Usage:
	from wisard.representations import ThermometerEncoder, CategoricalEncoder

	enc = ThermometerEncoder.from_quantiles(train_values, resolution=8)
	bits = enc.encode(3.7)                # [8] bool tensor
	bits = enc.encode_batch(values)       # [N, 8] bool tensor
"""

from wisard.representations.base import BitEncoder, as_flat_tensor
from wisard.representations.binary import BinaryEncoder
from wisard.representations.categorical import CategoricalEncoder
from wisard.representations.thermometer import ThermometerEncoder
from wisard.representations.composite import ConcatEncoder
from wisard.representations.slice import SliceEncoder


__all__ = [
	'BitEncoder',
	'as_flat_tensor',
	'BinaryEncoder',
	'CategoricalEncoder',
	'ThermometerEncoder',
	'ConcatEncoder',
	'SliceEncoder',
]
