"""
Encoder Factory

Rebuilds bit encoders from the dicts produced by BitEncoder.get_config().
"""

from wisard.enums import EncodingMode


class EncoderFactory:
	"""Factory for creating bit encoders based on EncodingMode."""

	@staticmethod
	def from_config(config: dict):
		"""
		Create an encoder from its configuration.

		Args:
			config: Output of BitEncoder.get_config(); must contain 'mode'

		Returns:
			BitEncoder instance
		"""
		# Lazy imports to avoid circular dependencies (ConcatEncoder recurses here)
		from wisard.representations import (
			BinaryEncoder,
			CategoricalEncoder,
			ThermometerEncoder,
			ConcatEncoder,
			SliceEncoder,
		)

		match EncodingMode(config['mode']):
			case EncodingMode.BINARY:
				return BinaryEncoder.from_config(config)
			case EncodingMode.CATEGORICAL:
				return CategoricalEncoder.from_config(config)
			case EncodingMode.THERMOMETER:
				return ThermometerEncoder.from_config(config)
			case EncodingMode.CONCAT:
				return ConcatEncoder.from_config(config)
			case EncodingMode.SLICE:
				return SliceEncoder.from_config(config)
			case _:
				raise ValueError(f"Unsupported EncodingMode: {config['mode']}")
