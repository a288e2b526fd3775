"""
Encoding-related enumerations.
"""

from enum import IntEnum


class EncodingMode(IntEnum):
	"""Which bit encoder turns raw samples into bit-vectors."""
	BINARY		= 0		# Pass-through: value already is a bit-vector
	CATEGORICAL	= 1		# One-hot / thermometer over a fixed category set
	THERMOMETER	= 2		# Unary threshold encoding of continuous values
	CONCAT		= 3		# Record of values, one sub-encoder per field
	SLICE		= 4		# Bit range [start, end) of fixed-width integer values


class CategoricalMode(IntEnum):
	"""How a category index is laid out in bits."""
	ONE_HOT		= 0		# category i -> bit i
	THERMOMETER	= 1		# category i -> bits 0..i
