"""
WiSARD Enums

All enumeration types, consolidated in one place.
"""

# Memory
from wisard.enums.memory import MemoryBackend

# Encoding
from wisard.enums.encoding import EncodingMode, CategoricalMode


__all__ = [
	# Memory
	'MemoryBackend',
	# Encoding
	'EncodingMode',
	'CategoricalMode',
]
