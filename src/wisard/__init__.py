"""
WiSARD weightless neural networks.

Usage:
	from wisard import WiSARD, Sample, MemoryConfig, MemoryBackend

	model = WiSARD(input_size=8, addr_size=2, labels=["cold", "hot"], seed=7)
	model.fit(Sample([1, 1, 1, 0, 0, 0, 0, 0], "cold"))
	model.predict([1, 1, 1, 0, 0, 0, 0, 0])
"""

from wisard.config import MemoryConfig
from wisard.core import (
	AddressMapper,
	BloomMemory,
	CountingMemory,
	Discriminator,
	ExactMemory,
	MemoryNode,
	WiSARD,
	load_model,
	save_model,
)
from wisard.enums import CategoricalMode, EncodingMode, MemoryBackend
from wisard.errors import (
	ConfigurationError,
	EncodingError,
	LengthMismatchError,
	UnknownCategoryError,
	UnknownLabelError,
	WisardError,
)
from wisard.logger import Logger, create_logger
from wisard.representations import (
	BinaryEncoder,
	BitEncoder,
	CategoricalEncoder,
	ConcatEncoder,
	SliceEncoder,
	ThermometerEncoder,
)
from wisard.sample import Dataset, Sample


__version__ = "0.1.0"

__all__ = [
	'WiSARD',
	'Discriminator',
	'AddressMapper',
	'MemoryNode',
	'ExactMemory',
	'CountingMemory',
	'BloomMemory',
	'MemoryConfig',
	'MemoryBackend',
	'EncodingMode',
	'CategoricalMode',
	'BitEncoder',
	'BinaryEncoder',
	'CategoricalEncoder',
	'ThermometerEncoder',
	'ConcatEncoder',
	'SliceEncoder',
	'Sample',
	'Dataset',
	'Logger',
	'create_logger',
	'save_model',
	'load_model',
	'WisardError',
	'ConfigurationError',
	'EncodingError',
	'LengthMismatchError',
	'UnknownCategoryError',
	'UnknownLabelError',
]
