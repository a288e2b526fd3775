"""
WiSARD Core Components

Building blocks of the classifier, bottom-up:

	MemoryNode     - one RAM node (ExactMemory, CountingMemory, BloomMemory)
	AddressMapper  - bits -> one address per RAM node
	Discriminator  - one RAM node per tuple, one discriminator per label
	WiSARD         - the classifier
"""

from wisard.core.base import RAMComponent, MemoryNode
from wisard.core.ExactMemory import ExactMemory
from wisard.core.CountingMemory import CountingMemory
from wisard.core.BloomMemory import BloomMemory
from wisard.core.AddressMapper import AddressMapper
from wisard.core.Discriminator import Discriminator
from wisard.core.Wisard import WiSARD
from wisard.core.serialization import save_model, load_model, SERIALIZATION_VERSION


__all__ = [
	# Base
	'RAMComponent',
	'MemoryNode',
	# Memory backends
	'ExactMemory',
	'CountingMemory',
	'BloomMemory',
	# Model
	'AddressMapper',
	'Discriminator',
	'WiSARD',
	# Serialization
	'save_model',
	'load_model',
	'SERIALIZATION_VERSION',
]
