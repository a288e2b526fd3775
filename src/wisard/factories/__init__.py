"""
Factories building model components from configuration.
"""

from wisard.factories.memory import MemoryFactory
from wisard.factories.encoder import EncoderFactory


__all__ = [
	'MemoryFactory',
	'EncoderFactory',
]
