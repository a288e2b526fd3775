#!/usr/bin/env python3
"""
Unit tests for the RAM node backends.

Tests ExactMemory, CountingMemory and BloomMemory for:
- No false negatives after write
- Exactness of the dense bit-set
- Idempotence of repeated writes
- Counter saturation and membership thresholds
- Bloom sizing and empirical false-positive rate
- MemoryConfig validation and MemoryFactory dispatch

Run with:
    pytest tests/test_memory.py
"""

import sys
from pathlib import Path

import pytest
import torch

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wisard.config import MemoryConfig
from wisard.core import BloomMemory, CountingMemory, ExactMemory
from wisard.core.BloomMemory import bloom_num_hashes, bloom_size
from wisard.enums import MemoryBackend
from wisard.errors import ConfigurationError
from wisard.factories import MemoryFactory


def test_exact_memory_is_exact():
    """Test membership against every address of a 4-bit node."""
    memory = ExactMemory(addr_size=4)
    written = {0, 3, 9, 15}
    for address in written:
        memory.write(address)

    for address in range(16):
        assert memory.contains(address) == (address in written)

    members = memory(torch.arange(16))
    assert members.tolist() == [a in written for a in range(16)]
    assert memory.written() == 4
    assert memory.fill_ratio() == pytest.approx(4 / 16)


def test_exact_memory_write_is_idempotent():
    """Test that writing an address twice changes nothing observable."""
    memory = ExactMemory(addr_size=3)
    memory.write(5)
    before = memory.cells.clone()
    memory.write(5)
    assert torch.equal(memory.cells, before)
    assert memory.written() == 1


def test_exact_memory_rejects_out_of_range_address():
    """Test that addresses outside [0, 2^addr_size) are an assertion."""
    memory = ExactMemory(addr_size=2)
    with pytest.raises(AssertionError):
        memory.write(4)


def test_counting_memory_saturates():
    """Test that counters stop at 2^counter_bits - 1."""
    memory = CountingMemory(addr_size=2, counter_bits=2)
    assert memory.max_count == 3
    for _ in range(10):
        memory.write(1)
    assert memory.counter(1) == 3
    assert memory.counter(0) == 0


def test_counting_memory_threshold():
    """Test that membership needs a count above the threshold."""
    memory = CountingMemory(addr_size=2, counter_bits=4, threshold=1)
    memory.write(2)
    assert not memory.contains(2)
    memory.write(2)
    assert memory.contains(2)

    # Threshold override, as used by bleaching
    addresses = torch.tensor([2])
    assert memory(addresses, threshold=0).tolist() == [True]
    assert memory(addresses, threshold=2).tolist() == [False]


def test_counting_memory_matches_exact_at_threshold_zero():
    """Test that CountingMemory(threshold=0) answers like ExactMemory."""
    exact = ExactMemory(addr_size=5)
    counting = CountingMemory(addr_size=5)
    for address in [1, 1, 7, 30, 31]:
        exact.write(address)
        counting.write(address)

    addresses = torch.arange(32)
    assert torch.equal(exact(addresses), counting(addresses))


def test_bloom_sizing():
    """Test the standard sizing formulas."""
    assert bloom_size(1000, 0.01) == 9586
    assert bloom_num_hashes(9586, 1000) == 7
    assert bloom_num_hashes(1, 1000) == 1

    memory = BloomMemory(addr_size=20, capacity=1000, error_rate=0.01)
    assert memory.size == 9586
    assert memory.num_hashes == 7
    assert memory.num_cells == 9586


def test_bloom_memory_no_false_negatives():
    """Test that every written address is reported as present."""
    memory = BloomMemory(addr_size=16, capacity=200, error_rate=0.01, hash_seed=11)
    written = list(range(0, 400, 2))
    for address in written:
        memory.write(address)

    assert all(memory.contains(address) for address in written)
    assert memory(torch.tensor(written)).all()


def test_bloom_memory_false_positive_rate():
    """Test that the empirical false-positive rate stays near the target at capacity."""
    memory = BloomMemory(addr_size=16, capacity=200, error_rate=0.01, hash_seed=11)
    for address in range(0, 400, 2):
        memory.write(address)

    queries = torch.arange(1, 4001, 2)
    false_positives = int(memory(queries).sum())
    assert false_positives / len(queries) < 0.05
    assert memory.false_positive_rate() < 0.05


def test_bloom_memory_repeated_writes_do_not_grow_occupancy():
    """Test that rewriting an address leaves the occupied cells unchanged."""
    memory = BloomMemory(addr_size=12, capacity=64, error_rate=0.01)
    memory.write(77)
    occupied = memory.written()
    for _ in range(5):
        memory.write(77)
    assert memory.written() == occupied
    assert memory.counter(77) == 6


def test_bloom_memory_threshold():
    """Test membership thresholds on the minimum counter."""
    memory = BloomMemory(addr_size=12, capacity=64, error_rate=0.01, threshold=2)
    for _ in range(2):
        memory.write(5)
    assert not memory.contains(5)
    memory.write(5)
    assert memory.contains(5)


def test_reset_clears_every_backend():
    """Test that reset() empties the node."""
    for memory in (ExactMemory(4), CountingMemory(4), BloomMemory(4, capacity=8)):
        memory.write(3)
        assert memory.contains(3)
        memory.reset()
        assert memory.written() == 0
        assert not memory.contains(3)


def test_memory_config_validation():
    """Test that invalid backend parameters fail at construction."""
    with pytest.raises(ConfigurationError):
        MemoryConfig(backend=MemoryBackend.EXACT, threshold=1)
    with pytest.raises(ConfigurationError):
        MemoryConfig(backend=MemoryBackend.COUNTING, counter_bits=9)
    with pytest.raises(ConfigurationError):
        MemoryConfig(backend=MemoryBackend.COUNTING, counter_bits=2, threshold=3)
    with pytest.raises(ConfigurationError):
        MemoryConfig(backend=MemoryBackend.BLOOM, error_rate=1.0)
    with pytest.raises(ConfigurationError):
        MemoryConfig(backend=MemoryBackend.BLOOM, capacity=0)

    config = MemoryConfig(backend=MemoryBackend.BLOOM, capacity=100, hash_seed=3)
    assert MemoryConfig.from_dict(config.to_dict()) == config


def test_memory_factory_dispatch():
    """Test that each backend builds the matching node type."""
    exact = MemoryFactory.create(MemoryConfig(), addr_size=4)
    counting = MemoryFactory.create(MemoryConfig(backend=MemoryBackend.COUNTING, counter_bits=3), addr_size=4)
    bloom = MemoryFactory.create(MemoryConfig(backend=MemoryBackend.BLOOM, capacity=5000), addr_size=8)

    assert isinstance(exact, ExactMemory)
    assert isinstance(counting, CountingMemory)
    assert counting.max_count == 7
    assert isinstance(bloom, BloomMemory)
    # Capacity is capped at the address space
    assert bloom.capacity == 256


def test_dense_backends_refuse_huge_address_spaces():
    """Test that dense nodes above 2^30 cells are a configuration error."""
    with pytest.raises(ConfigurationError):
        MemoryFactory.create(MemoryConfig(), addr_size=31)
    with pytest.raises(ConfigurationError):
        MemoryFactory.create(MemoryConfig(backend=MemoryBackend.COUNTING), addr_size=31)

    bloom = MemoryFactory.create(MemoryConfig(backend=MemoryBackend.BLOOM, capacity=100), addr_size=48)
    bloom.write(2 ** 47 + 5)
    assert bloom.contains(2 ** 47 + 5)
