#!/usr/bin/env python3
"""
Unit tests for the bit encoders.

Tests BinaryEncoder, CategoricalEncoder, ThermometerEncoder, ConcatEncoder and SliceEncoder for:
- Output length and dtype
- Rejection of malformed input (wrong length, non-binary, unknown category)
- Threshold construction (range, log range, quantiles)
- Rebuilding an encoder from its configuration

Run with:
    pytest tests/test_representations.py
"""

import sys
from pathlib import Path

import numpy as np
import pytest
import torch

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from wisard.enums import CategoricalMode
from wisard.errors import ConfigurationError, EncodingError, LengthMismatchError, UnknownCategoryError
from wisard.factories import EncoderFactory
from wisard.representations import (
    BinaryEncoder,
    CategoricalEncoder,
    ConcatEncoder,
    SliceEncoder,
    ThermometerEncoder,
)


def test_binary_encoder_accepts_lists_arrays_and_tensors():
    """Test that BinaryEncoder returns the same bool bits for every input container."""
    encoder = BinaryEncoder(4)
    expected = torch.tensor([True, False, True, True])

    for value in ([1, 0, 1, 1], (1, 0, 1, 1), np.array([1, 0, 1, 1]), torch.tensor([1, 0, 1, 1])):
        bits = encoder.encode(value)
        assert bits.dtype == torch.bool
        assert torch.equal(bits, expected)

    assert torch.equal(encoder.encode([True, False, True, True]), expected)


def test_binary_encoder_flattens_images():
    """Test that a 2x2 binary image is accepted by BinaryEncoder(4), row-major."""
    bits = BinaryEncoder(4).encode([[1, 0], [0, 1]])
    assert bits.tolist() == [True, False, False, True]


def test_binary_encoder_rejects_bad_input():
    """Test wrong lengths, non-binary values and unconvertible values."""
    encoder = BinaryEncoder(4)

    with pytest.raises(LengthMismatchError) as excinfo:
        encoder.encode([1, 0, 1])
    assert excinfo.value.expected == 4
    assert excinfo.value.actual == 3

    with pytest.raises(EncodingError):
        encoder.encode([1, 0, 2, 1])

    with pytest.raises(ConfigurationError):
        BinaryEncoder(0)


def test_categorical_one_hot_and_thermometer():
    """Test both categorical layouts over an ordered category set."""
    categories = ["low", "mid", "high"]

    one_hot = CategoricalEncoder(categories)
    assert one_hot.n_bits == 3
    assert one_hot.encode("mid").tolist() == [False, True, False]

    thermometer = CategoricalEncoder(categories, CategoricalMode.THERMOMETER)
    assert thermometer.encode("low").tolist() == [True, False, False]
    assert thermometer.encode("mid").tolist() == [True, True, False]
    assert thermometer.encode("high").tolist() == [True, True, True]


def test_categorical_rejects_unknown_and_duplicates():
    """Test UnknownCategoryError for undeclared values and ConfigurationError for bad sets."""
    encoder = CategoricalEncoder(["red", "green"])

    with pytest.raises(UnknownCategoryError):
        encoder.encode("blue")
    with pytest.raises(UnknownCategoryError):
        encoder.encode(["red"])

    with pytest.raises(ConfigurationError):
        CategoricalEncoder(["red", "red"])
    with pytest.raises(ConfigurationError):
        CategoricalEncoder([])


def test_thermometer_from_range():
    """Test interior break points and saturation outside the range."""
    encoder = ThermometerEncoder.from_range(0.0, 1.0, resolution=3)

    assert encoder.thresholds[0].tolist() == pytest.approx([0.25, 0.5, 0.75])
    assert encoder.encode(0.1).tolist() == [False, False, False]
    assert encoder.encode(0.6).tolist() == [True, True, False]
    assert encoder.encode(9.0).tolist() == [True, True, True]
    assert encoder.encode(-9.0).tolist() == [False, False, False]


def test_thermometer_log_range_is_geometric():
    """Test that log=True spaces break points geometrically."""
    encoder = ThermometerEncoder.from_range(1.0, 1000.0, resolution=2, log=True)
    assert encoder.thresholds[0].tolist() == pytest.approx([10.0, 100.0])

    with pytest.raises(ConfigurationError):
        ThermometerEncoder.from_range(0.0, 10.0, resolution=2, log=True)


def test_thermometer_multiple_features_are_feature_major():
    """Test that all bits of feature 0 come before the bits of feature 1."""
    encoder = ThermometerEncoder([[0.0, 1.0], [10.0, 20.0]])
    assert encoder.n_features == 2
    assert encoder.n_bits == 4
    assert encoder.encode([0.5, 25.0]).tolist() == [True, False, True, True]

    with pytest.raises(LengthMismatchError):
        encoder.encode([0.5])


def test_thermometer_rejects_bad_thresholds():
    """Test that thresholds must be finite and strictly increasing."""
    with pytest.raises(ConfigurationError):
        ThermometerEncoder([0.5, 0.5])
    with pytest.raises(ConfigurationError):
        ThermometerEncoder([0.1, float("inf")])
    with pytest.raises(ConfigurationError):
        ThermometerEncoder([])


def test_thermometer_from_quantiles_handles_ties():
    """Test that quantiles of discrete data stay strictly increasing."""
    data = [1.0] * 50 + [2.0] * 50
    encoder = ThermometerEncoder.from_quantiles(data, resolution=4)

    row = encoder.thresholds[0].tolist()
    assert all(b > a for a, b in zip(row, row[1:]))
    assert encoder.encode(0.0).sum().item() == 0
    assert encoder.encode(3.0).sum().item() == 4


def test_thermometer_from_quantiles_per_feature():
    """Test one row of break points per column of [N, n_features] data."""
    rng = np.random.default_rng(0)
    data = np.stack([rng.uniform(0, 1, 500), rng.uniform(100, 200, 500)], axis=1)
    encoder = ThermometerEncoder.from_quantiles(data, resolution=3)

    assert encoder.thresholds.shape == (2, 3)
    for column in range(2):
        expected = np.quantile(data[:, column], [0.25, 0.5, 0.75])
        assert encoder.thresholds[column].tolist() == pytest.approx(expected.tolist(), rel=1e-5)


def test_concat_encoder():
    """Test field-by-field concatenation and field-count checking."""
    encoder = ConcatEncoder([
        CategoricalEncoder(["red", "green", "blue"]),
        ThermometerEncoder.from_range(0.0, 100.0, resolution=4),
    ])
    assert encoder.n_bits == 7

    bits = encoder.encode(("green", 50.0))
    assert bits.tolist() == [False, True, False, True, True, False, False]

    with pytest.raises(LengthMismatchError):
        encoder.encode(("green",))
    with pytest.raises(LengthMismatchError):
        encoder.encode("green")
    with pytest.raises(ConfigurationError):
        ConcatEncoder([])


def test_encode_batch_shapes():
    """Test [N, n_bits] output, including the empty batch."""
    encoder = ThermometerEncoder.from_range(0.0, 1.0, resolution=5)

    batch = encoder.encode_batch([0.1, 0.5, 0.9])
    assert batch.shape == (3, 5)
    assert batch.dtype == torch.bool

    empty = encoder.encode_batch([])
    assert empty.shape == (0, 5)


def test_encoder_factory_rebuilds_nested_encoders():
    """Test that a nested ConcatEncoder is rebuilt from its config with identical behavior."""
    encoder = ConcatEncoder([
        CategoricalEncoder(["a", "b", "c"], CategoricalMode.THERMOMETER),
        ThermometerEncoder([[0.0, 1.0], [5.0, 6.0]]),
        BinaryEncoder(2),
    ])
    rebuilt = EncoderFactory.from_config(encoder.get_config())

    assert isinstance(rebuilt, ConcatEncoder)
    assert rebuilt.get_config() == encoder.get_config()

    record = ("b", [0.5, 7.0], [1, 0])
    assert torch.equal(rebuilt.encode(record), encoder.encode(record))


def test_encoder_factory_rejects_unknown_mode():
    """Test that an unknown mode raises ValueError."""
    with pytest.raises(ValueError):
        EncoderFactory.from_config({'mode': 99})


def test_slice_keeps_high_bit_of_two_bit_values():
    """Test keeping bit 1 of four 2-bit values given as bit groups."""
    encoder = SliceEncoder(value_bits=2, start=1, end=2, n_values=4)
    bits = encoder.encode([0, 0, 1, 0, 0, 1, 1, 1])

    assert encoder.n_bits == 4
    assert bits.tolist() == [False, False, True, True]


def test_slice_keeps_middle_bit_of_three_bit_values():
    """Test keeping bit 1 of four 3-bit values given as bit groups."""
    encoder = SliceEncoder(value_bits=3, start=1, end=2, n_values=4)
    bits = encoder.encode([0, 0, 0, 0, 1, 0, 0, 0, 1, 0, 1, 1])

    assert bits.tolist() == [False, True, False, True]


def test_slice_integer_input_matches_bit_input():
    """Test that integers and their LSB-first bit groups slice the same way."""
    encoder = SliceEncoder(value_bits=3, start=1, end=2, n_values=4)
    assert torch.equal(encoder.encode([0, 2, 4, 6]), encoder.encode([0, 0, 0, 0, 1, 0, 0, 0, 1, 0, 1, 1]))


def test_slice_integer_pixels():
    """Test most-significant-bit and low-bit ranges of 8-bit integer pixels."""
    msb = SliceEncoder(value_bits=8, start=7, end=8, n_values=4)
    assert msb.encode([0, 5, 200, 255]).tolist() == [False, False, True, True]
    assert msb.encode(np.array([0, 5, 200, 255], dtype=np.uint8)).tolist() == [False, False, True, True]

    low = SliceEncoder(value_bits=8, start=0, end=3)
    assert low.encode(5).tolist() == [True, False, True]
    assert low.encode(5.0).tolist() == [True, False, True]

    batch = low.encode_batch([5, 2])
    assert batch.shape == (2, 3)
    assert batch[1].tolist() == [False, True, False]


def test_slice_rejects_bad_input():
    """Test out-of-range, fractional, non-binary and wrong-length input."""
    encoder = SliceEncoder(value_bits=8, start=0, end=3, n_values=2)

    with pytest.raises(EncodingError):
        encoder.encode([256, 0])
    with pytest.raises(EncodingError):
        encoder.encode([-1, 0])
    with pytest.raises(EncodingError):
        encoder.encode([1.5, 0])
    with pytest.raises(EncodingError):
        encoder.encode([2] + [0] * 15)
    with pytest.raises(LengthMismatchError):
        encoder.encode([1, 2, 3])


def test_slice_rejects_bad_config():
    """Test invalid bit ranges and sizes."""
    with pytest.raises(ConfigurationError):
        SliceEncoder(value_bits=0, start=0, end=1)
    with pytest.raises(ConfigurationError):
        SliceEncoder(value_bits=8, start=3, end=3)
    with pytest.raises(ConfigurationError):
        SliceEncoder(value_bits=8, start=0, end=9)
    with pytest.raises(ConfigurationError):
        SliceEncoder(value_bits=8, start=0, end=2, n_values=0)


def test_encoder_factory_rebuilds_slice_encoder():
    """Test that a SliceEncoder is rebuilt from its config, alone and inside a ConcatEncoder."""
    encoder = SliceEncoder(value_bits=8, start=5, end=8, n_values=3)
    rebuilt = EncoderFactory.from_config(encoder.get_config())

    assert isinstance(rebuilt, SliceEncoder)
    assert rebuilt.get_config() == encoder.get_config()
    assert torch.equal(rebuilt.encode([10, 130, 255]), encoder.encode([10, 130, 255]))

    nested = ConcatEncoder([encoder, BinaryEncoder(2)])
    record = ([10, 130, 255], [1, 0])
    assert torch.equal(EncoderFactory.from_config(nested.get_config()).encode(record), nested.encode(record))
