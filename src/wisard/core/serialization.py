"""
Model Serialization for WiSARD

Provides save/load functionality with:
- Configuration preservation (sizes, labels, seed, encoder, memory backend)
- State preservation (permutation, tuples, RAM node contents)
- Version compatibility checking

The permutation is restored from the saved state, so a model reloaded
under a newer permutation algorithm still maps bits exactly as before.

Usage:
	model.save('model.pt')
	model = WiSARD.load('model.pt')

	# Or use the generic loader
	model = load_model('model.pt')
"""

import logging
from pathlib import Path
from typing import Type, TypeVar

import torch

from wisard.core.hashing import PERMUTATION_VERSION

# Version for compatibility checking
SERIALIZATION_VERSION = "1.0.0"

T = TypeVar('T')

_log = logging.getLogger("wisard.serialization")


def save_model(model: torch.nn.Module, path: str | Path, config: dict | None = None) -> None:
	"""
	Save a model with its configuration.

	Args:
		model: The model to save
		path: Path to save to (typically .pt extension)
		config: Optional configuration dict (if model doesn't have get_config())
	"""
	path = Path(path)

	if hasattr(model, 'get_config'):
		config = model.get_config()
	elif config is None:
		config = {}

	save_dict = {
		'version': SERIALIZATION_VERSION,
		'permutation_version': PERMUTATION_VERSION,
		'model_class': model.__class__.__name__,
		'config': config,
		'state_dict': model.state_dict(),
	}

	torch.save(save_dict, path)


def load_model(path: str | Path, model_class: Type[T] | None = None, device: str | torch.device = 'cpu') -> T:
	"""
	Load a model from a file.

	Args:
		path: Path to the saved model
		model_class: Optional model class (if not, uses class name from file)
		device: Device to load the model to

	Returns:
		The loaded model
	"""
	path = Path(path)
	# Labels are arbitrary hashables, not only tensors
	save_dict = torch.load(path, map_location=device, weights_only=False)

	version = save_dict.get('version', '0.0.0')
	if version != SERIALIZATION_VERSION:
		_log.warning("Model saved with version %s, current is %s", version, SERIALIZATION_VERSION)

	permutation_version = save_dict.get('permutation_version', PERMUTATION_VERSION)
	if permutation_version != PERMUTATION_VERSION:
		_log.warning(
			"Model permutation built with algorithm v%s, current is v%s; using the saved permutation",
			permutation_version, PERMUTATION_VERSION,
		)

	config = save_dict.get('config', {})
	state_dict = save_dict.get('state_dict', {})

	if model_class is None:
		model_class = _get_model_class(save_dict.get('model_class', ''))

	if hasattr(model_class, 'from_config'):
		model = model_class.from_config(config)
	else:
		model = model_class(**config)

	model.load_state_dict(state_dict)
	return model.to(device)


def _get_model_class(class_name: str) -> type:
	"""Get model class from name."""
	from wisard.core.Wisard import WiSARD

	classes = {
		'WiSARD': WiSARD,
	}

	if class_name not in classes:
		raise ValueError(f"Unknown model class: {class_name}. Available: {list(classes.keys())}")

	return classes[class_name]
