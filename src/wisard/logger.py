"""
Logging utilities for WiSARD training and evaluation runs.

This module provides a Logger class that can be instantiated, configured,
and passed to models. It supports:
- Console output and optional file output, both timestamped
- Date-based log directory structure (logs/YYYY/MM/DD/)
- Callable interface, so any component taking Callable[[str], None] accepts it
- Separator, header and key/value formatting helpers
"""

import os
import logging
from datetime import datetime
from typing import Optional, Callable, Mapping, Any


LogFn = Callable[[str], None]


class Logger:
	"""
	Logger writing timestamped lines to the console and, optionally, a file.

	Usage:
		logger = Logger("mnist", to_file=True)
		logger("Training...")
		logger.header("Results")
		logger.metrics({"accuracy": 0.91, "samples": 60000})

		# Models accept any Callable[[str], None]
		model = WiSARD(input_size=784, addr_size=8, labels=range(10), logger=logger)

	Attributes:
		name: Logger name (used for the log filename)
		log_file: Path to the log file, or None when not logging to a file
	"""

	def __init__(
		self,
		name: str = "wisard",
		log_dir: Optional[str] = None,
		project_root: Optional[str] = None,
		console: bool = True,
		to_file: bool = False,
		level: int = logging.INFO,
		timestamp_format: str = '%H:%M:%S',
	):
		"""
		Args:
			name: Base name for the log file (e.g., "mnist_sweep")
			log_dir: Override log directory (implies to_file=True)
			project_root: Project root directory (default: auto-detect from package)
			console: Whether to log to the console
			to_file: Whether to log to a file under project_root/logs/YYYY/MM/DD/
			level: Minimum logging level
			timestamp_format: strftime format for log timestamps
		"""
		self.name = name
		self.log_file: Optional[str] = None
		timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

		self._logger = logging.getLogger(f'wisard.run.{name}.{timestamp}')
		self._logger.setLevel(level)
		self._logger.propagate = False
		self._logger.handlers.clear()

		formatter = logging.Formatter('%(asctime)s | %(message)s', datefmt=timestamp_format)

		if to_file or log_dir is not None:
			if log_dir is None:
				if project_root is None:
					# src/wisard/logger.py -> project root
					this_dir = os.path.dirname(os.path.abspath(__file__))
					project_root = os.path.dirname(os.path.dirname(this_dir))
				now = datetime.now()
				log_dir = os.path.join(project_root, "logs", now.strftime("%Y"), now.strftime("%m"), now.strftime("%d"))
			os.makedirs(log_dir, exist_ok=True)
			self.log_file = os.path.join(log_dir, f"{name}_{timestamp}.log")

			file_handler = logging.FileHandler(self.log_file)
			file_handler.setFormatter(formatter)
			self._logger.addHandler(file_handler)

		if console:
			console_handler = logging.StreamHandler()
			console_handler.setFormatter(formatter)
			self._logger.addHandler(console_handler)

	def __call__(self, message: str = "") -> None:
		self.log(message)

	def log(self, message: str = "", level: int = logging.INFO) -> None:
		"""Log a message and flush every handler."""
		self._logger.log(level, message)
		for handler in self._logger.handlers:
			handler.flush()

	def warning(self, message: str) -> None:
		self.log(message, level=logging.WARNING)

	def separator(self, char: str = "=", width: int = 70) -> None:
		"""Log a separator line."""
		self.log(char * width)

	def header(self, title: str, char: str = "=", width: int = 70) -> None:
		"""Log a formatted header."""
		self.log()
		self.separator(char, width)
		self.log(f"  {title}")
		self.separator(char, width)

	def metrics(self, values: Mapping[str, Any], indent: int = 2) -> None:
		"""Log aligned `key: value` lines."""
		if not values:
			return
		width = max(len(str(key)) for key in values)
		for key, value in values.items():
			if isinstance(value, float):
				value = f"{value:.4f}"
			self.log(f"{' ' * indent}{str(key):<{width}} : {value}")

	def close(self) -> None:
		"""Close and detach all handlers."""
		for handler in list(self._logger.handlers):
			handler.close()
			self._logger.removeHandler(handler)

	def __repr__(self) -> str:
		return f"Logger(name='{self.name}', log_file={self.log_file!r})"


def create_logger(
	name: str = "wisard",
	log_dir: Optional[str] = None,
	console: bool = True,
	to_file: bool = False,
) -> Logger:
	"""Factory function to create a Logger instance."""
	return Logger(name=name, log_dir=log_dir, console=console, to_file=to_file)
