from __future__ import annotations

import glob
import logging
import os
from typing import Iterable, List

from .errors import DiscoveryError


logger = logging.getLogger(__name__)

IGNORED_DIRS = {".git", "node_modules", "dist", "build"}


def _path_parts(path: str) -> List[str]:
	return [p for p in os.path.normpath(path).split(os.sep) if p]


def is_ignored(path: str, pattern: str) -> bool:
	# A pattern that names an ignored dir explicitly opts back in
	skipped = IGNORED_DIRS.difference(_path_parts(pattern))
	return any(part in skipped for part in _path_parts(path))


def expand_pattern(pattern: str) -> List[str]:
	if not pattern or not pattern.strip():
		raise DiscoveryError("Empty file pattern")
	try:
		matches = glob.glob(pattern, recursive=True)
	except (OSError, ValueError) as e:
		raise DiscoveryError(f"Cannot expand pattern {pattern!r}: {e}") from e
	files = {m for m in matches if os.path.isfile(m) and not is_ignored(m, pattern)}
	return sorted(files)


def discover_files(patterns: Iterable[str]) -> List[str]:
	"""Expand glob patterns into files, in pattern order.

	Matches are sorted and deduplicated within a pattern but not across
	patterns, so a file matched twice is processed twice.
	"""
	patterns = list(patterns)
	if not patterns:
		raise DiscoveryError("No file patterns given")

	files: List[str] = []
	for pattern in patterns:
		matched = expand_pattern(pattern)
		if not matched:
			logger.warning("Pattern %r matched no files", pattern)
		files.extend(matched)

	if not files:
		raise DiscoveryError(f"No files matched: {', '.join(patterns)}")
	logger.debug("Discovered %d files", len(files))
	return files
