"""Exceptions raised while building a type diagram."""


class TypevizError(Exception):
	"""Base class for typeviz errors."""


class DiscoveryError(TypevizError):
	"""Raised when input patterns cannot be expanded into files.

	Fatal: the run stops before anything is parsed.
	"""


class SourceParseError(TypevizError):
	"""Raised when a single source file cannot be parsed."""

	def __init__(self, path: str, reason: str):
		super().__init__(f"{path}: {reason}")
		self.path = path
		self.reason = reason
