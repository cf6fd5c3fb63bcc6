from __future__ import annotations

from typing import FrozenSet, Iterable


ARRAY_SUFFIX = "[]"

DEFAULT_PRIMITIVES: FrozenSet[str] = frozenset(
	name + suffix
	for name in ("string", "number", "boolean", "object", "Function")
	for suffix in ("", ARRAY_SUFFIX)
)


def singular(type_text: str) -> str:
	"""Strip every trailing ``[]`` so ``Foo[]`` and ``Foo`` name the same node."""
	text = type_text.strip()
	while text.endswith(ARRAY_SUFFIX):
		text = text[: -len(ARRAY_SUFFIX)].rstrip()
	return text


def _closing(text: str, start: int, open_ch: str, close_ch: str) -> int:
	"""Index of the bracket closing ``text[start]``, or -1 when unbalanced."""
	depth = 0
	for i in range(start, len(text)):
		ch = text[i]
		if ch == open_ch:
			depth += 1
		elif ch == close_ch:
			depth -= 1
			if depth == 0:
				return i
	return -1


def _unwrap(text: str) -> str:
	# `(() => void)` -> `() => void`, only when the parens enclose everything
	while text.startswith("(") and _closing(text, 0, "(", ")") == len(text) - 1:
		text = text[1:-1].strip()
	return text


def is_function_type(type_text: str) -> bool:
	"""True for `(a: A) => B`, `new () => T`, `<T>(x: T) => T` and arrays of them."""
	text = _unwrap(singular(type_text))
	if text.startswith("new") and text[3:4] in ("(", "<", " "):
		text = text[3:].lstrip()
	if text.startswith("<"):
		end = _closing(text, 0, "<", ">")
		if end == -1:
			return False
		text = text[end + 1 :].lstrip()
	if not text.startswith("("):
		return False
	end = _closing(text, 0, "(", ")")
	return end != -1 and text[end + 1 :].lstrip().startswith("=>")


class PrimitiveTypes:
	"""Type spellings treated as leaf values that never produce an edge."""

	def __init__(self, names: Iterable[str] = DEFAULT_PRIMITIVES):
		self._names = frozenset(n.strip() for n in names if n and n.strip())

	@property
	def names(self) -> FrozenSet[str]:
		return self._names

	def extended(self, names: Iterable[str]) -> "PrimitiveTypes":
		return PrimitiveTypes(self._names.union(names))

	def __contains__(self, type_text: object) -> bool:
		if not isinstance(type_text, str):
			return False
		text = type_text.strip()
		if text in self._names or singular(text) in self._names:
			return True
		return is_function_type(text)

	def __repr__(self) -> str:
		return f"PrimitiveTypes({sorted(self._names)!r})"


DEFAULT = PrimitiveTypes()
