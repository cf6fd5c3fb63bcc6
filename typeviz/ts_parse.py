"""TypeScript parsing with tree-sitter."""

from __future__ import annotations

import os
from typing import Dict

import tree_sitter as ts
import tree_sitter_typescript as tsts

from .errors import SourceParseError


TS_LANGUAGE = ts.Language(tsts.language_typescript())
TSX_LANGUAGE = ts.Language(tsts.language_tsx())

EXTENSION_GRAMMAR: Dict[str, ts.Language] = {
	".tsx": TSX_LANGUAGE,
}


def grammar_for(path: str) -> ts.Language:
	_, ext = os.path.splitext(path)
	return EXTENSION_GRAMMAR.get(ext.lower(), TS_LANGUAGE)


def read_source(path: str) -> str:
	# OSError is left to propagate: unreadable inputs abort the run
	with open(path, "rb") as fh:
		raw = fh.read()
	try:
		return raw.decode("utf-8-sig")
	except UnicodeDecodeError as e:
		raise SourceParseError(path, f"not valid UTF-8 ({e.reason})") from e


def parse_typescript(path: str, text: str) -> ts.Tree:
	# Parsers are not shared: each call may run on a different worker thread
	parser = ts.Parser(grammar_for(path))
	return parser.parse(text.encode("utf-8"))


def first_error_line(tree: ts.Tree) -> int:
	"""1-based line of the first ERROR or MISSING node, or 0 if none."""
	stack = [tree.root_node]
	while stack:
		node = stack.pop()
		if node.type == "ERROR" or node.is_missing:
			return node.start_point[0] + 1
		if node.has_error:
			stack.extend(reversed(node.children))
	return 0


def parse_checked(path: str, text: str) -> ts.Tree:
	tree = parse_typescript(path, text)
	if tree.root_node.has_error:
		line = first_error_line(tree)
		where = f" near line {line}" if line else ""
		raise SourceParseError(path, f"syntax error{where}")
	return tree
