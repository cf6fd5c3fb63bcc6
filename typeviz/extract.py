"""Classify TypeScript declarations into diagram entities.

Only two declaration shapes are understood:

- ``interface X extends A, B { ... }`` becomes an ObjectType.
- ``type X = ...`` becomes an EnumType (literal union), UnionType
  (non-literal union) or AliasType (anything else).

Every node of the tree is visited, so declarations nested in namespaces,
modules or function bodies are found as well.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, Iterator, List, Optional

import tree_sitter as ts

from .model import AliasType, Entity, EnumType, ObjectType, Property, UnionType


logger = logging.getLogger(__name__)


def node_text(node: Optional[ts.Node]) -> Optional[str]:
	if node is None or node.is_missing or node.text is None:
		return None
	text = node.text.decode("utf-8").strip()
	return text or None


def walk(root: ts.Node) -> Iterator[ts.Node]:
	"""Pre-order traversal: parent first, then children left to right."""
	stack = [root]
	while stack:
		node = stack.pop()
		yield node
		stack.extend(reversed(node.children))


def _property(member: ts.Node) -> Optional[Property]:
	if member.has_error:
		return None
	name = node_text(member.child_by_field_name("name"))
	annotation = member.child_by_field_name("type")
	if name is None or annotation is None:
		return None
	# type_annotation is `: T`; keep only T
	type_node = annotation.named_children[0] if annotation.named_children else None
	type_text = node_text(type_node)
	if type_text is None:
		return None
	nullable = any(child.type == "?" for child in member.children)
	return Property(name=name, type=type_text, nullable=nullable)


def _heritage(node: ts.Node) -> List[str]:
	includes: List[str] = []
	for clause in node.children:
		if clause.type != "extends_type_clause":
			continue
		for type_node in clause.children_by_field_name("type"):
			text = node_text(type_node)
			if text is not None:
				includes.append(text)
	return includes


def transform_interface(node: ts.Node) -> Optional[Entity]:
	name = node_text(node.child_by_field_name("name"))
	if name is None:
		return None

	properties: List[Property] = []
	body = node.child_by_field_name("body")
	if body is not None:
		for member in body.named_children:
			if member.type != "property_signature":
				continue
			prop = _property(member)
			if prop is None:
				logger.debug("Skipping member %r of %s", node_text(member), name)
				continue
			properties.append(prop)

	return ObjectType(name=name, properties=properties, includes=_heritage(node))


def union_members(node: ts.Node) -> List[ts.Node]:
	# tree-sitter nests `A | B | C` as ((A | B) | C)
	members: List[ts.Node] = []
	for child in node.named_children:
		if child.type == "union_type":
			members.extend(union_members(child))
		else:
			members.append(child)
	return members


# `null` and `undefined` also parse as literal_type but stay union members
LITERAL_KINDS = {"string", "number", "true", "false", "unary_expression"}


def is_literal_member(node: ts.Node) -> bool:
	if node.type != "literal_type" or not node.named_children:
		return False
	return node.named_children[0].type in LITERAL_KINDS


def transform_type_alias(node: ts.Node) -> Optional[Entity]:
	name = node_text(node.child_by_field_name("name"))
	value = node.child_by_field_name("value")
	if name is None or value is None:
		return None

	if value.type != "union_type":
		text = node_text(value)
		if text is None:
			return None
		return AliasType(name=name, type=text)

	members = union_members(value)
	values = [
		text
		for text in (node_text(m) for m in members if is_literal_member(m))
		if text is not None
	]
	if values:
		return EnumType(name=name, values=values)

	types = [text for text in (node_text(m) for m in members) if text is not None]
	if types:
		return UnionType(name=name, types=types)
	return None


class DeclarationKind(str, Enum):
	"""Syntax kinds that produce an entity."""

	INTERFACE = "interface_declaration"
	TYPE_ALIAS = "type_alias_declaration"


_KINDS: Dict[str, DeclarationKind] = {kind.value: kind for kind in DeclarationKind}


def transform(node: ts.Node) -> Optional[Entity]:
	kind = _KINDS.get(node.type)
	if kind is DeclarationKind.INTERFACE:
		return transform_interface(node)
	elif kind is DeclarationKind.TYPE_ALIAS:
		return transform_type_alias(node)
	return None


def extract_entities(root: ts.Node) -> List[Entity]:
	"""Collect entities in pre-order; a match does not stop the descent."""
	entities: List[Entity] = []
	for node in walk(root):
		entity = transform(node)
		if entity is not None:
			entities.append(entity)
	return entities
