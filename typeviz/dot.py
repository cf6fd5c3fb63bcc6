"""Graphviz DOT synthesis for extracted entities.

Each entity becomes a plaintext node with an HTML table label. Objects,
enums, unions and aliases are grouped in their own cluster. Edges come
from three relationships:

- inheritance: supertype -> subtype, hollow arrow at the supertype
- aggregation: property row -> property type, open diamond at the owner
- union membership: member row -> member type ("is one of")

Edge targets are not checked against the emitted nodes; Graphviz draws an
implicit node for anything that is referenced but never declared.
"""

from __future__ import annotations

import html
from typing import Iterable, List, Optional, Sequence, Tuple

from .model import AliasType, Entity, EnumType, ObjectType, Property, UnionType
from .primitives import DEFAULT, PrimitiveTypes, singular


FULL_COLOR = "#212121"
MUTED_COLOR = "#9E9E9E"

TABLE_OPEN = '<table border="0" cellborder="1" cellspacing="0" cellpadding="4">'

# (cluster id, entity class, border color, fill color)
CLUSTERS: Sequence[Tuple[str, type, str, str]] = (
	("objects", ObjectType, "#D8C37A", "#FFF4C2"),
	("enums", EnumType, "#8FBC8F", "#E3F4E3"),
	("unions", UnionType, "#7FA7D6", "#E1ECFA"),
	("aliases", AliasType, "#B0B0B0", "#F2F2F2"),
)


def escape(text: str) -> str:
	return html.escape(text, quote=True)


def quote_id(text: str) -> str:
	"""Quote a node or port identifier for DOT."""
	return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


def endpoint(node: str, port: Optional[str] = None) -> str:
	if port is None:
		return quote_id(node)
	return f"{quote_id(node)}:{quote_id(port)}"


def _attrs(**attrs: str) -> str:
	return "[" + ", ".join(f"{k}={v}" for k, v in attrs.items()) + "]"


def _font(text: str, color: str) -> str:
	return f'<font color="{color}">{text}</font>'


def _table(rows: Iterable[str]) -> str:
	return "<" + TABLE_OPEN + "".join(rows) + "</table>>"


def _marker_rows(marker: str, name: str, colspan: int = 1) -> List[str]:
	span = f' colspan="{colspan}"' if colspan > 1 else ""
	return [
		f"<tr><td{span}><i>&laquo;{marker}&raquo;</i></td></tr>",
		f"<tr><td{span}><b>{escape(name)}</b></td></tr>",
	]


def _property_row(prop: Property) -> str:
	color = MUTED_COLOR if prop.nullable else FULL_COLOR
	return (
		f'<tr><td port="{escape(prop.name)}" align="left">{_font(escape(prop.name), color)}</td>'
		f'<td align="left">{_font(escape(prop.type), color)}</td></tr>'
	)


def object_label(entity: ObjectType) -> str:
	rows = [f'<tr><td colspan="2"><b>{escape(entity.name)}</b></td></tr>']
	rows.extend(_property_row(p) for p in entity.properties)
	return _table(rows)


def enum_label(entity: EnumType) -> str:
	rows = _marker_rows("enum", entity.name)
	# literal tokens keep their quotes; only markup characters are escaped
	rows.extend(f"<tr><td>{html.escape(v, quote=False)}</td></tr>" for v in entity.values)
	return _table(rows)


def union_label(entity: UnionType) -> str:
	rows = _marker_rows("union", entity.name)
	rows.extend(
		f'<tr><td port="{escape(singular(t))}">{escape(t)}</td></tr>' for t in entity.types
	)
	return _table(rows)


def alias_label(entity: AliasType) -> str:
	rows = _marker_rows("alias", entity.name)
	rows.append(f"<tr><td>{escape(entity.type)}</td></tr>")
	return _table(rows)


def label_for(entity: Entity) -> str:
	if isinstance(entity, ObjectType):
		return object_label(entity)
	elif isinstance(entity, EnumType):
		return enum_label(entity)
	elif isinstance(entity, UnionType):
		return union_label(entity)
	elif isinstance(entity, AliasType):
		return alias_label(entity)
	raise TypeError(f"Unsupported entity: {entity!r}")


def render_node(entity: Entity) -> str:
	return f"{quote_id(entity.name)} [label={label_for(entity)}]"


def render_cluster(cluster: str, color: str, fillcolor: str, entities: Sequence[Entity]) -> List[str]:
	lines = [
		f"subgraph cluster_{cluster} {{",
		'\tlabel=""',
		'\tstyle="filled,rounded"',
		f'\tcolor="{color}"',
		f'\tfillcolor="{fillcolor}"',
	]
	lines.extend("\t" + render_node(e) for e in entities)
	lines.append("}")
	return lines


def inheritance_edges(entity: ObjectType) -> List[str]:
	return [
		f"{endpoint(parent)} -> {endpoint(entity.name)} {_attrs(dir='back', arrowtail='empty')}"
		for parent in entity.includes
	]


def aggregation_edges(entity: ObjectType, primitives: PrimitiveTypes) -> List[str]:
	edges: List[str] = []
	for prop in entity.properties:
		if prop.type in primitives:
			continue
		if prop.nullable:
			style = _attrs(dir="back", arrowtail="odiamond", style="dashed", color=f'"{MUTED_COLOR}"')
		else:
			style = _attrs(dir="back", arrowtail="odiamond", style="solid", color=f'"{FULL_COLOR}"')
		edges.append(f"{endpoint(entity.name, prop.name)} -> {endpoint(singular(prop.type))} {style}")
	return edges


def union_edges(entity: UnionType, primitives: PrimitiveTypes) -> List[str]:
	edges: List[str] = []
	for member in entity.types:
		if member in primitives:
			continue
		target = singular(member)
		edges.append(
			f"{endpoint(entity.name, target)} -> {endpoint(target)} "
			+ _attrs(dir="forward", arrowhead="vee", style="dotted")
		)
	return edges


def edges_for(entity: Entity, primitives: PrimitiveTypes = DEFAULT) -> List[str]:
	if isinstance(entity, ObjectType):
		return inheritance_edges(entity) + aggregation_edges(entity, primitives)
	elif isinstance(entity, UnionType):
		return union_edges(entity, primitives)
	elif isinstance(entity, (EnumType, AliasType)):
		return []
	raise TypeError(f"Unsupported entity: {entity!r}")


def _graph_attrs(rankdir: Optional[str]) -> List[str]:
	attrs = ["overlap=false", "splines=true", "bgcolor=transparent"]
	if rankdir:
		attrs.append(f"rankdir={quote_id(rankdir)}")
	return attrs


def write_dot(
	entities: Sequence[Entity],
	primitives: PrimitiveTypes = DEFAULT,
	rankdir: Optional[str] = None,
) -> str:
	"""Build one self-contained DOT document for the given entities."""
	lines = ["digraph G {"]
	lines.extend("\t" + a for a in _graph_attrs(rankdir))
	lines.append("")
	lines.append('\tnode [shape=plaintext, fontname="Helvetica"]')
	lines.append('\tedge [fontname="Helvetica"]')

	for cluster, cls, color, fillcolor in CLUSTERS:
		members = [e for e in entities if isinstance(e, cls)]
		lines.append("")
		lines.extend("\t" + line for line in render_cluster(cluster, color, fillcolor, members))

	lines.append("")
	for entity in entities:
		lines.extend("\t" + edge for edge in edges_for(entity, primitives))
	lines.append("}")
	return "\n".join(lines) + "\n"
