from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence

from .model import Entity, ObjectType, RunResult, Summary, UnionType
from .primitives import DEFAULT, PrimitiveTypes, singular


def referenced_types(entity: Entity, primitives: PrimitiveTypes = DEFAULT) -> List[str]:
	"""Node names this entity draws an edge to, in edge order."""
	if isinstance(entity, ObjectType):
		targets = list(entity.includes)
		targets.extend(singular(p.type) for p in entity.properties if p.type not in primitives)
		return targets
	if isinstance(entity, UnionType):
		return [singular(t) for t in entity.types if t not in primitives]
	return []


def find_duplicates(entities: Sequence[Entity]) -> List[str]:
	counts = Counter(e.name for e in entities)
	return [name for name, n in counts.items() if n > 1]


def find_dangling(entities: Sequence[Entity], primitives: PrimitiveTypes = DEFAULT) -> Dict[str, List[str]]:
	declared = {e.name for e in entities}
	dangling: Dict[str, List[str]] = {}
	for e in entities:
		missing = [t for t in referenced_types(e, primitives) if t not in declared]
		if missing:
			dangling.setdefault(e.name, [])
			for t in missing:
				if t not in dangling[e.name]:
					dangling[e.name].append(t)
	return dangling


def summarize_entities(
	entities: Sequence[Entity],
	primitives: PrimitiveTypes = DEFAULT,
	file_count: int = 0,
) -> Summary:
	counts: Dict[str, int] = {"object": 0, "enum": 0, "union": 0, "alias": 0}
	for e in entities:
		counts[e.kind] += 1

	overview = (
		f"{len(entities)} entities from {file_count} files: "
		f"{counts['object']} objects, {counts['enum']} enums, "
		f"{counts['union']} unions, {counts['alias']} aliases"
	)
	return Summary(
		overview=overview,
		counts=counts,
		duplicates=find_duplicates(entities),
		dangling=find_dangling(entities, primitives),
	)


def summarize_run(result: RunResult, primitives: PrimitiveTypes = DEFAULT) -> Summary:
	return summarize_entities(result.entities, primitives, file_count=len(result.files))
