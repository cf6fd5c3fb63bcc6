"""Discover, parse and extract files, then synthesize one diagram.

Files are read and parsed concurrently, but results are always combined in
discovery order so the same inputs produce the same DOT text.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Iterable, List, Optional, Sequence

from .dot import write_dot
from .errors import SourceParseError
from .extract import extract_entities
from .fs_scan import discover_files
from .model import Entity, FileResult, RunResult, SkippedFile
from .primitives import DEFAULT, PrimitiveTypes
from .render import render_dot
from .settings import Settings, get_settings
from .ts_parse import parse_checked, read_source


logger = logging.getLogger(__name__)


def primitives_from(settings: Settings) -> PrimitiveTypes:
	if not settings.extra_primitives:
		return DEFAULT
	return DEFAULT.extended(settings.extra_primitives)


def process_file(path: str, strict: bool = False) -> FileResult:
	try:
		text = read_source(path)
		tree = parse_checked(path, text)
	except SourceParseError as e:
		if strict:
			raise
		logger.warning("Skipping %s", e)
		return FileResult(path=path, error=e.reason)

	entities = extract_entities(tree.root_node)
	logger.debug("Extracted %d entities from %s", len(entities), path)
	return FileResult(path=path, entities=entities)


def process_files(files: Sequence[str], max_workers: int = 8, strict: bool = False) -> List[FileResult]:
	worker = partial(process_file, strict=strict)
	if max_workers <= 1 or len(files) <= 1:
		return [worker(f) for f in files]
	# map() yields in submission order regardless of completion order
	with ThreadPoolExecutor(max_workers=min(max_workers, len(files))) as executor:
		return list(executor.map(worker, files))


def run(patterns: Iterable[str], settings: Optional[Settings] = None) -> RunResult:
	settings = settings or get_settings()
	files = discover_files(patterns)
	results = process_files(files, max_workers=settings.max_workers, strict=settings.strict)

	entities: List[Entity] = []
	skipped: List[SkippedFile] = []
	for r in results:
		if r.error is not None:
			skipped.append(SkippedFile(path=r.path, reason=r.error))
		entities.extend(r.entities)

	dot = write_dot(entities, primitives_from(settings), settings.rankdir)
	logger.info("Collected %d entities from %d files", len(entities), len(files) - len(skipped))
	return RunResult(files=files, entities=entities, dot=dot, skipped=skipped)


def run_and_render(patterns: Iterable[str], output: str, settings: Optional[Settings] = None) -> RunResult:
	settings = settings or get_settings()
	result = run(patterns, settings)
	rendered = render_dot(result.dot, output, settings.renderer_command, settings.render_format)
	return result.model_copy(update={"render": rendered})
