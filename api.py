from __future__ import annotations

from typing import List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from typeviz.errors import DiscoveryError, SourceParseError
from typeviz.model import Entity, RenderResult, SkippedFile, Summary
from typeviz.pipeline import primitives_from, run, run_and_render
from typeviz.settings import get_settings
from typeviz.summarize import summarize_run


app = FastAPI(title="Type Diagram Generator")


class DiagramRequest(BaseModel):
	patterns: List[str]
	rankdir: Optional[str] = None


class RenderRequest(DiagramRequest):
	output_path: str


class DiagramResponse(BaseModel):
	dot: str
	entities: List[Entity]
	skipped: List[SkippedFile] = []
	summary: Summary
	render: Optional[RenderResult] = None


def _settings(req: DiagramRequest):
	settings = get_settings()
	if req.rankdir:
		settings = settings.model_copy(update={"rankdir": req.rankdir})
	return settings


def _respond(result, settings) -> DiagramResponse:
	return DiagramResponse(
		dot=result.dot,
		entities=result.entities,
		skipped=result.skipped,
		summary=summarize_run(result, primitives_from(settings)),
		render=result.render,
	)


@app.post("/diagram", response_model=DiagramResponse)
def diagram(req: DiagramRequest) -> DiagramResponse:
	settings = _settings(req)
	try:
		result = run(req.patterns, settings)
	except DiscoveryError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except SourceParseError as e:
		raise HTTPException(status_code=422, detail=str(e))
	return _respond(result, settings)


@app.post("/render", response_model=DiagramResponse)
def render(req: RenderRequest) -> DiagramResponse:
	settings = _settings(req)
	try:
		result = run_and_render(req.patterns, req.output_path, settings)
	except DiscoveryError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except SourceParseError as e:
		raise HTTPException(status_code=422, detail=str(e))
	return _respond(result, settings)


def create_app() -> FastAPI:
	return app
