from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Property(BaseModel):
	model_config = ConfigDict(frozen=True)

	name: str
	type: str
	nullable: bool = False


class ObjectType(BaseModel):
	model_config = ConfigDict(frozen=True)

	kind: Literal["object"] = "object"
	name: str
	properties: List[Property] = []
	includes: List[str] = []


class EnumType(BaseModel):
	model_config = ConfigDict(frozen=True)

	kind: Literal["enum"] = "enum"
	name: str
	values: List[str] = []


class UnionType(BaseModel):
	model_config = ConfigDict(frozen=True)

	kind: Literal["union"] = "union"
	name: str
	types: List[str] = []


class AliasType(BaseModel):
	model_config = ConfigDict(frozen=True)

	kind: Literal["alias"] = "alias"
	name: str
	type: str


Entity = Annotated[
	Union[ObjectType, EnumType, UnionType, AliasType],
	Field(discriminator="kind"),
]


class FileResult(BaseModel):
	path: str
	entities: List[Entity] = []
	error: Optional[str] = None


class SkippedFile(BaseModel):
	path: str
	reason: str


class RenderResult(BaseModel):
	exit_code: int
	log: str = ""
	errors: str = ""


class Summary(BaseModel):
	overview: str
	counts: Dict[str, int]
	duplicates: List[str] = []
	dangling: Dict[str, List[str]] = {}


class RunResult(BaseModel):
	files: List[str]
	entities: List[Entity]
	dot: str
	skipped: List[SkippedFile] = []
	render: Optional[RenderResult] = None
