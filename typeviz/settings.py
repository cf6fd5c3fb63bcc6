"""Runtime settings using pydantic-settings."""

from __future__ import annotations

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	"""Settings loaded from ``TYPEVIZ_*`` environment variables."""

	model_config = SettingsConfigDict(
		env_prefix="TYPEVIZ_",
		env_file=".env",
		env_file_encoding="utf-8",
		extra="ignore",
	)

	renderer_command: str = Field(
		default="dot",
		description="Graphviz executable used to render the diagram",
	)
	render_format: str = Field(
		default="png:cairo",
		description="Output format passed to the renderer as -T<format>",
	)
	max_workers: int = Field(
		default=8,
		ge=1,
		description="Upper bound on files read and parsed concurrently",
	)
	extra_primitives: List[str] = Field(
		default_factory=list,
		description="Additional type spellings that never produce an edge",
	)
	rankdir: Optional[str] = Field(
		default=None,
		description="Graphviz rankdir (e.g. LR); free layout when unset",
	)
	strict: bool = Field(
		default=False,
		description="Abort the run on the first file with syntax errors",
	)
	log_level: str = "INFO"


def get_settings() -> Settings:
	return Settings()
