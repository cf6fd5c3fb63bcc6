from __future__ import annotations

import logging
import shutil
import subprocess
from typing import List

from .model import RenderResult


logger = logging.getLogger(__name__)

DEFAULT_COMMAND = "dot"
DEFAULT_FORMAT = "png:cairo"


def build_command(executable: str, output: str, fmt: str = DEFAULT_FORMAT) -> List[str]:
	return [executable, f"-T{fmt}", "-o", output]


def render_dot(
	dot: str,
	output: str,
	command: str = DEFAULT_COMMAND,
	fmt: str = DEFAULT_FORMAT,
) -> RenderResult:
	"""Pipe DOT text into Graphviz and write the image to ``output``.

	Runs once, without retry or timeout. Failures are reported through the
	returned exit code and captured streams rather than raised.
	"""
	executable = shutil.which(command)
	if executable is None:
		logger.warning("Renderer %r not found on PATH", command)
		return RenderResult(exit_code=127, errors=f"{command}: executable not found")

	proc = subprocess.run(
		build_command(executable, output, fmt),
		input=dot,
		check=False,
		capture_output=True,
		text=True,
	)
	if proc.returncode != 0:
		logger.warning("Renderer exited with status %d", proc.returncode)
	return RenderResult(exit_code=proc.returncode, log=proc.stdout or "", errors=proc.stderr or "")
