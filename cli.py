from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from typeviz.errors import TypevizError
from typeviz.pipeline import primitives_from, run, run_and_render
from typeviz.settings import Settings, get_settings
from typeviz.summarize import summarize_run


def settings_from_args(args: argparse.Namespace) -> Settings:
	settings = get_settings()
	overrides = {}
	if args.rankdir:
		overrides["rankdir"] = args.rankdir
	if args.primitive:
		overrides["extra_primitives"] = list(settings.extra_primitives) + list(args.primitive)
	if args.strict:
		overrides["strict"] = True
	if args.workers:
		overrides["max_workers"] = max(1, args.workers)
	return settings.model_copy(update=overrides)


def configure_logging(settings: Settings, verbose: bool) -> None:
	level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
	logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def cmd_render(args: argparse.Namespace) -> int:
	settings = settings_from_args(args)
	configure_logging(settings, args.verbose)
	result = run_and_render(args.patterns, args.output, settings)
	print(result.dot)
	rendered = result.render
	if rendered is None:
		return 0
	if rendered.exit_code:
		print(rendered.exit_code)
	if rendered.log:
		print(rendered.log)
	if rendered.errors:
		print(rendered.errors, file=sys.stderr)
	return rendered.exit_code


def cmd_dot(args: argparse.Namespace) -> int:
	settings = settings_from_args(args)
	configure_logging(settings, args.verbose)
	result = run(args.patterns, settings)
	if args.summary:
		summary = summarize_run(result, primitives_from(settings))
		print(summary.model_dump_json(indent=2))
	else:
		print(result.dot)
	return 0


def cmd_serve(args: argparse.Namespace) -> int:
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)
	return 0


def _add_common(p: argparse.ArgumentParser) -> None:
	p.add_argument("--rankdir", help="Graphviz rankdir, e.g. LR (free layout when omitted)")
	p.add_argument(
		"--primitive",
		action="append",
		default=[],
		metavar="TYPE",
		help="Extra type spelling that never produces an edge (repeatable)",
	)
	p.add_argument("--strict", action="store_true", help="Abort on the first file with syntax errors")
	p.add_argument("--workers", type=int, default=0, help="Files parsed concurrently")
	p.add_argument("-v", "--verbose", action="store_true")


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(prog="typeviz")
	sub = parser.add_subparsers(dest="cmd", required=True)

	pr = sub.add_parser("render", help="Render a type diagram image with Graphviz")
	pr.add_argument("patterns", nargs="+", help="Glob patterns of TypeScript files")
	pr.add_argument("output", help="Image file to write")
	_add_common(pr)
	pr.set_defaults(func=cmd_render)

	pd = sub.add_parser("dot", help="Print the DOT description without rendering")
	pd.add_argument("patterns", nargs="+", help="Glob patterns of TypeScript files")
	pd.add_argument("--summary", action="store_true", help="Print a JSON summary instead")
	_add_common(pd)
	pd.set_defaults(func=cmd_dot)

	ps = sub.add_parser("serve", help="Run FastAPI server")
	ps.add_argument("--host", default="127.0.0.1")
	ps.add_argument("--port", type=int, default=8000)
	ps.add_argument("--reload", action="store_true")
	ps.set_defaults(func=cmd_serve)

	return parser


def main(argv: Optional[List[str]] = None) -> int:
	args = build_parser().parse_args(argv)
	try:
		return args.func(args)
	except (TypevizError, OSError) as e:
		print(f"error: {e}", file=sys.stderr)
		return 1


if __name__ == "__main__":
	sys.exit(main())
