"""Type diagrams for TypeScript sources.

Modules:
- fs_scan.py: Glob-based file discovery.
- ts_parse.py: tree-sitter parsing of TypeScript and TSX files.
- extract.py: Interface and type alias declarations to entities.
- dot.py: Graphviz DOT synthesis.
- render.py: Graphviz subprocess rendering.
- summarize.py: Deterministic summary of a run.
- pipeline.py: Orchestration of the above.
"""

__all__ = [
	"fs_scan",
	"ts_parse",
	"extract",
	"dot",
	"render",
	"summarize",
	"pipeline",
]
