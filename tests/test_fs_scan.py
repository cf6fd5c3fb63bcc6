import os

import pytest

from typeviz.errors import DiscoveryError
from typeviz.fs_scan import discover_files, expand_pattern


def _touch(path):
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text("")
	return str(path)


def test_pattern_matches_are_sorted(tmp_path):
	b = _touch(tmp_path / "b.ts")
	a = _touch(tmp_path / "a.ts")
	_touch(tmp_path / "c.js")
	assert discover_files([str(tmp_path / "*.ts")]) == [a, b]


def test_patterns_keep_order_and_are_not_deduplicated(tmp_path):
	a = _touch(tmp_path / "a.ts")
	b = _touch(tmp_path / "sub" / "b.ts")
	files = discover_files([str(tmp_path / "sub" / "*.ts"), str(tmp_path / "**" / "*.ts")])
	assert files == [b, a, b]


def test_ignored_directories_are_skipped(tmp_path):
	keep = _touch(tmp_path / "src" / "a.ts")
	_touch(tmp_path / "node_modules" / "lib" / "x.ts")
	assert discover_files([str(tmp_path / "**" / "*.ts")]) == [keep]


def test_ignored_directory_named_in_pattern_is_kept(tmp_path):
	lib = _touch(tmp_path / "node_modules" / "lib" / "x.d.ts")
	assert expand_pattern(str(tmp_path / "node_modules" / "**" / "*.ts")) == [lib]


def test_directories_are_not_files(tmp_path):
	os.mkdir(tmp_path / "dir.ts")
	f = _touch(tmp_path / "f.ts")
	assert discover_files([str(tmp_path / "*.ts")]) == [f]


def test_unmatched_pattern_among_others_is_not_fatal(tmp_path):
	a = _touch(tmp_path / "a.ts")
	assert discover_files([str(tmp_path / "*.nothing"), str(tmp_path / "*.ts")]) == [a]


def test_nothing_matched_is_fatal(tmp_path):
	with pytest.raises(DiscoveryError):
		discover_files([str(tmp_path / "*.ts")])


@pytest.mark.parametrize("patterns", [[], [""], ["  "]])
def test_empty_patterns_are_fatal(patterns):
	with pytest.raises(DiscoveryError):
		discover_files(patterns)
