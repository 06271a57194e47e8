"""Tests for entry and artifact discovery."""

import os

import pytest

from less_assets.compiler.output import CSS_HEADER
from less_assets.scanner.finder import find_css_files, find_less_files

from helpers import write


def test_find_less_files_skips_partials(web):
    less = web / "less"
    main = write(less / "main.less")
    page = write(less / "pages" / "home.less")
    write(less / "_mixins.less")
    write(less / "pages" / "_vars.less")
    write(less / "notes.txt")

    assert find_less_files(less) == sorted([main, page])


def test_find_less_files_honours_skip_dirs(web):
    less = web / "less"
    main = write(less / "main.less")
    write(less / "node_modules" / "bootstrap" / "bootstrap.less")
    write(less / "vendor" / "lib.less")

    assert find_less_files(less, skip_dirs=["node_modules", "vend*"]) == [main]


def test_find_less_files_missing_root(tmp_path):
    assert find_less_files(tmp_path / "nope") == []


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks not supported")
def test_find_less_files_follows_symlinks(tmp_path):
    shared = tmp_path / "shared"
    write(shared / "theme.less")
    less = tmp_path / "less"
    less.mkdir()
    os.symlink(shared, less / "linked", target_is_directory=True)
    # A loop back to the root must not hang the walk
    os.symlink(less, less / "loop", target_is_directory=True)

    found = find_less_files(less)
    assert [p.name for p in found] == ["theme.less"]


def test_find_css_files_only_managed(web):
    css = web / "css"
    managed = write(css / "main.css", CSS_HEADER + "\n\n.a{}")
    nested = write(css / "pages" / "home.css", CSS_HEADER + "\n\n.b{}")
    write(css / "vendor.css", "/* handwritten */\n.c{}")
    write(css / "empty.css", "")

    assert find_css_files(css) == sorted([managed, nested])
