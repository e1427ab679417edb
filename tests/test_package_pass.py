import logging
from pathlib import Path

import pytest

from api_index.src.api_index.errors import SourceLayoutError
from api_index.src.api_index.models.source_set import SourceSet
from api_index.src.api_index.package_pass import find_package, resolve_packages, source_root_for
from api_index.src.api_index.signals import PHASE_PACKAGES

PACKAGE_PASS_LOGGER = "api_index.src.api_index.package_pass"


class TestSourceRootFor:

    def test_strips_package_directories(self):
        path = Path("/work/src/main/java/com/acme/web/Foo.java")
        assert source_root_for(path, "com.acme.web") == str(Path("/work/src/main/java"))

    def test_only_the_suffix_is_stripped(self):
        # "com/acme" also appears higher up the path
        path = Path("/home/com/acme/src/com/acme/Foo.java")
        assert source_root_for(path, "com.acme") == str(Path("/home/com/acme/src"))

    def test_default_package_returns_path_unchanged(self):
        path = Path("/work/src/Foo.java")
        assert source_root_for(path, None) == str(path)
        assert source_root_for(path, "") == str(path)

    def test_layout_mismatch_raises(self):
        with pytest.raises(SourceLayoutError):
            source_root_for(Path("/work/src/other/Foo.java"), "com.acme")


class TestFindPackage:

    def test_reads_package_declaration(self, java_parser, foo_java):
        unit = java_parser.parse_source(foo_java).result
        assert find_package(unit) == "com.acme"

    def test_default_package(self, java_parser):
        unit = java_parser.parse_source("class Foo {}\n").result
        assert find_package(unit) is None


class TestResolvePackages:

    def test_collects_deduplicated_roots(self, write_tree, java_parser, sink, foo_java):
        base = write_tree({
            "svc/src/main/java/com/acme/Foo.java": foo_java,
            "svc/src/main/java/com/acme/Bar.java": "package com.acme;\nclass Bar {}\n",
            "lib/src/org/x/Baz.java": "package org.x;\nclass Baz {}\n",
        })
        source_set = SourceSet(root=base, files=sorted(base.rglob("*.java")))

        resolve_packages(source_set, java_parser, sink)

        assert source_set.source_roots == {
            str(base / "svc/src/main/java"),
            str(base / "lib/src"),
        }
        assert sink.ticks_for(PHASE_PACKAGES) == [(3, 1), (3, 2), (3, 3)]

    def test_broken_file_is_logged_twice_and_skipped(self, write_tree, java_parser, sink, caplog,
                                                      foo_java, broken_java):
        base = write_tree({
            "src/com/acme/Broken.java": broken_java,
            "src/com/acme/Foo.java": foo_java,
        })
        broken = base / "src/com/acme/Broken.java"
        source_set = SourceSet(root=base, files=[broken, base / "src/com/acme/Foo.java"])

        with caplog.at_level(logging.ERROR, logger=PACKAGE_PASS_LOGGER):
            resolve_packages(source_set, java_parser, sink)

        messages = [r.getMessage() for r in caplog.records if r.name == PACKAGE_PASS_LOGGER]
        assert len(messages) == 2
        assert messages[0].startswith(f"fail to parse {broken}: ")
        assert messages[1].startswith(f"fail to parse {broken.absolute()} for ")
        # Foo still contributes its root, and the broken file still ticks
        assert source_set.source_roots == {str(base / "src")}
        assert sink.ticks_for(PHASE_PACKAGES) == [(2, 1), (2, 2)]

    def test_default_package_contributes_no_root(self, write_tree, java_parser, sink):
        base = write_tree({"Loose.java": "class Loose {}\n"})
        source_set = SourceSet(root=base, files=[base / "Loose.java"])

        resolve_packages(source_set, java_parser, sink)

        assert source_set.source_roots == set()
        assert sink.ticks_for(PHASE_PACKAGES) == [(1, 1)]

    def test_missing_file_is_skipped(self, tmp_path, java_parser, sink):
        source_set = SourceSet(root=tmp_path, files=[tmp_path / "Gone.java"])
        resolve_packages(source_set, java_parser, sink)
        assert source_set.source_roots == set()
        assert sink.ticks_for(PHASE_PACKAGES) == [(1, 1)]
