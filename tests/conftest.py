from pathlib import Path

import pytest

from api_index.src.api_index.parsing import JavaParser


class RecordingSink:
    """Keeps every signal so tests can assert on the sequence."""

    def __init__(self):
        self.warnings = []
        self.infos = []
        self.ticks = []  # (total, current, phase)
        self.stops = []

    def warn(self, message):
        self.warnings.append(message)

    def info(self, message):
        self.infos.append(message)

    def progress(self, total, current, phase):
        self.ticks.append((total, current, phase))

    def stop(self, message):
        self.stops.append(message)

    def ticks_for(self, phase):
        return [(total, current) for total, current, p in self.ticks if p == phase]


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def java_parser():
    return JavaParser()


@pytest.fixture
def write_tree(tmp_path):
    """Writes {relative path: source} under tmp_path and returns tmp_path."""

    def _write(files, base: Path = None):
        base = base or tmp_path
        for relative, source in files.items():
            path = base / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        return base

    return _write


FOO_JAVA = """package com.acme;

public class Foo {
    @GetMapping("/bar")
    public String bar() {
        return "bar";
    }

    public void helper() {
    }
}
"""

BROKEN_JAVA = """package com.acme;

public class Broken {
    void m( {
"""


@pytest.fixture
def foo_java():
    return FOO_JAVA


@pytest.fixture
def broken_java():
    return BROKEN_JAVA
