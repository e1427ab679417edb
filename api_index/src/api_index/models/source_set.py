# --- The corpus being indexed -----------------------------------------------
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class SourceSet:
    """
    Ordered list of discovered source files plus what the first pass learns
    about them. Files never change after discovery; only the root set grows.
    """
    root: Path
    files: list[Path] = field(default_factory=list)
    source_roots: set[str] = field(default_factory=set)

    @property
    def file_size(self) -> int:
        return len(self.files)

    def add_root(self, source_root: str):
        self.source_roots.add(source_root)
