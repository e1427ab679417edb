# --- Directory scanning convenience -----------------------------------------
import os
from pathlib import Path
from typing import Iterable, Union

from api_index.src.api_index.models.source_set import SourceSet


def discover_java_files(root_dir: Union[str, Path], suffix: str = ".java",
                        exclude_dirs: Iterable[str] = ()) -> SourceSet:
    """
    Recursively collects source files below root_dir. Directories are visited in
    sorted order so two runs over the same tree see the files in the same order.
    """
    root = Path(root_dir)
    excluded = set(exclude_dirs)
    files: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded)
        for fn in sorted(filenames):
            if fn.endswith(suffix):
                files.append(Path(dirpath) / fn)
    return SourceSet(root=root, files=files)
