# --- Pass one: package declarations -> source roots ---------------------------
import logging
import os
from pathlib import Path
from typing import Optional, Union

from api_index.src.api_index.declarations import DeclarationKind, declaration_kind
from api_index.src.api_index.errors import IndexerError, SourceLayoutError
from api_index.src.api_index.models.source_set import SourceSet
from api_index.src.api_index.parsing import CompilationUnit, JavaParser
from api_index.src.api_index.signals import PHASE_PACKAGES, SignalSink
from api_index.src.api_index.tree_sitter_helpers import first_child_of_type, node_text

logger = logging.getLogger(__name__)


def find_package(unit: CompilationUnit) -> Optional[str]:
    """
    Grabs the package name from the 'package_declaration' node if present.
    """
    for child in unit.root.children:
        if declaration_kind(child) is DeclarationKind.PACKAGE:
            name_node = first_child_of_type(child, "scoped_identifier", "identifier")
            if name_node is not None:
                return node_text(unit.source_bytes, name_node)
    return None


def source_root_for(file_path: Union[str, Path], package_name: Optional[str]) -> str:
    """
    Strips the package's directory layout off the end of the file's directory:
    src/main/java/com/acme/Foo.java in package com.acme -> src/main/java.

    A file in the default package has no suffix to strip and comes back
    unchanged, which is not a usable root.
    """
    path = Path(file_path)
    if not package_name:
        return str(path)

    package_parts = package_name.split(".")
    dir_parts = path.parent.parts
    depth = len(package_parts)
    if len(dir_parts) < depth or list(dir_parts[-depth:]) != package_parts:
        raise SourceLayoutError(
            f"{path} declares package {package_name} but does not live under "
            f"{os.path.join(*package_parts)}"
        )
    return str(Path(*dir_parts[:-depth]))


def resolve_packages(source_set: SourceSet, parser: JavaParser, sink: SignalSink):
    """
    Walks every file with the syntax-only parser and collects one source root
    per file into source_set.source_roots. Broken files are logged and skipped.
    """
    size = source_set.file_size
    for i, java_file in enumerate(source_set.files):
        try:
            parse_result = parser.parse(java_file)
            if not parse_result.successful:
                logger.error("fail to parse %s: %s", java_file, "; ".join(parse_result.problems))
            unit = parse_result.result
            package_name = find_package(unit)
            source_root = source_root_for(java_file, package_name)
            if os.path.isdir(source_root):
                source_set.add_root(source_root)
            else:
                logger.warning("No source root for %s (default package)", java_file)
        except (IndexerError, OSError) as e:
            logger.error("fail to parse %s for %s", Path(java_file).absolute(), e)
        except Exception:
            logger.exception("fail to parse %s", Path(java_file).absolute())
        finally:
            sink.progress(size, i + 1, PHASE_PACKAGES)
