# --- Java parsing on top of Tree-sitter --------------------------------------
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Union

from tree_sitter import Language, Node, Parser, Tree

from api_index.src.api_index.errors import LanguageLoadError, ParseError
from api_index.src.api_index.tree_sitter_helpers import collect_problems

if TYPE_CHECKING:
    from api_index.src.api_index.resolution import SymbolResolver

_JAVA_LANGUAGE: Optional[Language] = None


def load_java_language() -> Language:
    """
    Loads the Tree-sitter Java grammar from the tree_sitter_java wheel and
    keeps it for the rest of the process.
    """
    global _JAVA_LANGUAGE
    if _JAVA_LANGUAGE is not None:
        return _JAVA_LANGUAGE
    try:
        import tree_sitter_java as tsjava
        _JAVA_LANGUAGE = Language(tsjava.language())
    except (ImportError, AttributeError, TypeError, ValueError) as e:
        raise LanguageLoadError(
            "Could not load the Java grammar. Install it with `pip install tree-sitter-java`."
        ) from e
    return _JAVA_LANGUAGE


@dataclass
class CompilationUnit:
    """One successfully parsed file: the tree plus the bytes it points into."""
    path: Path
    source_bytes: bytes
    tree: Tree = field(repr=False)
    resolver: Optional["SymbolResolver"] = field(default=None, repr=False)

    @property
    def root(self) -> Node:
        return self.tree.root_node


@dataclass
class ParseResult:
    path: Path
    unit: Optional[CompilationUnit] = None
    problems: list[str] = field(default_factory=list)

    @property
    def successful(self) -> bool:
        return self.unit is not None and not self.problems

    @property
    def result(self) -> CompilationUnit:
        """
        The parsed unit. Raises ParseError when the parse was unsuccessful, the
        same way unwrapping an empty result would.
        """
        if not self.successful:
            raise ParseError(self.path, self.problems)
        return self.unit


class JavaParser:
    """
    Parses Java files. A parser without a resolver is syntax-only; the one built
    by configure_resolver() hands its resolver to every unit it produces.
    """

    def __init__(self, resolver: Optional["SymbolResolver"] = None):
        self.language = load_java_language()
        self.parser = Parser(self.language)
        self.resolver = resolver

    def parse_source(self, source: Union[str, bytes], path: Union[str, Path] = "<memory>") -> ParseResult:
        source_bytes = source.encode("utf-8") if isinstance(source, str) else source
        tree = self.parser.parse(source_bytes)
        unit = CompilationUnit(Path(path), source_bytes, tree, self.resolver)
        return ParseResult(Path(path), unit, collect_problems(tree.root_node))

    def parse(self, path: Union[str, Path]) -> ParseResult:
        """Reads and parses a file from disk. I/O errors propagate."""
        path = Path(path)
        return self.parse_source(path.read_bytes(), path)
