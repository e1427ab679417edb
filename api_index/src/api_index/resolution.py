# --- Cross-file type resolution ----------------------------------------------
"""
A small stand-in for a Java symbol solver. It only answers "does a type with
this fully-qualified name exist?", which is all the extraction pass needs to
qualify response types:

- JdkTypeSource knows the common JDK types (the builtin fallback).
- SourceRootTypeSource looks for `<root>/a/b/C.java` on disk.
- CombinedTypeSource asks each source in order.
"""
import logging
import re
from pathlib import Path
from typing import Iterable, Optional, Protocol, Sequence

from api_index.src.api_index.errors import ResolverConfigurationError
from api_index.src.api_index.parsing import JavaParser

logger = logging.getLogger(__name__)

PRIMITIVES = frozenset({"void", "boolean", "byte", "char", "short", "int", "long", "float", "double"})

_JDK_PACKAGES = {
    "java.lang": (
        "Object String Integer Long Short Byte Double Float Boolean Character Number Void "
        "Math System Thread Runnable Iterable Comparable CharSequence StringBuilder Class Enum "
        "Record Exception RuntimeException Error Throwable IllegalArgumentException "
        "IllegalStateException NullPointerException UnsupportedOperationException "
        "AutoCloseable Cloneable Override Deprecated FunctionalInterface SuppressWarnings"
    ),
    "java.util": (
        "List ArrayList LinkedList Map Map.Entry HashMap LinkedHashMap TreeMap Set HashSet "
        "LinkedHashSet TreeSet Collection Collections Arrays Optional Iterator Objects UUID Date "
        "Locale Queue Deque ArrayDeque Properties Random Comparator Stack Vector"
    ),
    "java.util.concurrent": "CompletableFuture Future Callable ConcurrentHashMap ExecutorService TimeUnit",
    "java.util.function": "Function Supplier Consumer Predicate BiFunction",
    "java.util.stream": "Stream Collectors",
    "java.io": "File InputStream OutputStream IOException Serializable Closeable Reader Writer",
    "java.math": "BigDecimal BigInteger",
    "java.time": "LocalDate LocalDateTime LocalTime Instant Duration ZonedDateTime OffsetDateTime",
    "java.nio.file": "Path Paths Files",
}


class TypeSource(Protocol):
    def has_type(self, fqcn: str) -> bool:
        ...


class JdkTypeSource:
    """Builtin types that never appear in the indexed sources."""

    def __init__(self):
        self._known = frozenset(
            f"{package}.{name}"
            for package, names in _JDK_PACKAGES.items()
            for name in names.split()
        )

    def has_type(self, fqcn: str) -> bool:
        return fqcn in self._known


class SourceRootTypeSource:
    def __init__(self, root: str):
        self.root = Path(root)
        if not self.root.is_dir():
            raise ResolverConfigurationError(f"source root {root} is not a directory")
        self._seen: dict[str, bool] = {}

    def has_type(self, fqcn: str) -> bool:
        if fqcn not in self._seen:
            self._seen[fqcn] = self._lookup(fqcn)
        return self._seen[fqcn]

    def _lookup(self, fqcn: str) -> bool:
        # Nested types live in the file of their outermost type: a.b.C.D is
        # a/b/C.java declaring D, or a/b/C/D.java.
        parts = fqcn.split(".")
        for end in range(len(parts), 0, -1):
            candidate = self.root.joinpath(*parts[:end - 1], parts[end - 1] + ".java")
            if candidate.is_file():
                return _declares_all(candidate, parts[end:])
        return False


def _declares_all(path: Path, member_names: Sequence[str]) -> bool:
    """Cheap textual check that every nested type name is declared in the file."""
    if not member_names:
        return True
    source = path.read_text(encoding="utf-8", errors="replace")
    return all(
        re.search(rf"\b(class|interface|enum|record)\s+{re.escape(name)}\b", source)
        for name in member_names
    )


class CombinedTypeSource:
    def __init__(self, sources: Sequence[TypeSource] = ()):
        self.sources: list[TypeSource] = list(sources)

    def add(self, source: TypeSource):
        self.sources.append(source)

    def has_type(self, fqcn: str) -> bool:
        return any(source.has_type(fqcn) for source in self.sources)


class SymbolResolver:
    """Qualifies type names as written in a file, using its package and imports."""

    def __init__(self, type_source: TypeSource):
        self.type_source = type_source

    def resolve(self, type_text: str, package: Optional[str] = None,
                imports: Iterable[str] = ()) -> Optional[str]:
        name = erase_type(type_text)
        if not name or name in PRIMITIVES:
            return None

        imports = list(imports)
        single = [i for i in imports if not i.endswith(".*")]
        wildcards = [i[:-2] for i in imports if i.endswith(".*")]

        # Outer.Inner: qualify the head, then tack the rest back on
        head, _, rest = name.partition(".")
        if rest:
            if self.type_source.has_type(name):
                return name
            qualified_head = self.resolve(head, package, imports)
            if not qualified_head:
                return None
            qualified = f"{qualified_head}.{rest}"
            # An outer type we can see must really declare the member; one
            # known only from an import is taken on trust.
            if self.type_source.has_type(qualified_head) and not self.type_source.has_type(qualified):
                return None
            return qualified

        for imp in single:
            if imp == name or imp.endswith("." + name):
                return imp

        candidates = [f"{package}.{name}" if package else name]
        candidates += [f"{w}.{name}" for w in wildcards]
        candidates.append(f"java.lang.{name}")
        for candidate in candidates:
            if self.type_source.has_type(candidate):
                return candidate
        return None


_TYPE_ANNOTATION = re.compile(r"@[\w.]+(\([^)]*\))?\s*")


def erase_type(type_text: str) -> str:
    """Strips generics, array brackets, varargs and type annotations: `List<User>[]` -> `List`."""
    text = _TYPE_ANNOTATION.sub("", type_text or "")
    text = text.split("<", 1)[0]
    return text.replace("[]", "").replace("...", "").strip()


# --- Resolver configuration --------------------------------------------------

def configure_resolver(source_roots: Iterable[str]) -> JavaParser:
    """
    Builds the combined type source (JDK types first, then one source per
    root) and returns a parser bound to it. Must run after every root is known.
    Failures are fatal configuration errors.
    """
    roots = sorted(set(source_roots))
    type_source = CombinedTypeSource([JdkTypeSource()])
    for root in roots:
        type_source.add(SourceRootTypeSource(root))
    logger.info("Configured type resolution over %d source root(s)", len(roots))
    return JavaParser(resolver=SymbolResolver(type_source))
