# --- Exception hierarchy -----------------------------------------------------


class IndexerError(Exception):
    """Base class for everything the indexer raises on purpose."""


class LanguageLoadError(IndexerError):
    """The Tree-sitter Java grammar could not be loaded."""


class ParseError(IndexerError):
    """A file produced no usable compilation unit."""

    def __init__(self, path, problems=None):
        self.path = path
        self.problems = list(problems or [])
        detail = "; ".join(self.problems) if self.problems else "no result"
        super().__init__(f"{path}: {detail}")


class SourceLayoutError(IndexerError):
    """A file's directory does not mirror its declared package."""


class ResolverConfigurationError(IndexerError):
    """The symbol-resolution context could not be built. Fatal for the run."""


class DuplicateClassError(IndexerError):
    """Two records claimed the same fully-qualified name."""

    def __init__(self, fqcn: str):
        self.fqcn = fqcn
        super().__init__(f"duplicate class {fqcn}")


class ConfigError(IndexerError):
    """Invalid indexer configuration."""
