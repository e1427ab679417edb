# --- The Indexer -------------------------------------------------------------
import logging
from pathlib import Path
from typing import Optional, Union

from api_index.src.api_index.api_filter import AnnotationSubstringFilter, ApiSurfaceFilter
from api_index.src.api_index.config import IndexerConfig
from api_index.src.api_index.extraction import extract_classes
from api_index.src.api_index.inputs.directory_scanning import discover_java_files
from api_index.src.api_index.models.api_index import ApiIndex
from api_index.src.api_index.models.source_set import SourceSet
from api_index.src.api_index.package_pass import resolve_packages
from api_index.src.api_index.parsing import JavaParser
from api_index.src.api_index.resolution import configure_resolver
from api_index.src.api_index.signals import LoggingSignalSink, SignalSink

logger = logging.getLogger(__name__)


class ApiIndexer:
    """
    Indexes a directory of Java sources in two passes:
      1. syntax-only parse of every file -> package -> source root
      2. resolver-aware parse of every file -> classes and API methods
    Each file goes through both passes on its own; a broken file is skipped.
    """

    def __init__(self, config: Optional[IndexerConfig] = None, sink: Optional[SignalSink] = None,
                 api_filter: Optional[ApiSurfaceFilter] = None):
        self.config = config or IndexerConfig()
        self.sink = sink or LoggingSignalSink()
        self.api_filter = api_filter or AnnotationSubstringFilter(self.config.api_marker)
        # Syntax-only until configure_resolver() has seen every source root
        self.parser = JavaParser()
        self.index: Optional[ApiIndex] = None

    def load(self, directory: Union[str, Path]) -> Optional[ApiIndex]:
        """
        Indexes everything below `directory`. Returns None, after a warning, when
        it is not a directory. The stop signal is sent in every case; it is blank
        when the run did not complete.
        """
        stop_msg = " "
        try:
            root = Path(directory)
            if not root.is_dir():
                self.sink.warn(f"{directory} is not directory")
                return None

            self.sink.info("Begin to load project files...")
            source_set = discover_java_files(root, self.config.file_suffix, self.config.exclude_dirs)
            self.sink.info(
                f"There are a total of {source_set.file_size} Java files, and parsing is now starting..."
            )
            index = self.index_source_set(source_set)
            method_count = sum(1 for _ in index.iter_methods())
            stop_msg = (
                f"The Java code parsing has been completed: {len(index)} classes, "
                f"{method_count} API methods."
            )
            return index
        finally:
            self.sink.stop(stop_msg)

    def index_source_set(self, source_set: SourceSet) -> ApiIndex:
        self.sink.info("Begin to parse packages...")
        resolve_packages(source_set, self.parser, self.sink)
        logger.debug("Source roots: %s", sorted(source_set.source_roots))

        # Only now is the root set complete
        resolver_parser = configure_resolver(source_set.source_roots)

        self.sink.info("Begin to parse Java files...")
        index = ApiIndex(on_collision=self.config.on_collision)
        extract_classes(source_set, resolver_parser, index, self.sink, self.api_filter)
        self.index = index
        return index
