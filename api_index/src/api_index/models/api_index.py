# --- The two lookup caches handed to downstream consumers --------------------
import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

from api_index.src.api_index.errors import ConfigError, DuplicateClassError
from api_index.src.api_index.models.ast_models import ClassRecord, MethodRecord

logger = logging.getLogger(__name__)


@dataclass
class ApiIndex:
    """
    classes: fully-qualified name -> ClassRecord (one record per name)
    names:   simple name -> fully-qualified names, in insertion order. Only ever
             grows, so a name seen twice is listed twice.
    """
    classes: dict[str, ClassRecord] = field(default_factory=dict)
    names: dict[str, list[str]] = field(default_factory=dict)
    on_collision: str = "replace"

    def __post_init__(self):
        if self.on_collision not in ("replace", "error"):
            raise ConfigError(f"unknown collision policy {self.on_collision!r}")

    def __len__(self) -> int:
        return len(self.classes)

    def __contains__(self, fqcn: object) -> bool:
        return fqcn in self.classes

    def put(self, record: ClassRecord):
        self.put_all([record])

    def put_all(self, records: Sequence[ClassRecord]):
        """
        Inserts one file's worth of records. Collisions are checked up front so
        a rejected batch leaves the index untouched.
        """
        fqcns = [r.fully_qualified_name for r in records]
        for fqcn in fqcns:
            if fqcn in self.classes or fqcns.count(fqcn) > 1:
                if self.on_collision == "error":
                    raise DuplicateClassError(fqcn)

        for record in records:
            fqcn = record.fully_qualified_name
            previous = self.classes.get(fqcn)
            if previous is not None:
                logger.warning(
                    "Class %s from %s replaces the one indexed from %s",
                    fqcn, record.file_path, previous.file_path,
                )
            self.classes[fqcn] = record
            self.names.setdefault(record.simple_name, []).append(fqcn)

    # -- Queries --------------------------------------------------------------

    def get(self, fqcn: str) -> Optional[ClassRecord]:
        return self.classes.get(fqcn)

    def find(self, simple_name: str) -> list[ClassRecord]:
        """All records currently registered under a simple name."""
        found = []
        seen = set()
        for fqcn in self.names.get(simple_name, []):
            if fqcn in seen or fqcn not in self.classes:
                continue
            seen.add(fqcn)
            found.append(self.classes[fqcn])
        return found

    def lookup(self, name: str) -> list[ClassRecord]:
        """Accepts either a fully-qualified or a simple class name."""
        record = self.classes.get(name)
        if record is not None:
            return [record]
        return self.find(name)

    def iter_methods(self) -> Iterator[MethodRecord]:
        for record in self.classes.values():
            yield from record.methods.values()
