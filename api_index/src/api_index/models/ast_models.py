# --- Data models for our index ----------------------------------------------
from dataclasses import dataclass, field
from typing import Iterable, Optional


@dataclass(frozen=True)
class Annotation:
    """An annotation as written on a declaration, e.g. @GetMapping("/users")."""
    name: str  # identifier as written, possibly qualified (e.g., "GetMapping")
    arguments: Optional[str] = None  # text between the parentheses, None for marker annotations

    def __str__(self) -> str:
        if self.arguments is None:
            return f"@{self.name}"
        return f"@{self.name}({self.arguments})"


@dataclass(frozen=True)
class Parameter:
    name: str  # e.g., "id"
    type: str  # type text as written, e.g., "List<Long>"
    annotations: tuple[Annotation, ...] = ()


@dataclass(frozen=True)
class FieldSummary:
    name: str
    type: str


@dataclass
class MethodRecord:
    """An API-relevant method declaration and everything the docs need about it."""
    simple_name: str  # e.g., "getUser"
    declaration: str  # e.g., "public ResponseEntity<User> getUser(@PathVariable Long id)"
    parameters: list[Parameter] = field(default_factory=list)
    comment: str = ""  # leading Javadoc, empty if none
    annotations: list[Annotation] = field(default_factory=list)
    body: str = ""  # "{ ... }" text, empty for abstract/interface methods
    response_type: Optional[str] = None  # return type with envelopes unwrapped, e.g., "User"
    response_qualified_name: Optional[str] = None  # resolver's answer for response_type
    line: int = 0
    # Back-reference for lookups only; the index owns the ClassRecord.
    owner: Optional["ClassRecord"] = field(default=None, repr=False, compare=False)

    def add_annotations(self, annotations: Iterable[Annotation]):
        """Appends copies of the given annotations after the method's own."""
        self.annotations.extend(list(annotations))


@dataclass
class ClassRecord:
    """A class, interface, enum or record declaration found in one source file."""
    simple_name: str  # e.g., "UserController"
    fully_qualified_name: str  # e.g., "com.acme.web.UserController" or "com.acme.Outer.Inner"
    kind: str = "class"  # "class", "interface", "enum" or "record"
    annotations: list[Annotation] = field(default_factory=list)
    fields: list[FieldSummary] = field(default_factory=list)
    methods: dict[str, MethodRecord] = field(default_factory=dict)  # simple name -> method
    file_path: Optional[str] = None
    line: int = 0

    def cache_method(self, method: MethodRecord) -> Optional[MethodRecord]:
        """
        Stores a method under its simple name and returns whatever it replaced.
        Overloads are not distinguished: the last one declared wins.
        """
        method.owner = self
        previous = self.methods.get(method.simple_name)
        self.methods[method.simple_name] = method
        return previous
