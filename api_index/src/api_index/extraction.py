# --- Pass two: classes and API methods ----------------------------------------
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from tree_sitter import Node

from api_index.src.api_index.api_filter import ApiSurfaceFilter, is_api_method
from api_index.src.api_index.declarations import TYPE_KINDS, DeclarationKind, declaration_kind
from api_index.src.api_index.errors import IndexerError
from api_index.src.api_index.models.api_index import ApiIndex
from api_index.src.api_index.models.ast_models import (
    Annotation,
    ClassRecord,
    FieldSummary,
    MethodRecord,
    Parameter,
)
from api_index.src.api_index.models.source_set import SourceSet
from api_index.src.api_index.parsing import CompilationUnit, JavaParser
from api_index.src.api_index.resolution import SymbolResolver
from api_index.src.api_index.signals import PHASE_CLASSES, SignalSink
from api_index.src.api_index.tree_sitter_helpers import first_child_of_type, node_point, node_text

logger = logging.getLogger(__name__)

# Generic return types with exactly one type argument are unwrapped to that
# argument (ResponseEntity<User> -> User) unless they hold many of it.
COLLECTION_TYPES = frozenset({
    "Collection", "Iterable", "List", "ArrayList", "LinkedList", "Set", "HashSet",
    "LinkedHashSet", "TreeSet", "SortedSet", "Queue", "Deque", "Stream", "Flux",
    "Page", "Slice", "Iterator",
})

# Declarations whose members must not be credited to the enclosing class
_OPAQUE_NODE_TYPES = frozenset({"annotation_type_declaration"})

_ANNOTATION_NODE_TYPES = ("marker_annotation", "annotation")
_COMMENT_NODE_TYPES = ("line_comment", "block_comment")


@dataclass
class _FileScope:
    source_bytes: bytes
    api_filter: ApiSurfaceFilter
    resolver: Optional[SymbolResolver] = None
    path: Optional[Path] = None
    package: Optional[str] = None
    imports: list[str] = field(default_factory=list)

    def text(self, node: Optional[Node]) -> str:
        return node_text(self.source_bytes, node)


def extract_unit(unit: CompilationUnit, api_filter: ApiSurfaceFilter = is_api_method) -> list[ClassRecord]:
    """
    Builds one ClassRecord per type declared in the unit, outer types
    before their nested types. Nothing is written anywhere; the caller decides
    what to do with the records.
    """
    scope = _FileScope(unit.source_bytes, api_filter, unit.resolver, unit.path)
    records: list[ClassRecord] = []
    _walk(unit.root, scope, [], records)
    return records


def _walk(node: Node, scope: _FileScope, class_stack: list[ClassRecord], records: list[ClassRecord]):
    kind = declaration_kind(node)

    if kind is DeclarationKind.PACKAGE:
        name_node = first_child_of_type(node, "scoped_identifier", "identifier")
        scope.package = scope.text(name_node) or None
        return

    if kind is DeclarationKind.IMPORT:
        imported = _import_name(scope.text(node))
        if imported:
            scope.imports.append(imported)
        return

    if kind in TYPE_KINDS:
        record = _class_record(node, kind, scope, class_stack)
        records.append(record)
        class_stack.append(record)
        for child in node.children:
            _walk(child, scope, class_stack, records)
        class_stack.pop()
        # Every method of this class is known now
        if record.annotations:
            for method in record.methods.values():
                method.add_annotations(record.annotations)
        return

    if kind is DeclarationKind.FIELD:
        if class_stack:
            class_stack[-1].fields.extend(_field_summaries(node, scope))
        return

    if kind is DeclarationKind.METHOD:
        if class_stack:
            _index_method(node, scope, class_stack[-1])
        return

    if node.type in _OPAQUE_NODE_TYPES:
        return

    for child in node.children:
        _walk(child, scope, class_stack, records)


def _import_name(import_text: str) -> Optional[str]:
    """`import com.acme.Foo;` -> "com.acme.Foo", `import com.acme.*;` -> "com.acme.*"."""
    body = import_text.strip()
    if body.startswith("import"):
        body = body[len("import"):]
    body = body.rstrip(";").strip()
    if body.startswith("static ") or not body:
        return None
    return "".join(body.split())


# --- Classes -----------------------------------------------------------------

def _class_record(node: Node, kind: DeclarationKind, scope: _FileScope,
                  class_stack: list[ClassRecord]) -> ClassRecord:
    simple = scope.text(node.child_by_field_name("name"))
    if class_stack:
        fqcn = f"{class_stack[-1].fully_qualified_name}.{simple}"
    elif scope.package:
        fqcn = f"{scope.package}.{simple}"
    else:
        fqcn = simple

    line, _ = node_point(node)
    return ClassRecord(
        simple_name=simple,
        fully_qualified_name=fqcn,
        kind=kind.value,
        annotations=_annotations(node, scope),
        file_path=str(scope.path) if scope.path else None,
        line=line,
    )


def _field_summaries(node: Node, scope: _FileScope) -> list[FieldSummary]:
    field_type = scope.text(node.child_by_field_name("type"))
    summaries = []
    for declarator in node.children_by_field_name("declarator"):
        name = scope.text(declarator.child_by_field_name("name"))
        if name:
            summaries.append(FieldSummary(name=name, type=field_type))
    return summaries


def _annotations(node: Node, scope: _FileScope) -> list[Annotation]:
    """Annotations listed in a declaration's `modifiers` child, in source order."""
    modifiers = first_child_of_type(node, "modifiers")
    if modifiers is None:
        return []

    annotations = []
    for child in modifiers.children:
        if child.type not in _ANNOTATION_NODE_TYPES:
            continue
        name = scope.text(child.child_by_field_name("name"))
        arguments = None
        if child.type == "annotation":
            arguments = scope.text(child.child_by_field_name("arguments")).strip()
            if arguments.startswith("(") and arguments.endswith(")"):
                arguments = arguments[1:-1].strip()
        annotations.append(Annotation(name=name, arguments=arguments))
    return annotations


# --- Methods -----------------------------------------------------------------

def _index_method(node: Node, scope: _FileScope, owner: ClassRecord):
    annotations = _annotations(node, scope)
    if not scope.api_filter(annotations):
        return

    method = MethodRecord(
        simple_name=scope.text(node.child_by_field_name("name")),
        declaration=_declaration(node, scope),
        parameters=_parameters(node, scope),
        comment=_javadoc(node, scope),
        annotations=annotations,
        body=scope.text(node.child_by_field_name("body")),
        line=node_point(node)[0],
    )
    type_node = node.child_by_field_name("type")
    if type_node is not None:
        method.response_type = _response_type(type_node, scope)
        if scope.resolver is not None:
            method.response_qualified_name = scope.resolver.resolve(
                method.response_type, scope.package, scope.imports
            )

    replaced = owner.cache_method(method)
    if replaced is not None:
        logger.debug(
            "%s.%s is overloaded; keeping the declaration at line %d",
            owner.fully_qualified_name, method.simple_name, method.line + 1,
        )


def _declaration(node: Node, scope: _FileScope) -> str:
    """`public <T> ResponseEntity<T> find(Long id) throws IOException`, annotations left out."""
    parts = []
    modifiers = first_child_of_type(node, "modifiers")
    if modifiers is not None:
        skipped = _ANNOTATION_NODE_TYPES + _COMMENT_NODE_TYPES
        parts += [scope.text(c) for c in modifiers.children if c.type not in skipped]
    type_parameters = first_child_of_type(node, "type_parameters")
    if type_parameters is not None:
        parts.append(scope.text(type_parameters))
    parts.append(scope.text(node.child_by_field_name("type")))
    parts.append(
        scope.text(node.child_by_field_name("name"))
        + scope.text(node.child_by_field_name("parameters"))
    )
    throws = first_child_of_type(node, "throws")
    if throws is not None:
        parts.append(scope.text(throws))
    return " ".join(" ".join(parts).split())


def _parameters(node: Node, scope: _FileScope) -> list[Parameter]:
    params_node = node.child_by_field_name("parameters")
    if params_node is None:
        return []

    params = []
    for p in params_node.named_children:
        if p.type == "formal_parameter":
            p_type = scope.text(p.child_by_field_name("type"))
            p_name = scope.text(p.child_by_field_name("name"))
        elif p.type == "spread_parameter":
            # varargs: no field names, just [modifiers] type "..." declarator
            declarator = first_child_of_type(p, "variable_declarator")
            type_node = next(
                (c for c in p.named_children if c.type not in ("modifiers", "variable_declarator")),
                None,
            )
            p_type = scope.text(type_node) + "..."
            p_name = scope.text(declarator.child_by_field_name("name")) if declarator else ""
        else:
            continue
        params.append(Parameter(name=p_name, type=p_type, annotations=tuple(_annotations(p, scope))))
    return params


def _javadoc(node: Node, scope: _FileScope) -> str:
    previous = node.prev_named_sibling
    if previous is not None and previous.type == "block_comment":
        raw = scope.text(previous)
        if raw.startswith("/**"):
            return clean_javadoc(raw)

    # Javadoc written after the annotations is parsed into `modifiers`
    modifiers = first_child_of_type(node, "modifiers")
    if modifiers is not None:
        for child in reversed(modifiers.children):
            if child.type == "block_comment" and scope.text(child).startswith("/**"):
                return clean_javadoc(scope.text(child))
    return ""


def clean_javadoc(raw: str) -> str:
    """Drops the comment delimiters and the leading `*` of each line."""
    inner = raw[3:-2] if raw.endswith("*/") else raw[3:]
    lines = []
    for line in inner.splitlines():
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        lines.append(line.rstrip())
    return "\n".join(lines).strip()


def _response_type(type_node: Node, scope: _FileScope) -> str:
    node = type_node
    while node.type == "generic_type":
        raw = first_child_of_type(node, "type_identifier", "scoped_type_identifier")
        raw_name = scope.text(raw).rsplit(".", 1)[-1]
        type_arguments = first_child_of_type(node, "type_arguments")
        args = type_arguments.named_children if type_arguments is not None else []
        if len(args) != 1 or raw_name in COLLECTION_TYPES:
            break
        inner = args[0]
        if inner.type == "wildcard":
            # `? extends Foo` -> Foo; a bare `?` stays wrapped
            bounds = [c for c in inner.named_children if c.type not in _ANNOTATION_NODE_TYPES]
            if not bounds:
                break
            inner = bounds[-1]
        node = inner
    return " ".join(scope.text(node).split())


# --- The pass ----------------------------------------------------------------

def extract_classes(source_set: SourceSet, parser: JavaParser, index: ApiIndex, sink: SignalSink,
                    api_filter: ApiSurfaceFilter = is_api_method):
    """
    Re-parses every file with the resolver-aware parser and folds its records
    into the index. A file either lands in the index completely or not at all.
    """
    size = source_set.file_size
    for i, java_file in enumerate(source_set.files):
        try:
            parse_result = parser.parse(java_file)
            if not parse_result.successful:
                logger.error("fail to parse %s: %s", java_file, "; ".join(parse_result.problems))
                continue
            records = extract_unit(parse_result.result, api_filter)
            index.put_all(records)
            logger.debug("Indexed %d class(es) from %s", len(records), java_file)
        except (IndexerError, OSError) as e:
            logger.error("fail to parse %s for %s", Path(java_file).absolute(), e)
        except Exception:
            logger.exception("fail to parse %s", Path(java_file).absolute())
        finally:
            sink.progress(size, i + 1, PHASE_CLASSES)
