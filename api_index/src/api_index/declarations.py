# --- Declaration kinds -------------------------------------------------------
from enum import Enum

from tree_sitter import Node


class DeclarationKind(Enum):
    PACKAGE = "package"
    IMPORT = "import"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"
    RECORD = "record"
    METHOD = "method"
    FIELD = "field"
    OTHER = "other"


_KIND_BY_NODE_TYPE = {
    "package_declaration": DeclarationKind.PACKAGE,
    "import_declaration": DeclarationKind.IMPORT,
    "class_declaration": DeclarationKind.CLASS,
    "interface_declaration": DeclarationKind.INTERFACE,
    "enum_declaration": DeclarationKind.ENUM,
    "record_declaration": DeclarationKind.RECORD,
    "method_declaration": DeclarationKind.METHOD,
    "field_declaration": DeclarationKind.FIELD,
    "constant_declaration": DeclarationKind.FIELD,
}

TYPE_KINDS = (
    DeclarationKind.CLASS, DeclarationKind.INTERFACE, DeclarationKind.ENUM, DeclarationKind.RECORD,
)


def declaration_kind(node: Node) -> DeclarationKind:
    """Tags a Tree-sitter node with the declaration kind the walkers care about."""
    return _KIND_BY_NODE_TYPE.get(node.type, DeclarationKind.OTHER)
