# --- Tree-sitter plumbing ----------------------------------------------------
from typing import Optional

from tree_sitter import Node


def node_text(source_bytes: bytes, node: Optional[Node]) -> str:
    """
    Converts a node's [start_byte:end_byte] into the corresponding string.
    Tree-sitter nodes only store byte offsets, so we slice the original source.
    """
    if node is None:
        return ""
    return source_bytes[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


def node_point(node: Node) -> tuple[int, int]:
    """
    Returns the (line, column) of a node's start in 0-based coordinates.
    """
    return (node.start_point[0], node.start_point[1])


def first_child_of_type(node: Node, *types: str) -> Optional[Node]:
    for child in node.children:
        if child.type in types:
            return child
    return None


def collect_problems(root: Node, limit: int = 10) -> list[str]:
    """
    Lists syntax problems as human readable "line:col ..." strings (1-based).
    Tree-sitter always produces a tree; broken input shows up as ERROR nodes
    or zero-width MISSING nodes.
    """
    problems: list[str] = []
    if not root.has_error:
        return problems

    stack = [root]
    while stack and len(problems) < limit:
        node = stack.pop()
        if node.type == "ERROR":
            line, col = node_point(node)
            problems.append(f"{line + 1}:{col + 1} unexpected input")
            continue
        if node.is_missing:
            line, col = node_point(node)
            problems.append(f"{line + 1}:{col + 1} missing {node.type}")
            continue
        if node.has_error:
            # Children are pushed reversed so problems come out in source order
            stack.extend(reversed(node.children))

    if not problems:
        problems.append("1:1 syntax error")
    return problems
