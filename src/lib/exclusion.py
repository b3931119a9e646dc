"""
Exclusion by sentinel and line filter

Removing a subtree from the tree can leave a parent without a required
child (a function with an empty body, an assignment without a value), so
nothing is ever removed structurally. Instead the subtree is replaced by a
sentinel of the same grammatical category carrying a marker string:

    expression  ->  'DOCWEAVE_EXCLUDE'
    statement   ->  'DOCWEAVE_EXCLUDE'   (as an expression statement)

and, once the tree has been printed, every line containing the marker is
deleted.

The same mechanism blanks documentation-only content (Text and Media
labels) out of application bodies.
"""

import ast
import copy
from typing import Iterable, List, Set

from ..config import appsettings
from ..models.annotations import DOCUMENTATION_ONLY_LABELS
from .tree import (
    declaration_is,
    labelCall_get,
    labels_get,
    labels_strip,
    lines_span,
    node_print,
    wrapper_is,
)


def marker_reserve(texts: Iterable[str]) -> str:
    """
    Pick a sentinel marker that occurs in none of the given texts

    Tries the configured marker first, then numbered variants of it.

    Args:
        texts: Everything the printed output can be made of (source text,
               string constants of the tree, package header)

    Returns:
        Marker string

    Example:
        >>> marker_reserve(["x = 'DOCWEAVE_EXCLUDE'"])
        'DOCWEAVE_EXCLUDE_1'
    """
    corpus: List[str] = list(texts)
    attempt = 0
    marker = appsettings.markerCandidate_make(attempt)
    while any(marker in text for text in corpus):
        attempt += 1
        marker = appsettings.markerCandidate_make(attempt)
    return marker


def treeStrings_get(tree: ast.AST) -> List[str]:
    """All str constants of a tree"""
    return [
        node.value for node in ast.walk(tree)
        if isinstance(node, ast.Constant) and isinstance(node.value, str)
    ]


def sentinel_make(node: ast.AST, marker: str) -> ast.AST:
    """Sentinel leaf of the same grammatical category as node"""
    constant = ast.copy_location(ast.Constant(value=marker), node)
    if isinstance(node, ast.stmt):
        return ast.copy_location(ast.Expr(value=constant), node)
    return constant


def lines_filter(text: str, marker: str) -> str:
    """Delete every line that contains the marker"""
    return '\n'.join(line for line in text.split('\n') if marker not in line)


def exclude_is(node: ast.AST) -> bool:
    return (wrapper_is(node) or declaration_is(node)) and 'Exclude' in labels_get(node)


def excludedLines_get(tree: ast.AST) -> Set[int]:
    """Source lines covered by Exclude-labelled subtrees, decorators included"""
    lines: Set[int] = set()
    for node in ast.walk(tree):
        if exclude_is(node):
            first, last = lines_span(node)
            lines.update(range(first, last + 1))
    return lines


def statementDropped_is(statement: ast.stmt, marker: str) -> bool:
    """Check if a simple statement disappears when marker lines are filtered"""
    return not hasattr(statement, 'body') and marker in node_print(statement)


def blocks_fill(tree: ast.AST, marker: str) -> ast.AST:
    """
    Append pass to every block whose statements are all filtered away

    Modifies tree in place and returns it.
    """
    for node in ast.walk(tree):
        for field in ('body', 'orelse', 'finalbody'):
            block = getattr(node, field, None)
            if not isinstance(block, list) or not block:
                continue
            if all(statementDropped_is(statement, marker) for statement in block):
                block.append(ast.Pass())
    return tree


class ExcludeTransformer(ast.NodeTransformer):
    """Replaces Exclude-labelled nodes by sentinels"""

    def __init__(self, marker: str) -> None:
        self.marker = marker

    def visit_Call(self, node: ast.Call) -> ast.AST:
        if exclude_is(node):
            return sentinel_make(node, self.marker)
        return self.generic_visit(node)

    def visit_declaration(self, node: ast.AST) -> ast.AST:
        if exclude_is(node):
            return sentinel_make(node, self.marker)
        return self.generic_visit(node)

    visit_FunctionDef = visit_declaration
    visit_AsyncFunctionDef = visit_declaration
    visit_ClassDef = visit_declaration


class ApplicationTransformer(ast.NodeTransformer):
    """
    Turns an Application region into its program form

    Text and Media labelled nodes become sentinels; every other recognized
    label is stripped.
    """

    def __init__(self, marker: str) -> None:
        self.marker = marker

    def documentationOnly_is(self, node: ast.AST) -> bool:
        return any(label in DOCUMENTATION_ONLY_LABELS for label in labels_get(node))

    def visit_Call(self, node: ast.Call) -> ast.AST:
        if labelCall_get(node) is None:
            return self.generic_visit(node)
        if self.documentationOnly_is(node):
            return sentinel_make(node, self.marker)
        return self.visit(labels_strip(node))

    def visit_declaration(self, node: ast.AST) -> ast.AST:
        if self.documentationOnly_is(node):
            return sentinel_make(node, self.marker)
        return self.generic_visit(labels_strip(node))

    visit_FunctionDef = visit_declaration
    visit_AsyncFunctionDef = visit_declaration
    visit_ClassDef = visit_declaration


def exclusions_apply(tree: ast.AST, marker: str) -> ast.AST:
    """
    Copy of tree with every Exclude-labelled subtree replaced by a sentinel

    The input tree is left untouched.
    """
    return ExcludeTransformer(marker).visit(copy.deepcopy(tree))


def documentation_blank(node: ast.AST, marker: str) -> ast.AST:
    """
    Program form of an Application region

    Returns a label-free copy of node in which documentation-only content
    is replaced by sentinels. Blocks left empty by the marker filter get a
    pass statement. The input node is left untouched.
    """
    region = copy.deepcopy(node)
    transformer = ApplicationTransformer(marker)
    if declaration_is(region):
        # The region's own Text/Media labels do not blank the region itself
        program = transformer.generic_visit(labels_strip(region))
    elif wrapper_is(region):
        program = transformer.visit(labels_strip(region))
    else:
        program = transformer.visit(region)
    return blocks_fill(program, marker)
