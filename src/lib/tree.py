"""
Tree and printer capabilities

Annotated sources are Python modules. This module is the only place that
knows how the standard library ast represents them: it parses and prints
trees, and gives every node a uniform view of the annotation labels attached
to it.

Labels attach in two forms:

    Wrapper form - a call of a label around exactly one expression:

        Text("Circles are round")
        Media.Image("media/circle.png")
        Application(Code(main()))        # stacked: ["Application", "Code"]

    Modifier-list form - decorators of def, async def and class statements:

        @Application
        @Code
        def main():
            ...

Label names are dotted names with the annotation namespace
(appsettings.annotations_module) normalized away, so that
docweave.annotations.Code, annotations.Code and Code all read as "Code".

Example:
    >>> tree = source_parse('Text("hello")')
    >>> call = tree.body[0].value
    >>> labels_get(call)
    ['Text']
    >>> node_print(expression_get(call))
    "'hello'"
"""

import ast
import copy
import textwrap
from typing import AbstractSet, Iterable, List, Optional, Tuple

from ..config import appsettings
from ..models.annotations import recognized_is


DECLARATION_TYPES = (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)


def source_parse(text: str) -> ast.Module:
    """
    Parse source text into a tree

    Raises:
        SyntaxError: If the text is not valid Python (propagated unmodified)
    """
    return ast.parse(text)


def node_print(node: ast.AST) -> str:
    """Print a (sub)tree back to source text"""
    return ast.unparse(node)


def node_lineno(node: ast.AST) -> Optional[int]:
    return getattr(node, 'lineno', None)


def lines_span(node: ast.AST) -> Tuple[int, int]:
    """First and last source line of a node, decorators included"""
    first = node.lineno
    for decorator in getattr(node, 'decorator_list', []):
        first = min(first, decorator.lineno)
    return first, node.end_lineno


def callableWithoutArguments_is(node: ast.AST) -> bool:
    """Check if a function declaration can be called as name()"""
    if not isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)):
        return False
    arguments = node.args
    positional = len(arguments.posonlyargs) + len(arguments.args)
    if positional > len(arguments.defaults):
        return False
    return all(default is not None for default in arguments.kw_defaults)


def dottedName_get(node: ast.AST) -> Optional[str]:
    """
    Dotted name of a Name/Attribute chain

    Returns:
        "Media.Image" for Media.Image, None for anything that is not a
        plain chain of attribute accesses on a name (calls, subscripts, ...)
    """
    parts: List[str] = []
    while isinstance(node, ast.Attribute):
        parts.append(node.attr)
        node = node.value
    if not isinstance(node, ast.Name):
        return None
    parts.append(node.id)
    return '.'.join(reversed(parts))


def label_normalize(name: str, namespace: Optional[str] = None) -> str:
    """
    Strip the annotation namespace from a dotted label name

    Every trailing part of the namespace is accepted as a prefix, so with
    the namespace "docweave.annotations" both "docweave.annotations.Text"
    and "annotations.Text" normalize to "Text".
    """
    namespace = namespace or appsettings.annotations_module
    parts = namespace.split('.')
    for start in range(len(parts)):
        prefix = '.'.join(parts[start:]) + '.'
        if name.startswith(prefix):
            return name[len(prefix):]
    return name


def labelCall_get(node: ast.AST) -> Optional[str]:
    """Recognized label applied by a wrapper-form call, or None"""
    if not isinstance(node, ast.Call):
        return None
    if node.keywords or len(node.args) != 1 or isinstance(node.args[0], ast.Starred):
        return None
    name = dottedName_get(node.func)
    if name is None:
        return None
    label = label_normalize(name)
    if not recognized_is(label):
        return None
    return label


def labelDecorator_is(decorator: ast.AST) -> bool:
    """Check if a decorator is a recognized label"""
    name = dottedName_get(decorator)
    return name is not None and recognized_is(label_normalize(name))


def wrapper_is(node: ast.AST) -> bool:
    return labelCall_get(node) is not None


def declaration_is(node: ast.AST) -> bool:
    return isinstance(node, DECLARATION_TYPES)


def labels_get(node: ast.AST) -> List[str]:
    """
    Labels attached to a node, outermost first

    Wrapper chains yield only recognized labels. Declarations yield every
    dotted-name decorator, recognized or not; the dispatcher ignores the
    ones it does not know.
    """
    labels: List[str] = []
    if wrapper_is(node):
        label = labelCall_get(node)
        while label is not None:
            labels.append(label)
            node = node.args[0]
            label = labelCall_get(node)
    elif declaration_is(node):
        for decorator in node.decorator_list:
            name = dottedName_get(decorator)
            if name is not None:
                labels.append(label_normalize(name))
    return labels


def expression_get(node: ast.AST) -> ast.AST:
    """The expression a wrapper chain is wrapped around (node itself otherwise)"""
    while wrapper_is(node):
        node = node.args[0]
    return node


def labels_strip(node: ast.AST) -> ast.AST:
    """
    The node without its own recognized labels

    Never modifies node: wrappers give back the wrapped expression and
    declarations give back a shallow copy with a filtered decorator list.
    Labels of descendants are left in place.
    """
    if wrapper_is(node):
        return expression_get(node)
    if declaration_is(node):
        stripped = copy.copy(node)
        stripped.decorator_list = [
            decorator for decorator in node.decorator_list
            if not labelDecorator_is(decorator)
        ]
        return stripped
    return node


def position_get(node: ast.AST) -> Tuple[int, int]:
    """Source position of a node, taken from its first positioned descendant"""
    for candidate in ast.walk(node):
        lineno = getattr(candidate, 'lineno', None)
        if lineno is not None:
            return (lineno, getattr(candidate, 'col_offset', 0) or 0)
    return (0, 0)


def children_get(node: ast.AST) -> List[ast.AST]:
    """
    Children of a node in textual order

    Label callees and label decorators are annotation syntax, not children:
    a wrapper has the wrapped expression as its only child.
    """
    if wrapper_is(node):
        return [expression_get(node)]
    view = labels_strip(node)
    return sorted(ast.iter_child_nodes(view), key=position_get)


def interpolation_print(node: ast.FormattedValue) -> str:
    """Verbatim text of an f-string replacement field, e.g. "{width!r:>8}" """
    text = node_print(node.value)
    if node.conversion != -1:
        text += '!' + chr(node.conversion)
    if node.format_spec is not None:
        text += ':' + (literalText_get(node.format_spec) or '')
    return '{' + text + '}'


def literalText_get(node: ast.AST) -> Optional[str]:
    """
    Text of a string-literal-compatible expression

    Accepts str constants, f-strings (replacement fields are kept as
    written, never evaluated) and '+' concatenations of those.

    Returns:
        The text, or None when the expression is anything else
    """
    if isinstance(node, ast.Constant) and isinstance(node.value, str):
        return node.value
    if isinstance(node, ast.JoinedStr):
        parts: List[str] = []
        for value in node.values:
            if isinstance(value, ast.Constant) and isinstance(value.value, str):
                parts.append(value.value)
            elif isinstance(value, ast.FormattedValue):
                parts.append(interpolation_print(value))
            else:
                return None
        return ''.join(parts)
    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.Add):
        left = literalText_get(node.left)
        right = literalText_get(node.right)
        if left is None or right is None:
            return None
        return left + right
    return None


def runBlock_get(node: ast.AST) -> Optional[List[ast.AST]]:
    """
    Statements of a run block

    A run block is either a function declaration named run, whose body is
    the block, or a call of run whose trailing argument is a lambda, whose
    body is the (single expression) block.

    Returns:
        The block's top-level nodes, or None when node is not a run block
    """
    target = labels_strip(node)
    if isinstance(target, (ast.FunctionDef, ast.AsyncFunctionDef)):
        if target.name == 'run':
            return list(target.body)
        return None
    if isinstance(target, ast.Call) and isinstance(target.func, ast.Name):
        if target.func.id == 'run' and target.args and isinstance(target.args[-1], ast.Lambda):
            return [target.args[-1].body]
    return None


def importTargets_get(node: ast.AST) -> List[str]:
    """Dotted module paths an import statement refers to"""
    if isinstance(node, ast.Import):
        return [alias.name for alias in node.names]
    if isinstance(node, ast.ImportFrom):
        module = node.module or ''
        targets = [module]
        for alias in node.names:
            targets.append(f"{module}.{alias.name}" if module else alias.name)
        return targets
    return []


def lines_split(text: str) -> List[str]:
    return text.replace('\r\n', '\n').replace('\r', '\n').split('\n')


class SourceText:
    """
    Original text of a parsed source

    Excerpts are cut from the text as written, so the author's comments and
    layout survive. Hidden lines (those of excluded subtrees) are left out
    of every excerpt.

    Example:
        >>> text = SourceText("@Code\\ndef f():\\n    # why\\n    return 1")
        >>> print(text.excerpt_print(source_parse(text.text).body[0]))
        def f():
            # why
            return 1
    """

    def __init__(self, text: str, hidden: Iterable[int] = ()) -> None:
        self.text = text
        self.lines = lines_split(text)
        self.hidden = frozenset(hidden)

    def lines_print(self, first: int, last: int, hidden: AbstractSet[int] = frozenset()) -> str:
        """Lines first..last (one-based, inclusive) without hidden ones, dedented"""
        kept = [
            self.lines[lineno - 1] for lineno in range(first, last + 1)
            if lineno not in self.hidden and lineno not in hidden
        ]
        return textwrap.dedent('\n'.join(kept))

    def segment_print(self, node: ast.AST) -> str:
        """
        Text of a single node as written, hidden lines left out

        Continuation lines lose the indentation of the line the node starts on.
        """
        segment = ast.get_source_segment(self.text, node)
        if segment is None:
            return node_print(node)
        start = self.lines[node.lineno - 1]
        indent = start[:len(start) - len(start.lstrip())]
        kept: List[str] = []
        for offset, line in enumerate(lines_split(segment)):
            if node.lineno + offset in self.hidden:
                continue
            if offset and line.startswith(indent):
                line = line[len(indent):]
            kept.append(line)
        return '\n'.join(kept)

    def excerpt_print(self, node: ast.AST) -> str:
        """Text of a labelled node without its own recognized labels"""
        if declaration_is(node):
            first, last = lines_span(node)
            labels = {
                decorator.lineno for decorator in node.decorator_list
                if labelDecorator_is(decorator)
            }
            return self.lines_print(first, last, labels)
        return self.segment_print(labels_strip(node))

    def block_print(self, block: List[ast.AST]) -> str:
        """
        Text of a run block

        Comment lines directly above the first statement belong to the block.
        """
        head = block[0]
        if not isinstance(head, ast.stmt):
            return self.segment_print(head)
        prefix = self.lines[head.lineno - 1].encode()[:head.col_offset].decode(errors='replace')
        if prefix.strip():
            # def run(): body on the header line
            return '\n'.join(self.segment_print(statement) for statement in block)

        first = head.lineno
        while first > 1 and self.lines[first - 2].lstrip().startswith('#'):
            first -= 1
        return self.lines_print(first, block[-1].end_lineno)
