"""
Fold engine tests

Tests hook order, child order and traversal of trees deeper than the
interpreter's recursion limit.
"""

import ast
import sys

from docweave.lib.fold import FoldHooks, tree_fold
from docweave.lib.tree import source_parse


def names_collect(state, node):
    if isinstance(node, ast.Name):
        return state + [node.id]
    return state


class TestHookOrder:
    """Pre-order and post-order hooks"""

    def test_enter_and_leave_events(self):
        """Every node is entered before its children and left after them"""
        events = FoldHooks(
            pre=lambda s, n: s + [('pre', type(n).__name__)],
            post=lambda s, n: s + [('post', type(n).__name__)],
        )
        result = tree_fold(source_parse('x'), [], events)
        assert result == [
            ('pre', 'Module'), ('pre', 'Expr'), ('pre', 'Name'), ('pre', 'Load'),
            ('post', 'Load'), ('post', 'Name'), ('post', 'Expr'), ('post', 'Module'),
        ]

    def test_default_hooks_return_initial_state(self):
        """Identity hooks leave the accumulator alone"""
        assert tree_fold(source_parse('a = b + c'), 42, FoldHooks()) == 42

    def test_state_is_threaded(self):
        """Each hook receives the previous hook's result"""
        count = FoldHooks(pre=lambda s, n: s + 1)
        assert tree_fold(source_parse('x'), 0, count) == 4


class TestChildOrder:
    """Children are visited in textual order"""

    def test_assignment(self):
        """Targets precede the value"""
        names = tree_fold(source_parse('a = b + c'), [], FoldHooks(pre=names_collect))
        assert names == ['a', 'b', 'c']

    def test_statements(self):
        source = "first()\nif flag:\n    second()\nthird()"
        names = tree_fold(source_parse(source), [], FoldHooks(pre=names_collect))
        assert names == ['first', 'flag', 'second', 'third']

    def test_decorators_before_body(self):
        """Unrecognized decorators are visited where they are written"""
        source = "@trace\ndef f(x=default):\n    return body"
        names = tree_fold(source_parse(source), [], FoldHooks(pre=names_collect))
        assert names == ['trace', 'default', 'body']

    def test_label_syntax_is_not_visited(self):
        """Label callees and label decorators never reach the hooks"""
        source = "Application(Code(main()))\n@Code\ndef g():\n    helper()"
        names = tree_fold(source_parse(source), [], FoldHooks(pre=names_collect))
        assert names == ['main', 'helper']


class TestDeepTrees:
    """Traversal does not recurse"""

    def test_deeper_than_recursion_limit(self):
        """A tree deeper than the recursion limit folds without error"""
        depth = sys.getrecursionlimit() + 500
        node: ast.AST = ast.Name(id='x', ctx=ast.Load(), lineno=1, col_offset=0)
        for _ in range(depth):
            node = ast.UnaryOp(op=ast.USub(), operand=node, lineno=1, col_offset=0)

        counted = FoldHooks(pre=lambda s, n: s + 1 if isinstance(n, ast.UnaryOp) else s)
        assert tree_fold(node, 0, counted) == depth
        assert tree_fold(node, [], FoldHooks(pre=names_collect)) == ['x']
