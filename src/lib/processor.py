"""
Processor for annotated sources

Turns the text of one annotated source file into its documentation, its
example programs and the list of media it references.
"""

import ast
from typing import Callable, List, Optional

from ..models.results import ProcessResult
from ..models.state import FoldState
from .dispatcher import AnnotationDispatcher, DispatchContext, LabelRegistry
from .exclusion import excludedLines_get, exclusions_apply, marker_reserve, treeStrings_get
from .fold import tree_fold
from .log import LOG
from .renderer import document_render
from .templating import application_build
from .tree import SourceText, source_parse


class SourceProcessor:
    """
    Processes one annotated source file

    Responsibilities:
    - Parse the source and reserve a sentinel marker
    - Replace excluded subtrees
    - Fold the tree through the annotation dispatcher
    - Render the document and assemble the example programs

    A processor keeps no state between calls to process(); the same
    inputs always give the same result.
    """

    def __init__(
        self,
        source: str,
        package_header: str,
        link_builder: Optional[Callable[[int], str]] = None,
        registry: Optional[LabelRegistry] = None,
    ) -> None:
        """
        Initialize processor

        Args:
            source: Text of the annotated source file
            package_header: Header placed on top of every example program
            link_builder: Maps an application's one-based index to the URL
                          of its published example; enables example links
            registry: Label registry (defaults to the built-in labels)
        """
        self.source = source
        self.package_header = package_header
        self.link_builder = link_builder
        self.registry = registry

    def tree_parse(self) -> ast.Module:
        """Parse the source; a SyntaxError aborts the file"""
        tree = source_parse(self.source)
        LOG(f"Parsed {len(tree.body)} top-level statements", level=3)
        return tree

    def tree_fold(self, tree: ast.AST, marker: str, source: SourceText) -> FoldState:
        """Fold the exclusion-resolved tree into its final state"""
        context = DispatchContext(marker=marker, source=source, link_builder=self.link_builder)
        dispatcher = AnnotationDispatcher(context, self.registry)
        return tree_fold(tree, FoldState(), dispatcher.hooks())

    def applications_build(self, state: FoldState, marker: str) -> List[str]:
        return [
            application_build(capture, state.imports, self.package_header, marker)
            for capture in state.applications
        ]

    def process(self) -> ProcessResult:
        """
        Process the source

        Returns:
            ProcessResult with documentation, example programs and media

        Raises:
            SyntaxError: If the source does not parse
            NonLiteralExpressionError: Text/Media label on a non-literal
            InvalidCodeBlockTargetError: Code.Block label on a non-run block
        """
        tree = self.tree_parse()
        marker = marker_reserve([self.source, self.package_header, *treeStrings_get(tree)])
        source = SourceText(self.source, excludedLines_get(tree))
        state = self.tree_fold(exclusions_apply(tree, marker), marker, source)

        result = ProcessResult(
            documentation=document_render(state.document, marker),
            applications=self.applications_build(state, marker),
            media=list(state.document.mediaSources_get()),
        )
        LOG(
            f"{len(state.document.elements)} document elements, "
            f"{len(result.applications)} applications, {len(result.media)} media",
            level=2,
        )
        return result


def process(
    source: str,
    package_header: str,
    link_builder: Optional[Callable[[int], str]] = None,
) -> ProcessResult:
    """
    Process one annotated source file

    Example:
        >>> result = process('Text("hello")', "# header")
        >>> result.documentation
        'hello'
        >>> result.applications, result.media
        ([], [])
    """
    return SourceProcessor(source, package_header, link_builder).process()
