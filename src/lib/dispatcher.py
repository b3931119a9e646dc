"""
Annotation label handlers for docweave

Each label turns a visited node into a new FoldState. Handlers are
registered as LabelSpec entries in a LabelRegistry; the AnnotationDispatcher
looks them up and exposes them to the fold engine as pre/post hooks.
"""

import ast
import textwrap
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..config import appsettings
from ..models.annotations import LabelSpec, LabelCategory
from ..models.document import (
    CodeElement,
    ImageElement,
    MarkdownElement,
    MediaElement,
    VideoElement,
)
from ..models.results import ApplicationCapture
from ..models.state import FoldState
from .errors import InvalidCodeBlockTargetError, NonLiteralExpressionError
from .exclusion import documentation_blank
from .fold import FoldHooks
from .log import LOG, LOG_warn
from .tree import (
    SourceText,
    callableWithoutArguments_is,
    expression_get,
    importTargets_get,
    label_normalize,
    labels_get,
    literalText_get,
    node_lineno,
    node_print,
    runBlock_get,
)


LabelHandler = Callable[[FoldState, ast.AST, "DispatchContext"], FoldState]


@dataclass(frozen=True)
class DispatchContext:
    """
    Per-file inputs the handlers need besides the state

    Attributes:
        marker: Sentinel marker reserved for this file
        source: Text of the file, excerpts are cut from it
        link_builder: Maps the number of captured applications to the URL
                      of the current one; no links are emitted without it
    """
    marker: str
    source: SourceText
    link_builder: Optional[Callable[[int], str]] = None


def link_append(state: FoldState, context: DispatchContext) -> FoldState:
    """Append a link to the open application after a code excerpt"""
    if context.link_builder is None or state.current_application is None:
        return state
    link = context.link_builder(len(state.applications))
    return state.element_append(
        MarkdownElement(f"[{appsettings.link_text}]({link})")
    )


def literal_require(label: str, node: ast.AST) -> str:
    """Text of the node's wrapped string literal"""
    text = literalText_get(expression_get(node))
    if text is None:
        raise NonLiteralExpressionError(label, node_lineno(node))
    return text


class LabelRegistry:
    """
    Registry of label specifications and handlers

    Maps normalized label names to LabelSpec objects.
    """

    def __init__(self) -> None:
        """Initialize the registry and register all built-in labels"""
        self.specs: Dict[str, LabelSpec] = {}
        self.applicationLabels_register()
        self.documentLabels_register()
        self.mediaLabels_register()
        self.exclusionLabels_register()

    def register(self, spec: LabelSpec) -> None:
        """Register a label specification"""
        self.specs[spec.name] = spec

    def get(self, name: str) -> Optional[LabelHandler]:
        """Get label handler by name, None for unrecognized labels"""
        spec = self.spec_get(name)
        return spec.handler if spec else None

    def spec_get(self, name: str) -> Optional[LabelSpec]:
        """Get full label specification by (possibly namespaced) name"""
        return self.specs.get(label_normalize(name))

    def labels_listByCategory(self, category: LabelCategory) -> List[LabelSpec]:
        """Get all labels in a category"""
        return [spec for spec in self.specs.values() if spec.category == category]

    def applicationLabels_register(self) -> None:
        """Register the Application label"""

        def application_handler(state: FoldState, node: ast.AST, context: DispatchContext) -> FoldState:
            """Handle Application - capture the region as a program body"""
            body = node_print(documentation_blank(node, context.marker))
            entrypoint = None
            if isinstance(node, ast.FunctionDef) and callableWithoutArguments_is(node):
                entrypoint = node.name
            state = state.application_append(ApplicationCapture(body=body, entrypoint=entrypoint))
            LOG(f"Captured application {len(state.applications)} at line {node_lineno(node)}", level=2)

            if state.current_application is None:
                return state.application_open(node)
            LOG_warn(
                f"Application at line {node_lineno(node)} is nested in the application at "
                f"line {node_lineno(state.current_application)}; it is captured on its own "
                f"and the enclosing region stays open"
            )
            return state

        self.register(LabelSpec(
            name='Application',
            category=LabelCategory.APPLICATION,
            description='Region extracted as a standalone example program',
            handler=application_handler,
            stacks=True,
            examples=['@Application\ndef main(): ...', 'Application(Code(main()))'],
        ))

    def documentLabels_register(self) -> None:
        """Register labels that contribute text and code to the document"""

        def text_handler(state: FoldState, node: ast.AST, context: DispatchContext) -> FoldState:
            """Handle Text - markdown taken from a string literal"""
            text = textwrap.dedent(literal_require('Text', node))
            return state.element_append(MarkdownElement(text))

        def code_handler(state: FoldState, node: ast.AST, context: DispatchContext) -> FoldState:
            """Handle Code - the node as written, without its labels"""
            state = state.element_append(CodeElement(context.source.excerpt_print(node)))
            return link_append(state, context)

        def codeBlock_handler(state: FoldState, node: ast.AST, context: DispatchContext) -> FoldState:
            """Handle Code.Block - the statements of a run block as one excerpt"""
            block = runBlock_get(node)
            if block is None:
                raise InvalidCodeBlockTargetError('Code.Block', node_lineno(node))
            state = state.element_append(CodeElement(context.source.block_print(block)))
            return link_append(state, context)

        self.register(LabelSpec(
            name='Text',
            category=LabelCategory.DOCUMENT,
            description='Markdown prose',
            handler=text_handler,
            examples=['Text("""# Drawing circles""")'],
        ))

        self.register(LabelSpec(
            name='Code',
            category=LabelCategory.DOCUMENT,
            description='Source excerpt shown as a code block',
            handler=code_handler,
            examples=['@Code\ndef setup(): ...', 'Code(print("hello"))'],
        ))

        self.register(LabelSpec(
            name='Code.Block',
            category=LabelCategory.DOCUMENT,
            description='Statements of a run block shown as one code block',
            handler=codeBlock_handler,
            examples=['@Code.Block\ndef run(): ...', 'Code.Block(run(lambda: draw()))'],
        ))

    def mediaLabels_register(self) -> None:
        """Register media reference labels"""

        def make_media_handler(label: str, element_type: type) -> LabelHandler:
            """Factory for handlers that reference a media asset"""
            def handler(state: FoldState, node: ast.AST, context: DispatchContext) -> FoldState:
                """Append a media element with the trimmed literal as source"""
                src = literal_require(label, node).strip()
                element: MediaElement = element_type(src=src)
                return state.element_append(element)
            return handler

        media_specs = [
            ('Media.Image', ImageElement, 'Inline image', ['Media.Image("media/circle.png")']),
            ('Media.Video', VideoElement, 'Embedded video', ['Media.Video("media/circle.mp4")']),
        ]

        for name, element_type, desc, examples in media_specs:
            self.register(LabelSpec(
                name=name,
                category=LabelCategory.MEDIA,
                description=desc,
                handler=make_media_handler(name, element_type),
                examples=examples,
            ))

    def exclusionLabels_register(self) -> None:
        """Register the Exclude label"""

        def exclude_handler(state: FoldState, node: ast.AST, context: DispatchContext) -> FoldState:
            """Handle Exclude - replaced by a sentinel before the fold, nothing left to do"""
            return state

        self.register(LabelSpec(
            name='Exclude',
            category=LabelCategory.EXCLUSION,
            description='Subtree removed from every output',
            handler=exclude_handler,
            examples=['Exclude(configure_logging())', '@Exclude\ndef helper(): ...'],
        ))


class AnnotationDispatcher:
    """
    Interprets the labels of visited nodes

    Provides the pre-order hook (node_enter) and post-order hook
    (node_exit) of the fold.
    """

    def __init__(self, context: DispatchContext, registry: Optional[LabelRegistry] = None) -> None:
        """
        Args:
            context: Per-file dispatch inputs
            registry: Label registry (defaults to the built-in labels)
        """
        self.context = context
        self.registry = registry if registry is not None else LabelRegistry()

    def hooks(self) -> FoldHooks:
        return FoldHooks(pre=self.node_enter, post=self.node_exit)

    def import_collect(self, state: FoldState, node: ast.AST) -> FoldState:
        """Record an import unless it refers to the annotation namespace"""
        namespace = appsettings.annotations_module
        for target in importTargets_get(node):
            if target == namespace or target.startswith(namespace + '.'):
                return state
        return state.import_append(node_print(node))

    def node_enter(self, state: FoldState, node: ast.AST) -> FoldState:
        """
        Dispatch the node's labels in order

        A stacking label (Application) passes the updated state on to the
        next label; any other recognized label ends dispatch. Unrecognized
        labels are skipped.
        """
        if isinstance(node, (ast.Import, ast.ImportFrom)):
            return self.import_collect(state, node)

        labels = labels_get(node)
        for position, label in enumerate(labels):
            spec = self.registry.spec_get(label)
            if spec is None:
                continue
            LOG(f"{label} at line {node_lineno(node)}", level=3)
            state = spec.handler(state, node, self.context)
            if not spec.stacks:
                self.labels_warnUndispatched(label, labels[position + 1:], node)
                break
        return state

    def labels_warnUndispatched(self, last: str, rest: List[str], node: ast.AST) -> None:
        """Warn about recognized labels that follow a non-stacking label"""
        ignored = [label for label in rest if self.registry.spec_get(label) is not None]
        if ignored:
            LOG_warn(
                f"{', '.join(ignored)} at line {node_lineno(node)} ignored: "
                f"{last} ends label dispatch, put stacking labels first"
            )

    def node_exit(self, state: FoldState, node: ast.AST) -> FoldState:
        """Close the open application when leaving its node"""
        if state.current_application is node:
            return state.application_close()
        return state
