"""
Markdown rendering of the document model

Elements are rendered in order and joined line by line. Markdown has no
video syntax, so videos are embedded as HTML.
"""

from typing import Callable, Dict, Optional

from ..config import appsettings
from ..models.document import (
    CodeElement,
    Document,
    Element,
    ImageElement,
    MarkdownElement,
    VideoElement,
)
from .exclusion import lines_filter


def markdown_render(element: MarkdownElement, language: str) -> str:
    return element.text


def code_render(element: CodeElement, language: str) -> str:
    return f"```{language}\n{element.text}\n```"


def image_render(element: ImageElement, language: str) -> str:
    return f"![]({element.src})"


def video_render(element: VideoElement, language: str) -> str:
    return f'<video controls src="{element.src}"></video>'


ELEMENT_RENDERERS: Dict[type, Callable[..., str]] = {
    MarkdownElement: markdown_render,
    CodeElement: code_render,
    ImageElement: image_render,
    VideoElement: video_render,
}


def element_render(element: Element, language: Optional[str] = None) -> str:
    """
    Render one element to markdown

    Args:
        element: Document element
        language: Tag for fenced code blocks (defaults to appsettings.code_language)

    Raises:
        TypeError: For objects that are not document elements
    """
    renderer = ELEMENT_RENDERERS.get(type(element))
    if renderer is None:
        raise TypeError(f"Not a document element: {element!r}")
    return renderer(element, language or appsettings.code_language)


def document_render(document: Document, marker: str, language: Optional[str] = None) -> str:
    """
    Render a document to a single markdown text

    Lines carrying the sentinel marker are removed after rendering, since
    code excerpts can contain excluded subtrees.

    Example:
        >>> doc = Document((MarkdownElement("# Circles"), CodeElement("circle(0, 0, 5)")))
        >>> print(document_render(doc, "DOCWEAVE_EXCLUDE"))
        # Circles
        ```python
        circle(0, 0, 5)
        ```
    """
    rendered = '\n'.join(element_render(element, language) for element in document.elements)
    return lines_filter(rendered, marker)
