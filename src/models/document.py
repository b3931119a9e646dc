"""
Document model

The ordered sequence of elements produced from one annotated source file.
Elements appear in source occurrence order. All types are immutable; adding
an element returns a new Document.
"""

from dataclasses import dataclass
from typing import Tuple, Union


@dataclass(frozen=True)
class MarkdownElement:
    """Raw markdown text, emitted verbatim"""
    text: str


@dataclass(frozen=True)
class CodeElement:
    """Printed source excerpt, emitted as a fenced code block"""
    text: str


@dataclass(frozen=True)
class MediaElement:
    """Reference to a media asset, relative to the media directory"""
    src: str


@dataclass(frozen=True)
class ImageElement(MediaElement):
    pass


@dataclass(frozen=True)
class VideoElement(MediaElement):
    pass


Element = Union[MarkdownElement, CodeElement, ImageElement, VideoElement]


@dataclass(frozen=True)
class Document:
    """
    Ordered element sequence

    Attributes:
        elements: Elements in source occurrence order

    Example:
        >>> doc = Document().element_append(MarkdownElement("# Intro"))
        >>> doc.elements
        (MarkdownElement(text='# Intro'),)
    """
    elements: Tuple[Element, ...] = ()

    def element_append(self, element: Element) -> "Document":
        """Return a new Document with element appended"""
        return Document(elements=self.elements + (element,))

    def mediaSources_get(self) -> Tuple[str, ...]:
        """Sources of every media element, in document order"""
        return tuple(
            element.src for element in self.elements
            if isinstance(element, MediaElement)
        )
