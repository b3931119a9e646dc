"""
Models package for docweave

Contains data structures and type definitions for source processing.
"""

from .state import FoldState, ProgramState, pipeline
from .annotations import LabelSpec, LabelCategory, RECOGNIZED_LABELS, DOCUMENTATION_ONLY_LABELS
from .document import (
    Document,
    Element,
    MarkdownElement,
    CodeElement,
    MediaElement,
    ImageElement,
    VideoElement,
)
from .results import ApplicationCapture, ProcessResult, SourceOutcome

__all__ = [
    "FoldState",
    "ProgramState",
    "pipeline",
    "LabelSpec",
    "LabelCategory",
    "RECOGNIZED_LABELS",
    "DOCUMENTATION_ONLY_LABELS",
    "Document",
    "Element",
    "MarkdownElement",
    "CodeElement",
    "MediaElement",
    "ImageElement",
    "VideoElement",
    "ApplicationCapture",
    "ProcessResult",
    "SourceOutcome",
]
