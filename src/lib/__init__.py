"""
docweave - Literate documentation and example extraction

Reads annotated Python sources and produces markdown documentation plus
standalone example programs.
"""

__version__ = "1.0.0"

from .processor import SourceProcessor, process
from .dispatcher import AnnotationDispatcher, LabelRegistry
from .log import LOG, state_connectToLogger

__all__ = [
    "SourceProcessor",
    "process",
    "AnnotationDispatcher",
    "LabelRegistry",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
