"""
docweave - Literate documentation and example extraction

Annotated Python sources become markdown documentation and standalone
example programs in a single pass over their syntax tree.
"""

__version__ = "1.0.0"

from .lib import SourceProcessor, process, LabelRegistry, LOG, state_connectToLogger
from .lib.errors import DocweaveError, NonLiteralExpressionError, InvalidCodeBlockTargetError
from .models import ProcessResult

__all__ = [
    "SourceProcessor",
    "process",
    "LabelRegistry",
    "LOG",
    "state_connectToLogger",
    "DocweaveError",
    "NonLiteralExpressionError",
    "InvalidCodeBlockTargetError",
    "ProcessResult",
    "__version__",
]
