"""
Exceptions raised while processing annotated sources

Every error is fatal to the file being processed only. Parse failures are
not wrapped: the SyntaxError raised by the parser propagates as-is.
"""

from typing import Optional


class DocweaveError(Exception):
    """Base class for docweave processing errors"""
    pass


class AnnotationError(DocweaveError):
    """An annotation label is attached to a node it cannot be applied to"""

    def __init__(self, label: str, lineno: Optional[int], reason: str) -> None:
        self.label = label
        self.lineno = lineno
        location = f"line {lineno}" if lineno is not None else "unknown line"
        super().__init__(f"{label} annotation at {location}: {reason}")


class NonLiteralExpressionError(AnnotationError):
    """Text or Media label on an expression that is not a string literal"""

    def __init__(self, label: str, lineno: Optional[int]) -> None:
        super().__init__(label, lineno, "expression must be a string literal")


class InvalidCodeBlockTargetError(AnnotationError):
    """Code.Block label on something other than a run block"""

    def __init__(self, label: str, lineno: Optional[int]) -> None:
        super().__init__(
            label,
            lineno,
            "can only be used on 'def run():' blocks or run(lambda: ...) calls",
        )
