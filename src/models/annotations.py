"""
Annotation label specification and metadata models

Defines the structure and categories of docweave annotation labels for
dispatch, documentation and registry management.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import Callable, FrozenSet, List


class LabelCategory(Enum):
    """
    Categories of annotation labels

    Used for organization and to decide what a label contributes to.
    """
    APPLICATION = "application"  # Application
    DOCUMENT = "document"        # Text, Code, Code.Block
    MEDIA = "media"              # Media.Image, Media.Video
    EXCLUSION = "exclusion"      # Exclude


@dataclass
class LabelSpec:
    """
    Specification for an annotation label

    Attributes:
        name: Dot-separated label name (e.g., "Media.Image")
        category: Category for organization
        description: Human-readable description
        handler: Dispatch function (state, node, context) -> state
        stacks: Whether dispatch continues with the node's next label
        examples: Example usage strings
    """
    name: str
    category: LabelCategory
    description: str
    handler: Callable
    stacks: bool = False
    examples: List[str] = field(default_factory=list)


# Labels understood by the dispatcher
RECOGNIZED_LABELS: FrozenSet[str] = frozenset({
    'Application',
    'Text',
    'Code',
    'Code.Block',
    'Media.Image',
    'Media.Video',
    'Exclude',
})

# Labels whose subtree is replaced before printing an application body
DOCUMENTATION_ONLY_LABELS: FrozenSet[str] = frozenset({
    'Text',
    'Media.Image',
    'Media.Video',
})


def recognized_is(label: str) -> bool:
    """Check if a label name is part of the annotation vocabulary"""
    return label in RECOGNIZED_LABELS
