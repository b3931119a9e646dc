"""
Processing result models

Type-safe structures returned by the processing entry point and the
collaborators that consume its output.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class ApplicationCapture:
    """
    One Application region captured during the fold

    Attributes:
        body: Printed region with labels and documentation-only content removed
              (sentinel lines are still present; they are filtered when the
              program text is assembled)
        entrypoint: Name of the function to call when the program runs, set
                    when the region is a plain function definition

    Example:
        For source "@Application\\ndef main():\\n    print(1)":
        ApplicationCapture(body="def main():\\n    print(1)", entrypoint="main")
    """
    body: str
    entrypoint: Optional[str] = None


@dataclass
class ProcessResult:
    """
    Outputs derived from one annotated source file

    Attributes:
        documentation: Rendered markdown text
        applications: Complete program texts, in capture order
        media: Sources of every referenced media asset, in document order
    """
    documentation: str
    applications: List[str]
    media: List[str]


@dataclass
class SourceOutcome:
    """
    What the CLI wrote for one source file

    Attributes:
        source: Source path relative to the input directory
        documentation: Path of the written markdown file
        applications: Paths of the written example programs
        media: Media sources referenced by the document
        error: Failure message when processing the file failed
    """
    source: Path
    documentation: Optional[Path] = None
    applications: List[Path] = field(default_factory=list)
    media: List[str] = field(default_factory=list)
    error: Optional[str] = None
