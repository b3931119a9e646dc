"""
State models and pipeline helper

Defines FoldState, the immutable accumulator threaded through the tree fold,
ProgramState, the state bus of the command-line pipeline, and the pipeline()
helper for composing transformation stages.
"""

import ast
from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, List, Callable, Tuple
from dataclasses import dataclass, field, replace

from .document import Document, Element
from .results import ApplicationCapture, SourceOutcome


PS = TypeVar("PS", bound="ProgramState")


@dataclass(frozen=True)
class FoldState:
    """
    Accumulator of one tree fold

    Created empty per source file, replaced (never mutated) at every step of
    the traversal and discarded once the outputs are derived.

    Attributes:
        document: Elements collected so far
        applications: Application regions captured so far
        imports: Printed import statements, in source order, repeats kept
        current_application: The Application node whose subtree is being
                             traversed, None outside any region
    """
    document: Document = field(default_factory=Document)
    applications: Tuple[ApplicationCapture, ...] = ()
    imports: Tuple[str, ...] = ()
    current_application: Optional[ast.AST] = None

    def element_append(self, element: Element) -> "FoldState":
        return replace(self, document=self.document.element_append(element))

    def application_append(self, capture: ApplicationCapture) -> "FoldState":
        return replace(self, applications=self.applications + (capture,))

    def import_append(self, text: str) -> "FoldState":
        return replace(self, imports=self.imports + (text,))

    def application_open(self, node: ast.AST) -> "FoldState":
        return replace(self, current_application=node)

    def application_close(self) -> "FoldState":
        return replace(self, current_application=None)


@dataclass
class ProgramState:
    """
    Central state container for the command-line pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, pattern, mediaDir,
          webRootUrl, config, incremental, failFast
        - env_check: projectConfig, mdOutputdir, examplesOutputdir,
          mediaInputdir, mediaOutputdir, envOK
        - sources_discover: sourceFiles
        - sources_process: outcomes
        - media_collect: mediaCopied
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing annotated sources
        outputdir: Base output directory
        verbosity: Logging verbosity level (1-3)
        pattern: Glob selecting sources below inputdir
        mediaDir: Media directory, relative to inputdir
        webRootUrl: Base URL of published examples, enables example links
        config: Project configuration file, relative to inputdir
        incremental: Skip sources whose documentation is up to date
        failFast: Abort on the first failing source
        projectConfig: Loaded project configuration values
        mdOutputdir: Where documentation is written
        examplesOutputdir: Where example programs are written
        mediaInputdir: Where referenced media is read from
        mediaOutputdir: Where referenced media is copied to
        sourceFiles: Sources selected for processing, relative to inputdir
        outcomes: Per-source processing results
        mediaCopied: Paths of copied media assets
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    pattern: Optional[str] = field(default=None)
    mediaDir: Optional[str] = field(default=None)
    webRootUrl: Optional[str] = field(default=None)
    config: Optional[str] = field(default=None)
    incremental: bool = field(default=False)
    failFast: bool = field(default=False)

    # Pipeline state
    envOK: bool = field(default=False)
    projectConfig: Optional[Any] = field(default=None)  # ProjectConfig at runtime
    mdOutputdir: Path = field(default=Path("/"))
    examplesOutputdir: Path = field(default=Path("/"))
    mediaInputdir: Path = field(default=Path("/"))
    mediaOutputdir: Path = field(default=Path("/"))
    sourceFiles: List[Path] = field(default_factory=list)
    outcomes: List[SourceOutcome] = field(default_factory=list)
    mediaCopied: List[Path] = field(default_factory=list)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Args:
            options: Parsed CLI arguments
            inputdir: Directory containing annotated sources
            outputdir: Directory for generated output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        options_dict = vars(options)

        import dataclasses
        valid_fields = {f.name for f in dataclasses.fields(cls)}

        filtered_options = {k: v for k, v in options_dict.items() if k in valid_fields}

        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}

        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)

    def failures_get(self) -> List[SourceOutcome]:
        """Outcomes of sources that failed to process"""
        return [outcome for outcome in self.outcomes if outcome.error]


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            sources_discover,
            sources_process,
            media_collect,
            results_report
        )
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
