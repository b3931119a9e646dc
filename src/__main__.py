#!/usr/bin/env python3
"""
docweave - Literate documentation and example extraction

Reads annotated Python sources and writes, for every source:

    - a markdown document mirroring the source path (md/...)
    - one standalone program per Application region (examples/...)

and copies the media assets the documents reference (media/...).

Like its siblings, this program follows the ChRIS "plugin" pattern: it is
called with an input directory and an output directory.

Usage:
    docweave inputdir/ outputdir/ [--pattern '**/*.py'] [--webRootUrl URL]

Examples:
    # Process every source below docs/
    docweave docs/ build/

    # Link code excerpts to the published examples
    docweave docs/ build/ --webRootUrl https://example.org/examples

    # Only reprocess sources changed since the last run, verbosely
    docweave docs/ build/ --incremental -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .config import appsettings
from .lib import SourceProcessor, __version__, LOG, state_connectToLogger
from .lib.errors import DocweaveError
from .lib.log import LOG_warn
from .lib.project import ProjectConfig, ProjectConfigError, projectConfig_find
from .lib.writers import (
    applications_write,
    documentation_write,
    linkBuilder_make,
    media_copy,
    packageHeader_make,
)
from .models import ProgramState, SourceOutcome, pipeline


DEFAULT_PATTERN = "**/*.py"
DEFAULT_MEDIA_DIR = "media"

# Define CLI arguments
parser = ArgumentParser(
    description="docweave - documentation and examples from annotated sources",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--pattern",
    default=None,
    type=str,
    help=f"Glob selecting sources below inputdir (project config, else {DEFAULT_PATTERN})",
)

parser.add_argument(
    "--mediaDir",
    default=None,
    type=str,
    help=f"Media directory relative to inputdir (project config, else {DEFAULT_MEDIA_DIR})",
)

parser.add_argument(
    "--webRootUrl",
    default=None,
    type=str,
    help="Base URL of the published examples; enables links after code excerpts",
)

parser.add_argument(
    "--config",
    default=None,
    type=str,
    help=f"Project configuration file relative to inputdir (default: {appsettings.config_filename} if present)",
)

parser.add_argument(
    "--incremental",
    action="store_true",
    help="Skip sources whose documentation is newer than the source",
)

parser.add_argument(
    "--failFast",
    action="store_true",
    help="Stop at the first source that fails to process",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment, load project configuration and resolve paths.

    Returns:
        ProgramState with added fields:
            - projectConfig, mdOutputdir, examplesOutputdir,
              mediaInputdir, mediaOutputdir, envOK

    Exits:
        1 if the input directory or the configuration file is unusable
    """
    state = inputstate.copy()

    LOG("Checking environment...", level=2)

    if not state.inputdir.is_dir():
        print(f"Error: Input directory not found: {state.inputdir}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    try:
        if state.config:
            state.projectConfig = ProjectConfig(state.inputdir / state.config)
        else:
            state.projectConfig = projectConfig_find(state.inputdir, appsettings.config_filename)
    except ProjectConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)
    LOG(f"Project configuration: {state.projectConfig}", level=2)

    # Command line wins over project configuration
    state.pattern = state.pattern or state.projectConfig.config_get("sources.pattern", DEFAULT_PATTERN)
    state.mediaDir = state.mediaDir or state.projectConfig.config_get("media.dir", DEFAULT_MEDIA_DIR)
    state.webRootUrl = state.webRootUrl or state.projectConfig.config_get("examples.web_root_url")

    state.mediaInputdir = state.inputdir / state.mediaDir
    state.mdOutputdir = state.outputdir / "md"
    state.examplesOutputdir = state.outputdir / "examples"
    state.mediaOutputdir = state.outputdir / "media"
    for directory in (state.mdOutputdir, state.examplesOutputdir, state.mediaOutputdir):
        directory.mkdir(parents=True, exist_ok=True)
    LOG(f"Output directory: {state.outputdir}", level=2)

    state.envOK = True
    return state


def documentation_upToDate(state: ProgramState, relative_path: Path) -> bool:
    """Check if the documentation of a source is newer than the source"""
    target = state.mdOutputdir / relative_path.with_suffix(appsettings.markdown_suffix)
    if not target.exists():
        return False
    return target.stat().st_mtime >= (state.inputdir / relative_path).stat().st_mtime


def sources_discover(inputstate: ProgramState) -> ProgramState:
    """
    Select the annotated sources to process.

    Returns:
        ProgramState with added field:
            - sourceFiles: paths relative to inputdir, sorted
    """
    state = inputstate.copy()

    candidates = sorted(
        path.relative_to(state.inputdir)
        for path in state.inputdir.glob(state.pattern)
        if path.is_file()
    )
    # Sources below the media directory or the output directory are never documentation
    excluded_roots = [state.mediaInputdir.resolve(), state.outputdir.resolve()]
    candidates = [
        path for path in candidates
        if not any((state.inputdir / path).resolve().is_relative_to(root) for root in excluded_roots)
    ]
    LOG(f"Found {len(candidates)} sources matching {state.pattern}", level=1)

    if state.incremental:
        candidates = [path for path in candidates if not documentation_upToDate(state, path)]
        LOG(f"{len(candidates)} sources out of date", level=1)

    state.sourceFiles = candidates
    return state


def source_process(state: ProgramState, relative_path: Path) -> SourceOutcome:
    """Process one source and write its documentation and examples"""
    outcome = SourceOutcome(source=relative_path)

    template = state.projectConfig.config_get("examples.package_header", "")
    link_builder = None
    if state.webRootUrl:
        link_builder = linkBuilder_make(state.webRootUrl, relative_path)

    try:
        source = (state.inputdir / relative_path).read_text(encoding="utf-8")
        result = SourceProcessor(
            source,
            packageHeader_make(relative_path, template),
            link_builder,
        ).process()
    except (OSError, SyntaxError, DocweaveError) as e:
        outcome.error = f"{type(e).__name__}: {e}"
        return outcome

    outcome.documentation = documentation_write(result.documentation, relative_path, state.mdOutputdir)
    outcome.applications = applications_write(result.applications, relative_path, state.examplesOutputdir)
    outcome.media = result.media
    return outcome


def sources_process(inputstate: ProgramState) -> ProgramState:
    """
    Process every selected source.

    A failing source is reported and skipped; with --failFast the run stops.

    Returns:
        ProgramState with added field:
            - outcomes: one SourceOutcome per processed source

    Exits:
        1 on the first failure when failFast is set
    """
    state = inputstate.copy()
    state.outcomes = []

    for relative_path in state.sourceFiles:
        LOG(f"Processing {relative_path}", level=1)
        outcome = source_process(state, relative_path)
        state.outcomes.append(outcome)

        if outcome.error:
            LOG_warn(f"{relative_path}: {outcome.error}")
            if state.failFast:
                print(f"Error: {relative_path}: {outcome.error}", file=sys.stderr)
                sys.exit(1)
            continue

        LOG(
            f"{relative_path}: {len(outcome.applications)} examples, {len(outcome.media)} media",
            level=2,
        )

    return state


def media_collect(inputstate: ProgramState) -> ProgramState:
    """
    Copy the media referenced by the processed documents.

    Returns:
        ProgramState with added field:
            - mediaCopied: paths of the copied assets
    """
    state = inputstate.copy()

    referenced = [src for outcome in state.outcomes for src in outcome.media]
    if not referenced:
        state.mediaCopied = []
        return state

    LOG(f"Copying {len(referenced)} media references from {state.mediaInputdir}", level=2)
    state.mediaCopied = media_copy(referenced, state.mediaInputdir, state.mediaOutputdir)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Summarize the run.

    Exits:
        1 if any source failed to process
    """
    state: ProgramState = inputstate.copy()

    failures = state.failures_get()
    documented = len(state.outcomes) - len(failures)
    examples = sum(len(outcome.applications) for outcome in state.outcomes)

    LOG(f"Documented {documented} sources", level=1)
    LOG(f"  Examples: {examples} in {state.examplesOutputdir}", level=1)
    LOG(f"  Media: {len(state.mediaCopied)} in {state.mediaOutputdir}", level=1)

    if failures:
        for outcome in failures:
            print(f"Error: {outcome.source}: {outcome.error}", file=sys.stderr)
        sys.exit(1)
    return state


@chris_plugin(
    parser=parser,
    title="docweave - documentation and examples from annotated sources",
    category="Documentation",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - document every annotated source below inputdir.

    Orchestrates the pipeline:
        1. env_check: Validate paths, load project configuration
        2. sources_discover: Select sources
        3. sources_process: Write documentation and examples per source
        4. media_collect: Copy referenced media
        5. results_report: Summarize and set the exit status
    """

    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, sources_discover, sources_process, media_collect, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
