"""
Output writers for processed sources

Everything that touches the file system after a source has been processed:
documentation files mirroring the source tree, numbered example programs,
and copies of the referenced media assets.
"""

import shutil
from pathlib import Path, PurePosixPath
from typing import Callable, List, Sequence

from ..config import appsettings
from .log import LOG, LOG_warn


REMOTE_PREFIXES = ('http://', 'https://', '//', 'data:')


def documentation_write(text: str, relative_path: Path, md_outputdir: Path) -> Path:
    """
    Write documentation to the markdown mirror of a source path

    Args:
        text: Rendered documentation
        relative_path: Source path relative to the input directory
        md_outputdir: Root of the documentation output

    Returns:
        Path of the written file (e.g., md/guide/circles.md for guide/circles.py)
    """
    target = md_outputdir / relative_path.with_suffix(appsettings.markdown_suffix)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding='utf-8')
    LOG(f"Wrote {target}", level=2)
    return target


def applications_write(texts: Sequence[str], relative_path: Path, examples_outputdir: Path) -> List[Path]:
    """
    Write example programs next to the mirror of a source path

    Programs are named after the source stem and their one-based index,
    matching the index handed to the link builder.

    Returns:
        Paths of the written files, in capture order
    """
    targetdir = examples_outputdir / relative_path.parent
    written: List[Path] = []
    for index, text in enumerate(texts, start=1):
        target = targetdir / appsettings.exampleName_make(relative_path.stem, index)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding='utf-8')
        LOG(f"Wrote {target}", level=2)
        written.append(target)
    return written


def media_copy(sources: Sequence[str], media_inputdir: Path, media_outputdir: Path) -> List[Path]:
    """
    Copy referenced media assets, keeping their relative names

    Remote references are not copied. A reference whose first component
    names the media directory itself (media/circle.png with a media
    directory called "media") is resolved inside that directory.

    Returns:
        Paths of the copied files; missing assets are logged and skipped
    """
    copied: List[Path] = []
    for src in dict.fromkeys(sources):
        if src.startswith(REMOTE_PREFIXES):
            LOG(f"Skipping remote media {src}", level=3)
            continue

        relative = PurePosixPath(src)
        if relative.is_absolute() or '..' in relative.parts:
            LOG_warn(f"Media reference {src} leaves the media directory, not copied")
            continue
        if len(relative.parts) > 1 and relative.parts[0] == media_inputdir.name:
            relative = PurePosixPath(*relative.parts[1:])

        source = media_inputdir / relative
        if not source.is_file():
            LOG_warn(f"Media asset not found: {source}")
            continue

        target = media_outputdir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, target)
        LOG(f"Copied {source} to {target}", level=3)
        copied.append(target)
    return copied


def linkBuilder_make(web_root_url: str, relative_path: Path) -> Callable[[int], str]:
    """
    Link builder pointing at the published example programs of a source

    Example:
        >>> link = linkBuilder_make("https://example.org/examples/", Path("guide/circles.py"))
        >>> link(1)
        'https://example.org/examples/guide/circles001.py'
    """
    root = web_root_url.rstrip('/')
    parent = relative_path.parent.as_posix()
    base = root if parent == '.' else f"{root}/{parent}"

    def link_build(index: int) -> str:
        return f"{base}/{appsettings.exampleName_make(relative_path.stem, index)}"

    return link_build


def packageHeader_make(relative_path: Path, template: str = '') -> str:
    """
    Header of the example programs generated from a source

    Only the {source} placeholder is substituted; other braces are kept.
    """
    template = template or appsettings.package_header_template
    return template.replace('{source}', relative_path.as_posix())
