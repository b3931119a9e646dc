"""
Program templating for captured applications

Each captured Application body becomes a complete program: the package
header, every import collected anywhere in the source file, a blank line,
and the body.
"""

from typing import Sequence

from ..config import appsettings
from ..models.results import ApplicationCapture
from .exclusion import lines_filter


def entrypointGuard_make(entrypoint: str) -> str:
    return f"\n\n\nif __name__ == '__main__':\n    {entrypoint}()"


def application_build(
    capture: ApplicationCapture,
    imports: Sequence[str],
    package_header: str,
    marker: str,
) -> str:
    """
    Assemble the program text of one application

    Args:
        capture: Captured region
        imports: Printed imports of the whole source file, in source order
        package_header: First line(s) of the generated program
        marker: Sentinel marker; lines containing it are removed

    Returns:
        Program text

    Example:
        >>> capture = ApplicationCapture(body="print(math.pi)")
        >>> print(application_build(capture, ["import math"], "# example", "DOCWEAVE_EXCLUDE"))
        # example
        import math
        <BLANKLINE>
        print(math.pi)
    """
    text = package_header + '\n' + '\n'.join(imports) + '\n\n' + capture.body
    if capture.entrypoint and appsettings.entrypoint_guard:
        text += entrypointGuard_make(capture.entrypoint)
    return lines_filter(text, marker)
