"""
Annotation labels for documentation sources

Import these in an annotated source so it stays runnable Python:

    from docweave.annotations import Application, Code, Exclude, Media, Text

    Text('''
    # Circles
    ''')

    @Application
    @Code
    def main():
        Exclude(configure_logging())
        draw_circle(0, 0, 5)

    Media.Image("media/circle.png")

At run time every label hands back what it is applied to, so decorated
functions and wrapped expressions behave exactly as without the label.
docweave itself only reads the labels from the source text.
"""

from typing import Any, TypeVar


T = TypeVar("T")


class Label:
    """A marker that returns its argument unchanged"""

    def __init__(self, name: str) -> None:
        self.name = name

    def __call__(self, target: T) -> T:
        return target

    def __repr__(self) -> str:
        return f"<docweave label {self.name}>"


class CodeLabel(Label):
    """Code label; Code.Block marks the statements of a run block"""

    def __init__(self) -> None:
        super().__init__('Code')
        self.Block = Label('Code.Block')


class MediaLabels:
    """Namespace of the media labels"""

    Image = Label('Media.Image')
    Video = Label('Media.Video')

    def __repr__(self) -> str:
        return "<docweave labels Media>"


Application = Label('Application')
Text = Label('Text')
Code = CodeLabel()
Media: Any = MediaLabels()
Exclude = Label('Exclude')

__all__ = ["Application", "Text", "Code", "Media", "Exclude"]
