"""
Runtime label tests

Annotated sources must run unchanged with the labels imported.
"""

from docweave.annotations import Application, Code, Exclude, Media, Text
from docweave.models import RECOGNIZED_LABELS


class TestRuntimeLabels:
    """Labels return their argument"""

    def test_wrapper_labels(self):
        assert Text('hello') == 'hello'
        assert Media.Image('media/a.png') == 'media/a.png'
        assert Media.Video('media/a.mp4') == 'media/a.mp4'
        assert Exclude(3) == 3
        assert Application(Code(5)) == 5

    def test_decorated_function_runs(self):
        @Application
        @Code
        def main():
            return 'ran'

        assert main() == 'ran'

    def test_code_block(self):
        @Code.Block
        def run():
            return 1

        assert run() == 1

    def test_names_match_vocabulary(self):
        labels = {Application, Text, Code, Code.Block, Media.Image, Media.Video, Exclude}
        assert {label.name for label in labels} == RECOGNIZED_LABELS
