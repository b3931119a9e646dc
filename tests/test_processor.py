"""
End-to-end processing tests

Tests the full pipeline: annotated source -> SourceProcessor -> documentation,
example programs and media paths.
"""

import ast

import pytest

from docweave import process, SourceProcessor
from docweave.lib.errors import NonLiteralExpressionError


HEADER = '# header'

CIRCLES = '''\
from docweave.annotations import Application, Code, Exclude, Media, Text
import math

Text("""
    # Circles
    A circle of radius r.
""")


@Application
@Code
def main():
    Exclude(print('secret'))
    print(math.pi)


Media.Image("media/circle.png")
Media.Video("media/circle.mp4")
'''


class TestUnannotatedSources:
    """Sources without labels"""

    def test_no_labels(self):
        result = process('import os\nx = 1\nprint(x)', HEADER)
        assert result.documentation == ''
        assert result.applications == []
        assert result.media == []

    def test_empty_source(self):
        result = process('', HEADER)
        assert (result.documentation, result.applications, result.media) == ('', [], [])


class TestDocumentation:
    """Rendered documentation"""

    def test_text(self):
        assert process('Text("hello")', HEADER).documentation == 'hello'

    def test_code_wrapper(self):
        result = process('Code(print("hi"))', HEADER)
        assert result.documentation == '```python\nprint("hi")\n```'

    def test_comments_in_code(self):
        source = (
            "@Code\ndef setup():\n"
            "    # radius in pixels\n"
            "    r = 5  # keep small\n"
            "    circle(r)\n"
        )
        assert process(source, HEADER).documentation == (
            "```python\ndef setup():\n    # radius in pixels\n"
            "    r = 5  # keep small\n    circle(r)\n```"
        )

    def test_full_document(self):
        result = process(CIRCLES, HEADER)
        assert result.documentation == (
            "\n# Circles\nA circle of radius r.\n\n"
            "```python\ndef main():\n    print(math.pi)\n```\n"
            "![](media/circle.png)\n"
            '<video controls src="media/circle.mp4"></video>'
        )

    def test_media_in_document_order(self):
        result = process(CIRCLES, HEADER)
        assert result.media == ['media/circle.png', 'media/circle.mp4']

    def test_link_after_code(self):
        source = '@Application\ndef main():\n    Code(circle(0, 0, 5))\n'
        result = process(source, HEADER, link_builder=lambda index: f"https://ex/{index}")
        assert result.documentation == (
            "```python\ncircle(0, 0, 5)\n```\n"
            "[Link to the full example](https://ex/1)"
        )


class TestApplications:
    """Example programs"""

    def test_function_program(self):
        result = process(CIRCLES, HEADER)
        assert result.applications == [
            "# header\nimport math\n\ndef main():\n    print(math.pi)"
            "\n\n\nif __name__ == '__main__':\n    main()"
        ]

    def test_stacked_wrapper(self):
        result = process('Application(Code(run_demo()))', HEADER)
        assert result.applications == ['# header\n\n\nrun_demo()']
        assert result.documentation == '```python\nrun_demo()\n```'

    def test_all_imports_in_every_program(self):
        source = (
            'import math\n'
            'Application(first())\n'
            'import json\n'
            'Application(second())\n'
        )
        result = process(source, HEADER)
        assert result.applications == [
            '# header\nimport math\nimport json\n\nfirst()',
            '# header\nimport math\nimport json\n\nsecond()',
        ]

    def test_documentation_not_in_program(self):
        source = (
            '@Application\ndef main():\n'
            '    Text("Now draw")\n'
            '    draw()\n'
            '    Media.Image("media/a.png")\n'
        )
        result = process(source, HEADER)
        assert result.applications == [
            "# header\n\n\ndef main():\n    draw()"
            "\n\n\nif __name__ == '__main__':\n    main()"
        ]
        assert result.documentation == 'Now draw\n![](media/a.png)'

    def test_block_emptied_by_documentation(self):
        """A loop whose only statement is Text keeps a pass body"""
        source = (
            "@Application\ndef main():\n"
            "    for i in range(3):\n"
            "        Text('explain')\n"
            "    draw()\n"
        )
        program = process(source, HEADER).applications[0]
        assert program == (
            "# header\n\n\ndef main():\n    for i in range(3):\n        pass\n    draw()"
            "\n\n\nif __name__ == '__main__':\n    main()"
        )
        ast.parse(program)

    def test_class_emptied_by_exclusion(self):
        source = '@Application\nclass Demo:\n    @Exclude\n    def debug(self):\n        pass\n'
        program = process(source, HEADER).applications[0]
        assert program == '# header\n\n\nclass Demo:\n    pass'
        ast.parse(program)

    def test_no_guard_for_parameters(self):
        """A guard calling main() would fail for main(width)"""
        result = process('@Application\ndef main(width):\n    draw(width)\n', HEADER)
        assert result.applications == ['# header\n\n\ndef main(width):\n    draw(width)']

    def test_programs_parse(self):
        """Every program text is valid Python"""
        for text in process(CIRCLES, HEADER).applications:
            ast.parse(text)


class TestExclusion:
    """Excluded text never reaches any output"""

    def test_no_marker_or_excluded_text(self):
        result = process(CIRCLES, HEADER)
        outputs = [result.documentation, *result.applications]
        for text in outputs:
            assert 'DOCWEAVE_EXCLUDE' not in text
            assert 'secret' not in text

    def test_excluded_declaration(self):
        source = (
            '@Application\nclass Demo:\n'
            '    @Exclude\n    def debug(self):\n        pass\n\n'
            '    def show(self):\n        pass\n'
        )
        result = process(source, HEADER)
        assert result.applications == [
            '# header\n\n\nclass Demo:\n\n    def show(self):\n        pass'
        ]

    def test_marker_collision_with_source(self):
        """A string equal to the default marker survives"""
        source = (
            "@Code\ndef f():\n"
            "    label = 'DOCWEAVE_EXCLUDE'\n"
            "    Exclude(hidden())\n"
        )
        result = process(source, HEADER)
        assert result.documentation == "```python\ndef f():\n    label = 'DOCWEAVE_EXCLUDE'\n```"

    def test_marker_collision_with_header(self):
        """The header is never filtered"""
        header = '# DOCWEAVE_EXCLUDE'
        source = '@Application\ndef main():\n    Exclude(setup())\n    draw()\n'
        result = process(source, header)
        assert result.applications == [
            "# DOCWEAVE_EXCLUDE\n\n\ndef main():\n    draw()"
            "\n\n\nif __name__ == '__main__':\n    main()"
        ]


class TestDeterminism:
    """Processing keeps no state between calls"""

    def test_same_result_twice(self):
        processor = SourceProcessor(CIRCLES, HEADER, lambda index: f"ex{index}")
        assert processor.process() == processor.process()

    def test_independent_processors(self):
        assert process(CIRCLES, HEADER) == process(CIRCLES, HEADER)


class TestErrors:
    """Failures abort the file"""

    def test_syntax_error_propagates(self):
        with pytest.raises(SyntaxError):
            process('def (:', HEADER)

    def test_non_literal_text(self):
        with pytest.raises(NonLiteralExpressionError):
            process('Text(message)', HEADER)
