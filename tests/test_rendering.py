"""
Rendering and templating tests

Tests markdown rendering of every element type and the assembly of
example programs.
"""

import pytest

from docweave.config import appsettings
from docweave.lib.renderer import document_render, element_render
from docweave.lib.templating import application_build
from docweave.models import (
    ApplicationCapture,
    CodeElement,
    Document,
    ImageElement,
    MarkdownElement,
    VideoElement,
)


MARKER = 'DOCWEAVE_EXCLUDE'


class TestElementRender:
    """One element at a time"""

    def test_markdown_verbatim(self):
        assert element_render(MarkdownElement('# Title\n\n*body*')) == '# Title\n\n*body*'

    def test_code_fenced(self):
        assert element_render(CodeElement('draw()')) == '```python\ndraw()\n```'

    def test_code_language(self):
        assert element_render(CodeElement('x'), language='py') == '```py\nx\n```'

    def test_image(self):
        assert element_render(ImageElement('media/circle.png')) == '![](media/circle.png)'

    def test_video(self):
        expected = '<video controls src="media/circle.mp4"></video>'
        assert element_render(VideoElement('media/circle.mp4')) == expected

    def test_not_an_element(self):
        with pytest.raises(TypeError):
            element_render('plain string')


class TestDocumentRender:
    """Whole documents"""

    def test_empty_document(self):
        assert document_render(Document(), MARKER) == ''

    def test_elements_joined_by_newline(self):
        doc = Document((
            MarkdownElement('# Circles'),
            CodeElement('circle(0, 0, 5)'),
            ImageElement('media/circle.png'),
        ))
        assert document_render(doc, MARKER) == (
            '# Circles\n```python\ncircle(0, 0, 5)\n```\n![](media/circle.png)'
        )

    def test_marker_lines_removed(self):
        doc = Document((CodeElement("def f():\n    'DOCWEAVE_EXCLUDE'\n    return 1"),))
        assert document_render(doc, MARKER) == '```python\ndef f():\n    return 1\n```'


class TestApplicationBuild:
    """Program assembly"""

    def test_layout(self):
        capture = ApplicationCapture(body='draw()')
        text = application_build(capture, ['import math', 'from os import path'], '# header', MARKER)
        assert text == '# header\nimport math\nfrom os import path\n\ndraw()'

    def test_no_imports(self):
        text = application_build(ApplicationCapture(body='draw()'), [], '# header', MARKER)
        assert text == '# header\n\n\ndraw()'

    def test_entrypoint_guard(self):
        capture = ApplicationCapture(body='def main():\n    print(math.pi)', entrypoint='main')
        text = application_build(capture, ['import math'], '# h', MARKER)
        assert text == (
            "# h\nimport math\n\ndef main():\n    print(math.pi)"
            "\n\n\nif __name__ == '__main__':\n    main()"
        )

    def test_entrypoint_guard_disabled(self, monkeypatch):
        monkeypatch.setattr(appsettings, 'entrypoint_guard', False)
        capture = ApplicationCapture(body='def main():\n    pass', entrypoint='main')
        text = application_build(capture, [], '# h', MARKER)
        assert text == '# h\n\n\ndef main():\n    pass'

    def test_marker_lines_removed(self):
        capture = ApplicationCapture(body="def main():\n    'DOCWEAVE_EXCLUDE'\n    draw()")
        text = application_build(capture, [], '# h', MARKER)
        assert MARKER not in text
        assert text.endswith('def main():\n    draw()')
