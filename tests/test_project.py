"""
Project configuration and settings tests
"""

import pytest

from docweave.config import AppSettings
from docweave.lib.project import ProjectConfig, ProjectConfigError, projectConfig_find


class TestProjectConfig:
    """YAML project configuration"""

    def test_nested_keys(self, tmp_path):
        path = tmp_path / 'docweave.yaml'
        path.write_text(
            'examples:\n  web_root_url: https://example.org/ex\nmedia:\n  dir: assets\n',
            encoding='utf-8',
        )
        config = ProjectConfig(path)
        assert config.config_get('examples.web_root_url') == 'https://example.org/ex'
        assert config.config_get('media.dir') == 'assets'
        assert config.config_get('media.missing', 'fallback') == 'fallback'
        assert config.config_get('examples.web_root_url.deeper') is None

    def test_empty_file(self, tmp_path):
        path = tmp_path / 'docweave.yaml'
        path.write_text('', encoding='utf-8')
        assert ProjectConfig(path).config == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ProjectConfigError):
            ProjectConfig(tmp_path / 'nothere.yaml')

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / 'docweave.yaml'
        path.write_text('examples: [unclosed\n', encoding='utf-8')
        with pytest.raises(ProjectConfigError):
            ProjectConfig(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / 'docweave.yaml'
        path.write_text('- one\n- two\n', encoding='utf-8')
        with pytest.raises(ProjectConfigError):
            ProjectConfig(path)

    def test_find_absent(self, tmp_path):
        config = projectConfig_find(tmp_path, 'docweave.yaml')
        assert config.path is None
        assert config.config_get('media.dir', 'media') == 'media'

    def test_find_present(self, tmp_path):
        (tmp_path / 'docweave.yaml').write_text('sources:\n  pattern: "*.py"\n', encoding='utf-8')
        assert projectConfig_find(tmp_path, 'docweave.yaml').config_get('sources.pattern') == '*.py'


class TestAppSettings:
    """Application settings"""

    def test_defaults(self):
        settings = AppSettings()
        assert settings.exclude_marker == 'DOCWEAVE_EXCLUDE'
        assert settings.code_language == 'python'

    def test_marker_candidates(self):
        settings = AppSettings()
        assert settings.markerCandidate_make(0) == 'DOCWEAVE_EXCLUDE'
        assert settings.markerCandidate_make(3) == 'DOCWEAVE_EXCLUDE_3'

    def test_example_names(self):
        settings = AppSettings()
        assert settings.exampleName_make('circles', 7) == 'circles007.py'

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv('DOCWEAVE_EXAMPLE_INDEX_WIDTH', '2')
        assert AppSettings().exampleName_make('circles', 7) == 'circles07.py'
