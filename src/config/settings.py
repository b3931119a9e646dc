"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use DOCWEAVE_ prefix (e.g., DOCWEAVE_CODE_LANGUAGE=python3).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use DOCWEAVE_ prefix.

    Examples:
        DOCWEAVE_EXCLUDE_MARKER=__DROP_LINE__
        DOCWEAVE_ENTRYPOINT_GUARD=false
        DOCWEAVE_LINK_TEXT="Full source"
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCWEAVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Annotation configuration
    annotations_module: str = Field(
        default="docweave.annotations",
        description="Module that defines the annotation labels; imports of it never reach examples",
    )

    exclude_marker: str = Field(
        default="DOCWEAVE_EXCLUDE",
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="Base of the sentinel marker that flags lines for deletion",
    )

    # Document configuration
    code_language: str = Field(
        default="python",
        description="Language tag placed on fenced code blocks",
    )

    link_text: str = Field(
        default="Link to the full example",
        description="Text of the link appended after code excerpts inside an application",
    )

    markdown_suffix: str = Field(
        default=".md",
        description="Suffix of generated documentation files",
    )

    # Example program configuration
    package_header_template: str = Field(
        default="# Generated by docweave from {source}. Do not edit.",
        description="Header placed on top of every generated example; {source} is the relative source path",
    )

    example_index_width: int = Field(
        default=3,
        ge=1,
        description="Zero-padded width of the index in generated example file names",
    )

    entrypoint_guard: bool = Field(
        default=True,
        description="Append an if __name__ == '__main__' guard to function applications",
    )

    # Project configuration
    config_filename: str = Field(
        default="docweave.yaml",
        description="Name of the optional project configuration file in the input directory",
    )

    def markerCandidate_make(self, attempt: int) -> str:
        """
        Generate the sentinel marker candidate for a reservation attempt.

        Args:
            attempt: Zero-based attempt number

        Returns:
            Marker string (e.g., "DOCWEAVE_EXCLUDE", "DOCWEAVE_EXCLUDE_1")

        Example:
            >>> settings = AppSettings()
            >>> settings.markerCandidate_make(2)
            'DOCWEAVE_EXCLUDE_2'
        """
        if attempt == 0:
            return self.exclude_marker
        return f"{self.exclude_marker}_{attempt}"

    def exampleName_make(self, stem: str, index: int) -> str:
        """
        Build the file name of a generated example program.

        Args:
            stem: Stem of the documentation source file
            index: One-based position of the application in its source

        Returns:
            File name (e.g., "intro001.py")
        """
        return f"{stem}{index:0{self.example_index_width}d}.py"


# Singleton instance - import this in your code
appsettings = AppSettings()
