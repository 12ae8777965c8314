"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use EDBML_ prefix (e.g., EDBML_NAME_PREFIX=$tpl).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use EDBML_ prefix.

    Examples:
        EDBML_NAME_PREFIX=$tpl
        EDBML_COMMENTS_COUPLED=false
        EDBML_DEBUG_MODE=true
    """

    model_config = SettingsConfigDict(
        env_prefix="EDBML_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Code generation
    name_prefix: str = Field(
        default="$edb",
        description="Prefix for generated helper names (followed by the compiler counter)",
    )

    output_binding: str = Field(
        default="$function.$out",
        description="Expression bound to 'out' unless 'out' is a declared parameter",
    )

    attribute_helper: str = Field(
        default="new edb.Att ()",
        description="Expression bound to 'att' in the function header",
    )

    strict_mode: bool = Field(
        default=True,
        description="Open the compiled body with a 'use strict' directive",
    )

    # Preprocessing
    comments_coupled: bool = Field(
        default=True,
        description=(
            "Only strip comments when an HTML comment marker is present in the source. "
            "Set to false to strip each comment kind independently"
        ),
    )

    # Diagnostics
    debug_mode: bool = Field(
        default=False,
        description="Force debug verbosity (3) for every compilation",
    )

    def name_make(self, index: int) -> str:
        """
        Generate a helper name for the given counter value.

        Args:
            index: Counter value issued by the compiler

        Returns:
            Helper name (e.g., "$edb1")

        Example:
            >>> settings = AppSettings()
            >>> settings.name_make(1)
            '$edb1'
        """
        return f"{self.name_prefix}{index}"


# Singleton instance - import this in your code
appsettings = AppSettings()
