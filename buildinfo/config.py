"""Progress configuration: env-driven, read once per controller.

Centralized config using pydantic-settings.  Reads from a .env file and
BUILDINFO_* environment variables.  Enumerated settings are coerced to
their enums on construction, so an unknown bar style or icon type fails
here rather than while a build is being rendered.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from buildinfo.core.progress_bar import BarStyle
from buildinfo.core.rolling_window import DEFAULT_WINDOW_LINES
from buildinfo.core.run_icons import RunIconType


class ProgressConfig(BaseSettings):
    """Build progress configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export BUILDINFO_ENABLED=false
        export BUILDINFO_BAR_STYLE="Block Shading"
        export BUILDINFO_BAR_LENGTH=20

    Or via .env file::

        BUILDINFO_RUN_ICON_TYPE="Solid Circled"
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BUILDINFO_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = True
    bar_style: BarStyle = BarStyle.BLOCK_WIDTH
    bar_length: int = Field(default=12, ge=0)
    run_icon_type: RunIconType = RunIconType.CIRCLED

    # Lines kept in the rolling window; every recognised banner must fit.
    window_lines: int = Field(default=DEFAULT_WINDOW_LINES, ge=1)

    log_level: str = "INFO"


# Module-level singleton; import as `from buildinfo.config import config`
config = ProgressConfig()
