"""Configuration models for cmakebridge."""

from pathlib import Path
from typing import Annotated, Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class BridgeSettings(BaseSettings):
    """cmakebridge settings with automatic environment variable support.

    Precedence order (highest to lowest):
    1. Environment variables (``CMAKEBRIDGE_*``)
    2. Constructor arguments (file data)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="CMAKEBRIDGE_",
        case_sensitive=False,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables override values read from the config file."""
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)

    cmake_executable: str | None = Field(
        default=None,
        description="Build tool executable; defaults to cmake.exe on Windows hosts, cmake elsewhere",
    )
    shell: Annotated[list[str] | None, NoDecode] = Field(
        default=None,
        description="Shell prefix used to run commands, e.g. 'bash,-c'",
    )
    third_party_dir: str = Field(
        default="../ThirdParty",
        description="Third-party root, relative to the module directory",
    )
    generated_dir_name: str = Field(default="generated")
    build_dir_name: str = Field(default="build")
    templates_dir: Path | None = Field(
        default=None,
        description="Directory holding CMakeLists.in and toolchains/*.in; packaged templates when unset",
    )
    sdk_dir: Path | None = Field(
        default=None,
        description="Internal clang toolchain root used for Unix-like targets",
    )
    capture_build_log: bool = Field(
        default=True,
        description="Tee configure/build output into a log file next to the generated project",
    )
    log_level: str = "WARNING"

    @field_validator("shell", mode="before")
    @classmethod
    def decode_shell(cls, v: Any) -> list[str] | None:
        if v is None or v == "":
            return None
        if isinstance(v, str):
            return [part.strip() for part in v.split(",") if part.strip()]
        return [str(part) for part in v]

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        upper_v = v.strip().upper()
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of {list(VALID_LOG_LEVELS)}")
        return upper_v

    @field_validator("templates_dir", "sdk_dir", mode="before")
    @classmethod
    def expand_path(cls, v: Any) -> Path | None:
        if v is None or v == "":
            return None
        return Path(v).expanduser()
