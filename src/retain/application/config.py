from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from retain.domain.constants import DEFAULT_DAILY_GOAL, DEFAULT_RECOMMEND_LIMIT, MAX_DAILY_GOAL

CONFIG_FILES = [
    Path(".config/retain/config.toml"),
    Path(".retain.toml"),
]


class AppConfig(BaseSettings):
    """
    Configuration model for retain.
    Supports loading from:
    1. Config file (~/.config/retain/config.toml or ~/.retain.toml)
    2. Environment variables (RETAIN_*)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="RETAIN_",
        extra="ignore",
    )

    # Storage
    backend: Literal["json", "memory"] = "json"
    store_path: Path = Field(default_factory=lambda: Path.home() / ".config/retain/deck.json")

    # Scheduling
    policy: Literal["sm2", "leitner", "sm2+leitner"] = "sm2"
    recommend_limit: int = Field(default=DEFAULT_RECOMMEND_LIMIT, ge=0)

    # Progress
    daily_goal: int = Field(default=DEFAULT_DAILY_GOAL, ge=1, le=MAX_DAILY_GOAL)

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Find the first existing file
        toml_file = None
        for rel in CONFIG_FILES:
            candidate = Path.home() / rel
            if candidate.exists():
                toml_file = candidate
                break

        # Earlier sources win: overrides, then env, then the config file
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (
            init_settings,
            env_settings,
        )

    @field_validator("store_path", mode="before")
    @classmethod
    def expand_store_path(cls, v: Any) -> Path:
        return Path(v).expanduser()


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/retain/config.toml (if exists)
    3. Environment variables (RETAIN_*)
    4. cli_overrides (passed from Typer)

    Overrides set to None are treated as "not given".
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
