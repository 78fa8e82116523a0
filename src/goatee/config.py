"""Pydantic Settings with YAML config file support.

Priority (highest first): env vars > .env > ./goatee.yaml > $XDG_CONFIG_HOME/goatee/goatee.yaml
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict, YamlConfigSettingsSource


# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------

class SearchConfig(BaseModel):
    max_items: int = Field(1024, ge=1)  # hard cap on reported matches


class HexConfig(BaseModel):
    """Hex-dump presentation of binary documents."""

    bytes_in_line: int = Field(16, ge=1)
    language: str = "hexdump"


class DetectConfig(BaseModel):
    """Encoding detection thresholds."""

    min_confidence: float = Field(0.30, ge=0.0, le=1.0)  # chardet confidence, 0..1
    sniff_bytes: int = Field(8192, ge=1)


class LanguageConfig(BaseModel):
    """Language classifier heuristics."""

    sample_bytes: int = Field(64, ge=1)
    fallback: str = "sh"
    comment_order: list[str] = ["toml", "yaml", "sh"]
    section_order: list[str] = ["ini", "toml"]


# ---------------------------------------------------------------------------
# Main settings
# ---------------------------------------------------------------------------

def config_dir() -> Path:
    """Return the per-user goatee config directory."""
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "goatee"


def config_files() -> list[Path]:
    """Return the YAML config files that exist, lowest priority first."""
    candidates = [config_dir() / "goatee.yaml", Path("goatee.yaml")]
    return [p for p in candidates if p.exists()]


class Settings(BaseSettings):
    """Application settings loaded from YAML + env vars."""

    model_config = SettingsConfigDict(
        env_prefix="GOATEE_",
        env_nested_delimiter="__",
    )

    search: SearchConfig = SearchConfig()
    hex: HexConfig = HexConfig()
    detect: DetectConfig = DetectConfig()
    language: LanguageConfig = LanguageConfig()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(
                settings_cls,
                yaml_file=config_files(),
            ),
        )


# ---------------------------------------------------------------------------
# Singleton accessor
# ---------------------------------------------------------------------------

@lru_cache(maxsize=1)
def get_settings(**kwargs: Any) -> Settings:
    """Lazy singleton for settings. Call reset_settings() to reload."""
    load_dotenv(config_dir() / ".env", override=False)
    return Settings(**kwargs)


def reset_settings() -> None:
    """Clear the settings cache so the next get_settings() reloads from disk."""
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Preference descriptors
# ---------------------------------------------------------------------------

class PreferenceField(BaseModel):
    """One editable preference, as a settings dialog would present it."""

    section: str
    name: str
    kind: Literal["int", "float", "string", "list"]
    label: str
    minimum: float | None = None
    maximum: float | None = None

    def value(self, settings: Settings) -> Any:
        return getattr(getattr(settings, self.section), self.name)


PREFERENCES: list[PreferenceField] = [
    PreferenceField(section="search", name="max_items", kind="int", label="Max Search Results", minimum=1, maximum=65536),
    PreferenceField(section="hex", name="bytes_in_line", kind="int", label="Bytes In Line", minimum=1, maximum=2048),
    PreferenceField(section="hex", name="language", kind="string", label="Hex Language"),
    PreferenceField(section="detect", name="min_confidence", kind="float", label="Min Charset Confidence", minimum=0.0, maximum=1.0),
    PreferenceField(section="detect", name="sniff_bytes", kind="int", label="Sniff Bytes", minimum=1),
    PreferenceField(section="language", name="sample_bytes", kind="int", label="Language Sample Bytes", minimum=1),
    PreferenceField(section="language", name="fallback", kind="string", label="Fallback Language"),
    PreferenceField(section="language", name="comment_order", kind="list", label="Comment Line Languages"),
    PreferenceField(section="language", name="section_order", kind="list", label="Section Line Languages"),
]
