"""Configuration management - settings from env, rule tables from YAML."""

from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment and .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=4000, description="Bind port")

    # LLM (OpenAI-compatible)
    llm_base_url: str | None = Field(default=None, description="OpenAI-compatible API base URL")
    llm_api_key: str = Field(default="", description="API key for LLM provider")
    llm_model: str = Field(default="gpt-4o-mini", description="Model name")
    llm_timeout_seconds: float = Field(default=60.0, description="Upper bound for one menu generation call")
    llm_max_tokens: int = Field(default=8192, description="Completion budget for a weekly menu")
    trust_provider_version: bool = Field(
        default=False,
        description="Accept a version number reported by the provider if it is not below the sequenced one",
    )

    # SMTP
    smtp_host: str = Field(default="", description="SMTP server host")
    smtp_port: int = Field(default=465, description="SMTP server port")
    smtp_ssl: bool = Field(default=True, description="Implicit TLS (port 465); STARTTLS otherwise")
    smtp_user: str = Field(default="", description="SMTP login, also the default sender")
    smtp_password: str = Field(default="", description="SMTP password")
    mail_from: str = Field(default="", description="From address, defaults to smtp_user")

    # Data
    data_dir: Path = Field(default=Path("data"), description="Directory for JSON persistence")
    redis_url: str | None = Field(default=None, description="Redis URL for cloud persistence")


def load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load YAML config file."""
    if not config_path.exists():
        return {}
    with config_path.open() as f:
        return yaml.safe_load(f) or {}


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()


@lru_cache
def get_calorie_rules(config_dir_str: str = "") -> dict[str, Any]:
    """Load activity multipliers and goal factors. Missing keys fall back to built-ins."""
    if not config_dir_str:
        config_dir = Path(__file__).parent.parent.parent / "config"
    else:
        config_dir = Path(config_dir_str)
    return load_yaml_config(config_dir / "calorie_rules.yaml")
