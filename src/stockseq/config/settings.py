"""Application settings loader with environment variable support."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Callable, Optional, TypeVar

import yaml
from dotenv import load_dotenv

from stockseq.exceptions import ConfigError

# Resolve project root (three levels up from this file's package)
PROJECT_ROOT = Path(__file__).resolve().parents[3]

DEFAULT_SEQUENCE_LENGTH = 12
DEFAULT_HORIZON = 3
DEFAULT_SPLIT_RATIO = 0.8

T = TypeVar("T")


def _load_dotenv_files() -> None:
    """
    Load `.env` style files if they exist.

    Several locations are tried (`.env`, `.env.local`, `config/.env`,
    `config/.env.local`). Missing files are ignored and variables already set
    in the environment win.
    """
    candidate_files = [
        PROJECT_ROOT / ".env",
        PROJECT_ROOT / ".env.local",
        PROJECT_ROOT / "config" / ".env",
        PROJECT_ROOT / "config" / ".env.local",
    ]

    for env_file in candidate_files:
        if env_file.exists():
            load_dotenv(env_file, override=False)


_load_dotenv_files()


def _coerce(name: str, raw: Any, cast: Callable[[Any], T]) -> T:
    try:
        return cast(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value for '{name}': {raw!r}") from exc


def _strict_int(raw: Any) -> int:
    """Convert to int without truncating: ``2.0`` and ``"2"`` pass, ``2.7`` and ``True`` fail."""
    if isinstance(raw, bool):
        raise ValueError(f"boolean is not an integer: {raw!r}")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValueError(f"non-integral value: {raw!r}")
        return int(raw)
    return int(raw)


@dataclass(frozen=True)
class Settings:
    """Container for application-wide configuration values."""

    data_raw_dir: Path = PROJECT_ROOT / "data" / "raw"
    data_processed_dir: Path = PROJECT_ROOT / "data" / "processed"
    logs_dir: Path = PROJECT_ROOT / "logs"
    log_level: str = "INFO"
    sequence_length: int = DEFAULT_SEQUENCE_LENGTH
    horizon: int = DEFAULT_HORIZON
    split_ratio: float = DEFAULT_SPLIT_RATIO

    @staticmethod
    def _get_env(name: str, default: Optional[str] = None) -> str:
        value = os.getenv(name, default)
        if value is None:
            raise ConfigError(f"Environment variable '{name}' is required but missing.")
        return value

    @classmethod
    def load(cls) -> "Settings":
        """Instantiate settings from environment variables."""
        return cls(
            data_raw_dir=Path(os.getenv("DATA_RAW_DIR", PROJECT_ROOT / "data" / "raw")),
            data_processed_dir=Path(
                os.getenv("DATA_PROCESSED_DIR", PROJECT_ROOT / "data" / "processed")
            ),
            logs_dir=Path(os.getenv("LOGS_DIR", PROJECT_ROOT / "logs")),
            log_level=cls._get_env("LOG_LEVEL", "INFO").upper(),
            sequence_length=_coerce(
                "SEQUENCE_LENGTH",
                cls._get_env("SEQUENCE_LENGTH", str(DEFAULT_SEQUENCE_LENGTH)),
                _strict_int,
            ),
            horizon=_coerce("HORIZON", cls._get_env("HORIZON", str(DEFAULT_HORIZON)), _strict_int),
            split_ratio=_coerce(
                "SPLIT_RATIO",
                cls._get_env("SPLIT_RATIO", str(DEFAULT_SPLIT_RATIO)),
                float,
            ),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance."""
    return Settings.load()


def load_config_section(path: str | Path, section: str) -> dict:
    """Read one top-level section of a YAML config; a missing file yields ``{}``."""
    config_path = Path(path)
    if not config_path.exists():
        return {}
    with config_path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Could not parse config file {config_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping.")
    return data.get(section, {}) or {}


@dataclass
class PipelineConfig:
    """Window, horizon and split parameters for dataset preparation."""

    sequence_length: int = DEFAULT_SEQUENCE_LENGTH
    horizon: int = DEFAULT_HORIZON
    split_ratio: float = DEFAULT_SPLIT_RATIO

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if isinstance(self.sequence_length, bool) or not isinstance(self.sequence_length, int):
            raise ConfigError(f"sequence_length must be an integer, got {self.sequence_length!r}")
        if isinstance(self.horizon, bool) or not isinstance(self.horizon, int):
            raise ConfigError(f"horizon must be an integer, got {self.horizon!r}")
        if self.sequence_length < 1:
            raise ConfigError(f"sequence_length must be >= 1, got {self.sequence_length}")
        if self.horizon < 1:
            raise ConfigError(f"horizon must be >= 1, got {self.horizon}")
        if not 0.0 < float(self.split_ratio) < 1.0:
            raise ConfigError(f"split_ratio must lie in (0, 1), got {self.split_ratio}")

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PipelineConfig":
        settings = settings or get_settings()
        return cls(
            sequence_length=settings.sequence_length,
            horizon=settings.horizon,
            split_ratio=settings.split_ratio,
        )

    @classmethod
    def from_dict(cls, data: dict, defaults: "PipelineConfig | None" = None) -> "PipelineConfig":
        """Build from a config mapping holding a ``dataset`` section."""
        base = defaults or cls()
        section = data.get("dataset", {}) or {}
        return cls(
            sequence_length=_coerce(
                "sequence_length", section.get("sequence_length", base.sequence_length), _strict_int
            ),
            horizon=_coerce("horizon", section.get("horizon", base.horizon), _strict_int),
            split_ratio=_coerce("split_ratio", section.get("split_ratio", base.split_ratio), float),
        )

    @classmethod
    def from_yaml(cls, path: str | Path, defaults: "PipelineConfig | None" = None) -> "PipelineConfig":
        return cls.from_dict({"dataset": load_config_section(path, "dataset")}, defaults=defaults)
