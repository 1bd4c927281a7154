"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.models import MINUTES_PER_DAY


def _attendee_key(text: str) -> str:
    return text.strip().casefold()


class DefaultsConfig(BaseModel):
    """Default settings for search."""
    duration_minutes: int = 30

    @field_validator("duration_minutes")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure meeting duration is positive and fits in a day."""
        if value <= 0:
            raise ValueError("duration_minutes must be greater than zero")
        if value > MINUTES_PER_DAY:
            raise ValueError(f"duration_minutes must not exceed {MINUTES_PER_DAY}")
        return value


class Colleague(BaseModel):
    """Colleague/Attendee alias configuration."""
    name: str  # Used as alias
    identifier: str  # Name as it appears in calendar events

    def display_name(self) -> str:
        """Get display name."""
        return self.name

    def lookup_keys(self) -> set[str]:
        """Case-insensitive keys under which this colleague can be addressed."""
        return {_attendee_key(self.name), _attendee_key(self.identifier)}


class AppConfig(BaseModel):
    """Application configuration."""
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    calendar_file: Optional[Path] = None
    log_level: str = "WARNING"
    colleagues: List[Colleague] = Field(default_factory=list)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure the log level is one the logging module knows."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("colleagues")
    @classmethod
    def validate_colleagues(cls, value: List[Colleague]) -> List[Colleague]:
        """
        Ensure every alias and identifier points at exactly one colleague.

        A colleague may use the same text as alias and identifier, but an
        alias must not match another colleague's alias or identifier.
        """
        owners: Dict[str, Colleague] = {}
        for colleague in value:
            for key in colleague.lookup_keys():
                owner = owners.setdefault(key, colleague)
                if owner is not colleague:
                    raise ValueError(
                        f"Ambiguous attendee '{key}': used by both "
                        f"{owner.display_name()} and {colleague.display_name()}"
                    )
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative ``calendar_file`` is resolved against the config file's
        directory, so a config and its calendar can be moved together.

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        config = cls.model_validate(_read_yaml_mapping(config_path))

        calendar_file = config.calendar_file
        if calendar_file is not None and not calendar_file.is_absolute():
            config = config.model_copy(update={"calendar_file": config_path.parent / calendar_file})
        return config

    def find_colleague(self, text: str) -> Colleague | None:
        """Find a colleague by alias or calendar identifier, ignoring case."""
        key = _attendee_key(text)
        for colleague in self.colleagues:
            if key in colleague.lookup_keys():
                return colleague
        return None

    def resolve_attendee(self, identifier: str) -> str:
        """
        Resolve an alias or identifier to the spelling used in calendar events.

        Events match attendees by exact string, so known colleagues are
        always mapped to their configured identifier. Unknown names are
        returned unchanged, since events may name people who are not listed
        as colleagues.
        """
        identifier = identifier.strip()
        if not identifier:
            raise ValueError("Attendee identifier must not be empty.")

        colleague = self.find_colleague(identifier)
        return colleague.identifier if colleague else identifier

    def resolve_attendees(self, identifiers: Sequence[str]) -> List[str]:
        """Resolve several attendees, dropping repeats but keeping input order."""
        return list(dict.fromkeys(self.resolve_attendee(identifier) for identifier in identifiers))


def _read_yaml_mapping(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            f"Please create a config.yaml file. See config.example.yaml for reference."
        )

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Config file must contain a mapping at the root level.")
    return data


def get_default_config_path() -> Path:
    """
    Get the default configuration file path.

    The working directory wins over the project root. If neither holds a
    config.yaml, the working-directory path is returned.
    """
    candidates = [Path.cwd() / "config.yaml", Path(__file__).parent.parent / "config.yaml"]
    return next((path for path in candidates if path.exists()), candidates[0])
