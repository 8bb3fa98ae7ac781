"""
Network configuration for a participant network launch.

Loaded from YAML:

    network_id: "3151908"
    log_level: info
    keystores: keystores.yaml
    participants:
    - el_client_type: geth
      cl_client_type: lighthouse
    - el_client_type: nethermind
      cl_client_type: teku

The ``MERGE_TESTNET_LOG_LEVEL`` environment variable, when set, overrides
the file's log level.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator

from merge_testnet.cl import CLClientType
from merge_testnet.el import ELClientType
from merge_testnet.log_levels import ParticipantLogLevel
from merge_testnet.participant_network import ParticipantSpec
from merge_testnet.types import CamelModel

DEFAULT_NETWORK_ID = "3151908"
"""Network id used when the config does not set one."""

_LOG_LEVEL_ENV_VAR = "MERGE_TESTNET_LOG_LEVEL"

LOG_LEVEL_OVERRIDE: ParticipantLogLevel | None = (
    ParticipantLogLevel.parse(os.environ[_LOG_LEVEL_ENV_VAR])
    if os.environ.get(_LOG_LEVEL_ENV_VAR)
    else None
)
"""Log level forced through the environment, if any. Invalid values fail at import."""


class _ConfigModel(CamelModel):
    """Frozen model that accepts the plain strings YAML produces."""

    model_config = CamelModel.model_config | {"extra": "forbid", "frozen": True}


class ParticipantConfig(_ConfigModel):
    """One participant entry of the config file."""

    el_client_type: ELClientType = ELClientType.GETH
    """Execution layer client to launch."""

    cl_client_type: CLClientType = CLClientType.LIGHTHOUSE
    """Consensus layer client to launch."""

    count: int = Field(default=1, ge=1)
    """How many identical participants this entry expands to."""

    def to_specs(self) -> list[ParticipantSpec]:
        """Expand into ``count`` participant specs."""
        spec = ParticipantSpec(
            el_client_type=self.el_client_type, cl_client_type=self.cl_client_type
        )
        return [spec] * self.count


class NetworkConfig(_ConfigModel):
    """Everything needed to launch a participant network."""

    network_id: str = DEFAULT_NETWORK_ID
    """Network identifier passed to every EL client."""

    log_level: ParticipantLogLevel = ParticipantLogLevel.INFO
    """Global participant log level."""

    keystores: Path | None = None
    """Keystore assignments file, relative to the config file."""

    participants: list[ParticipantConfig] = Field(min_length=1)
    """Participant entries; the first expanded spec is the bootnode."""

    @field_validator("network_id", mode="before")
    @classmethod
    def coerce_network_id(cls, v: Any) -> Any:
        """
        Accept integer network ids.

        YAML parses an unquoted ``3151908`` as an integer.
        """
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def parse_log_level(cls, v: Any) -> Any:
        """Parse log level names case-insensitively."""
        if isinstance(v, str):
            return ParticipantLogLevel.parse(v)
        return v

    @property
    def effective_log_level(self) -> ParticipantLogLevel:
        """Log level after applying the environment override."""
        return LOG_LEVEL_OVERRIDE if LOG_LEVEL_OVERRIDE is not None else self.log_level

    def participant_specs(self) -> list[ParticipantSpec]:
        """All participant specs in launch order."""
        return [spec for entry in self.participants for spec in entry.to_specs()]

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> NetworkConfig:
        """
        Load configuration from a YAML file.

        A relative ``keystores`` path is resolved against the file's directory.

        Raises:
            FileNotFoundError: If the file does not exist.
            yaml.YAMLError: If the file is not valid YAML.
            pydantic.ValidationError: If the data fails validation.
        """
        path = Path(path)
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)

        config = cls.model_validate(data)
        if config.keystores is not None and not config.keystores.is_absolute():
            config = config.model_copy(update={"keystores": path.parent / config.keystores})
        return config

    @classmethod
    def from_yaml(cls, content: str) -> NetworkConfig:
        """
        Load configuration from a YAML string.

        Useful for testing or programmatic config generation.
        """
        return cls.model_validate(yaml.safe_load(content))
