"""Validator keystore assignments for participant nodes.

Keystores are generated ahead of time, one directory set per participant.
The assignments file lists them in participant order:

    - raw_keys_dirpath: /keys/node-0/keys
      nimbus_keys_dirpath: /keys/node-0/nimbus-keys
      prysm_dirpath: /keys/node-0/prysm
      teku_keys_dirpath: /keys/node-0/teku-keys
      teku_secrets_dirpath: /keys/node-0/teku-secrets
    - raw_keys_dirpath: /keys/node-1/keys
      ...

Entry ``i`` belongs to participant ``i``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import TypeAdapter

from merge_testnet.types import StrictBaseModel

logger = logging.getLogger(__name__)


class NodeKeystoreDirpaths(StrictBaseModel):
    """
    Locations of one node's validator signing material.

    Each CL client reads keys in its own layout, so the same validators
    are exported once per layout.
    """

    raw_keys_dirpath: str
    """Directory of EIP-2335 keystores, one per validator."""

    raw_secrets_dirpath: str = ""
    """Directory of keystore passwords, one file per validator."""

    nimbus_keys_dirpath: str = ""
    """Keystores laid out the way Nimbus expects them."""

    prysm_dirpath: str = ""
    """Prysm wallet directory."""

    teku_keys_dirpath: str = ""
    """Keystores laid out the way Teku expects them."""

    teku_secrets_dirpath: str = ""
    """Passwords matching ``teku_keys_dirpath``."""


_ASSIGNMENTS_ADAPTER: TypeAdapter[list[NodeKeystoreDirpaths]] = TypeAdapter(
    list[NodeKeystoreDirpaths]
)


def load_keystore_assignments(path: Path | str) -> list[NodeKeystoreDirpaths]:
    """
    Load per-participant keystore assignments from a YAML file.

    Args:
        path: Path to the assignments file.

    Returns:
        Assignments in participant order. Empty list if the file is empty.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        pydantic.ValidationError: If an entry fails validation.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)

    # YAML returns None for empty file
    assignments = _ASSIGNMENTS_ADAPTER.validate_python(data or [])
    logger.debug("Loaded %d keystore assignments from %s", len(assignments), path)
    return assignments
