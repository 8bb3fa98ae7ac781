"""Consensus layer client identifiers."""

from enum import Enum


class CLClientType(Enum):
    """Consensus layer client implementation a participant runs."""

    LIGHTHOUSE = "lighthouse"
    LODESTAR = "lodestar"
    NIMBUS = "nimbus"
    PRYSM = "prysm"
    TEKU = "teku"
