"""Execution layer client identifiers."""

from enum import Enum


class ELClientType(Enum):
    """Execution layer client implementation a participant runs."""

    GETH = "geth"
    NETHERMIND = "nethermind"
    BESU = "besu"
    ERIGON = "erigon"
