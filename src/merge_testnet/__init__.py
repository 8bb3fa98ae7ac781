"""
Bootstrap a synthetic Ethereum network of paired execution and consensus clients.

Each participant runs one EL client and one CL client (beacon node plus
validator). Participant 0 is the bootnode every other participant
discovers peers through.
"""

from .cl import CLClientContext, CLClientLauncher, CLClientType
from .el import ELClientContext, ELClientLauncher, ELClientType
from .keystores import NodeKeystoreDirpaths, load_keystore_assignments
from .log_levels import ParticipantLogLevel
from .participant_network import (
    Participant,
    ParticipantNetwork,
    ParticipantSpec,
    launch_participant_network,
)

__all__ = [
    "CLClientContext",
    "CLClientLauncher",
    "CLClientType",
    "ELClientContext",
    "ELClientLauncher",
    "ELClientType",
    "NodeKeystoreDirpaths",
    "Participant",
    "ParticipantLogLevel",
    "ParticipantNetwork",
    "ParticipantSpec",
    "launch_participant_network",
    "load_keystore_assignments",
]
