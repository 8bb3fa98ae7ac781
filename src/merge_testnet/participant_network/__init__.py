"""Participant network orchestration: bootnode election and sequential launch."""

from .network import (
    BOOT_PARTICIPANT_INDEX,
    CLLauncherRegistry,
    ELLauncherRegistry,
    ParticipantNetwork,
    cl_service_id,
    el_service_id,
    launch_participant_network,
)
from .participant import Participant
from .spec import ParticipantSpec

__all__ = [
    "BOOT_PARTICIPANT_INDEX",
    "CLLauncherRegistry",
    "ELLauncherRegistry",
    "Participant",
    "ParticipantNetwork",
    "ParticipantSpec",
    "cl_service_id",
    "el_service_id",
    "launch_participant_network",
]
