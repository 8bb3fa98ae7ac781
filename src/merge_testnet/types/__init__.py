"""Base models and exceptions shared across the participant network."""

from .aliases import EnclaveContext, ServiceId
from .base import CamelModel, StrictBaseModel
from .exceptions import (
    BootParticipantMissingError,
    DuplicateServiceError,
    KeystoreAssignmentError,
    Layer,
    LaunchFailureError,
    NetworkAlreadyLaunchedError,
    NetworkLaunchError,
    UnknownClientTypeError,
)

__all__ = [
    "EnclaveContext",
    "ServiceId",
    "CamelModel",
    "StrictBaseModel",
    "Layer",
    "NetworkLaunchError",
    "UnknownClientTypeError",
    "LaunchFailureError",
    "KeystoreAssignmentError",
    "BootParticipantMissingError",
    "NetworkAlreadyLaunchedError",
    "DuplicateServiceError",
]
