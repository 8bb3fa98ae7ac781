"""Exception hierarchy for participant network launches."""

from __future__ import annotations

from enum import Enum


class Layer(Enum):
    """Client layer a participant launch step belongs to."""

    EL = "EL"
    """Execution layer."""

    CL = "CL"
    """Consensus layer (beacon node and validator)."""


class NetworkLaunchError(Exception):
    """
    Base exception for all participant network errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class UnknownClientTypeError(NetworkLaunchError):
    """
    Raised when a participant references a client type with no registered launcher.

    Attributes:
        participant_index: Index of the offending participant.
        layer: Layer whose registry lacked the client type.
        client_type: The unregistered client type.
    """

    def __init__(self, participant_index: int, layer: Layer, client_type: object) -> None:
        self.participant_index = participant_index
        self.layer = layer
        self.client_type = client_type

        super().__init__(
            f"No {layer.value} client launcher defined for {layer.value} client type "
            f"'{_type_name(client_type)}' (participant {participant_index})"
        )


class LaunchFailureError(NetworkLaunchError):
    """
    Raised when a launcher fails to start a client.

    The launcher's own exception is chained as ``__cause__``.

    Attributes:
        participant_index: Index of the participant being launched.
        layer: Layer of the failed launch.
        service_id: Service identifier the launch was attempted under.
    """

    def __init__(self, participant_index: int, layer: Layer, service_id: str) -> None:
        self.participant_index = participant_index
        self.layer = layer
        self.service_id = service_id

        super().__init__(
            f"An error occurred launching {layer.value} client for participant "
            f"{participant_index} (service '{service_id}')"
        )


class KeystoreAssignmentError(NetworkLaunchError):
    """
    Raised when there are fewer validator keystore assignments than participants.

    Detected before any launch is attempted.

    Attributes:
        expected: Number of assignments required.
        actual: Number of assignments supplied.
    """

    def __init__(self, *, expected: int, actual: int) -> None:
        self.expected = expected
        self.actual = actual

        super().__init__(
            f"Need validator keystores for {expected} participants, "
            f"but only {actual} were assigned"
        )


class BootParticipantMissingError(NetworkLaunchError):
    """
    Raised when a non-boot participant is processed before the boot participant exists.

    Attributes:
        participant_index: Index of the participant that needed the bootnode.
    """

    def __init__(self, participant_index: int) -> None:
        self.participant_index = participant_index

        super().__init__(
            f"Participant {participant_index} requires the boot participant, "
            f"which has not been launched"
        )


class NetworkAlreadyLaunchedError(NetworkLaunchError):
    """
    Raised when bootstrapping a network that already has participants.

    Attributes:
        num_participants: Number of participants already running.
    """

    def __init__(self, num_participants: int) -> None:
        self.num_participants = num_participants

        super().__init__(
            f"Network already has {num_participants} participants; "
            f"use add_participant to grow it"
        )


class DuplicateServiceError(NetworkLaunchError):
    """
    Raised when an enclave is asked to start a service id that is already taken.

    Attributes:
        service_id: The conflicting service identifier.
    """

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id

        super().__init__(f"Service '{service_id}' already exists in the enclave")


def _type_name(client_type: object) -> str:
    """Render enum members by value, anything else as-is."""
    return str(client_type.value) if isinstance(client_type, Enum) else str(client_type)
