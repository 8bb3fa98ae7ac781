"""
Participant network orchestrator.

Launches a network of virtual "participants", where each participant runs:

1. an EL client
2. a beacon client
3. a validator client

Participant 0 is the bootnode for both layers.
Every later participant is pointed at its contexts so it can discover peers.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Final

from merge_testnet.cl import CLClientContext, CLClientLauncher, CLClientType
from merge_testnet.el import ELClientContext, ELClientLauncher, ELClientType
from merge_testnet.keystores import NodeKeystoreDirpaths
from merge_testnet.log_levels import ParticipantLogLevel
from merge_testnet.types import (
    BootParticipantMissingError,
    EnclaveContext,
    KeystoreAssignmentError,
    Layer,
    LaunchFailureError,
    NetworkAlreadyLaunchedError,
    ServiceId,
    UnknownClientTypeError,
)

from .participant import Participant
from .spec import ParticipantSpec

logger = logging.getLogger(__name__)

BOOT_PARTICIPANT_INDEX: Final = 0
"""Index of the participant whose clients act as bootnodes."""

EL_CLIENT_SERVICE_ID_PREFIX: Final = "el-client-"
"""Prefix of EL client service identifiers."""

CL_CLIENT_SERVICE_ID_PREFIX: Final = "cl-client-"
"""Prefix of CL client service identifiers."""

ELLauncherRegistry = Mapping[ELClientType, ELClientLauncher]
"""Mapping from EL client type to the launcher that starts it."""

CLLauncherRegistry = Mapping[CLClientType, CLClientLauncher]
"""Mapping from CL client type to the launcher that starts it."""


def el_service_id(participant_index: int) -> ServiceId:
    """Service identifier of the EL client at ``participant_index``."""
    return ServiceId(f"{EL_CLIENT_SERVICE_ID_PREFIX}{participant_index}")


def cl_service_id(participant_index: int) -> ServiceId:
    """Service identifier of the CL client at ``participant_index``."""
    return ServiceId(f"{CL_CLIENT_SERVICE_ID_PREFIX}{participant_index}")


def launch_participant_network(
    enclave: EnclaveContext,
    network_id: str,
    el_client_launchers: ELLauncherRegistry,
    cl_client_launchers: CLLauncherRegistry,
    all_participant_specs: Sequence[ParticipantSpec],
    keystore_assignments: Sequence[NodeKeystoreDirpaths],
    log_level: ParticipantLogLevel,
) -> list[Participant]:
    """
    Launch every participant in order, wiring each to the boot participant.

    Launches are strictly sequential.
    Participant ``i > 0`` needs the contexts of participant 0, so nothing
    runs concurrently. Each launch call blocks until the client is up.

    All preconditions are checked before the first launch:

    - there is a keystore assignment for every participant
    - every EL and CL client type has a registered launcher

    Any failure aborts the whole run. Already-launched services are left
    running; cleaning them up is the caller's responsibility.

    Args:
        enclave: Environment every client is started in.
        network_id: Network identifier passed to every EL launch.
        el_client_launchers: EL launcher per client type.
        cl_client_launchers: CL launcher per client type.
        all_participant_specs: Participants to launch; index 0 is the bootnode.
        keystore_assignments: Validator keys per participant, aligned by index.
        log_level: Log level forwarded to every launcher.

    Returns:
        One participant per spec, in spec order.

    Raises:
        KeystoreAssignmentError: Fewer keystore assignments than specs.
        UnknownClientTypeError: A spec names an unregistered client type.
        LaunchFailureError: A launcher raised.
    """
    num_participants = len(all_participant_specs)
    if len(keystore_assignments) < num_participants:
        raise KeystoreAssignmentError(expected=num_participants, actual=len(keystore_assignments))

    # Resolve every launcher up front.
    #
    # An unknown client type anywhere in the specs must not leave a
    # half-launched network behind.
    launchers = [
        _resolve_launchers(idx, spec, el_client_launchers, cl_client_launchers)
        for idx, spec in enumerate(all_participant_specs)
    ]

    participants: list[Participant] = []
    for idx, spec in enumerate(all_participant_specs):
        el_launcher, cl_launcher = launchers[idx]
        participant = _launch_participant(
            enclave,
            network_id,
            idx,
            spec,
            el_launcher,
            cl_launcher,
            keystore_assignments[idx],
            log_level,
            _boot_participant(participants),
        )
        participants.append(participant)

    logger.info("Launched participant network with %d participants", len(participants))
    return participants


@dataclass(slots=True)
class ParticipantNetwork:
    """
    A running participant network that can grow one participant at a time.

    Adds may come from several threads.
    A single lock covers the whole index-resolve, launch, append sequence,
    so two adds never target the same index.
    """

    enclave: EnclaveContext
    """Environment every client is started in."""

    network_id: str
    """Network identifier passed to every EL launch."""

    keystore_assignments: Sequence[NodeKeystoreDirpaths]
    """Validator keys per participant index."""

    el_client_launchers: ELLauncherRegistry
    """EL launcher per client type."""

    cl_client_launchers: CLLauncherRegistry
    """CL launcher per client type."""

    _participants: list[Participant] = field(default_factory=list, repr=False)
    """Running participants, in launch order."""

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    """Guards ``_participants``."""

    @property
    def participants(self) -> tuple[Participant, ...]:
        """Snapshot of the running participants."""
        with self._lock:
            return tuple(self._participants)

    @property
    def boot_participant(self) -> Participant | None:
        """Participant acting as bootnode, or None before the first add."""
        with self._lock:
            return _boot_participant(self._participants)

    def __len__(self) -> int:
        """Number of running participants."""
        with self._lock:
            return len(self._participants)

    def add_participant(
        self,
        el_client_type: ELClientType,
        cl_client_type: CLClientType,
        log_level: ParticipantLogLevel,
    ) -> Participant:
        """
        Launch one more participant and append it to the network.

        The first participant ever added becomes the bootnode.
        On failure nothing is appended and the network is left as it was.

        Args:
            el_client_type: EL client to launch.
            cl_client_type: CL client to launch.
            log_level: Log level forwarded to both launchers.

        Returns:
            The newly launched participant.

        Raises:
            UnknownClientTypeError: A client type has no registered launcher.
            KeystoreAssignmentError: No keystores remain for the new index.
            LaunchFailureError: A launcher raised.
        """
        spec = ParticipantSpec(el_client_type=el_client_type, cl_client_type=cl_client_type)

        with self._lock:
            new_idx = len(self._participants)

            el_launcher, cl_launcher = _resolve_launchers(
                new_idx, spec, self.el_client_launchers, self.cl_client_launchers
            )
            if new_idx >= len(self.keystore_assignments):
                raise KeystoreAssignmentError(
                    expected=new_idx + 1, actual=len(self.keystore_assignments)
                )

            participant = _launch_participant(
                self.enclave,
                self.network_id,
                new_idx,
                spec,
                el_launcher,
                cl_launcher,
                self.keystore_assignments[new_idx],
                log_level,
                _boot_participant(self._participants),
            )
            self._participants.append(participant)
            return participant

    def launch_all(
        self,
        all_participant_specs: Sequence[ParticipantSpec],
        log_level: ParticipantLogLevel,
    ) -> tuple[Participant, ...]:
        """
        Bootstrap an empty network from specs in one pass.

        The participants are installed only if every launch succeeds.

        Raises:
            NetworkAlreadyLaunchedError: The network already has participants.
        """
        with self._lock:
            if self._participants:
                raise NetworkAlreadyLaunchedError(len(self._participants))

            self._participants = launch_participant_network(
                self.enclave,
                self.network_id,
                self.el_client_launchers,
                self.cl_client_launchers,
                all_participant_specs,
                self.keystore_assignments,
                log_level,
            )
            return tuple(self._participants)


def _boot_participant(participants: Sequence[Participant]) -> Participant | None:
    """The boot participant, if it has been launched."""
    if len(participants) > BOOT_PARTICIPANT_INDEX:
        return participants[BOOT_PARTICIPANT_INDEX]
    return None


def _resolve_launchers(
    participant_index: int,
    spec: ParticipantSpec,
    el_client_launchers: ELLauncherRegistry,
    cl_client_launchers: CLLauncherRegistry,
) -> tuple[ELClientLauncher, CLClientLauncher]:
    """Look up both launchers for a spec."""
    el_launcher = el_client_launchers.get(spec.el_client_type)
    if el_launcher is None:
        raise UnknownClientTypeError(participant_index, Layer.EL, spec.el_client_type)

    cl_launcher = cl_client_launchers.get(spec.cl_client_type)
    if cl_launcher is None:
        raise UnknownClientTypeError(participant_index, Layer.CL, spec.cl_client_type)

    return el_launcher, cl_launcher


def _launch_participant(
    enclave: EnclaveContext,
    network_id: str,
    participant_index: int,
    spec: ParticipantSpec,
    el_launcher: ELClientLauncher,
    cl_launcher: CLClientLauncher,
    node_keystores: NodeKeystoreDirpaths,
    log_level: ParticipantLogLevel,
    boot_participant: Participant | None,
) -> Participant:
    """
    Launch the EL then the CL client of one participant.

    The boot participant launches with None bootnode contexts.
    Everyone else receives the boot participant's contexts as-is.
    """
    boot_el_context: ELClientContext | None = None
    boot_cl_context: CLClientContext | None = None
    if participant_index != BOOT_PARTICIPANT_INDEX:
        if boot_participant is None:
            raise BootParticipantMissingError(participant_index)
        boot_el_context = boot_participant.get_el_client_context()
        boot_cl_context = boot_participant.get_cl_client_context()

    # Add EL client
    el_id = el_service_id(participant_index)
    logger.debug(
        "Launching %s EL client as %s (bootnode: %s)",
        spec.el_client_type.value,
        el_id,
        "self" if boot_el_context is None else boot_el_context.enode,
    )
    try:
        el_context = el_launcher.launch(enclave, el_id, log_level, network_id, boot_el_context)
    except Exception as e:
        raise LaunchFailureError(participant_index, Layer.EL, el_id) from e

    # Launch CL client
    #
    # The CL client always drives its own participant's EL client,
    # never the boot participant's.
    cl_id = cl_service_id(participant_index)
    logger.debug(
        "Launching %s CL client as %s (bootnode: %s)",
        spec.cl_client_type.value,
        cl_id,
        "self" if boot_cl_context is None else boot_cl_context.enr,
    )
    try:
        cl_context = cl_launcher.launch(
            enclave,
            cl_id,
            log_level,
            boot_cl_context,
            el_context,
            node_keystores,
        )
    except Exception as e:
        raise LaunchFailureError(participant_index, Layer.CL, cl_id) from e

    logger.info(
        "Launched participant %d (%s/%s)",
        participant_index,
        spec.el_client_type.value,
        spec.cl_client_type.value,
    )
    return Participant(
        el_client_type=spec.el_client_type,
        cl_client_type=spec.cl_client_type,
        el_client_context=el_context,
        cl_client_context=cl_context,
    )
