"""Execution layer launcher interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from merge_testnet.log_levels import ParticipantLogLevel
from merge_testnet.types import EnclaveContext, ServiceId

from .context import ELClientContext


@runtime_checkable
class ELClientLauncher(Protocol):
    """
    Starts one specific EL client implementation.

    One implementation exists per ``ELClientType``.
    The orchestrator selects it by registry lookup and calls ``launch``
    exactly once per participant.
    """

    def launch(
        self,
        enclave: EnclaveContext,
        service_id: ServiceId,
        log_level: ParticipantLogLevel,
        network_id: str,
        bootnode_context: ELClientContext | None,
    ) -> ELClientContext:
        """
        Start the client and block until it is reachable.

        Args:
            enclave: Environment to start the service in.
            service_id: Name for the started service.
            log_level: Global participant log level.
            network_id: Network identifier the client joins.
            bootnode_context: Context of the network's EL bootnode.
                None launches this client as the bootnode itself.

        Returns:
            Context of the running client.

        Raises:
            Exception: Any failure to start the client.
        """
        ...
