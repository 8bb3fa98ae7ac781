"""Consensus layer launcher interface."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from merge_testnet.el import ELClientContext
from merge_testnet.keystores import NodeKeystoreDirpaths
from merge_testnet.log_levels import ParticipantLogLevel
from merge_testnet.types import EnclaveContext, ServiceId

from .context import CLClientContext


@runtime_checkable
class CLClientLauncher(Protocol):
    """
    Starts one specific CL client implementation.

    Launches both a beacon node AND a validator client.
    """

    def launch(
        self,
        enclave: EnclaveContext,
        service_id: ServiceId,
        log_level: ParticipantLogLevel,
        bootnode_context: CLClientContext | None,
        el_client_context: ELClientContext,
        node_keystores: NodeKeystoreDirpaths,
    ) -> CLClientContext:
        """
        Start the beacon node and validator and block until reachable.

        Args:
            enclave: Environment to start the service in.
            service_id: Name for the started service.
            log_level: Global participant log level.
            bootnode_context: Context of the network's CL bootnode.
                None launches this client as the bootnode itself.
            el_client_context: The EL client of this same participant.
            node_keystores: Validator keys this node signs with.

        Returns:
            Context of the running beacon node.
        """
        ...
