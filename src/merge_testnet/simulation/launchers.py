"""
Launchers that start clients inside a simulated enclave.

No processes are spawned. Each launch registers a service, allocates its
ports and derives a deterministic node identity from the enclave name and
service id, so a dry run of a network layout yields stable, inspectable
contexts.
"""

from __future__ import annotations

import base64
import hashlib
import logging
from dataclasses import dataclass

from merge_testnet.cl import CLClientContext, CLClientType
from merge_testnet.el import ELClientContext, ELClientType
from merge_testnet.keystores import NodeKeystoreDirpaths
from merge_testnet.log_levels import ParticipantLogLevel
from merge_testnet.types import ServiceId

from .enclave import SimulatedEnclave

logger = logging.getLogger(__name__)

EL_DISCOVERY_PORT = 30303
"""devp2p port every simulated EL client listens on."""


def _node_key(enclave: SimulatedEnclave, service_id: ServiceId) -> bytes:
    """64-byte node public key stand-in, stable for an (enclave, service) pair."""
    seed = f"{enclave.name}/{service_id}".encode()
    return hashlib.sha512(seed).digest()


def _enr(node_key: bytes, ip_addr: str) -> str:
    """Opaque ENR-shaped string for a node."""
    payload = hashlib.sha256(node_key + ip_addr.encode()).digest()
    return "enr:-" + base64.urlsafe_b64encode(payload).decode("ascii").rstrip("=")


@dataclass(frozen=True, slots=True)
class SimulatedELLauncher:
    """Starts a simulated EL client of one client type."""

    client_type: ELClientType
    """Client implementation this launcher starts."""

    def launch(
        self,
        enclave: SimulatedEnclave,
        service_id: ServiceId,
        log_level: ParticipantLogLevel,
        network_id: str,
        bootnode_context: ELClientContext | None,
    ) -> ELClientContext:
        """Register the EL service and return its context."""
        bootnode = bootnode_context.enode if bootnode_context is not None else None
        service = enclave.start_service(service_id, self.client_type.value, log_level, bootnode)
        rpc_port, ws_port, engine_port = enclave.port_allocator.allocate_el_ports()

        node_key = _node_key(enclave, service_id)
        context = ELClientContext(
            client_name=self.client_type.value,
            enode=f"enode://{node_key.hex()}@{service.ip_addr}:{EL_DISCOVERY_PORT}",
            enr=_enr(node_key, service.ip_addr),
            ip_addr=service.ip_addr,
            rpc_port_num=rpc_port,
            ws_port_num=ws_port,
            engine_rpc_port_num=engine_port,
        )
        logger.info(
            "%s joined network %s at %s%s",
            service_id,
            network_id,
            context.rpc_url,
            " as bootnode" if bootnode is None else "",
        )
        return context


@dataclass(frozen=True, slots=True)
class SimulatedCLLauncher:
    """Starts a simulated beacon node and validator of one client type."""

    client_type: CLClientType
    """Client implementation this launcher starts."""

    def launch(
        self,
        enclave: SimulatedEnclave,
        service_id: ServiceId,
        log_level: ParticipantLogLevel,
        bootnode_context: CLClientContext | None,
        el_client_context: ELClientContext,
        node_keystores: NodeKeystoreDirpaths,
    ) -> CLClientContext:
        """Register the CL service and return its context."""
        bootnode = bootnode_context.enr if bootnode_context is not None else None
        service = enclave.start_service(service_id, self.client_type.value, log_level, bootnode)
        http_port = enclave.port_allocator.allocate_cl_port()

        context = CLClientContext(
            client_name=self.client_type.value,
            enr=_enr(_node_key(enclave, service_id), service.ip_addr),
            ip_addr=service.ip_addr,
            http_port_num=http_port,
        )
        logger.info(
            "%s serving beacon API at %s (engine: %s, keys: %s)",
            service_id,
            context.beacon_http_url,
            el_client_context.engine_rpc_url,
            node_keystores.raw_keys_dirpath,
        )
        return context


def simulated_registries() -> tuple[
    dict[ELClientType, SimulatedELLauncher],
    dict[CLClientType, SimulatedCLLauncher],
]:
    """Registries with a simulated launcher for every known client type."""
    el_launchers = {client_type: SimulatedELLauncher(client_type) for client_type in ELClientType}
    cl_launchers = {client_type: SimulatedCLLauncher(client_type) for client_type in CLClientType}
    return el_launchers, cl_launchers
