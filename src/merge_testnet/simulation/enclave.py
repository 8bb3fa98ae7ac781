"""In-process enclave that records the services started in it."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field

from merge_testnet.log_levels import ParticipantLogLevel
from merge_testnet.types import DuplicateServiceError, ServiceId

from .port_allocator import PortAllocator

logger = logging.getLogger(__name__)

SUBNET_PREFIX = "172.16.0."
"""Private subnet simulated services get addresses from."""

FIRST_HOST_OCTET = 2
"""Host part of the first service address; .1 is the gateway."""


@dataclass(frozen=True, slots=True)
class SimulatedService:
    """A service started in a simulated enclave."""

    service_id: ServiceId
    """Identifier the service was started under."""

    client_name: str
    """Client implementation running in the service."""

    ip_addr: str
    """Address assigned to the service."""

    log_level: ParticipantLogLevel
    """Log level the client was started with."""

    bootnode: str | None
    """Address the client bootstraps from. None for bootnodes."""


@dataclass(slots=True)
class SimulatedEnclave:
    """
    Stand-in for an orchestration platform enclave.

    Hands out addresses and ports, and refuses to start two services
    under the same identifier.
    """

    name: str
    """Enclave name, used to derive node identities."""

    port_allocator: PortAllocator = field(default_factory=PortAllocator)
    """Ports for the services started here."""

    services: dict[ServiceId, SimulatedService] = field(default_factory=dict)
    """Started services by identifier, in start order."""

    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    """Guards ``services``."""

    def start_service(
        self,
        service_id: ServiceId,
        client_name: str,
        log_level: ParticipantLogLevel,
        bootnode: str | None,
    ) -> SimulatedService:
        """
        Register a new service and assign it an address.

        Raises:
            DuplicateServiceError: A service with this identifier already exists.
        """
        with self._lock:
            if service_id in self.services:
                raise DuplicateServiceError(service_id)

            ip_addr = f"{SUBNET_PREFIX}{FIRST_HOST_OCTET + len(self.services)}"
            service = SimulatedService(
                service_id=service_id,
                client_name=client_name,
                ip_addr=ip_addr,
                log_level=log_level,
                bootnode=bootnode,
            )
            self.services[service_id] = service

        logger.debug("Started service %s (%s) at %s", service_id, client_name, ip_addr)
        return service
