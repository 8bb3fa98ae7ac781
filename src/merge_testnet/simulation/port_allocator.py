"""
Port allocation for simulated clients.

Provides thread-safe allocation of network ports.
Each launched client gets ports no other client in the enclave uses.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

BASE_EL_RPC_PORT = 8545
"""Starting port for EL JSON-RPC servers."""

BASE_EL_WS_PORT = 9545
"""Starting port for EL websocket servers."""

BASE_EL_ENGINE_PORT = 8551
"""Starting port for EL engine API servers."""

BASE_CL_HTTP_PORT = 4000
"""Starting port for beacon API servers."""

PORT_STRIDE = 10
"""Gap between consecutive allocations, keeps the EL port ranges apart."""


@dataclass(slots=True)
class PortAllocator:
    """
    Thread-safe port allocator for simulated clients.

    EL and CL clients draw from separate counters.
    """

    _el_counter: int = field(default=0)
    """Number of EL port sets handed out."""

    _cl_counter: int = field(default=0)
    """Number of CL ports handed out."""

    _lock: threading.Lock = field(default_factory=threading.Lock)
    """Thread lock for concurrent access."""

    def allocate_el_ports(self) -> tuple[int, int, int]:
        """
        Allocate the ports of one EL client.

        Returns:
            Tuple of (rpc_port, ws_port, engine_port).
        """
        with self._lock:
            offset = self._el_counter * PORT_STRIDE
            self._el_counter += 1
            return (
                BASE_EL_RPC_PORT + offset,
                BASE_EL_WS_PORT + offset,
                BASE_EL_ENGINE_PORT + offset,
            )

    def allocate_cl_port(self) -> int:
        """
        Allocate the beacon API port of one CL client.

        Returns:
            Unique HTTP port number.
        """
        with self._lock:
            port = BASE_CL_HTTP_PORT + self._cl_counter
            self._cl_counter += 1
            return port

    def reset(self) -> None:
        """Reset counters to initial state."""
        with self._lock:
            self._el_counter = 0
            self._cl_counter = 0
