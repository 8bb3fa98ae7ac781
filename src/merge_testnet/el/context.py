"""Connection context of a launched execution layer client."""

from __future__ import annotations

from merge_testnet.types import StrictBaseModel


class ELClientContext(StrictBaseModel):
    """
    Everything later launches need to reach a running EL client.

    Returned by an EL launcher and never modified afterwards.
    Peers use ``enode`` / ``enr`` to discover the node; the paired CL client
    drives it through the engine API.
    """

    client_name: str
    """Client implementation name as reported by the node, e.g. ``geth``."""

    enode: str
    """devp2p enode URL used by other EL clients to peer with this one."""

    enr: str
    """Ethereum node record of the node."""

    ip_addr: str
    """Address the node is reachable at inside the enclave."""

    rpc_port_num: int
    """JSON-RPC HTTP port."""

    ws_port_num: int
    """JSON-RPC websocket port."""

    engine_rpc_port_num: int
    """Authenticated engine API port consumed by the CL client."""

    @property
    def rpc_url(self) -> str:
        """HTTP JSON-RPC endpoint."""
        return f"http://{self.ip_addr}:{self.rpc_port_num}"

    @property
    def ws_url(self) -> str:
        """Websocket JSON-RPC endpoint."""
        return f"ws://{self.ip_addr}:{self.ws_port_num}"

    @property
    def engine_rpc_url(self) -> str:
        """Engine API endpoint."""
        return f"http://{self.ip_addr}:{self.engine_rpc_port_num}"
