"""Connection context of a launched consensus layer client."""

from __future__ import annotations

from merge_testnet.types import StrictBaseModel


class CLClientContext(StrictBaseModel):
    """Reachability of a running beacon node and its validator."""

    client_name: str
    """Client implementation name, e.g. ``lighthouse``."""

    enr: str
    """Ethereum node record other beacon nodes bootstrap discovery from."""

    ip_addr: str
    """Address the beacon node is reachable at inside the enclave."""

    http_port_num: int
    """Beacon API HTTP port."""

    @property
    def beacon_http_url(self) -> str:
        """Beacon API endpoint."""
        return f"http://{self.ip_addr}:{self.http_port_num}"
