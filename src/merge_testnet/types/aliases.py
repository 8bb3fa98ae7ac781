"""Opaque handles passed through the orchestrator untouched."""

from typing import Any, NewType

EnclaveContext = Any
"""Handle to the isolated environment services are started in. Never inspected here."""

ServiceId = NewType("ServiceId", str)
"""Name under which the platform starts a client, e.g. ``el-client-0``."""
