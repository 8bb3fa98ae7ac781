"""A launched participant: one paired EL and CL node."""

from __future__ import annotations

from dataclasses import dataclass

from merge_testnet.cl import CLClientContext, CLClientType
from merge_testnet.el import ELClientContext, ELClientType


@dataclass(frozen=True, slots=True)
class Participant:
    """
    One EL client and the CL client paired with it.

    Created once both launches for its index succeed.
    Immutable afterwards; the contexts it holds are never replaced.
    """

    el_client_type: ELClientType
    """Execution layer client implementation."""

    cl_client_type: CLClientType
    """Consensus layer client implementation."""

    el_client_context: ELClientContext
    """Context returned by the EL launch."""

    cl_client_context: CLClientContext
    """Context returned by the CL launch."""

    def get_el_client_context(self) -> ELClientContext:
        """Context of this participant's EL client."""
        return self.el_client_context

    def get_cl_client_context(self) -> CLClientContext:
        """Context of this participant's CL client."""
        return self.cl_client_context
