"""Declaration of a participant to launch."""

from __future__ import annotations

from merge_testnet.cl import CLClientType
from merge_testnet.el import ELClientType
from merge_testnet.types import StrictBaseModel


class ParticipantSpec(StrictBaseModel):
    """
    Which client implementations one future participant runs.

    Specs are supplied as an ordered sequence.
    The spec at index 0 always describes the boot participant.
    """

    el_client_type: ELClientType = ELClientType.GETH
    """Execution layer client to launch."""

    cl_client_type: CLClientType = CLClientType.LIGHTHOUSE
    """Consensus layer client to launch."""
