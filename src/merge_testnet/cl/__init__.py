"""Consensus layer clients."""

from .client_type import CLClientType
from .context import CLClientContext
from .launcher import CLClientLauncher

__all__ = ["CLClientContext", "CLClientLauncher", "CLClientType"]
