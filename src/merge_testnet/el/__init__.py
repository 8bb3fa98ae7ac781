"""Execution layer clients."""

from .client_type import ELClientType
from .context import ELClientContext
from .launcher import ELClientLauncher

__all__ = ["ELClientContext", "ELClientLauncher", "ELClientType"]
