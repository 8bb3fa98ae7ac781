"""In-process enclave and launchers for dry runs and tests."""

from .enclave import SimulatedEnclave, SimulatedService
from .launchers import SimulatedCLLauncher, SimulatedELLauncher, simulated_registries
from .port_allocator import PortAllocator

__all__ = [
    "PortAllocator",
    "SimulatedCLLauncher",
    "SimulatedELLauncher",
    "SimulatedEnclave",
    "SimulatedService",
    "simulated_registries",
]
