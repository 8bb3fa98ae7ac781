"""Test helpers for merge_testnet unit tests."""

from .builders import make_cl_context, make_el_context, make_keystores
from .mocks import (
    CallLog,
    LaunchCall,
    LauncherFailure,
    RecordingCLLauncher,
    RecordingELLauncher,
    make_recording_registries,
)

__all__ = [
    "CallLog",
    "LaunchCall",
    "LauncherFailure",
    "RecordingCLLauncher",
    "RecordingELLauncher",
    "make_cl_context",
    "make_el_context",
    "make_keystores",
    "make_recording_registries",
]
