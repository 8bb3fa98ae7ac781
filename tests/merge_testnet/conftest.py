"""Shared fixtures for participant network tests."""

from __future__ import annotations

import pytest

from merge_testnet.keystores import NodeKeystoreDirpaths
from merge_testnet.participant_network import CLLauncherRegistry, ELLauncherRegistry

from tests.merge_testnet.helpers import CallLog, make_keystores, make_recording_registries


class FakeEnclave:
    """Opaque enclave handle; only its identity matters."""

    def __repr__(self) -> str:
        return "FakeEnclave()"


@pytest.fixture
def enclave() -> FakeEnclave:
    """Provide an opaque enclave handle."""
    return FakeEnclave()


@pytest.fixture
def call_log() -> CallLog:
    """Provide an empty launch call log."""
    return CallLog()


@pytest.fixture
def registries(call_log: CallLog) -> tuple[ELLauncherRegistry, CLLauncherRegistry]:
    """Provide recording registries for every client type."""
    return make_recording_registries(call_log)


@pytest.fixture
def keystores() -> list[NodeKeystoreDirpaths]:
    """Provide keystore assignments for up to eight participants."""
    return make_keystores(8)
