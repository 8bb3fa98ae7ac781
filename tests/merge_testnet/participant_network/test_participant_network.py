"""Tests for incremental participant addition."""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Any

import pytest

from merge_testnet.cl import CLClientType
from merge_testnet.el import ELClientType
from merge_testnet.keystores import NodeKeystoreDirpaths
from merge_testnet.log_levels import ParticipantLogLevel
from merge_testnet.participant_network import (
    CLLauncherRegistry,
    ELLauncherRegistry,
    Participant,
    ParticipantNetwork,
    ParticipantSpec,
)
from merge_testnet.types import (
    KeystoreAssignmentError,
    Layer,
    LaunchFailureError,
    NetworkAlreadyLaunchedError,
    UnknownClientTypeError,
)
from tests.merge_testnet.helpers import CallLog, make_keystores, make_recording_registries

INFO = ParticipantLogLevel.INFO


def make_network(
    enclave: Any,
    registries: tuple[ELLauncherRegistry, CLLauncherRegistry],
    keystores: list[NodeKeystoreDirpaths],
) -> ParticipantNetwork:
    """Build an empty network over the given registries."""
    el_launchers, cl_launchers = registries
    return ParticipantNetwork(
        enclave=enclave,
        network_id="3151908",
        keystore_assignments=keystores,
        el_client_launchers=el_launchers,
        cl_client_launchers=cl_launchers,
    )


def add_default(network: ParticipantNetwork) -> Participant:
    """Add a geth/lighthouse participant."""
    return network.add_participant(ELClientType.GETH, CLClientType.LIGHTHOUSE, INFO)


class TestAddParticipant:
    """Sequential adds."""

    def test_first_add_is_bootnode(
        self,
        enclave: Any,
        registries: tuple[ELLauncherRegistry, CLLauncherRegistry],
        call_log: CallLog,
        keystores: list[NodeKeystoreDirpaths],
    ) -> None:
        """The first participant launches with no bootnode and becomes the boot participant."""
        network = make_network(enclave, registries, keystores)
        assert network.boot_participant is None

        participant = add_default(network)

        assert call_log.by_service("el-client-0").bootnode_context is None
        assert call_log.by_service("cl-client-0").bootnode_context is None
        assert network.boot_participant is participant
        assert network.participants == (participant,)

    def test_later_adds_wire_to_boot_participant(
        self,
        enclave: Any,
        registries: tuple[ELLauncherRegistry, CLLauncherRegistry],
        call_log: CallLog,
        keystores: list[NodeKeystoreDirpaths],
    ) -> None:
        """Adds after the first use the boot contexts and their own EL context."""
        network = make_network(enclave, registries, keystores)
        boot = add_default(network)

        second = network.add_participant(ELClientType.BESU, CLClientType.NIMBUS, INFO)

        el_call = call_log.by_service("el-client-1")
        cl_call = call_log.by_service("cl-client-1")
        assert el_call.bootnode_context is boot.get_el_client_context()
        assert cl_call.bootnode_context is boot.get_cl_client_context()
        assert cl_call.el_client_context is second.get_el_client_context()
        assert cl_call.node_keystores is keystores[1]
        assert second.el_client_type is ELClientType.BESU
        assert second.cl_client_type is CLClientType.NIMBUS
        assert len(network) == 2

    def test_participants_is_a_snapshot(
        self,
        enclave: Any,
        registries: tuple[ELLauncherRegistry, CLLauncherRegistry],
        keystores: list[NodeKeystoreDirpaths],
    ) -> None:
        """A previously read snapshot does not change when the network grows."""
        network = make_network(enclave, registries, keystores)
        add_default(network)
        snapshot = network.participants

        add_default(network)

        assert len(snapshot) == 1
        assert len(network.participants) == 2


class TestAddParticipantFailures:
    """A failed add leaves the network untouched."""

    def test_launch_failure_appends_nothing(
        self,
        enclave: Any,
        call_log: CallLog,
        keystores: list[NodeKeystoreDirpaths],
    ) -> None:
        """A CL failure leaves the length unchanged and the next add reuses the index."""
        failures = {"cl-client-1"}
        network = make_network(
            enclave, make_recording_registries(call_log, fail_on=failures), keystores
        )
        boot = add_default(network)

        with pytest.raises(LaunchFailureError) as exc_info:
            add_default(network)

        assert exc_info.value.participant_index == 1
        assert exc_info.value.layer is Layer.CL
        assert network.participants == (boot,)

        # The lock was released and the index is free again.
        failures.clear()
        retried = add_default(network)
        assert network.participants == (boot, retried)

    def test_unknown_type_appends_nothing(
        self,
        enclave: Any,
        call_log: CallLog,
        keystores: list[NodeKeystoreDirpaths],
    ) -> None:
        """An unregistered client type fails before any launch."""
        el_launchers, cl_launchers = make_recording_registries(call_log)
        del el_launchers[ELClientType.ERIGON]
        network = make_network(enclave, (el_launchers, cl_launchers), keystores)

        with pytest.raises(UnknownClientTypeError) as exc_info:
            network.add_participant(ELClientType.ERIGON, CLClientType.TEKU, INFO)

        assert exc_info.value.participant_index == 0
        assert len(network) == 0
        assert len(call_log) == 0

    def test_keystores_exhausted(
        self,
        enclave: Any,
        registries: tuple[ELLauncherRegistry, CLLauncherRegistry],
        call_log: CallLog,
    ) -> None:
        """Adding past the last keystore assignment fails without launching."""
        network = make_network(enclave, registries, make_keystores(1))
        add_default(network)

        with pytest.raises(KeystoreAssignmentError) as exc_info:
            add_default(network)

        assert exc_info.value.expected == 2
        assert exc_info.value.actual == 1
        assert len(network) == 1
        assert len(call_log) == 2


class TestConcurrentAdds:
    """Adds racing from several threads."""

    def test_second_add_waits_for_first(
        self,
        enclave: Any,
        call_log: CallLog,
        keystores: list[NodeKeystoreDirpaths],
    ) -> None:
        """An add blocked mid-launch holds back a concurrent add entirely."""
        first_launching = threading.Event()
        release_first = threading.Event()
        attempted: list[str] = []

        def on_launch(service_id: str) -> None:
            attempted.append(service_id)
            if service_id == "el-client-0":
                first_launching.set()
                assert release_first.wait(timeout=5.0)

        network = make_network(
            enclave, make_recording_registries(call_log, on_launch=on_launch), keystores
        )

        with ThreadPoolExecutor(max_workers=2) as pool:
            first = pool.submit(add_default, network)
            assert first_launching.wait(timeout=5.0)
            second = pool.submit(add_default, network)

            # The second add cannot read the index while the first holds the lock.
            assert not second.done()
            assert attempted == ["el-client-0"]

            release_first.set()
            first_participant = first.result(timeout=5.0)
            second_participant = second.result(timeout=5.0)

        assert network.participants == (first_participant, second_participant)
        assert attempted == ["el-client-0", "cl-client-0", "el-client-1", "cl-client-1"]

    def test_racing_adds_get_distinct_indices(
        self,
        enclave: Any,
        registries: tuple[ELLauncherRegistry, CLLauncherRegistry],
        call_log: CallLog,
        keystores: list[NodeKeystoreDirpaths],
    ) -> None:
        """Every concurrent add lands on its own index, with no gaps."""
        network = make_network(enclave, registries, keystores)
        num_adds = len(keystores)

        with ThreadPoolExecutor(max_workers=num_adds) as pool:
            futures = [pool.submit(add_default, network) for _ in range(num_adds)]
            results = [future.result(timeout=10.0) for future in futures]

        participants = network.participants
        assert len(participants) == num_adds
        assert set(map(id, results)) == set(map(id, participants))

        el_ids = [call.service_id for call in call_log.for_layer(Layer.EL)]
        assert sorted(el_ids) == sorted(f"el-client-{idx}" for idx in range(num_adds))

        for idx, participant in enumerate(participants):
            assert participant.get_el_client_context() is call_log.by_service(
                f"el-client-{idx}"
            ).result


class TestLaunchAll:
    """Bootstrapping a network object in one pass."""

    def test_launch_all_then_add(
        self,
        enclave: Any,
        registries: tuple[ELLauncherRegistry, CLLauncherRegistry],
        call_log: CallLog,
        keystores: list[NodeKeystoreDirpaths],
    ) -> None:
        """Adds after a bulk launch continue the numbering and keep the same bootnode."""
        network = make_network(enclave, registries, keystores)
        launched = network.launch_all([ParticipantSpec(), ParticipantSpec()], INFO)

        added = add_default(network)

        assert network.participants == (*launched, added)
        el_call = call_log.by_service("el-client-2")
        assert el_call.bootnode_context is launched[0].get_el_client_context()

    def test_launch_all_refuses_running_network(
        self,
        enclave: Any,
        registries: tuple[ELLauncherRegistry, CLLauncherRegistry],
        keystores: list[NodeKeystoreDirpaths],
    ) -> None:
        """A network with participants cannot be bootstrapped again."""
        network = make_network(enclave, registries, keystores)
        add_default(network)

        with pytest.raises(NetworkAlreadyLaunchedError) as exc_info:
            network.launch_all([ParticipantSpec()], INFO)

        assert exc_info.value.num_participants == 1
        assert len(network) == 1

    def test_failed_launch_all_installs_nothing(
        self,
        enclave: Any,
        call_log: CallLog,
        keystores: list[NodeKeystoreDirpaths],
    ) -> None:
        """Participants launched before a failure are not installed."""
        network = make_network(
            enclave, make_recording_registries(call_log, fail_on={"el-client-1"}), keystores
        )

        with pytest.raises(LaunchFailureError):
            network.launch_all([ParticipantSpec(), ParticipantSpec()], INFO)

        assert len(network) == 0
