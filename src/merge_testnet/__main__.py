"""
Participant network CLI entry point.

Plan and dry-run a participant network: every client is launched into an
in-process simulated enclave, and the resulting participant contexts are
printed in launch order.

Usage::

    python -m merge_testnet --config network.yaml
    python -m merge_testnet --config network.yaml --keystores keystores.yaml -v

Options:
    --config     Path to network config YAML file (required)
    --keystores  Path to keystore assignments YAML (overrides the config file)
    --enclave    Enclave name (default: merge-testnet)
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from merge_testnet.config import NetworkConfig
from merge_testnet.keystores import NodeKeystoreDirpaths, load_keystore_assignments
from merge_testnet.participant_network import (
    BOOT_PARTICIPANT_INDEX,
    Participant,
    launch_participant_network,
)
from merge_testnet.simulation import SimulatedEnclave, simulated_registries
from merge_testnet.types import NetworkLaunchError

DEFAULT_ENCLAVE_NAME = "merge-testnet"

logger = logging.getLogger(__name__)


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(verbose: bool = False, no_color: bool = False) -> None:
    """Configure logging with optional colors."""
    level = logging.DEBUG if verbose else logging.INFO

    handler = logging.StreamHandler()
    handler.setLevel(level)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")

    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)


def default_keystore_assignments(num_participants: int) -> list[NodeKeystoreDirpaths]:
    """
    Placeholder keystore locations when no assignments file is given.

    The simulated launchers only record the paths, so a dry run does not
    need generated keys.
    """
    return [
        NodeKeystoreDirpaths(
            raw_keys_dirpath=f"/validator-keys/node-{idx}/keys",
            raw_secrets_dirpath=f"/validator-keys/node-{idx}/secrets",
        )
        for idx in range(num_participants)
    ]


def format_participant(index: int, participant: Participant) -> str:
    """One summary line for a launched participant."""
    el_ctx = participant.get_el_client_context()
    cl_ctx = participant.get_cl_client_context()
    role = " (bootnode)" if index == BOOT_PARTICIPANT_INDEX else ""
    return (
        f"participant {index}{role}: "
        f"{participant.el_client_type.value} rpc={el_ctx.rpc_url} | "
        f"{participant.cl_client_type.value} beacon={cl_ctx.beacon_http_url}"
    )


def run(config_path: Path, keystores_path: Path | None, enclave_name: str) -> int:
    """
    Load the config and launch the network into a simulated enclave.

    Returns:
        Process exit code.
    """
    try:
        config = NetworkConfig.from_yaml_file(config_path)
        specs = config.participant_specs()

        keystores_path = keystores_path or config.keystores
        if keystores_path is not None:
            assignments = load_keystore_assignments(keystores_path)
        else:
            assignments = default_keystore_assignments(len(specs))
    except (OSError, yaml.YAMLError, ValidationError) as e:
        logger.error("Invalid configuration: %s", e)
        return 2

    el_launchers, cl_launchers = simulated_registries()
    enclave = SimulatedEnclave(name=enclave_name)

    logger.info(
        "Launching %d participants on network %s in enclave %s",
        len(specs),
        config.network_id,
        enclave_name,
    )
    try:
        participants = launch_participant_network(
            enclave,
            config.network_id,
            el_launchers,
            cl_launchers,
            specs,
            assignments,
            config.effective_log_level,
        )
    except NetworkLaunchError as e:
        logger.error("Launch failed: %s", e)
        if e.__cause__ is not None:
            logger.error("Caused by: %s", e.__cause__)
        return 1

    for idx, participant in enumerate(participants):
        print(format_participant(idx, participant))
    return 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Participant network launcher (dry run)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        required=True,
        type=Path,
        help="Path to network config YAML file",
    )
    parser.add_argument(
        "--keystores",
        type=Path,
        default=None,
        help="Path to keystore assignments YAML file (overrides the config file)",
    )
    parser.add_argument(
        "--enclave",
        default=DEFAULT_ENCLAVE_NAME,
        help=f"Enclave name (default: {DEFAULT_ENCLAVE_NAME})",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored logging output",
    )

    args = parser.parse_args()

    setup_logging(args.verbose, args.no_color)
    sys.exit(run(args.config, args.keystores, args.enclave))


if __name__ == "__main__":
    main()
