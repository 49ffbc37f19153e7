# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Find a working SSH port for a host, asking the operator once if needed.

States:

    IDLE -> ATTEMPTING -> SUCCEEDED
                       -> NEEDS_NEW_PORT -> ATTEMPTING -> SUCCEEDED
                                                       -> GAVE_UP

The first attempt uses the remembered port (or the default). If ssh reports a
connection failure the operator is asked for a port and exactly one more
attempt is made. A port is written to the store only when that second attempt
succeeds. A launch error or an aborted prompt ends in GAVE_UP straight away.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Union

import questionary

from vmhop.core.connection import ConnectionOutcome
from vmhop.core.port_store import PortStore, parse_port
from vmhop.models.server import HostTarget
from vmhop.paths import SSHDefaults
from vmhop.utils.logging import get_logger

logger = get_logger(__name__)

MAX_ATTEMPTS = 2

PORT_INPUT_ERROR = "Please enter a valid port number (1-65535)"

ConnectFn = Callable[[HostTarget, int], ConnectionOutcome]
PromptFn = Callable[[int], Optional[int]]


class NegotiationState(Enum):
    IDLE = "idle"
    ATTEMPTING = "attempting"
    NEEDS_NEW_PORT = "needs_new_port"
    SUCCEEDED = "succeeded"
    GAVE_UP = "gave_up"


TERMINAL_STATES = frozenset({NegotiationState.SUCCEEDED, NegotiationState.GAVE_UP})


@dataclass
class NegotiationSession:
    """Progress of one negotiation."""

    target: HostTarget
    port: Optional[int] = None
    state: NegotiationState = NegotiationState.IDLE
    attempts: int = 0
    ports_tried: List[int] = field(default_factory=list)
    outcome: Optional[ConnectionOutcome] = None
    saved: bool = False

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def succeeded(self) -> bool:
        return self.state is NegotiationState.SUCCEEDED


def validate_port_input(text: str) -> Union[bool, str]:
    """questionary validator: True for 1-65535, otherwise the error text."""
    if parse_port(text) is None:
        return PORT_INPUT_ERROR
    return True


def prompt_for_port(default: int = SSHDefaults.PORT) -> Optional[int]:
    """Ask for an SSH port until a valid one is entered.

    Returns:
        The port, or None if the operator aborted (Ctrl+C / EOF)
    """
    while True:
        answer = questionary.text(
            "Enter the SSH port number:",
            default=str(default),
            validate=validate_port_input,
        ).ask()

        if answer is None:
            return None

        port = parse_port(answer)
        if port is not None:
            return port
        logger.warning(PORT_INPUT_ERROR)


class PortNegotiator:
    """Drives attempts for one host and persists a corrected port.

    Args:
        store: Port store used for the starting port and for saving
        connect: Runs one attempt for (target, port)
        prompt: Asks the operator for a replacement port
        default_port: Starting port when the store has no entry
    """

    def __init__(
        self,
        store: PortStore,
        connect: ConnectFn,
        prompt: PromptFn = prompt_for_port,
        default_port: int = SSHDefaults.PORT,
    ):
        self.store = store
        self.connect = connect
        self.prompt = prompt
        self.default_port = default_port

    def _attempt(self, session: NegotiationSession, port: int) -> ConnectionOutcome:
        session.state = NegotiationState.ATTEMPTING
        session.port = port
        session.attempts += 1
        session.ports_tried.append(port)
        logger.debug(
            f"{session.target.host}: attempt {session.attempts}/{MAX_ATTEMPTS} on port {port}",
            console_output=False,
        )
        outcome = self.connect(session.target, port)
        session.outcome = outcome
        return outcome

    def _give_up(self, session: NegotiationSession, message: str) -> NegotiationSession:
        session.state = NegotiationState.GAVE_UP
        logger.error(message)
        return session

    def run(self, target: HostTarget) -> NegotiationSession:
        """Run the negotiation to a terminal state."""
        session = NegotiationSession(target=target)

        remembered = self.store.get(target.host)
        start_port = remembered if remembered is not None else self.default_port
        if remembered is not None:
            logger.debug(f"Using remembered port {remembered} for {target.host}")

        outcome = self._attempt(session, start_port)
        if outcome is ConnectionOutcome.SUCCESS:
            session.state = NegotiationState.SUCCEEDED
            return session
        if outcome is ConnectionOutcome.LAUNCH_ERROR:
            return self._give_up(session, f"Could not start ssh for {target.host}")

        session.state = NegotiationState.NEEDS_NEW_PORT
        logger.warning("Connection failed. The server might be using a different port.")

        new_port = self.prompt(self.default_port)
        if new_port is None:
            return self._give_up(session, "No port entered, giving up")

        outcome = self._attempt(session, new_port)
        if outcome is ConnectionOutcome.SUCCESS:
            session.state = NegotiationState.SUCCEEDED
            session.saved = self.store.save(target.host, new_port)
            if session.saved:
                logger.success(
                    f"Port {new_port} has been saved for future connections to {target.host}"
                )
            return session
        if outcome is ConnectionOutcome.LAUNCH_ERROR:
            return self._give_up(session, f"Could not start ssh for {target.host}")

        return self._give_up(
            session,
            f"Could not connect to {target.destination} on port {new_port}. "
            "Run vmhop again to try another port.",
        )
