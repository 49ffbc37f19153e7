# Copyright (c) 2025 The vmhop authors
# SPDX-License-Identifier: MIT
# See LICENSE file in the project root for full license information.

"""Entry point for connecting to one selected host."""

from typing import Optional

from vmhop.core.connection import ConnectionOutcome, attempt_connection
from vmhop.core.negotiation import (
    ConnectFn,
    NegotiationSession,
    PortNegotiator,
    PromptFn,
    prompt_for_port,
)
from vmhop.core.port_store import PortStore
from vmhop.host_config import HostConfig
from vmhop.models.server import HostTarget
from vmhop.utils.logging import get_logger

logger = get_logger(__name__)


def make_connect(config: HostConfig) -> ConnectFn:
    """Bind the configured ssh binary and options to attempt_connection."""

    def connect(target: HostTarget, port: int) -> ConnectionOutcome:
        return attempt_connection(
            target.host,
            port,
            target.user,
            ssh_binary=config.ssh_binary,
            extra_args=config.ssh_extra_args,
        )

    return connect


def run_session(
    target: HostTarget,
    config: HostConfig,
    store: Optional[PortStore] = None,
    connect: Optional[ConnectFn] = None,
    prompt: Optional[PromptFn] = None,
) -> Optional[NegotiationSession]:
    """Connect to target, negotiating the port if the first try fails.

    Never raises: unexpected errors are logged and shown, and None is returned.

    Returns:
        The finished NegotiationSession, or None if it could not run
    """
    try:
        negotiator = PortNegotiator(
            store=store or PortStore(config.port_store_path),
            connect=connect or make_connect(config),
            prompt=prompt or prompt_for_port,
            default_port=config.default_port,
        )
        session = negotiator.run(target)
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return None
    except Exception as e:
        logger.error(f"SSH session to {target.host} failed", exc=e)
        return None

    logger.debug(
        f"Session for {target.host} finished: state={session.state.value} "
        f"attempts={session.attempts} ports={session.ports_tried} saved={session.saved}",
        console_output=False,
    )
    return session
