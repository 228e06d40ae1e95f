"""
Helpers for the control node itself: its addresses, operator prompts and
local commands
"""
import os
import socket
import subprocess
from typing import Callable, Optional, Set
from .logger import get_logger
logger = get_logger(__name__)

YES_ANSWERS = ("y", "yes")


def local_addresses(override: Optional[str] = None) -> Set[str]:
    """
    Return the IP addresses of the control node
    Args:
        override: Address from the configuration, used instead of lookup
    Returns:
        Set of IPv4 addresses
    """
    if override:
        return {override}
    addresses = {"127.0.0.1"}
    hostname = socket.gethostname()
    try:
        _, _, resolved = socket.gethostbyname_ex(hostname)
        addresses.update(resolved)
    except OSError as exc:
        logger.debug("Cannot resolve local hostname %s: %s", hostname, exc)
    return addresses


def is_root() -> bool:
    """True when running with root privileges"""
    return os.geteuid() == 0


def confirm(prompt: str, assume_yes: bool = False, ask: Callable[[str], str] = input) -> bool:
    """
    Ask the operator a yes/no question, defaulting to no
    Args:
        prompt: Question text, e.g. "Continue? [y|N] "
        assume_yes: Skip the prompt and answer yes
        ask: Input function, replaced by tests
    """
    if assume_yes:
        return True
    try:
        answer = ask(prompt)
    except EOFError:
        return False
    return answer.strip().lower() in YES_ANSWERS


def reboot_local_node():
    """Reboot the control node."""
    logger.warning("Rebooting %s now...", socket.gethostname())
    subprocess.run(["reboot"], check=True)
