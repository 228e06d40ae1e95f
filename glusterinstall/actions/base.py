"""
Base Action class for per-node preparation steps
"""
import logging
from typing import Optional, TYPE_CHECKING
from glusterinstall.cli import CommandWrapper
if TYPE_CHECKING:
    from glusterinstall.services.remote import RemoteExecutor, RemoteResult
    from glusterinstall.libs.config import InstallConfig
    from glusterinstall.libs.hosts import HostEntry, HostRegistry
logger = logging.getLogger(__name__)


class Action:
    """Base class for node preparation actions"""
    description: str = ""
    # name of the FeaturesConfig flag gating this action, None means always run
    feature: Optional[str] = None

    def __init__(
        self,
        executor: Optional["RemoteExecutor"] = None,
        host: Optional["HostEntry"] = None,
        registry: Optional["HostRegistry"] = None,
        cfg: Optional["InstallConfig"] = None,
    ):
        """
        Initialize action with its target node
        Args:
            executor: Remote executor for running commands
            host: Node being prepared
            registry: Every node of the deployment
            cfg: Installer configuration
        """
        self.executor = executor
        self.host = host
        self.registry = registry
        self.cfg = cfg
        self.reboot_required = False

    def run(self, command: str, timeout: Optional[int] = None) -> "RemoteResult":
        """Run command on the node, logging its output at debug."""
        result = self.executor.run(self.host.ip, command, timeout=timeout)
        if result.output:
            logger.debug("   %s: %s", self.host.hostname, result.output)
        return result

    def run_checked(self, command: str, what: str, timeout: Optional[int] = None) -> bool:
        """
        Run command and log a parsed error message when it fails
        Args:
            command: Command to run
            what: Short description used in the error message
            timeout: Optional command timeout
        Returns:
            True if the command succeeded
        """
        result = self.run(command, timeout=timeout)
        if result.ok:
            return True
        parsed = CommandWrapper.parse_result(result.output, result.exit_code)
        if parsed.failed:
            logger.error(
                "%s: %s failed (%s): %s",
                self.host.hostname,
                what,
                parsed.error_type.value,
                parsed.error_message or f"exit code {result.exit_code}",
            )
            return False
        logger.debug("   %s: %s (%s)", self.host.hostname, what, parsed.error_message)
        return True

    def execute(self) -> bool:
        """
        Execute the action
        Returns:
            True if successful, False otherwise
        """
        raise NotImplementedError("Subclasses must implement execute()")
