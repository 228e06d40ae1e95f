"""
Remote command dispatcher - runs ordered steps on one host and reports which
step failed
"""
from dataclasses import dataclass
from typing import Optional, Sequence
from glusterinstall.errors import RemoteStepError
from glusterinstall.libs.logger import get_logger
from glusterinstall.services.remote import RemoteExecutor
logger = get_logger(__name__)


@dataclass(frozen=True)
class RemoteStep:
    """One named remote command and the exit code that identifies it when it fails"""
    name: str
    command: str
    exit_code: int = 1
    timeout: Optional[int] = None


@dataclass
class DispatchResult:
    """Combined outcome of a step sequence on one host"""
    host: str
    output: str
    exit_code: int

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class Dispatcher:
    """Runs step sequences synchronously, no retries"""

    def __init__(self, executor: RemoteExecutor):
        self.executor = executor

    def run(self, host: str, steps: Sequence[RemoteStep], fatal: bool = True) -> DispatchResult:
        """
        Run steps in order on host
        Args:
            host: Address the executor connects to
            steps: Steps to run
            fatal: Stop at the first failing step and raise; otherwise log and go on
        Returns:
            DispatchResult with the collected output and the last non-zero step code
        Raises:
            RemoteStepError: a step failed and fatal is set
        """
        outputs = []
        exit_code = 0
        for step in steps:
            logger.debug("   %s: %s", host, step.name)
            result = self.executor.run(host, step.command, timeout=step.timeout)
            if result.output:
                logger.debug("   %s", result.output)
                outputs.append(result.output)
            if result.ok:
                continue
            if fatal:
                raise RemoteStepError(host, step.name, result.output, step.exit_code)
            logger.warning("   %s: %s failed (exit %s): %s", host, step.name, result.exit_code, result.output)
            exit_code = step.exit_code
        return DispatchResult(host=host, output="\n".join(outputs), exit_code=exit_code)
