"""
Exception hierarchy for installer runs

Every fatal failure carries the process exit code that identifies where the
run stopped.
"""
from typing import Iterable, List, Optional

EXIT_OK = 0
EXIT_VALIDATION = 1
EXIT_POOL_NOT_FORMED = 3
EXIT_VOLUME_NOT_CREATED = 5
EXIT_VOLUME_NOT_STARTED = 7
# brick and mount setup, one code per step
EXIT_MKFS = 9
EXIT_MKDIR_BRICK = 11
EXIT_MKDIR_VOL_MNT = 13
EXIT_FSTAB = 15
EXIT_MOUNT_BRICK = 17
EXIT_MKDIR_SCRATCH = 19
EXIT_MOUNT_VOL = 21
EXIT_MKDIR_SYSTEM = 23
EXIT_GROUPADD = 25
EXIT_USERADD = 27
EXIT_CHOWN = 30
EXIT_CHMOD = 33
EXIT_PREP_FAILED = 40
EXIT_REBOOT_REQUIRED = 99


class InstallError(RuntimeError):
    """Raised when an installer run has to stop."""
    exit_code: int = 1

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ValidationError(InstallError):
    """Input or connectivity problems, reported together before any remote change."""
    exit_code = EXIT_VALIDATION

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__(self.format_errors(self.errors))

    @staticmethod
    def format_errors(errors: List[str]) -> str:
        """Render errors as the numbered report shown to the operator."""
        plural = "" if len(errors) == 1 else "s"
        lines = [f"{len(errors)} error{plural}:"]
        lines.extend(f" * {err}" for err in errors)
        return "\n".join(lines)


class RemoteStepError(InstallError):
    """A remote step exited non-zero."""

    def __init__(self, host: str, step_name: str, output: str, exit_code: int):
        self.host = host
        self.step_name = step_name
        self.output = output
        message = f"{host}: {step_name}"
        if output:
            message += f": {output}"
        super().__init__(message, exit_code=exit_code)


class ConvergenceTimeout(InstallError):
    """A cluster operation did not become observable within the poll budget."""


class PrepError(InstallError):
    """A per-node prep action failed."""
    exit_code = EXIT_PREP_FAILED
