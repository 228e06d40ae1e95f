"""
File and filesystem command wrappers with fluent API
"""
import shlex
from typing import Optional
from .base import CommandWrapper

_ERE_SPECIAL = set(".[]()*+?{}|^$\\")


def _ere_escape(value: str) -> str:
    return "".join("\\" + char if char in _ERE_SPECIAL else char for char in value)


class FileOps(CommandWrapper):
    """Wrapper for common file operations with fluent API"""
    def __init__(self):
        """Initialize with default settings"""
        self._recursive: bool = False

    def recursive(self, value: bool = True) -> "FileOps":
        """Set recursive mode (returns self for chaining)."""
        self._recursive = value
        return self

    def _redirect(self) -> str:
        return " 2>&1"

    def mkdir(self, path: str, parents: bool = True) -> str:
        """Generate command to create directory."""
        flag = "-p " if parents else ""
        return f"mkdir {flag}{shlex.quote(path)}{self._redirect()}"

    def chmod(self, path: str, mode: str) -> str:
        """Generate command to change permissions on path."""
        flag = "-R " if self._recursive else ""
        return f"chmod {flag}{mode} {shlex.quote(path)}{self._redirect()}"

    def chown(self, path: str, owner: str, group: Optional[str] = None) -> str:
        """Generate command to change ownership."""
        owner_spec = owner if group is None else f"{owner}:{group}"
        flag = "-R " if self._recursive else ""
        return f"chown {flag}{shlex.quote(owner_spec)} {shlex.quote(path)}{self._redirect()}"

    def remove(self, path: str) -> str:
        """Generate rm command."""
        flag = "-rf " if self._recursive else "-f "
        return f"rm {flag}{shlex.quote(path)}{self._redirect()}"

    def append_if_missing(self, path: str, line: str, match: Optional[str] = None) -> str:
        """
        Generate command that appends a line unless the file already holds it
        Args:
            path: Target file, created when absent
            line: Line to append
            match: Field searched for instead of the whole line; it must appear
                as a whitespace separated word, so node1 does not match node10
        """
        quoted_path = shlex.quote(path)
        if match is None:
            check = f"grep -qsxF -- {shlex.quote(line)} {quoted_path}"
        else:
            pattern = f"(^|[[:space:]]){_ere_escape(match)}([[:space:]]|$)"
            check = f"grep -qsE -- {shlex.quote(pattern)} {quoted_path}"
        return (
            f"{check} || "
            f"echo {shlex.quote(line)} >> {quoted_path}{self._redirect()}"
        )

    def exists(self, path: str) -> str:
        """Generate command to check if a path exists."""
        return f"test -e {shlex.quote(path)} && echo exists || echo not_found"

    @staticmethod
    def parse_exists(output: Optional[str]) -> bool:
        """Parse output of exists."""
        if not output:
            return False
        return output.strip().splitlines()[-1].strip() == "exists"
