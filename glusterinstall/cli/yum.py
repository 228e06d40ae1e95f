"""
Yum/rpm command wrapper with fluent API
"""
import logging
import shlex
from typing import List, Optional
from .base import CommandWrapper
logger = logging.getLogger(__name__)

YUM_REPOS_DIR = "/etc/yum.repos.d"


class Yum(CommandWrapper):
    """Wrapper for yum commands with fluent API - generates command strings"""
    def __init__(self):
        """Initialize with default settings"""
        self._enable_repos: List[str] = []

    def enable_repo(self, repo_id: str) -> "Yum":
        """Enable an extra repository for this command (returns self for chaining)."""
        self._enable_repos.append(repo_id)
        return self

    def _flags(self) -> List[str]:
        flags = ["-y"]
        flags.extend(f"--enablerepo={shlex.quote(repo)}" for repo in self._enable_repos)
        return flags

    def install(self, packages: List[str]) -> str:
        """Generate command to install packages"""
        if not packages:
            raise ValueError("At least one package must be given")
        parts = ["yum", *self._flags(), "install", *(shlex.quote(p) for p in packages)]
        return " ".join(parts) + " 2>&1"

    @staticmethod
    def is_installed_check(package: str) -> str:
        """Generate command to check if package is installed"""
        return f"rpm -q {shlex.quote(package)} >/dev/null 2>&1 && echo installed || echo not_installed"

    @staticmethod
    def add_repo(repo_id: str, baseurl: str, name: Optional[str] = None, gpgcheck: bool = False) -> str:
        """Generate command that writes a .repo file, disabled unless enabled per command"""
        content = "\\n".join(
            [
                f"[{repo_id}]",
                f"name={name or repo_id}",
                f"baseurl={baseurl}",
                "enabled=0",
                f"gpgcheck={1 if gpgcheck else 0}",
            ]
        ) + "\\n"
        path = f"{YUM_REPOS_DIR}/{repo_id}.repo"
        return f"printf {shlex.quote(content)} > {shlex.quote(path)} 2>&1"

    @staticmethod
    def parse_is_installed(output: Optional[str]) -> bool:
        """Parse output to check if package is installed"""
        if not output:
            return False
        return output.strip().splitlines()[-1].strip() == "installed"
