"""
Services for remote execution
"""
from .ssh import SSHService
from .remote import RemoteExecutor, RemoteResult, SSHExecutor
__all__ = ["SSHService", "RemoteExecutor", "RemoteResult", "SSHExecutor"]
