"""
SSH Service - manages one paramiko connection and runs commands over it
"""
import logging
import socket
import time
from typing import Optional, Tuple
import paramiko
from glusterinstall.libs.config import SSHConfig
logger = logging.getLogger(__name__)


class SSHService:
    """Service that manages an SSH connection and command execution"""
    def __init__(self, host: str, ssh_config: SSHConfig):
        """
        Initialize SSH service
        Args:
            host: SSH host (format: user@host or just host)
            ssh_config: SSH configuration
        """
        self.host = host
        self.ssh_config = ssh_config
        self._client: Optional[paramiko.SSHClient] = None
        self._connected = False
        if "@" in host:
            self.username, self.hostname = host.split("@", 1)
        else:
            self.username = ssh_config.default_username
            self.hostname = host

    def connect(self) -> bool:
        """
        Establish SSH connection, key based only
        Returns:
            True if connection successful, False otherwise
        """
        if self.is_connected():
            return True
        self._client = None
        self._connected = False
        client = paramiko.SSHClient()
        # first contact with a freshly installed node must not prompt
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        connect_kwargs = {
            "hostname": self.hostname,
            "port": self.ssh_config.port,
            "username": self.username,
            "timeout": self.ssh_config.connect_timeout,
            "banner_timeout": self.ssh_config.connect_timeout,
            "auth_timeout": self.ssh_config.connect_timeout,
            "look_for_keys": self.ssh_config.look_for_keys,
            "allow_agent": self.ssh_config.allow_agent,
        }
        if self.ssh_config.key_filename:
            connect_kwargs["key_filename"] = self.ssh_config.key_filename
        try:
            client.connect(**connect_kwargs)
        except paramiko.AuthenticationException as exc:
            logger.debug("SSH authentication failed to %s: %s", self.host, exc)
            client.close()
            return False
        except (paramiko.SSHException, socket.error) as exc:
            logger.debug("SSH connection error to %s: %s", self.host, exc)
            client.close()
            return False
        self._client = client
        self._connected = True
        logger.debug("SSH connection established to %s@%s", self.username, self.hostname)
        return True

    def disconnect(self):
        """Close SSH connection"""
        if self._client:
            try:
                self._client.close()
            except (paramiko.SSHException, OSError) as exc:
                logger.debug("Error closing SSH connection to %s: %s", self.host, exc)
            finally:
                self._client = None
                self._connected = False
            logger.debug("SSH connection closed to %s", self.host)

    def is_connected(self) -> bool:
        """Check if SSH connection is active"""
        if not self._connected or not self._client:
            return False
        transport = self._client.get_transport()
        return transport is not None and transport.is_active()

    def execute(self, command: str, timeout: Optional[int] = None) -> Tuple[Optional[str], Optional[int]]:
        """
        Execute command via SSH connection and capture its output
        Args:
            command: Command to execute
            timeout: Seconds without output before the command is abandoned
        Returns:
            Tuple of (output, exit_code); (None, None) when the connection or
            the command timed out or failed at the transport level
        """
        if not self.connect():
            logger.debug("Cannot execute command: SSH connection to %s not available", self.host)
            return None, None
        logger.debug("Running on %s: %s", self.hostname, command)
        exec_timeout = timeout if timeout else self.ssh_config.default_exec_timeout
        try:
            _, stdout, stderr = self._client.exec_command(command, timeout=exec_timeout)
            channel = stdout.channel
            output_chunks = []
            error_chunks = []
            last_output_time = time.time()
            while not channel.exit_status_ready() or channel.recv_ready() or channel.recv_stderr_ready():
                received_output = False
                if channel.recv_ready():
                    data = channel.recv(self.ssh_config.read_buffer_size).decode("utf-8", errors="replace")
                    if data:
                        received_output = True
                        output_chunks.append(data)
                        if self.ssh_config.verbose:
                            logger.debug(data.rstrip())
                if channel.recv_stderr_ready():
                    data = channel.recv_stderr(self.ssh_config.read_buffer_size).decode("utf-8", errors="replace")
                    if data:
                        received_output = True
                        error_chunks.append(data)
                        if self.ssh_config.verbose:
                            logger.debug(data.rstrip())
                if received_output:
                    last_output_time = time.time()
                    continue
                if time.time() - last_output_time > exec_timeout:
                    logger.error("SSH command on %s timed out after %ss of no output", self.hostname, exec_timeout)
                    channel.close()
                    return None, None
                time.sleep(self.ssh_config.poll_interval)
            exit_code = channel.recv_exit_status()
            output = "".join(output_chunks).strip()
            error_output = "".join(error_chunks).strip()
            stderr.close()
            combined = output
            if error_output:
                combined = f"{output}\n{error_output}" if output else error_output
            return combined, exit_code
        except (paramiko.SSHException, socket.error) as exc:
            logger.error("SSH command execution on %s failed: %s", self.hostname, exc)
            self.disconnect()
            return None, None

    def send(self, command: str) -> bool:
        """
        Start a command without waiting for it, for commands that drop the
        connection such as reboot
        Returns:
            True if the command was handed to the remote shell
        """
        if not self.connect():
            return False
        logger.debug("Sending to %s: %s", self.hostname, command)
        try:
            transport = self._client.get_transport()
            channel = transport.open_session()
            channel.exec_command(command)
        except (paramiko.SSHException, socket.error) as exc:
            logger.debug("Send to %s failed: %s", self.hostname, exc)
            self.disconnect()
            return False
        return True

