"""
Library functions organized by usage:
- common: helpers for the control node (addresses, prompts)
- config: configuration data model classes
- hosts: hosts file parsing and replica grouping
- logger: logging configuration and utilities
- poller: convergence polling
"""
from . import common
from . import config
from . import hosts
from . import logger
from . import poller
__all__ = ["common", "config", "hosts", "logger", "poller"]
