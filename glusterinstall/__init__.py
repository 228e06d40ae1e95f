"""
glusterinstall - bootstrap a replicated GlusterFS volume across a fleet of
hosts from a single control node over SSH
"""
__version__ = "0.15.0"
