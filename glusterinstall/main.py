#!/usr/bin/env python3
"""
gluster-install CLI - create a replicated GlusterFS volume across the nodes
listed in a hosts file, driven over SSH from this node
"""
import argparse
import sys
from pathlib import Path
from typing import Any, Dict, Optional
import yaml
from dependency_injector import containers, providers
from glusterinstall import __version__
from glusterinstall.commands.cleanup import Cleanup
from glusterinstall.commands.install import Install
from glusterinstall.errors import EXIT_VALIDATION
from glusterinstall.libs.config import InstallConfig
from glusterinstall.libs.logger import VERBOSE_DEBUG, VERBOSE_INFO, VERBOSE_QUIET, get_logger, init_logger
from glusterinstall.services.remote import SSHExecutor

DEFAULT_CONFIG_FILE = Path("glusterinstall.yaml")
logger = get_logger(__name__)


def load_config(config_file: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file as dictionary
    Args:
        config_file: Explicit --config path; it must exist. Without it the
            default file is read when present.
    """
    if config_file is None:
        if not DEFAULT_CONFIG_FILE.exists():
            return {}
        config_file = DEFAULT_CONFIG_FILE
    if not config_file.exists():
        logger.error("Configuration file %s not found", config_file)
        sys.exit(EXIT_VALIDATION)
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as err:
        logger.error("Error loading configuration: %s", err)
        sys.exit(EXIT_VALIDATION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.error("Configuration file %s must hold a mapping", config_file)
        sys.exit(EXIT_VALIDATION)
    return config


def cli_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Map parsed flags onto InstallConfig fields; unset flags are None."""
    verbose = args.verbose
    if args.debug:
        verbose = VERBOSE_DEBUG
    if args.quiet:
        verbose = VERBOSE_QUIET
    return {
        "brick_dev": getattr(args, "brick_dev", None),
        "brick_dir": args.brick_mnt,
        "vol_name": args.vol_name,
        "vol_mnt": args.vol_mnt,
        "replica": args.replica,
        "hosts_file": args.hosts,
        "log_file": args.logfile,
        "verbose": verbose,
        "assume_yes": True if args.yes else None,
        "new_deploy": False if args.old_deploy else None,
    }


def get_config(args: argparse.Namespace) -> InstallConfig:
    """Build the run configuration: YAML file, then command line, then derived paths"""
    config_file = Path(args.config).resolve() if args.config else None
    try:
        config = InstallConfig.from_dict(load_config(config_file))
        config.apply_overrides(cli_overrides(args))
        config.compute_derived_fields()
    except (TypeError, ValueError) as err:
        logger.error("Invalid configuration: %s", err)
        sys.exit(EXIT_VALIDATION)
    return config


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with install and cleanup subcommands"""
    common_opts = argparse.ArgumentParser(add_help=False)
    common_opts.add_argument("--config", "-c", type=str, default=None,
                             help="Path to YAML configuration file (default: ./glusterinstall.yaml if present)")
    common_opts.add_argument("--brick-mnt", type=str, default=None,
                             help="Brick mount directory (default: /mnt/brick1)")
    common_opts.add_argument("--vol-name", type=str, default=None, help="Volume name (default: HadoopVol)")
    common_opts.add_argument("--vol-mnt", type=str, default=None, help="Volume mount point (default: /mnt/glusterfs)")
    common_opts.add_argument("--replica", type=int, default=None, help="Replica count (default: 2)")
    common_opts.add_argument("--hosts", type=str, default=None, help="Hosts file (default: ./hosts)")
    common_opts.add_argument("--logfile", type=str, default=None,
                             help="Log file (default: /var/log/glusterfs-cluster-install.log)")
    common_opts.add_argument("--verbose", "-v", type=int, nargs="?", const=VERBOSE_INFO, default=None,
                             help="Console verbosity: 0=debug 1=info 2=summary 3=report 9=quiet "
                                  "(default 2, 1 when given without a value)")
    common_opts.add_argument("--debug", action="store_true", help="Same as --verbose 0")
    common_opts.add_argument("--quiet", "-q", action="store_true", help="Same as --verbose 9")
    common_opts.add_argument("--yes", "-y", action="store_true", help="Answer yes to all prompts")

    parser = argparse.ArgumentParser(
        prog="gluster-install",
        description="Create a replicated GlusterFS volume across the nodes of a hosts file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    install_parser = subparsers.add_parser("install", parents=[common_opts],
                                           help="Prepare the nodes and create, start and mount the volume")
    install_parser.add_argument("brick_dev", help="Block device for the XFS brick on every node, e.g. /dev/sdb")
    install_parser.add_argument("--old-deploy", action="store_true",
                                help="Keep the volume and mounts of a previous install instead of cleaning up")

    cleanup_parser = subparsers.add_parser("cleanup", parents=[common_opts],
                                           help="Unmount and delete the volume, detach peers and wipe the bricks")
    cleanup_parser.set_defaults(old_deploy=False)
    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return
    # console only until the configuration names the log file
    init_logger(verbose=args.verbose if args.verbose is not None else VERBOSE_INFO, log_file=None)

    # DI container created in main and registering command classes
    di = containers.DynamicContainer()
    di.config = providers.Singleton(get_config, args=args)
    di.executor = providers.Factory(lambda cfg: SSHExecutor(cfg.ssh), cfg=di.config)
    di.install = providers.Factory(Install, cfg=di.config, executor=di.executor)
    di.cleanup = providers.Factory(Cleanup, cfg=di.config, executor=di.executor)

    cfg = di.config()
    try:
        init_logger(verbose=cfg.verbose, log_file=cfg.log_file)
    except OSError as err:
        logger.error("Cannot open log file %s: %s", cfg.log_file, err)
        sys.exit(EXIT_VALIDATION)
    if args.command == "install":
        di.install().run(args)
    elif args.command == "cleanup":
        di.cleanup().run(args)


if __name__ == "__main__":
    main()
