"""
ConfigCommand -- Configuration display and modification
"""

import sys

from ..commands.base import BaseCommand


class ConfigCommand(BaseCommand):
    """Command for configuration management."""

    def show_config(self) -> int:
        print(self.config_manager.display())
        return 0

    def set_config(self, key: str, value: str, scope: str = "project") -> int:
        error = self.config_manager.set(key, value, scope)
        if error:
            print(f"Error: {error}", file=sys.stderr)
            return 1
        print(f"Set {key} = {value} ({scope})")
        return 0


# =============================================================================
# Command Registration (Self-Registration Pattern)
# =============================================================================

COMMAND_NAME = 'config'


def register_parser(subparsers):
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., index.reconcile=substring)')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    if not args.set:
        return cli._config_cmd.show_config()

    if '=' not in args.set:
        print("Error: Use format KEY=VALUE (e.g., index.reconcile=substring)", file=sys.stderr)
        return 1

    key, value = args.set.split('=', 1)
    scope = "user" if args.user else "project"
    return cli._config_cmd.set_config(key, value, scope)
