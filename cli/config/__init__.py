"""
Config CLI commands.

Commands for managing the per-project linerec.yaml.
"""

from cli.config.init import cmd_config_init
from cli.config.show import cmd_config_show
from cli.config.set import cmd_config_set


def setup_parser(subparsers):
    """Setup config command parser."""
    # linerec config <project> ...
    config_parser = subparsers.add_parser(
        'config',
        help='Manage project configuration'
    )
    config_parser.add_argument(
        'project',
        help='Project identifier (directory name below the projects root)'
    )
    config_subparsers = config_parser.add_subparsers(
        dest='config_command',
        help='Config command'
    )
    config_subparsers.required = True

    # linerec config <project> init
    init_parser = config_subparsers.add_parser(
        'init',
        help='Write a default linerec.yaml'
    )
    init_parser.add_argument(
        '--force',
        action='store_true',
        help='Overwrite existing config'
    )
    init_parser.add_argument(
        '--image-type',
        choices=['Binary', 'Gray'],
        help='Image type of the line segments (default: Binary)'
    )
    init_parser.set_defaults(func=cmd_config_init)

    # linerec config <project> show
    show_parser = config_subparsers.add_parser(
        'show',
        help='Show project configuration'
    )
    show_parser.add_argument(
        '--json',
        action='store_true',
        help='Output as JSON'
    )
    show_parser.set_defaults(func=cmd_config_show)

    # linerec config <project> set <key> <value>
    set_parser = config_subparsers.add_parser(
        'set',
        help='Set a configuration value'
    )
    set_parser.add_argument(
        'key',
        help='Config key (e.g., image_type, recognizer.executable)'
    )
    set_parser.add_argument(
        'value',
        help='Value to set'
    )
    set_parser.set_defaults(func=cmd_config_set)


__all__ = [
    'setup_parser',
    'cmd_config_init',
    'cmd_config_show',
    'cmd_config_set',
]
