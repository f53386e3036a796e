"""
Recognition CLI commands.

linerec recognition <project> pages|run|exists|clean
"""

from cli.recognition.pages import cmd_pages, cmd_exists, cmd_clean
from cli.recognition.run import cmd_run


def _add_page_selection(parser, allow_all=True):
    parser.add_argument(
        '--pages',
        nargs='+',
        metavar='PAGE_ID',
        help='Page ids to process (see: linerec recognition <project> pages)'
    )
    if allow_all:
        parser.add_argument(
            '--all',
            action='store_true',
            help='Select every eligible page'
        )


def setup_parser(subparsers):
    """Setup recognition command parser."""
    recognition_parser = subparsers.add_parser(
        'recognition',
        help='Run line recognition on a project'
    )
    recognition_parser.add_argument(
        'project',
        help='Project identifier (directory name below the projects root)'
    )
    recognition_subparsers = recognition_parser.add_subparsers(
        dest='recognition_command',
        help='Recognition command'
    )
    recognition_subparsers.required = True

    # linerec recognition <project> pages
    pages_parser = recognition_subparsers.add_parser(
        'pages',
        help='List pages eligible for recognition'
    )
    pages_parser.add_argument(
        '--json',
        action='store_true',
        help='Output as JSON'
    )
    pages_parser.set_defaults(func=cmd_pages)

    # linerec recognition <project> run --pages ... [-- tool args]
    run_parser = recognition_subparsers.add_parser(
        'run',
        help='Run the recognizer (arguments after -- are passed to it)'
    )
    _add_page_selection(run_parser)
    run_parser.add_argument(
        '--overwrite',
        action='store_true',
        help='Replace outputs of a previous run without asking'
    )
    run_parser.add_argument(
        '--poll-interval',
        type=float,
        default=0.5,
        help='Seconds between progress updates (default: 0.5)'
    )
    run_parser.set_defaults(func=cmd_run, accepts_tool_args=True)

    # linerec recognition <project> exists --pages ...
    exists_parser = recognition_subparsers.add_parser(
        'exists',
        help='Check whether the selected pages already have recognition outputs'
    )
    _add_page_selection(exists_parser)
    exists_parser.set_defaults(func=cmd_exists)

    # linerec recognition <project> clean --pages ...
    clean_parser = recognition_subparsers.add_parser(
        'clean',
        help='Delete recognition outputs of the selected pages'
    )
    _add_page_selection(clean_parser)
    clean_parser.add_argument(
        '-y', '--yes',
        action='store_true',
        help='Skip confirmation prompt'
    )
    clean_parser.set_defaults(func=cmd_clean)


__all__ = [
    'setup_parser',
    'cmd_pages',
    'cmd_run',
    'cmd_exists',
    'cmd_clean',
]
