import argparse
import sys

import cli.config
import cli.recognition
from cli.serve import setup_serve_parser


def create_parser():
    parser = argparse.ArgumentParser(
        prog='linerec',
        description='linerec - Batch line recognition for page image projects',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Configuration
  linerec config my-project init
  linerec config my-project show --json
  linerec config my-project set image_type Gray
  linerec config my-project set recognizer.executable '${OCROPUS_BIN}'

  # Recognition
  linerec recognition my-project pages
  linerec recognition my-project run --pages 0001 0002 -- -m model.pyrnn.gz -Q 4
  linerec recognition my-project run --all --overwrite
  linerec recognition my-project exists --pages 0001
  linerec recognition my-project clean --pages 0001 -y

  # Web API
  linerec serve
  linerec serve --port 8080 --host 0.0.0.0
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Command namespace')
    subparsers.required = True

    cli.config.setup_parser(subparsers)
    cli.recognition.setup_parser(subparsers)
    setup_serve_parser(subparsers)

    return parser


def split_tool_args(argv):
    """Split argv at the first "--": linerec arguments, recognizer arguments."""
    if '--' not in argv:
        return list(argv), []
    index = argv.index('--')
    return list(argv[:index]), list(argv[index + 1:])


def main(argv=None):
    parser = create_parser()

    argv = sys.argv[1:] if argv is None else list(argv)
    argv, tool_args = split_tool_args(argv)

    args = parser.parse_args(argv)
    if tool_args and not getattr(args, 'accepts_tool_args', False):
        parser.error(f"unrecognized arguments: {' '.join(tool_args)}")
    args.tool_args = tool_args

    return args.func(args)
