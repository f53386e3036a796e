#!/usr/bin/env python3
"""
linerec CLI - Batch line recognition for page image projects

Commands:
  Configuration:
    linerec config <project> init                 Write default linerec.yaml
    linerec config <project> show                 Show resolved configuration
    linerec config <project> set <key> <value>    Set a configuration value

  Recognition:
    linerec recognition <project> pages                     List pages eligible for recognition
    linerec recognition <project> run --pages 0001 0002     Run the recognizer (Ctrl-C cancels)
    linerec recognition <project> exists --pages 0001       Check for outputs of a previous run
    linerec recognition <project> clean --pages 0001        Delete outputs of a previous run

  Web:
    linerec serve                                 Start the recognition API server
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from cli import main


if __name__ == '__main__':
    main()
