"""
linerec config set command - Set configuration values.
"""

import json

from pydantic import ValidationError

from infra.config import Config, ProjectConfigManager


def cmd_config_set(args):
    """Set a configuration value."""
    manager = ProjectConfigManager(Config.projects_root / args.project)

    key = args.key
    parsed_value = _parse_value(args.value)

    try:
        config = manager.set_value(key, parsed_value)
    except ValidationError as e:
        print(f"✗ Failed to set {key}: {e.errors()[0]['msg']}")
        return

    print(f"✓ Set {key} = {parsed_value}")

    # Show the updated value
    result = config.model_dump(mode="json")
    for part in key.split('.'):
        result = result.get(part, {}) if isinstance(result, dict) else {}
    print(f"  Current value: {result}")


def _parse_value(value: str):
    """
    Parse a string value into appropriate Python type.

    Handles:
    - Booleans (true, false)
    - Numbers (int, float)
    - JSON arrays and objects
    - Strings (default)
    """
    # Boolean
    if value.lower() == 'true':
        return True
    if value.lower() == 'false':
        return False

    # Number, except dotted extensions like ".txt"
    if not value.startswith('.'):
        try:
            if '.' in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

    # JSON (arrays, objects)
    if value.startswith('[') or value.startswith('{'):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            pass

    # Default: string
    return value
