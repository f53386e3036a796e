"""
linerec config show command - Display project configuration.
"""

import json

from infra.config import Config, ProjectConfigManager


def cmd_config_show(args):
    """Show project configuration."""
    manager = ProjectConfigManager(Config.projects_root / args.project)

    config = manager.load()
    resolved = manager.resolve(config)

    if args.json:
        data = config.model_dump(mode="json")
        data['resolved'] = resolved.model_dump(mode="json")
        print(json.dumps(data, indent=2, default=str))
        return

    print(f"\n📋 Project Configuration: {resolved.project_id}")
    if manager.exists():
        print(f"   Path: {manager.config_path}\n")
    else:
        print(f"   Path: {manager.config_path} (not created, showing defaults)\n")

    print("Pages:")
    print(f"  page_subdir: {config.page_subdir}")
    print(f"  page_dir: {resolved.page_dir}")
    print(f"  image_type: {config.image_type.value}")
    print(f"  image_extension: {resolved.image_extension}")
    print(f"  output_extension: {config.output_extension}")

    print("\nRecognizer:")
    print(f"  executable: {config.recognizer.executable}")
    if resolved.executable != config.recognizer.executable:
        print(f"    resolves to: {resolved.executable or '(not set)'}")
    print(f"  fetch_console: {config.recognizer.fetch_console}")
    print(f"  strict_exit_code: {config.recognizer.strict_exit_code}")

    print()
