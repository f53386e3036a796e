"""
linerec config init command - Write a default project configuration.
"""

from infra.config import Config, ImageType, ProjectConfig, ProjectConfigManager


def cmd_config_init(args):
    """Initialize project configuration."""
    project_dir = Config.projects_root / args.project
    manager = ProjectConfigManager(project_dir)

    if manager.exists() and not args.force:
        print(f"✗ Config already exists at: {manager.config_path}")
        print("  Use --force to overwrite")
        return

    config = ProjectConfig()
    if args.image_type:
        config.image_type = ImageType(args.image_type)

    manager.save(config)
    print(f"✓ Created config at: {manager.config_path}")

    resolved = manager.resolve(config)
    print("\nConfiguration summary:")
    print(f"  Page directory: {resolved.page_dir}")
    print(f"  Image type: {resolved.image_type.value} (*{resolved.image_extension})")
    print(f"  Output extension: {resolved.output_extension}")
    print(f"  Recognizer: {resolved.executable}")

    if not resolved.page_dir.exists():
        print("\n  ○ Page directory does not exist yet")
