import sys
from typing import List

from infra.config import Config
from infra.pipeline.storage.project_storage import ProjectStorage


def get_project_storage(project_id: str) -> ProjectStorage:
    """ProjectStorage for a project below the projects root; exits if missing."""
    storage = ProjectStorage(project_id, projects_root=Config.projects_root)

    if not storage.exists:
        print(f"Project not found: {project_id}")
        print(f"   Projects root: {storage.projects_root}")
        sys.exit(1)

    return storage


def resolve_page_ids(storage: ProjectStorage, args) -> List[str]:
    """Page ids from --pages, or every eligible page with --all."""
    valid_page_ids = storage.list_page_ids()

    if getattr(args, 'all', False):
        return valid_page_ids

    page_ids = args.pages or []
    if not page_ids:
        print("No pages selected (use --pages <id...> or --all)")
        sys.exit(1)

    unknown = [page_id for page_id in page_ids if page_id not in valid_page_ids]
    if unknown:
        print(f"Unknown pages: {', '.join(unknown)}")
        print(f"   Valid pages: {', '.join(valid_page_ids) or '(none)'}")
        sys.exit(1)

    return page_ids


def confirm(prompt: str) -> bool:
    response = input(f"{prompt} [y/N] ")
    return response.strip().lower() in ('y', 'yes')
