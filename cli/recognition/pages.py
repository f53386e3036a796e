import json
import sys

from cli.helpers import confirm, get_project_storage, resolve_page_ids
from infra.pipeline.errors import RecognitionError
from pipeline.recognition import JobController, WorkInventory


def cmd_pages(args):
    """List pages eligible for recognition with their line counts."""
    storage = get_project_storage(args.project)
    page_ids = storage.list_page_ids()

    try:
        state = WorkInventory(storage).initialize(page_ids)
    except RecognitionError as e:
        print(f"✗ {e}")
        sys.exit(1)

    rows = []
    for page_id in page_ids:
        segments = state.get(page_id, {})
        rows.append({
            'page_id': page_id,
            'segments': len(segments),
            'lines': sum(len(lines) for lines in segments.values()),
        })

    if args.json:
        print(json.dumps(rows, indent=2))
        return

    if not rows:
        print(f"No pages found in {storage.page_dir}")
        return

    print(f"\n📄 Pages in {storage.page_dir}\n")
    print(f"{'Page':<20} {'Segments':>10} {'Lines':>10}")
    print("-" * 42)
    for row in rows:
        print(f"{row['page_id']:<20} {row['segments']:>10} {row['lines']:>10}")
    print()


def cmd_exists(args):
    """Exit status 0 when outputs exist for the selected pages, 1 otherwise."""
    storage = get_project_storage(args.project)
    page_ids = resolve_page_ids(storage, args)

    try:
        found = JobController(storage).outputs_exist(page_ids)
    except RecognitionError as e:
        print(f"✗ {e}")
        sys.exit(2)

    if found:
        print(f"✓ Recognition outputs exist for: {', '.join(page_ids)}")
    else:
        print(f"○ No recognition outputs for: {', '.join(page_ids)}")
        sys.exit(1)


def cmd_clean(args):
    """Delete recognition outputs of the selected pages."""
    storage = get_project_storage(args.project)
    page_ids = resolve_page_ids(storage, args)
    controller = JobController(storage)

    if not args.yes:
        print(f"\n⚠️  This will delete all *{storage.config.output_extension} outputs for:")
        print(f"   {', '.join(page_ids)}")
        if not confirm("\nAre you sure?"):
            print("Cancelled.")
            return

    try:
        result = controller.delete_old_outputs(page_ids)
    except RecognitionError as e:
        print(f"✗ {e}")
        sys.exit(1)
    finally:
        storage.close()

    print(f"✓ Deleted {result['deleted_count']} outputs")
    if result['failed']:
        print(f"✗ Could not delete {len(result['failed'])} files:")
        for path in result['failed']:
            print(f"   {path}")
        sys.exit(1)
