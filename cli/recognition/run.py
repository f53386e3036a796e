import sys
import threading

from cli.helpers import get_project_storage, resolve_page_ids
from infra.pipeline.errors import (
    InventoryError,
    ProcessLaunchFailure,
    RecognitionError,
    RecognitionFailed,
)
from infra.pipeline.rich_progress import RichProgressBar
from pipeline.recognition import JobController


def cmd_run(args):
    """Run the recognizer over the selected pages and follow its progress."""
    storage = get_project_storage(args.project)
    page_ids = resolve_page_ids(storage, args)
    controller = JobController(storage)

    try:
        if controller.outputs_exist(page_ids) and not args.overwrite:
            print("✗ Recognition outputs already exist for the selected pages")
            print("  Use --overwrite to replace them")
            sys.exit(1)
    except InventoryError as e:
        print(f"✗ {e}")
        sys.exit(1)

    result = {}

    def worker():
        try:
            result['returncode'] = controller.start(page_ids, args.tool_args)
        except (InventoryError, ProcessLaunchFailure) as e:
            controller.reset_progress()
            result['error'] = e
        except RecognitionError as e:
            result['error'] = e

    config = storage.config
    print(f"\n🔤 Recognizing {len(page_ids)} pages with {config.executable}")
    if args.tool_args:
        print(f"   Arguments: {' '.join(args.tool_args)}")

    thread = threading.Thread(target=worker, daemon=True)
    thread.start()

    bar = RichProgressBar(prefix="   ")
    try:
        while thread.is_alive():
            percent = controller.get_progress()
            progress = controller.get_status()["progress"]
            bar.update(percent, suffix=f"{progress['completed_items']}/{progress['total_items']} lines")
            thread.join(timeout=args.poll_interval)
    except KeyboardInterrupt:
        controller.cancel()
        thread.join()
        bar.finish()
        print("⚠️  Recognition cancelled")
        storage.close()
        sys.exit(130)

    error = result.get('error')
    if error is None:
        progress = controller.get_status()["progress"]
        bar.finish()
        print(f"✓ Recognition complete: {progress['completed_items']}/{progress['total_items']} lines recognized")
        storage.close()
        return

    bar.finish()
    print(f"✗ {error}")
    if isinstance(error, RecognitionFailed):
        console_error = controller.get_console("err").strip()
        if console_error:
            print("\nRecognizer output (stderr):")
            for line in console_error.splitlines()[-20:]:
                print(f"   {line}")
    storage.close()
    sys.exit(1)
