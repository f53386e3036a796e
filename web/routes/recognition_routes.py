"""
Recognition routes blueprint.

JSON API over the per-project JobController:
    GET  /api/recognition/<project_id>/pages
    POST /api/recognition/<project_id>/run
    GET  /api/recognition/<project_id>/progress
    GET  /api/recognition/<project_id>/status
    POST /api/recognition/<project_id>/cancel
    POST /api/recognition/<project_id>/reset
    POST /api/recognition/<project_id>/exists
    GET  /api/recognition/<project_id>/console?stream=out|err
"""

from flask import Blueprint, abort, current_app, jsonify, request

from infra.pipeline.errors import InventoryError, JobAlreadyRunning

recognition_bp = Blueprint('recognition', __name__, url_prefix='/api/recognition')


def _jobs():
    return current_app.extensions['recognition_jobs']


def _controller(project_id: str):
    jobs = _jobs()
    if not jobs.project_exists(project_id):
        abort(404, f"Project '{project_id}' not found")
    return jobs.get_controller(project_id)


def _page_ids_from_body(controller, require_valid: bool = True):
    data = request.get_json(silent=True) or {}
    page_ids = data.get('pageIds')

    if not isinstance(page_ids, list) or not page_ids or not all(isinstance(p, str) for p in page_ids):
        abort(400, "pageIds must be a non-empty list of page ids")

    if require_valid:
        valid = set(controller.get_valid_page_ids())
        unknown = [page_id for page_id in page_ids if page_id not in valid]
        if unknown:
            abort(400, f"Unknown pages: {', '.join(unknown)}")

    return page_ids, data


@recognition_bp.route('/<project_id>/pages')
def get_pages(project_id: str):
    controller = _controller(project_id)
    return jsonify({"pageIds": controller.get_valid_page_ids()})


@recognition_bp.route('/<project_id>/run', methods=['POST'])
def run_recognition(project_id: str):
    controller = _controller(project_id)
    page_ids, data = _page_ids_from_body(controller)

    tool_args = data.get('cmdArgs') or []
    if not isinstance(tool_args, list) or not all(isinstance(a, str) for a in tool_args):
        abort(400, "cmdArgs must be a list of strings")

    jobs = _jobs()
    if jobs.is_busy(project_id):
        return jsonify({"error": "Recognition already running"}), 409

    try:
        if not data.get('overwrite', False) and controller.outputs_exist(page_ids):
            return jsonify({
                "error": "Recognition outputs already exist",
                "exists": True,
            }), 409
    except InventoryError as e:
        return jsonify({"error": str(e)}), 500

    try:
        jobs.start(project_id, page_ids, tool_args)
    except JobAlreadyRunning as e:
        return jsonify({"error": str(e)}), 409

    return jsonify({"started": True, "pageIds": page_ids}), 202


@recognition_bp.route('/<project_id>/progress')
def get_progress(project_id: str):
    controller = _controller(project_id)
    return jsonify({"progress": controller.get_progress()})


@recognition_bp.route('/<project_id>/status')
def get_status(project_id: str):
    controller = _controller(project_id)
    return jsonify(controller.get_status())


@recognition_bp.route('/<project_id>/cancel', methods=['POST'])
def cancel_recognition(project_id: str):
    controller = _controller(project_id)
    controller.cancel()
    return jsonify(controller.get_status())


@recognition_bp.route('/<project_id>/reset', methods=['POST'])
def reset_progress(project_id: str):
    controller = _controller(project_id)
    controller.reset_progress()
    return jsonify(controller.get_status())


@recognition_bp.route('/<project_id>/exists', methods=['POST'])
def outputs_exist(project_id: str):
    controller = _controller(project_id)
    page_ids, _ = _page_ids_from_body(controller, require_valid=False)

    try:
        exists = controller.outputs_exist(page_ids)
    except InventoryError as e:
        return jsonify({"error": str(e)}), 500

    return jsonify({"exists": exists})


@recognition_bp.route('/<project_id>/console')
def get_console(project_id: str):
    controller = _controller(project_id)
    stream = request.args.get('stream', 'out')

    try:
        text = controller.get_console(stream)
    except ValueError as e:
        abort(400, str(e))

    return jsonify({"stream": stream, "console": text})
