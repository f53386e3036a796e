"""
linerec Web API

Small Flask application exposing recognition jobs over JSON.

Usage:
    python web/app.py
    python web/app.py --port 1337 --host 127.0.0.1
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask
from web.config import Config


def create_app(overrides=None):
    """Create and configure Flask app."""
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    from web.data.recognition_jobs import RecognitionJobs
    app.extensions['recognition_jobs'] = RecognitionJobs(app.config['PROJECTS_ROOT'])

    # Register route blueprints
    from web.routes.recognition_routes import recognition_bp

    app.register_blueprint(recognition_bp)

    return app


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="linerec Web API")
    parser.add_argument("--port", type=int, default=Config.PORT)
    parser.add_argument("--host", default=Config.HOST)
    parser.add_argument("--debug", action="store_true", default=Config.DEBUG)
    args = parser.parse_args()

    app = create_app()

    print(f"\n🚀 linerec API starting on http://{args.host}:{args.port}")
    print(f"📁 Projects: {Config.PROJECTS_ROOT}\n")

    app.run(host=args.host, port=args.port, debug=args.debug, threaded=True)
