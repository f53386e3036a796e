"""
Web route blueprints.

Organized by namespace, mirroring CLI structure:
- recognition_routes: Recognition job operations (pages, run, progress, cancel)
"""
