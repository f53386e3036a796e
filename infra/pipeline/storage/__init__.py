from infra.pipeline.storage.project_storage import ProjectStorage

__all__ = [
    "ProjectStorage",
]
