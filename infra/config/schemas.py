"""
Configuration schemas for linerec.

Defines the structure of the per-project configuration file.
Stored at {projects_root}/{project_id}/linerec.yaml
"""

from enum import Enum
from pathlib import Path
from typing import Dict
from pydantic import BaseModel, Field, field_validator, model_validator
import os
import re


class ImageType(str, Enum):
    """Image type of the project's line segment images."""
    BINARY = "Binary"
    GRAY = "Gray"


DEFAULT_IMAGE_EXTENSIONS = {
    ImageType.BINARY.value: ".bin.png",
    ImageType.GRAY.value: ".nrm.png",
}


class RecognizerConfig(BaseModel):
    """Configuration for the external line recognizer."""
    executable: str = Field(
        "ocropus-rpred",
        description="Recognizer executable (name on PATH or absolute path, ${ENV_VAR} allowed)"
    )
    fetch_console: bool = Field(
        True,
        description="Capture stdout/stderr of the recognizer"
    )
    strict_exit_code: bool = Field(
        True,
        description="Treat a non-zero exit code as a failed run"
    )


class ProjectConfig(BaseModel):
    """
    Project-level configuration.

    Stored at: {project_dir}/linerec.yaml
    """
    image_type: ImageType = Field(
        ImageType.BINARY,
        description="Image type of the line segments: Binary or Gray"
    )
    page_subdir: str = Field(
        "processing",
        description="Directory (relative to the project) holding one directory per page"
    )
    image_extensions: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_IMAGE_EXTENSIONS),
        description="Line segment image extension per image type"
    )
    output_extension: str = Field(
        ".txt",
        description="Extension of the recognition output written next to each line image"
    )
    recognizer: RecognizerConfig = Field(default_factory=RecognizerConfig)

    @field_validator("output_extension")
    @classmethod
    def _extension_has_dot(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError(f"output_extension must start with '.': {value!r}")
        return value

    @field_validator("image_extensions")
    @classmethod
    def _known_image_types(cls, value: Dict[str, str]) -> Dict[str, str]:
        merged = dict(DEFAULT_IMAGE_EXTENSIONS)
        merged.update(value)
        return merged

    @model_validator(mode="after")
    def _outputs_distinct_from_images(self) -> "ProjectConfig":
        # Cleanup deletes by suffix, so an overlap would delete the line images
        for image_type, image_extension in self.image_extensions.items():
            if image_extension.endswith(self.output_extension) or self.output_extension.endswith(image_extension):
                raise ValueError(
                    f"output_extension {self.output_extension!r} overlaps the {image_type} "
                    f"image extension {image_extension!r}"
                )
        return self

    def image_extension(self) -> str:
        return self.image_extensions[self.image_type.value]


class ResolvedProjectConfig(BaseModel):
    """
    Fully resolved configuration for a project.

    All paths are absolute and ${ENV_VAR} references are expanded.
    """
    project_id: str
    project_dir: Path
    page_dir: Path
    image_type: ImageType
    image_extension: str
    output_extension: str
    executable: str
    fetch_console: bool = True
    strict_exit_code: bool = True

    @classmethod
    def from_config(
        cls,
        project_dir: Path,
        config: ProjectConfig
    ) -> "ResolvedProjectConfig":
        project_dir = Path(project_dir).expanduser().resolve()
        return cls(
            project_id=project_dir.name,
            project_dir=project_dir,
            page_dir=project_dir / config.page_subdir,
            image_type=config.image_type,
            image_extension=config.image_extension(),
            output_extension=config.output_extension,
            executable=resolve_env_vars(config.recognizer.executable),
            fetch_console=config.recognizer.fetch_console,
            strict_exit_code=config.recognizer.strict_exit_code,
        )


def resolve_env_vars(value: str) -> str:
    """
    Resolve ${ENV_VAR} references in a string.

    Examples:
        "${OCROPUS_BIN}" -> actual value from environment
        "literal-value" -> "literal-value"
        "${MISSING_VAR}" -> "" (empty string if not set)
    """
    if not isinstance(value, str):
        return value

    # Pattern matches ${VAR_NAME}
    pattern = r'\$\{([^}]+)\}'

    def replace(match):
        var_name = match.group(1)
        return os.environ.get(var_name, "")

    return re.sub(pattern, replace, value)
