"""Reading pipeline definition files from disk as decoded text."""

import codecs
import logging
from pathlib import Path

from .config import SourceConfig
from .errors import AdoYamlSourceError

logger = logging.getLogger(__name__)

PIPELINE_SUFFIXES = (".yml", ".yaml")


def load_pipeline_text(path: str | Path, config: SourceConfig | None = None) -> str:
    """
    Read a pipeline definition file and return its decoded text.

    Args:
        path (str | Path): Location of the pipeline file.
        config (SourceConfig, optional): Size limit and encoding to use.

    Returns:
        str: The file contents without a leading byte-order mark.

    Raises:
        AdoYamlSourceError: If the file is missing, not a file, too large, or
            cannot be decoded with the configured encoding.
    """
    config = config or SourceConfig()
    file_path = Path(path).expanduser()

    if not file_path.exists():
        raise AdoYamlSourceError("Pipeline file does not exist", path=str(file_path))

    if not file_path.is_file():
        raise AdoYamlSourceError("Pipeline path is not a file", path=str(file_path))

    if file_path.suffix.lower() not in PIPELINE_SUFFIXES:
        logger.warning(f"Pipeline file {file_path} does not have a YAML extension")

    try:
        size = file_path.stat().st_size
        if size > config.max_file_bytes:
            raise AdoYamlSourceError(
                "Pipeline file is larger than the configured limit",
                path=str(file_path),
                context={"size_bytes": size, "max_file_bytes": config.max_file_bytes},
            )
        data = file_path.read_bytes()
    except OSError as e:
        raise AdoYamlSourceError(
            f"Failed to read pipeline file: {e}", path=str(file_path), original_exception=e
        ) from e

    if data.startswith(codecs.BOM_UTF8):
        data = data[len(codecs.BOM_UTF8) :]

    try:
        text = data.decode(config.encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise AdoYamlSourceError(
            f"Pipeline file is not valid {config.encoding} text",
            path=str(file_path),
            context={"encoding": config.encoding},
            original_exception=e,
        ) from e

    logger.info(f"Loaded pipeline file {file_path} ({len(data)} bytes)")
    return text
