"""Output providers for different animation formats."""

from dataclasses import dataclass
from functools import partial
from pathlib import Path
from typing import Any, Callable

from .base import OutputProvider
from .raster_provider import GIF_FORMAT, WEBP_FORMAT, RasterFormat, RasterOutputProvider
from .svg_provider import SvgOutputProvider


@dataclass(frozen=True)
class OutputFormatSpec:
    extension: str
    media_type: str
    create_provider: Callable[[str], OutputProvider[Any]]


_OUTPUT_FORMATS: dict[str, OutputFormatSpec] = {
    "gif": OutputFormatSpec(
        extension=".gif",
        media_type="image/gif",
        create_provider=partial(RasterOutputProvider, raster_format=GIF_FORMAT),
    ),
    "webp": OutputFormatSpec(
        extension=".webp",
        media_type="image/webp",
        create_provider=partial(RasterOutputProvider, raster_format=WEBP_FORMAT),
    ),
    "svg": OutputFormatSpec(
        extension=".svg",
        media_type="image/svg+xml",
        create_provider=SvgOutputProvider,
    ),
}


def resolve_output_provider(
    file_path: str,
) -> OutputProvider[Any]:
    """
    Resolve the provider for a timeline animation from its file extension.

    The provider both chooses the frame stream (rendered images for GIF and
    WebP, timeline frames for SVG) and encodes it.

    Args:
        file_path: Output file path (extension determines format)

    Returns:
        An OutputProvider instance bound to ``file_path``

    Raises:
        ValueError: If file extension is not supported
    """
    ext = Path(file_path).suffix.lower()
    spec = _output_spec_from_extension(ext)
    return spec.create_provider(file_path)


def supported_output_formats() -> tuple[str, ...]:
    """Return supported output format names."""
    return tuple(_OUTPUT_FORMATS.keys())


def media_type_for_output_format(output_format: str) -> str:
    """Resolve media type for a supported output format."""
    return _output_spec_from_format(output_format).media_type


def output_path_for_format(output_format: str, base_name: str = "timeline") -> str:
    """Synthetic file name for a format, used when rendering in memory."""
    return f"{base_name}{_output_spec_from_format(output_format).extension}"


def _output_spec_from_extension(ext: str) -> OutputFormatSpec:
    spec = _OUTPUT_FORMATS.get(ext.removeprefix("."))
    if spec is not None:
        return spec
    supported = ", ".join(spec.extension for spec in _OUTPUT_FORMATS.values())
    raise ValueError(f"Unsupported output format: {ext}. Supported formats: {supported}")


def _output_spec_from_format(output_format: str) -> OutputFormatSpec:
    spec = _OUTPUT_FORMATS.get(output_format.lower())
    if spec is not None:
        return spec
    supported = ", ".join(supported_output_formats())
    raise ValueError(f"Invalid format. Choose from: {supported}")


__all__ = [
    "GIF_FORMAT",
    "WEBP_FORMAT",
    "OutputFormatSpec",
    "OutputProvider",
    "RasterFormat",
    "RasterOutputProvider",
    "SvgOutputProvider",
    "resolve_output_provider",
    "supported_output_formats",
    "media_type_for_output_format",
    "output_path_for_format",
]
