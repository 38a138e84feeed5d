"""
HTML parse report.

Layout:
- Source image preview, scaled so its longer edge is PREVIEW_MAX_EDGE
- Summary table: source size, texture cells, unique textures
- One row per cell: X, Y, thumbnail, hash, orientation label

The report is a read-only view of a finished ImageSet.
"""

import html
import logging
from pathlib import Path
from typing import List, Tuple, Union

from tex_core.config import IMAGES_DIR_NAME, PREVIEW_MAX_EDGE, REPORT_TITLE, THUMBNAIL_EDGE
from tex_core.orientation import orientation_label
from tex_core.pixel_hash import format_fingerprint
from tex_dedup.image_set import ImageSet

from .errors import ReportError
from .export import artifact_name

logger = logging.getLogger(__name__)


def preview_size(width: int, height: int, max_edge: int = PREVIEW_MAX_EDGE) -> Tuple[int, int]:
    """
    Scale (width, height) so the longer edge equals max_edge.

    Examples:
        >>> preview_size(1280, 640)
        (640, 320)
        >>> preview_size(0, 0)
        (0, 0)
    """
    longer = max(width, height)
    if longer <= 0:
        return 0, 0
    return width * max_edge // longer, height * max_edge // longer


def source_image_tag(image_path: str, width: int, height: int) -> str:
    """<img> tag for the source preview, linked to the full image."""
    w, h = preview_size(width, height)
    src = html.escape(image_path, quote=True)
    return f"<a href='{src}'><img src='{src}' alt='Source Image' height='{h}' width='{w}'/></a>"


def render_report(image_set: ImageSet, source_path: Union[str, Path, None] = None) -> str:
    """
    Render the HTML report for a processed ImageSet.

    Args:
        image_set: ImageSet after process()/process_image()
        source_path: Path shown in the preview (defaults to image_set.source_path)

    Returns:
        Complete HTML document as text
    """
    if source_path is None:
        source_path = image_set.source_path if image_set.source_path is not None else ""
    width, height = image_set.source_size

    lines: List[str] = [
        "<html>",
        "\t<head>",
        f"\t\t<title>{REPORT_TITLE}</title>",
        "\t\t<meta charset='utf-8'/>",
        "\t</head>",
        "\t<body>",
        "\t\t<h1>Source Image</h1>",
        "\t\t" + source_image_tag(str(source_path), width, height),
        "\t\t<table border='1'>",
        "\t\t\t<tr>",
        "\t\t\t\t<th>Src Img Size</th>",
        f"\t\t\t\t<td>{width} x {height}</td>",
        "\t\t\t</tr>",
        "\t\t\t<tr>",
        "\t\t\t\t<th>Texture Cells</th>",
        f"\t\t\t\t<td>{image_set.cell_count}</td>",
        "\t\t\t</tr>",
        "\t\t\t<tr>",
        "\t\t\t\t<th>Unique Textures</th>",
        f"\t\t\t\t<td>{image_set.unique_count}</td>",
        "\t\t\t</tr>",
        "\t\t</table>",
        "\t\t<h1>Output Images</h1>",
        "\t\t<table border='1'>",
        "\t\t\t<tr>",
        "\t\t\t\t<th>X</th>",
        "\t\t\t\t<th>Y</th>",
        "\t\t\t\t<th>Image</th>",
        "\t\t\t\t<th>Hash</th>",
        "\t\t\t\t<th>Orientation</th>",
        "\t\t\t</tr>",
    ]

    for cell in image_set.cells():
        href = f"{IMAGES_DIR_NAME}/{artifact_name(cell.fingerprint)}"
        lines.extend([
            "\t\t\t<tr>",
            f"\t\t\t\t<td>{cell.x}</td>",
            f"\t\t\t\t<td>{cell.y}</td>",
            f"\t\t\t\t<td><a href='{href}'><img src='{href}' height='{THUMBNAIL_EDGE}' width='{THUMBNAIL_EDGE}'/></a></td>",
            f"\t\t\t\t<td>{format_fingerprint(cell.fingerprint)}</td>",
            f"\t\t\t\t<td>{html.escape(orientation_label(cell.orientation))}</td>",
            "\t\t\t</tr>",
        ])

    lines.extend([
        "\t\t</table>",
        "\t</body>",
        "</html>",
    ])
    return "\n".join(lines) + "\n"


def write_report(image_set: ImageSet, report_path: Union[str, Path], source_path: Union[str, Path, None] = None) -> Path:
    """
    Write the HTML report to report_path.

    Raises:
        ReportError: If the file cannot be written
    """
    report_path = Path(report_path)
    content = render_report(image_set, source_path)
    try:
        report_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ReportError(report_path, f"An error occurred while creating the HTML report file {report_path}. Error: {e}") from e

    logger.info("Wrote report %s (%d cells)", report_path, image_set.cell_count)
    return report_path
