"""
Frame export: hands rendered frames back to the browser as file downloads.
"""

import base64
import binascii
from pathlib import Path
from typing import Iterable, Union

from starlette.responses import Response

from movie_scatter.logger import logger
from movie_scatter.utils import delay

FRAME_PREFIX = "frame_"
FRAME_MEDIA_TYPE = "image/png"


def frame_filename(frame_index: int) -> str:
    return f"{FRAME_PREFIX}{frame_index:03d}.png"


def _decode_payload(image_data: Union[bytes, str]) -> bytes:
    if isinstance(image_data, bytes):
        if not image_data.startswith(b"data:"):
            return image_data
        image_data = image_data.decode("ascii", errors="replace")

    if not image_data.startswith("data:"):
        return image_data.encode()
    header, _, payload = image_data.partition(",")
    if not header.endswith(";base64"):
        return payload.encode()
    try:
        return base64.b64decode(payload, validate=True)
    except binascii.Error as exc:
        # the payload is not ours to validate, send it untouched
        logger.warning(f"frame payload is not valid base64, sending as is: {exc}")
        return payload.encode()


def export_frame(image_data: Union[bytes, str], frame_index: int) -> Response:
    """Build a response that makes the browser download the frame.

    `image_data` is either raw image bytes or a `data:` URL as produced by
    `canvas.toDataURL()`.
    """
    filename = frame_filename(frame_index)
    content = _decode_payload(image_data)
    logger.info(f"exporting {filename} ({len(content)} bytes)")
    return Response(
        content=content,
        media_type=FRAME_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


async def write_frames(
    frames: Iterable[Union[bytes, str]],
    directory: Union[str, Path],
    interval_ms: float = 0,
    start_index: int = 0,
) -> list[Path]:
    """Write a sequence of frames to `directory`, pausing between frames."""
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    paths = []
    for frame_index, image_data in enumerate(frames, start=start_index):
        if paths and interval_ms > 0:
            await delay(interval_ms)
        path = directory / frame_filename(frame_index)
        path.write_bytes(_decode_payload(image_data))
        paths.append(path)
    logger.info(f"wrote {len(paths)} frames to {directory}")
    return paths
