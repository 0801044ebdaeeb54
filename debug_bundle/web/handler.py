"""HTTP endpoint that serves a freshly built debug zip.

The archive is built fully in memory before any response is sent, so a
failing source turns into a 500 instead of a truncated 200 download.
"""

import logging
from typing import Callable, Union

from fastapi import APIRouter, FastAPI, HTTPException
from fastapi.responses import Response

from debug_bundle.bundle import ZipWriter, ZIP_FILE_NAME, ZIP_MEDIA_TYPE
from debug_bundle.utils.errors import SourceWriteError

logger = logging.getLogger(__name__)


def http_handler(writer: ZipWriter) -> Callable[[], Response]:
    """Create the endpoint callable for ``writer``.

    The endpoint is synchronous so FastAPI runs it in its threadpool; the
    CPU profile blocks for its whole capture window.
    """

    def download_debug_zip() -> Response:
        try:
            content = writer.build()
        except SourceWriteError as e:
            logger.error(f"Unable to write debug zip: {e}")
            raise HTTPException(status_code=500, detail=f"unable to write ZIP file: {e}")

        return Response(
            content=content,
            media_type=ZIP_MEDIA_TYPE,
            headers={"Content-Disposition": f'attachment; filename="{ZIP_FILE_NAME}"'},
        )

    return download_debug_zip


def register_handler(
    router: Union[APIRouter, FastAPI],
    path: str,
    writer: ZipWriter,
) -> None:
    """Mount the debug zip endpoint as ``GET path`` on ``router``."""
    router.add_api_route(
        path,
        http_handler(writer),
        methods=["GET"],
        response_class=Response,
        summary="Download debug bundle",
        responses={200: {"content": {ZIP_MEDIA_TYPE: {}}}},
    )
    logger.debug(f"Registered debug zip handler at {path}")
