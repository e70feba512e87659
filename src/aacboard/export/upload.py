"""Hand finished archives to the cloud-storage upload endpoint."""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx

from aacboard.errors import AacBoardError
from aacboard.export.targets import ExportResult

logger = logging.getLogger(__name__)


class UploadError(AacBoardError):
    """The upload endpoint rejected or could not receive an archive."""


def build_upload_payload(result: ExportResult) -> dict[str, str]:
    """{fileName, fileType, data} with the archive base64-encoded."""
    return {
        "fileName": result.filename,
        "fileType": result.target.extension.lstrip("."),
        "data": base64.b64encode(result.data).decode("ascii"),
    }


async def upload_archive(
    result: ExportResult,
    url: str,
    timeout: float = 30.0,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """POST an archive to url and return the endpoint's JSON reply."""
    if not url:
        raise UploadError("no upload URL configured")
    payload = build_upload_payload(result)

    async def post(http: httpx.AsyncClient) -> dict[str, Any]:
        try:
            response = await http.post(url, json=payload, timeout=timeout)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("upload of %s failed: %s - %s", result.filename, e.response.status_code, e.response.text)
            raise UploadError(f"upload failed with HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("upload of %s failed: %s", result.filename, e)
            raise UploadError(f"upload failed: {e}") from e
        logger.info("uploaded %s (%d bytes)", result.filename, len(result.data))
        return response.json() if response.content else {}

    if client is not None:
        return await post(client)
    async with httpx.AsyncClient() as http:
        return await post(http)
