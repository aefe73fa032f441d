import logging
from typing import Any, List

from vidgal.domain.errors import FetchError, FormatError, NotFoundError
from vidgal.infrastructure.http_fetcher import Fetcher

class ManifestSource:
    """Fetches the declared JSON manifest and checks its shape.

    Accepts a top-level list of raw records or an object with a "files" list.
    Records are returned as-is; normalization is up to the caller.
    """

    def __init__(self, fetcher: Fetcher, manifest_path: str = "videos/videos.json"):
        self.fetcher = fetcher
        self.manifest_path = manifest_path
        self.logger = logging.getLogger(__name__)

    def load(self) -> List[Any]:
        try:
            status, payload = self.fetcher.fetch_json(self.manifest_path)
        except ValueError as exc:
            raise FormatError(
                f"Manifest at {self.manifest_path} is not valid JSON: {exc}",
                url=self.manifest_path,
            ) from exc

        if status == 404:
            raise NotFoundError(f"Manifest not found at {self.manifest_path}", url=self.manifest_path)

        if not 200 <= status < 300:
            raise FetchError(
                f"Unable to load manifest at {self.manifest_path} (status {status}).",
                url=self.manifest_path,
                status=status,
            )

        if isinstance(payload, list):
            records = payload
        elif isinstance(payload, dict) and isinstance(payload.get("files"), list):
            records = payload["files"]
        else:
            raise FormatError(
                "Manifest format invalid. Expected an array or an object with a files array.",
                url=self.manifest_path,
            )

        self.logger.info(f"MANIFEST_LOADED: {self.manifest_path} records={len(records)}")
        return records
