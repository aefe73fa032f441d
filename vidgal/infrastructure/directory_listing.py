import logging
from typing import Iterator, List, Optional
from bs4 import BeautifulSoup
from vidgal.domain.errors import EmptyError, FetchError
from vidgal.domain.models import VideoEntry
from vidgal.domain.normalizer import EntryNormalizer
from vidgal.domain.paths import name_from_path
from vidgal.infrastructure.http_fetcher import Fetcher

def media_label(extensions: List[str]) -> str:
    """'MP4' for [".mp4"], 'MP4/WEBM' for [".mp4", ".webm"]."""
    return "/".join(ext.lstrip(".").upper() for ext in extensions)

class DirectoryListingSource:
    """Scrapes an HTML directory listing for media files."""

    def __init__(
        self,
        fetcher: Fetcher,
        normalizer: EntryNormalizer,
        directory: str = "videos/",
        extensions: Optional[List[str]] = None,
    ):
        self.fetcher = fetcher
        self.normalizer = normalizer
        self.directory = directory
        self.extensions = [(ext if ext.startswith(".") else f".{ext}").lower() for ext in (extensions or [".mp4"])]
        self.logger = logging.getLogger(__name__)

    def load(self) -> List[VideoEntry]:
        response = self.fetcher.fetch_text(self.directory)
        if not 200 <= response.status < 300:
            raise FetchError(
                f"Unable to read directory listing at {self.directory} (status {response.status}).",
                url=self.directory,
                status=response.status,
            )

        entries = self.normalizer.normalize_all(
            {"url": href} for href in self.candidate_links(response.body)
        )

        if not entries:
            raise EmptyError(
                f"No {media_label(self.extensions)} files were discovered in the videos directory. "
                "Enable directory listings or add a videos.json manifest.",
                url=self.directory,
            )

        self.logger.info(f"LISTING_LOADED: {self.directory} entries={len(entries)}")
        return entries

    def candidate_links(self, html: str) -> Iterator[str]:
        """Yields cleaned hrefs that point at supported media files, in document order."""
        soup = BeautifulSoup(html, "html.parser")
        for anchor in soup.find_all("a", href=True):
            href = anchor.get("href") or ""
            href = href.split("?", 1)[0]
            if href.startswith("./"):
                href = href[2:]

            # Parent links and empty hrefs (sort-order query links) are not files
            if not href or href.startswith("../"):
                continue

            if not name_from_path(href).lower().endswith(tuple(self.extensions)):
                continue

            yield href
