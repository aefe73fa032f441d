"""Discovery pipeline: manifest first, directory listing as fallback.

Flow of one discover() call:
- Load and normalize the manifest; use it when it yields at least one entry
- Otherwise (missing, unreachable, malformed or empty manifest) fall back to
  scraping the directory listing; a listing failure is the only error that
  reaches the caller
- Deduplicate by case-insensitive URL, keeping the first occurrence
- Sort by name, numeric-aware
- Emit events so the presentation layer can report what happened
"""

import logging
from typing import List, NamedTuple, Optional

from vidgal.config.models import AppConfig
from vidgal.domain.errors import DiscoveryError, ErrorKind
from vidgal.domain.events import DiscoveryFailed, DiscoveryFinished, DiscoveryStarted, ManifestSkipped
from vidgal.domain.models import DiscoverySource, VideoEntry
from vidgal.domain.normalizer import EntryNormalizer
from vidgal.domain.paths import PathResolver
from vidgal.infrastructure.directory_listing import DirectoryListingSource
from vidgal.infrastructure.event_bus import EventBus
from vidgal.infrastructure.http_fetcher import Fetcher
from vidgal.infrastructure.manifest_source import ManifestSource
from vidgal.pipeline.ordering import dedupe_entries, sort_entries


class ManifestOutcome(NamedTuple):
    """Result of the manifest attempt: usable entries, or the failure that prevented them."""

    entries: List[VideoEntry]
    failure: Optional[DiscoveryError] = None


class DiscoveryPipeline:
    """Turns the configured sources into an ordered, deduplicated entry list.

    Holds no state between calls; every discover() starts from scratch.

    Args:
        manifest_source: ManifestSource returning raw manifest records.
        listing_source: DirectoryListingSource returning normalized entries.
        normalizer: EntryNormalizer applied to manifest records.
        event_bus: Optional EventBus for lifecycle events.
        base_url: Reported in DiscoveryStarted.
    """

    def __init__(
        self,
        manifest_source: ManifestSource,
        listing_source: DirectoryListingSource,
        normalizer: EntryNormalizer,
        event_bus: Optional[EventBus] = None,
        base_url: str = "",
    ):
        self.manifest_source = manifest_source
        self.listing_source = listing_source
        self.normalizer = normalizer
        self.event_bus = event_bus or EventBus()
        self.base_url = base_url
        self.logger = logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: AppConfig, fetcher: Fetcher, event_bus: Optional[EventBus] = None) -> "DiscoveryPipeline":
        normalizer = EntryNormalizer(PathResolver(config.source.videos_dir))
        return cls(
            manifest_source=ManifestSource(fetcher, manifest_path=config.source.manifest_path),
            listing_source=DirectoryListingSource(
                fetcher,
                normalizer,
                directory=config.source.videos_dir,
                extensions=config.general.extensions,
            ),
            normalizer=normalizer,
            event_bus=event_bus,
            base_url=config.source.base_url,
        )

    def _try_manifest(self) -> ManifestOutcome:
        try:
            records = self.manifest_source.load()
        except DiscoveryError as exc:
            return ManifestOutcome(entries=[], failure=exc)
        return ManifestOutcome(entries=self.normalizer.normalize_all(records))

    def _report_manifest_skip(self, failure: Optional[DiscoveryError]):
        if failure is None:
            reason = "Manifest contained no usable entries"
            self.logger.info(f"MANIFEST_SKIPPED: {reason}")
        elif failure.kind is ErrorKind.NOT_FOUND:
            reason = failure.message
            self.logger.info(f"MANIFEST_SKIPPED: {reason}")
        else:
            reason = failure.message
            self.logger.warning(f"MANIFEST_SKIPPED ({failure.kind.value}): {reason}")

        self.event_bus.publish(ManifestSkipped(kind=failure.kind if failure else None, reason=reason))

    def _load_listing(self) -> List[VideoEntry]:
        try:
            return self.listing_source.load()
        except DiscoveryError as exc:
            self.logger.error(f"DISCOVERY_FAILED ({exc.kind.value}): {exc.message}")
            self.event_bus.publish(DiscoveryFailed(kind=exc.kind, message=exc.message))
            raise

    def discover(self) -> List[VideoEntry]:
        """Returns the sorted, deduplicated entries; raises DiscoveryError only when the listing fallback fails."""
        self.logger.info(f"DISCOVERY_START: {self.base_url}")
        self.event_bus.publish(DiscoveryStarted(base_url=self.base_url))

        outcome = self._try_manifest()
        if outcome.entries:
            source = DiscoverySource.MANIFEST
            found = outcome.entries
        else:
            self._report_manifest_skip(outcome.failure)
            source = DiscoverySource.DIRECTORY_LISTING
            found = self._load_listing()

        entries = sort_entries(dedupe_entries(found))
        duplicates = len(found) - len(entries)

        self.logger.info(
            f"DISCOVERY_END: source={source.value}, found={len(found)}, "
            f"duplicates={duplicates}, entries={len(entries)}"
        )
        self.event_bus.publish(
            DiscoveryFinished(
                source=source,
                records_found=len(found),
                duplicates_removed=duplicates,
                entries_count=len(entries),
            )
        )
        return entries
