"""Terminal presentation of a discovered catalog.

Sensitive entries are masked the way the gallery page hides them: the label is
shown with a warning, the link stays hidden until the user asks to reveal it.
"""
import json
from typing import List

from rich.box import ROUNDED
from rich.table import Table
from rich.text import Text

from vidgal.domain.models import CatalogItem
from vidgal.domain.paths import display_label

LOADING_MESSAGE = "Loading videos…"


def nothing_found_message(media_label: str = "MP4") -> str:
    return (
        f"No {media_label} videos found in the videos directory. "
        "Ensure files are present and publicly readable."
    )


def build_catalog_table(items: List[CatalogItem], reveal_sensitive: bool = False) -> Table:
    table = Table(box=ROUNDED, expand=False, title=f"Videos ({len(items)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title")
    table.add_column("URL")
    table.add_column("Poster", style="dim")

    for idx, item in enumerate(items, start=1):
        entry = item.entry
        label = display_label(entry.name) or entry.name
        title = Text(label)
        url = Text(entry.url, style="cyan")
        poster = Text(entry.poster or "")

        if item.sensitive:
            title = Text.assemble(("⚠ NSFW ", "bold red"), label)
            if not reveal_sensitive:
                url = "[dim]hidden (use --reveal-sensitive)[/]"
                poster = Text("")

        table.add_row(str(idx), title, url, poster)

    return table


def catalog_to_json(items: List[CatalogItem]) -> str:
    payload = [
        {
            "name": item.entry.name,
            "url": item.entry.url,
            "poster": item.entry.poster,
            "sensitive": item.sensitive,
        }
        for item in items
    ]
    return json.dumps(payload, indent=2, ensure_ascii=False)
