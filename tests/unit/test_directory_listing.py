import pytest
from vidgal.domain.errors import EmptyError, ErrorKind, FetchError
from vidgal.infrastructure.directory_listing import DirectoryListingSource, media_label

LISTING = "videos/"


def _source(fetcher, normalizer, extensions=None):
    return DirectoryListingSource(fetcher, normalizer, directory=LISTING, extensions=extensions)


def test_listing_keeps_media_links_only(fake_fetcher, normalizer, listing_html):
    fake_fetcher.responses[LISTING] = (200, listing_html("a.mp4", "b.MP4", "../up.mp4", "notes.txt"))

    entries = _source(fake_fetcher, normalizer).load()

    assert [e.url for e in entries] == ["videos/a.mp4", "videos/b.MP4"]
    assert [e.name for e in entries] == ["a", "b"]
    assert all(e.poster is None for e in entries)


def test_listing_cleans_hrefs(fake_fetcher, normalizer, listing_html):
    fake_fetcher.responses[LISTING] = (200, listing_html(
        "./c.mp4",
        "clip%20two.mp4?download=1",
        "/videos/d.mp4",
        "https://cdn.test/e.mp4",
        "movie.mp4.txt",
        "folder.mp4/",
        "../",
    ))

    entries = _source(fake_fetcher, normalizer).load()

    assert [e.url for e in entries] == [
        "videos/c.mp4",
        "videos/clip%20two.mp4",
        "videos/d.mp4",
        "https://cdn.test/e.mp4",
    ]
    assert entries[1].name == "clip two"


def test_listing_ignores_non_anchor_markup(fake_fetcher, normalizer):
    html = (
        '<html><body><img src="poster.mp4"><link href="style.mp4">'
        '<a name="top">top</a><a href="real.mp4">real</a></body></html>'
    )
    fake_fetcher.responses[LISTING] = (200, html)

    entries = _source(fake_fetcher, normalizer).load()
    assert [e.url for e in entries] == ["videos/real.mp4"]


def test_listing_custom_extensions(fake_fetcher, normalizer, listing_html):
    fake_fetcher.responses[LISTING] = (200, listing_html("a.webm", "b.mp4", "c.mkv"))

    entries = _source(fake_fetcher, normalizer, extensions=["webm", ".MP4"]).load()
    assert [e.url for e in entries] == ["videos/a.webm", "videos/b.mp4"]


def test_listing_http_error(fake_fetcher, normalizer):
    fake_fetcher.responses[LISTING] = (403, "Forbidden")

    with pytest.raises(FetchError) as exc_info:
        _source(fake_fetcher, normalizer).load()

    assert exc_info.value.status == 403
    assert exc_info.value.message == "Unable to read directory listing at videos/ (status 403)."


def test_listing_without_media_is_empty_error(fake_fetcher, normalizer, listing_html):
    fake_fetcher.responses[LISTING] = (200, listing_html("notes.txt", "../"))

    with pytest.raises(EmptyError) as exc_info:
        _source(fake_fetcher, normalizer).load()

    assert exc_info.value.kind is ErrorKind.EMPTY
    assert "No MP4 files were discovered" in exc_info.value.message


def test_listing_transport_failure_propagates(fake_fetcher, normalizer, unreachable):
    fake_fetcher.failures[LISTING] = unreachable(LISTING)
    with pytest.raises(FetchError):
        _source(fake_fetcher, normalizer).load()


def test_media_label():
    assert media_label([".mp4"]) == "MP4"
    assert media_label([".mp4", ".webm"]) == "MP4/WEBM"


def test_listing_names_are_decoded_once(fake_fetcher, normalizer, listing_html):
    fake_fetcher.responses[LISTING] = (200, listing_html("100%2525.mp4", "clip%2520one.mp4"))

    entries = _source(fake_fetcher, normalizer).load()

    assert [e.url for e in entries] == ["videos/100%2525.mp4", "videos/clip%2520one.mp4"]
    assert [e.name for e in entries] == ["100%25", "clip%20one"]
