import pytest

from tzsource.catalog.errors import ListingParseError, MalformedLocationError
from tzsource.ingest.listing import entry_location, extract_versions, normalize_entry

LISTING = """<html><head><title>icu - Revision 1: /data/trunk/tzdata/icu</title></head>
<body>
 <h2>icu - Revision 1: /data/trunk/tzdata/icu</h2>
 <ul>
  <li><a href="../">..</a></li>
  <li><a href="2007h/">2007h/</a></li>
  <li><a href="2007k/">2007k/</a></li>
  <li><a href="2007j/">2007j/</a></li>
 </ul>
</body></html>
"""


def test_extract_versions_keeps_document_order():
    assert list(extract_versions(LISTING)) == ["2007h", "2007k", "2007j"]


def test_extract_versions_ignores_text_outside_list_items():
    document = "<p>2006a/</p><ul><li>2007a/</li></ul>trailing/"
    assert list(extract_versions(document)) == ["2007a"]


def test_extract_versions_accepts_chunked_bytes():
    encoded = LISTING.encode("utf-8")
    chunks = [encoded[i : i + 7] for i in range(0, len(encoded), 7)]
    assert list(extract_versions(chunks)) == ["2007h", "2007k", "2007j"]


def test_extract_versions_is_lazy():
    consumed = []

    def chunks():
        for chunk in ("<ul><li>2007a/</li>", "<li>2007b/</li>", "</ul>"):
            consumed.append(chunk)
            yield chunk

    iterator = extract_versions(chunks())
    assert next(iterator) == "2007a"
    assert len(consumed) == 1


def test_extract_versions_restarts_on_each_call():
    assert list(extract_versions(LISTING)) == list(extract_versions(LISTING))


def test_extract_versions_flushes_unterminated_item():
    assert list(extract_versions("<ul><li>2007c/")) == ["2007c"]


def test_normalize_entry_strips_single_separator_and_parent_marker():
    assert normalize_entry("2007k/") == "2007k"
    assert normalize_entry("  2007k  ") == "2007k"
    assert normalize_entry("2007k//") == "2007k/"
    assert normalize_entry("..") is None
    assert normalize_entry("../") is None
    assert normalize_entry("\n  ") is None


def test_entry_location_appends_suffix():
    location = entry_location("http://example.com/tzdata/", "2007k", "/be/zoneinfo.res")
    assert location == "http://example.com/tzdata/2007k/be/zoneinfo.res"


def test_entry_location_rejects_invalid_url():
    with pytest.raises(MalformedLocationError):
        entry_location("http://example.com:notaport/", "2007k", "/be/zoneinfo.res")


def test_extract_versions_joins_names_split_across_chunks():
    chunks = ["<ul><li>20", "07h/</li><li>2007k/</li></ul>"]
    assert list(extract_versions(chunks)) == ["2007h", "2007k"]


def test_extract_versions_joins_bytes_split_inside_a_name():
    chunks = [b"<ul><li><a href=\"2007h/\">2007", b"h/</a></li><li>20", b"07k/", b"</li></ul>"]
    assert list(extract_versions(chunks)) == ["2007h", "2007k"]


def test_extract_versions_raises_on_undecodable_bytes():
    with pytest.raises(ListingParseError):
        list(extract_versions([b"<ul><li>\xff\xfe2007h/</li></ul>"]))


def test_extract_versions_raises_on_unknown_encoding():
    with pytest.raises(ListingParseError):
        list(extract_versions([b"<ul><li>2007h/</li></ul>"], encoding="no-such-charset"))
