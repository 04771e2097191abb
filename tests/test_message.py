from __future__ import annotations

from core.message import TITLE_PLACEHOLDER, build_consolidated_message, extract_title
from core.models import Record

from fakes import checkbox, title


def test_body_lists_titles_in_order_under_count_header() -> None:
    message = build_consolidated_message(["A", "B"])

    lines = message.body.split("\n")
    assert "2" in lines[0]
    assert lines[1] == ""
    assert lines[2:] == ["- A", "- B"]


def test_single_title_header_is_singular() -> None:
    message = build_consolidated_message(["Netflix"])

    assert message.header.startswith("You have 1 subscription that needs attention")
    assert message.lines == ("- Netflix",)


def test_extract_title_uses_first_span() -> None:
    record = Record(id="p1", properties={"name": title("Spotify", " Family")})
    assert extract_title(record, "name") == "Spotify"


def test_extract_title_placeholder_for_bad_shapes() -> None:
    cases = [
        Record(id="missing", properties={}),
        Record(id="wrong-type", properties={"name": checkbox(True)}),
        Record(id="empty", properties={"name": {"type": "title", "title": []}}),
        Record(id="not-list", properties={"name": {"type": "title", "title": "oops"}}),
        Record(id="blank-span", properties={"name": {"type": "title", "title": [{"plain_text": ""}]}}),
        Record(id="partial", properties=None),
    ]
    for record in cases:
        assert extract_title(record, "name") == TITLE_PLACEHOLDER, record.id
