"""Tests for the scanner."""

from instance_counter.page_parser import parse_page_json
from instance_counter.scanner import count_instances, scan


def _instance(iid: str, component: str, visible: bool = True) -> dict:
    return {"id": iid, "type": "INSTANCE", "mainComponent": component, "visible": visible}


def _sample_page() -> dict:
    """10 visible + 5 hidden Card, 2 visible .Internal/Helper, 3 Button variants, 1 Tag."""
    children = [
        {"id": "card", "type": "COMPONENT", "name": "Card"},
        {"id": "helper", "type": "COMPONENT", "name": ".Internal/Helper"},
        {"id": "tag", "type": "COMPONENT", "name": "Tag"},
        {
            "id": "btn_set",
            "type": "COMPONENT_SET",
            "name": "Button",
            "children": [
                {"id": "btn_sm", "type": "COMPONENT", "name": "Size=Small"},
                {"id": "btn_lg", "type": "COMPONENT", "name": "Size=Large"},
            ],
        },
    ]
    children += [_instance(f"c{i}", "card") for i in range(10)]
    children += [_instance(f"h{i}", "card", visible=False) for i in range(5)]
    children += [_instance(f"x{i}", "helper") for i in range(2)]
    children += [_instance("t0", "tag")]
    children += [
        _instance("b0", "btn_sm"),
        _instance("b1", "btn_lg"),
        _instance("b2", "btn_lg", visible=False),
    ]
    children += [_instance("dangling", "deleted")]
    return {"id": "p", "type": "PAGE", "name": "Screens", "children": children}


def test_scan_groups_by_display_name():
    snap = scan(parse_page_json(_sample_page()), timestamp="2024-05-01T12:00:00.000Z")
    by_name = {e.name: e for e in snap.entries}
    assert set(by_name) == {"Card", ".Internal/Helper", "Tag", "Button"}
    assert by_name["Card"].count == 15
    assert by_name["Card"].hidden_count == 5
    assert by_name["Card"].visible_count == 10
    assert by_name["Button"].count == 3
    assert by_name["Button"].hidden_count == 1


def test_scan_counts_invariant():
    snap = scan(parse_page_json(_sample_page()))
    for e in snap.entries:
        assert e.count == e.hidden_count + e.visible_count
    assert snap.total_instances == sum(e.count for e in snap.entries) == 21
    assert snap.total_hidden == sum(e.hidden_count for e in snap.entries) == 6


def test_scan_sorted_by_count_with_stable_ties():
    snap = scan(parse_page_json(_sample_page()))
    assert [e.name for e in snap.entries] == ["Card", "Button", ".Internal/Helper", "Tag"]


def test_scan_ties_keep_first_encounter_order():
    page = parse_page_json({
        "type": "PAGE",
        "name": "P",
        "children": [
            {"id": "b", "type": "COMPONENT", "name": "Beta"},
            {"id": "a", "type": "COMPONENT", "name": "Alpha"},
            _instance("1", "b"),
            _instance("2", "a"),
        ],
    })
    snap = scan(page)
    assert [e.name for e in snap.entries] == ["Beta", "Alpha"]


def test_dotted_flag():
    snap = scan(parse_page_json(_sample_page()))
    dotted = [e.name for e in snap.entries if e.is_dotted]
    assert dotted == [".Internal/Helper"]


def test_scan_metadata():
    snap = scan(parse_page_json(_sample_page()), timestamp="2024-05-01T12:00:00.000Z")
    assert snap.page_name == "Screens"
    assert snap.timestamp == "2024-05-01T12:00:00.000Z"


def test_scan_default_timestamp_is_iso_utc():
    snap = scan(parse_page_json(_sample_page()))
    assert snap.timestamp.endswith("Z")
    assert "T" in snap.timestamp


def test_scan_empty_page():
    snap = scan(parse_page_json({"type": "PAGE", "name": "Empty", "children": []}))
    assert snap.entries == ()
    assert snap.total_instances == 0
    assert snap.total_hidden == 0


def test_count_instances_uses_instance_visibility():
    page = parse_page_json({
        "type": "PAGE",
        "name": "P",
        "children": [
            {"id": "k", "type": "COMPONENT", "name": "Kbd", "visible": False},
            _instance("1", "k"),
        ],
    })
    assert count_instances(page) == {"Kbd": {"count": 1, "hidden": 0, "visible": 1}}


def test_snapshot_to_dict():
    data = scan(parse_page_json(_sample_page()), timestamp="t").to_dict()
    assert data["totalInstances"] == 21
    assert data["totalHidden"] == 6
    assert data["instances"][2] == {
        "name": ".Internal/Helper",
        "count": 2,
        "hiddenCount": 0,
        "visibleCount": 2,
        "isDotted": True,
    }
