import pytest

from gainmapxmp.exceptions import XMPSyntaxError
from gainmapxmp.xmp_scanner import (
    EventKind,
    GainMapXMPScanner,
    MarkupEvent,
    ScanState,
    next_state,
    parse_decimal,
    tokenize,
)

NS, ST, DN = ScanState.NOT_STARTED, ScanState.STARTED, ScanState.DONE


def start(name):
    return MarkupEvent(EventKind.ELEMENT_START, name)


def end(name):
    return MarkupEvent(EventKind.ELEMENT_END, name)


def attr(name, value):
    return [
        MarkupEvent(EventKind.ATTRIBUTE_NAME, name),
        MarkupEvent(EventKind.ATTRIBUTE_VALUE, value),
    ]


@pytest.mark.parametrize(
    "state, event, expected",
    [
        (NS, start("rdf:Description"), ST),
        (NS, start("rdf:RDF"), NS),
        (NS, end("rdf:RDF"), NS),
        (ST, start("Container:Directory"), NS),
        (ST, end("rdf:Description"), DN),
        (ST, attr("hdrgm:Version", "1.0")[0], ST),
        (DN, start("rdf:Description"), DN),
        (DN, start("rdf:li"), DN),
        (DN, end("rdf:RDF"), DN),
    ],
)
def test_next_state(state, event, expected):
    assert next_state(state, event) is expected


def test_next_state_custom_target():
    assert next_state(NS, start("x:xmpmeta"), target="x:xmpmeta") is ST


def test_attributes_recorded_inside_target():
    scanner = GainMapXMPScanner()
    scanner.feed(
        [start("x:xmpmeta"), start("rdf:RDF"), start("rdf:Description")]
        + attr("xmlns:hdrgm", "http://ns.adobe.com/hdr-gain-map/1.0/")
        + attr("hdrgm:Version", "1.0")
        + attr("hdrgm:GainMapMax", "3")
        + attr("hdrgm:Gamma", "2.2")
        + [end("rdf:Description"), end("rdf:RDF"), end("x:xmpmeta")]
    )
    assert scanner.state is DN
    version = scanner.get_version()
    assert version.found and version.parsed and version.value == "1.0"
    assert scanner.get_max_content_boost().value == pytest.approx(8.0)
    assert scanner.get_gamma().value == pytest.approx(2.2)
    assert not scanner.get_min_content_boost().found


def test_attributes_outside_target_are_ignored():
    scanner = GainMapXMPScanner()
    scanner.feed(
        [start("x:xmpmeta")]
        + attr("hdrgm:Version", "before")
        + attr("hdrgm:Gamma", "5")
        + [start("rdf:Description")]
        + attr("hdrgm:GainMapMax", "1")
        + [end("rdf:Description"), start("rdf:Description")]
        + attr("hdrgm:Version", "after")
        + attr("hdrgm:Gamma", "7")
        + [end("rdf:Description"), end("x:xmpmeta")]
    )
    assert scanner.state is DN
    assert not scanner.get_version().found
    assert not scanner.get_gamma().found
    assert scanner.get_max_content_boost().value == pytest.approx(2.0)


def test_value_after_unknown_attribute_is_dropped():
    scanner = GainMapXMPScanner()
    scanner.feed(
        [start("rdf:Description")]
        + attr("hdrgm:Unknown", "9")
        + [MarkupEvent(EventKind.ATTRIBUTE_VALUE, "stray")]
        + [end("rdf:Description")]
    )
    assert all(not raw.found for raw in scanner.attributes.values())


def test_accessors_report_nothing_before_done():
    scanner = GainMapXMPScanner()
    scanner.feed([start("rdf:Description")] + attr("hdrgm:Version", "1.0"))
    assert scanner.state is ST
    lookup = scanner.get_version()
    assert not lookup.found
    assert not lookup.parsed


def test_child_element_abandons_target():
    scanner = GainMapXMPScanner()
    scanner.feed(
        [start("rdf:Description")]
        + attr("hdrgm:Version", "1.0")
        + [start("Container:Directory"), end("Container:Directory"), end("rdf:Description")]
    )
    assert scanner.state is NS
    assert not scanner.get_version().found


@pytest.mark.parametrize(
    "text, found, parsed",
    [("", False, False), ("abc", True, False), ("1.5", True, True)],
)
def test_found_and_parsed_are_distinct(text, found, parsed):
    scanner = GainMapXMPScanner()
    events = [start("rdf:Description")]
    if found:
        events += attr("hdrgm:OffsetSDR", text)
    scanner.feed(events + [end("rdf:Description")])
    lookup = scanner.get_offset_sdr()
    assert lookup.found is found
    assert lookup.parsed is parsed


@pytest.mark.parametrize(
    "text, expected",
    [("True", True), ("False", False), ("true", None), ("1", None), (" False", None)],
)
def test_base_rendition_literal(text, expected):
    scanner = GainMapXMPScanner()
    scanner.feed(
        [start("rdf:Description")] + attr("hdrgm:BaseRenditionIsHDR", text) + [end("rdf:Description")]
    )
    lookup = scanner.get_base_rendition_is_hdr()
    assert lookup.found
    assert lookup.value is expected
    assert lookup.parsed is (expected is not None)


def test_log2_overflow_is_a_parse_failure():
    scanner = GainMapXMPScanner()
    scanner.feed(
        [start("rdf:Description")] + attr("hdrgm:HDRCapacityMax", "5000") + [end("rdf:Description")]
    )
    lookup = scanner.get_hdr_capacity_max()
    assert lookup.found
    assert not lookup.parsed


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1", 1.0),
        ("-0.5", -0.5),
        ("+.25", 0.25),
        ("3.", 3.0),
        (" 2.5e-1 ", 0.25),
        ("1E+2", 100.0),
        ("", None),
        ("abc", None),
        ("1.5abc", None),
        ("nan", None),
        ("inf", None),
        ("1e400", None),
        ("0x10", None),
    ],
)
def test_parse_decimal(text, expected):
    assert parse_decimal(text) == expected


def test_tokenize_event_order():
    events = []
    tokenize(b'<a x="1" y="2"><b z="3"/></a>', events.append)
    assert events == [
        start("a"),
        *attr("x", "1"),
        *attr("y", "2"),
        start("b"),
        *attr("z", "3"),
        end("b"),
        end("a"),
    ]


def test_tokenize_keeps_qualified_names():
    events = []
    tokenize(b'<rdf:Description hdrgm:Version="1.0"/>', events.append)
    assert events[0] == start("rdf:Description")
    assert events[1] == MarkupEvent(EventKind.ATTRIBUTE_NAME, "hdrgm:Version")


def test_tokenize_reports_structural_errors():
    with pytest.raises(XMPSyntaxError):
        tokenize(b"<a><b></a>", lambda event: None)


def test_scan_resets_between_documents():
    scanner = GainMapXMPScanner()
    scanner.scan(b'<rdf:Description hdrgm:Version="1.0" hdrgm:Gamma="2"/>')
    assert scanner.get_gamma().found

    scanner.scan(b'<rdf:Description hdrgm:Version="2.0"/>')
    assert scanner.get_version().value == "2.0"
    assert not scanner.get_gamma().found
