# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Gain map XMP token scanner

A single-pass scanner that looks for the first rdf:Description element
and records the raw text of the hdrgm attributes declared on it.

The scanner consumes four kinds of markup events (element start,
element end, attribute name, attribute value). tokenize() produces
those events from XML bytes with the expat tokenizer, without namespace
processing, so qualified names are compared exactly as written.
The state machine itself is the pure function next_state() and can be
driven with synthetic event sequences.

Copyright 2025 DNAi inc.
"""

import math
import re
from collections import namedtuple
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional
from xml.parsers import expat

from gainmapxmp.exceptions import XMPSyntaxError
from gainmapxmp.xmp_tags import (
    BOOL_FALSE,
    BOOL_TRUE,
    GAIN_MAP_ATTRIBUTES,
    MAP_BASE_RENDITION_IS_HDR,
    MAP_GAIN_MAP_MAX,
    MAP_GAIN_MAP_MIN,
    MAP_GAMMA,
    MAP_HDR_CAPACITY_MAX,
    MAP_HDR_CAPACITY_MIN,
    MAP_OFFSET_HDR,
    MAP_OFFSET_SDR,
    MAP_VERSION,
    RDF_DESCRIPTION,
)


class ScanState(Enum):
    """Position of the scanner relative to the target element."""
    NOT_STARTED = "not_started"
    STARTED = "started"  # Inside the target element's start tag or body
    DONE = "done"  # Target element closed; attributes are frozen


class EventKind(Enum):
    """Markup events delivered by a tokenizer."""
    ELEMENT_START = "element_start"
    ELEMENT_END = "element_end"
    ATTRIBUTE_NAME = "attribute_name"
    ATTRIBUTE_VALUE = "attribute_value"


MarkupEvent = namedtuple('MarkupEvent', ['kind', 'token'])

RawAttribute = namedtuple('RawAttribute', ['text', 'found'])

# found: attribute was declared on the target element
# parsed: raw text coerced to the attribute's type
AttributeLookup = namedtuple('AttributeLookup', ['found', 'parsed', 'value'])

_DECIMAL_PATTERN = re.compile(r'\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?\s*')


def next_state(state: ScanState, event: MarkupEvent,
               target: str = RDF_DESCRIPTION) -> ScanState:
    """
    Compute the scanner state after one markup event.

    Args:
        state: Current state
        event: Markup event
        target: Qualified name of the element to capture

    Returns:
        New state
    """
    if state is ScanState.DONE:
        return state
    if event.kind is EventKind.ELEMENT_START:
        if event.token == target:
            return ScanState.STARTED
        return ScanState.NOT_STARTED
    if event.kind is EventKind.ELEMENT_END and state is ScanState.STARTED:
        return ScanState.DONE
    return state


def tokenize(xml_data: bytes, on_event: Callable[[MarkupEvent], None]) -> None:
    """
    Tokenize XML and deliver markup events in document order.

    Each start tag produces ELEMENT_START followed by one name/value
    event pair per attribute. Each end tag (or the end of a
    self-closing tag) produces ELEMENT_END.

    Args:
        xml_data: XML document bytes
        on_event: Callback invoked for every event

    Raises:
        XMPSyntaxError: If the tokenizer reports a structural error
    """
    parser = expat.ParserCreate()
    parser.ordered_attributes = True

    def start_element(name, attributes):
        on_event(MarkupEvent(EventKind.ELEMENT_START, name))
        for i in range(0, len(attributes), 2):
            on_event(MarkupEvent(EventKind.ATTRIBUTE_NAME, attributes[i]))
            on_event(MarkupEvent(EventKind.ATTRIBUTE_VALUE, attributes[i + 1]))

    def end_element(name):
        on_event(MarkupEvent(EventKind.ELEMENT_END, name))

    parser.StartElementHandler = start_element
    parser.EndElementHandler = end_element

    try:
        parser.Parse(bytes(xml_data), True)
    except expat.ExpatError as e:
        raise XMPSyntaxError("xml parser returned with error") from e


def parse_decimal(text: str) -> Optional[float]:
    """
    Parse a decimal number literal.

    Args:
        text: Raw attribute text

    Returns:
        Finite float, or None if the text is not a number
    """
    if not _DECIMAL_PATTERN.fullmatch(text):
        return None
    value = float(text)
    if not math.isfinite(value):
        return None
    return value


class GainMapXMPScanner:
    """
    Event-driven scanner for hdrgm attributes on rdf:Description.

    Only the first rdf:Description is captured. Attributes seen before
    it starts or after it closes are ignored even when their names are
    in the hdrgm vocabulary. If another element starts before the
    target closes, the scan falls back to NOT_STARTED and the accessors
    report nothing.
    """

    def __init__(self, target: str = RDF_DESCRIPTION):
        self.target = target
        self.reset()

    def reset(self) -> None:
        """Clear state and all captured attributes."""
        self.state = ScanState.NOT_STARTED
        self._last_attribute: Optional[str] = None
        self._attributes: Dict[str, RawAttribute] = {
            name: RawAttribute('', False) for name in GAIN_MAP_ATTRIBUTES
        }

    @property
    def attributes(self) -> Dict[str, RawAttribute]:
        return dict(self._attributes)

    def handle(self, event: MarkupEvent) -> None:
        previous = self.state
        self.state = next_state(previous, event, self.target)

        if self.state is not ScanState.STARTED:
            if previous is ScanState.STARTED:
                self._last_attribute = None
            return

        if event.kind is EventKind.ELEMENT_START:
            self._last_attribute = None
        elif event.kind is EventKind.ATTRIBUTE_NAME:
            self._last_attribute = event.token if event.token in self._attributes else None
        elif event.kind is EventKind.ATTRIBUTE_VALUE and self._last_attribute:
            self._attributes[self._last_attribute] = RawAttribute(event.token, True)

    def feed(self, events: Iterable[MarkupEvent]) -> None:
        for event in events:
            self.handle(event)

    def scan(self, xml_data: bytes) -> ScanState:
        """
        Scan an XML document from the beginning.

        Args:
            xml_data: XML document bytes

        Returns:
            Final scanner state

        Raises:
            XMPSyntaxError: If the document is not well-formed
        """
        self.reset()
        tokenize(xml_data, self.handle)
        return self.state

    def _lookup(self, name: str, coerce: Callable[[str], Any]) -> AttributeLookup:
        if self.state is not ScanState.DONE:
            return AttributeLookup(False, False, None)
        raw = self._attributes[name]
        value = coerce(raw.text)
        return AttributeLookup(raw.found, value is not None, value)

    def _lookup_linear(self, name: str) -> AttributeLookup:
        return self._lookup(name, parse_decimal)

    def _lookup_log2(self, name: str) -> AttributeLookup:
        return self._lookup(name, _exp2)

    def get_version(self) -> AttributeLookup:
        return self._lookup(MAP_VERSION, str)

    def get_min_content_boost(self) -> AttributeLookup:
        return self._lookup_log2(MAP_GAIN_MAP_MIN)

    def get_max_content_boost(self) -> AttributeLookup:
        return self._lookup_log2(MAP_GAIN_MAP_MAX)

    def get_gamma(self) -> AttributeLookup:
        return self._lookup_linear(MAP_GAMMA)

    def get_offset_sdr(self) -> AttributeLookup:
        return self._lookup_linear(MAP_OFFSET_SDR)

    def get_offset_hdr(self) -> AttributeLookup:
        return self._lookup_linear(MAP_OFFSET_HDR)

    def get_hdr_capacity_min(self) -> AttributeLookup:
        return self._lookup_log2(MAP_HDR_CAPACITY_MIN)

    def get_hdr_capacity_max(self) -> AttributeLookup:
        return self._lookup_log2(MAP_HDR_CAPACITY_MAX)

    def get_base_rendition_is_hdr(self) -> AttributeLookup:
        return self._lookup(MAP_BASE_RENDITION_IS_HDR, _parse_bool)


def _exp2(text: str) -> Optional[float]:
    exponent = parse_decimal(text)
    if exponent is None:
        return None
    try:
        return math.pow(2.0, exponent)
    except OverflowError:
        return None


def _parse_bool(text: str) -> Optional[bool]:
    if text == BOOL_TRUE:
        return True
    if text == BOOL_FALSE:
        return False
    return None
