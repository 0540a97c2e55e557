# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Gain map XMP writer

This module generates the two XMP documents of an Ultra HDR JPEG:
the primary image's GContainer directory (primary image + gain map
items) and the gain map image's hdrgm parameters. It also wraps an XMP
document into an xpacket and into the APP1 payload form read by
gainmapxmp.xmp_parser.

Copyright 2025 DNAi inc.
"""

import logging
import math
import re
import xml.etree.ElementTree as ET
from typing import Any, List, Optional, Sequence

from gainmapxmp.config import DEFAULT_CONFIG, XMPWriterConfig
from gainmapxmp.exceptions import MetadataWriteError
from gainmapxmp.metadata import GainMapMetadata
from gainmapxmp.xmp_tags import (
    BOOL_FALSE,
    CONTAINER_DIRECTORY,
    CONTAINER_ITEM,
    CONTAINER_PREFIX,
    CONTAINER_URI,
    GAIN_MAP_PREFIX,
    GAIN_MAP_URI,
    ITEM_LENGTH,
    ITEM_MIME,
    ITEM_PREFIX,
    ITEM_SEMANTIC,
    ITEM_URI,
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
    RDF_LI,
    RDF_PARSE_TYPE,
    RDF_PREFIX,
    RDF_RDF,
    RDF_SEQ,
    RDF_URI,
    SEMANTIC_GAIN_MAP,
    SEMANTIC_PRIMARY,
    X_PREFIX,
    X_URI,
    XMP_HEADER,
    XMPMETA,
    XMPTK,
)

logger = logging.getLogger(__name__)

XPACKET_START = b'<?xpacket begin="\xef\xbb\xbf" id="W5M0MpCehiHzreSzNTczkc9d"?>\n'
XPACKET_END = b'\n<?xpacket end="w"?>'

# APP1 segment length field is 16 bits and counts itself
MAX_APP1_PAYLOAD = 65535 - 2

# Characters outside the XML 1.0 Char production
_XML_ILLEGAL = re.compile('[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]')


def format_value(value: Any) -> str:
    """
    Format an attribute value.

    Floats use the shortest representation that parses back to the
    same value.
    """
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        return repr(value)
    return str(value)


class XmlWriter:
    """
    Incremental XML writer with explicit element depth.

    Elements are opened with start_element() and receive namespace
    declarations and attributes until a child is opened. Elements can
    be closed down to a depth returned by start_element(), or all at
    once with finish_writing().
    """

    def __init__(self, config: Optional[XMPWriterConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self._root: Optional[ET.Element] = None
        self._open: List[ET.Element] = []

    @property
    def depth(self) -> int:
        return len(self._open)

    def start_element(self, name: str) -> int:
        """
        Open an element as a child of the innermost open element.

        Args:
            name: Qualified element name

        Returns:
            Depth before the element was opened; passing it to
            finish_elements_to_depth() closes this element
        """
        depth = len(self._open)
        if self._open:
            element = ET.SubElement(self._open[-1], name)
        elif self._root is None:
            element = ET.Element(name)
            self._root = element
        else:
            raise MetadataWriteError(f"cannot start {name}: document root is already closed")
        self._open.append(element)
        return depth

    def start_elements(self, names: Sequence[str]) -> int:
        depth = len(self._open)
        for name in names:
            self.start_element(name)
        return depth

    def _current(self) -> ET.Element:
        if not self._open:
            raise MetadataWriteError("no open element to write to")
        return self._open[-1]

    def write_xmlns(self, prefix: str, uri: str) -> None:
        self._current().set(f'xmlns:{prefix}', uri)

    def write_attribute(self, name: str, value: Any) -> None:
        """
        Set an attribute on the innermost open element.

        Raises:
            MetadataWriteError: If the formatted value contains a
                character XML cannot represent
        """
        text = format_value(value)
        match = _XML_ILLEGAL.search(text)
        if match:
            raise MetadataWriteError(
                f"{name} contains character {match.group()!r} that cannot be written to XML"
            )
        self._current().set(name, text)

    def finish_elements_to_depth(self, depth: int) -> None:
        del self._open[depth:]

    def finish_writing(self) -> str:
        """
        Close all open elements and serialize the document.

        Returns:
            XML text without an XML declaration
        """
        self._open.clear()
        if self._root is None:
            return ''

        # Indent in place; attribute values keep their escaped whitespace
        if self.config.pretty_print:
            ET.indent(self._root, space=self.config.indent)

        # XMP packets carry no XML declaration
        return ET.tostring(self._root, encoding='unicode', method='xml')


def _start_description(writer: XmlWriter, config: XMPWriterConfig) -> None:
    writer.start_element(XMPMETA)
    writer.write_xmlns(X_PREFIX, X_URI)
    writer.write_attribute(XMPTK, config.xmp_toolkit)
    writer.start_element(RDF_RDF)
    writer.write_xmlns(RDF_PREFIX, RDF_URI)
    writer.start_element(RDF_DESCRIPTION)


def _log2(value: float, name: str) -> float:
    if not value > 0:
        raise MetadataWriteError(f"{name} must be positive to be stored as log2, got {value}")
    return math.log2(value)


def generate_xmp_for_primary_image(secondary_image_length: int,
                                   metadata: GainMapMetadata,
                                   config: Optional[XMPWriterConfig] = None) -> str:
    """
    Generate the primary image XMP: a GContainer directory listing the
    primary image and the gain map image.

    Args:
        secondary_image_length: Size in bytes of the encoded gain map image
        metadata: Gain map metadata (only the version is used)
        config: Writer settings

    Returns:
        XMP document text
    """
    config = config or DEFAULT_CONFIG
    if secondary_image_length < 0:
        raise MetadataWriteError(
            f"gain map image length must be non-negative, got {secondary_image_length}"
        )

    writer = XmlWriter(config)
    _start_description(writer, config)
    writer.write_xmlns(CONTAINER_PREFIX, CONTAINER_URI)
    writer.write_xmlns(ITEM_PREFIX, ITEM_URI)
    writer.write_xmlns(GAIN_MAP_PREFIX, GAIN_MAP_URI)
    writer.write_attribute(MAP_VERSION, metadata.version)

    writer.start_elements([CONTAINER_DIRECTORY, RDF_SEQ])

    item_depth = writer.start_element(RDF_LI)
    writer.write_attribute(RDF_PARSE_TYPE, 'Resource')
    writer.start_element(CONTAINER_ITEM)
    writer.write_attribute(ITEM_SEMANTIC, SEMANTIC_PRIMARY)
    writer.write_attribute(ITEM_MIME, config.item_mime_type)
    writer.finish_elements_to_depth(item_depth)

    writer.start_element(RDF_LI)
    writer.write_attribute(RDF_PARSE_TYPE, 'Resource')
    writer.start_element(CONTAINER_ITEM)
    writer.write_attribute(ITEM_SEMANTIC, SEMANTIC_GAIN_MAP)
    writer.write_attribute(ITEM_MIME, config.item_mime_type)
    writer.write_attribute(ITEM_LENGTH, int(secondary_image_length))

    return writer.finish_writing()


def generate_xmp_for_secondary_image(metadata: GainMapMetadata,
                                     config: Optional[XMPWriterConfig] = None) -> str:
    """
    Generate the gain map image XMP: all hdrgm parameters as attributes
    of a single rdf:Description.

    Boost and capacity values are written as base-2 logarithms.
    BaseRenditionIsHDR is always False.

    Args:
        metadata: Gain map metadata
        config: Writer settings

    Returns:
        XMP document text

    Raises:
        MetadataWriteError: If a boost or capacity value is not positive
    """
    config = config or DEFAULT_CONFIG

    writer = XmlWriter(config)
    _start_description(writer, config)
    writer.write_xmlns(GAIN_MAP_PREFIX, GAIN_MAP_URI)
    writer.write_attribute(MAP_VERSION, metadata.version)
    writer.write_attribute(MAP_GAIN_MAP_MIN, _log2(metadata.min_content_boost, MAP_GAIN_MAP_MIN))
    writer.write_attribute(MAP_GAIN_MAP_MAX, _log2(metadata.max_content_boost, MAP_GAIN_MAP_MAX))
    writer.write_attribute(MAP_GAMMA, float(metadata.gamma))
    writer.write_attribute(MAP_OFFSET_SDR, float(metadata.offset_sdr))
    writer.write_attribute(MAP_OFFSET_HDR, float(metadata.offset_hdr))
    writer.write_attribute(MAP_HDR_CAPACITY_MIN,
                           _log2(metadata.hdr_capacity_min, MAP_HDR_CAPACITY_MIN))
    writer.write_attribute(MAP_HDR_CAPACITY_MAX,
                           _log2(metadata.hdr_capacity_max, MAP_HDR_CAPACITY_MAX))
    writer.write_attribute(MAP_BASE_RENDITION_IS_HDR, BOOL_FALSE)

    return writer.finish_writing()


def build_xmp_packet(xmp_xml: str) -> bytes:
    """
    Wrap an XMP document in xpacket processing instructions.

    Args:
        xmp_xml: XMP document text

    Returns:
        XMP packet as UTF-8 bytes
    """
    return XPACKET_START + xmp_xml.encode('utf-8') + XPACKET_END


def build_xmp_payload(xmp_xml: str, wrap: bool = True) -> bytes:
    """
    Build the APP1 payload for an XMP document.

    The payload is the NUL-terminated XMP namespace followed by the
    packet. The APP1 marker and length field are not included.

    Args:
        xmp_xml: XMP document text
        wrap: Wrap the document in xpacket processing instructions

    Returns:
        Payload bytes

    Raises:
        MetadataWriteError: If the payload does not fit one APP1 segment
    """
    packet = build_xmp_packet(xmp_xml) if wrap else xmp_xml.encode('utf-8')
    payload = XMP_HEADER + packet
    if len(payload) > MAX_APP1_PAYLOAD:
        raise MetadataWriteError("XMP packet too large for single APP1 segment")
    logger.debug("Built XMP payload of %d bytes", len(payload))
    return payload
