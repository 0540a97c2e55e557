# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Gain map XMP decoder

This module decodes hdrgm gain map metadata from an XMP block as found
in a JPEG APP1 payload: the NUL-terminated XMP namespace header followed
by an XMP packet, optionally wrapped in xpacket processing instructions
and followed by padding.

Copyright 2025 DNAi inc.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from gainmapxmp.exceptions import (
    MalformedAttributeError,
    MetadataReadError,
    MissingAttributeError,
    UnsupportedFeatureError,
    XMPFormatError,
)
from gainmapxmp.metadata import (
    DEFAULT_GAMMA,
    DEFAULT_HDR_CAPACITY_MIN,
    DEFAULT_MIN_CONTENT_BOOST,
    DEFAULT_OFFSET,
    GainMapMetadata,
)
from gainmapxmp.xmp_scanner import AttributeLookup, GainMapXMPScanner
from gainmapxmp.xmp_tags import (
    MAP_BASE_RENDITION_IS_HDR,
    MAP_GAIN_MAP_MAX,
    MAP_GAIN_MAP_MIN,
    MAP_GAMMA,
    MAP_HDR_CAPACITY_MAX,
    MAP_HDR_CAPACITY_MIN,
    MAP_OFFSET_HDR,
    MAP_OFFSET_SDR,
    MAP_VERSION,
    XMP_NAMESPACE,
)

logger = logging.getLogger(__name__)

_LT = ord('<')
_GT = ord('>')
_QUESTION = ord('?')


def extract_xml(xmp_data: bytes) -> bytes:
    """
    Strip the namespace header, packet wrapper and padding from an XMP block.

    The tokenizer cannot handle the xpacket processing instructions, so
    the XML body is cut out before parsing: from the first '<' that does
    not open a processing instruction up to the last '>' that does not
    close one, then trailing bytes are dropped until the body ends in '>'.

    Args:
        xmp_data: XMP block starting with the namespace header

    Returns:
        XML body bytes

    Raises:
        XMPFormatError: If the block is too short, the namespace does not
            match, or no XML body remains
    """
    data = bytes(xmp_data)
    min_size = len(XMP_NAMESPACE) + 2
    if len(data) < min_size:
        raise XMPFormatError(
            f"size of xmp block is expected to be atleast {min_size} bytes, "
            f"received only {len(data)} bytes"
        )

    header = data[:len(XMP_NAMESPACE)]
    if header != XMP_NAMESPACE:
        raise XMPFormatError(
            f"mismatch in namespace of xmp block. Expected {XMP_NAMESPACE.decode('ascii')}, "
            f"Got {header.decode('latin-1')}"
        )

    # Skip the namespace and its NUL terminator
    data = data[len(XMP_NAMESPACE) + 1:]

    # Leading packet header: jump to the first '<' not followed by '?'
    for i in range(len(data) - 1):
        if data[i] == _LT and data[i + 1] != _QUESTION:
            data = data[i:]
            break

    # Trailing packet footer: cut after the last '>' not preceded by '?'
    for i in range(len(data) - 1, 0, -1):
        if data[i] == _GT and data[i - 1] != _QUESTION:
            data = data[:i + 1]
            break

    # Padding
    end = len(data)
    while end > 1 and data[end - 1] != _GT:
        end -= 1
    data = data[:end]

    if not data.endswith(b'>'):
        raise XMPFormatError("xmp block holds no xml content after removing packet wrapper and padding")

    return data


def _require(lookup: AttributeLookup, name: str) -> Any:
    if not lookup.found:
        raise MissingAttributeError(name)
    if not lookup.parsed:
        raise MalformedAttributeError(name)
    return lookup.value


def _optional(lookup: AttributeLookup, name: str, default: Any) -> Any:
    if not lookup.found:
        return default
    if not lookup.parsed:
        raise MalformedAttributeError(name)
    return lookup.value


def get_metadata_from_xmp(xmp_data: bytes) -> GainMapMetadata:
    """
    Decode gain map metadata from an XMP block.

    Version, GainMapMax and HDRCapacityMax are required. The remaining
    attributes fall back to their defaults when absent; a present value
    that cannot be parsed is an error.

    Args:
        xmp_data: XMP block starting with the namespace header

    Returns:
        Decoded metadata with linear boost and capacity values

    Raises:
        XMPFormatError: If the block framing is invalid
        XMPSyntaxError: If the XML is not well-formed
        MissingAttributeError: If a required attribute is absent
        MalformedAttributeError: If an attribute value cannot be parsed
        UnsupportedFeatureError: If BaseRenditionIsHDR is True
    """
    xml_data = extract_xml(xmp_data)

    scanner = GainMapXMPScanner()
    scanner.scan(xml_data)

    version = _require(scanner.get_version(), MAP_VERSION)
    max_content_boost = _require(scanner.get_max_content_boost(), MAP_GAIN_MAP_MAX)
    hdr_capacity_max = _require(scanner.get_hdr_capacity_max(), MAP_HDR_CAPACITY_MAX)
    min_content_boost = _optional(
        scanner.get_min_content_boost(), MAP_GAIN_MAP_MIN, DEFAULT_MIN_CONTENT_BOOST
    )
    gamma = _optional(scanner.get_gamma(), MAP_GAMMA, DEFAULT_GAMMA)
    offset_sdr = _optional(scanner.get_offset_sdr(), MAP_OFFSET_SDR, DEFAULT_OFFSET)
    offset_hdr = _optional(scanner.get_offset_hdr(), MAP_OFFSET_HDR, DEFAULT_OFFSET)
    hdr_capacity_min = _optional(
        scanner.get_hdr_capacity_min(), MAP_HDR_CAPACITY_MIN, DEFAULT_HDR_CAPACITY_MIN
    )
    base_rendition_is_hdr = _optional(
        scanner.get_base_rendition_is_hdr(), MAP_BASE_RENDITION_IS_HDR, False
    )
    if base_rendition_is_hdr:
        raise UnsupportedFeatureError("hdr intent as base rendition is not supported")

    metadata = GainMapMetadata(
        version=version,
        max_content_boost=max_content_boost,
        hdr_capacity_max=hdr_capacity_max,
        min_content_boost=min_content_boost,
        gamma=gamma,
        offset_sdr=offset_sdr,
        offset_hdr=offset_hdr,
        hdr_capacity_min=hdr_capacity_min,
        base_rendition_is_hdr=False,
    )
    logger.debug("Decoded gain map metadata version %s from %d bytes of XML",
                 version, len(xml_data))
    return metadata


class XMPGainMapParser:
    """
    Parser for hdrgm gain map metadata stored in an XMP block.
    """

    def __init__(self, file_path: Optional[str] = None, file_data: Optional[bytes] = None):
        """
        Initialize parser.

        Args:
            file_path: Path to a file holding the raw XMP block
            file_data: XMP block bytes (if reading from memory)
        """
        if file_path:
            self.file_path = Path(file_path)
            self.file_data = None
        elif file_data:
            self.file_data = file_data
            self.file_path = None
        else:
            raise ValueError("Either file_path or file_data must be provided")

    def parse(self) -> GainMapMetadata:
        """
        Decode gain map metadata.

        Returns:
            Decoded metadata

        Raises:
            MetadataReadError: If the file cannot be read or the block
                cannot be decoded
        """
        if self.file_data is None:
            try:
                with open(self.file_path, 'rb') as f:
                    self.file_data = f.read()
            except OSError as e:
                raise MetadataReadError(f"Failed to read XMP block: {str(e)}") from e
        return get_metadata_from_xmp(self.file_data)
