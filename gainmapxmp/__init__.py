# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
gainmapxmp - HDR gain map XMP metadata codec

Decodes hdrgm gain map parameters from the XMP block of an Ultra HDR
JPEG, generates the primary image (GContainer) and gain map image XMP
documents, and provides bounds-checked buffers for assembling the
encoded output.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from gainmapxmp.config import DEFAULT_CONFIG, XMPWriterConfig
from gainmapxmp.data_buffer import CompressedImage, DataBuffer, write_to_destination
from gainmapxmp.exceptions import (
    ErrorCode,
    ErrorInfo,
    NO_ERROR,
    GainMapError,
    MetadataReadError,
    MetadataWriteError,
    XMPFormatError,
    XMPSyntaxError,
    MissingAttributeError,
    MalformedAttributeError,
    UnsupportedFeatureError,
)
from gainmapxmp.metadata import GainMapMetadata
from gainmapxmp.xmp_parser import XMPGainMapParser, extract_xml, get_metadata_from_xmp
from gainmapxmp.xmp_scanner import GainMapXMPScanner, ScanState
from gainmapxmp.xmp_writer import (
    build_xmp_packet,
    build_xmp_payload,
    generate_xmp_for_primary_image,
    generate_xmp_for_secondary_image,
)

__all__ = [
    "DEFAULT_CONFIG",
    "XMPWriterConfig",
    "CompressedImage",
    "DataBuffer",
    "write_to_destination",
    "ErrorCode",
    "ErrorInfo",
    "NO_ERROR",
    "GainMapError",
    "MetadataReadError",
    "MetadataWriteError",
    "XMPFormatError",
    "XMPSyntaxError",
    "MissingAttributeError",
    "MalformedAttributeError",
    "UnsupportedFeatureError",
    "GainMapMetadata",
    "XMPGainMapParser",
    "extract_xml",
    "get_metadata_from_xmp",
    "GainMapXMPScanner",
    "ScanState",
    "build_xmp_packet",
    "build_xmp_payload",
    "generate_xmp_for_primary_image",
    "generate_xmp_for_secondary_image",
]
