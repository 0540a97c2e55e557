# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
XMP names used by gain map metadata

Namespace URIs, prefixes, element names and attribute names for the
hdrgm (Adobe HDR gain map), GContainer and GContainer Item vocabularies.

Copyright 2025 DNAi inc.
"""


def qualified_name(prefix: str, suffix: str) -> str:
    """Return a name of the form "prefix:suffix"."""
    return f"{prefix}:{suffix}"


# ============================================================
# XMP core
# ============================================================
XMP_NAMESPACE = b'http://ns.adobe.com/xap/1.0/'
XMP_HEADER = XMP_NAMESPACE + b'\x00'

X_PREFIX = 'x'
X_URI = 'adobe:ns:meta/'
RDF_PREFIX = 'rdf'
RDF_URI = 'http://www.w3.org/1999/02/22-rdf-syntax-ns#'

XMPMETA = qualified_name(X_PREFIX, 'xmpmeta')
XMPTK = qualified_name(X_PREFIX, 'xmptk')
RDF_RDF = qualified_name(RDF_PREFIX, 'RDF')
RDF_DESCRIPTION = qualified_name(RDF_PREFIX, 'Description')
RDF_SEQ = qualified_name(RDF_PREFIX, 'Seq')
RDF_LI = qualified_name(RDF_PREFIX, 'li')
RDF_PARSE_TYPE = qualified_name(RDF_PREFIX, 'parseType')

# ============================================================
# GContainer
# ============================================================
CONTAINER_PREFIX = 'Container'
CONTAINER_URI = 'http://ns.google.com/photos/1.0/container/'
CONTAINER_DIRECTORY = qualified_name(CONTAINER_PREFIX, 'Directory')
CONTAINER_ITEM = qualified_name(CONTAINER_PREFIX, 'Item')

ITEM_PREFIX = 'Item'
ITEM_URI = 'http://ns.google.com/photos/1.0/container/item/'
ITEM_LENGTH = qualified_name(ITEM_PREFIX, 'Length')
ITEM_MIME = qualified_name(ITEM_PREFIX, 'Mime')
ITEM_SEMANTIC = qualified_name(ITEM_PREFIX, 'Semantic')

SEMANTIC_PRIMARY = 'Primary'
SEMANTIC_GAIN_MAP = 'GainMap'

# ============================================================
# HDR gain map (hdrgm)
# ============================================================
GAIN_MAP_PREFIX = 'hdrgm'
GAIN_MAP_URI = 'http://ns.adobe.com/hdr-gain-map/1.0/'

MAP_VERSION = qualified_name(GAIN_MAP_PREFIX, 'Version')
MAP_GAIN_MAP_MIN = qualified_name(GAIN_MAP_PREFIX, 'GainMapMin')
MAP_GAIN_MAP_MAX = qualified_name(GAIN_MAP_PREFIX, 'GainMapMax')
MAP_GAMMA = qualified_name(GAIN_MAP_PREFIX, 'Gamma')
MAP_OFFSET_SDR = qualified_name(GAIN_MAP_PREFIX, 'OffsetSDR')
MAP_OFFSET_HDR = qualified_name(GAIN_MAP_PREFIX, 'OffsetHDR')
MAP_HDR_CAPACITY_MIN = qualified_name(GAIN_MAP_PREFIX, 'HDRCapacityMin')
MAP_HDR_CAPACITY_MAX = qualified_name(GAIN_MAP_PREFIX, 'HDRCapacityMax')
MAP_BASE_RENDITION_IS_HDR = qualified_name(GAIN_MAP_PREFIX, 'BaseRenditionIsHDR')

# Emission order of the standalone gain map form
GAIN_MAP_ATTRIBUTES = (
    MAP_VERSION,
    MAP_GAIN_MAP_MIN,
    MAP_GAIN_MAP_MAX,
    MAP_GAMMA,
    MAP_OFFSET_SDR,
    MAP_OFFSET_HDR,
    MAP_HDR_CAPACITY_MIN,
    MAP_HDR_CAPACITY_MAX,
    MAP_BASE_RENDITION_IS_HDR,
)

# Attributes stored as base-2 logarithms in XMP
LOG2_ATTRIBUTES = frozenset([
    MAP_GAIN_MAP_MIN,
    MAP_GAIN_MAP_MAX,
    MAP_HDR_CAPACITY_MIN,
    MAP_HDR_CAPACITY_MAX,
])

BOOL_TRUE = 'True'
BOOL_FALSE = 'False'
