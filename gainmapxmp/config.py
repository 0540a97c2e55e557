# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Configuration for XMP generation

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class XMPWriterConfig:
    """
    Settings used when serializing gain map XMP.

    Attributes:
        xmp_toolkit: Value of the x:xmptk attribute on x:xmpmeta
        item_mime_type: Item:Mime of both container items
        indent: Indentation unit for pretty-printed output
        pretty_print: Emit one element per line with indentation
    """
    xmp_toolkit: str = "Adobe XMP Core 5.1.2"
    item_mime_type: str = "image/jpeg"
    indent: str = "  "
    pretty_print: bool = True


DEFAULT_CONFIG = XMPWriterConfig()
