# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Gain map metadata record

Typed form of the hdrgm XMP attributes. Boost and capacity values are
stored linearly here; the XMP text carries their base-2 logarithms.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, fields
from typing import Dict, Any


DEFAULT_MIN_CONTENT_BOOST = 1.0
DEFAULT_GAMMA = 1.0
DEFAULT_OFFSET = 1.0 / 64.0
DEFAULT_HDR_CAPACITY_MIN = 1.0


@dataclass
class GainMapMetadata:
    """Gain map transform parameters (linear values)."""
    version: str
    max_content_boost: float
    hdr_capacity_max: float
    min_content_boost: float = DEFAULT_MIN_CONTENT_BOOST
    gamma: float = DEFAULT_GAMMA
    offset_sdr: float = DEFAULT_OFFSET
    offset_hdr: float = DEFAULT_OFFSET
    hdr_capacity_min: float = DEFAULT_HDR_CAPACITY_MIN
    base_rendition_is_hdr: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the record to a plain dictionary.

        Keys follow the field declaration order so output is stable.

        Returns:
            Dictionary of field name to value
        """
        return {f.name: getattr(self, f.name) for f in fields(self)}
