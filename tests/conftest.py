import pytest

from gainmapxmp.metadata import GainMapMetadata
from gainmapxmp.xmp_writer import build_xmp_payload

XMP_TEMPLATE = (
    '<x:xmpmeta xmlns:x="adobe:ns:meta/" x:xmptk="Adobe XMP Core 5.1.2">'
    '<rdf:RDF xmlns:rdf="http://www.w3.org/1999/02/22-rdf-syntax-ns#">'
    '<rdf:Description xmlns:hdrgm="http://ns.adobe.com/hdr-gain-map/1.0/" {attributes}/>'
    '</rdf:RDF>'
    '</x:xmpmeta>'
)

REQUIRED_ATTRIBUTES = {
    "hdrgm:Version": "1.0",
    "hdrgm:GainMapMax": "2.0",
    "hdrgm:HDRCapacityMax": "2.0",
}


@pytest.fixture
def make_payload():
    """Return a builder for XMP blocks with the given hdrgm attributes."""

    def build(attributes, wrap=True, padding=b""):
        attrs = " ".join(f'{name}="{value}"' for name, value in attributes.items())
        return build_xmp_payload(XMP_TEMPLATE.format(attributes=attrs), wrap=wrap) + padding

    return build


@pytest.fixture
def required_attributes():
    return dict(REQUIRED_ATTRIBUTES)


@pytest.fixture
def sample_metadata():
    return GainMapMetadata(
        version="1.0",
        max_content_boost=8.0,
        hdr_capacity_max=8.0,
        min_content_boost=1.0,
        gamma=1.0,
        offset_sdr=1.0 / 64.0,
        offset_hdr=1.0 / 64.0,
        hdr_capacity_min=1.0,
    )
