# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for gainmapxmp

Decodes gain map metadata from a raw XMP block and generates the
primary and gain map XMP documents.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Union

from gainmapxmp.exceptions import GainMapError
from gainmapxmp.metadata import (
    DEFAULT_GAMMA,
    DEFAULT_HDR_CAPACITY_MIN,
    DEFAULT_MIN_CONTENT_BOOST,
    DEFAULT_OFFSET,
    GainMapMetadata,
)
from gainmapxmp.xmp_parser import XMPGainMapParser
from gainmapxmp.xmp_writer import (
    build_xmp_payload,
    generate_xmp_for_primary_image,
    generate_xmp_for_secondary_image,
)


def format_output(metadata: GainMapMetadata, format_type: str = "text") -> str:
    """
    Format decoded metadata for display.

    Args:
        metadata: Decoded metadata
        format_type: Output format ('text' or 'json')

    Returns:
        Formatted output string
    """
    values = metadata.to_dict()
    if format_type == "json":
        return json.dumps(values, indent=2)
    return "\n".join(f"{name}: {value}" for name, value in values.items())


def _emit(output: Union[str, bytes], output_path: Optional[Path]) -> None:
    if output_path is None:
        if isinstance(output, bytes):
            sys.stdout.buffer.write(output)
        else:
            print(output, end='' if output.endswith('\n') else '\n')
        return
    if isinstance(output, bytes):
        output_path.write_bytes(output)
    else:
        output_path.write_text(output, encoding='utf-8')


def _cmd_decode(args: argparse.Namespace) -> int:
    metadata = XMPGainMapParser(file_path=args.file).parse()
    print(format_output(metadata, args.format))
    return 0


def _cmd_encode_gainmap(args: argparse.Namespace) -> int:
    metadata = GainMapMetadata(
        version=args.version,
        max_content_boost=args.max_content_boost,
        hdr_capacity_max=args.hdr_capacity_max,
        min_content_boost=args.min_content_boost,
        gamma=args.gamma,
        offset_sdr=args.offset_sdr,
        offset_hdr=args.offset_hdr,
        hdr_capacity_min=args.hdr_capacity_min,
    )
    xmp_xml = generate_xmp_for_secondary_image(metadata)
    _emit(build_xmp_payload(xmp_xml) if args.payload else xmp_xml, args.output)
    return 0


def _cmd_encode_primary(args: argparse.Namespace) -> int:
    # Only the version is read for the container directory
    metadata = GainMapMetadata(version=args.version, max_content_boost=1.0, hdr_capacity_max=1.0)
    xmp_xml = generate_xmp_for_primary_image(args.gainmap_length, metadata)
    _emit(build_xmp_payload(xmp_xml) if args.payload else xmp_xml, args.output)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='gainmapxmp',
        description='Read and write HDR gain map XMP metadata',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    subparsers = parser.add_subparsers(dest='command', required=True)

    decode = subparsers.add_parser('decode', help='Decode gain map metadata from a raw XMP block')
    decode.add_argument('file', type=Path, help='File holding the XMP namespace header and packet')
    decode.add_argument('--format', choices=['text', 'json'], default='text')
    decode.set_defaults(func=_cmd_decode)

    gainmap = subparsers.add_parser('encode-gainmap', help='Generate gain map image XMP')
    gainmap.add_argument('--version', required=True, dest='version')
    gainmap.add_argument('--max-content-boost', type=float, required=True)
    gainmap.add_argument('--hdr-capacity-max', type=float, required=True)
    gainmap.add_argument('--min-content-boost', type=float, default=DEFAULT_MIN_CONTENT_BOOST)
    gainmap.add_argument('--gamma', type=float, default=DEFAULT_GAMMA)
    gainmap.add_argument('--offset-sdr', type=float, default=DEFAULT_OFFSET)
    gainmap.add_argument('--offset-hdr', type=float, default=DEFAULT_OFFSET)
    gainmap.add_argument('--hdr-capacity-min', type=float, default=DEFAULT_HDR_CAPACITY_MIN)
    gainmap.add_argument('--payload', action='store_true',
                         help='Emit the APP1 payload (namespace header + xpacket)')
    gainmap.add_argument('-o', '--output', type=Path)
    gainmap.set_defaults(func=_cmd_encode_gainmap)

    primary = subparsers.add_parser('encode-primary', help='Generate primary image XMP')
    primary.add_argument('--version', required=True, dest='version')
    primary.add_argument('--gainmap-length', type=int, required=True,
                         help='Size in bytes of the encoded gain map image')
    primary.add_argument('--payload', action='store_true',
                         help='Emit the APP1 payload (namespace header + xpacket)')
    primary.add_argument('-o', '--output', type=Path)
    primary.set_defaults(func=_cmd_encode_primary)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )
    try:
        return args.func(args)
    except GainMapError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1
