# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Bounded buffer writers

DataBuffer is a fixed-capacity scratch buffer with an append cursor.
write_to_destination appends into a buffer owned by someone else
(typically the image assembly layer) with the cursor threaded through
by the caller.

Copyright 2025 DNAi inc.
"""

import logging
import struct
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from gainmapxmp.exceptions import ErrorCode, ErrorInfo, NO_ERROR

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


class DataBuffer:
    """
    Fixed-capacity, zero-initialized write buffer.

    Writes always start at the current cursor. A write that does not
    fit is logged and rejected without touching the buffer; the cursor
    only moves forward.
    """

    def __init__(self, length: int, byte_order: str = '>'):
        """
        Initialize buffer.

        Args:
            length: Capacity in bytes
            byte_order: struct byte order used by write16/write32
        """
        if length < 0:
            raise ValueError(f"buffer length must be non-negative, got {length}")
        if byte_order not in ('<', '>'):
            raise ValueError(f"unsupported byte order {byte_order!r}")
        self._data = bytearray(length)
        self._length = length
        self._write_pos = 0
        self._byte_order = byte_order

    @property
    def length(self) -> int:
        return self._length

    @property
    def bytes_written(self) -> int:
        return self._write_pos

    def get_data(self) -> bytearray:
        return self._data

    def get_length(self) -> int:
        return self._length

    def get_bytes_written(self) -> int:
        return self._write_pos

    def write8(self, value: int) -> bool:
        """
        Append one byte.

        Raises:
            struct.error: If value does not fit in 8 bits
        """
        return self.write(struct.pack('B', value))

    def write16(self, value: int) -> bool:
        """
        Append a 16-bit value in the buffer's byte order.

        Raises:
            struct.error: If value does not fit in 16 unsigned bits
        """
        return self.write(struct.pack(f'{self._byte_order}H', value))

    def write32(self, value: int) -> bool:
        """
        Append a 32-bit value in the buffer's byte order.

        Raises:
            struct.error: If value does not fit in 32 unsigned bits
        """
        return self.write(struct.pack(f'{self._byte_order}I', value))

    def write(self, src: BytesLike) -> bool:
        """
        Append raw bytes at the cursor.

        Args:
            src: Bytes to copy; any C-contiguous buffer, sized in bytes

        Returns:
            True if written, False if the write would exceed capacity
        """
        src = memoryview(src).cast('B')
        size = src.nbytes
        if self._write_pos + size > self._length:
            logger.error(
                "Writing out of boundary: write position: %d, size: %d, capacity: %d",
                self._write_pos, size, self._length,
            )
            return False
        self._data[self._write_pos:self._write_pos + size] = src
        self._write_pos += size
        return True


@dataclass
class CompressedImage:
    """Caller-owned destination for encoded image data."""
    data: bytearray
    capacity: Optional[int] = None

    def __post_init__(self):
        if self.capacity is None:
            self.capacity = len(self.data)
        elif self.capacity > len(self.data):
            raise ValueError(
                f"capacity {self.capacity} exceeds backing storage of {len(self.data)} bytes"
            )


def write_to_destination(destination: CompressedImage, source: BytesLike,
                         position: int) -> Tuple[ErrorInfo, int]:
    """
    Copy bytes into a destination buffer at the given position.

    Args:
        destination: Destination buffer, sized by its owner
        source: Bytes to copy
        position: Current write position in the destination

    Returns:
        Tuple of (status, new position). On overflow the status carries
        MEM_ERROR and the position is returned unchanged.
    """
    source = memoryview(source).cast('B')
    length = source.nbytes
    if position + length > destination.capacity:
        return ErrorInfo(
            ErrorCode.MEM_ERROR,
            "output buffer to store compressed data is too small: "
            f"write position: {position}, size: {length}, capacity: {destination.capacity}",
        ), position

    destination.data[position:position + length] = source
    return NO_ERROR, position + length
