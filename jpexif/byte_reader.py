# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Bounds-checked byte reader

This module provides ByteReader, a cursor over a fixed byte buffer with
sequential reads and random-access peeks. Every access is validated against
the buffer length before any byte is touched, so a failed read never moves
the cursor and never returns a partial value.

Copyright 2025 DNAi inc.
"""

import struct
from enum import Enum
from typing import Optional, Union

from jpexif.exceptions import OutOfBoundsError


class ByteOrder(Enum):
    """Byte order used to reassemble multi-byte values (struct prefixes)"""
    LITTLE_ENDIAN = '<'
    BIG_ENDIAN = '>'
    NATIVE = '='  # Internal bookkeeping only, never for file data


# Unsigned integer formats by width in bytes
_UINT_FORMATS = {
    1: 'B',
    2: 'H',
    4: 'I',
}


BufferType = Union[bytes, bytearray, memoryview]


class ByteReader:
    """
    Cursor over a borrowed byte buffer.
    
    The reader never copies the buffer; only read_bytes() and peek_bytes()
    materialize copies of the requested range.
    
    Example:
        >>> reader = ByteReader(b'\\x2a\\x00\\x00\\x2a')
        >>> reader.read(2, ByteOrder.LITTLE_ENDIAN)
        42
        >>> reader.peek(2, 2, ByteOrder.BIG_ENDIAN)
        42
    """
    
    def __init__(self, data: BufferType):
        """
        Initialize the reader.
        
        Args:
            data: Buffer to read from (not copied)
        """
        self._data = memoryview(data).cast('B')
        self._cursor = 0
    
    def __len__(self) -> int:
        return len(self._data)
    
    @property
    def cursor(self) -> int:
        """Current read position"""
        return self._cursor
    
    def available(self, offset: Optional[int] = None) -> int:
        """
        Number of bytes between offset and the end of the buffer.
        
        Args:
            offset: Absolute offset (defaults to the cursor)
            
        Returns:
            max(0, buffer length - offset)
        """
        if offset is None:
            offset = self._cursor
        return max(0, len(self._data) - offset)
    
    def _check(self, offset: int, size: int) -> None:
        if offset < 0 or size < 0 or offset > len(self._data) or self.available(offset) < size:
            raise OutOfBoundsError(
                f"Cannot read {size} byte(s) from a {len(self._data)}-byte buffer",
                offset,
            )
    
    def move_to(self, offset: int) -> None:
        """
        Move the cursor to an absolute offset.
        
        Moving to the very end of the buffer is allowed; any further read
        from there fails.
        
        Raises:
            OutOfBoundsError: If offset lies outside the buffer
        """
        self._check(offset, 0)
        self._cursor = offset
    
    def peek(self, offset: int, size: int, order: ByteOrder) -> int:
        """
        Read an unsigned integer at an absolute offset without moving the cursor.
        
        Args:
            offset: Absolute offset to read at
            size: Width of the integer in bytes (1, 2 or 4)
            order: Byte order used to reassemble the value
            
        Returns:
            The unsigned integer value
            
        Raises:
            OutOfBoundsError: If the byte range exceeds the buffer
        """
        fmt = _UINT_FORMATS.get(size)
        if fmt is None:
            raise ValueError(f"Unsupported integer width: {size}")
        self._check(offset, size)
        return struct.unpack_from(f'{order.value}{fmt}', self._data, offset)[0]
    
    def read(self, size: int, order: ByteOrder) -> int:
        """
        Read an unsigned integer at the cursor and advance past it.
        
        Args:
            size: Width of the integer in bytes (1, 2 or 4)
            order: Byte order used to reassemble the value
            
        Returns:
            The unsigned integer value
            
        Raises:
            OutOfBoundsError: If the byte range exceeds the buffer
        """
        value = self.peek(self._cursor, size, order)
        self._cursor += size
        return value
    
    def peek_bytes(self, offset: int, size: int) -> bytes:
        """Copy size bytes starting at offset, cursor unchanged."""
        self._check(offset, size)
        return bytes(self._data[offset:offset + size])
    
    def read_bytes(self, size: int) -> bytes:
        """Copy size bytes at the cursor and advance past them."""
        data = self.peek_bytes(self._cursor, size)
        self._cursor += size
        return data
    
    def sub_reader(self, offset: int) -> 'ByteReader':
        """
        Create a reader over the tail of this buffer.
        
        Offsets of the new reader are relative to offset. No bytes are copied.
        
        Raises:
            OutOfBoundsError: If offset lies outside the buffer
        """
        self._check(offset, 0)
        return ByteReader(self._data[offset:])
