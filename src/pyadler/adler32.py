from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from .checksum import Buffer
from .error import InvalidArgumentError, OutOfRangeError

BASE = 65521  # largest prime smaller than 2**16

# Largest run that can be summed before reducing without s2 leaving 32 bits:
# s1 grows at most from 65520 to 65520 + 255 * 3800, s2 by 3800 * median(s1) < 2**31.
NMAX = 3800


def check_value(value: int) -> None:
  """Raise ``OutOfRangeError`` unless ``value`` is a packed state ``value()`` could return."""
  if not 0 <= value <= 0xFFFFFFFF:
    raise OutOfRangeError('value', 'not a 32-bit unsigned integer')
  if value & 0xFFFF >= BASE or value >> 16 >= BASE:
    raise OutOfRangeError('value', 'not a valid Adler-32 state')


@contextmanager
def _byte_view(buffer: Buffer) -> Iterator[memoryview]:
  try:
    raw = memoryview(buffer)
  except TypeError:
    raise InvalidArgumentError('buffer', 'does not support the buffer protocol') from None

  with raw:
    if raw.c_contiguous:
      with raw.cast('B') as view:
        yield view
    else:
      # strided views are copied into a flat buffer first
      with memoryview(raw.tobytes()) as view:
        yield view


class Adler32:
  """
  Running Adler-32 checksum over an arbitrarily chunked byte stream.

  The state is two sums modulo 65521 packed as ``(s2 << 16) | s1``; ``s1`` starts at 1 and
  ``s2`` at 0. Feeding the same bytes in the same order yields the same value no matter how
  they are split between calls.

  This is an error-detection code, not a cryptographic hash.
  """

  def __init__(self, data: Optional[Buffer] = None) -> None:
    self.reset()
    if data is not None:
      self.update(data)

  @classmethod
  def from_value(cls, value: int) -> Adler32:
    """Resume from a previously returned ``value()``."""
    check_value(value)
    checksum = cls()
    checksum._checksum = value
    return checksum

  def reset(self) -> None:
    self._checksum = 1

  def value(self) -> int:
    return self._checksum

  def hexdigest(self) -> str:
    return f'{self._checksum:08x}'

  def copy(self) -> Adler32:
    return type(self).from_value(self._checksum)

  def update_byte(self, value: int) -> None:
    """Add a single byte. Only the low eight bits of ``value`` are used."""
    s1 = self._checksum & 0xFFFF
    s2 = self._checksum >> 16

    s1 = (s1 + (value & 0xFF)) % BASE
    s2 = (s1 + s2) % BASE

    self._checksum = (s2 << 16) | s1

  def update(self, buffer: Optional[Buffer]) -> None:
    """Add every byte of ``buffer``. An empty buffer leaves the checksum untouched."""
    if buffer is None:
      raise InvalidArgumentError('buffer', 'cannot be None')

    with _byte_view(buffer) as view:
      if view.nbytes:
        self._update_view(view, 0, view.nbytes)

  def update_range(self, buffer: Optional[Buffer], offset: int, count: int) -> None:
    """
    Add ``count`` bytes of ``buffer`` starting at ``offset``.

    Raises ``InvalidArgumentError`` when ``buffer`` is None and ``OutOfRangeError`` when the
    range is negative or does not fit inside the buffer. ``offset`` and ``count`` are byte
    positions, also for buffers with wider items, and ``offset`` must index an existing byte even
    for a zero-length update. The checksum is unchanged when an error is raised.
    """
    if buffer is None:
      raise InvalidArgumentError('buffer', 'cannot be None')

    if offset < 0:
      raise OutOfRangeError('offset', 'cannot be negative')

    if count < 0:
      raise OutOfRangeError('count', 'cannot be negative')

    with _byte_view(buffer) as view:
      if offset >= view.nbytes:
        raise OutOfRangeError('offset', 'not a valid index into buffer')

      if offset + count > view.nbytes:
        raise OutOfRangeError('count', 'exceeds buffer size')

      self._update_view(view, offset, count)

  def _update_view(self, view: memoryview, offset: int, count: int) -> None:
    s1 = self._checksum & 0xFFFF
    s2 = self._checksum >> 16
    end = offset + count

    while offset < end:
      stop = min(offset + NMAX, end)
      for byte in view[offset:stop]:
        s1 += byte
        s2 += s1
      s1 %= BASE
      s2 %= BASE
      offset = stop

    self._checksum = (s2 << 16) | s1

  def __repr__(self) -> str:
    return f'{type(self).__name__}(0x{self._checksum:08x})'


def adler32(data: Buffer, value: int = 1) -> int:
  """One-shot checksum of ``data``, optionally continuing from an earlier ``value``."""
  checksum = Adler32.from_value(value)
  checksum.update(data)
  return checksum.value()
