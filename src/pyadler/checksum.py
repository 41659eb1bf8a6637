import mmap
from typing import Optional, Protocol

Buffer = bytes | bytearray | memoryview | mmap.mmap


class Checksum(Protocol):
  """
  Interface shared by the streaming checksums in this package.

  Bytes are fed in the order they appear in the protected data; ``value`` may be read at any
  point and reflects everything fed since construction or the last ``reset``.
  """

  def reset(self) -> None: ...

  def value(self) -> int: ...

  def update_byte(self, value: int) -> None: ...

  def update(self, buffer: Optional[Buffer]) -> None: ...

  def update_range(self, buffer: Optional[Buffer], offset: int, count: int) -> None: ...
