from .adler32 import BASE, NMAX, Adler32, adler32
from .checksum import Buffer, Checksum
from .error import ChecksumError, InvalidArgumentError, OutOfRangeError

__all__ = [
  'BASE',
  'NMAX',
  'Adler32',
  'Buffer',
  'Checksum',
  'ChecksumError',
  'InvalidArgumentError',
  'OutOfRangeError',
  'adler32',
]
