from __future__ import annotations

import argparse
import typing as t
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .adler32 import check_value
from .error import ChecksumError, OutOfRangeError

DEFAULT_CHUNK_SIZE = 64 * 1024


class OutputFormat(str, Enum):
  """Enum for how checksums are printed and how ``--check`` is parsed."""

  HEX = 'hex'
  DECIMAL = 'decimal'

  def render(self, value: int) -> str:
    if self is OutputFormat.HEX:
      return f'{value:08x}'
    return str(value)

  def parse(self, text: str) -> int:
    try:
      value = int(text, 16 if self is OutputFormat.HEX else 10)
      check_value(value)
    except (ValueError, OutOfRangeError):
      raise ChecksumError(f'{text!r} is not a {self.value} Adler-32 checksum') from None
    return value


@dataclass
class Arguments:
  """
  A wrapper class providing concrete types for parsed command-line arguments.
  """

  paths: list[Path]
  chunk_size: int
  format: OutputFormat
  check: t.Optional[str]
  verbose: bool

  def expected_value(self) -> t.Optional[int]:
    if self.check is None:
      return None
    return self.format.parse(self.check)

  @staticmethod
  def from_args(argv: t.Optional[t.Sequence[str]] = None) -> Arguments:
    parser = argparse.ArgumentParser(
      prog='pyadler',
      description='Compute Adler-32 checksums of files.',
    )

    parser.add_argument(
      'paths',
      type=Path,
      nargs='+',
      metavar='path',
      help="Files to checksum; '-' reads standard input",
    )

    parser.add_argument(
      '--chunk-size',
      type=int,
      default=DEFAULT_CHUNK_SIZE,
      help='Bytes read per update.',
    )

    parser.add_argument(
      '--format',
      type=OutputFormat,
      choices=list(OutputFormat),
      default=OutputFormat.HEX,
      help='Print checksums as eight hex digits (default) or as a decimal integer.',
    )

    parser.add_argument(
      '--check',
      metavar='VALUE',
      help='Expected checksum, written in the selected format; mismatches exit with status 1.',
    )

    parser.add_argument(
      '-v',
      '--verbose',
      action='store_true',
      help='Report the number of bytes read from each file.',
    )

    return Arguments(**vars(parser.parse_args(argv)))
