from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Callable, Iterator, Optional

from rich.console import Console
from rich.progress import (
  BarColumn,
  DownloadColumn,
  Progress,
  TaskProgressColumn,
  TextColumn,
  TimeRemainingColumn,
)

from pyadler.adler32 import Adler32
from pyadler.arguments import Arguments, OutputFormat
from pyadler.error import ChecksumError

STDIN_PATH = Path('-')
_PROGRESS_THRESHOLD = 16 * 1024 * 1024


def checksum_stream(
  stream: IO[bytes], chunk_size: int, on_chunk: Optional[Callable[[int], None]] = None
) -> tuple[Adler32, int]:
  """Feed ``stream`` through a fresh checksum and return it with the number of bytes read."""
  checksum = Adler32()
  total = 0

  while chunk := stream.read(chunk_size):
    checksum.update(chunk)
    total += len(chunk)
    if on_chunk is not None:
      on_chunk(len(chunk))

  return checksum, total


@contextmanager
def _open_input(path: Path) -> Iterator[IO[bytes]]:
  if path == STDIN_PATH:
    yield sys.stdin.buffer
    return

  with path.open('rb') as fh:
    yield fh


def _input_size(path: Path) -> int:
  if path == STDIN_PATH:
    return 0
  try:
    return path.stat().st_size
  except OSError:
    return 0


def _make_progress(console: Console, paths: list[Path], *, enable_progress: bool) -> Progress:
  large = any(_input_size(path) >= _PROGRESS_THRESHOLD for path in paths)

  return Progress(
    TextColumn('[progress.description]{task.description}'),
    BarColumn(),
    TaskProgressColumn(),
    DownloadColumn(),
    TimeRemainingColumn(),
    console=console,
    transient=True,
    disable=(not enable_progress) or (not console.is_interactive) or not large,
  )


def _checksum_path(path: Path, chunk_size: int, progress: Progress) -> tuple[Adler32, int]:
  if progress.disable:
    with _open_input(path) as fh:
      return checksum_stream(fh, chunk_size)

  task_id = progress.add_task(str(path), total=_input_size(path) or None)
  try:
    with _open_input(path) as fh:
      return checksum_stream(fh, chunk_size, lambda n: progress.advance(task_id, n))
  finally:
    progress.remove_task(task_id)


def _report(
  console: Console, path: Path, value: int, size: int, fmt: OutputFormat, verbose: bool
) -> None:
  line = f'{fmt.render(value)}  {path}'
  if verbose:
    line += f'  ({size:,} bytes)'
  console.print(line, markup=False, highlight=False)


def main() -> int:
  arguments = Arguments.from_args()

  console, err_console = Console(), Console(stderr=True)
  status = 0

  try:
    if arguments.chunk_size <= 0:
      raise ChecksumError('--chunk-size must be a positive integer')

    expected = arguments.expected_value()
    progress = _make_progress(console, arguments.paths, enable_progress=not arguments.verbose)

    with progress:
      for path in arguments.paths:
        checksum, size = _checksum_path(path, arguments.chunk_size, progress)
        _report(console, path, checksum.value(), size, arguments.format, arguments.verbose)

        if expected is not None and checksum.value() != expected:
          err_console.print(
            f'[bold red]mismatch:[/] {path}: expected {arguments.format.render(expected)}, '
            f'got {arguments.format.render(checksum.value())}'
          )
          status = 1
  except (ChecksumError, OSError) as exc:
    err_console.print(f'[bold red]error:[/] {exc}')
    return 1
  except Exception as exc:  # CLI guardrail
    err_console.print(f'[bold red]error:[/] {exc}')
    return 1

  return status


if __name__ == '__main__':
  raise SystemExit(main())
