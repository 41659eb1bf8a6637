from __future__ import annotations

import argparse
import random
import time
import zlib
from dataclasses import dataclass

from pyadler.adler32 import Adler32


@dataclass(slots=True)
class BenchmarkResult:
  size_bytes: int
  chunk_size: int
  pyadler_time: float
  zlib_time: float
  value: int


def _time_chunks(data: memoryview, chunk_size: int) -> tuple[float, int]:
  checksum = Adler32()

  start = time.perf_counter()
  for offset in range(0, len(data), chunk_size):
    checksum.update_range(data, offset, min(chunk_size, len(data) - offset))
  return time.perf_counter() - start, checksum.value()


def _time_zlib(data: memoryview, chunk_size: int) -> tuple[float, int]:
  value = 1

  start = time.perf_counter()
  for offset in range(0, len(data), chunk_size):
    value = zlib.adler32(data[offset : offset + chunk_size], value)
  return time.perf_counter() - start, value


def run_benchmark(*, size_kb: int, chunk_size: int, seed: int) -> BenchmarkResult:
  data = memoryview(random.Random(seed).randbytes(size_kb * 1024))

  pyadler_time, value = _time_chunks(data, chunk_size)
  zlib_time, expected = _time_zlib(data, chunk_size)
  if value != expected:
    raise RuntimeError(f'checksum mismatch: {value:08x} != {expected:08x}')

  return BenchmarkResult(
    size_bytes=len(data),
    chunk_size=chunk_size,
    pyadler_time=pyadler_time,
    zlib_time=zlib_time,
    value=value,
  )


def _throughput(size_bytes: int, seconds: float) -> str:
  if seconds <= 0:
    return 'n/a'
  return f'{size_bytes / seconds / (1024 * 1024):.2f} MiB/s'


def main() -> None:
  parser = argparse.ArgumentParser(description='Benchmark Adler32 against zlib.adler32.')
  parser.add_argument('--size-kb', type=int, default=4096, help='Size of the input in KiB')
  parser.add_argument(
    '--chunk-size', type=int, default=64 * 1024, help='Bytes passed per update call'
  )
  parser.add_argument('--seed', type=int, default=1337, help='Seed for the random input')

  args = parser.parse_args()

  result = run_benchmark(size_kb=args.size_kb, chunk_size=args.chunk_size, seed=args.seed)

  print('=== Adler-32 Benchmark ===')
  print(f'Input size       : {result.size_bytes:,} bytes')
  print(f'Chunk size       : {result.chunk_size:,} bytes')
  print(f'Checksum         : {result.value:08x}')
  print()
  pyadler_rate = _throughput(result.size_bytes, result.pyadler_time)
  zlib_rate = _throughput(result.size_bytes, result.zlib_time)
  print(f'pyadler          : {result.pyadler_time:.3f}s ({pyadler_rate})')
  print(f'zlib             : {result.zlib_time:.3f}s ({zlib_rate})')


if __name__ == '__main__':
  main()
