from __future__ import annotations

import io
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import pytest

from pyadler.__main__ import main as cli_main


@dataclass(slots=True)
class CompletedRun:
  exit_code: int
  stdout: str
  stderr: str

  def checksums(self) -> dict[str, str]:
    """Map each reported path to its printed checksum."""
    result = {}
    for line in self.stdout.splitlines():
      value, _, path = line.partition('  ')
      result[path.split('  ')[0]] = value
    return result


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
  def _write_file(name: str, data: bytes) -> Path:
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path

  return _write_file


@pytest.fixture
def run_cli(
  monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> Callable[..., CompletedRun]:
  """
  Run ``pyadler`` inside ``working_dir`` and capture what it prints.

  Positional arguments become argv entries (``Path`` objects are accepted). ``stdin`` supplies
  the bytes read for the ``-`` path.
  """

  def _run_cli(working_dir: Path, *args: object, stdin: Optional[bytes] = None) -> CompletedRun:
    monkeypatch.setattr(sys, 'argv', ['pyadler', *(str(arg) for arg in args)])
    monkeypatch.chdir(working_dir)
    if stdin is not None:
      monkeypatch.setattr(sys, 'stdin', io.TextIOWrapper(io.BytesIO(stdin)))

    exit_code = cli_main()
    captured = capsys.readouterr()

    return CompletedRun(exit_code=exit_code, stdout=captured.out, stderr=captured.err)

  return _run_cli
