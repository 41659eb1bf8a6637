from __future__ import annotations

import sys
from pathlib import Path

import pytest

from pyadler.arguments import DEFAULT_CHUNK_SIZE, Arguments, OutputFormat
from pyadler.error import ChecksumError


def test_arguments_from_args_parses_all_fields(monkeypatch: pytest.MonkeyPatch) -> None:
  monkeypatch.setattr(
    sys,
    'argv',
    [
      'pyadler',
      'a.bin',
      'b.bin',
      '--chunk-size',
      '4096',
      '--format',
      'decimal',
      '--check',
      '300286872',
      '--verbose',
    ],
  )

  args = Arguments.from_args()

  assert args.paths == [Path('a.bin'), Path('b.bin')]
  assert args.chunk_size == 4096
  assert args.format is OutputFormat.DECIMAL
  assert args.check == '300286872'
  assert args.verbose is True
  assert args.expected_value() == 0x11E60398


def test_arguments_from_args_uses_defaults() -> None:
  args = Arguments.from_args(['data.bin'])

  assert args.paths == [Path('data.bin')]
  assert args.chunk_size == DEFAULT_CHUNK_SIZE
  assert args.format is OutputFormat.HEX
  assert args.check is None
  assert args.expected_value() is None
  assert args.verbose is False


def test_arguments_require_a_path(capsys: pytest.CaptureFixture[str]) -> None:
  with pytest.raises(SystemExit):
    Arguments.from_args([])

  assert 'path' in capsys.readouterr().err


def test_output_format_renders_values() -> None:
  assert OutputFormat.HEX.render(1) == '00000001'
  assert OutputFormat.HEX.render(0x11E60398) == '11e60398'
  assert OutputFormat.DECIMAL.render(0x11E60398) == '300286872'


@pytest.mark.parametrize('text', ['11e60398', '11E60398', '0x11e60398'])
def test_hex_format_parses_expected_values(text: str) -> None:
  assert OutputFormat.HEX.parse(text) == 0x11E60398


def test_format_parse_rejects_garbage() -> None:
  with pytest.raises(ChecksumError):
    OutputFormat.DECIMAL.parse('11e60398')

  with pytest.raises(ChecksumError):
    OutputFormat.HEX.parse('not-a-checksum')


@pytest.mark.parametrize(
  ('fmt', 'text'),
  [
    (OutputFormat.HEX, '-1'),
    (OutputFormat.HEX, '1ffffffff'),
    (OutputFormat.HEX, 'fff10000'),
    (OutputFormat.DECIMAL, '4294967296'),
    (OutputFormat.DECIMAL, '65521'),
  ],
)
def test_format_parse_rejects_impossible_states(fmt: OutputFormat, text: str) -> None:
  with pytest.raises(ChecksumError, match='Adler-32 checksum'):
    fmt.parse(text)
