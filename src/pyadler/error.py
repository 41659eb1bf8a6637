class ChecksumError(Exception):
  """Base class for errors raised by pyadler."""


class _ParameterError(ChecksumError):
  def __init__(self, param: str, message: str):
    super().__init__(f'{param}: {message}')
    self.param = param
    self.message = message


class InvalidArgumentError(_ParameterError, TypeError):
  """A required argument was missing."""


class OutOfRangeError(_ParameterError, IndexError):
  """An offset, count or packed value falls outside the accepted range."""
