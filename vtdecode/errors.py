"""Errors raised while decoding vector tile geometry and tiles."""


class DecodeError(ValueError):
    """Base class for everything the decoder reports as a failure."""


class MalformedCommandStreamError(DecodeError):
    def __init__(self, message, position):
        super().__init__(f"{message} (at index {position})")
        self.position = position


class UnknownCommandError(DecodeError):
    def __init__(self, command, position, geometry="line string"):
        super().__init__(
            f"Unsupported command {command} in {geometry} geometry (at index {position})"
        )
        self.command = command
        self.position = position
