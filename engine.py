import logging
import sys
from collections import deque

from entity import CollectCommand, ConstructDropoffCommand, MoveCommand, SpawnShipCommand
from errors import EngineClosedError, ProtocolDesyncError, ProtocolParseError


class TokenReader:
    """
    Reads whitespace separated tokens from the engine, one line at a time.

    The protocol is positional, so every token of a turn has to be consumed in order. Use as a context manager around
    one turn: leaving the block with tokens still pending raises ProtocolDesyncError.
    End of input before the first token of a turn is the engine finishing the game (EngineClosedError); anywhere
    later it is a truncated dump.
    """

    def __init__(self, stream):
        self.stream = stream
        self.tokens = deque()
        self.started = False

    def _read_line(self):
        line = self.stream.readline()
        if not line:
            if self.started:
                raise ProtocolParseError('Engine closed the input stream in the middle of a turn')
            raise EngineClosedError('Engine closed the input stream')
        return line

    def next_line(self):
        if self.tokens:
            raise ProtocolDesyncError(f'Raw line requested with {len(self.tokens)} tokens pending')
        line = self._read_line()
        self.started = True
        return line

    def next(self, kind=int):
        while not self.tokens:
            self.tokens.extend(self._read_line().split())
        token = self.tokens.popleft()
        self.started = True
        try:
            return kind(token)
        except ValueError as exc:
            raise ProtocolParseError(f'Expected {kind.__name__}, got {token!r}') from exc

    def recv(self, cls, *args):
        return cls.create(self, *args)

    def update(self, obj):
        obj.refresh(self)
        return obj

    def close(self):
        if self.tokens:
            leftover = ' '.join(self.tokens)
            self.tokens.clear()
            raise ProtocolDesyncError(f'Unconsumed tokens from engine: {leftover}')

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # A failed decode already reports the real problem.
        if exc_type is None:
            self.close()
        return False


def encode_command(command):
    if isinstance(command, SpawnShipCommand):
        return 'g'
    if isinstance(command, ConstructDropoffCommand):
        return f'c {command.target_id}'
    if isinstance(command, CollectCommand):
        return f'm {command.target_id} o'
    if isinstance(command, MoveCommand):
        return f'm {command.target_id} {command.direction.value}'
    raise ValueError(f'Invalid command: {command}')


class Engine:
    """The pipe pair to the Halite engine. stdout is reserved for it, so logging must go elsewhere."""

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def reader(self):
        return TokenReader(self.stdin)

    def send(self, text):
        self.stdout.write(f'{text} ')

    def send_commands(self, commands):
        for command in commands:
            self.send(encode_command(command))
        self.flush()
        logging.debug(f'Sent {len(commands)} commands')

    def send_name(self, name):
        self.stdout.write(name)
        self.flush()

    def flush(self):
        self.stdout.write('\n')
        self.stdout.flush()
