class HaliteError(Exception):
    pass


class ProtocolParseError(HaliteError, ValueError):
    """Data from the engine could not be decoded."""


class EngineClosedError(ProtocolParseError):
    """The engine closed its end of the pipe."""


class ProtocolDesyncError(ProtocolParseError):
    """Tokens were left over (or read out of place) at the end of a turn."""


class UnknownEntityError(HaliteError, KeyError):
    def __str__(self):
        # KeyError would repr() the message
        return str(self.args[0]) if self.args else ''


class ConfigurationMisuseError(HaliteError):
    pass


class BoardConflictError(HaliteError):
    pass
