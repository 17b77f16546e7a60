from .catalog import DeviceParserEntry, OSParserEntry, RegexFile, UserAgentParserEntry
from .engine import UserAgentParser
from .errors import AggregateError, CatalogError, ParserError, PatternError
from .models import OS, UNKNOWN, Client, Device, UserAgent

__all__ = [
    'UserAgentParser',
    'RegexFile', 'UserAgentParserEntry', 'OSParserEntry', 'DeviceParserEntry',
    'Client', 'UserAgent', 'OS', 'Device', 'UNKNOWN',
    'ParserError', 'CatalogError', 'PatternError', 'AggregateError',
]
