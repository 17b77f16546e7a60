import logging

from .catalog import DEFAULT_REGEXES, RegexFile
from .errors import ParserError
from .matchers import DEFAULT_SIZE_LIMIT, DeviceMatcher, OSMatcher, UserAgentMatcher
from .models import OS, Client, Device, UserAgent

logger = logging.getLogger(__name__)


class UserAgentParser:
    """
    Разбор строки User-Agent на клиента, ОС и устройство.

    Строится один раз из каталога и дальше только читается, поэтому один
    экземпляр можно делить между потоками.
    """

    def __init__(self, regex_file: RegexFile, size_limit=DEFAULT_SIZE_LIMIT):
        try:
            self.device_matcher = DeviceMatcher(regex_file.device_parsers, size_limit)
            self.os_matcher = OSMatcher(regex_file.os_parsers, size_limit)
            self.user_agent_matcher = UserAgentMatcher(regex_file.user_agent_parsers, size_limit)
        except ParserError as e:
            logger.error(f"Не удалось построить парсер: {e}")
            raise
        logger.debug(
            "Парсер готов: user_agent=%d os=%d device=%d",
            len(self.user_agent_matcher), len(self.os_matcher), len(self.device_matcher),
        )

    @classmethod
    def from_yaml(cls, path, size_limit=DEFAULT_SIZE_LIMIT):
        return cls(RegexFile.from_yaml(path), size_limit)

    @classmethod
    def from_bytes(cls, data, size_limit=DEFAULT_SIZE_LIMIT):
        return cls(RegexFile.from_bytes(data), size_limit)

    @classmethod
    def from_file(cls, file, size_limit=DEFAULT_SIZE_LIMIT):
        return cls(RegexFile.from_file(file), size_limit)

    @classmethod
    def from_default(cls, size_limit=DEFAULT_SIZE_LIMIT):
        """Парсер на каталоге, входящем в пакет"""
        return cls.from_yaml(DEFAULT_REGEXES, size_limit)

    def parse(self, user_agent: str) -> Client:
        return Client(
            user_agent=self.parse_user_agent(user_agent),
            os=self.parse_os(user_agent),
            device=self.parse_device(user_agent),
        )

    def parse_device(self, user_agent: str) -> Device:
        return self.device_matcher.try_parse(user_agent) or self.device_matcher.default()

    def parse_os(self, user_agent: str) -> OS:
        return self.os_matcher.try_parse(user_agent) or self.os_matcher.default()

    def parse_user_agent(self, user_agent: str) -> UserAgent:
        return self.user_agent_matcher.try_parse(user_agent) or self.user_agent_matcher.default()

    def parse_set(self, user_agent: str) -> Client:
        return Client(
            user_agent=self.parse_user_agent_set(user_agent),
            os=self.parse_os_set(user_agent),
            device=self.parse_device_set(user_agent),
        )

    def parse_device_set(self, user_agent: str) -> Device:
        return self.device_matcher.try_parse_set(user_agent) or self.device_matcher.default()

    def parse_os_set(self, user_agent: str) -> OS:
        return self.os_matcher.try_parse_set(user_agent) or self.os_matcher.default()

    def parse_user_agent_set(self, user_agent: str) -> UserAgent:
        return self.user_agent_matcher.try_parse_set(user_agent) or self.user_agent_matcher.default()
