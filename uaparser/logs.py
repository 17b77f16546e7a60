import re
from datetime import datetime


class LogParser:
    """Парсер access-логов (Apache/Nginx Combined) для извлечения User-Agent"""

    # Apache Combined с именем хоста в начале строки
    APACHE_PATTERN = (
        'apache',
        re.compile(
            r'(\S+) '         # hostname
            r'(\S+) '         # IP
            r'(\S+) '         # remote user
            r'(\S+) '         # auth user
            r'\[([^\]]+)\] '  # timestamp
            r'"(\S+) '        # method
            r'([^"]+) '       # URL
            r'([^"]+)" '      # protocol
            r'(\d+) '         # status
            r'(\S+) '         # size
            r'"([^"]*)" '     # referer
            r'"([^"]*)"'      # user-agent
        )
    )

    # $remote_addr - $remote_user [$time_local] "$request" $status $body_bytes_sent "$http_referer" "$http_user_agent"
    NGINX_PATTERN = (
        'nginx',
        re.compile(
            r'(\S+) '         # IP
            r'(\S+) '         # ident
            r'(\S+) '         # remote user
            r'\[([^\]]+)\] '  # timestamp
            r'"([^"]*)" '     # request line
            r'(\d{3}) '       # status
            r'(\S+) '         # size
            r'"([^"]*)" '     # referer
            r'"([^"]*)"'      # user-agent
        )
    )

    # IP - - [23/Dec/2025:00:00:03 -0500 - 0.005] 206 "GET /robots.txt HTTP/2.0" 1517 "-" "user-agent" "-"
    EXTENDED_PATTERN = (
        'extended',
        re.compile(
            r'(\S+) '         # IP
            r'(\S+) '         # ident
            r'(\S+) '         # remote user
            r'\[([^\]]+)\] '  # timestamp с временем обработки
            r'(\d{3}) '       # status
            r'"([^"]*)" '     # request line
            r'(\S+) '         # size
            r'"([^"]*)" '     # referer
            r'"([^"]*)" '     # user-agent
            r'"([^"]*)"'      # дополнительное поле
        )
    )

    PATTERNS = [APACHE_PATTERN, NGINX_PATTERN, EXTENDED_PATTERN]

    _TIMESTAMP = re.compile(r'(\d{2}/\w{3}/\d{4}:\d{2}:\d{2}:\d{2})(?:\s+([+-]\d{4}))?')

    @staticmethod
    def _parse_timestamp(timestamp_str):
        """Разбирает '23/Dec/2025:00:00:03 -0500' и расширенный вариант с временем обработки.

        Часовой пояс отбрасывается, чтобы все даты сравнивались как naive.
        """
        match = LogParser._TIMESTAMP.search(timestamp_str)
        if not match:
            return None
        date_time_str, timezone_str = match.groups()
        try:
            if timezone_str:
                parsed = datetime.strptime(f"{date_time_str} {timezone_str}", '%d/%b/%Y:%H:%M:%S %z')
                return parsed.replace(tzinfo=None)
            return datetime.strptime(date_time_str, '%d/%b/%Y:%H:%M:%S')
        except ValueError:
            return None

    # Номера групп timestamp и user-agent для каждого формата
    FIELD_GROUPS = {
        'apache': (5, 12),
        'nginx': (4, 9),
        'extended': (4, 9),
    }

    @staticmethod
    def parse_line(line):
        """Парсит одну строку лога, возвращает {'user_agent', 'log_format'} или None.

        Строки с нераспознаваемой датой считаются битыми и пропускаются.
        """
        for fmt, pattern in LogParser.PATTERNS:
            match = pattern.match(line)
            if not match:
                continue

            timestamp_group, user_agent_group = LogParser.FIELD_GROUPS[fmt]
            if not LogParser._parse_timestamp(match.group(timestamp_group)):
                continue

            return {
                'user_agent': match.group(user_agent_group),
                'log_format': fmt,
            }
        return None
