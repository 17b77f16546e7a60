import gzip
import logging
import sys
from collections import Counter
from pathlib import Path

from .logs import LogParser
from .models import UNKNOWN

logger = logging.getLogger(__name__)

STRATEGIES = ('ordered', 'set')

PHONE_DEVICES = {'iPhone', 'iPod', 'Generic Smartphone'}
TABLET_DEVICES = {'iPad', 'Kindle', 'Generic Tablet'}
DESKTOP_OS = {'Windows', 'Mac OS X', 'Linux', 'Ubuntu', 'Fedora', 'Debian', 'Arch Linux', 'Chrome OS'}


def form_factor(client):
    """Грубый тип устройства по результату разбора"""
    device = client.device
    if device.family == 'Spider':
        return 'bot'
    if device.family in PHONE_DEVICES:
        return 'phone'
    if device.family in TABLET_DEVICES:
        return 'tablet'
    if device.family == 'Mac':
        return 'desktop'
    if device.family == UNKNOWN and client.os.family in DESKTOP_OS:
        return 'desktop'
    if client.os.family in ('Android', 'iOS', 'Windows Phone'):
        return 'phone'
    return 'other'


class UserAgentLogAnalyzer:
    """Статистика User-Agent по access-логам"""

    def __init__(self, parser, log_path, strategy='ordered', verbose=False):
        if strategy not in STRATEGIES:
            raise ValueError(f"Неизвестная стратегия {strategy!r}, ожидалась одна из {STRATEGIES}")
        self.parser = parser
        self.log_path = Path(log_path)
        self.log_files = self._resolve_log_files(self.log_path)
        self.strategy = strategy
        self.verbose = verbose
        self._parse = parser.parse_set if strategy == 'set' else parser.parse

    def _resolve_log_files(self, log_path):
        """Определяет список файлов для анализа"""
        if log_path.is_file():
            return [log_path]
        if log_path.is_dir():
            access_files = sorted(
                p for p in log_path.iterdir()
                if p.is_file() and 'access' in p.name.lower()
            )
            if not access_files:
                raise FileNotFoundError(f"В директории {log_path} нет access-логов для анализа")
            return access_files
        raise FileNotFoundError(f"Путь {log_path} не найден")

    def _open_log(self, log_file):
        if log_file.suffix == '.gz':
            return gzip.open(log_file, 'rt', encoding='utf-8', errors='ignore')
        return open(log_file, 'r', encoding='utf-8', errors='ignore')

    def classify(self, user_agent):
        client = self._parse(user_agent)
        return client, form_factor(client)

    def analyze(self):
        """Разбирает все файлы и возвращает сводку со счётчиками"""
        stats = {
            'total_lines': 0,
            'parsed_lines': 0,
            'unparsed_lines': 0,
            'empty_user_agents': 0,
            'user_agents': Counter(),
            'clients': Counter(),
            'client_versions': Counter(),
            'os': Counter(),
            'devices': Counter(),
            'brands': Counter(),
            'form_factors': Counter(),
        }

        print(f"Анализ User-Agent из {self.log_path} (стратегия: {self.strategy})")
        print(f"Найдено файлов для анализа: {len(self.log_files)}")

        for file_index, log_file in enumerate(self.log_files, 1):
            print(f"\n[{file_index}/{len(self.log_files)}] Файл: {log_file}")
            with self._open_log(log_file) as f:
                for line_num, line in enumerate(f, 1):
                    line = line.strip()
                    if not line:
                        continue
                    stats['total_lines'] += 1

                    entry = LogParser.parse_line(line)
                    if not entry:
                        stats['unparsed_lines'] += 1
                        if self.verbose:
                            logger.debug("Строка %s:%d не распознана", log_file, line_num)
                        continue
                    stats['parsed_lines'] += 1

                    user_agent = entry['user_agent']
                    if not user_agent or user_agent == '-':
                        stats['empty_user_agents'] += 1
                        continue

                    client, factor = self.classify(user_agent)
                    stats['user_agents'][user_agent] += 1
                    stats['clients'][client.user_agent.family] += 1
                    if client.user_agent.major:
                        stats['client_versions'][f"{client.user_agent.family} {client.user_agent.major}"] += 1
                    stats['os'][client.os.family] += 1
                    stats['devices'][client.device.family] += 1
                    if client.device.brand:
                        stats['brands'][client.device.brand] += 1
                    stats['form_factors'][factor] += 1

                    if line_num % 10000 == 0:
                        print(f"  Обработано строк: {line_num:,}")

        print(f"\nВсего строк: {stats['total_lines']:,}, распознано: {stats['parsed_lines']:,}")
        if stats['unparsed_lines']:
            print(f"Не распознано строк: {stats['unparsed_lines']:,}")
        return stats

    def print_summary(self, stats, top_n=10, out=None):
        out = out or sys.stdout
        print("\n" + "=" * 60, file=out)
        print("СВОДКА ПО USER-AGENT", file=out)
        print("=" * 60, file=out)
        sections = [
            ('Клиенты', stats['clients']),
            ('Операционные системы', stats['os']),
            ('Устройства', stats['devices']),
            ('Типы устройств', stats['form_factors']),
        ]
        for title, counter in sections:
            print(f"\n{title}:", file=out)
            for name, count in counter.most_common(top_n):
                print(f"  {name}: {count:,}", file=out)
