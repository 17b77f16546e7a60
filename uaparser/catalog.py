"""
Каталог правил в формате uap-core (regexes.yaml).

Порядок записей в каждом списке задаёт приоритет: побеждает первое
совпавшее правило, поэтому при загрузке он сохраняется как есть.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .errors import CatalogError

DEFAULT_REGEXES = Path(__file__).parent / 'data' / 'regexes.yaml'


@dataclass(frozen=True)
class UserAgentParserEntry:
    regex: str
    family_replacement: Optional[str] = None
    v1_replacement: Optional[str] = None
    v2_replacement: Optional[str] = None
    v3_replacement: Optional[str] = None


@dataclass(frozen=True)
class OSParserEntry:
    regex: str
    regex_flag: Optional[str] = None
    os_replacement: Optional[str] = None
    os_v1_replacement: Optional[str] = None
    os_v2_replacement: Optional[str] = None
    os_v3_replacement: Optional[str] = None
    os_v4_replacement: Optional[str] = None


@dataclass(frozen=True)
class DeviceParserEntry:
    regex: str
    regex_flag: Optional[str] = None
    device_replacement: Optional[str] = None
    brand_replacement: Optional[str] = None
    model_replacement: Optional[str] = None


def _as_text(value):
    # YAML превращает "4" без кавычек в число
    if value is None:
        return None
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def _build_entries(entry_cls, items, facet) -> List[Any]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise CatalogError(f"{facet}: ожидался список правил, получено {type(items).__name__}")

    known = {f.name for f in fields(entry_cls)}
    entries = []
    for index, item in enumerate(items):
        if not isinstance(item, dict):
            raise CatalogError(f"{facet}: правило #{index} должно быть словарём")
        if item.get('regex') is None:
            raise CatalogError(f"{facet}: у правила #{index} нет поля regex")
        values = {k: _as_text(v) for k, v in item.items() if k in known}
        entries.append(entry_cls(**values))
    return entries


@dataclass(frozen=True)
class RegexFile:
    """Разобранный каталог: три упорядоченных списка правил"""
    user_agent_parsers: List[UserAgentParserEntry] = field(default_factory=list)
    os_parsers: List[OSParserEntry] = field(default_factory=list)
    device_parsers: List[DeviceParserEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RegexFile':
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise CatalogError("Каталог должен быть словарём верхнего уровня")
        return cls(
            user_agent_parsers=_build_entries(UserAgentParserEntry, data.get('user_agent_parsers'), 'user_agent'),
            os_parsers=_build_entries(OSParserEntry, data.get('os_parsers'), 'os'),
            device_parsers=_build_entries(DeviceParserEntry, data.get('device_parsers'), 'device'),
        )

    @classmethod
    def from_bytes(cls, data) -> 'RegexFile':
        """Разбирает YAML из строки или байтов"""
        try:
            parsed = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise CatalogError(f"Ошибка разбора YAML: {e}") from e
        return cls.from_dict(parsed)

    @classmethod
    def from_file(cls, file) -> 'RegexFile':
        """Разбирает YAML из открытого файла"""
        try:
            parsed = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise CatalogError(f"Ошибка разбора YAML: {e}") from e
        return cls.from_dict(parsed)

    @classmethod
    def from_yaml(cls, path) -> 'RegexFile':
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return cls.from_file(f)
        except OSError as e:
            raise CatalogError(f"Не удалось прочитать каталог {path}: {e}") from e
