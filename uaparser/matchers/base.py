import logging
from typing import Optional, Sequence, Tuple

import re2

from ..errors import AggregateError, PatternError
from ..escapes import clean_escapes
from ..substitution import capture, none_if_empty, replace

logger = logging.getLogger(__name__)

# Потолок памяти на скомпилированную программу RE2 (байты)
DEFAULT_SIZE_LIMIT = 20 * (1 << 23)


def build_options(size_limit=DEFAULT_SIZE_LIMIT):
    options = re2.Options()
    options.max_mem = size_limit
    options.log_errors = False
    return options


def prepare_pattern(pattern: str, flag: Optional[str] = None) -> str:
    """Нормализует шаблон и переносит флаг правила внутрь него"""
    pattern = clean_escapes(pattern)
    if flag == 'i':
        return '(?i)' + pattern
    if flag:
        logger.warning("Неизвестный regex_flag %r, флаг проигнорирован", flag)
    return pattern


def utf8_safe(text: str) -> str:
    """Строка, которую RE2 может закодировать в UTF-8.

    Одиночные суррогаты (например, после surrogateescape) заменяются на `?`.
    """
    try:
        text.encode('utf-8')
    except UnicodeEncodeError:
        return text.encode('utf-8', 'replace').decode('utf-8')
    return text


def extract_field(match, template: Optional[str], group: Optional[int] = None) -> Optional[str]:
    """Значение поля: шаблон, если он задан, иначе группа `group`"""
    if template is not None:
        return none_if_empty(replace(template, match))
    if group is None:
        return None
    return capture(match, group)


class Rule:
    """Одно скомпилированное правило вместе с шаблонами полей"""

    def __init__(self, entry, regex):
        self.entry = entry
        self.regex = regex

    def try_parse(self, text: str):
        match = self.regex.search(text)
        if match is None:
            return None
        return self.extract(match)

    def extract(self, match):
        raise NotImplementedError


class FacetMatcher:
    """
    Упорядоченный список правил фасета и общий набор RE2 поверх тех же шаблонов.

    Индексы в наборе совпадают с позициями в `rules`, на этом держится
    `try_parse_set`.
    """

    facet = None
    rule_class = Rule
    record_class = None

    def __init__(self, entries: Sequence, size_limit=DEFAULT_SIZE_LIMIT):
        entries = list(entries)
        options = build_options(size_limit)
        patterns = [prepare_pattern(e.regex, getattr(e, 'regex_flag', None)) for e in entries]
        self.rules: Tuple[Rule, ...] = tuple(
            self._compile_rule(index, pattern, entry, options)
            for index, (pattern, entry) in enumerate(zip(patterns, entries))
        )
        self._set = self._compile_set(patterns, entries, options)
        logger.debug("%s: скомпилировано правил: %d", self.facet, len(self.rules))

    def _compile_rule(self, index, pattern, entry, options):
        try:
            regex = re2.compile(pattern, options=options)
        except re2.error as e:
            raise PatternError(self.facet, index, entry.regex, e) from e
        return self.rule_class(entry, regex)

    def _compile_set(self, patterns, entries, options):
        if not patterns:
            return None
        pattern_set = re2.Set.SearchSet(options=options)
        for index, pattern in enumerate(patterns):
            try:
                added = pattern_set.Add(pattern)
            except re2.error as e:
                raise PatternError(self.facet, index, entries[index].regex, e) from e
            if added != index:
                raise AggregateError(self.facet, f"индекс {added} вместо {index}")
        try:
            pattern_set.Compile()
        except re2.error as e:
            raise AggregateError(self.facet, e) from e
        return pattern_set

    def __len__(self):
        return len(self.rules)

    def default(self):
        return self.record_class()

    def try_parse(self, text: str):
        """Первое по порядку совпавшее правило или None"""
        text = utf8_safe(text)
        for rule in self.rules:
            result = rule.try_parse(text)
            if result is not None:
                return result
        return None

    def matching_indices(self, text: str):
        """Индексы всех правил, чьи шаблоны находятся в строке, по возрастанию"""
        if self._set is None:
            return []
        text = utf8_safe(text)
        return sorted(self._set.Match(text) or [])

    def try_parse_set(self, text: str):
        """То же, что try_parse, но кандидат выбирается одним проходом набора"""
        text = utf8_safe(text)
        indices = self.matching_indices(text)
        if not indices:
            return None
        return self.rules[indices[0]].try_parse(text)
