import re
from typing import Optional

MARKER = '$'
_PLACEHOLDER = re.compile(r'\$(\d+)')


def none_if_empty(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    return value


def replace(template: str, match) -> str:
    """Подставляет группы совпадения вместо `$N` в шаблоне.

    Группа, не участвовавшая в совпадении, даёт пустую строку. Ссылки на
    несуществующие группы остаются как есть. Результат обрезается по краям.
    """
    groups = match.groups()
    if MARKER not in template or not groups:
        return template.strip()

    def _group(m):
        index = int(m.group(1))
        if index < 1 or index > len(groups):
            return m.group(0)
        return groups[index - 1] or ''

    return _PLACEHOLDER.sub(_group, template).strip()


def capture(match, index: int) -> Optional[str]:
    """Группа `index` как есть (без обрезки) или None."""
    groups = match.groups()
    if index < 1 or index > len(groups):
        return None
    return none_if_empty(groups[index - 1])
