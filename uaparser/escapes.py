import re

# Экранированные символы, которые в каталоге допустимы, а RE2 их не принимает
_ESCAPE = re.compile(r'\\(.)', re.DOTALL)
INVALID_ESCAPES = frozenset('! /')


def _unescape(match):
    char = match.group(1)
    if char in INVALID_ESCAPES:
        return char
    return match.group(0)


def clean_escapes(pattern: str) -> str:
    """Заменяет `\\!`, `\\/` и `\\ ` на сами символы.

    Пары `\\\\` разбираются целиком, поэтому экранированный обратный слэш
    перед `!` не трогается, и повторный вызов ничего не меняет.
    """
    return _ESCAPE.sub(_unescape, pattern)
