class ParserError(Exception):
    """Базовая ошибка построения парсера"""


class CatalogError(ParserError):
    """Каталог правил не удалось прочитать или разобрать"""


class PatternError(ParserError):
    """Отдельное правило не компилируется"""

    def __init__(self, facet, index, pattern, cause=None):
        self.facet = facet
        self.index = index
        self.pattern = pattern
        self.cause = cause
        super().__init__(f"{facet}: правило #{index} не компилируется: {pattern!r} ({cause})")


class AggregateError(ParserError):
    """Общий набор шаблонов фасета не компилируется (обычно превышен лимит памяти)"""

    def __init__(self, facet, cause=None):
        self.facet = facet
        self.cause = cause
        super().__init__(f"{facet}: не удалось собрать набор шаблонов ({cause})")
