"""Исключения модуля аннотаций."""

from typing import Iterable


class AnnotationError(ValueError):
    """Базовая ошибка построения аннотации."""


class _LookupFailure(AnnotationError):
    kind = 'key'

    def __init__(self, key: str, accepted: Iterable[str]):
        self.key = key
        self.accepted = tuple(accepted)
        super().__init__(
            f"Unknown {self.kind} {key!r}; expected one of: {', '.join(self.accepted)}"
        )


class UnknownUnit(_LookupFailure):
    """Единица измерения отсутствует в таблице UNITS."""
    kind = 'unit'


class UnknownPage(_LookupFailure):
    """Формат листа отсутствует в таблице PAGES."""
    kind = 'page'


class UnrecognizedLayout(AnnotationError):
    """Недопустимое значение loc для размерной надписи."""

    def __init__(self, loc):
        self.loc = loc
        super().__init__(f"Unrecognized dimension location: {loc!r}")
