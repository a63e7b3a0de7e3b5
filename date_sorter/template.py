"""
Модуль для извлечения даты из имени файла по позиционному шаблону.

Каждый символ шаблона соответствует ровно одному символу имени файла,
начиная с позиции 0:

    Г - цифра года
    М - цифра месяца
    Д - цифра дня
    ? - пропуск символа

Пример: шаблон "??ГГГГ?ММ?ДД" и имя "AB2024C05D17" дают 2024, 05, 17.
"""

from dataclasses import dataclass
from typing import Tuple, Union


YEAR_MARKER = 'Г'
MONTH_MARKER = 'М'
DAY_MARKER = 'Д'
SKIP_MARKER = '?'

MARKERS = (YEAR_MARKER, MONTH_MARKER, DAY_MARKER, SKIP_MARKER)

_FIELD_BY_MARKER = {
    YEAR_MARKER: 'year',
    MONTH_MARKER: 'month',
    DAY_MARKER: 'day',
}

_FIELD_TITLES = {
    'year': 'год',
    'month': 'месяц',
    'day': 'день',
}


class TemplateError(Exception):
    """Базовое исключение для ошибок сопоставления с шаблоном."""
    pass


class TemplateSyntaxError(TemplateError):
    """Шаблон содержит недопустимый символ."""

    def __init__(self, char: str, position: int, message: str = None):
        self.char = char
        self.position = position
        if message is None:
            message = f"шаблон содержит недопустимый символ: {char!r} (позиция {position})"
        super().__init__(message)


class TemplateLengthError(TemplateError):
    """Имя файла короче шаблона."""

    def __init__(self, filename: str, template_length: int):
        self.filename = filename
        self.template_length = template_length
        super().__init__(
            f"имя файла {filename!r} короче шаблона "
            f"({len(filename)} < {template_length})"
        )


class DateParseError(TemplateError):
    """Поле даты не является числом."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"не удалось разобрать {_FIELD_TITLES[field]}: {value!r}")


@dataclass(frozen=True)
class DateParts:
    """Год, месяц и день в том виде, в каком они записаны в имени файла."""
    year: str
    month: str
    day: str

    def folder_name(self) -> str:
        """Имя папки с датой в формате <день>-<месяц>-<год>."""
        return f"{self.day}-{self.month}-{self.year}"


def _is_number(value: str) -> bool:
    # str.isdigit() пропускает надстрочные и не-ASCII цифры
    return bool(value) and value.isascii() and value.isdigit()


class DateTemplate:
    """Разобранный позиционный шаблон даты."""

    def __init__(self, markers: Tuple[str, ...]):
        self.markers = markers

    @classmethod
    def parse(cls, text: str) -> 'DateTemplate':
        """
        Проверяет шаблон и создает объект DateTemplate.

        Args:
            text: Строка шаблона

        Returns:
            DateTemplate: Разобранный шаблон

        Raises:
            TemplateSyntaxError: Если шаблон пуст или содержит недопустимый символ
        """
        if not text:
            raise TemplateSyntaxError('', 0, "шаблон пуст")
        for position, char in enumerate(text):
            if char not in MARKERS:
                raise TemplateSyntaxError(char, position)
        return cls(tuple(text))

    def __len__(self) -> int:
        return len(self.markers)

    def __str__(self) -> str:
        return ''.join(self.markers)

    def __repr__(self) -> str:
        return f"DateTemplate({str(self)!r})"

    def match(self, filename: str) -> DateParts:
        """
        Извлекает год, месяц и день из имени файла.

        Проверка календарной корректности не выполняется: месяц "13"
        считается допустимым.

        Args:
            filename: Имя файла без каталога

        Returns:
            DateParts: Извлеченные поля даты

        Raises:
            TemplateLengthError: Если имя файла короче шаблона
            DateParseError: Если поле даты не является числом
        """
        if len(filename) < len(self.markers):
            raise TemplateLengthError(filename, len(self.markers))

        parts = {'year': [], 'month': [], 'day': []}
        for marker, char in zip(self.markers, filename):
            if marker != SKIP_MARKER:
                parts[_FIELD_BY_MARKER[marker]].append(char)

        values = {name: ''.join(chars) for name, chars in parts.items()}
        for name in ('year', 'month', 'day'):
            if not _is_number(values[name]):
                raise DateParseError(name, values[name])

        return DateParts(**values)


class InvalidTemplate:
    """
    Шаблон с синтаксической ошибкой.

    Сопоставление с любым именем файла завершается той же ошибкой,
    поэтому каждый файл-кандидат пропускается отдельно.
    """

    def __init__(self, text: str, error: TemplateSyntaxError):
        self.text = text
        self.error = error

    def __len__(self) -> int:
        return len(self.text)

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"InvalidTemplate({self.text!r})"

    def match(self, filename: str) -> DateParts:
        """
        Raises:
            TemplateSyntaxError: Всегда
        """
        raise TemplateSyntaxError(self.error.char, self.error.position, str(self.error))


def compile_template(text: str) -> Union[DateTemplate, InvalidTemplate]:
    """
    Разбирает шаблон без выбрасывания исключения.

    Args:
        text: Строка шаблона

    Returns:
        DateTemplate, либо InvalidTemplate если шаблон некорректен
    """
    try:
        return DateTemplate.parse(text)
    except TemplateSyntaxError as e:
        return InvalidTemplate(text, e)


def extract_date(filename: str, template: str) -> DateParts:
    """
    Удобная функция: разбирает шаблон и применяет его к имени файла.

    Синтаксис шаблона проверяется до сравнения длин, поэтому
    недопустимый символ обнаруживается для любого имени файла.

    Args:
        filename: Имя файла
        template: Строка шаблона

    Returns:
        DateParts: Извлеченные поля даты
    """
    return DateTemplate.parse(template).match(filename)
