"""
Тесты для модуля template.py
"""

import pytest

from date_sorter.template import (
    DateParseError,
    DateParts,
    DateTemplate,
    InvalidTemplate,
    TemplateError,
    TemplateLengthError,
    TemplateSyntaxError,
    compile_template,
    extract_date,
)


class TestDateTemplateParse:
    """Тесты разбора шаблона."""

    def test_parse_valid_template(self):
        """Тест разбора корректного шаблона."""
        template = DateTemplate.parse("??ГГГГ?ММ?ДД")

        assert len(template) == 12
        assert str(template) == "??ГГГГ?ММ?ДД"

    @pytest.mark.parametrize("text, char, position", [
        ("ГГГГXММДД", "X", 4),
        ("Y?ММДД", "Y", 0),
        ("ГГММDD", "D", 4),
    ])
    def test_parse_invalid_marker(self, text, char, position):
        """Тест недопустимого символа в шаблоне."""
        with pytest.raises(TemplateSyntaxError) as exc_info:
            DateTemplate.parse(text)

        assert exc_info.value.char == char
        assert exc_info.value.position == position
        assert repr(char) in str(exc_info.value)

    def test_parse_latin_lookalike_is_invalid(self):
        """Тест: латинская M не равна кириллической М."""
        with pytest.raises(TemplateSyntaxError) as exc_info:
            DateTemplate.parse("ГГГГMMДД")

        assert exc_info.value.char == "M"

    def test_parse_empty_template(self):
        """Тест пустого шаблона."""
        with pytest.raises(TemplateSyntaxError, match="шаблон пуст"):
            DateTemplate.parse("")


class TestDateTemplateMatch:
    """Тесты извлечения даты из имени файла."""

    def test_match_reference_example(self):
        """Тест примера AB2024C05D17."""
        parts = DateTemplate.parse("??ГГГГ?ММ?ДД").match("AB2024C05D17")

        assert parts == DateParts(year="2024", month="05", day="17")
        assert parts.folder_name() == "17-05-2024"

    def test_match_ignores_tail_beyond_template(self):
        """Тест: символы после конца шаблона не учитываются."""
        parts = DateTemplate.parse("ГГГГММДД").match("20240517_camera1.mp4")

        assert parts == DateParts("2024", "05", "17")

    def test_match_interleaved_markers(self):
        """Тест: поля собираются по позициям, даже если идут вперемешку."""
        parts = DateTemplate.parse("ДГМГДГМГ").match("12345678")

        assert parts.year == "2468"
        assert parts.month == "37"
        assert parts.day == "15"

    def test_match_no_calendar_validation(self):
        """Тест: месяц 13 и день 00 допустимы."""
        parts = DateTemplate.parse("ГГГГММДД").match("20241300.dat")

        assert parts.month == "13"
        assert parts.day == "00"

    def test_match_filename_shorter_than_template(self):
        """Тест: короткое имя дает ошибку, а не IndexError."""
        template = DateTemplate.parse("??ГГГГ?ММ?ДД")

        with pytest.raises(TemplateLengthError) as exc_info:
            template.match("AB2024")

        assert exc_info.value.template_length == 12
        assert isinstance(exc_info.value, TemplateError)

    def test_match_exact_length(self):
        """Тест: имя той же длины, что и шаблон."""
        parts = DateTemplate.parse("ГГММДД").match("240517")

        assert parts == DateParts("24", "05", "17")

    @pytest.mark.parametrize("filename, field, value", [
        ("ABCD0517", "year", "ABCD"),
        ("2024XX17", "month", "XX"),
        ("202405-1", "day", "-1"),
        ("2024+517", "month", "+5"),
        ("2024 517", "month", " 5"),
        ("2024²517", "month", "²5"),
    ])
    def test_match_non_numeric_field(self, filename, field, value):
        """Тест: нечисловое поле дает DateParseError с именем поля."""
        with pytest.raises(DateParseError) as exc_info:
            DateTemplate.parse("ГГГГММДД").match(filename)

        assert exc_info.value.field == field
        assert exc_info.value.value == value

    def test_match_missing_field_is_parse_error(self):
        """Тест: шаблон без маркеров дня дает ошибку разбора дня."""
        with pytest.raises(DateParseError) as exc_info:
            DateTemplate.parse("ГГГГММ").match("202405")

        assert exc_info.value.field == "day"
        assert "день" in str(exc_info.value)


class TestExtractDate:
    """Тесты функции extract_date."""

    def test_extract_date(self):
        """Тест удобной функции."""
        assert extract_date("AB2024C05D17", "??ГГГГ?ММ?ДД") == DateParts("2024", "05", "17")

    def test_syntax_checked_before_length(self):
        """Тест: недопустимый символ обнаруживается даже для короткого имени."""
        with pytest.raises(TemplateSyntaxError) as exc_info:
            extract_date("A", "ГГГГ!ММДД")

        assert exc_info.value.char == "!"


class TestCompileTemplate:
    """Тесты разбора шаблона без исключений."""

    def test_valid_template(self):
        """Тест: корректный шаблон дает DateTemplate."""
        template = compile_template("??ГГГГ?ММ?ДД")

        assert isinstance(template, DateTemplate)
        assert template.match("AB2024C05D17") == DateParts("2024", "05", "17")

    @pytest.mark.parametrize("filename", ["AB2024C05D17", "A", ""])
    def test_invalid_template_fails_every_match(self, filename):
        """Тест: некорректный шаблон дает синтаксическую ошибку для любого имени."""
        template = compile_template("ГГГГ!ММДД")

        assert isinstance(template, InvalidTemplate)
        assert str(template) == "ГГГГ!ММДД"
        with pytest.raises(TemplateSyntaxError) as exc_info:
            template.match(filename)

        assert exc_info.value.char == "!"
        assert exc_info.value.position == 4
        assert isinstance(exc_info.value, TemplateError)

    def test_empty_template(self):
        """Тест: пустой шаблон тоже некорректен."""
        template = compile_template("")

        with pytest.raises(TemplateSyntaxError, match="шаблон пуст"):
            template.match("AB2024C05D17")
