"""
Модуль для загрузки и валидации конфигурации приложения.

Загружает параметры из config.json. Если файла нет, записывает
конфигурацию по умолчанию и использует ее для текущего запуска.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple

DEFAULT_CONFIG_PATH = "config.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "source_dirs": ["e:/FilesNota/572149/1", "e:/FilesNota/572149/2"],
    "target_dirs": ["//192.168.2.15/5otd/test/", "//192.168.2.15/5otd/test/"],
    "min_file_size": 26463150,
    "date_template": "??ГГГГ?ММ?ДД",
}

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigError(Exception):
    """Исключение для нечитаемой или некорректной конфигурации."""
    pass


@dataclass(frozen=True)
class DirectoryPair:
    """Пара: исходная папка и базовая папка назначения."""
    source: Path
    target: Path


@dataclass(frozen=True)
class LoggingConfig:
    """Конфигурация логирования."""
    level: str = 'INFO'
    log_dir: Path = Path('logs')
    retention_days: int = 5


@dataclass(frozen=True)
class Config:
    """Основная конфигурация приложения."""
    pairs: Tuple[DirectoryPair, ...]
    min_file_size: int
    date_template: str
    verify_copy: bool = False
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """Класс для загрузки и валидации конфигурации."""

    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        """
        Инициализация загрузчика конфигурации.

        Args:
            config_path: Путь к файлу конфигурации
        """
        self.config_path = Path(config_path)
        self.created = False

    def load_config(self) -> Config:
        """
        Загружает конфигурацию из файла.

        Если файл отсутствует, создает его с настройками по умолчанию
        и возвращает их без повторного чтения.

        Returns:
            Config: Объект конфигурации

        Raises:
            ConfigError: Если файл нельзя прочитать, создать или он некорректен
        """
        self.created = False

        if not self.config_path.exists():
            write_default_config(self.config_path)
            self.created = True
            raw = DEFAULT_CONFIG
        else:
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    raw = json.load(f)
            except (OSError, UnicodeDecodeError) as e:
                raise ConfigError(f"Ошибка при открытии файла конфигурации: {e}")
            except json.JSONDecodeError as e:
                raise ConfigError(f"Ошибка при чтении файла конфигурации: {e}")

        return parse_config(raw)


def write_default_config(path: Path) -> None:
    """
    Записывает конфигурацию по умолчанию в файл.

    Args:
        path: Путь к файлу конфигурации

    Raises:
        ConfigError: Если файл не удалось создать или записать
    """
    path = Path(path)
    try:
        if path.parent != Path('.'):
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(DEFAULT_CONFIG, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise ConfigError(f"Не удалось создать файл конфигурации: {e}")


def parse_config(raw: Any) -> Config:
    """
    Строит и валидирует Config из разобранного JSON.

    Args:
        raw: Результат json.load

    Returns:
        Config: Объект конфигурации

    Raises:
        ConfigError: Если конфигурация некорректна
    """
    if not isinstance(raw, dict):
        raise ConfigError("Конфигурация должна быть JSON-объектом")

    pairs = _parse_pairs(raw)

    min_file_size = raw.get('min_file_size')
    # bool является подклассом int
    if isinstance(min_file_size, bool) or not isinstance(min_file_size, int):
        raise ConfigError("Поле 'min_file_size' должно быть целым числом")
    if min_file_size < 0:
        raise ConfigError("Минимальный размер файла не может быть отрицательным")

    date_template = raw.get('date_template')
    if not isinstance(date_template, str) or not date_template:
        raise ConfigError("Поле 'date_template' должно быть непустой строкой")

    verify_copy = raw.get('verify_copy', False)
    if not isinstance(verify_copy, bool):
        raise ConfigError("Поле 'verify_copy' должно быть true или false")

    return Config(
        pairs=pairs,
        min_file_size=min_file_size,
        date_template=date_template,
        verify_copy=verify_copy,
        logging=_parse_logging(raw.get('logging', {}))
    )


def _parse_pairs(raw: Dict[str, Any]) -> Tuple[DirectoryPair, ...]:
    """Загружает пары папок из 'pairs' или из параллельных списков."""
    if 'pairs' in raw:
        items = raw['pairs']
        if not isinstance(items, list):
            raise ConfigError("Поле 'pairs' должно быть списком")
        pairs = []
        for index, item in enumerate(items):
            if not isinstance(item, dict):
                raise ConfigError(f"Элемент pairs[{index}] должен быть объектом")
            source, target = item.get('source'), item.get('target')
            if not isinstance(source, str) or not isinstance(target, str):
                raise ConfigError(f"Элемент pairs[{index}] должен содержать строки 'source' и 'target'")
            pairs.append(DirectoryPair(Path(source), Path(target)))
        return tuple(pairs)

    source_dirs = raw.get('source_dirs')
    target_dirs = raw.get('target_dirs')
    for name, value in (('source_dirs', source_dirs), ('target_dirs', target_dirs)):
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"Поле '{name}' должно быть списком строк")

    if len(source_dirs) != len(target_dirs):
        raise ConfigError(
            f"Количество исходных папок ({len(source_dirs)}) не совпадает "
            f"с количеством целевых ({len(target_dirs)})"
        )

    return tuple(DirectoryPair(Path(s), Path(t)) for s, t in zip(source_dirs, target_dirs))


def _parse_logging(section: Any) -> LoggingConfig:
    """Загружает конфигурацию логирования."""
    if not isinstance(section, dict):
        raise ConfigError("Секция 'logging' должна быть объектом")

    defaults = LoggingConfig()
    level = section.get('level', defaults.level)
    if not isinstance(level, str) or level.upper() not in VALID_LOG_LEVELS:
        raise ConfigError(f"Некорректный уровень логирования: {level}")

    log_dir = section.get('log_dir', str(defaults.log_dir))
    if not isinstance(log_dir, str) or not log_dir:
        raise ConfigError("Поле 'log_dir' должно быть непустой строкой")

    retention_days = section.get('retention_days', defaults.retention_days)
    if isinstance(retention_days, bool) or not isinstance(retention_days, int) or retention_days < 0:
        raise ConfigError("Срок хранения логов должен быть неотрицательным целым числом")

    return LoggingConfig(
        level=level.upper(),
        log_dir=Path(log_dir),
        retention_days=retention_days
    )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Config:
    """
    Удобная функция для быстрой загрузки конфигурации.

    Args:
        config_path: Путь к файлу конфигурации

    Returns:
        Config: Объект конфигурации
    """
    loader = ConfigLoader(config_path)
    return loader.load_config()


if __name__ == "__main__":
    # Тестирование модуля
    try:
        config = load_config()
        print("✅ Конфигурация успешно загружена!")
        for pair in config.pairs:
            print(f"📁 {pair.source} → {pair.target}")
        print(f"📏 Минимальный размер: {config.min_file_size}")
        print(f"🔤 Шаблон даты: {config.date_template}")
    except ConfigError as e:
        print(f"❌ Ошибка загрузки конфигурации: {e}")
