"""
Модуль для настройки и управления логированием приложения.

Пишет каждое событие одной строкой "ДД-ММ-ГГГГ ЧЧ:ММ:СС: сообщение"
одновременно в дневной лог-файл (logs/ДД-ММ-ГГГГ.log) и в консоль.
Лог-файлы старше срока хранения удаляются при запуске.
"""

import logging
import os
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional

try:
    from .config_loader import DirectoryPair, LoggingConfig
except ImportError:
    from config_loader import DirectoryPair, LoggingConfig


LOGGER_NAME = 'date_sorter'
LOG_FORMAT = '%(asctime)s: [%(levelname)s] %(message)s'
LOG_DATE_FORMAT = '%d-%m-%Y %H:%M:%S'
LOG_FILE_NAME_FORMAT = '%d-%m-%Y.log'


class LogSetupError(Exception):
    """Исключение для ошибок создания или открытия лог-файла."""
    pass


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветным выводом для консоли."""

    # Цветовые коды ANSI
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Форматирует запись лога с цветом."""
        # Запись общая для всех обработчиков, поэтому уровень меняем на копии
        record = logging.makeLogRecord(record.__dict__)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"

        return super().format(record)


def log_file_path(log_dir: Path, now: Optional[datetime] = None) -> Path:
    """
    Возвращает путь к лог-файлу за указанный день.

    Args:
        log_dir: Каталог логов
        now: Момент времени (по умолчанию текущий)

    Returns:
        Path: Путь вида <log_dir>/ДД-ММ-ГГГГ.log
    """
    if now is None:
        now = datetime.now()
    return Path(log_dir) / now.strftime(LOG_FILE_NAME_FORMAT)


class DateSorterLogger:
    """Класс для управления логированием приложения Date Sorter."""

    def __init__(self, config: LoggingConfig, now: Optional[datetime] = None):
        """
        Инициализация логгера.

        Args:
            config: Конфигурация логирования
            now: Дата, по которой выбирается лог-файл (по умолчанию текущая)

        Raises:
            LogSetupError: Если не удалось создать каталог или открыть файл
        """
        self.config = config
        self.log_file = log_file_path(config.log_dir, now)
        self.logger: Optional[logging.Logger] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Настраивает логгер с файловым и консольным выводом."""
        level = getattr(logging, self.config.level.upper())

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(level)

        # Очищаем существующие обработчики
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
        colored_formatter = ColoredFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        try:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LogSetupError(f"Не удалось создать директорию для логов: {e}")

        try:
            file_handler = logging.FileHandler(self.log_file, mode='a', encoding='utf-8')
        except OSError as e:
            raise LogSetupError(f"Не удалось открыть лог-файл {self.log_file}: {e}")
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(colored_formatter)
        console_handler.setLevel(level)

        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)

        # Предотвращаем дублирование сообщений
        self.logger.propagate = False

    def close(self) -> None:
        """Закрывает обработчики логгера."""
        if self.logger is None:
            return
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

    def log_run_start(self) -> None:
        """Логирует запуск программы."""
        self.logger.info("🚀 Программа запущена")

    def log_run_end(self, moved: int, skipped: int, failed: int, duplicated: int,
                    failed_directories: int) -> None:
        """
        Логирует завершение программы и итоговую статистику.

        Args:
            moved: Перемещено файлов
            skipped: Пропущено из-за имени, не подходящего под шаблон
            failed: Ошибок перемещения
            duplicated: Файлов, оставшихся и в источнике, и в назначении
            failed_directories: Исходных папок, обработка которых прервана
        """
        self.logger.info("📊 Статистика:")
        self.logger.info(f"   • Перемещено: {moved}")
        self.logger.info(f"   • Пропущено: {skipped}")
        self.logger.info(f"   • Ошибок перемещения: {failed}")
        if duplicated:
            self.logger.warning(f"   • Не удалены после копирования: {duplicated}")
        if failed_directories:
            self.logger.error(f"   • Прерванных папок: {failed_directories}")
        self.logger.info("✅ Программа завершена")

    def log_source_start(self, pair: DirectoryPair) -> None:
        """Логирует начало обработки исходной папки."""
        self.logger.info(f"📂 Обработка исходной папки: {pair.source} → {pair.target}")

    def log_folder_created(self, path: Path) -> None:
        """Логирует создание папки назначения."""
        self.logger.info(f"📁 Создана папка: {path}")

    def log_file_moved(self, source_path: Path, target_path: Path) -> None:
        """
        Логирует успешное перемещение файла.

        Args:
            source_path: Исходный путь
            target_path: Целевой путь
        """
        self.logger.info(f"📄 Файл {source_path} перемещен в {target_path}")

    def log_file_skipped(self, file_name: str, error: Exception) -> None:
        """
        Логирует пропуск файла, имя которого не подходит под шаблон.

        Args:
            file_name: Имя файла
            error: Исключение сопоставления
        """
        self.logger.error(f"❌ Ошибка извлечения даты из файла {file_name}: {error}")

    def log_file_error(self, source_path: Path, target_path: Path, error: Exception) -> None:
        """
        Логирует ошибку перемещения файла.

        Args:
            source_path: Исходный путь
            target_path: Целевой путь
            error: Исключение
        """
        self.logger.error(f"❌ Ошибка при перемещении файла {source_path} в {target_path}: {error}")

    def log_file_duplicated(self, source_path: Path, target_path: Path, error: Exception) -> None:
        """Логирует файл, скопированный в назначение, но не удаленный из источника."""
        self.logger.warning(
            f"⚠️ Файл {source_path} скопирован в {target_path}, "
            f"но исходный файл не удален: {error}"
        )

    def log_directory_error(self, source_dir: Path, error: Exception) -> None:
        """
        Логирует ошибку обработки исходной папки.

        Args:
            source_dir: Исходная папка
            error: Исключение
        """
        self.logger.error(f"❌ Ошибка при обработке папки {source_dir}: {error}")

    def log_log_removed(self, file_name: str) -> None:
        """Логирует удаление устаревшего лог-файла."""
        self.logger.info(f"🗑️ Удален старый лог-файл: {file_name}")

    def log_config_loaded(self, config_path: str, created: bool = False) -> None:
        """
        Логирует загрузку конфигурации.

        Args:
            config_path: Путь к файлу конфигурации
            created: Файл был создан с настройками по умолчанию
        """
        if created:
            self.logger.warning(f"⚙️ Файл конфигурации не найден, создан по умолчанию: {config_path}")
        else:
            self.logger.info(f"⚙️ Конфигурация загружена из {config_path}")

    def log_system_info(self, info: str) -> None:
        """Логирует системную информацию."""
        self.logger.info(f"ℹ️ {info}")

    def log_error(self, message: str) -> None:
        """Логирует ошибку."""
        self.logger.error(f"❌ {message}")

    def log_warning(self, message: str) -> None:
        """Логирует предупреждение."""
        self.logger.warning(f"⚠️ {message}")

    def log_critical_error(self, message: str, error: Exception = None) -> None:
        """
        Логирует критическую ошибку.

        Args:
            message: Сообщение об ошибке
            error: Исключение (опционально)
        """
        if error:
            self.logger.critical(f"💥 {message}: {error}")
        else:
            self.logger.critical(f"💥 {message}")


def clean_old_logs(log_dir: Path, retention_days: int, logger: DateSorterLogger,
                   now: Optional[datetime] = None) -> List[Path]:
    """
    Удаляет лог-файлы, измененные раньше, чем retention_days дней назад.

    Ошибки чтения каталога, получения информации о файле и удаления
    логируются и не прерывают работу.

    Args:
        log_dir: Каталог логов
        retention_days: Срок хранения в днях
        logger: Логгер
        now: Текущий момент (по умолчанию datetime.now())

    Returns:
        List[Path]: Удаленные файлы
    """
    if now is None:
        now = datetime.now()
    cutoff = (now - timedelta(days=retention_days)).timestamp()
    log_dir = Path(log_dir)
    removed = []

    try:
        entries = sorted(os.scandir(log_dir), key=lambda e: e.name)
    except OSError as e:
        logger.log_error(f"Не удалось прочитать директорию логов: {e}")
        return removed

    for entry in entries:
        try:
            if entry.is_dir():
                continue
            mtime = entry.stat().st_mtime
        except OSError as e:
            logger.log_error(f"Не удалось получить информацию о файле {entry.name}: {e}")
            continue

        if mtime < cutoff:
            path = log_dir / entry.name
            try:
                path.unlink()
            except OSError as e:
                logger.log_error(f"Не удалось удалить старый лог-файл {entry.name}: {e}")
                continue
            logger.log_log_removed(entry.name)
            removed.append(path)

    return removed

