"""
Модуль координации запуска.

Последовательно обрабатывает все пары папок из конфигурации. Ошибка
одной исходной папки логируется и не мешает обработке следующих.
"""

from datetime import datetime
from typing import Dict, List, Optional

try:
    from .config_loader import Config
    from .logger import DateSorterLogger
    from .organizer import DirectoryError, DirectoryOrganizer, DirectoryReport, FileStatus
    from .template import InvalidTemplate, compile_template
except ImportError:
    from config_loader import Config
    from logger import DateSorterLogger
    from organizer import DirectoryError, DirectoryOrganizer, DirectoryReport, FileStatus
    from template import InvalidTemplate, compile_template


class RunStats:
    """Класс для хранения статистики запуска."""

    def __init__(self):
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None
        self.reports: List[DirectoryReport] = []

    def add_report(self, report: DirectoryReport) -> None:
        """Добавляет отчет по исходной папке."""
        self.reports.append(report)

    def _sum(self, status: FileStatus) -> int:
        return sum(1 for r in self.reports for o in r.outcomes if o.status is status)

    @property
    def moved_files(self) -> int:
        return self._sum(FileStatus.MOVED)

    @property
    def skipped_files(self) -> int:
        return self._sum(FileStatus.DATE_ERROR)

    @property
    def failed_files(self) -> int:
        return self._sum(FileStatus.MOVE_FAILED)

    @property
    def duplicated_files(self) -> int:
        return self._sum(FileStatus.DUPLICATED)

    @property
    def created_folders(self) -> int:
        return sum(len(r.created_folders) for r in self.reports)

    @property
    def failed_directories(self) -> int:
        return sum(1 for r in self.reports if r.error is not None)

    def has_errors(self) -> bool:
        """True если хотя бы один файл или папка обработаны с ошибкой."""
        return not all(r.ok for r in self.reports)

    def get_duration(self) -> Optional[float]:
        """Возвращает продолжительность запуска в секундах."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def to_dict(self) -> Dict:
        """Преобразует статистику в словарь."""
        return {
            'directories': len(self.reports),
            'moved_files': self.moved_files,
            'skipped_files': self.skipped_files,
            'failed_files': self.failed_files,
            'duplicated_files': self.duplicated_files,
            'created_folders': self.created_folders,
            'failed_directories': self.failed_directories,
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'duration_seconds': self.get_duration(),
        }


class DateSorter:
    """Основной класс запуска: обходит все пары папок из конфигурации."""

    def __init__(self, config: Config, logger: DateSorterLogger):
        """
        Инициализация.

        Args:
            config: Конфигурация приложения
            logger: Логгер для записи операций
        """
        self.config = config
        self.logger = logger
        template = compile_template(config.date_template)
        if isinstance(template, InvalidTemplate):
            # Файлы-кандидаты будут пропущены по одному
            logger.log_warning(f"Некорректный шаблон даты {config.date_template!r}: {template.error}")
        self.organizer = DirectoryOrganizer(
            min_file_size=config.min_file_size,
            template=template,
            logger=logger,
            verify=config.verify_copy
        )
        self.stats = RunStats()

    def run(self) -> RunStats:
        """
        Обрабатывает все пары папок по порядку.

        Returns:
            RunStats: Статистика запуска
        """
        self.stats.start_time = datetime.now()

        for pair in self.config.pairs:
            self.logger.log_source_start(pair)
            try:
                report = self.organizer.organize(pair)
            except DirectoryError as e:
                self.logger.log_directory_error(pair.source, e)
                report = e.report or DirectoryReport(pair=pair, error=e)
            self.stats.add_report(report)

        self.stats.end_time = datetime.now()

        self.logger.log_run_end(
            moved=self.stats.moved_files,
            skipped=self.stats.skipped_files,
            failed=self.stats.failed_files,
            duplicated=self.stats.duplicated_files,
            failed_directories=self.stats.failed_directories
        )

        return self.stats


def create_sorter(config: Config, logger: DateSorterLogger) -> DateSorter:
    """
    Удобная функция для создания объекта DateSorter.

    Args:
        config: Конфигурация приложения
        logger: Логгер

    Returns:
        DateSorter: Объект запуска
    """
    return DateSorter(config, logger)
