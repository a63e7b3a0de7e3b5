"""
Модуль раскладки файлов исходной папки по папкам с датами.

Обходит дерево исходной папки, отбирает файлы не меньше заданного
размера, извлекает дату из имени по шаблону и перемещает файл в
<целевая папка>/<день>-<месяц>-<год>/<имя исходной папки>/.

Ошибки отдельных файлов записываются в отчет и не прерывают обход.
Ошибка создания папки назначения и ошибка чтения дерева прерывают
обработку всей исходной папки.

Исходная папка должна быть каталогом: если на ее месте обычный файл,
обработка папки прерывается с TraversalError, сам файл не перемещается.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

try:
    from .config_loader import DirectoryPair
    from .file_ops import MoveError, SourceDeleteError, ensure_directory, move_file
    from .logger import DateSorterLogger
    from .template import DateParts, DateTemplate, InvalidTemplate, TemplateError
except ImportError:
    from config_loader import DirectoryPair
    from file_ops import MoveError, SourceDeleteError, ensure_directory, move_file
    from logger import DateSorterLogger
    from template import DateParts, DateTemplate, InvalidTemplate, TemplateError


class FileStatus(Enum):
    """Результат обработки одного файла."""
    MOVED = 'moved'
    DATE_ERROR = 'date_error'
    MOVE_FAILED = 'move_failed'
    DUPLICATED = 'duplicated'


@dataclass
class FileOutcome:
    """Результат обработки файла-кандидата."""
    source: Path
    status: FileStatus
    target: Optional[Path] = None
    error: Optional[Exception] = None


@dataclass
class DirectoryReport:
    """Отчет об обработке одной исходной папки."""
    pair: DirectoryPair
    outcomes: List[FileOutcome] = field(default_factory=list)
    created_folders: List[Path] = field(default_factory=list)
    error: Optional[Exception] = None

    def _count(self, status: FileStatus) -> int:
        return sum(1 for outcome in self.outcomes if outcome.status is status)

    @property
    def moved(self) -> int:
        return self._count(FileStatus.MOVED)

    @property
    def skipped(self) -> int:
        return self._count(FileStatus.DATE_ERROR)

    @property
    def failed(self) -> int:
        return self._count(FileStatus.MOVE_FAILED)

    @property
    def duplicated(self) -> int:
        return self._count(FileStatus.DUPLICATED)

    @property
    def ok(self) -> bool:
        """True если папка обработана полностью и без ошибок."""
        return self.error is None and all(o.status is FileStatus.MOVED for o in self.outcomes)


class DirectoryError(Exception):
    """Ошибка, прерывающая обработку исходной папки."""

    def __init__(self, message: str, report: Optional[DirectoryReport] = None):
        self.report = report
        super().__init__(message)


class DestinationFolderCreateError(DirectoryError):
    """Не удалось создать папку назначения."""
    pass


class TraversalError(DirectoryError):
    """Не удалось прочитать дерево исходной папки."""
    pass


def subfolder_name(source_dir: Path) -> str:
    """Имя последнего компонента исходной папки ("1" для e:/FilesNota/572149/1)."""
    name = os.path.basename(os.path.normpath(str(source_dir)))
    return '' if name in ('.', os.sep) else name


def destination_folder(pair: DirectoryPair, parts: DateParts) -> Path:
    """
    Формирует путь папки назначения.

    Args:
        pair: Пара исходной и целевой папок
        parts: Дата, извлеченная из имени файла

    Returns:
        Path: <target>/<день>-<месяц>-<год>/<имя исходной папки>
    """
    return Path(pair.target) / parts.folder_name() / subfolder_name(pair.source)


class DirectoryOrganizer:
    """Раскладывает файлы одной исходной папки по папкам с датами."""

    def __init__(self, min_file_size: int, template: Union[DateTemplate, InvalidTemplate],
                 logger: DateSorterLogger, verify: bool = False):
        """
        Args:
            min_file_size: Минимальный размер файла-кандидата в байтах
            template: Разобранный шаблон даты (InvalidTemplate пропускает каждый файл)
            logger: Логгер
            verify: Проверять md5 копии перед удалением источника
        """
        self.min_file_size = min_file_size
        self.template = template
        self.logger = logger
        self.verify = verify

    def organize(self, pair: DirectoryPair) -> DirectoryReport:
        """
        Обрабатывает все файлы в дереве исходной папки.

        Args:
            pair: Пара исходной и целевой папок

        Returns:
            DirectoryReport: Отчет об обработке

        Raises:
            DestinationFolderCreateError: Если не удалось создать папку назначения
            TraversalError: Если не удалось прочитать каталог или файл дерева
        """
        report = DirectoryReport(pair=pair)
        try:
            self._walk(Path(pair.source), pair, report)
        except DirectoryError as e:
            e.report = report
            report.error = e
            raise
        return report

    def _walk(self, directory: Path, pair: DirectoryPair, report: DirectoryReport) -> None:
        """Рекурсивный обход: содержимое каталога читается целиком до обработки."""
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            raise TraversalError(f"не удалось прочитать каталог {directory}: {e}")

        for entry in entries:
            path = Path(entry.path)
            try:
                # Ссылки не разыменовываются, как при lstat
                is_dir = entry.is_dir(follow_symlinks=False)
                size = entry.stat(follow_symlinks=False).st_size
            except OSError as e:
                raise TraversalError(f"не удалось получить информацию о файле {path}: {e}")

            if is_dir:
                self._walk(path, pair, report)
            elif size >= self.min_file_size:
                self._process_file(path, pair, report)

    def _process_file(self, path: Path, pair: DirectoryPair, report: DirectoryReport) -> None:
        """Обрабатывает один файл-кандидат."""
        try:
            parts = self.template.match(path.name)
        except TemplateError as e:
            self.logger.log_file_skipped(path.name, e)
            report.outcomes.append(FileOutcome(path, FileStatus.DATE_ERROR, error=e))
            return

        folder = destination_folder(pair, parts)
        try:
            created = ensure_directory(folder)
        except OSError as e:
            self.logger.log_error(f"Не удалось создать папку {folder}: {e}")
            raise DestinationFolderCreateError(f"не удалось создать папку {folder}: {e}")
        if created:
            report.created_folders.append(folder)
            self.logger.log_folder_created(folder)

        target = folder / path.name
        try:
            move_file(path, target, verify=self.verify)
        except SourceDeleteError as e:
            self.logger.log_file_duplicated(path, target, e)
            report.outcomes.append(FileOutcome(path, FileStatus.DUPLICATED, target, e))
            return
        except MoveError as e:
            self.logger.log_file_error(path, target, e)
            report.outcomes.append(FileOutcome(path, FileStatus.MOVE_FAILED, target, e))
            return

        self.logger.log_file_moved(path, target)
        report.outcomes.append(FileOutcome(path, FileStatus.MOVED, target))
