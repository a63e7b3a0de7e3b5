"""
Модуль для операций с файловой системой.

Перемещение выполняется как копирование с последующим удалением
источника. Существующий файл в месте назначения никогда не
перезаписывается.
"""

import hashlib
import os
import shutil
from pathlib import Path
from typing import Union


PathLike = Union[str, Path]

COPY_BUFFER_SIZE = 1024 * 1024


class MoveError(Exception):
    """Базовое исключение для ошибок перемещения файла."""

    def __init__(self, message: str, source: PathLike, target: PathLike):
        self.source = Path(source)
        self.target = Path(target)
        super().__init__(message)


class SourceOpenError(MoveError):
    """Не удалось открыть исходный файл."""
    pass


class DestinationExistsError(MoveError):
    """Целевой файл уже существует."""
    pass


class StatError(MoveError):
    """Не удалось проверить существование целевого файла."""
    pass


class CopyError(MoveError):
    """Ошибка при создании целевого файла или копировании содержимого."""
    pass


class SourceDeleteError(MoveError):
    """
    Файл скопирован, но исходный файл не удален.

    Данные находятся в обоих местах; повторный запуск отклонит этот
    файл как уже существующий в назначении.
    """
    pass


def ensure_directory(path: PathLike) -> bool:
    """
    Создает каталог (вместе с родительскими), если его еще нет.

    Args:
        path: Путь к каталогу

    Returns:
        bool: True если каталог был создан, False если путь уже существовал

    Raises:
        OSError: Если каталог не удалось создать
    """
    path = Path(path)
    # Занятый файлом путь не создается: ошибку получит перемещение файла
    if path.exists():
        return False
    path.mkdir(parents=True, exist_ok=True)
    return True


def file_hash(path: PathLike, algorithm: str = 'md5') -> str:
    """
    Вычисляет хеш файла для проверки целостности.

    Args:
        path: Путь к файлу
        algorithm: Алгоритм хеширования (md5, sha1, sha256)

    Returns:
        str: Хеш файла в шестнадцатеричном виде
    """
    if algorithm not in ('md5', 'sha1', 'sha256'):
        raise ValueError(f"Неподдерживаемый алгоритм: {algorithm}")

    hasher = hashlib.new(algorithm)
    with open(path, 'rb') as f:
        for chunk in iter(lambda: f.read(COPY_BUFFER_SIZE), b""):
            hasher.update(chunk)
    return hasher.hexdigest()


def move_file(source_path: PathLike, target_path: PathLike, verify: bool = False) -> Path:
    """
    Перемещает файл копированием и удалением источника.

    При ошибке копирования частично записанный целевой файл остается
    на месте, исходный файл не удаляется.

    Args:
        source_path: Исходный путь
        target_path: Целевой путь
        verify: Сравнить md5 источника и копии перед удалением источника

    Returns:
        Path: Путь к перемещенному файлу

    Raises:
        SourceOpenError: Если исходный файл не открывается
        DestinationExistsError: Если целевой файл уже существует
        StatError: Если не удалось проверить целевой путь
        CopyError: Если не удалось создать целевой файл или скопировать данные
        SourceDeleteError: Если после копирования не удалось удалить источник
    """
    source_path = Path(source_path)
    target_path = Path(target_path)

    try:
        source_file = open(source_path, 'rb')
    except OSError as e:
        raise SourceOpenError(f"не удалось открыть исходный файл: {e}", source_path, target_path)

    with source_file:
        try:
            os.stat(target_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StatError(f"ошибка при проверке целевого файла: {e}", source_path, target_path)
        else:
            raise DestinationExistsError(
                f"целевой файл уже существует: {target_path}", source_path, target_path
            )

        try:
            # 'x' не даст перезаписать файл, появившийся после проверки
            target_file = open(target_path, 'xb')
        except FileExistsError:
            raise DestinationExistsError(
                f"целевой файл уже существует: {target_path}", source_path, target_path
            )
        except OSError as e:
            raise CopyError(f"не удалось создать целевой файл: {e}", source_path, target_path)

        try:
            with target_file:
                shutil.copyfileobj(source_file, target_file, COPY_BUFFER_SIZE)
        except OSError as e:
            raise CopyError(f"ошибка при копировании содержимого: {e}", source_path, target_path)

    if verify:
        try:
            same = file_hash(source_path) == file_hash(target_path)
        except OSError as e:
            raise CopyError(f"не удалось проверить копию: {e}", source_path, target_path)
        if not same:
            raise CopyError("хеш копии не совпадает с исходным файлом", source_path, target_path)

    try:
        source_path.unlink()
    except OSError as e:
        raise SourceDeleteError(
            f"не удалось удалить исходный файл после копирования: {e}", source_path, target_path
        )

    return target_path
