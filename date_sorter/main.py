"""
Главный модуль CLI интерфейса утилиты раскладки файлов по датам.

Загружает (или создает) конфигурацию, настраивает лог, удаляет
устаревшие лог-файлы и обрабатывает все пары папок.
"""

import argparse
import sys
from typing import Optional

try:
    from .config_loader import Config, ConfigError, ConfigLoader, DEFAULT_CONFIG_PATH
    from .logger import DateSorterLogger, LogSetupError, clean_old_logs
    from .runner import DateSorter, create_sorter
except ImportError:
    from config_loader import Config, ConfigError, ConfigLoader, DEFAULT_CONFIG_PATH
    from logger import DateSorterLogger, LogSetupError, clean_old_logs
    from runner import DateSorter, create_sorter


EXIT_OK = 0
EXIT_SETUP_FAILED = 1
EXIT_COMPLETED_WITH_ERRORS = 2
EXIT_INTERRUPTED = 130


class DateSorterCLI:
    """Класс для обработки запуска из командной строки."""

    def __init__(self):
        self.config: Optional[Config] = None
        self.logger: Optional[DateSorterLogger] = None
        self.sorter: Optional[DateSorter] = None
        self.config_created = False

    def setup(self, config_path: str = DEFAULT_CONFIG_PATH) -> bool:
        """
        Загружает конфигурацию и настраивает логгер.

        Ошибки выводятся в консоль: лог на этом этапе может быть
        еще недоступен.

        Args:
            config_path: Путь к файлу конфигурации

        Returns:
            bool: True если инициализация успешна
        """
        try:
            loader = ConfigLoader(config_path)
            self.config = loader.load_config()
            self.config_created = loader.created
        except ConfigError as e:
            print(f"❌ Ошибка при загрузке конфигурации: {e}")
            return False

        try:
            self.logger = DateSorterLogger(self.config.logging)
        except LogSetupError as e:
            print(f"❌ Ошибка при создании лог-файла: {e}")
            return False

        self.logger.log_run_start()
        self.logger.log_config_loaded(config_path, created=self.config_created)
        self.logger.log_system_info(
            f"Пар папок: {len(self.config.pairs)}, шаблон даты: {self.config.date_template}, "
            f"минимальный размер: {self.config.min_file_size} байт"
        )
        self.sorter = create_sorter(self.config, self.logger)
        return True

    def cmd_run(self) -> int:
        """
        Удаляет устаревшие логи и обрабатывает все пары папок.

        Returns:
            int: Код возврата (0 - успех, 2 - были ошибки файлов или папок)
        """
        clean_old_logs(
            self.config.logging.log_dir,
            self.config.logging.retention_days,
            self.logger
        )

        stats = self.sorter.run()
        return EXIT_COMPLETED_WITH_ERRORS if stats.has_errors() else EXIT_OK

    def close(self) -> None:
        """Закрывает лог."""
        if self.logger:
            self.logger.close()


def create_parser() -> argparse.ArgumentParser:
    """
    Создает парсер аргументов командной строки.

    Returns:
        argparse.ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        description="Раскладка файлов по папкам с датой из имени файла",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:

  # Запуск с config.json в текущем каталоге (создается при отсутствии)
  date-sorter

  # Запуск с другим файлом конфигурации
  date-sorter --config /etc/date-sorter/config.json
        """
    )

    parser.add_argument(
        '--config',
        default=DEFAULT_CONFIG_PATH,
        help=f'Путь к файлу конфигурации (по умолчанию: {DEFAULT_CONFIG_PATH})'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Подробный вывод'
    )

    return parser


def main(argv=None) -> int:
    """Главная функция CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = DateSorterCLI()

    if not cli.setup(args.config):
        return EXIT_SETUP_FAILED

    try:
        return cli.cmd_run()
    except KeyboardInterrupt:
        cli.logger.log_warning("Операция прервана пользователем")
        return EXIT_INTERRUPTED
    except Exception as e:
        cli.logger.log_critical_error("Неожиданная ошибка", e)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return EXIT_COMPLETED_WITH_ERRORS
    finally:
        cli.close()


if __name__ == "__main__":
    sys.exit(main())
