"""
Тесты для модуля config_loader.py
"""

import json
import shutil
import tempfile
from pathlib import Path

import pytest

from date_sorter.config_loader import (
    DEFAULT_CONFIG,
    Config,
    ConfigError,
    ConfigLoader,
    DirectoryPair,
    LoggingConfig,
    load_config,
)


class TestConfigLoader:
    """Тесты для класса ConfigLoader."""

    @pytest.fixture
    def temp_dir(self):
        """Создает временную директорию для тестов."""
        temp_path = tempfile.mkdtemp()
        yield Path(temp_path)
        shutil.rmtree(temp_path, ignore_errors=True)

    @pytest.fixture
    def write_config(self, temp_dir):
        """Возвращает функцию, записывающую JSON-конфигурацию."""
        def _write(data, name="config.json"):
            path = temp_dir / name
            if isinstance(data, str):
                path.write_text(data, encoding="utf-8")
            else:
                path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
            return path
        return _write

    @pytest.fixture
    def valid_data(self):
        return {
            "source_dirs": ["in/1", "in/2"],
            "target_dirs": ["out", "out"],
            "min_file_size": 1024,
            "date_template": "??ГГГГ?ММ?ДД",
        }

    def test_load_config_success(self, write_config, valid_data):
        """Тест успешной загрузки конфигурации."""
        config = load_config(str(write_config(valid_data)))

        assert isinstance(config, Config)
        assert config.pairs == (
            DirectoryPair(Path("in/1"), Path("out")),
            DirectoryPair(Path("in/2"), Path("out")),
        )
        assert config.min_file_size == 1024
        assert config.date_template == "??ГГГГ?ММ?ДД"
        assert config.verify_copy is False
        assert config.logging == LoggingConfig()
        assert config.logging.retention_days == 5

    def test_missing_file_creates_default(self, temp_dir):
        """Тест создания конфигурации по умолчанию."""
        path = temp_dir / "sub" / "config.json"
        loader = ConfigLoader(str(path))

        config = loader.load_config()

        assert loader.created is True
        assert path.exists()
        assert json.loads(path.read_text(encoding="utf-8")) == DEFAULT_CONFIG
        assert "??ГГГГ?ММ?ДД" in path.read_text(encoding="utf-8")
        assert config.min_file_size == 26463150
        assert config.pairs[0] == DirectoryPair(
            Path("e:/FilesNota/572149/1"), Path("//192.168.2.15/5otd/test/")
        )
        assert len(config.pairs) == 2

    def test_existing_file_not_overwritten(self, write_config, valid_data):
        """Тест: существующий файл не перезаписывается."""
        path = write_config(valid_data)
        before = path.read_text(encoding="utf-8")

        loader = ConfigLoader(str(path))
        loader.load_config()

        assert loader.created is False
        assert path.read_text(encoding="utf-8") == before

    def test_malformed_json(self, write_config):
        """Тест ошибки при некорректном JSON."""
        path = write_config("{not json")

        with pytest.raises(ConfigError, match="Ошибка при чтении файла конфигурации"):
            load_config(str(path))

    def test_not_an_object(self, write_config):
        """Тест ошибки, если корень JSON не объект."""
        with pytest.raises(ConfigError, match="JSON-объектом"):
            load_config(str(write_config([1, 2, 3])))

    def test_mismatched_lists(self, write_config, valid_data):
        """Тест: разная длина source_dirs и target_dirs."""
        valid_data["target_dirs"] = ["out"]

        with pytest.raises(ConfigError, match="не совпадает"):
            load_config(str(write_config(valid_data)))

    def test_source_dirs_must_be_strings(self, write_config, valid_data):
        """Тест: source_dirs должен быть списком строк."""
        valid_data["source_dirs"] = ["in/1", 2]

        with pytest.raises(ConfigError, match="source_dirs"):
            load_config(str(write_config(valid_data)))

    def test_pairs_key(self, write_config, valid_data):
        """Тест загрузки списка пар вместо параллельных списков."""
        del valid_data["source_dirs"]
        del valid_data["target_dirs"]
        valid_data["pairs"] = [{"source": "a", "target": "b"}]

        config = load_config(str(write_config(valid_data)))

        assert config.pairs == (DirectoryPair(Path("a"), Path("b")),)

    def test_pairs_key_invalid_item(self, write_config, valid_data):
        """Тест некорректного элемента pairs."""
        valid_data["pairs"] = [{"source": "a"}]

        with pytest.raises(ConfigError, match=r"pairs\[0\]"):
            load_config(str(write_config(valid_data)))

    @pytest.mark.parametrize("value", ["1024", 1.5, True, None, -1])
    def test_invalid_min_file_size(self, write_config, valid_data, value):
        """Тест валидации минимального размера файла."""
        valid_data["min_file_size"] = value

        with pytest.raises(ConfigError):
            load_config(str(write_config(valid_data)))

    def test_invalid_template_is_loaded(self, write_config, valid_data):
        """Тест: шаблон с недопустимым символом не мешает загрузке конфигурации."""
        valid_data["date_template"] = "ГГГГ!ММДД"

        config = load_config(str(write_config(valid_data)))

        assert config.date_template == "ГГГГ!ММДД"

    @pytest.mark.parametrize("value", ["", 12, None])
    def test_invalid_template_type(self, write_config, valid_data, value):
        """Тест: шаблон должен быть непустой строкой."""
        valid_data["date_template"] = value

        with pytest.raises(ConfigError, match="date_template"):
            load_config(str(write_config(valid_data)))

    def test_missing_template(self, write_config, valid_data):
        """Тест отсутствующего шаблона."""
        del valid_data["date_template"]

        with pytest.raises(ConfigError, match="date_template"):
            load_config(str(write_config(valid_data)))

    def test_logging_section(self, write_config, valid_data):
        """Тест загрузки секции логирования."""
        valid_data["logging"] = {"level": "debug", "log_dir": "var/log", "retention_days": 10}
        valid_data["verify_copy"] = True

        config = load_config(str(write_config(valid_data)))

        assert config.logging == LoggingConfig(level="DEBUG", log_dir=Path("var/log"), retention_days=10)
        assert config.verify_copy is True

    def test_invalid_log_level(self, write_config, valid_data):
        """Тест валидации некорректного уровня логирования."""
        valid_data["logging"] = {"level": "INVALID_LEVEL"}

        with pytest.raises(ConfigError, match="Некорректный уровень логирования"):
            load_config(str(write_config(valid_data)))

    def test_config_is_immutable(self, write_config, valid_data):
        """Тест: конфигурация неизменяема."""
        config = load_config(str(write_config(valid_data)))

        with pytest.raises(AttributeError):
            config.min_file_size = 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
