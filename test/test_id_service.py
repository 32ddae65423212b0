import random

import pytest

from internal import config
from internal.config.setting import init_setting
from internal.services import id_service
from internal.services.id_service import create_id_generator, generate_id, get_id_generator


@pytest.fixture
def clear_caches():
    init_setting.cache_clear()
    get_id_generator.cache_clear()
    yield
    init_setting.cache_clear()
    get_id_generator.cache_clear()


class TestSetting:
    def test_reads_env_file(self, monkeypatch, clear_caches):
        monkeypatch.setenv("ID_GEN_ENV", "test")
        s = init_setting()
        assert isinstance(s, config.TestingConfig)
        assert s.WORKER_ID == 7
        assert s.DATA_CENTER_ID == 3
        assert s.DEMO_TOTAL == 200
        assert s.EPOCH is None

    def test_env_var_overrides_env_file(self, monkeypatch, clear_caches):
        monkeypatch.setenv("ID_GEN_ENV", "test")
        monkeypatch.setenv("ID_GEN_WORKER_ID", "42")
        monkeypatch.setenv("ID_GEN_EPOCH", "1600000000")
        s = init_setting()
        assert s.WORKER_ID == 42
        assert s.EPOCH == 1600000000

    def test_local_is_default(self, monkeypatch, clear_caches):
        monkeypatch.delenv("ID_GEN_ENV", raising=False)
        assert isinstance(init_setting(), config.LocalConfig)

    def test_invalid_env(self, monkeypatch, clear_caches):
        monkeypatch.setenv("ID_GEN_ENV", "staging")
        with pytest.raises(ValueError):
            init_setting()


class TestIdService:
    def test_create_from_setting(self):
        s = config.TestingConfig(_env_file=None, WORKER_ID=5, DATA_CENTER_ID=6, EPOCH=1600000000)
        gen = create_id_generator(s)
        assert gen.worker_id == 5
        assert gen.data_center_id == 6
        assert gen.epoch == 1600000000

    def test_unset_ids_drawn_from_rng(self, monkeypatch):
        monkeypatch.delenv("ID_GEN_WORKER_ID", raising=False)
        monkeypatch.delenv("ID_GEN_DATA_CENTER_ID", raising=False)
        s = config.TestingConfig(_env_file=None)
        a = create_id_generator(s, rng=random.Random(7))
        b = create_id_generator(s, rng=random.Random(7))
        assert (a.worker_id, a.data_center_id) == (b.worker_id, b.data_center_id)

    def test_invalid_setting_propagates(self):
        from pkg.exception import InvalidConfigurationException

        s = config.TestingConfig(_env_file=None, WORKER_ID=100)
        with pytest.raises(InvalidConfigurationException):
            create_id_generator(s)

    def test_process_wide_generator(self, monkeypatch, clear_caches):
        monkeypatch.setenv("ID_GEN_ENV", "test")
        gen = get_id_generator()
        assert get_id_generator() is gen
        assert gen.worker_id == 7

        first = generate_id()
        second = id_service.generate_id()
        assert second > first
        assert gen.parse_id(first).worker_id == 7
