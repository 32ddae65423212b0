from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from pkg import BASE_DIR


class BaseConfig(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=True,
        env_prefix="ID_GEN_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DEBUG: bool = True

    # 生成器身份，未配置时随机取 [0, 99]
    WORKER_ID: Optional[int] = None
    DATA_CENTER_ID: Optional[int] = None
    SEQUENCE: int = 0
    # 秒级时间戳，未配置时使用进程启动时的默认值
    EPOCH: Optional[int] = None

    # demo 配置
    DEMO_TOTAL: int = 10000
    DEMO_WORKERS: int = 5

    @property
    def generator_kwargs(self) -> dict:
        return {
            "worker_id": self.WORKER_ID,
            "data_center_id": self.DATA_CENTER_ID,
            "sequence": self.SEQUENCE,
            "epoch": self.EPOCH,
        }


class LocalConfig(BaseConfig):
    model_config = SettingsConfigDict(env_file=(BASE_DIR / "configs" / ".env.local").as_posix())

    DEBUG: bool = True


class DevelopmentConfig(BaseConfig):
    model_config = SettingsConfigDict(env_file=(BASE_DIR / "configs" / ".env.dev").as_posix())

    DEBUG: bool = True


class TestingConfig(BaseConfig):
    model_config = SettingsConfigDict(env_file=(BASE_DIR / "configs" / ".env.test").as_posix())

    DEBUG: bool = False


class ProductionConfig(BaseConfig):
    model_config = SettingsConfigDict(env_file=(BASE_DIR / "configs" / ".env.prod").as_posix())

    DEBUG: bool = False
