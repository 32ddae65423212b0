import random
from functools import lru_cache
from typing import Optional

from internal.config import BaseConfig
from internal.config.setting import init_setting
from pkg.logger_helper import logger
from pkg.snow_flake import IdGenerator


def create_id_generator(setting: Optional[BaseConfig] = None, rng: Optional[random.Random] = None) -> IdGenerator:
    """
    按配置创建生成器。未配置的 worker_id / data_center_id 从 rng 中随机取。
    """
    setting = setting or init_setting()
    generator = IdGenerator(**setting.generator_kwargs, rng=rng)
    logger.info(f"Id generator ready, worker_id={generator.worker_id}, data_center_id={generator.data_center_id}.")
    return generator


@lru_cache
def get_id_generator() -> IdGenerator:
    # 进程内单例，worker_id / data_center_id 不能在多个进程间重复
    return create_id_generator()


def generate_id() -> int:
    return get_id_generator().next_id()
