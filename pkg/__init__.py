import datetime
import os
from pathlib import Path

import colorama

BASE_DIR: Path = Path(__file__).resolve().parent.parent


def get_sys_env_var() -> str:
    return str.lower(os.getenv("ID_GEN_ENV", "local"))


SYS_ENV: str = get_sys_env_var()


def get_utc_timestamp() -> int:
    return int(datetime.datetime.now(tz=datetime.timezone.utc).timestamp())


def timestamp_to_datetime(ts: int) -> datetime.datetime:
    """
    把秒级时间戳转换为带 UTC 时区的 datetime，用于日志和 demo 输出。
    """
    return datetime.datetime.fromtimestamp(ts, tz=datetime.timezone.utc)


class ColorPrint:
    colorama.init(autoreset=True)

    @staticmethod
    def red(text):
        print(colorama.Fore.RED + text)

    @staticmethod
    def green(text):
        print(colorama.Fore.GREEN + text)

    @staticmethod
    def yellow(text):
        print(colorama.Fore.YELLOW + text)


colorprint = ColorPrint()
