import sys
import time
from dataclasses import dataclass

import anyio

from internal.config.setting import init_setting
from internal.services.id_service import create_id_generator
from pkg import colorprint, timestamp_to_datetime
from pkg.anyio_task_manager import AnyioTaskManager
from pkg.logger_helper import logger
from pkg.snow_flake import IdGenerator


@dataclass
class DemoReport:
    ids: list[int]
    failures: int
    elapsed_ms: int


async def run_demo(generator: IdGenerator, total: int, workers: int, echo: bool = False) -> DemoReport:
    """
    用 workers 个线程并发调用 total 次 next_id，返回生成的 ID 与耗时（毫秒）。
    """
    task_manager = AnyioTaskManager(max_tasks=workers)

    start = time.perf_counter()
    outcome = await task_manager.run_in_threads(generator.next_id, args_tuple_list=[()] * total)
    elapsed_ms = int((time.perf_counter() - start) * 1000)

    ids = [i for i in outcome.results if i is not None]
    if echo:
        for i in ids:
            print(i)

    if outcome.errors:
        logger.warning(f"{len(outcome.errors)} of {total} next_id calls failed.")
    return DemoReport(ids=ids, failures=len(outcome.errors), elapsed_ms=elapsed_ms)


def main() -> None:
    setting = init_setting()

    # 可用命令行覆盖：python main.py [total] [workers]
    argv = sys.argv[1:]
    total = int(argv[0]) if len(argv) > 0 else setting.DEMO_TOTAL
    workers = int(argv[1]) if len(argv) > 1 else setting.DEMO_WORKERS

    generator = create_id_generator(setting)
    report = anyio.run(run_demo, generator, total, workers, True)

    if len(set(report.ids)) != len(report.ids):
        colorprint.red("Duplicate ids detected!")
        sys.exit(1)
    colorprint.green(f"{len(report.ids)} ids in {report.elapsed_ms} ms, {report.failures} failed.")
    if report.ids:
        first, last = min(report.ids), max(report.ids)
        colorprint.yellow(
            f"Id time range: {timestamp_to_datetime(generator.get_id_time(first)).isoformat()} ~ "
            f"{timestamp_to_datetime(generator.get_id_time(last)).isoformat()}"
        )


if __name__ == "__main__":
    main()
