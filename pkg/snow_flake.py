import random
import threading
from typing import Callable, NamedTuple, Optional

from pkg import get_utc_timestamp
from pkg.exception import ClockRegressionException, InvalidConfigurationException
from pkg.logger_helper import logger

# 各字段占用的十进制位数（不是二进制位）
WORKER_ID_BITS = 2
DATA_CENTER_ID_BITS = 2
SEQUENCE_BITS = 4

MAX_WORKER_ID = 99
MAX_DATA_CENTER_ID = 99

SEQUENCE_CEILING = 10 ** SEQUENCE_BITS
WORKER_ID_SHIFT = 10 ** SEQUENCE_BITS
DATA_CENTER_ID_SHIFT = 10 ** (SEQUENCE_BITS + WORKER_ID_BITS)
TIME_LEFT_SHIFT = 10 ** (SEQUENCE_BITS + WORKER_ID_BITS + DATA_CENTER_ID_BITS)

# 进程启动时刻的秒级时间戳再除以 1000，与已有部署生成的 ID 保持一致
DEFAULT_EPOCH: int = get_utc_timestamp() // 1000


class IdParts(NamedTuple):
    time: int
    data_center_id: int
    worker_id: int
    sequence: int


def _check_range(field: str, value, upper: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0 or value > upper:
        raise InvalidConfigurationException(field, value)
    return value


class IdGenerator:
    """
    秒级 Snowflake 风格 ID 生成器。

    ID = (time - epoch) * 10^8 + dataCenterId * 10^6 + workerId * 10^4 + sequence

    每个实例每秒最多 10000 个 ID，超出后在锁内自旋等待下一秒。
    不同实例之间不共享状态，唯一性依赖调用方分配不重复的 (workerId, dataCenterId)。
    """

    def __init__(
            self,
            worker_id: Optional[int] = None,
            data_center_id: Optional[int] = None,
            sequence: int = 0,
            epoch: Optional[int] = None,
            *,
            rng: Optional[random.Random] = None,
            clock: Optional[Callable[[], int]] = None,
    ):
        rng = rng or random.Random()
        self._clock: Callable[[], int] = clock or get_utc_timestamp

        if worker_id is None:
            worker_id = rng.randint(0, MAX_WORKER_ID)
        if data_center_id is None:
            data_center_id = rng.randint(0, MAX_DATA_CENTER_ID)
        if epoch is None:
            epoch = DEFAULT_EPOCH

        self._worker_id = _check_range("worker_id", worker_id, MAX_WORKER_ID)
        self._data_center_id = _check_range("data_center_id", data_center_id, MAX_DATA_CENTER_ID)
        if isinstance(epoch, bool) or not isinstance(epoch, int):
            raise InvalidConfigurationException("epoch", epoch)
        if epoch >= self._time_gen():
            raise InvalidConfigurationException("epoch", epoch, f"epoch is illegal: {epoch}, it must be in the past")
        self._epoch = epoch

        self.sequence = sequence
        self.last_time = -1
        self.lock = threading.Lock()
        # 日志中的 trace_id 标记为该实例的身份
        self._logger = logger.bind(trace_id=f"dc{self._data_center_id}-w{self._worker_id}")

        self._logger.info(
            f"IdGenerator created, worker_id={self._worker_id}, "
            f"data_center_id={self._data_center_id}, epoch={self._epoch}."
        )

    @property
    def worker_id(self) -> int:
        return self._worker_id

    @property
    def data_center_id(self) -> int:
        return self._data_center_id

    @property
    def epoch(self) -> int:
        return self._epoch

    def get_worker_id(self) -> int:
        return self._worker_id

    def get_data_center_id(self) -> int:
        return self._data_center_id

    def get_time(self) -> int:
        return self._time_gen()

    def _time_gen(self) -> int:
        return self._clock()

    def _til_next_second(self, last_time: int) -> int:
        # 忙等，不 sleep，不超时
        time_ = self._time_gen()
        while time_ <= last_time:
            time_ = self._time_gen()
        return time_

    def next_id(self) -> int:
        with self.lock:
            time_ = self._time_gen()

            if time_ < self.last_time:
                self._logger.error(f"Clock moved backwards, last_time={self.last_time}, current_time={time_}.")
                raise ClockRegressionException(self.last_time, time_)

            if self.last_time == time_:
                self.sequence = (self.sequence + 1) % SEQUENCE_CEILING
                if self.sequence == 0:
                    self._logger.debug(f"Sequence exhausted at {self.last_time}, waiting for next second.")
                    time_ = self._til_next_second(self.last_time)
            else:
                self.sequence = 0

            self.last_time = time_

            return ((time_ - self._epoch) * TIME_LEFT_SHIFT
                    + self._data_center_id * DATA_CENTER_ID_SHIFT
                    + self._worker_id * WORKER_ID_SHIFT
                    + self.sequence)

    def next_id_str(self) -> str:
        return str(self.next_id())

    def get_id_time(self, id_: int) -> int:
        return self._epoch + id_ // TIME_LEFT_SHIFT

    def parse_id(self, id_: int) -> IdParts:
        """
        把 ID 拆回四个字段。

        :param id_: next_id 生成的 ID
        :return: IdParts，其中 time 为加回 epoch 后的秒级时间戳
        """
        return IdParts(
            time=self.get_id_time(id_),
            data_center_id=id_ % TIME_LEFT_SHIFT // DATA_CENTER_ID_SHIFT,
            worker_id=id_ % DATA_CENTER_ID_SHIFT // WORKER_ID_SHIFT,
            sequence=id_ % WORKER_ID_SHIFT,
        )
