class IdGeneratorException(Exception):
    def __init__(self, detail: str = ""):
        """
        ID 生成器异常基类。

        :param detail: 详细信息
        """
        super().__init__(detail)
        self.detail = detail


class InvalidConfigurationException(IdGeneratorException, ValueError):
    """workerId / dataCenterId 越界，或 epoch 不在过去。只在构造时抛出。"""

    def __init__(self, field: str, value, detail: str = ""):
        super().__init__(detail or f"{field} is illegal: {value}")
        self.field = field
        self.value = value


class ClockRegressionException(IdGeneratorException):
    """系统时钟回拨，不重试，由调用方决定告警或停机。"""

    def __init__(self, last_time: int, current_time: int):
        super().__init__(
            f"Clock moved backwards. Refusing to generate id for {last_time - current_time} seconds "
            f"(last_time={last_time}, current_time={current_time})."
        )
        self.last_time = last_time
        self.current_time = current_time
