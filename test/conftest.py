import os

import pytest

# 必须在导入 pkg 之前设置，logger 在导入时按环境初始化
os.environ.setdefault("ID_GEN_ENV", "test")


class FakeClock:
    """可控时钟：先依次返回 pending 中的值，用完后一直返回 now。"""

    def __init__(self, now: int):
        self.now = now
        self.pending: list[int] = []
        self.calls = 0

    def __call__(self) -> int:
        self.calls += 1
        if self.pending:
            return self.pending.pop(0)
        return self.now


@pytest.fixture
def fake_clock():
    return FakeClock(1_700_000_000)
