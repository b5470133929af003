from __future__ import annotations

from enum import Enum
from typing import List

import numpy as np


class DataType(Enum):
    """Cell types available to generated programs."""

    Byte = 'uint8'
    Int16 = 'int16'
    UInt16 = 'uint16'
    Int32 = 'int32'
    UInt32 = 'uint32'
    Int64 = 'int64'
    UInt64 = 'uint64'

    @property
    def dtype(self) -> np.dtype:
        return np.dtype(self.value)

    @property
    def bits(self) -> int:
        return int(np.iinfo(self.dtype).bits)

    @property
    def signed(self) -> bool:
        return int(np.iinfo(self.dtype).min) < 0

    @property
    def min(self) -> int:
        return int(np.iinfo(self.dtype).min)

    @property
    def max(self) -> int:
        return int(np.iinfo(self.dtype).max)

    @property
    def modulus(self) -> int:
        return 1 << self.bits

    @property
    def c_name(self) -> str:
        # stdint.h spelling; numpy dtype names already match it
        return f"{self.value}_t"

    @classmethod
    def parse(cls, text: str) -> DataType:
        """Case-insensitive lookup by name (``byte``, ``Int32``...)."""
        wanted = text.strip().lower()
        for member in cls:
            if member.name.lower() == wanted:
                return member
        raise ValueError(f"Invalid data type: {text}")

    @classmethod
    def names(cls) -> List[str]:
        return [member.name for member in cls]


DEFAULT_DATATYPE = DataType.Byte
DEFAULT_MEMSIZE = 30000
