"""压缩质量模型。"""

from pydantic import BaseModel, ConfigDict, Field, StrictInt
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import QualityOutOfRangeError
from .constants import QualityLimits


class Quality(BaseModel):
    """JPEG 编码质量，0（最小、损失最大）到 100

    构造即校验，之后不可变，下游代码把它当作已校验的值使用。
    """

    model_config = ConfigDict(frozen=True)

    value: StrictInt = Field(ge=QualityLimits.MIN, le=QualityLimits.MAX)

    @classmethod
    def from_int(cls, raw: int) -> "Quality":
        """从原始整数构造质量值

        Raises:
            QualityOutOfRangeError: 超出范围或不是整数
        """
        try:
            return cls(value=raw)
        except PydanticValidationError as e:
            raise QualityOutOfRangeError(raw) from e

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
