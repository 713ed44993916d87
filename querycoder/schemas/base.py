"""Schema 基础设施."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class OptionsSchema(BaseModel):
    """构造参数的基础 schema.

    约定:
    - 默认拒绝未知字段，避免“拼错参数却被静默忽略”的隐患
    - 校验通过后不可变, 与 handler 构造后不可变的约束保持一致
    """

    model_config = ConfigDict(extra="forbid", frozen=True)
