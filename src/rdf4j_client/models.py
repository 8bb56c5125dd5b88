"""仓库描述与创建请求模型。"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from rdf4j_client.types import RepositoryType


class Repository(BaseModel):
    """服务端返回的仓库信息（只读）。"""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    uri: str = ""
    readable: bool = False
    writable: bool = False


class RepositoryConfig(BaseModel):
    """创建仓库的请求。

    参数：
        id: 仓库标识，例如 ``"demo"``；
        title: 标题，缺省时使用 ``id``；
        type: 模板类型，缺省 ``memory``；
        config_turtle: 完整的 Turtle 配置，给出时忽略 ``title``/``type``。
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    title: str | None = None
    type: RepositoryType | str = RepositoryType.MEMORY
    config_turtle: str | None = None
