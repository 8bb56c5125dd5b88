"""客户端配置，读取 ``RDF4J_*`` 环境变量或 ``.env`` 文件。"""
from __future__ import annotations

from typing import Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class RDF4JSettings(BaseSettings):
    """RDF4J 连接配置。

    示例：``RDF4J_BASE_URL=http://localhost:8080/rdf4j-server``、
    ``RDF4J_USERNAME=admin``、``RDF4J_TIMEOUT=10``。"""

    model_config = SettingsConfigDict(
        env_prefix="RDF4J_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    base_url: str = Field(default="http://localhost:8080/rdf4j-server", description="RDF4J 服务根地址")
    username: str | None = Field(default=None, description="Basic Auth 用户名")
    password: SecretStr | None = Field(default=None, description="Basic Auth 密码")
    timeout: float = Field(default=30.0, gt=0, description="默认请求超时（秒）")
    headers: dict[str, str] = Field(default_factory=dict, description="附加到每个请求的默认请求头")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="INFO", description="日志级别")

    @property
    def auth(self) -> tuple[str, str] | None:
        """用户名与密码都配置时返回 Basic Auth 凭据。"""

        if self.username and self.password:
            return (self.username, self.password.get_secret_value())
        return None


__all__ = ["RDF4JSettings"]
