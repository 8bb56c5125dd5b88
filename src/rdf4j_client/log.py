"""日志工具。

包内模块统一通过 :meth:`LoggerFactory.create_default_logger` 获取 logger；
库本身只挂 ``NullHandler``，是否输出由使用方决定。"""
from __future__ import annotations

import logging

_ROOT_LOGGER = "rdf4j_client"
_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logging.getLogger(_ROOT_LOGGER).addHandler(logging.NullHandler())


class LoggerFactory:
    """logger 构造入口。"""

    @staticmethod
    def create_default_logger(name: str) -> logging.Logger:
        """返回名为 ``name`` 的 logger，例如 ``"rdf4j_client.connection.client"``。"""

        return logging.getLogger(name)


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """为包根 logger 挂载一个 stderr 输出，重复调用不会叠加 handler。"""

    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(level)
    if not any(getattr(h, "_rdf4j_stream", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._rdf4j_stream = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger


__all__ = ["LoggerFactory", "configure_logging"]
