"""SPARQL JSON 结果解码。

`ResultMapper` 把 RDF4J 返回的 ``application/sparql-results+json`` 结构转换为
上层需要的形态：仓库列表、命名空间映射、上下文列表、ASK 布尔值，以及带类型
转换的行数据。"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any

from rdf4j_client.exceptions import MalformedResponseError
from rdf4j_client.models import Repository

_XSD = "http://www.w3.org/2001/XMLSchema#"


class ResultMapper:
    """SPARQL 结果映射器。"""

    _INT_TYPES = {
        f"{_XSD}{name}"
        for name in (
            "integer",
            "int",
            "long",
            "short",
            "byte",
            "nonNegativeInteger",
            "positiveInteger",
            "nonPositiveInteger",
            "negativeInteger",
            "unsignedLong",
            "unsignedInt",
            "unsignedShort",
            "unsignedByte",
        )
    }
    _DECIMAL_TYPES = {f"{_XSD}decimal", f"{_XSD}double", f"{_XSD}float"}
    _BOOL_TYPE = f"{_XSD}boolean"
    _DATETIME_TYPE = f"{_XSD}dateTime"

    # ---- RDF4J 专用结构 ---------------------------------------------------

    def repositories(self, result: dict[str, Any] | None) -> list[Repository]:
        """解析 ``/repositories`` 的表格结果。``readable``/``writable`` 仅在值为 ``"true"`` 时为真。"""

        repos: list[Repository] = []
        for binding in self.bindings(result):
            repos.append(
                Repository(
                    id=self._value(binding, "id") or "",
                    title=self._value(binding, "title") or "",
                    uri=self._value(binding, "uri") or "",
                    readable=self._value(binding, "readable") == "true",
                    writable=self._value(binding, "writable") == "true",
                )
            )
        return repos

    def namespaces(self, result: dict[str, Any] | None) -> dict[str, str]:
        """解析 ``/namespaces`` 结果为 ``{prefix: namespace}``，缺少任一字段的行被跳过。"""

        mapping: dict[str, str] = {}
        for binding in self.bindings(result):
            prefix = self._value(binding, "prefix")
            namespace = self._value(binding, "namespace")
            if prefix and namespace:
                mapping[prefix] = namespace
        return mapping

    def contexts(self, result: dict[str, Any] | None) -> list[str]:
        """解析 ``/contexts`` 结果，保持服务端返回顺序。"""

        return [self._value(binding, "contextID") or "" for binding in self.bindings(result)]

    def boolean(self, result: Any) -> bool:
        """解析 ASK 结果 ``{"head": {}, "boolean": true}``。"""

        if not isinstance(result, dict) or not isinstance(result.get("boolean"), bool):
            raise MalformedResponseError("ASK 响应缺少 boolean 字段", body=result)
        return result["boolean"]

    @staticmethod
    def bindings(result: dict[str, Any] | None) -> list[dict[str, Any]]:
        if not result:
            return []
        return list(result.get("results", {}).get("bindings", []))

    @staticmethod
    def variables(result: dict[str, Any] | None) -> list[str]:
        if not result:
            return []
        return list(result.get("head", {}).get("vars", []))

    # ---- 通用行映射 -------------------------------------------------------

    def map_result(self, result: dict[str, Any] | None) -> list[dict[str, Any]]:
        """直接映射完整的 SPARQL JSON 结果。"""

        return self.map_bindings(self.variables(result), self.bindings(result))

    def map_bindings(self, vars: list[str], bindings: list[dict[str, Any]]) -> list[dict[str, Any]]:
        """将 SPARQL JSON 绑定数组转换为统一结构。

        参数:
            vars: 查询头部返回的变量名列表，例如 ``["s", "p", "o"]``。
            bindings: ``results.bindings`` 数组，每个元素是变量到单元格的映射。

        返回:
            每行 ``{变量名: {value, raw, type, [datatype], [lang]}}``；该行缺失的变量为 ``None``。
        """

        return [{var: self._convert_cell(binding.get(var)) for var in vars} for binding in bindings]

    def _convert_cell(self, cell: dict[str, Any] | None) -> dict[str, Any] | None:
        if cell is None:
            return None
        raw = cell.get("value")
        dtype = cell.get("datatype")
        payload: dict[str, Any] = {
            "value": self._cast_value(raw, dtype),
            "raw": raw,
            "type": cell.get("type"),
        }
        if dtype:
            payload["datatype"] = dtype
        if cell.get("xml:lang"):
            payload["lang"] = cell["xml:lang"]
        return payload

    def _cast_value(self, value: Any, dtype: str | None) -> Any:
        """按 XSD 数据类型转换；无法转换时返回原值。"""

        if dtype is None:
            return value
        if dtype in self._INT_TYPES:
            try:
                return int(value)
            except (TypeError, ValueError):
                return value
        if dtype in self._DECIMAL_TYPES:
            try:
                return float(Decimal(value))
            except (TypeError, ValueError, ArithmeticError):
                return value
        if dtype == self._BOOL_TYPE:
            return str(value).lower() in {"true", "1"}
        if dtype == self._DATETIME_TYPE:
            return self._normalize_datetime(str(value))
        return value

    @staticmethod
    def _normalize_datetime(text: str) -> str:
        """统一为 ISO 8601；无时区时补 ``Z``，解析失败返回原值。"""

        try:
            dt = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return text
        return dt.isoformat() if dt.tzinfo else f"{dt.isoformat()}Z"

    @staticmethod
    def _value(binding: dict[str, Any], name: str) -> str | None:
        cell = binding.get(name)
        if not cell:
            return None
        return cell.get("value")


__all__ = ["ResultMapper"]
