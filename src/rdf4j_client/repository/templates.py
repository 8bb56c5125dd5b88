"""创建仓库时使用的默认 Turtle 配置模板。"""
from __future__ import annotations

from typing import NamedTuple

from rdf4j_client.models import RepositoryConfig


class _Impl(NamedTuple):
    repository_type: str
    sail_type: str | None = None


_TYPE_MAP: dict[str, _Impl] = {
    "memory": _Impl("openrdf:SailRepository", "openrdf:MemoryStore"),
    "native": _Impl("openrdf:SailRepository", "openrdf:NativeStore"),
    "memory-rdfs": _Impl("openrdf:SailRepository", "openrdf:ForwardChainingRDFSInferencer"),
    "native-rdfs": _Impl("openrdf:SailRepository", "openrdf:ForwardChainingRDFSInferencer"),
    "sparql": _Impl("openrdf:SPARQLRepository"),
    "remote": _Impl("openrdf:HTTPRepository"),
}
_FALLBACK = _TYPE_MAP["memory"]

_HEADER = """\
@prefix rdfs: <http://www.w3.org/2000/01/rdf-schema#>.
@prefix rep: <http://www.openrdf.org/config/repository#>.
@prefix sr: <http://www.openrdf.org/config/repository/sail#>.
@prefix sail: <http://www.openrdf.org/config/sail#>.
@prefix ms: <http://www.openrdf.org/config/sail/memory#>.
@prefix ns: <http://www.openrdf.org/config/sail/native#>.
"""


def render_default_config(config: RepositoryConfig) -> str:
    """根据 ``config.type`` 生成最小仓库配置；未知类型回落到内存存储。"""

    repo_type = getattr(config.type, "value", config.type)
    impl = _TYPE_MAP.get(repo_type, _FALLBACK)
    title = config.title or config.id

    body = (
        "[] a rep:Repository ;\n"
        f'   rep:repositoryID "{_escape(config.id)}" ;\n'
        f'   rdfs:label "{_escape(title)}" ;\n'
        "   rep:repositoryImpl [\n"
        f'      rep:repositoryType "{impl.repository_type}"'
    )
    if impl.sail_type:
        body += f' ;\n      sr:sailImpl [\n         sail:sailType "{impl.sail_type}"\n      ]'
    body += "\n   ] .\n"
    return f"{_HEADER}\n{body}"


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


__all__ = ["render_default_config"]
