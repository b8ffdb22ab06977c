"""
Adapters turning dialect-specific import/export nodes into the normalized model.

Three node shapes are understood:

* ``acorn``: specifiers hold ``id`` / ``name`` identifiers and are tagged via
  their ``type`` (``ImportBatchSpecifier``, ``ImportDefaultSpecifier``...) or a
  ``default`` flag.
* ``proposal``: specifiers hold ``id`` / ``name`` identifiers; the default
  binding uses the sentinel id ``*default*`` and the namespace binding ``*``.
* ``estree``: the current ESTree layout produced by ``esprima`` (``local``,
  ``imported``, ``exported`` and dedicated export node types).

Adapters never mutate the caller's structures; specifier lists are copied
into tuples.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Tuple

from .model import (
    ExportDeclaration,
    ImportDeclaration,
    InvalidNodeError,
    SourceClause,
    Specifier,
    SpecifierKind,
    UnsupportedDialectError,
)

DEFAULT_SENTINEL = "*default*"
NAMESPACE_SENTINEL = "*"

ESTREE_NODE_TYPES = {
    "ExportNamedDeclaration",
    "ExportDefaultDeclaration",
    "ExportAllDeclaration",
}
ESTREE_SPECIFIER_KEYS = {"local", "imported", "exported"}


def _identifier_name(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        if value.get("name") is not None:
            return value["name"]
        # String literal export names, e.g. `export {a as "b"}`.
        if value.get("type") == "Literal" and value.get("value") is not None:
            return str(value["value"])
    return None


def _specifier_list(node: Dict[str, Any]) -> Tuple[Dict[str, Any], ...]:
    specifiers = node.get("specifiers")
    if specifiers is None:
        return ()
    if not isinstance(specifiers, (list, tuple)):
        raise InvalidNodeError("Specifiers must be a sequence.", node)
    for specifier in specifiers:
        if not isinstance(specifier, dict):
            raise InvalidNodeError("Specifier must be a mapping.", node)
    return tuple(specifiers)


def _plain_source(node: Dict[str, Any]) -> Optional[SourceClause]:
    source = node.get("source")
    if source is None:
        return None
    if isinstance(source, str):
        return SourceClause(value=source)
    if not isinstance(source, dict):
        raise InvalidNodeError("Source clause must be a string or a mapping.", node)
    raw = source.get("raw") or None
    value = source.get("value")
    if raw is None and value is None:
        raise InvalidNodeError("Source clause carries neither raw text nor a value.", node)
    return SourceClause(value=value, raw=raw)


class DialectAdapter:
    """Base adapter; subclasses decide how specifiers are tagged."""

    name = ""

    def normalize_import(self, node: Dict[str, Any]) -> ImportDeclaration:
        specifiers = tuple(
            self._specifier(item, node) for item in _specifier_list(node)
        )
        return ImportDeclaration(
            specifiers=specifiers, source=self._source(node), node=node
        )

    def normalize_export(self, node: Dict[str, Any]) -> ExportDeclaration:
        specifiers = tuple(
            self._specifier(item, node) for item in _specifier_list(node)
        )
        return ExportDeclaration(
            specifiers=specifiers,
            source=self._source(node),
            declaration=node.get("declaration"),
            default=bool(node.get("default")),
            node=node,
        )

    def _source(self, node: Dict[str, Any]) -> Optional[SourceClause]:
        return _plain_source(node)

    def _specifier(self, item: Dict[str, Any], node: Dict[str, Any]) -> Specifier:
        raise NotImplementedError


class AcornAdapter(DialectAdapter):
    name = "acorn"

    DEFAULT_TYPES = {"ImportDefaultSpecifier", "ExportDefaultSpecifier"}
    NAMESPACE_TYPES = {
        "ImportBatchSpecifier",
        "ImportNamespaceSpecifier",
        "ExportBatchSpecifier",
    }

    def _specifier(self, item: Dict[str, Any], node: Dict[str, Any]) -> Specifier:
        local = _identifier_name(item.get("id"))
        bound = _identifier_name(item.get("name"))
        spec_type = item.get("type")
        if local is None:
            local = bound
        if local is None and spec_type in self.NAMESPACE_TYPES:
            # `export * from "mod"` carries a bare ExportBatchSpecifier.
            local = NAMESPACE_SENTINEL
        if local is None:
            raise InvalidNodeError("Specifier has no identifier.", item)

        if spec_type in self.NAMESPACE_TYPES:
            kind = SpecifierKind.NAMESPACE
        elif spec_type in self.DEFAULT_TYPES or item.get("default"):
            kind = SpecifierKind.DEFAULT
        else:
            kind = SpecifierKind.PLAIN
        return Specifier(local=local, bound=bound if bound is not None else local, kind=kind)


class ProposalAdapter(DialectAdapter):
    name = "proposal"

    def normalize_export(self, node: Dict[str, Any]) -> ExportDeclaration:
        export = super().normalize_export(node)
        if export.declaration is None or not export.specifiers:
            return export
        first = export.specifiers[0]
        # `export default <expr>` is tagged with a lone `default` specifier.
        if first.local == "default" and first.kind is SpecifierKind.PLAIN:
            tagged = Specifier(first.local, first.bound, SpecifierKind.DEFAULT)
            return ExportDeclaration(
                specifiers=(tagged,) + export.specifiers[1:],
                source=export.source,
                declaration=export.declaration,
                default=export.default,
                node=node,
            )
        return export

    def _specifier(self, item: Dict[str, Any], node: Dict[str, Any]) -> Specifier:
        local = _identifier_name(item.get("id"))
        if local is None:
            raise InvalidNodeError("Specifier has no identifier.", item)
        bound = _identifier_name(item.get("name"))
        if bound is None:
            bound = local

        if local == DEFAULT_SENTINEL:
            kind = SpecifierKind.DEFAULT
        elif local == NAMESPACE_SENTINEL:
            kind = SpecifierKind.NAMESPACE
        else:
            kind = SpecifierKind.PLAIN
        return Specifier(local=local, bound=bound, kind=kind)


class EstreeAdapter(DialectAdapter):
    name = "estree"

    def __init__(self, *, preserve_quotes: bool = False):
        self.preserve_quotes = preserve_quotes

    def normalize_export(self, node: Dict[str, Any]) -> ExportDeclaration:
        node_type = node.get("type")
        if node_type == "ExportDefaultDeclaration":
            return ExportDeclaration(
                specifiers=(),
                declaration=node.get("declaration"),
                default=True,
                node=node,
            )
        if node_type == "ExportAllDeclaration":
            exported = _identifier_name(node.get("exported"))
            namespace = Specifier(
                local=NAMESPACE_SENTINEL,
                bound=exported if exported is not None else NAMESPACE_SENTINEL,
                kind=SpecifierKind.NAMESPACE,
            )
            return ExportDeclaration(
                specifiers=(namespace,), source=self._source(node), node=node
            )
        return super().normalize_export(node)

    def _source(self, node: Dict[str, Any]) -> Optional[SourceClause]:
        source = node.get("source")
        if not isinstance(source, dict):
            return _plain_source(node)
        # ESTree `raw` is the bare quoted literal, not a full from clause.
        value = source.get("value")
        raw = source.get("raw")
        if self.preserve_quotes and raw:
            return SourceClause(value=value, raw=f" from {raw};")
        if value is None:
            raise InvalidNodeError("Source literal has no value.", node)
        return SourceClause(value=value)

    def _specifier(self, item: Dict[str, Any], node: Dict[str, Any]) -> Specifier:
        spec_type = item.get("type")
        local_name = _identifier_name(item.get("local"))
        if spec_type == "ImportDefaultSpecifier":
            if local_name is None:
                raise InvalidNodeError("Default specifier has no local name.", item)
            return Specifier(local_name, local_name, SpecifierKind.DEFAULT)
        if spec_type == "ImportNamespaceSpecifier":
            if local_name is None:
                raise InvalidNodeError("Namespace specifier has no local name.", item)
            return Specifier(NAMESPACE_SENTINEL, local_name, SpecifierKind.NAMESPACE)

        if spec_type == "ImportSpecifier":
            local = _identifier_name(item.get("imported"))
            bound = local_name
        else:
            local = local_name
            bound = _identifier_name(item.get("exported"))
        if local is None and bound is None:
            raise InvalidNodeError("Specifier has no identifier.", item)
        if local is None:
            local = bound
        return Specifier(local=local, bound=bound if bound is not None else local)


_ADAPTERS = {
    AcornAdapter.name: AcornAdapter,
    ProposalAdapter.name: ProposalAdapter,
    EstreeAdapter.name: EstreeAdapter,
}

DIALECTS = ("auto",) + tuple(_ADAPTERS)


def _specifier_ids(specifiers: Iterable[Dict[str, Any]]) -> Iterable[Optional[str]]:
    for item in specifiers:
        if isinstance(item, dict):
            yield _identifier_name(item.get("id"))


def detect_dialect(node: Dict[str, Any]) -> str:
    """Guess the dialect of `node` from its shape."""
    if node.get("type") in ESTREE_NODE_TYPES:
        return EstreeAdapter.name
    specifiers = node.get("specifiers") or ()
    for item in specifiers:
        if isinstance(item, dict) and ESTREE_SPECIFIER_KEYS & item.keys():
            return EstreeAdapter.name

    ids = list(_specifier_ids(specifiers))
    if any(name in (DEFAULT_SENTINEL, NAMESPACE_SENTINEL) for name in ids):
        return ProposalAdapter.name
    if node.get("declaration") is not None and ids and ids[0] == "default":
        return ProposalAdapter.name
    return AcornAdapter.name


def get_adapter(
    dialect: str, node: Optional[Dict[str, Any]] = None, *, preserve_quotes: bool = False
) -> DialectAdapter:
    """Return the adapter for `dialect`, resolving ``auto`` against `node`."""
    if dialect == "auto":
        if node is None:
            raise UnsupportedDialectError("Dialect 'auto' needs a node to inspect.")
        dialect = detect_dialect(node)
    adapter_cls = _ADAPTERS.get(dialect)
    if adapter_cls is None:
        raise UnsupportedDialectError(f"Unsupported dialect: {dialect}", node)
    if adapter_cls is EstreeAdapter:
        return EstreeAdapter(preserve_quotes=preserve_quotes)
    return adapter_cls()


__all__ = [
    "AcornAdapter",
    "DIALECTS",
    "DialectAdapter",
    "EstreeAdapter",
    "ProposalAdapter",
    "detect_dialect",
    "get_adapter",
]
