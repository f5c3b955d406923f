"""Support namespace for the small generic helpers the engines consume.

Scope:
- Small, stateless helpers with no third-party dependencies: recursive
  merge of nested mappings, scalar-or-list coercion, trim-by-value and
  earliest-match string search.
- No URI or filesystem policy. If a helper starts accumulating policy,
  move it into the engine that owns it.

Public API:
- Nothing is re-exported at the package level. Import specific helpers
  from their defining modules (``support.structures``, ``support.strings``).
"""
