"""
Document loader.

Reads an OpenAPI document from JSON or YAML and bundles relative-file
$refs into the document's own `components.schemas` table, so that the
rest of the pipeline only ever sees one self-contained document with
local references.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import DocumentError

logger = logging.getLogger(__name__)

SCHEMAS_REF = "#/components/schemas"


def check_document(document: Any) -> dict[str, Any]:
    """
    Check that a loaded value is an OpenAPI document.

    Args:
        document: The parsed document

    Returns:
        The document, unchanged

    Raises:
        DocumentError: If the document is not a mapping with an `openapi` marker
    """
    if not isinstance(document, dict) or "openapi" not in document:
        raise DocumentError("input document must use openapi format")
    return document


def load_document(path: str | Path) -> dict[str, Any]:
    """Load and bundle the OpenAPI document at `path`."""
    return DocumentLoader().load(path)


def _split_ref(ref: str) -> tuple[str, str]:
    """
    Split a $ref into (path_part, fragment_part_without_hash).

    Examples:
      "foo.json#/a/b" -> ("foo.json", "/a/b")
      "foo.json"      -> ("foo.json", "")
      "#/a/b"         -> ("", "/a/b")
    """
    if "#" not in ref:
        return ref, ""
    path, fragment = ref.split("#", 1)
    return path, fragment


def _decode_pointer_token(token: str) -> str:
    # JSON Pointer escaping per RFC 6901
    return token.replace("~1", "/").replace("~0", "~")


class DocumentLoader:
    """Loads OpenAPI documents and bundles their external references."""

    def __init__(self):
        self._file_cache: dict[Path, Any] = {}
        self._root_file: Path | None = None

        # (file, pointer) -> bundled schema name
        self._registered: dict[tuple[Path, str], str] = {}
        self._bundled: dict[str, Any] = {}
        self._bundled_sources: dict[str, Any] = {}

    def load(self, path: str | Path) -> dict[str, Any]:
        """
        Load a document and bundle its relative-file references.

        Args:
            path: Path to a .json, .yaml or .yml file

        Returns:
            The bundled document

        Raises:
            DocumentError: If the file cannot be read, is not an OpenAPI
                document, or a reference cannot be bundled
        """
        self._root_file = Path(path).resolve()
        document = check_document(self._read(self._root_file))
        return self.bundle(document, self._root_file)

    def bundle(self, document: dict[str, Any], root_file: Path) -> dict[str, Any]:
        """
        Bundle relative-file references of an already-loaded document.

        Args:
            document: The root document (not modified)
            root_file: Location of the root document, for relative paths

        Returns:
            A copy of the document where every external $ref points into
            its own `components.schemas`
        """
        self._root_file = root_file.resolve()
        self._registered = {}
        self._bundled = {}
        self._bundled_sources = {}

        bundled = copy.deepcopy(document)
        self._rewrite(bundled, self._root_file)

        if self._bundled:
            components = bundled.get("components") or {}
            schemas = components.get("schemas") or {}
            for name, schema in self._bundled.items():
                # `Pet: {$ref: pet.yaml#/Pet}` now points at itself; the bundled body replaces it
                if schemas.get(name) == {"$ref": f"{SCHEMAS_REF}/{name}"}:
                    schemas[name] = schema
                    continue
                if name in schemas:
                    if schemas[name] != self._bundled_sources[name]:
                        raise DocumentError(f"bundled schema {name!r} clashes with an existing component schema")
                    continue
                schemas[name] = schema
            components["schemas"] = schemas
            bundled["components"] = components
            logger.debug("Bundled %d external schemas", len(self._bundled))

        return bundled

    def _read(self, path: Path) -> Any:
        """Read and parse a JSON or YAML file, with caching."""
        if path in self._file_cache:
            return self._file_cache[path]

        try:
            with open(path, encoding="utf-8") as f:
                # JSON is a subset of YAML
                data = yaml.safe_load(f)
        except OSError as e:
            raise DocumentError(f"cannot read {path}: {e}") from e
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise DocumentError(f"cannot parse {path}: {e}") from e

        self._file_cache[path] = data
        return data

    def _rewrite(self, node: Any, base_file: Path) -> None:
        """Rewrite external $refs found under `node`, in place."""
        if isinstance(node, list):
            for item in node:
                self._rewrite(item, base_file)
            return

        if not isinstance(node, dict):
            return

        ref = node.get("$ref")
        if isinstance(ref, str):
            is_local = ref.startswith("#")
            # Local references inside an external file point into that file
            if not is_local or base_file != self._root_file:
                node["$ref"] = self._register(ref, base_file)

        for key, value in node.items():
            if key != "$ref":
                self._rewrite(value, base_file)

    def _register(self, ref: str, base_file: Path) -> str:
        """Bundle the target of an external reference and return its local ref."""
        path_part, pointer = _split_ref(ref)
        if "://" in path_part:
            raise DocumentError(f"remote references are not supported: {ref}")

        target_file = (base_file.parent / path_part).resolve() if path_part else base_file
        if target_file == self._root_file:
            return f"#{pointer}"

        key = (target_file, pointer)
        if key in self._registered:
            return f"{SCHEMAS_REF}/{self._registered[key]}"

        if pointer:
            name = _decode_pointer_token(pointer.rstrip("/").rsplit("/", 1)[-1])
        else:
            name = target_file.name.split(".", 1)[0]

        source = self._resolve_pointer(self._read(target_file), pointer, ref)

        if name in self._bundled_sources and self._bundled_sources[name] != source:
            raise DocumentError(f"bundled schema {name!r} is defined differently in more than one file")

        # Register before descending so that reference cycles terminate
        self._registered[key] = name
        schema = copy.deepcopy(source)
        self._bundled_sources[name] = source
        self._bundled[name] = schema
        self._rewrite(schema, target_file)

        logger.debug("Bundled %s as %r", ref, name)
        return f"{SCHEMAS_REF}/{name}"

    def _resolve_pointer(self, document: Any, pointer: str, ref: str) -> Any:
        """Resolve a JSON pointer fragment against a loaded document."""
        if not pointer:
            return document
        if not pointer.startswith("/"):
            raise DocumentError(f"unsupported JSON pointer in {ref}")

        current = document
        for raw_token in pointer.lstrip("/").split("/"):
            token = _decode_pointer_token(raw_token)
            if isinstance(current, list):
                try:
                    current = current[int(token)]
                except (ValueError, IndexError) as e:
                    raise DocumentError(f"cannot resolve {ref}") from e
            elif isinstance(current, dict) and token in current:
                current = current[token]
            else:
                raise DocumentError(f"cannot resolve {ref}")
        return current
