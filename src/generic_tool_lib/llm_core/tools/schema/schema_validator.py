from typing import Any, Dict, List, Optional, Set

from ...exceptions import SchemaError
from ...logger import get_logger

logger = get_logger(__name__)

_MISSING = object()


class SchemaValidator:
    """
    Structural checks on raw JSON schemas that the jsonschema meta-schema does not cover.
    """

    @staticmethod
    def find_recursive_ref(schema: Dict[str, Any]) -> Optional[str]:
        """
        Finds a reference that leads back to itself by traversing the graph.

        Every local reference (``#`` or ``#/...``) is followed; a reference that is
        reached again while it is still being expanded is a cycle.

        Args:
            schema: The JSON schema to check.

        Returns:
            The first reference found on a cycle, or None.
        """

        def check(node: Any, path: Set[str]) -> Optional[str]:
            if isinstance(node, dict):
                ref = node.get("$ref")
                if isinstance(ref, str) and ref.startswith("#"):
                    if ref in path:
                        return ref

                    target = SchemaValidator.lookup_pointer(schema, ref)
                    if target is not _MISSING:
                        found = check(target, path | {ref})
                        if found is not None:
                            return found

                for key, value in node.items():
                    if key != "$ref":
                        found = check(value, path)
                        if found is not None:
                            return found
            elif isinstance(node, list):
                for item in node:
                    found = check(item, path)
                    if found is not None:
                        return found
            return None

        return check(schema, set())

    @staticmethod
    def assert_no_recursive_refs(schema: Dict[str, Any]) -> None:
        """
        Checks that the schema contains no recursive references.

        Args:
            schema: The JSON schema to check.

        Raises:
            SchemaError: If a recursive reference is found.
        """
        ref = SchemaValidator.find_recursive_ref(schema)
        if ref is not None:
            msg = f"Recursive structure detected: {ref}. Recursive structures are not allowed in tool schemas."
            logger.debug(msg)
            raise SchemaError(msg)

    @staticmethod
    def unresolved_refs(schema: Dict[str, Any]) -> List[str]:
        """Collect every ``$ref`` that does not point inside ``schema``.

        Non-local references count as unresolved since they are never fetched.
        """
        missing: List[str] = []

        def walk(node: Any) -> None:
            if isinstance(node, dict):
                ref = node.get("$ref")
                if isinstance(ref, str) and SchemaValidator.lookup_pointer(schema, ref) is _MISSING:
                    missing.append(ref)
                for key, value in node.items():
                    if key != "$ref":
                        walk(value)
            elif isinstance(node, list):
                for item in node:
                    walk(item)

        walk(schema)
        return missing

    @staticmethod
    def lookup_pointer(schema: Any, ref: str) -> Any:
        """Resolve a local JSON pointer such as ``#/$defs/Address`` inside ``schema``.

        Returns:
            The referenced node, or a sentinel if the pointer does not resolve.
        """
        if ref == "#":
            return schema
        if not ref.startswith("#/"):
            return _MISSING

        node: Optional[Any] = schema
        for raw_part in ref[2:].split("/"):
            part = raw_part.replace("~1", "/").replace("~0", "~")
            if isinstance(node, dict) and part in node:
                node = node[part]
            elif isinstance(node, list) and part.isdigit() and int(part) < len(node):
                node = node[int(part)]
            else:
                return _MISSING
        return node
