"""Resolution of raw JSON schemas into validated, ready-to-use schema objects."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any, Dict, Iterator, Optional

import jsonref  # type: ignore
from jsonschema import Draft202012Validator, ValidationError
from jsonschema.exceptions import SchemaError as JsonSchemaMetaError, best_match
from jsonschema.protocols import Validator
from jsonschema.validators import validator_for

from ...exceptions import SchemaError
from ...logger import get_logger
from .inference import JsonSchemaMode, SchemaInferrer, infer_schema
from .schema_validator import SchemaValidator

logger = get_logger(__name__)


class ResolvedSchema:
    """
    A raw JSON schema that passed meta-schema validation and reference resolution.

    Instances are immutable: every accessor hands out a copy, so a resolved
    schema can be shared by concurrent invocations of the same tool.
    """

    __slots__ = ("_raw", "_inlined", "_validator")

    def __init__(self, raw: Dict[str, Any], inlined: Optional[Dict[str, Any]], validator: Validator) -> None:
        self._raw = raw
        self._inlined = inlined
        self._validator = validator

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any], *, allow_recursive: bool = True) -> "ResolvedSchema":
        """Resolve ``raw`` without inspecting any Python type.

        A recursive document stays valid for validation but has no inlined form.

        Raises:
            SchemaError: If the document is not an object, violates its meta-schema,
                contains references that cannot be resolved, or is recursive while
                ``allow_recursive`` is False.
        """
        if not isinstance(raw, Mapping):
            raise SchemaError(f"schema must be a JSON object, got {type(raw).__name__}")

        document = copy.deepcopy(dict(raw))
        validator_cls = validator_for(document, default=Draft202012Validator)
        try:
            validator_cls.check_schema(document)
        except JsonSchemaMetaError as e:
            raise SchemaError(f"invalid schema: {e.message}") from e

        if not allow_recursive:
            SchemaValidator.assert_no_recursive_refs(document)

        inlined: Optional[Dict[str, Any]] = None
        if SchemaValidator.find_recursive_ref(document) is not None:
            missing = SchemaValidator.unresolved_refs(document)
            if missing:
                raise SchemaError(f"unresolvable reference: {missing[0]!r}")
        else:
            try:
                # proxies=False ensures we get plain dicts back, not JsonRef objects
                resolved = jsonref.replace_refs(
                    copy.deepcopy(document),
                    loader=_refuse_remote,
                    jsonschema=True,
                    merge_props=True,
                    proxies=False,
                    lazy_load=False,
                )
            except jsonref.JsonRefError as e:
                raise SchemaError(f"unresolvable reference: {e}") from e
            inlined = {k: v for k, v in resolved.items() if k not in ("$defs", "definitions")}

        validator = validator_cls(document, format_checker=validator_cls.FORMAT_CHECKER)
        return cls(document, inlined, validator)

    @property
    def schema(self) -> Dict[str, Any]:
        """The raw schema document, as supplied or inferred."""
        return copy.deepcopy(self._raw)

    @property
    def recursive(self) -> bool:
        return self._inlined is None

    def render(self) -> Dict[str, Any]:
        """Render the resolved schema back into its raw document form."""
        return self.schema

    def inlined(self) -> Dict[str, Any]:
        """The schema with every reference replaced by its target and ``$defs`` dropped.

        Raises:
            SchemaError: If the schema is recursive and has no finite inlined form.
        """
        if self._inlined is None:
            raise SchemaError("recursive schema cannot be inlined")
        return copy.deepcopy(self._inlined)

    def iter_errors(self, instance: Any) -> Iterator[ValidationError]:
        return self._validator.iter_errors(instance)

    def validate(self, instance: Any) -> None:
        """Validate ``instance`` against the schema.

        Raises:
            jsonschema.ValidationError: The most relevant violation.
        """
        error = best_match(self._validator.iter_errors(instance))
        if error is not None:
            raise error

    def is_valid(self, instance: Any) -> bool:
        return self._validator.is_valid(instance)

    def __repr__(self) -> str:
        return f"ResolvedSchema({self._raw!r})"


def resolve_schema(
    type_: Any,
    explicit: Optional[Mapping[str, Any]] = None,
    *,
    mode: JsonSchemaMode = "validation",
    inferrer: Optional[SchemaInferrer] = None,
) -> ResolvedSchema:
    """
    Produce a resolved schema for ``type_``.

    An explicit schema is resolved as-is and is not compared against ``type_``;
    a disagreement between the two only shows up when a value is converted.
    Recursive references are accepted in an explicit schema but rejected in an
    inferred one.

    Args:
        type_: Type descriptor used for inference when no explicit schema is given.
        explicit: Optional raw schema overriding inference.
        mode: Inference mode, see :func:`infer_schema`.
        inferrer: Optional inference strategy replacing the pydantic default.

    Returns:
        The resolved schema.

    Raises:
        SchemaError: If inference or resolution fails.
    """
    if explicit is not None:
        logger.debug(f"Resolving explicit schema; type {type_!r} is not inspected.")
        return ResolvedSchema.from_raw(explicit)

    raw = infer_schema(type_, mode=mode, inferrer=inferrer)
    return ResolvedSchema.from_raw(raw, allow_recursive=False)


def _refuse_remote(uri: str) -> Any:
    raise LookupError(f"remote reference {uri!r} is not supported")
