"""Validation schema for project documents.

Checks the structure of a parsed project document before it is converted
to `ProjectData`, so hand-edited files fail with readable messages.
"""

from typing import Any, cast

from ..layout.fields import FieldKind


class ProjectSchema:
    """Validation rules for the project document structure.

    Document layout::

        {"classes": [{"name": str, "fields": [
            {"name": str, "offset": int, "kind": str, "metadata": str | null}
        ]}]}
    """

    REQUIRED_ROOT_FIELDS = {"classes"}
    REQUIRED_CLASS_FIELDS = {"name", "fields"}
    REQUIRED_FIELD_FIELDS = {"name", "offset", "kind"}
    VALID_KINDS = {kind.value for kind in FieldKind}
    # Upper bound for offsets and padding lengths (1 MiB)
    MAX_OFFSET = 0x100000

    @staticmethod
    def validate_field(field_data: Any) -> list[str]:
        """Validate a single field entry.

        Args:
            field_data: Field object from the document

        Returns:
            List of error messages (empty if valid)
        """
        if not isinstance(field_data, dict):
            return ["Field must be an object"]

        data = cast(dict[str, Any], field_data)
        missing = ProjectSchema.REQUIRED_FIELD_FIELDS - data.keys()
        if missing:
            return [f"Field missing required keys: {sorted(missing)}"]

        errors: list[str] = []
        if not isinstance(data["name"], str):
            errors.append(f"Field 'name' must be a string, got {data['name']!r}")

        offset = data["offset"]
        # bool is an int subclass, reject it explicitly
        if isinstance(offset, bool) or not isinstance(offset, int) or offset < 0:
            errors.append(f"Field 'offset' must be a non-negative integer, got {offset!r}")
        elif offset > ProjectSchema.MAX_OFFSET:
            errors.append(
                f"Field 'offset' {offset:#x} exceeds maximum {ProjectSchema.MAX_OFFSET:#x}"
            )

        kind = data["kind"]
        if kind not in ProjectSchema.VALID_KINDS:
            errors.append(f"Unknown field kind {kind!r}")

        metadata = data.get("metadata")
        if metadata is not None and not isinstance(metadata, str):
            errors.append(f"Field 'metadata' must be a string or null, got {metadata!r}")
        elif kind == FieldKind.PADDING.value and metadata is not None:
            # Unparsable lengths are skipped by load, only oversized ones are errors
            try:
                length = int(metadata)
            except ValueError:
                length = 0
            if length > ProjectSchema.MAX_OFFSET:
                errors.append(
                    f"Padding length {length:#x} exceeds maximum {ProjectSchema.MAX_OFFSET:#x}"
                )

        return errors

    @staticmethod
    def validate_class(class_data: Any) -> list[str]:
        """Validate a class entry and all of its fields."""
        if not isinstance(class_data, dict):
            return ["Class must be an object"]

        data = cast(dict[str, Any], class_data)
        missing = ProjectSchema.REQUIRED_CLASS_FIELDS - data.keys()
        if missing:
            return [f"Class missing required keys: {sorted(missing)}"]

        errors: list[str] = []
        name = data["name"]
        if not isinstance(name, str) or not name.strip():
            errors.append(f"Class 'name' must be a non-empty string, got {name!r}")

        fields = data["fields"]
        if not isinstance(fields, list):
            errors.append("Class 'fields' must be an array")
            return errors

        for idx, field_data in enumerate(cast(list[Any], fields)):
            errors.extend(
                f"Field {idx}: {err}" for err in ProjectSchema.validate_field(field_data)
            )

        return errors

    @staticmethod
    def validate_project(data: Any) -> list[str]:
        """Validate a complete project document.

        Args:
            data: Parsed document

        Returns:
            List of all validation errors (empty if valid)
        """
        if not isinstance(data, dict):
            return ["Project document must be an object"]

        root = cast(dict[str, Any], data)
        missing = ProjectSchema.REQUIRED_ROOT_FIELDS - root.keys()
        if missing:
            return [f"Missing required fields: {sorted(missing)}"]

        classes = root["classes"]
        if not isinstance(classes, list):
            return ["'classes' must be an array"]

        errors: list[str] = []
        for idx, class_data in enumerate(cast(list[Any], classes)):
            class_errors = ProjectSchema.validate_class(class_data)
            errors.extend(f"Class {idx}: {err}" for err in class_errors)

        return errors
