"""Configuration validation utilities."""

from dataclasses import dataclass, fields
from typing import Any
from urllib.parse import urlparse

from .defaults import DisplayParams, ParserParams, SourceParams

SECTIONS = {
    "source": SourceParams,
    "parser": ParserParams,
    "display": DisplayParams,
}


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_source_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate source parameters."""
        errors = []

        if "url" in params:
            value = params["url"]
            parsed = urlparse(value) if isinstance(value, str) else None
            if (parsed is None or parsed.scheme not in ("http", "https") or not parsed.netloc
                    or any(char.isspace() or not char.isprintable() for char in value)):
                errors.append(ValidationError(
                    field="url",
                    message="Must be an http(s) URL",
                    value=value
                ))

        if "timeout_seconds" in params:
            value = params["timeout_seconds"]
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                errors.append(ValidationError(
                    field="timeout_seconds",
                    message="Must be a positive number",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_parser_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate parser parameters."""
        errors = []

        for field in ("header_marker", "required_field"):
            if field in params:
                value = params[field]
                if not isinstance(value, str) or not value.strip():
                    errors.append(ValidationError(
                        field=field,
                        message="Must be a non-empty string",
                        value=value
                    ))

        if "numeric_fields" in params:
            value = params["numeric_fields"]
            if (not isinstance(value, (list, tuple))
                    or not all(isinstance(name, str) for name in value)):
                errors.append(ValidationError(
                    field="numeric_fields",
                    message="Must be a list of column names",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_display_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate display parameters."""
        errors = []

        if "sort_field" in params:
            value = params["sort_field"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="sort_field",
                    message="Must be a non-empty string",
                    value=value
                ))

        if "descending" in params:
            value = params["descending"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="descending",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_structure(config: dict[str, Any]) -> list[ValidationError]:
        """Check sections and their keys against the configuration dataclasses."""
        errors = []

        for section, value in config.items():
            params_cls = SECTIONS.get(section)
            if params_cls is None:
                errors.append(ValidationError(
                    field=str(section),
                    message=f"Unknown section; expected one of {', '.join(SECTIONS)}",
                    value=value
                ))
                continue

            if not isinstance(value, dict):
                errors.append(ValidationError(
                    field=section,
                    message="Must be a mapping of settings",
                    value=value
                ))
                continue

            known = {f.name for f in fields(params_cls)}
            for key in value:
                if key not in known:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown setting",
                        value=value[key]
                    ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = ConfigValidator.validate_structure(config)

        if isinstance(config.get("source"), dict):
            errors.extend(ConfigValidator.validate_source_params(config["source"]))

        if isinstance(config.get("parser"), dict):
            errors.extend(ConfigValidator.validate_parser_params(config["parser"]))

        if isinstance(config.get("display"), dict):
            errors.extend(ConfigValidator.validate_display_params(config["display"]))

        return errors
