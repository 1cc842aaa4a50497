"""
Utility functions for mapping touch panel JSON payloads to and from the dataclass models.

The panel API uses PascalCase keys (``IsMuted``, ``StandbyTimeoutMinutes``) while the
models use snake_case attributes. Keys are derived from attribute names automatically;
irregular names (``IPv4``, ``IPv6``) are declared with ``crestron_api_field`` metadata.
"""

import dataclasses
import typing
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

from .exceptions import CrestronDataError
from .logging import get_logger, log_extra_fields

logger = get_logger(__name__)

T = TypeVar("T")


def to_api_field_name(attribute_name: str) -> str:
    """Convert a snake_case attribute name to the PascalCase key used by the panel."""
    return "".join(part[:1].upper() + part[1:] for part in attribute_name.split("_") if part)


def get_api_field_mapping(model_class: Type) -> Dict[str, str]:
    """
    Create a mapping between API field names and model attribute names.

    Fields with ``crestron_api_field`` metadata use the declared key, every other
    public field uses its PascalCase form.

    Args:
        model_class: The dataclass model to examine for field mappings

    Returns:
        Dictionary mapping panel API field names to Python model attribute names
    """
    if not dataclasses.is_dataclass(model_class):
        return {}

    field_mapping = {}
    for field in dataclasses.fields(model_class):
        if field.name.startswith("_"):
            continue
        api_field_name = field.metadata.get("crestron_api_field", to_api_field_name(field.name))
        field_mapping[api_field_name] = field.name

    return field_mapping


def _unwrap_optional(hint: Any) -> Any:
    if typing.get_origin(hint) is typing.Union:
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _convert_value(value: Any, hint: Any, location: str) -> Any:
    if value is None:
        return None

    hint = _unwrap_optional(hint)
    origin = typing.get_origin(hint)

    if origin in (list, List):
        if not isinstance(value, list):
            raise CrestronDataError(
                f"Expected a list for {location}, got {type(value).__name__}")
        item_hint = (typing.get_args(hint) or (Any,))[0]
        return [_convert_value(item, item_hint, f"{location}[{i}]")
                for i, item in enumerate(value)]

    if dataclasses.is_dataclass(hint):
        return build_model(value, hint, location)

    return value


def map_api_data_to_model(
    data: Dict[str, Any], model_class: Type, location: Optional[str] = None
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Maps API data to model fields, converting nested objects and separating unknown keys.

    Args:
        data: Input dictionary from the API response
        model_class: The dataclass model to map data to
        location: Dotted path of ``data`` inside the response, used in error messages

    Returns:
        Tuple containing (model_fields, extra_fields) where:
            - model_fields: Keyword arguments for the model constructor
            - extra_fields: Keys that do not map to any model attribute

    Raises:
        CrestronDataError: If a nested value has the wrong JSON type.
    """
    location = location or model_class.__name__
    field_map = get_api_field_mapping(model_class)
    hints = typing.get_type_hints(model_class)

    model_fields = {}
    extra_fields = {}

    for api_key, value in data.items():
        mapped_key = field_map.get(api_key)
        if mapped_key is None and api_key in field_map.values():
            mapped_key = api_key

        if mapped_key is not None:
            model_fields[mapped_key] = _convert_value(
                value, hints.get(mapped_key, Any), f"{location}.{api_key}")
        else:
            extra_fields[api_key] = value

    return model_fields, extra_fields


def build_model(data: Any, model_class: Type[T], location: Optional[str] = None) -> T:
    """
    Build a dataclass instance from a JSON object.

    Unknown keys are kept in ``_extra_fields`` when the model declares it.

    Raises:
        CrestronDataError: If ``data`` is not a JSON object or cannot be mapped.
    """
    location = location or model_class.__name__
    if not isinstance(data, dict):
        raise CrestronDataError(
            f"Expected an object for {location}, got {type(data).__name__}")

    model_fields, extra_fields = map_api_data_to_model(data, model_class, location)
    try:
        instance = model_class(**model_fields)
    except TypeError as e:
        raise CrestronDataError(f"Error creating {model_class.__name__} from {location}: {e}") from e

    if hasattr(instance, "_extra_fields"):
        instance._extra_fields = extra_fields
    log_extra_fields(logger, model_class.__name__, extra_fields)
    return instance


def build_model_list(data: Any, model_class: Type[T], location: Optional[str] = None) -> List[T]:
    """
    Build a list of dataclass instances from a JSON array.

    Raises:
        CrestronDataError: If ``data`` is not a JSON array or an item cannot be mapped.
    """
    location = location or model_class.__name__
    if not isinstance(data, list):
        raise CrestronDataError(
            f"Expected a list for {location}, got {type(data).__name__}")
    return [build_model(item, model_class, f"{location}[{i}]") for i, item in enumerate(data)]


def model_to_api_dict(obj: Any) -> Dict[str, Any]:
    """
    Convert a model back into a panel JSON object, leaving out unset (None) fields.

    Used to build partial-update bodies where only the changed leaf is present.
    """
    result = {}
    for field in dataclasses.fields(obj):
        if field.name.startswith("_"):
            continue
        value = getattr(obj, field.name)
        if value is None:
            continue
        api_key = field.metadata.get("crestron_api_field", to_api_field_name(field.name))
        if dataclasses.is_dataclass(value):
            value = model_to_api_dict(value)
        elif isinstance(value, list):
            value = [model_to_api_dict(item) if dataclasses.is_dataclass(item) else item
                     for item in value]
        result[api_key] = value
    return result
