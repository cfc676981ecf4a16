"""
YAML Codec

Converts between the flat selection, the nested mapping that YAML
serializes, and YAML text itself.

Folding is lossy when one selected name is a prefix of another: the
deeper name overwrites the shallower leaf with a mapping. Flattening
stringifies every scalar, so values always round-trip as text.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

import yaml

from .selection import SelectedProperty, Selection

logger = logging.getLogger(__name__)

EMPTY_PLACEHOLDER = "# Add properties from the right panel"
ERROR_PLACEHOLDER = "Error generating YAML"


class CoreSchemaLoader(yaml.SafeLoader):
    """
    SafeLoader that resolves plain scalars with the YAML 1.2 core schema.

    YAML 1.1 turns values such as 1:30, 0755, 1_000 and yes into numbers
    and booleans. Here only true/false, null, plain decimal integers and
    decimal floats are typed; everything else stays the string it was
    written as.
    """

    yaml_implicit_resolvers: dict[str, list[tuple[str, re.Pattern[str]]]] = {}


CoreSchemaLoader.add_implicit_resolver(
    "tag:yaml.org,2002:bool",
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)
CoreSchemaLoader.add_implicit_resolver(
    "tag:yaml.org,2002:null",
    re.compile(r"^(?:~|null|Null|NULL|)$"),
    ["~", "n", "N", ""],
)
CoreSchemaLoader.add_implicit_resolver(
    "tag:yaml.org,2002:int",
    re.compile(r"^[-+]?(?:0|[1-9][0-9]*)$"),
    list("-+0123456789"),
)
CoreSchemaLoader.add_implicit_resolver(
    "tag:yaml.org,2002:float",
    re.compile(
        r"^(?:[-+]?(?:\.[0-9]+|[0-9]+\.[0-9]*)(?:[eE][-+]?[0-9]+)?"
        r"|[-+]?[0-9]+[eE][-+]?[0-9]+"
        r"|[-+]?\.(?:inf|Inf|INF)"
        r"|\.(?:nan|NaN|NAN))$"
    ),
    list("-+.0123456789"),
)
CoreSchemaLoader.add_implicit_resolver("tag:yaml.org,2002:merge", re.compile(r"^(?:<<)$"), ["<"])


def fold_selection(selection: Selection) -> dict[str, Any]:
    """Nest dotted names into mappings. Last write wins on path collisions."""
    root: dict[str, Any] = {}
    for prop in selection:
        keys = prop.name.split(".")
        current = root
        for key in keys[:-1]:
            if not isinstance(current.get(key), dict):
                current[key] = {}
            current = current[key]
        current[keys[-1]] = prop.value
    return root


def scalar_text(value: Any) -> str:
    """Render a parsed YAML leaf the way it was written, not as a Python repr."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(scalar_text(item) for item in value)
    if isinstance(value, Mapping):
        # mappings only reach here from inside a sequence
        return yaml.safe_dump(
            dict(value), default_flow_style=True, sort_keys=False, allow_unicode=True, width=1 << 16
        ).strip()
    return str(value)


def flatten_mapping(obj: Mapping[Any, Any] | list[Any], prefix: str = "") -> list[SelectedProperty]:
    """
    Walk a parsed YAML document and emit one property per leaf.

    Nested mappings are descended with a dotted prefix. Sequences below
    the top level are leaves; a top-level sequence is keyed by index.
    """
    items = enumerate(obj) if isinstance(obj, list) else obj.items()
    result: list[SelectedProperty] = []
    for key, value in items:
        key = scalar_text(key)
        name = f"{prefix}.{key}" if prefix else key
        if isinstance(value, Mapping):
            result.extend(flatten_mapping(value, name))
        else:
            result.append(SelectedProperty(name=name, value=scalar_text(value)))
    return result


def render_yaml(
    selection: Selection,
    empty_placeholder: str = EMPTY_PLACEHOLDER,
    error_placeholder: str = ERROR_PLACEHOLDER,
) -> str:
    """Serialize the selection as block-style YAML, or a placeholder."""
    if not len(selection):
        return empty_placeholder
    try:
        return yaml.safe_dump(
            fold_selection(selection),
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    except yaml.YAMLError as e:
        logger.error("Failed to generate YAML for %d properties: %s", len(selection), e)
        return error_placeholder


def parse_yaml(text: str) -> Any:
    """
    Load a single YAML document with core-schema scalar typing.

    Raises yaml.YAMLError on invalid input.
    """
    return yaml.load(text, Loader=CoreSchemaLoader)
