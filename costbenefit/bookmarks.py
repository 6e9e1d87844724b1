"""Encode an InputSet into a shareable query string and back.

Query parameters use camelCase names (``directCosts=1000``); decoding maps
them back to the kebab-case field ids the field store and
``normalize_inputs`` understand.
"""

from __future__ import annotations

import re
from urllib.parse import parse_qsl, urlencode

from costbenefit.models.inputs import FIELD_IDS, InputSet

_NON_NUMERIC_FIELDS = {"business-model"}


def kebab_to_camel(field_id: str) -> str:
    return re.sub(r"-([a-z])", lambda m: m.group(1).upper(), field_id)


def camel_to_kebab(name: str) -> str:
    return re.sub(r"([A-Z])", lambda m: "-" + m.group(1).lower(), name)


def _format_value(value: object) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def encode_bookmark(inputs: InputSet) -> str:
    """Return the query string (without ``?``) describing ``inputs``."""
    params = {}
    for name, value in inputs.to_dict().items():
        if value is None or value == "":
            continue
        params[kebab_to_camel(name.replace("_", "-"))] = _format_value(value)
    return urlencode(params)


def decode_bookmark(query: str) -> dict[str, str]:
    """Parse a bookmark query string into raw field values.

    Unknown parameters are ignored, as are numeric fields whose value does
    not parse as a number.
    """
    fields: dict[str, str] = {}
    for name, value in parse_qsl(query.lstrip("?"), keep_blank_values=False):
        field_id = camel_to_kebab(name)
        if field_id not in FIELD_IDS:
            continue
        if field_id not in _NON_NUMERIC_FIELDS:
            try:
                float(value)
            except ValueError:
                continue
        fields[field_id] = value
    return fields
