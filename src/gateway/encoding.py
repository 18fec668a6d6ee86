def _encode_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_form(payload: dict, prefix: str | None = None) -> list[tuple[str, str]]:
    """Flatten a payload into form fields with bracketed nested keys.

    ``{"metadata": {"order": "1"}}`` becomes ``[("metadata[order]", "1")]``.
    None values are dropped. An empty nested mapping sends no fields.
    """
    pairs = []
    for key, value in payload.items():
        name = f"{prefix}[{key}]" if prefix else str(key)
        if value is None:
            continue
        if isinstance(value, dict):
            pairs.extend(encode_form(value, name))
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                item_name = f"{name}[{index}]"
                if isinstance(item, dict):
                    pairs.extend(encode_form(item, item_name))
                elif item is not None:
                    pairs.append((item_name, _encode_value(item)))
        else:
            pairs.append((name, _encode_value(value)))
    return pairs
