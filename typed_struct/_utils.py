import typing


def is_mapping(obj: typing.Any) -> bool:
    """Check if an object is a mapping."""
    return isinstance(obj, typing.Mapping)


def merge_dicts(dict1: typing.Dict, dict2: typing.Mapping) -> typing.Dict:
    """Merges two (nested) dictionaries. Values in `dict2` win."""
    if not dict2:
        return dict(dict1)
    if not dict1:
        return dict(dict2)

    if not (is_mapping(dict1) and is_mapping(dict2)):
        raise TypeError("Both arguments must be dictionaries")

    merged = dict(dict1)
    for key, value in dict2.items():
        if key in merged and is_mapping(merged[key]) and is_mapping(value):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged
