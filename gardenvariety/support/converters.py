# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
#
# Adapted to GardenVariety configuration options
from string import Template


def asbool(obj):
    if isinstance(obj, str):
        obj = obj.strip().lower()
        if obj in ["true", "yes", "on", "y", "t", "1"]:
            return True
        elif obj in ["false", "no", "off", "n", "f", "0"]:
            return False
        else:
            raise ValueError("String is not true/false: %r" % obj)
    return bool(obj)


def asint(obj):
    try:
        return int(obj)
    except (TypeError, ValueError):
        raise ValueError("Bad integer value: %r" % obj)


def aslist(obj, sep=None, strip=True):
    if isinstance(obj, str):
        lst = obj.split(sep)
        if strip:
            lst = [v.strip() for v in lst]
        return [v for v in lst if v]
    elif isinstance(obj, (list, tuple, set, frozenset)):
        return list(obj)
    elif obj is None:
        return []
    else:
        return [obj]


def asmapping(obj, sep=",", pair_sep=":"):
    """Converts ``"person:people, ox:oxen"`` to ``{'person': 'people', 'ox': 'oxen'}``.

    Dictionaries are returned as a copy.
    """
    if isinstance(obj, dict):
        return dict(obj)
    if obj is None:
        return {}
    if not isinstance(obj, str):
        raise ValueError("Mappings must be dictionaries or strings, got %r" % obj)

    mapping = {}
    for entry in aslist(obj, sep):
        key, found, value = entry.partition(pair_sep)
        if not found:
            raise ValueError("Bad mapping entry: %r" % entry)
        mapping[key.strip()] = value.strip()
    return mapping


def astemplate(obj):
    if isinstance(obj, Template):
        return obj

    if not isinstance(obj, str):
        raise ValueError("Templates must be strings")

    return Template(obj)
