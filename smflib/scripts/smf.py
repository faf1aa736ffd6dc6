"""
Scripts to inspect and update SMF service properties.
"""

import shlex
from typing import List, Optional

from .utils import confirm, entrypoint
from ..plumbing import smf
from ..plumbing.smf import DesiredProperty, PropertyTarget
from ..tasks import smf as tasks


def _format(type_: Optional[str], values: List[str]) -> str:
    return "{}: {}".format(type_, " ".join(shlex.quote(value) for value in values))


@entrypoint
def show(name: str, fmri: Optional[str], property_: Optional[str]):
    """
    Print the type and values of a service property.

    NAME is of the form `<fmri>#<property>`, and either part may be overridden by an option.

    Usage: {script} NAME [--fmri=FMRI] [--property=PROPERTY]
    """
    target = PropertyTarget.from_name(name, fmri, property_)
    current = smf.get_property(target)
    print(_format(current.type, list(current.values)))
    return current


@entrypoint
def update(name: str, value: List[str], type_: Optional[str], list_: bool,
           fmri: Optional[str], property_: Optional[str], yes: bool):
    """
    Set a service property, if not already set.

    Multiple VALUEs are written as a list property, as is a single VALUE with `--list`.  Without
    `--type`, the property keeps its current type.

    Usage: {script} NAME VALUE... [options]

    Options:
      --type=TYPE          Property type, e.g. astring or net_address.
      --list               Write a list property, even with a single value.
      --fmri=FMRI          Service FMRI, instead of the one in NAME.
      --property=PROPERTY  Property name, instead of the one in NAME.
      --yes                Don't ask for confirmation.
    """
    raw = value if list_ or len(value) > 1 else value[0]
    desired = DesiredProperty.new(name, raw, type_, fmri, property_)
    current = smf.get_property(desired.target)
    print("Property: {}".format(desired.target))
    print("Current:  {}".format(_format(current.type, list(current.values))))
    print("Desired:  {}".format(_format(desired.type or current.type, list(desired.value.values))))
    if not yes:
        confirm("Update this property?")
    result = smf.set_property(desired, current)
    print(result)
    return result


@entrypoint
def apply(path: str, yes: bool):
    """
    Set all service properties declared in a config file.

    Each section is named `<fmri>#<property>`, and contains a `value` along with optional `type`
    and `list` keys.

    Usage: {script} PATH [--yes]
    """
    desired = tasks.read_config(path)
    for item in desired:
        print("- {} = {}".format(item.target, item.value.render()))
    if not yes:
        confirm("Apply {} properties?".format(len(desired)))
    result = tasks.ensure_properties(desired)
    print(result)
    return result
