"""
Convergence of SMF service properties, individually or from a config file.
"""

import configparser
import logging
import shlex
from typing import Iterable, List, Optional, Sequence, Union

from ..plumbing import smf
from ..plumbing.common import Collect, command, Result, Runner
from ..plumbing.smf import DesiredProperty, ValidationError


LOG = logging.getLogger(__name__)


@Result.collect
def ensure_property(name: str, value: Union[str, Sequence[str]], type: Optional[str] = None,
                    fmri: Optional[str] = None, property: Optional[str] = None,
                    run: Runner = command) -> Collect[DesiredProperty]:
    """
    Set a service property to the given value, if not already set.

    The property is addressed by a compound `<fmri>#<property>` name, or by explicit `fmri` and
    `property` arguments.  A list value is written as a multi-value property.
    """
    desired = DesiredProperty.new(name, value, type, fmri, property)
    yield from converge(desired, run)
    return desired


@Result.collect
def converge(desired: DesiredProperty, run: Runner = command) -> Collect[None]:
    """
    Load the current state of a requested property, and update it if needed.
    """
    current = smf.get_property(desired.target, run)
    yield smf.set_property(desired, current, run)


@Result.collect
def ensure_properties(desired: Iterable[DesiredProperty], run: Runner = command) -> Collect[None]:
    """
    Converge multiple properties in order, stopping at the first failure.
    """
    for item in desired:
        yield converge(item, run)


def read_config(path: str) -> List[DesiredProperty]:
    """
    Load desired properties from an INI file, with a section per property:

        [network/dns/client#config/nameserver]
        type = net_address
        value = 8.8.8.8 8.8.4.4
        list = yes

    List values are split as shell words.  Sections may also set `fmri` and `property` to
    override the section name.
    """
    parser = configparser.ConfigParser(interpolation=None)
    with open(path) as config:
        parser.read_file(config)
    desired: List[DesiredProperty] = []
    for name in parser.sections():
        section = parser[name]
        if "value" not in section:
            raise ValidationError("No value given in section [{}]".format(name))
        try:
            is_list = section.getboolean("list", fallback=False)
        except ValueError as ex:
            raise ValidationError("Bad list flag in section [{}]: {}".format(name, ex)) from ex
        raw = section["value"]
        value: Union[str, List[str]] = shlex.split(raw) if is_list else raw
        desired.append(DesiredProperty.new(name, value, section.get("type"),
                                           section.get("fmri"), section.get("property")))
    LOG.debug("Loaded %d properties from %r", len(desired), path)
    return desired
