"""
SMF service property management, using `svccfg` to read and write individual properties.

Properties are addressed by a compound name of a service FMRI and a property path, separated by
`#`, e.g. `network/dns/client#config/nameserver`.
"""

import logging
import shlex
from typing import NamedTuple, Optional, Sequence, Tuple, Union

from .common import command, Result, Runner, State
from .tools import SVCCFG


LOG = logging.getLogger(__name__)


class ValidationError(ValueError):
    """
    A required field is missing from a property request, or has the wrong shape.
    """


class PropertyNotFoundError(KeyError):
    """
    The service has no property of the requested name.
    """

    def __init__(self, target: "PropertyTarget"):
        super().__init__(target)
        self.target = target

    def __str__(self):
        return "Unable to find property {} for service {}".format(self.target.property,
                                                                   self.target.fmri)


class PropertyParseError(ValueError):
    """
    The values printed by `svccfg listprop` are not valid shell words, e.g. an unbalanced quote.
    """


def parse_name(name: str) -> Tuple[str, Optional[str]]:
    """
    Split a compound name into its service FMRI and property name.  The property is `None` if the
    name contains no `#` separator.
    """
    fmri, sep, prop = name.partition("#")
    return (fmri, prop if sep else None)


class PropertyTarget(NamedTuple):
    """
    A single property of a single service.
    """

    fmri: str
    property: str

    @classmethod
    def from_name(cls, name: str = "", fmri: Optional[str] = None,
                  property: Optional[str] = None) -> "PropertyTarget":
        """
        Build a target from a compound name, with explicit fields taking precedence over those
        derived from the name.
        """
        if not isinstance(name, str):
            raise ValidationError("Name must be a string: {!r}".format(name))
        for field, given in (("FMRI", fmri), ("property name", property)):
            if given is not None and not isinstance(given, str):
                raise ValidationError("Service {} must be a string: {!r}".format(field, given))
        name_fmri, name_prop = parse_name(name)
        fmri = fmri or name_fmri
        property = property or name_prop
        if not fmri:
            raise ValidationError("No service FMRI given for {!r}".format(name))
        if not property:
            raise ValidationError("No property name given for {!r}".format(name))
        return cls(fmri, property)

    def __str__(self):
        return "{}#{}".format(self.fmri, self.property)


class Scalar(NamedTuple):
    """
    Single property value, written as a bare token.
    """

    value: str

    @property
    def values(self) -> Tuple[str, ...]:
        return (self.value,)

    def render(self) -> str:
        return shlex.quote(self.value)


class ValueList(NamedTuple):
    """
    Multi-value property, written as a parenthesised group even when it holds a single value.
    """

    values: Tuple[str, ...]

    def render(self) -> str:
        return "({})".format(" ".join(shlex.quote(value) for value in self.values))


Value = Union[Scalar, ValueList]


def as_value(raw: Union[str, Sequence[str]]) -> Value:
    """
    Wrap a caller-supplied value according to its shape: a string is a scalar, and a list or tuple
    of strings is a multi-value list.
    """
    if isinstance(raw, str):
        return Scalar(raw)
    elif isinstance(raw, (list, tuple)):
        if not all(isinstance(item, str) for item in raw):
            raise ValidationError("Property values must be strings: {!r}".format(raw))
        return ValueList(tuple(raw))
    else:
        raise ValidationError("Property value must be a string or list: {!r}".format(raw))


def render_value(value: Value) -> str:
    """
    Serialise a value for use as the final argument of `svccfg setprop`.
    """
    return value.render()


class PropertyState(NamedTuple):
    """
    Type and values of a property.  A type of `None` means the type should be inherited from the
    current state.
    """

    type: Optional[str]
    values: Tuple[str, ...]


class DesiredProperty(NamedTuple):
    """
    Validated request to set a property to a value.
    """

    target: PropertyTarget
    type: Optional[str]
    value: Value

    @classmethod
    def new(cls, name: str, value: Union[str, Sequence[str], None], type: Optional[str] = None,
            fmri: Optional[str] = None, property: Optional[str] = None) -> "DesiredProperty":
        target = PropertyTarget.from_name(name, fmri, property)
        if value is None:
            raise ValidationError("No value given for {}".format(target))
        if type is not None and type is not False and not isinstance(type, str):
            raise ValidationError("Property type must be a string: {!r}".format(type))
        # An empty or false type means the same as no type.
        return cls(target, type or None, as_value(value))

    @property
    def state(self) -> PropertyState:
        return PropertyState(self.type, self.value.values)


def parse_listprop(target: PropertyTarget, output: str) -> PropertyState:
    """
    Find the target property amongst the lines printed by `svccfg listprop`, each of the form:

        <name> <type> <shell-quoted values...>
    """
    for line in output.splitlines():
        fields = line.split(None, 2)
        if not fields or fields[0] != target.property:
            continue
        type_ = fields[1] if len(fields) > 1 else None
        try:
            values = shlex.split(fields[2]) if len(fields) > 2 else []
        except ValueError as ex:
            raise PropertyParseError("Unable to parse values of {}: {}".format(target, ex)) from ex
        return PropertyState(type_, tuple(values))
    raise PropertyNotFoundError(target)


def get_property(target: PropertyTarget, run: Runner = command) -> PropertyState:
    """
    Look up the current type and values of a service property.
    """
    proc = run([SVCCFG, "-s", target.fmri, "listprop", target.property], output=True)
    current = parse_listprop(target, proc.stdout.decode("utf-8", "replace"))
    LOG.debug("Current service property: %s %r", target, current)
    return current


def set_property(desired: DesiredProperty, current: PropertyState,
                 run: Runner = command) -> Result[str]:
    """
    Update a service property if its type or values differ from the current state.  Without an
    explicit type, the current type is kept.
    """
    type_ = desired.type or current.type
    if not type_:
        raise ValidationError("No type given for {}, and none currently set".format(desired.target))
    if type_ == current.type and desired.value.values == current.values:
        return Result(State.unchanged)
    value = render_value(desired.value)
    LOG.info("setting service property %s to %s: %s", desired.target, type_, value)
    run([SVCCFG, "-s", desired.target.fmri, "setprop", desired.target.property, "=",
         "{}:".format(type_), value])
    return Result(State.success, value)
