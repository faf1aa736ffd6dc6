"""
Helpers for converting methods into scripts, and filling in arguments from the command line.
"""

from functools import wraps
from inspect import cleandoc, signature
import logging
import sys
from typing import Any, Callable, Dict, List, Optional, Union

from docopt import docopt

from ..plumbing.common import CommandError
from ..plumbing.smf import PropertyNotFoundError, PropertyParseError, ValidationError


DocOptArgs = Dict[str, Union[bool, str, List[str], None]]


ENTRYPOINTS: List[str] = []


def _lookup(opts: DocOptArgs, name: str) -> Any:
    # Trailing underscores avoid shadowing builtins, e.g. `list_` for `--list`.
    name = name.rstrip("_")
    for key in (name.upper(), "<{}>".format(name), "--{}".format(name.replace("_", "-"))):
        if key in opts:
            return opts[key]
    raise RuntimeError("Missing argument {!r}".format(name))


def entrypoint(fn: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator to make an entrypoint out of a generic function.

    This uses `docopt` to parse arguments according to the method docstring, and will be formatted
    with `{script}` set to the script name.  At minimum, it should contain `Usage: {script}`.

    Functions may optionally accept arguments, which are filled in by name from the parsed
    options (either in upper case, surrounded by arrow brackets, or as a long option, e.g. `NAME`,
    `<name>` or `--name`).  A parameter annotated as `DocOptArgs` receives the full `dict` of input
    parameters parsed from the usage line.

    An example function:

        @entrypoint
        def show(opts: DocOptArgs, name: str, fmri: Optional[str]):
            \"""
            Print a property.

            Usage: {script} NAME [--fmri=FMRI]
            \"""

    Failures from the property plumbing are printed, and the script exits with a non-zero status.
    """
    label = "smflib-{}-{}".format(fn.__module__.rsplit(".", 1)[-1],
                                  fn.__qualname__).replace("_", "-")

    @wraps(fn)
    def wrap(opts: Optional[DocOptArgs] = None):
        extra: Dict[str, Any] = {}
        script = "{} [--debug]".format(label)
        if opts is None:
            doc = cleandoc(fn.__doc__.format(script=script))
            opts = docopt(doc)
        if opts.pop("--debug", False):
            logging.basicConfig(level=logging.DEBUG)
        else:
            logging.basicConfig(level=logging.INFO, format="%(message)s")
        for param in signature(fn).parameters.values():
            if param.annotation is DocOptArgs:
                extra[param.name] = opts
            else:
                extra[param.name] = _lookup(opts, param.name)
        try:
            return fn(**extra)
        except PropertyNotFoundError as ex:
            error(str(ex), exit=2)
        except (CommandError, PropertyParseError, ValidationError) as ex:
            error(str(ex), exit=1)
    wrap.__doc__ = wrap.__doc__.format(script=label)
    # Create a console script line for setup.
    target = "{}:{}".format(fn.__module__, fn.__qualname__)
    ENTRYPOINTS.append("{}={}".format(label, target))
    return wrap


def confirm(msg: str = "Are you sure?"):
    """
    Prompt for confirmation before making changes.
    """
    try:
        yn = input("\033[96m{} [yN]\033[0m ".format(msg))
    except (KeyboardInterrupt, EOFError):
        print()
        yn = "n"
    if yn.lower() not in ("y", "yes"):
        error("Aborted!", exit=1)


def error(msg: Optional[str] = None, *, exit: Optional[int] = None, colour: Optional[str] = None):
    """
    Print an error message and/or exit.
    """
    if msg:
        colour = colour or ("1" if exit else "3")
        print("\033[9{}m{}\033[0m".format(colour, msg), file=sys.stderr)
    if exit is not None:
        sys.exit(exit)
