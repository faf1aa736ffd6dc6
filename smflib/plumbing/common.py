"""
Shared helper methods and base classes.
"""

from enum import Enum
from functools import wraps
import inspect
import logging
import subprocess
from typing import Any, Callable, Generator, Generic, Iterable, List, Optional, TypeVar, Union


LOG = logging.getLogger(__name__)

T = TypeVar("T")

Collect = Generator["Result[Any]", None, T]
"""
Generic type for the return value of functions using `Result.collect`.
"""

Runner = Callable[..., "subprocess.CompletedProcess[bytes]"]
"""
Callable type matching `command`, accepted by plumbing functions so that tests can substitute their
own process execution.
"""


class Unset:
    """
    Constructor of generic default values for optional but nullable parameters.
    """

    def __repr__(self):
        return "UNSET"


UNSET = Unset()
"""
Global generic default value.
"""


class CommandError(Exception):
    """
    An external command exited with a non-zero status, or could not be started at all (in which
    case `returncode` is `None`).
    """

    def __init__(self, args: List[str], returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(args, returncode, stderr)
        self.args_ = list(args)
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self):
        if self.returncode is None:
            msg = "Command {!r} could not be run".format(self.args_)
        else:
            msg = "Command {!r} returned exit status {}".format(self.args_, self.returncode)
        if self.stderr:
            msg = "{}: {}".format(msg, self.stderr.strip())
        return msg


class State(Enum):
    """
    Enumeration used by `Result` to declare whether the action happened.
    """

    unchanged = 0
    """
    No action required, the request and current state are consistent.
    """
    success = 1
    """
    The action was completed without issues.
    """

    def __bool__(self):
        return bool(self.value)


class Result(Generic[T]):
    """
    State and optional accompanying value from a unit of work.

    For a simple plumbing action, just create a new result directly with the resulting `State` and
    a value if relevant:

        def unit():
            # Call an external command etc.
            return Result(State.success, True)

    For a task that combines multiple results, see `Result.collect`.  The state of such a result is
    based on all of its parts -- if any changes were made, the outer result also reports a change.

    A result can be checked for truthiness, which is `False` if no changes were made.

    A result can also be converted to a string, which produces a tree-like summary of changes:

        module:task success True
            module:unit1 unchanged
            module:unit2 success
    """

    @classmethod
    def collect(cls, fn: Callable[..., Collect[T]]) -> Callable[..., "Result[T]"]:
        """
        Decorator: build a `Result` from multiple sub-tasks:

            def plumb_b() -> Result[str]: ...

            @Result.collect
            def task() -> Collect[str]:
                yield plumb_a()
                result = yield from plumb_b()
                if result:
                    yield plumb_c()
                return result.value

        The inner function this decorator wraps should be a generator of `Result` objects.

        The return value of the wrapper function will be a new `Result` object, whose `parts` will
        be those collected sub-task results, and whose `value` will be set to the return value of
        the inner function (i.e. the example above will return a `Result[str]`).
        """
        @wraps(fn)
        def inner(*args: Any, **kwargs: Any) -> Result[T]:
            value: Union[T, Unset] = UNSET
            parts: List[Result[Any]] = []
            gen = fn(*args, **kwargs)
            try:
                while True:
                    result = next(gen)
                    parts.append(result)
            except StopIteration as ex:
                if ex.value is not None:
                    value = ex.value
            return cls(None, value, parts, fn)
        return inner

    def __init__(self, state: Optional[State] = None, value: Union[T, Unset] = UNSET,
                 parts: Iterable["Result[Any]"] = (), caller: Optional[Callable[..., Any]] = None):
        self._state = state
        self._value = value
        self.parts = tuple(parts)
        self.caller = "<unknown>"
        # Inspection magic to log the calling method, e.g. `module.sub:Class.method`.
        name = None
        if not caller:
            frame = inspect.currentframe()
            try:
                name = frame.f_back.f_code.co_name
                caller = frame.f_back.f_globals[name]
            except (AttributeError, KeyError):
                pass
        if caller:
            self.caller = "{}:{}".format(caller.__module__, caller.__qualname__)
        elif name:
            self.caller = name

    @property
    def state(self) -> State:
        """
        Modification state of the unit of work.

        This may be given on construction, computed from `parts`, or defaulted to `State.unchanged`.
        """
        if self._state:
            return self._state
        elif any(self.parts):
            return State.success
        else:
            return State.unchanged

    @property
    def value(self) -> T:
        """
        Return value produced by the unit of work.

        Accessing this attribute will raise `ValueError` if no value has been set.
        """
        if isinstance(self._value, Unset):
            raise ValueError("No value set")
        return self._value

    def __bool__(self) -> bool:
        return bool(self.state)

    def __iter__(self) -> Generator["Result[T]", None, "Result[T]"]:
        # Syntactic sugar used by `yield from` expressions in `Result.collect()`.
        yield self
        return self

    def __repr__(self) -> str:
        params = [str(self.state)]
        if not isinstance(self._value, Unset):
            params.append(repr(self._value))
        if self.parts:
            params.append("<{} parts>".format(len(self.parts)))
        return "{}({})".format(self.__class__.__name__, ", ".join(params))

    def __str__(self) -> str:
        tree = "{}: {}".format(self.caller, self.state.name)
        if not isinstance(self._value, Unset):
            tree = "{} {!r}".format(tree, self._value)
        if self.parts:
            for result in self.parts:
                tree += "\n    {}".format(str(result).replace("\n", "\n    "))
        return tree


def command(args: List[str], input_: Optional[str] = None,
            output: bool = False) -> "subprocess.CompletedProcess[bytes]":
    """
    Create a subprocess to execute an external command.

    Standard error is always captured, and included in the `CommandError` raised on failure.
    """
    if input_:
        LOG.debug("Exec: %r <<< %r", args, input_)
    else:
        LOG.debug("Exec: %r", args)
    try:
        return subprocess.run(args, input=input_.encode("utf-8") if input_ else None,
                              stdout=subprocess.PIPE if output else None,
                              stderr=subprocess.PIPE, check=True)
    except subprocess.CalledProcessError as ex:
        stderr = (ex.stderr or b"").decode("utf-8", "replace")
        raise CommandError(args, ex.returncode, stderr) from ex
    except OSError as ex:
        raise CommandError(args, None, str(ex)) from ex
