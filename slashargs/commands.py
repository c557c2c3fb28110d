"""
slashargs command layer: select, bind and invoke an action.

What this module provides
- dispatch(target, argv, messenger): one complete run over a target; returns
  an outcome instead of raising for user-input or metadata problems.
- run(...): the process boundary; infers the target and argv when omitted
  and exits with status 1 on a failed outcome.
- Success / ValidationFailed: the two outcomes of a dispatch.

Flow
    start ─ validate metadata ─┬─ help requested ──────────────── usage, Success
                               └─ select action ─ bind ─ invoke ─ Success
    any binder fault ─ message (and usage where useful) ─ ValidationFailed
    any error raised by the action itself ─ propagates unchanged

Help requests
- empty argv, or a first token among /?, /help, /h.
- "help" alone, for multi-command targets.
- "help <action>": usage of that action only.

Quick start
    from slashargs import action, Optional, run

    @action
    def greet(name, times: int = Optional(1, "n", descr="repetitions")):
        for _ in range(times):
            print("hello", name)

    if __name__ == "__main__":
        run()   # python greet.py world /n:3
"""
import inspect
import os.path
import shlex
import sys
from collections.abc import Iterable
from typing import NamedTuple

from .actions import Registry
from .binder import bind
from .faults import *
from .messengers import Messenger, ConsoleMessenger
from .usage import describe, overview
from .utils import *
from .validators import validate

HELP_MARKERS = ("/?", "/help", "/h")
HELP_COMMAND = "help"

FAILURE_STATUS = 1


class Success(NamedTuple):
    """
    The action was invoked, or help was printed.
    """
    status: int = 0

    @property
    def ok(self):
        return True


class ValidationFailed(NamedTuple):
    """
    Metadata or input was rejected; nothing was invoked.

    Fields
    - fault: the BinderException describing the rejection.
    - status: process exit status to report (1).
    """
    fault: BinderException
    status: int = FAILURE_STATUS

    @property
    def ok(self):
        return False

    @property
    def message(self):
        return str(self.fault)


def _sanitize_argv(argv):
    """
    Normalize argv into a list of strings.

    - str: split with shell rules (shlex.split).
    - Iterable[str]: used as-is, item by item.
    """
    if isinstance(argv, str):
        return shlex.split(argv)
    if not isinstance(argv, Iterable):
        raise TypeError("dispatch() argv must be a string or an iterable of strings")
    args = list(argv)
    for arg in args:
        if not isinstance(arg, str):
            raise TypeError("dispatch() argv must be a string or an iterable of strings")
    return args


class Dispatcher:
    """
    One dispatch over one target: owns the registry, the tokens and the sink.

    The registry and every descriptor are built fresh on each call, so a
    target may be dispatched repeatedly (but not concurrently). Discovery runs
    inside the fault boundary: a malformed declaration is reported like any
    other metadata fault.
    """

    def __init__(self, target, args, messenger, /, *, prog=Unset):
        self._target = target
        self._registry = Unset
        self._args = args
        self._messenger = messenger
        self._prog = prog

    @property
    def target(self):
        return self._target

    @property
    def registry(self):
        """
        Registry of the last call (Unset before the first one).
        """
        return self._registry

    @property
    def prog(self):
        """
        Program name shown in usage: explicit prog, then __main__.__prog__,
        then the lower-cased target name.
        """
        if self._prog is not Unset:
            return self._prog
        return getattr(__import__("__main__"), "__prog__", self._registry.name.lower())

    def _emit(self, lines):
        for line in lines:
            self._messenger.write(line)

    def _usage(self, action=Unset):
        if action is not Unset:
            return self._emit(describe(action, self.prog, multi=self._registry.multi))
        if self._registry.multi:
            return self._emit(overview(self._registry, self.prog))
        return self._emit(describe(self._registry[0], self.prog))

    def _requested_help(self):
        """
        Return the action whose usage was requested, None for the whole
        registry, or Unset when this is not a help request.
        """
        args = self._args
        if not args or args[0] in HELP_MARKERS:
            return None
        if args[0] != HELP_COMMAND:
            return Unset
        if len(args) == 1:
            return None if self._registry.multi else Unset
        if (action := self._registry.find(args[1])) is not None:
            return action
        if self._registry.multi:
            self._usage()
            raise UnknownActionError('Unknown option "%s"' % args[1], token=args[1])
        return Unset

    def _select(self):
        if not self._registry.multi:
            return self._registry[0]
        if (action := self._registry.find(self._args[0])) is not None:
            return action
        self._usage()
        raise UnknownActionError(
            'Unknown option "%s"' % self._args[0],
            token=self._args[0],
            hint="run '%s help' to list the available subcommands" % self.prog,
        )

    def __call__(self):
        """
        Run the state machine; return an outcome, or let an action error through.
        """
        try:
            self._registry = Registry(self._target)
            validate(self._registry)
            if (requested := self._requested_help()) is not Unset:
                self._usage(Unset if requested is None else requested)
                return Success()
            action = self._select()
            values = bind(action, self._args, offset=self._registry.offset)
        except MissingRequiredError as fault:
            self._usage(fault.options["action"])
            self._messenger.write("Error: %s" % fault)
            return ValidationFailed(fault)
        except BinderException as fault:
            self._messenger.write(str(fault))
            return ValidationFailed(fault)

        action(values)
        return Success()


def dispatch(target, argv, messenger=Unset, /, *, prog=Unset):
    """
    Select, bind and invoke an action of `target`.

    Parameters
    - target: class, instance or module declaring @action members.
    - argv: Iterable[str] of arguments (program path excluded), or a str
      split with shell rules.
    - messenger: Messenger receiving every usage and failure line; defaults
      to a ConsoleMessenger on stdout.
    - prog: program name for usage lines.

    Returns
    - Success() when the action ran or help was printed.
    - ValidationFailed(fault) when metadata or input was rejected; the
      failure message has already been written to the messenger. Only the
      one-line message is written: hints and suggestions stay on
      fault.options, and the fault itself renders through rich.

    Raises
    - whatever the invoked action raises, unchanged.
    - TypeError for a malformed argv or messenger.
    """
    args = _sanitize_argv(argv)
    if messenger is Unset:
        messenger = ConsoleMessenger()
    elif not isinstance(messenger, Messenger) or not callable(messenger.write):
        raise TypeError("dispatch() messenger must provide a write() method")
    if not isinstance(prog, str | Unset):
        raise TypeError("dispatch() 'prog' must be a string")
    return Dispatcher(target, args, messenger, prog=prog)()


def run(target=Unset, argv=Unset, messenger=Unset, /, *, prog=Unset):
    """
    Process entry point.

    - target: defaults to the caller's module.
    - argv: defaults to sys.argv[1:]; the program name then defaults to the
      script name in sys.argv[0].
    - on a failed outcome, exits the process with its status (1).
    """
    if target is Unset:
        target = sys.modules[inspect.currentframe().f_back.f_globals["__name__"]]
    if argv is Unset:
        argv = sys.argv[1:]
        if prog is Unset and sys.argv and sys.argv[0]:
            prog = os.path.splitext(os.path.basename(sys.argv[0]))[0]
    outcome = dispatch(target, argv, messenger, prog=prog)
    if not outcome.ok:
        sys.exit(outcome.status)
    return outcome


__all__ = (
    "Success",
    "ValidationFailed",
    "Dispatcher",
    "dispatch",
    "run",
)
