#
# Copyright (c) 2025, Brian Frank and Andy Frank
# Licensed under the Academic Free License version 3.0
#

from .Obj import Obj


class Err(Exception, Obj):
    """Base error class"""

    def __init__(self, msg=None, cause=None):
        Exception.__init__(self, msg)
        Obj.__init__(self)
        self._msg = msg
        self._cause = cause

    @classmethod
    def make(cls, msg=None, cause=None):
        """Factory method - creates instance of the calling class"""
        return cls(msg, cause)

    @staticmethod
    def propagate(e):
        """Re-raise `e` as a fatal condition.

        Errs pass through unmodified. Anything else is wrapped in a
        ReflectErr which keeps `e` as its cause.
        """
        if isinstance(e, Err):
            raise e
        raise ReflectErr.make(f"{type(e).__name__}: {e}", e) from e

    def msg(self):
        # Empty string when no message provided, not None
        return self._msg if self._msg is not None else ""

    def cause(self):
        return self._cause

    def to_str(self):
        qname = type(self).__name__
        if self._msg:
            return f"{qname}: {self._msg}"
        return qname

    def trace_to_str(self):
        """Return stack trace as string, including the cause chain"""
        import traceback

        s = self.to_str()

        tb = getattr(self, '__traceback__', None)
        if tb:
            lines = traceback.format_tb(tb)
            s += "\n" + "".join(lines)

        if self._cause:
            if hasattr(self._cause, 'trace_to_str'):
                s += "\n  Caused by: " + self._cause.trace_to_str()
            else:
                lines = traceback.format_exception(type(self._cause), self._cause, self._cause.__traceback__)
                s += "\n  Caused by: " + "".join(lines)

        return s

    def __str__(self):
        return self.to_str()


class ParseErr(Err):
    """Parse error"""

    @staticmethod
    def make_str(type_name, s):
        return ParseErr(f"Invalid {type_name}: '{s}'")


class NullErr(Err):
    """Null error - thrown when None is passed where a value is required"""
    pass


class ArgErr(Err):
    """Argument error"""
    pass


class NameErr(Err):
    """Invalid name error"""
    pass


class ReadonlyErr(Err):
    """Modification of read-only data error"""
    pass


class UnknownTypeErr(Err):
    """Unknown type error"""
    pass


class UnknownSlotErr(Err):
    """Unknown slot error - thrown when none of the candidate names resolve"""

    def __init__(self, msg=None, cause=None, names=None):
        super().__init__(msg, cause)
        self._names = tuple(names) if names is not None else ()

    @staticmethod
    def make_names(kind, names):
        """Create error for a failed lookup of `names` ('Fields', 'Method')"""
        names = tuple(names)
        return UnknownSlotErr(f"{kind} {list(names)} not found", None, names)

    def names(self):
        """Candidate names that were tried"""
        return self._names


class AccessErr(Err):
    """Access error - slot used before it was made accessible"""
    pass


class ReflectErr(Err):
    """Wraps a failure raised by the underlying get, set or invoke"""
    pass
