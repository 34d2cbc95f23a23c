"""
Module inventories: answer whether a module exists in the current tree.

Every inventory implements probe(), which returns an explicit ProbeResult
instead of signalling "not found" through an exception. The three outcomes
are: the module is present, it is absent, or the inventory itself failed to
tell. Only the last one is an error.
"""

__all__ = [
    "PRESENT",
    "ABSENT",
    "FAILED",
    "ProbeResult",
    "Inventory",
    "StaticInventory",
    "LookupInventory",
    "SourceTreeInventory",
]


import abc
import errno
import os.path
import re
import threading
from collections import namedtuple

from modresolve.errors import InventoryProbeFailure

import logging
logger = logging.getLogger(__name__)


PRESENT = 'present'
ABSENT  = 'absent'
FAILED  = 'failed'


class ProbeResult(namedtuple('ProbeResult', 'module_name outcome cause')):
    __slots__ = ()

    def __new__(cls, module_name, outcome, cause=None):
        if outcome not in (PRESENT, ABSENT, FAILED):
            raise ValueError('Unknown probe outcome: %r' % outcome)
        if (outcome == FAILED) != (cause is not None):
            raise ValueError('A cause must be given for failed probes only')
        return super(ProbeResult, cls).__new__(cls, module_name, outcome,
                                               cause)

    @classmethod
    def present(cls, module_name):
        return cls(module_name, PRESENT)

    @classmethod
    def absent(cls, module_name):
        return cls(module_name, ABSENT)

    @classmethod
    def failed(cls, module_name, cause):
        return cls(module_name, FAILED, cause)

    @property
    def exists(self):
        """True or False, or raises InventoryProbeFailure."""
        if self.outcome == FAILED:
            raise InventoryProbeFailure(self.module_name, self.cause)
        return self.outcome == PRESENT


class Inventory(abc.ABC):
    """Abstract inventory of module names."""

    @abc.abstractmethod
    def probe(self, module_name):
        """Returns a ProbeResult. Must not raise for an unknown name."""

    def exists(self, module_name):
        return self.probe(module_name).exists

    def __contains__(self, module_name):
        return self.exists(module_name)


class StaticInventory(Inventory):
    """A fixed set of names. The usual snapshot passed to a resolver."""

    def __init__(self, names=()):
        super(StaticInventory, self).__init__()
        self._names = frozenset(names)

    @classmethod
    def from_descriptors(cls, descriptors):
        return cls(descriptor.name for descriptor in descriptors)

    def probe(self, module_name):
        if module_name in self._names:
            return ProbeResult.present(module_name)
        return ProbeResult.absent(module_name)

    def __iter__(self):
        return iter(sorted(self._names))

    def __len__(self):
        return len(self._names)

    def __repr__(self):
        return '{cls}({names})'.format(cls=type(self).__name__,
                                       names=sorted(self._names))


class LookupInventory(Inventory):
    """Adapts a lookup function that signals "not found" by raising.

    This is the only place where such exceptions get translated: an exception
    of one of the not_found types (whose message matches not_found_message,
    if given) means the module is absent, any other exception means the
    lookup is broken and yields a FAILED probe.

    Results are cached so that repeated probes within a resolution see the
    same answer.

    Args:
        lookup: a callable accepting a module name. Its return value is
            ignored, a module exists as long as the call returns normally.
        not_found: an exception type or a tuple of them.
        not_found_message: optional regex searched in str(exception).
    """

    def __init__(self, lookup, not_found=LookupError, not_found_message=None):
        super(LookupInventory, self).__init__()
        self._lookup = lookup
        self._not_found = not_found
        self._not_found_re = (re.compile(not_found_message)
                              if not_found_message is not None else None)
        self._cache = {}
        self._lock = threading.Lock()

    def _is_not_found(self, error):
        if not isinstance(error, self._not_found):
            return False
        if self._not_found_re is None:
            return True
        return self._not_found_re.search(str(error)) is not None

    def _do_probe(self, module_name):
        try:
            self._lookup(module_name)
        except Exception as e:
            if self._is_not_found(e):
                return ProbeResult.absent(module_name)
            logger.debug("lookup of '%s' failed: %r", module_name, e)
            return ProbeResult.failed(module_name, e)
        else:
            return ProbeResult.present(module_name)

    def probe(self, module_name):
        with self._lock:
            try:
                return self._cache[module_name]
            except KeyError:
                ret = self._cache[module_name] = self._do_probe(module_name)
                return ret


class SourceTreeInventory(Inventory):
    """Looks for module directories under a list of source roots.

    A module named 'Foo' exists when some root contains 'Foo/<filename>' for
    one of the given rules file names. Missing directories and files mean
    absence, any other OS error makes the probe fail.
    """

    def __init__(self, roots, filenames=None):
        super(SourceTreeInventory, self).__init__()
        if isinstance(roots, str):
            roots = [roots]
        if filenames is None:
            from modresolve.loader import loader_filenames
            filenames = loader_filenames()

        self.roots = tuple(roots)
        self.filenames = tuple(filenames)

        self._cache = {}
        self._lock = threading.Lock()

    def _stat_file(self, path):
        try:
            os.stat(path)
        except OSError as e:
            if e.errno in (errno.ENOENT, errno.ENOTDIR):
                return False
            raise
        else:
            return os.path.isfile(path)

    def _do_probe(self, module_name):
        if os.sep in module_name or (os.altsep and os.altsep in module_name):
            return ProbeResult.absent(module_name)

        try:
            for root in self.roots:
                for filename in self.filenames:
                    path = os.path.join(root, module_name, filename)
                    if self._stat_file(path):
                        return ProbeResult.present(module_name)
        except OSError as e:
            logger.debug("probing '%s' failed: %s", module_name, e)
            return ProbeResult.failed(module_name, e)

        return ProbeResult.absent(module_name)

    def probe(self, module_name):
        with self._lock:
            try:
                return self._cache[module_name]
            except KeyError:
                ret = self._cache[module_name] = self._do_probe(module_name)
                return ret

    def __repr__(self):
        return '{cls}({roots})'.format(cls=type(self).__name__,
                                       roots=list(self.roots))
