"""
Exceptions for error handling.
"""

__all__ = [
    "ModresolveError",
    "DescriptorError",
    "ConfigError",
    "UnknownModuleReference",
    "CyclicDependency",
    "InventoryProbeFailure",
]


class ModresolveError(Exception):
    """Base class for errors providing a logging-like constructor."""

    def __init__(self, msg='', *args, **kwargs):
        if not isinstance(msg, str):
            raise TypeError("'msg' argument must be a string")
        if args and kwargs:
            raise TypeError('At most one of args or kwargs can be specified '
                            'at once, not both of them')

        super(ModresolveError, self).__init__(msg, args or kwargs or None)

    def __str__(self):
        msg, fmt_args = self.args
        return msg % fmt_args if fmt_args else msg

    def __repr__(self):
        msg, fmt_args = self.args
        type_name = type(self).__name__

        if not fmt_args:
            return '%s(%r)' % (type_name, msg)

        return '%s(%r, %s%r)' % (type_name, msg,
                                 '**' if isinstance(fmt_args, dict) else '*',
                                 fmt_args)


class DescriptorError(ModresolveError, ValueError):
    """Malformed module declaration."""


class ConfigError(ModresolveError):
    """
    Fatal error of a resolution pass. No partial plan is ever produced once
    one of these is raised.
    """


class UnknownModuleReference(ConfigError):

    def __init__(self, referencing_module, missing_name):
        if referencing_module is None:
            super(UnknownModuleReference, self).__init__(
                "requested module '%s' is not declared", missing_name)
        else:
            super(UnknownModuleReference, self).__init__(
                "module '%s' depends on undeclared module '%s'",
                referencing_module, missing_name)

        self.referencing_module = referencing_module
        self.missing_name = missing_name


class CyclicDependency(ConfigError):

    def __init__(self, cycle_path):
        cycle_path = tuple(cycle_path)
        super(CyclicDependency, self).__init__(
            "dependency cycle: %s", ' -> '.join(cycle_path))

        self.cycle_path = cycle_path


class InventoryProbeFailure(ConfigError):
    """
    The inventory could not tell whether a module exists. This is never the
    same thing as "the module does not exist".
    """

    def __init__(self, module_name, cause):
        super(InventoryProbeFailure, self).__init__(
            "failed to probe for module '%s': %s", module_name, cause)

        self.module_name = module_name
        self.cause = cause
