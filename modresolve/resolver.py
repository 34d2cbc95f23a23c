"""
Resolver: ties descriptors, a target environment and an inventory together
into a BuildPlan.
"""

__all__ = [
    "descriptor_map",
    "Resolver",
    "resolve",
]


from modresolve.core import TargetEnvironment
from modresolve.errors import DescriptorError
from modresolve.errors import UnknownModuleReference
from modresolve.evaluator import evaluate_all
from modresolve.graph import GraphBuilder
from modresolve.plan import BuildPlan

from modresolve import util
logger = util.get_extended_logger(__name__)


def descriptor_map(descriptors):
    """Returns {name: descriptor}, rejecting duplicate names."""
    if hasattr(descriptors, 'values'):
        descriptors = descriptors.values()

    ret = {}
    for descriptor in descriptors:
        prev = ret.setdefault(descriptor.name, descriptor)
        if prev is not descriptor:
            where = [d.location for d in (prev, descriptor)
                     if d.location is not None]
            raise DescriptorError("Module '%s' is declared more than once%s",
                                  descriptor.name,
                                  ': %s' % ', '.join(map(_format_location,
                                                         where))
                                  if where else '')
    return ret

def _format_location(location):
    return '%s:%s' % tuple(location)


class Resolver(object):
    """Resolves requested modules against a fixed set of descriptors.

    Args:
        descriptors: an iterable of ModuleDescriptor or a {name: descriptor}
            mapping.
        jobs (int): number of worker threads used to evaluate descriptors,
            None or 1 to evaluate everything in the calling thread.
    """

    def __init__(self, descriptors, jobs=None):
        super(Resolver, self).__init__()
        self._descriptors = descriptor_map(descriptors)
        self.jobs = jobs

    @property
    def descriptors(self):
        return dict(self._descriptors)

    def evaluate_closure(self, requested, target, inventory):
        """Evaluates requested modules and everything they depend on.

        Descriptors are evaluated in waves: each wave holds modules first
        referenced by the previous one, so the modules of a wave can be
        evaluated independently of each other.

        Returns a {name: ResolvedModule} dict.
        """
        descriptors = self._descriptors
        resolved = {}

        for name in requested:
            if name not in descriptors:
                raise UnknownModuleReference(None, name)

        wave = sorted(set(requested))
        wave_no = 0
        while wave:
            logger.debug("wave %d: %s", wave_no, wave)
            for module in evaluate_all((descriptors[name] for name in wave),
                                       target, inventory, jobs=self.jobs):
                resolved[module.name] = module

            next_wave = set()
            for name in wave:
                for dep in sorted(resolved[name].dependencies):
                    if dep in resolved or dep in next_wave:
                        continue
                    if dep not in descriptors:
                        raise UnknownModuleReference(name, dep)
                    next_wave.add(dep)

            wave = sorted(next_wave)
            wave_no += 1

        return resolved

    @logger.traced
    def resolve(self, requested, target, inventory):
        """Returns a BuildPlan, or raises ConfigError.

        Args:
            requested: a module name or an iterable of them.
            target (TargetEnvironment): build parameters.
            inventory: anything having exists(name) or, preferably,
                probe(name) methods, see modresolve.inventory.
        """
        if isinstance(requested, str):
            requested = [requested]
        requested = list(requested)
        if not isinstance(target, TargetEnvironment):
            raise TypeError('Expected a TargetEnvironment, got %r' % (target,))

        logger.debug("resolving %s for %r", requested, target)

        resolved = self.evaluate_closure(requested, target, inventory)
        graph = GraphBuilder(resolved).build(requested)
        plan = BuildPlan.from_graph(graph)

        logger.dump(plan)
        return plan


def resolve(requested, target, inventory, descriptors, jobs=None):
    return Resolver(descriptors, jobs=jobs).resolve(requested, target,
                                                    inventory)
