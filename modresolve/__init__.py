"""Build configuration resolver for modular applications.

A modular application consists of named modules, each declaring its public
and private dependencies along with a set of rules depending on the build
environment: dependencies used in editor builds only, features compiled in
with developer tools, features enabled when an optional module is present.
Given a set of requested modules and a target environment, these
declarations are resolved into a build plan: a topologically ordered list of
modules, their dependency edges and compile definitions.

Here is a high-level overview of modules of the `modresolve` package:

  * `modresolve.core`: Defines module descriptors, rules and the target
    environment.

  * `modresolve.inventory`: Tells whether a module exists, strictly
    separating "absent" from "failed to tell".

  * `modresolve.evaluator`: Applies rules of a single descriptor.

  * `modresolve.graph`: Validates the dependency graph and sorts it.

  * `modresolve.resolver`: Puts it all together and produces a
    `modresolve.plan.BuildPlan`.

  * `modresolve.loader`: Reads descriptors from Modrules and YAML files.
"""

__license__ = "MIT"
__version__ = "0.1"


from modresolve.core import *
from modresolve.errors import *
from modresolve.inventory import Inventory
from modresolve.inventory import LookupInventory
from modresolve.inventory import SourceTreeInventory
from modresolve.inventory import StaticInventory
from modresolve.plan import BuildPlan
from modresolve.resolver import Resolver
from modresolve.resolver import resolve
