"""
Dependency sorter for declarations.

Runtime codecs are `const` bindings and cannot reference a name that is
defined later in the file, so every declaration must come after the
declarations it references. Static aliases have no such restriction but
follow the same order.

Ordering uses Kahn's algorithm over the reference graph. Ready
declarations are released in input order. Recursive schemas form
cycles, found with Tarjan's algorithm; when Kahn's algorithm stalls,
the lowest-named declaration of a cycle whose outside dependencies are
all emitted is released first. Forward references inside a cycle remain
in the runtime output.
"""

from __future__ import annotations

import heapq
import logging
from collections import defaultdict
from dataclasses import dataclass, field

from .ir_nodes import Declaration

logger = logging.getLogger(__name__)


@dataclass
class SortResult:
    """Ordered declarations plus the reference cycles found among them."""

    declarations: list[Declaration] = field(default_factory=list)

    # Each cycle lists its members sorted by name
    cycles: list[list[str]] = field(default_factory=list)


class DependencySorter:
    """Orders declarations so that referenced names are defined first."""

    def sort(self, declarations: list[Declaration]) -> SortResult:
        """
        Sort declarations in dependency order.

        Args:
            declarations: Declarations in document order, with unique names

        Returns:
            SortResult with a total order and the detected cycles
        """
        position = {d.name: i for i, d in enumerate(declarations)}
        by_name = {d.name: d for d in declarations}

        # A -> B for every declared B referenced by A; names outside the set are ignored
        graph: dict[str, list[str]] = {}
        self_referencing = set()
        for declaration in declarations:
            refs = [n for n in declaration.referenced_names() if n in position]
            if declaration.name in refs:
                self_referencing.add(declaration.name)
            graph[declaration.name] = refs

        components = self._strongly_connected_components(list(position), graph)
        component_of = {}
        for i, component in enumerate(components):
            for name in component:
                component_of[name] = i

        cycles = sorted(
            (sorted(c) for c in components if len(c) > 1 or c[0] in self_referencing),
            key=lambda c: c[0],
        )

        # Self-references do not constrain the order
        dependencies = {name: {n for n in refs if n != name} for name, refs in graph.items()}
        pending = {name: len(deps) for name, deps in dependencies.items()}
        dependents: dict[str, list[str]] = defaultdict(list)
        for name, deps in dependencies.items():
            for dep in deps:
                dependents[dep].append(name)

        ready = [(position[name], name) for name, count in pending.items() if count == 0]
        heapq.heapify(ready)
        emitted: list[str] = []
        done: set[str] = set()

        def release(name: str) -> None:
            done.add(name)
            emitted.append(name)
            for dependent in dependents[name]:
                pending[dependent] -= 1
                if pending[dependent] == 0 and dependent not in done:
                    heapq.heappush(ready, (position[dependent], dependent))

        while len(emitted) < len(declarations):
            if ready:
                _, name = heapq.heappop(ready)
                if name not in done:
                    release(name)
                continue

            name = self._break_cycle(dependencies, component_of, done)
            logger.debug("Breaking reference cycle at %r", name)
            release(name)

        return SortResult(declarations=[by_name[name] for name in emitted], cycles=cycles)

    def _break_cycle(
        self,
        dependencies: dict[str, set[str]],
        component_of: dict[str, int],
        done: set[str],
    ) -> str:
        """Pick the lowest-named declaration of a cycle that can start now.

        A candidate only waits on members of its own cycle. When the
        ready queue is empty such a candidate always exists: the remaining
        graph has a source component, and it must be a cycle.
        """
        candidates = [
            name
            for name, deps in dependencies.items()
            if name not in done and all(dep in done or component_of[dep] == component_of[name] for dep in deps)
        ]
        return min(candidates)

    def _strongly_connected_components(self, names: list[str], graph: dict[str, list[str]]) -> list[list[str]]:
        """Tarjan's algorithm, iterative to stay clear of the recursion limit."""
        index_counter = 0
        indices: dict[str, int] = {}
        lowlink: dict[str, int] = {}
        stack: list[str] = []
        on_stack: set[str] = set()
        components: list[list[str]] = []

        for root in names:
            if root in indices:
                continue

            indices[root] = lowlink[root] = index_counter
            index_counter += 1
            stack.append(root)
            on_stack.add(root)
            work = [(root, iter(graph[root]))]

            while work:
                node, successors = work[-1]
                advanced = False
                for succ in successors:
                    if succ not in indices:
                        indices[succ] = lowlink[succ] = index_counter
                        index_counter += 1
                        stack.append(succ)
                        on_stack.add(succ)
                        work.append((succ, iter(graph[succ])))
                        advanced = True
                        break
                    if succ in on_stack:
                        lowlink[node] = min(lowlink[node], indices[succ])
                if advanced:
                    continue

                work.pop()
                if work:
                    parent = work[-1][0]
                    lowlink[parent] = min(lowlink[parent], lowlink[node])

                if lowlink[node] == indices[node]:
                    component = []
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        component.append(member)
                        if member == node:
                            break
                    components.append(component)

        return components
