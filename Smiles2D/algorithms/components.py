# -*- coding: utf-8 -*-
#
#  Copyright 2026 Smiles2D contributors
#  This file is part of Smiles2D.
#
#  Smiles2D is free software; you can redistribute it and/or modify
#  it under the terms of the GNU Lesser General Public License as published by
#  the Free Software Foundation; either version 3 of the License, or
#  (at your option) any later version.
#
#  This program is distributed in the hope that it will be useful,
#  but WITHOUT ANY WARRANTY; without even the implied warranty of
#  MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  GNU Lesser General Public License for more details.
#
#  You should have received a copy of the GNU Lesser General Public License
#  along with this program; if not, see <https://www.gnu.org/licenses/>.
#
from CachedMethods import cached_property
from collections import deque
from typing import Dict, Set, Tuple


class GraphComponents:
    __slots__ = ()

    @cached_property
    def connected_components(self) -> Tuple[Tuple[int, ...], ...]:
        """
        Isolated components of single graph. E.g. salts as ion pair.
        """
        if not self._atoms:
            return ()
        return tuple(tuple(x) for x in self._connected_components(self._adjacency))

    @staticmethod
    def _connected_components(bonds: Dict[int, Dict[int, int]]):
        atoms = set(bonds)
        components = []
        while atoms:
            start = min(atoms)
            seen = {start}
            queue = deque([start])
            order = []
            while queue:
                current = queue.popleft()
                order.append(current)
                for i in bonds[current]:
                    if i not in seen:
                        queue.append(i)
                        seen.add(i)
            components.append(sorted(order))
            atoms.difference_update(seen)
        return components

    @cached_property
    def connected_components_count(self) -> int:
        return len(self.connected_components)

    @cached_property
    def rings_count(self) -> int:
        """
        Cyclomatic number: count of independent cycles.
        """
        return self.edges_count - self.atoms_count + self.connected_components_count

    @cached_property
    def terminal_atoms(self) -> Tuple[int, ...]:
        return tuple(n for n, ms in self._adjacency.items() if len(ms) == 1)

    def _branch(self, n: int, exclude: int) -> Set[int]:
        """
        Atoms reachable from n without passing through exclude atom. n included.
        """
        adjacency = self._adjacency
        seen = {n, exclude}
        stack = [n]
        while stack:
            current = stack.pop()
            for m in adjacency[current]:
                if m not in seen:
                    seen.add(m)
                    stack.append(m)
        seen.discard(exclude)
        return seen


__all__ = ['GraphComponents']
