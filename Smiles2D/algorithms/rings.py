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
from collections import defaultdict, deque
from itertools import combinations
from logging import info
from typing import Dict, FrozenSet, List, Optional, Set, Tuple
from ..containers.ring import Ring


def _cycle_order(edges: Set[FrozenSet[int]]) -> Optional[List[int]]:
    """
    ordered atoms of simple cycle given as set of edges. None if edges don't form single simple cycle.
    """
    if len(edges) < 3:
        return
    graph = defaultdict(list)
    for n, m in edges:
        graph[n].append(m)
        graph[m].append(n)
    if any(len(x) != 2 for x in graph.values()):
        return
    start = min(graph)
    order = [start]
    previous, current = start, min(graph[start])
    while current != start:
        order.append(current)
        n, m = graph[current]
        previous, current = current, (m if n == previous else n)
    if len(order) != len(graph):  # few disjoint cycles
        return
    return order


def _cycle_edges(members) -> Set[FrozenSet[int]]:
    return {frozenset(x) for x in zip(members, members[1:] + members[:1])}


class RingsResolver:
    __slots__ = ()

    def resolve_rings(self):
        """
        Perceive rings and collapse bridged systems into single drawable rings.

        Fundamental cycles of BFS spanning tree are reduced to the shortest ones by GF(2) sum of cycles pairs.
        Bridged system atoms keep backup of true rings partition, see Atom.restore_rings.
        """
        if self._resolved:
            return
        atoms = self._atoms
        rings = self._rings
        rings.clear()

        parents, depth, chords = self.__spanning_forest()
        cycles = [_cycle_edges(self.__tree_path(n, m, parents, depth)) for n, m in chords]

        cycles = self.__reduce_cycles(cycles)
        closure_edges = {x[3] for x in self._closures}
        for i, edges in enumerate(cycles):
            members = _cycle_order(edges)
            rings[i] = Ring(i, members, (e for e in (self._adjacency[n][m] for n, m in edges) if e in closure_edges))

        for atom in atoms.values():  # ring closures consumed
            atom.clear_ringbonds()
            atom.rings = []
            atom.original_rings = []
            atom.bridged_ring = None
            atom.is_bridge = atom.is_bridge_node = False
        for ring in rings.values():
            for n in ring.members:
                atoms[n].rings.append(ring.id)

        self.__set_connections()
        self.__set_aromaticity()
        self.__collapse_bridged()

        for n, atom in atoms.items():
            if not atom.rings:
                atom.is_connected_to_ring = any(atoms[m].rings for m in self._adjacency[n])
        self._resolved = True
        self.__dict__.clear()

    @property
    def ring_connections(self) -> Dict[int, Dict[int, Tuple[int, ...]]]:
        """
        rings sharing atoms: ring id -> neighbor ring id -> shared atoms
        """
        return self._ring_connections

    def are_in_same_ring(self, n: int, m: int) -> bool:
        """
        atoms are members of one ring. bridged systems count as single ring while collapsed.
        """
        return not set(self._atoms[n].rings).isdisjoint(self._atoms[m].rings)

    def edge_ring_count(self, n: int, m: int) -> int:
        """
        count of rings containing bond n-m
        """
        bond = frozenset((n, m))
        return sum(bond in r.edges for r in self._rings.values() if not r.is_bridged)

    def is_ring_edge(self, n: int, m: int) -> bool:
        bond = frozenset((n, m))
        return any(bond in r.edges for r in self._rings.values() if not r.is_bridged)

    def __spanning_forest(self) -> Tuple[Dict[int, Optional[int]], Dict[int, int], List[Tuple[int, int]]]:
        """
        BFS trees of all components and bonds out of trees. each such bond closes one fundamental cycle.
        """
        adjacency = self._adjacency
        parents = {}
        depth = {}
        chords = []
        for n in adjacency:
            if n in parents:
                continue
            parents[n] = None
            depth[n] = 0
            queue = deque([n])
            while queue:
                current = queue.popleft()
                for m in adjacency[current]:
                    if m not in parents:
                        parents[m] = current
                        depth[m] = depth[current] + 1
                        queue.append(m)
                    elif m != parents[current] and current < m and parents[m] != current:
                        chords.append((current, m))
        chords.sort(key=lambda x: adjacency[x[0]][x[1]])
        return parents, depth, chords

    @staticmethod
    def __tree_path(n: int, m: int, parents, depth) -> List[int]:
        left = [n]
        right = [m]
        dn, dm = depth[n], depth[m]
        while dn > dm:
            left.append(parents[left[-1]])
            dn -= 1
        while dm > dn:
            right.append(parents[right[-1]])
            dm -= 1
        while left[-1] != right[-1]:
            left.append(parents[left[-1]])
            right.append(parents[right[-1]])
        right.pop()  # common ancestor
        return left + right[::-1]

    @staticmethod
    def __reduce_cycles(cycles: List[Set[FrozenSet[int]]]) -> List[Set[FrozenSet[int]]]:
        # replace larger cycle by shorter simple cycle from sum of pair. sum keeps basis independent
        changed = True
        while changed:
            changed = False
            for i, j in combinations(range(len(cycles)), 2):
                ci, cj = cycles[i], cycles[j]
                if ci.isdisjoint(cj):
                    continue
                big = i if len(ci) >= len(cj) else j
                ring = ci ^ cj
                if len(ring) < len(cycles[big]) and _cycle_order(ring):
                    cycles[big] = ring
                    changed = True
                    break
        return cycles

    def __set_connections(self):
        rings = self._rings
        connections = self._ring_connections = {x: {} for x in rings}
        for a, b in combinations(rings.values(), 2):
            shared = set(a.members).intersection(b.members)
            if not shared:
                continue
            shared = tuple(sorted(shared))
            connections[a.id][b.id] = connections[b.id][a.id] = shared
            if len(shared) == 1:
                a.is_spiro = b.is_spiro = True
            else:
                a.is_fused = b.is_fused = True

    def __set_aromaticity(self):
        atoms = self._atoms
        for ring in self._rings.values():
            ring.is_aromatic = all(atoms[n].is_part_of_aromatic_ring for n in ring.members)
            for n, m in ring.edges:
                if atoms[n].is_part_of_aromatic_ring and atoms[m].is_part_of_aromatic_ring:
                    self.edge(n, m).is_part_of_aromatic_ring = True

    def __fused_clusters(self) -> List[List[int]]:
        connections = self._ring_connections
        seen = set()
        clusters = []
        for r in sorted(connections):
            if r in seen:
                continue
            seen.add(r)
            cluster = [r]
            queue = deque([r])
            while queue:
                current = queue.popleft()
                for x, shared in connections[current].items():
                    if x not in seen and len(shared) > 1:
                        seen.add(x)
                        cluster.append(x)
                        queue.append(x)
            clusters.append(sorted(cluster))
        return clusters

    def __collapse_bridged(self):
        atoms = self._atoms
        rings = self._rings
        connections = self._ring_connections
        for cluster in self.__fused_clusters():
            if len(cluster) < 2:
                continue
            counts = defaultdict(int)
            for r in cluster:
                for n in rings[r].members:
                    counts[n] += 1
            if not any(len(connections[a].get(b, ())) > 2 for a, b in combinations(cluster, 2)) and \
                    not any(x > 2 for x in counts.values()):
                continue

            main = max(cluster, key=lambda x: (len(rings[x]), -x))
            main_edges = rings[main].edges
            changed = True
            while changed:  # enlarge main ring by merging rings with common path
                changed = False
                for r in cluster:
                    merged = main_edges ^ rings[r].edges
                    if len(merged) > len(main_edges) and _cycle_order(merged):
                        main_edges = merged
                        changed = True
            polygon = _cycle_order(main_edges)
            cluster_atoms = set(counts)
            bridges = sorted(cluster_atoms.difference(polygon))

            bridged_id = max(rings) + 1
            bridged = Ring(bridged_id, polygon + bridges)
            bridged.is_bridged = True
            bridged.rings = list(cluster)
            bridged.bridges = bridges
            rings[bridged_id] = bridged
            for r in cluster:
                rings[r].is_part_of_bridged = True
                rings[r].bridged_ring = bridged_id

            for n in bridges:
                atoms[n].is_bridge = True
                for m in self._adjacency[n]:
                    if m not in bridges and m in cluster_atoms:
                        atoms[m].is_bridge_node = True
            for n in sorted(cluster_atoms):
                atom = atoms[n]
                atom.backup_rings()
                atom.rings = [bridged_id]
                atom.bridged_ring = bridged_id
            info(f'bridged system of rings {cluster} collapsed into ring {bridged_id}')


__all__ = ['RingsResolver']
