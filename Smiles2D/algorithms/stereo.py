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
from logging import info
from typing import Dict, List, Optional, Tuple
from .calculate2d import OVERLAP_RESOLVED, STEREO_ANNOTATED


def _pyramid_sign(n, u, v, w):
    #
    #  |   n /
    #  |   |\
    #  |   | \
    #  |  /|  \
    #  | / u---v
    #  |/___\_/___
    #        w
    #
    nx, ny, nz = n
    ax, ay, az = u[0] - nx, u[1] - ny, u[2] - nz
    bx, by, bz = v[0] - nx, v[1] - ny, v[2] - nz
    cx, cy, cz = w[0] - nx, w[1] - ny, w[2] - nz

    vol = ax * (by * cz - bz * cy) + ay * (bz * cx - bx * cz) + az * (bx * cy - by * cx)
    if vol > 0:
        return 1
    elif vol < 0:
        return -1
    return 0


def _is_odd_permutation(ranks: List[int]) -> bool:
    inversions = 0
    for i, a in enumerate(ranks):
        for b in ranks[i + 1:]:
            if a > b:
                inversions += 1
    return bool(inversions % 2)


class Stereo:
    __slots__ = ()

    @cached_property
    def _chiral_atoms(self) -> Tuple[int, ...]:
        """
        bracket atoms marked with @ or @@ which have four substituents including at most one hydrogen
        """
        out = []
        for n, atom in self._atoms.items():
            bracket = atom.bracket
            if bracket is None or bracket.chirality not in ('@', '@@'):
                continue
            neighbors = self._adjacency[n]
            if bracket.hydrogens > 1 or len(neighbors) + bracket.hydrogens != 4:
                info(f'atom {n} marked as chiral has not four substituents')
                continue
            order = self._stereo_order[n]
            if len(order) != 4 or {x for x in order if x is not None} != set(neighbors):
                info(f'atom {n} has inconsistent neighbors order')
                continue
            out.append(n)
        return tuple(out)

    @property
    def wedges(self) -> Dict[int, int]:
        """
        wedge bonds: edge id -> stereo center atom at narrow end of wedge
        """
        return self._wedges

    def annotate_stereo(self, config: Optional[dict] = None):
        """
        Find tetrahedral stereo centers, set CIP ranks of substituents, R/S labels and wedge bonds.
        """
        self._check_state(OVERLAP_RESOLVED)
        config = self._layout_options(config)
        if config['isomeric']:
            atoms = self._atoms
            centers = {}
            for n in self._chiral_atoms:
                priorities = self.cip_priorities(n, config['cip_depth'])
                if priorities is None:
                    info(f'atom {n} has equal substituents. not stereo center')
                    continue
                centers[n] = priorities
                atom = atoms[n]
                atom.is_stereo_center = True
                atom.chirality = self.__chirality(n, priorities)

            for n, priorities in centers.items():
                for rank, m in enumerate(priorities):
                    if m is not None:
                        atoms[m].priority = rank
                self.__wedge(n, priorities)
        self._state = STEREO_ANNOTATED

    def cip_priorities(self, n: int, depth: int = 10) -> Optional[List[Optional[int]]]:
        """
        Substituents of atom ordered from the highest priority to the lowest. None stands for bracket hydrogen.

        Priorities are compared level by level of substituents digraphs. Level consists of
        parent_atomic_number * 1000 + atomic_number entries. Multiple bonds duplicate entries,
        missing valences filled by hydrogens. Equal digraphs are distinguished by subtree depth.

        :param depth: max digraph depth
        :return: None if equal substituents found
        """
        atoms = self._atoms
        substituents: List[Optional[int]] = list(self._adjacency[n])
        if atoms[n].bracket and atoms[n].bracket.hydrogens:
            substituents.append(None)

        levels = {}
        frontiers = {}
        for m in substituents:
            if m is None:
                levels[m] = [(1,)]
                frontiers[m] = []
            else:
                levels[m] = [(atoms[m].atomic_number,)]
                frontiers[m] = [(m, n, frozenset((n, m)))]

        for _ in range(depth):
            if len(set(self.__cip_keys(levels).values())) == len(substituents):
                break
            elif not any(frontiers.values()):
                break
            for m in substituents:
                level, frontiers[m] = self.__cip_level(frontiers[m])
                levels[m].append(level)

        keys = self.__cip_keys(levels)

        def weight(x):
            return keys[x], atoms[x].subtree_depth if x is not None else 0

        order = sorted(substituents, key=weight, reverse=True)
        for a, b in zip(order, order[1:]):
            if weight(a) == weight(b):
                return
        return order

    def __cip_level(self, frontier):
        atoms = self._atoms
        edges = self._edges
        level = []
        out = []
        for x, parent, path in frontier:
            z = atoms[x].atomic_number
            for y, e in self._adjacency[x].items():
                weight = edges[e].weight
                if y == parent:  # duplicated atoms of multiple bond
                    level.extend([z * 1000 + atoms[y].atomic_number] * (weight - 1))
                elif y not in path:
                    level.extend([z * 1000 + atoms[y].atomic_number] * weight)
                    out.append((y, x, path | {y}))
            level.extend([z * 1000 + 1] * self.hydrogens(x))
        level.sort(reverse=True)
        return tuple(level), out

    @staticmethod
    def __cip_keys(levels) -> Dict[Optional[int], Tuple[Tuple[int, ...], ...]]:
        # levels padded by zeros for lexicographic comparison
        size = len(next(iter(levels.values())))
        widths = [max(len(x[i]) for x in levels.values()) for i in range(size)]
        return {m: tuple(lvl + (0,) * (w - len(lvl)) for lvl, w in zip(x, widths)) for m, x in levels.items()}

    def __chirality(self, n, priorities) -> str:
        order = self._stereo_order[n]
        odd = _is_odd_permutation([priorities.index(x) for x in order])
        if (self._atoms[n].bracket.chirality == '@') != odd:
            return 'S'
        return 'R'

    def __wedge(self, n, priorities):
        atoms = self._atoms
        positions = self._positions
        heavy = [m for m in priorities if m is not None]
        has_hydrogen = None in priorities

        if has_hydrogen:
            wedge = next((m for m in reversed(heavy) if not self.edge(n, m).wedge), heavy[-1])
        else:
            wedge = min(heavy, key=lambda m: (bool(self.edge(n, m).wedge), atoms[m].plane != 0,
                                              atoms[m].is_stereo_center, self.are_in_same_ring(n, m),
                                              not atoms[m].is_hetero_atom(), atoms[m].subtree_depth,
                                              -priorities.index(m)))

        center = positions[n]
        vectors = {}
        for m in heavy:
            v = self._direction(center, positions[m], m)
            vectors[m] = (v.x, v.y, 1. if m == wedge else 0.)
        if has_hydrogen:
            hx = -sum(vectors[m][0] for m in heavy)
            hy = -sum(vectors[m][1] for m in heavy)
            vectors[None] = (hx, hy, -1.)

        p1, p2, p3, p4 = (vectors[m] for m in priorities)
        sign = _pyramid_sign(p4, p1, p2, p3)
        if not sign:
            info(f'wedge stereo ambiguous for atom {n}')
        plane = 1 if (sign < 0) == (atoms[n].chirality == 'R') else -1

        atoms[wedge].plane = plane
        edge = self.edge(n, wedge)
        self._wedges[edge.id] = n
        edge.wedge = 'up' if plane == 1 else 'down'
        if has_hydrogen:
            atoms[n].hydrogen_direction = 'down' if plane == 1 else 'up'


__all__ = ['Stereo']
