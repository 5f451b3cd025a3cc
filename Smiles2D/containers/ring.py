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
from math import pi, sin, tan
from typing import FrozenSet, Iterator, List, Optional, Sequence, Set, Tuple
from ..vector import Vector2


class Ring:
    """
    Cycle of atoms. members are atom ids in cyclic order.
    """
    __slots__ = ('id', 'members', 'closures', 'is_bridged', 'is_part_of_bridged', 'bridged_ring', 'rings', 'bridges',
                 'center', 'positioned', 'is_fused', 'is_spiro', 'is_aromatic')

    def __init__(self, id: int, members: Sequence[int], closures=()):
        self.id = id
        self.members: Tuple[int, ...] = tuple(members)
        self.closures: Set[int] = set(closures)
        self.is_bridged = False
        self.is_part_of_bridged = False
        self.bridged_ring: Optional[int] = None
        self.rings: List[int] = []
        self.bridges: List[int] = []
        self.center = Vector2()
        self.positioned = False
        self.is_fused = False
        self.is_spiro = False
        self.is_aromatic = False

    def __repr__(self):
        return f'{self.__class__.__name__}({self.id}, {self.members})'

    def __len__(self):
        return len(self.members)

    def __contains__(self, n):
        return n in self.members

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def edges(self) -> Set[FrozenSet[int]]:
        """
        atom pairs of cycle bonds
        """
        members = self.members
        return {frozenset((n, m)) for n, m in zip(members, members[1:] + members[:1])}

    @property
    def polygon(self) -> Tuple[int, ...]:
        """
        members drawn as regular polygon. bridge atoms of bridged system excluded
        """
        if self.bridges:
            return self.members[:len(self.members) - len(self.bridges)]
        return self.members

    def walk(self, start: int, previous: Optional[int] = None) -> Iterator[int]:
        """
        iterate members starting from start atom. direction chosen away from previous atom if it is ring neighbor.
        """
        members = self.members
        size = len(members)
        i = members.index(start)
        step = 1
        if previous is not None and members[(i + 1) % size] == previous:
            step = -1
        for k in range(size):
            yield members[(i + step * k) % size]

    def neighbors(self, n: int) -> Tuple[int, int]:
        members = self.members
        i = members.index(n)
        return members[i - 1], members[(i + 1) % len(members)]

    def circumradius(self, bond_length: float) -> float:
        return bond_length / (2 * sin(pi / len(self.members)))

    def apothem(self, bond_length: float) -> float:
        return bond_length / (2 * tan(pi / len(self.members)))

    @property
    def central_angle(self) -> float:
        return 2 * pi / len(self.members)


__all__ = ['Ring']
