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
from ..periodictable import bond_weights


class Edge:
    __slots__ = ('id', 'source', 'target', '__bond_type', '__weight', 'is_part_of_aromatic_ring', 'center', 'wedge')

    def __init__(self, id: int, source: int, target: int, bond_type: str = '-'):
        self.id = id
        self.source = source
        self.target = target
        self.bond_type = bond_type
        self.is_part_of_aromatic_ring = False
        self.center = False
        self.wedge = ''

    def __repr__(self):
        return f'{self.__class__.__name__}({self.id}, {self.source}, {self.target}, {self.__bond_type!r})'

    @property
    def bond_type(self) -> str:
        return self.__bond_type

    @bond_type.setter
    def bond_type(self, bond_type: str):
        try:
            self.__weight = bond_weights[bond_type]
        except KeyError:
            raise ValueError(f'bond type should be one of {", ".join(bond_weights)}')
        self.__bond_type = bond_type

    @property
    def weight(self) -> int:
        """
        bond order. always consistent with bond_type
        """
        return self.__weight

    @property
    def is_directional(self) -> bool:
        return self.__bond_type in ('/', '\\')

    def other(self, n: int) -> int:
        """
        atom on the opposite end of the bond
        """
        if n == self.source:
            return self.target
        elif n == self.target:
            return self.source
        raise KeyError(n)

    def copy(self) -> 'Edge':
        copy = object.__new__(self.__class__)
        copy.id = self.id
        copy.source = self.source
        copy.target = self.target
        copy._Edge__bond_type = self.__bond_type
        copy._Edge__weight = self.__weight
        copy.is_part_of_aromatic_ring = self.is_part_of_aromatic_ring
        copy.center = self.center
        copy.wedge = self.wedge
        return copy


__all__ = ['Edge']
