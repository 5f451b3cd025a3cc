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
"""
Read-only element tables shared by all graphs.
"""
from CachedMethods import FrozenDict


elements_list = ('H', 'He', 'Li', 'Be', 'B', 'C', 'N', 'O', 'F', 'Ne', 'Na', 'Mg', 'Al', 'Si', 'P', 'S', 'Cl', 'Ar',
                 'K', 'Ca', 'Sc', 'Ti', 'V', 'Cr', 'Mn', 'Fe', 'Co', 'Ni', 'Cu', 'Zn', 'Ga', 'Ge', 'As', 'Se', 'Br',
                 'Kr', 'Rb', 'Sr', 'Y', 'Zr', 'Nb', 'Mo', 'Tc', 'Ru', 'Rh', 'Pd', 'Ag', 'Cd', 'In', 'Sn', 'Sb', 'Te',
                 'I', 'Xe', 'Cs', 'Ba', 'La', 'Ce', 'Pr', 'Nd', 'Pm', 'Sm', 'Eu', 'Gd', 'Tb', 'Dy', 'Ho', 'Er', 'Tm',
                 'Yb', 'Lu', 'Hf', 'Ta', 'W', 'Re', 'Os', 'Ir', 'Pt', 'Au', 'Hg', 'Tl', 'Pb', 'Bi', 'Po', 'At', 'Rn',
                 'Fr', 'Ra', 'Ac', 'Th', 'Pa', 'U', 'Np', 'Pu', 'Am', 'Cm', 'Bk', 'Cf', 'Es', 'Fm', 'Md', 'No', 'Lr',
                 'Rf', 'Db', 'Sg', 'Bh', 'Hs', 'Mt', 'Ds', 'Rg', 'Cn', 'Nh', 'Fl', 'Mc', 'Lv', 'Ts', 'Og')

atomic_numbers = FrozenDict({'*': 0, **{x: n for n, x in enumerate(elements_list, start=1)}})
elements_set = frozenset(atomic_numbers)

# highest common valence. used for valence overflow check only
max_bonds = FrozenDict({'H': 1, 'B': 3, 'C': 4, 'N': 5, 'O': 2, 'F': 1, 'Si': 4, 'P': 5, 'S': 6, 'Cl': 7, 'Se': 6,
                        'Br': 7, 'I': 7, 'As': 5, 'Te': 6, 'Li': 1, 'Na': 1, 'K': 1, 'Mg': 2, 'Ca': 2, 'Al': 3,
                        'Ge': 4, 'Sn': 4, 'Pb': 4, 'Zn': 2, 'Cu': 2, 'Fe': 3, 'Sb': 5, 'Bi': 5, 'Xe': 6,
                        'He': 0, 'Ne': 0, 'Ar': 0, 'Kr': 0, 'Rn': 0, '*': 4})

# normal valences of SMILES organic subset. implicit hydrogens complete bonds up to closest valence
valences = FrozenDict({'B': (3,), 'C': (4,), 'N': (3, 5), 'O': (2,), 'P': (3, 5), 'S': (2, 4, 6),
                       'F': (1,), 'Cl': (1, 3, 5, 7), 'Br': (1, 3, 5, 7), 'I': (1, 3, 5, 7)})

organic_subset = frozenset(valences)
aromatic_symbols = frozenset(('b', 'c', 'n', 'o', 'p', 's', 'se', 'as', 'te', 'si', 'ge'))

# bond symbol to bond order
bond_weights = FrozenDict({'-': 1, '/': 1, '\\': 1, '=': 2, '#': 3, '$': 4})


def get_atomic_number(element: str) -> int:
    """
    atomic number. unknown symbols are treated as hydrogen.
    """
    return atomic_numbers.get(element, 1)


def get_max_bonds(element: str) -> int:
    """
    highest valence. unknown symbols have one bond.
    """
    return max_bonds.get(element, 1)


__all__ = ['atomic_numbers', 'max_bonds', 'valences', 'bond_weights', 'organic_subset', 'aromatic_symbols',
           'elements_set', 'get_atomic_number', 'get_max_bonds']
