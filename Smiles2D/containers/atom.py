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
from collections import namedtuple
from typing import Dict, List, Optional
from ..periodictable import get_atomic_number, get_max_bonds, valences


BracketInfo = namedtuple('BracketInfo', ('hydrogens', 'charge', 'isotope', 'chirality', 'atom_class'))
BracketInfo.__new__.__defaults__ = (0, 0, None, None, 0)


class PseudoElement:
    __slots__ = ('element', 'count', 'hydrogens', 'previous_element', 'charge')

    def __init__(self, element, previous_element, hydrogens=0, charge=0, count=1):
        self.element = element
        self.previous_element = previous_element
        self.hydrogens = hydrogens
        self.charge = charge
        self.count = count

    def __repr__(self):
        return f'{self.__class__.__name__}({self.element!r}, count={self.count}, hydrogens={self.hydrogens}, ' \
               f'charge={self.charge})'


class Atom:
    """
    Atom record. Neighbors, rings and bonds are referenced by integer ids only.

    aromaticity is derived from case of the symbol: lower-case input marks atom as aromatic ring member.
    """
    __slots__ = ('element', 'draw_explicit', 'ringbonds', 'rings', 'bond_type', 'branch_bond', 'is_bridge',
                 'is_bridge_node', 'original_rings', 'bridged_ring', 'anchored_rings', 'bracket', 'plane',
                 '_pseudo_elements', 'is_drawn', 'is_connected_to_ring', 'neighbouring_elements',
                 'is_part_of_aromatic_ring', 'bond_count', 'chirality', 'is_stereo_center', 'priority', 'main_chain',
                 'hydrogen_direction', 'subtree_depth', 'has_hydrogen')

    def __init__(self, element: str, bond_type: str = '-', bracket: Optional[BracketInfo] = None):
        canonic = element.upper() if len(element) == 1 else element.capitalize()
        self.element = canonic
        self.is_part_of_aromatic_ring = element != canonic
        self.bond_type = bond_type
        self.bracket = bracket
        self.draw_explicit = False
        self.ringbonds: Dict[int, Optional[str]] = {}
        self.rings: List[int] = []
        self.branch_bond: Optional[str] = None
        self.is_bridge = False
        self.is_bridge_node = False
        self.original_rings: List[int] = []
        self.bridged_ring: Optional[int] = None
        self.anchored_rings: List[int] = []
        self.plane = 0
        self._pseudo_elements: Dict[str, PseudoElement] = {}
        self.is_drawn = True
        self.is_connected_to_ring = False
        self.neighbouring_elements: List[str] = []
        self.bond_count = 0
        self.chirality = ''
        self.is_stereo_center = False
        self.priority = 0
        self.main_chain = False
        self.hydrogen_direction = 'down'
        self.subtree_depth = 1
        self.has_hydrogen = bool(bracket and bracket.hydrogens)

    def __repr__(self):
        symbol = self.element.lower() if self.is_part_of_aromatic_ring else self.element
        if self.bracket:
            return f'{self.__class__.__name__}({symbol!r}, bracket={self.bracket})'
        return f'{self.__class__.__name__}({symbol!r})'

    @property
    def atomic_number(self) -> int:
        return get_atomic_number(self.element)

    @property
    def max_bonds(self) -> int:
        return get_max_bonds(self.element)

    @property
    def charge(self) -> int:
        return self.bracket.charge if self.bracket else 0

    @property
    def isotope(self) -> Optional[int]:
        return self.bracket.isotope if self.bracket else None

    @property
    def ringbond_count(self) -> int:
        return len(self.ringbonds)

    def is_hetero_atom(self) -> bool:
        return self.element not in ('C', 'H')

    def implicit_hydrogens(self, valence: int) -> int:
        """
        count of hydrogens for given sum of bond orders.

        bracket atoms have explicit count. organic subset atoms complete valence up to the closest normal state.
        aromatic atoms use one additional valence for pi bond.
        """
        if self.bracket:
            return self.bracket.hydrogens
        try:
            normal = valences[self.element]
        except KeyError:
            return 0
        if self.is_part_of_aromatic_ring:
            valence += 1
        for v in normal:
            if v >= valence:
                return v - valence
        return 0

    @staticmethod
    def have_common_ringbond(a: 'Atom', b: 'Atom') -> bool:
        return not a.ringbonds.keys().isdisjoint(b.ringbonds)

    def add_ringbond(self, ring_id: int, bond_type: Optional[str] = None):
        self.ringbonds[ring_id] = bond_type

    def clear_ringbonds(self):
        self.ringbonds.clear()

    def add_neighbouring_element(self, element: str):
        self.neighbouring_elements.append(element)

    def neighbouring_elements_equal(self, elements) -> bool:
        """
        compare neighbors symbols ignoring order.
        """
        if len(elements) != len(self.neighbouring_elements):
            return False
        return sorted(elements) == sorted(self.neighbouring_elements)

    def add_anchored_ring(self, ring_id: int):
        if ring_id not in self.anchored_rings:
            self.anchored_rings.append(ring_id)

    def backup_rings(self):
        self.original_rings = list(self.rings)

    def restore_rings(self):
        if self.original_rings:
            self.rings = list(self.original_rings)

    def attach_pseudo_element(self, element: str, previous_element: str, hydrogens: int = 0, charge: int = 0):
        """
        merge terminal substituent into label. same hydrogens, element and charge increase counter.
        """
        key = f'{hydrogens}{element}{charge}'
        try:
            self._pseudo_elements[key].count += 1
        except KeyError:
            self._pseudo_elements[key] = PseudoElement(element, previous_element, hydrogens, charge)

    def clear_pseudo_elements(self):
        self._pseudo_elements.clear()

    @property
    def attached_pseudo_elements(self) -> Dict[str, PseudoElement]:
        return {k: self._pseudo_elements[k] for k in sorted(self._pseudo_elements)}

    @property
    def attached_pseudo_elements_count(self) -> int:
        return len(self._pseudo_elements)

    @property
    def has_attached_pseudo_elements(self) -> bool:
        return bool(self._pseudo_elements)


__all__ = ['Atom', 'BracketInfo', 'PseudoElement']
