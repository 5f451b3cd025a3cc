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
from typing import Dict, List
from .calculate2d import DONE


AtomView = namedtuple('AtomView', ('id', 'label', 'x', 'y', 'is_drawn', 'draw_explicit', 'plane',
                                   'hydrogen_direction', 'charge', 'hydrogens', 'pseudo_elements'))
BondView = namedtuple('BondView', ('source', 'target', 'bond_type', 'weight', 'center', 'is_part_of_aromatic_ring',
                                   'wedge', 'wedge_source'))
RingView = namedtuple('RingView', ('id', 'members', 'x', 'y', 'is_aromatic'))
PseudoView = namedtuple('PseudoView', ('element', 'count', 'hydrogens', 'charge', 'previous_element'))


class Depict:
    __slots__ = ()

    def depict(self, config=None) -> Dict[str, List[tuple]]:
        """
        Drawing data for renderer. Everything needed for painting is precalculated: renderer should not know chemistry.

        :param config: layout settings. used only if layout is not done yet
        :return: dict with `atoms`, `bonds` and `rings` lists of AtomView, BondView and RingView
        """
        if self._state != DONE:
            self.clean2d(config)
        return {'atoms': self._render_atoms(), 'bonds': self._render_bonds(), 'rings': self._render_rings()}

    def _render_atoms(self) -> List[AtomView]:
        positions = self._positions
        out = []
        for n, atom in self._atoms.items():
            p = positions[n]
            pseudo = tuple(PseudoView(x.element, x.count, x.hydrogens, x.charge, x.previous_element)
                           for x in atom.attached_pseudo_elements.values())
            out.append(AtomView(n, atom.element, p.x, p.y, atom.is_drawn, atom.draw_explicit, atom.plane,
                                atom.hydrogen_direction, atom.charge, self.hydrogens(n), pseudo))
        return out

    def _render_bonds(self) -> List[BondView]:
        wedges = self._wedges
        return [BondView(e.source, e.target, e.bond_type, e.weight, e.center, e.is_part_of_aromatic_ring, e.wedge,
                         wedges.get(e.id)) for e in self._edges.values()]

    def _render_rings(self) -> List[RingView]:
        return [RingView(r.id, r.members, r.center.x, r.center.y, r.is_aromatic) for r in self.rings]


__all__ = ['Depict', 'AtomView', 'BondView', 'RingView', 'PseudoView']
