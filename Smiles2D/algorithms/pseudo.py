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
from typing import Optional
from .calculate2d import DONE, STEREO_ANNOTATED


class PseudoElements:
    __slots__ = ()

    def contract_pseudo_elements(self, config: Optional[dict] = None):
        """
        Hide terminal hetero groups in labels of their central atom. E.g. CF3, SO3H, NO2.
        Coordinates are kept unchanged.
        """
        self._check_state(STEREO_ANNOTATED)
        config = self._layout_options(config)
        self.__set_explicit(config['terminal_carbons'])
        if config['compact']:
            self.__contract_terminals()
            self.__contract_acetyls()
        self._state = DONE

    def __set_explicit(self, terminal_carbons):
        adjacency = self._adjacency
        for n, atom in self._atoms.items():
            if not adjacency[n]:
                atom.draw_explicit = True
            elif atom.element == 'C' and (atom.charge or atom.isotope is not None):
                atom.draw_explicit = True
            elif terminal_carbons and atom.element == 'C' and len(adjacency[n]) == 1:
                atom.draw_explicit = True

    def __contract_terminals(self):
        atoms = self._atoms
        adjacency = self._adjacency
        for n, atom in atoms.items():
            neighbors = adjacency[n]
            if len(neighbors) < 3 or atom.rings or atom.element == 'P':
                continue
            elif atom.element == 'C' and len(neighbors) == 3 and atom.neighbouring_elements_equal(['N', 'N', 'N']):
                continue  # guanidine

            heteroatoms = 0
            previous = None
            for m in neighbors:
                if len(adjacency[m]) > 1:
                    if previous is not None:
                        break
                    previous = m
                elif atoms[m].is_hetero_atom():
                    heteroatoms += 1
            else:
                if heteroatoms < 2:
                    continue
                previous_element = atoms[previous].element if previous is not None else None
                for m in neighbors:
                    if len(adjacency[m]) > 1:
                        continue
                    terminal = atoms[m]
                    terminal.is_drawn = False
                    atom.attach_pseudo_element(terminal.element, previous_element, self.hydrogens(m), terminal.charge)

    def __contract_acetyls(self):
        atoms = self._atoms
        for n, atom in atoms.items():
            if not atom.is_drawn or not atom.is_hetero_atom():
                continue
            for m in self._adjacency[n]:
                neighbor = atoms[m]
                if neighbor.attached_pseudo_elements.keys() == {'0O0', '3C0'}:
                    neighbor.is_drawn = False
                    atom.attach_pseudo_element('Ac', '', 0)


__all__ = ['PseudoElements']
