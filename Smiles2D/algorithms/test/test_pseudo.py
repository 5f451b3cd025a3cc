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
from Smiles2D import MoleculeGraph, smiles


def test_trifluoromethyl():
    graph = smiles('OCC(F)(F)F')
    graph.clean2d()
    center = graph.atom(2)
    assert list(center.attached_pseudo_elements) == ['0F0']
    pseudo = center.attached_pseudo_elements['0F0']
    assert pseudo.count == 3
    assert pseudo.previous_element == 'C'
    assert [graph.atom(n).is_drawn for n in range(6)] == [True, True, True, False, False, False]
    assert len(graph.positions) == 6


def test_nitro():
    graph = smiles('CC[N+](=O)[O-]')
    graph.clean2d()
    assert list(graph.atom(2).attached_pseudo_elements) == ['0O-1', '0O0']
    assert not graph.atom(3).is_drawn
    assert not graph.atom(4).is_drawn


def test_not_compact():
    graph = smiles('OCC(F)(F)F')
    graph.clean2d(MoleculeGraph.layout_settings(compact=False))
    assert not graph.atom(2).has_attached_pseudo_elements
    assert all(atom.is_drawn for _, atom in graph.atoms())

    graph.clean2d()
    assert graph.atom(2).attached_pseudo_elements_count == 1
    graph.clean2d(MoleculeGraph.layout_settings(compact=False))
    assert not graph.atom(2).has_attached_pseudo_elements
    assert graph.atom(3).is_drawn


def test_excluded_groups():
    graph = smiles('NC(N)=N')  # guanidine
    graph.clean2d()
    assert not graph.atom(1).has_attached_pseudo_elements

    graph = smiles('FC1(F)CCCCC1')
    graph.clean2d()
    assert not graph.atom(1).has_attached_pseudo_elements
    assert graph.atom(0).is_drawn

    graph = smiles('CC(O)O')  # all neighbors terminal
    graph.clean2d()
    assert graph.atom(1).has_attached_pseudo_elements

    graph = smiles('OC(O)CC(O)CC')
    graph.clean2d()
    assert not graph.atom(4).has_attached_pseudo_elements


def test_explicit_labels():
    graph = smiles('C')
    graph.clean2d()
    assert graph.atom(0).draw_explicit

    graph = smiles('C[CH2+]C')
    graph.clean2d()
    assert [graph.atom(n).draw_explicit for n in range(3)] == [False, True, False]

    graph = smiles('C[13CH2]C')
    graph.clean2d()
    assert graph.atom(1).draw_explicit

    graph = smiles('CCC')
    graph.clean2d(MoleculeGraph.layout_settings(terminal_carbons=True))
    assert [graph.atom(n).draw_explicit for n in range(3)] == [True, False, True]
