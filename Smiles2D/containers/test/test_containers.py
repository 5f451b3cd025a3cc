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
from pytest import raises
from Smiles2D import Atom, BracketInfo, Edge, MoleculeGraph, Ring
from Smiles2D.periodictable import aromatic_symbols, atomic_numbers, organic_subset


def test_edge_weight_follows_bond_type():
    edge = Edge(0, 0, 1, '=')
    assert edge.weight == 2
    edge.bond_type = '#'
    assert edge.weight == 3
    edge.bond_type = '/'
    assert edge.weight == 1
    assert edge.is_directional
    with raises(ValueError):
        edge.bond_type = '~'
    assert edge.bond_type == '/' and edge.weight == 1
    assert edge.other(0) == 1
    copy = edge.copy()
    copy.bond_type = '$'
    assert copy.weight == 4 and edge.weight == 1


def test_atom_symbols():
    atom = Atom('c')
    assert atom.element == 'C'
    assert atom.is_part_of_aromatic_ring
    atom = Atom('Cl')
    assert atom.element == 'Cl'
    assert not atom.is_part_of_aromatic_ring
    atom = Atom('se')
    assert atom.element == 'Se'
    assert atom.is_part_of_aromatic_ring
    assert Atom('N').is_hetero_atom()
    assert not Atom('C').is_hetero_atom()


def test_implicit_hydrogens():
    assert Atom('C').implicit_hydrogens(1) == 3
    assert Atom('N').implicit_hydrogens(4) == 1
    assert Atom('c').implicit_hydrogens(2) == 1
    assert Atom('S').implicit_hydrogens(3) == 1
    assert Atom('N', bracket=BracketInfo(hydrogens=2)).implicit_hydrogens(1) == 2
    assert Atom('Fe').implicit_hydrogens(0) == 0


def test_pseudo_elements_count():
    atom = Atom('C')
    for _ in range(3):
        atom.attach_pseudo_element('F', 'C')
    atom.attach_pseudo_element('O', 'C', 1)
    assert atom.has_attached_pseudo_elements
    assert atom.attached_pseudo_elements_count == 2
    pseudo = atom.attached_pseudo_elements
    assert list(pseudo) == ['0F0', '1O0']
    assert pseudo['0F0'].count == 3
    assert pseudo['1O0'].count == 1
    atom.clear_pseudo_elements()
    assert not atom.has_attached_pseudo_elements


def test_neighbouring_elements():
    atom = Atom('C')
    for x in ('N', 'O', 'N'):
        atom.add_neighbouring_element(x)
    assert atom.neighbouring_elements_equal(['O', 'N', 'N'])
    assert not atom.neighbouring_elements_equal(['O', 'N'])
    assert not atom.neighbouring_elements_equal(['O', 'N', 'C'])


def test_rings_backup():
    atom = Atom('C')
    atom.rings = [0, 1]
    atom.backup_rings()
    atom.rings = [5]
    atom.restore_rings()
    assert atom.rings == [0, 1]
    atom.add_anchored_ring(3)
    atom.add_anchored_ring(3)
    assert atom.anchored_rings == [3]


def test_ring_geometry():
    ring = Ring(0, [0, 1, 2, 3, 4, 5])
    assert len(ring) == 6
    assert frozenset((5, 0)) in ring.edges
    assert list(ring.walk(0, 1)) == [0, 5, 4, 3, 2, 1]
    assert list(ring.walk(2)) == [2, 3, 4, 5, 0, 1]
    assert ring.neighbors(0) == (5, 1)
    assert abs(ring.circumradius(1.) - 1.) < 1e-12
    assert ring.polygon == (0, 1, 2, 3, 4, 5)

    bridged = Ring(1, [0, 1, 2, 3, 4, 5, 6, 7])
    bridged.bridges = [6, 7]
    assert bridged.polygon == (0, 1, 2, 3, 4, 5)


def test_graph_edges():
    graph = MoleculeGraph()
    n = graph.add_atom(Atom('C'))
    m = graph.add_atom(Atom('O'), n)
    graph.add_edge(n, m, '=')
    assert graph.has_edge(m, n)
    assert graph.edge(m, n).weight == 2
    with raises(KeyError):
        graph.add_edge(n, m)
    with raises(KeyError):
        graph.add_edge(n, n)
    with raises(TypeError):
        graph.add_atom('C')
    graph.finalize()
    assert graph.hydrogens(n) == 2
    assert graph.hydrogens(m) == 0
    assert not graph.diagnostics


def test_lookup_tables():
    assert atomic_numbers['C'] == 6
    assert atomic_numbers['*'] == 0
    assert 'Cl' in organic_subset and 'Na' not in organic_subset
    assert 'se' in aromatic_symbols
