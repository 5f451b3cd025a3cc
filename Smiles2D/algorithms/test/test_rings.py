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
from Smiles2D import smiles


def test_single_ring():
    graph = smiles('C1CCCCC1')
    graph.resolve_rings()
    assert len(graph.rings) == 1
    assert not graph.bridged_rings
    ring = graph.rings[0]
    assert ring.members == (0, 1, 2, 3, 4, 5)
    assert ring.closures == {5}
    assert all(graph.atom(n).rings == [ring.id] for n in graph)
    assert all(not graph.atom(n).ringbonds for n in graph)
    assert graph.rings_count == 1


def test_chain_has_no_rings():
    graph = smiles('CCC(C)O')
    graph.resolve_rings()
    assert not graph.rings
    assert not graph.is_ring_edge(0, 1)


def test_connected_to_ring():
    graph = smiles('CCc1ccccc1')
    graph.resolve_rings()
    assert graph.atom(1).is_connected_to_ring
    assert not graph.atom(0).is_connected_to_ring
    assert not graph.atom(2).is_connected_to_ring
    assert graph.is_ring_edge(2, 3)
    assert not graph.is_ring_edge(1, 2)


def test_aromatic_ring():
    graph = smiles('c1ccccc1C1CCCCC1')
    graph.resolve_rings()
    aromatic = [r for r in graph.rings if r.is_aromatic]
    assert len(aromatic) == 1
    assert set(aromatic[0].members) == {0, 1, 2, 3, 4, 5}
    assert graph.edge(0, 1).is_part_of_aromatic_ring
    assert not graph.edge(7, 8).is_part_of_aromatic_ring


def test_fused_rings():
    graph = smiles('c1ccc2ccccc2c1')
    graph.resolve_rings()
    rings = graph.rings
    assert [len(r) for r in rings] == [6, 6]
    assert all(r.is_fused and not r.is_spiro for r in rings)
    assert not graph.bridged_rings
    assert graph.ring_connections[rings[0].id][rings[1].id] == (3, 8)
    assert graph.edge_ring_count(3, 8) == 2
    assert graph.are_in_same_ring(0, 3)
    assert not graph.are_in_same_ring(0, 5)


def test_spiro_rings():
    graph = smiles('C1CCC2(CC1)CCCC2')
    graph.resolve_rings()
    rings = graph.rings
    assert sorted(len(r) for r in rings) == [5, 6]
    assert all(r.is_spiro and not r.is_fused for r in rings)
    assert sorted(graph.atom(3).rings) == [r.id for r in rings]


def test_bridged_system():
    graph = smiles('C1CC2CCC1CC2')
    graph.resolve_rings()
    assert len(graph.rings) == 2
    assert len(graph.bridged_rings) == 1
    bridged = graph.bridged_rings[0]
    assert bridged.is_bridged
    assert bridged.bridges == [6, 7]
    assert bridged.polygon == (0, 1, 2, 3, 4, 5)
    assert {n for n in graph if graph.atom(n).is_bridge} == {6, 7}
    assert {n for n in graph if graph.atom(n).is_bridge_node} == {2, 5}
    assert all(r.is_part_of_bridged and r.bridged_ring == bridged.id for r in graph.rings)

    atom = graph.atom(2)
    assert atom.rings == [bridged.id]
    assert atom.bridged_ring == bridged.id
    atom.restore_rings()
    assert sorted(atom.rings) == sorted(r.id for r in graph.rings)


def test_norbornane():
    graph = smiles('C1CC2CCC1C2')
    graph.resolve_rings()
    bridged = graph.bridged_rings
    assert len(bridged) == 1
    assert len(bridged[0].polygon) == 6
    assert bridged[0].bridges == [6]


def test_closure_over_dot():
    graph = smiles('C1CC.C1')
    graph.resolve_rings()
    assert not graph.rings
