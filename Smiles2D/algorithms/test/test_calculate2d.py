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
from CachedMethods import FrozenDict
from itertools import combinations
from math import isfinite, pi
from pytest import raises
from Smiles2D import ImplementationError, MoleculeGraph, Vector2, smiles
from Smiles2D.algorithms.calculate2d import DONE, OVERLAP_RESOLVED, STEREO_ANNOTATED, TREE_POSITIONED, UNPLACED


def _cross(o, a, b):
    return (a.x - o.x) * (b.y - o.y) - (a.y - o.y) * (b.x - o.x)


def test_bond_lengths():
    for string in ('CC', 'CCCCCC', 'CC(C)(C)CCO', 'c1ccccc1', 'c1ccc2ccccc2c1', 'C1CCC2(CC1)CCCC2',
                   'CCc1ccccc1C(=O)O', 'F/C=C/F', 'F/C=C\\F', 'CC#CC', 'C=C=C', 'CC.O',
                   'CN1C=NC2=C1C(=O)N(C(=O)N2C)C', 'c1ccccc1-c1ccccc1', 'OCC(F)(F)F'):
        graph = smiles(string)
        graph.clean2d()
        for edge in graph.edges():
            d = graph.position(edge.source).distance(graph.position(edge.target))
            assert abs(d - .825) < 1e-6, string


def test_regular_rings():
    for string in ('C1CCCCC1', 'c1ccccc1', 'C1CCCC1'):
        graph = smiles(string)
        graph.clean2d()
        ring = graph.rings[0]
        angle = pi - 2 * pi / len(ring)
        for n in ring.members:
            a, b = ring.neighbors(n)
            p = graph.position(n)
            assert abs(Vector2.angle_between(graph.position(a) - p, graph.position(b) - p) - angle) < 1e-6
            assert abs(p.distance(ring.center) - ring.circumradius(.825)) < 1e-6


def test_linear_triple_bond():
    graph = smiles('CC#CC')
    graph.clean2d()
    p = [graph.position(n) for n in graph]
    assert abs(Vector2.angle_between(p[0] - p[1], p[2] - p[1]) - pi) < 1e-6
    assert abs(Vector2.angle_between(p[1] - p[2], p[3] - p[2]) - pi) < 1e-6


def test_zigzag_chain():
    graph = smiles('CCCCCC')
    graph.clean2d()
    positions = graph.positions
    for n in range(1, 5):
        angle = Vector2.angle_between(positions[n - 1] - positions[n], positions[n + 1] - positions[n])
        assert abs(angle - 2 * pi / 3) < 1e-6
    for n in range(4):
        assert positions[n].distance(positions[n + 2]) > .5 * .825


def test_main_chain():
    graph = smiles('CC(C)CCCC')
    graph.clean2d()
    assert graph.atom(3).main_chain
    assert not graph.atom(2).main_chain
    assert graph.atom(3).subtree_depth == 4
    assert graph.atom(2).subtree_depth == 1


def test_cis_trans():
    graph = smiles('F/C=C/F')
    graph.clean2d()
    p = graph.positions
    assert _cross(p[1], p[2], p[0]) * _cross(p[1], p[2], p[3]) < 0

    graph = smiles('F/C=C\\F')
    graph.clean2d()
    p = graph.positions
    assert _cross(p[1], p[2], p[0]) * _cross(p[1], p[2], p[3]) > 0

    graph = smiles('CC/C=C\\CC')
    graph.clean2d()
    p = graph.positions
    assert _cross(p[2], p[3], p[1]) * _cross(p[2], p[3], p[4]) > 0


def test_centered_double_bonds():
    graph = smiles('CC(=O)C=CC')
    graph.clean2d()
    assert graph.edge(1, 2).center
    assert not graph.edge(3, 4).center
    graph = smiles('C=C=C')
    graph.clean2d()
    assert all(e.center for e in graph.edges())


def test_components():
    graph = smiles('CC.O')
    graph.clean2d()
    p = graph.positions
    assert abs(p[2].x - max(p[0].x, p[1].x) - 2 * .825) < 1e-9
    assert p[2].y == 0.


def test_bridged_layout():
    for string in ('C1CC2CCC1CC2', 'C1CC2CCC1C2', 'CC1CC2CCC1C2', 'CC1(C)C2CCC1(C)C(=O)C2', 'C1C2CC3CC1CC(C2)C3',
                   'c1cc2ccc3cccc4ccc(c1)c2c34'):
        graph = smiles(string)
        graph.clean2d()
        assert graph.state == DONE, string
        assert graph.bridged_rings, string
        assert all(isfinite(p.x) and isfinite(p.y) for p in graph.positions.values())
        for edge in graph.edges():
            d = graph.position(edge.source).distance(graph.position(edge.target))
            assert abs(d - .825) < 1e-2 * .825, string
        for bridged in graph.bridged_rings:
            for n, m in combinations(bridged.members, 2):
                assert graph.position(n).distance(graph.position(m)) > 1e-3, string


def test_fused_bridged_layout():
    # rings of pyrene tile the plane
    graph = smiles('c1cc2ccc3cccc4ccc(c1)c2c34')
    graph.clean2d()
    for edge in graph.edges():
        d = graph.position(edge.source).distance(graph.position(edge.target))
        assert abs(d - .825) < 1e-6
    for n, m in combinations(graph.positions, 2):
        if not graph.has_edge(n, m):
            assert graph.position(n).distance(graph.position(m)) > .825


def test_norbornane_bridge():
    graph = smiles('C1CC2CCC1C2')
    graph.clean2d()
    bridged = graph.bridged_rings[0]
    polygon = bridged.polygon
    for n, m in zip(polygon, polygon[1:] + polygon[:1]):
        assert abs(graph.position(n).distance(graph.position(m)) - .825) < 1e-6
    bridge = graph.position(bridged.bridges[0])
    for n in polygon:
        assert abs(graph.position(n).distance(bridge) - .825) < 1e-6


def test_min_separation():
    for string in ('C(C)(C)(C)C(C(C)(C)C)(C(C)(C)C)C(C)(C)C', 'CC(C)(C)CCO', 'CCc1ccccc1C(=O)O', 'OCC(F)(F)F',
                   'CN1C=NC2=C1C(=O)N(C(=O)N2C)C', 'c1ccccc1-c1ccccc1', 'CC(C)c1ccc(cc1)C(C)C(=O)O'):
        graph = smiles(string)
        graph.position_tree()
        graph.resolve_overlaps()
        for n, m in combinations(graph.positions, 2):
            if not graph.has_edge(n, m):
                assert graph.position(n).distance(graph.position(m)) >= .5 * .825 - 1e-9, string
        for edge in graph.edges():
            d = graph.position(edge.source).distance(graph.position(edge.target))
            assert abs(d - .825) < 1e-6, string


def test_stages():
    graph = smiles('CCO')
    assert graph.state == UNPLACED
    with raises(ImplementationError):
        graph.resolve_overlaps()
    with raises(ImplementationError):
        graph.annotate_stereo()
    graph.position_tree()
    assert graph.state == TREE_POSITIONED
    with raises(ImplementationError):
        graph.position_tree()
    graph.resolve_overlaps()
    assert graph.state == OVERLAP_RESOLVED
    graph.annotate_stereo()
    assert graph.state == STEREO_ANNOTATED
    graph.contract_pseudo_elements()
    assert graph.state == DONE

    graph.clean2d()
    assert graph.state == DONE


def test_repeatable():
    graph = smiles('CC(C)c1ccc(cc1)C(C)C(=O)O')
    graph.clean2d()
    first = {n: (p.x, p.y) for n, p in graph.positions.items()}
    graph.clean2d()
    assert first == {n: (p.x, p.y) for n, p in graph.positions.items()}
    other = smiles('CC(C)c1ccc(cc1)C(C)C(=O)O')
    other.clean2d()
    assert first == {n: (p.x, p.y) for n, p in other.positions.items()}


def test_settings():
    config = MoleculeGraph.layout_settings(bond_length=1.5)
    assert isinstance(config, FrozenDict)
    assert config['bond_length'] == 1.5
    assert config['isomeric']
    with raises(ValueError):
        MoleculeGraph.layout_settings(bond_length=0)

    graph = smiles('CCO')
    graph.clean2d(config)
    assert abs(graph.position(0).distance(graph.position(1)) - 1.5) < 1e-9
    graph.clean2d({'bond_length': 2.})
    assert abs(graph.position(0).distance(graph.position(1)) - 2.) < 1e-9
