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
from io import StringIO
from pytest import raises
from Smiles2D import Atom, ChemistryWarning, ParseError, SMILESRead, smiles


def test_cyclohexane():
    graph = smiles('C1CCCCC1')
    assert len(graph) == 6
    assert graph.edges_count == 6
    assert graph.closures == [(1, 0, 5, 5)]
    assert all(graph.hydrogens(n) == 2 for n in graph)


def test_bonds_and_branches():
    graph = smiles('CC(=O)O')
    assert len(graph) == 4
    assert graph.edge(1, 2).bond_type == '='
    assert graph.edge(1, 3).bond_type == '-'
    assert graph.neighbors(1) == (0, 2, 3)
    assert graph.atom(2).branch_bond == '='

    graph = smiles('C#N')
    assert graph.edge(0, 1).weight == 3
    assert graph.atom(0).bond_count == 3


def test_aromatic_atoms():
    graph = smiles('c1ccncc1')
    assert all(graph.atom(n).is_part_of_aromatic_ring for n in graph)
    assert graph.atom(3).element == 'N'
    assert graph.hydrogens(3) == 0
    assert graph.hydrogens(0) == 1


def test_two_letter_elements():
    graph = smiles('ClCBr')
    assert [graph.atom(n).element for n in graph] == ['Cl', 'C', 'Br']
    graph = smiles('CCl')
    assert [graph.atom(n).element for n in graph] == ['C', 'Cl']


def test_bracket_atoms():
    graph = smiles('[13CH3][NH3+].[O-]')
    c, n, o = (graph.atom(x) for x in graph)
    assert c.isotope == 13
    assert c.bracket.hydrogens == 3
    assert n.charge == 1
    assert n.bracket.hydrogens == 3
    assert o.charge == -1
    assert not graph.has_edge(1, 2)
    assert graph.connected_components == ((0, 1), (2,))

    graph = smiles('[Fe+2]')
    assert graph.atom(0).charge == 2
    graph = smiles('[nH]1cccc1')
    assert graph.atom(0).element == 'N'
    assert graph.atom(0).is_part_of_aromatic_ring
    graph = smiles('[CH3:7]C')
    assert graph.atom(0).bracket.atom_class == 7


def test_chirality_marks():
    graph = smiles('N[C@@H](C)C(=O)O')
    assert graph.atom(1).bracket.chirality == '@@'
    graph = smiles('N[C@TH1H](C)C(=O)O')
    assert graph.atom(1).bracket.chirality == '@'
    graph = smiles('C[C@SP1H]C')
    assert graph.atom(1).bracket.chirality is None


def test_percent_closures():
    graph = smiles('C%10CCCCC%10')
    assert len(graph) == 6
    assert graph.has_edge(0, 5)
    graph = smiles('C%12CC[CH2]%12')
    assert graph.has_edge(0, 3)
    graph = smiles('C0CCC0')
    assert graph.has_edge(0, 3)


def test_closure_bonds():
    graph = smiles('C=1CCCCC1')
    assert graph.edge(0, 5).bond_type == '='
    graph = smiles('C1CCCCC=1')
    assert graph.edge(0, 5).bond_type == '='
    graph = smiles('C1CC.C1')
    assert graph.has_edge(0, 3)
    assert graph.connected_components == ((0, 1, 2, 3),)


def test_errors():
    for string, position in (('', 0), ('C1CC', 1), ('CC)', 2), ('C==C', 2), ('C(C', 1), ('C[C', 1), ('CX', 1),
                             ('(C)C', 0), ('C=', 1), ('C.', 1), ('CC=(C)C', 2), ('C%1C', 1), ('C11', 2),
                             ('C=1CC#1', 6), ('C..C', 2)):
        with raises(ParseError) as e:
            smiles(string)
        assert e.value.position == position, string


def test_valence_warning():
    graph = smiles('C(C)(C)(C)(C)C')
    assert len(graph.diagnostics) == 1
    assert isinstance(graph.diagnostics[0], ChemistryWarning)
    assert graph.diagnostics[0].atom == 0

    assert not smiles('CS(=O)(=O)O').diagnostics
    assert not smiles('C[N+](C)(C)C').diagnostics


def test_unknown_element():
    graph = smiles('[Xx]C')
    assert len(graph) == 2
    assert graph.atom(0).element == 'Xx'
    assert graph.has_edge(0, 1)
    assert len(graph.diagnostics) == 1
    warning = graph.diagnostics[0]
    assert isinstance(warning, ChemistryWarning)
    assert warning.atom == 0
    assert 'Xx' in warning.message

    graph = smiles('[Co+2]')
    assert graph.atom(0).element == 'Co'
    assert not graph.diagnostics


def test_ringbonds_pairing():
    for string in ('C1CCCCC1', 'C1CC2CCC1CC2', 'C1CC1C1CC1', 'C%10CC%10C1CC1'):
        graph = smiles(string)
        for number, opener, closer, edge in graph.closures:
            a, b = graph.atom(opener), graph.atom(closer)
            assert Atom.have_common_ringbond(a, b), string
            assert Atom.have_common_ringbond(b, a), string
            assert number in a.ringbonds and number in b.ringbonds
            assert graph.edge(opener, closer).id == edge

        graph.resolve_rings()
        assert all(not graph.atom(n).ringbond_count for n in graph), string
        for _, opener, closer, _ in graph.closures:
            assert graph.has_edge(opener, closer)


def test_reused_closure_number():
    graph = smiles('C1CC1C1CC1')
    assert len(graph) == 6
    assert graph.edges_count == 7
    assert [(n, a, b) for n, a, b, _ in graph.closures] == [(1, 0, 2), (1, 3, 5)]
    assert graph.has_edge(2, 3)
    graph.resolve_rings()
    assert len(graph.rings) == 2
    assert sorted(len(r) for r in graph.rings) == [3, 3]
    assert graph.atom(2).rings != graph.atom(3).rings


def test_reader():
    data = StringIO('CCO id:1 name=ethanol\nC1CC\n\nc1ccccc1 id:2\n')
    with SMILESRead(data) as f:
        molecules = f.read()
        assert f.errors == 1
    assert len(molecules) == 2
    assert molecules[0].meta == {'id': '1', 'name': 'ethanol'}
    assert len(molecules[1]) == 6

    data = StringIO('smiles id\nCC 5\n')
    molecules = SMILESRead(data, header=True).read()
    assert molecules[0].meta == {'id': '5'}

    with raises(ParseError):
        SMILESRead(StringIO('C1CC\n'), ignore=False).read()
