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
from json import loads
from Smiles2D.CLI import argparser
from Smiles2D.CLI.main_layout import layout_core


def _run(text, **kwargs):
    output = StringIO()
    options = {'bond_length': .825, 'no_stereo': False, 'no_compact': False}
    options.update(kwargs)
    code = layout_core(input=StringIO(text), output=output, **options)
    return code, [loads(x) for x in output.getvalue().splitlines()]


def test_layout():
    code, out = _run('CCO id:1\n')
    assert code == 0
    assert len(out) == 1
    assert len(out[0]['atoms']) == 3
    assert len(out[0]['bonds']) == 2
    assert out[0]['meta'] == {'id': '1'}


def test_invalid_lines():
    code, out = _run('CCO\nC1CC\n')
    assert code == 1
    assert len(out) == 1
    assert len(out[0]['atoms']) == 3

    code, out = _run('C1CC\n')
    assert code == 2
    assert not out


def test_options():
    code, out = _run('N[C@@H](C)C(=O)O\n', no_stereo=True, bond_length=1.5)
    assert code == 0
    assert not any(x['wedge'] for x in out[0]['bonds'])
    atoms = {x['id']: x for x in out[0]['atoms']}
    assert abs(((atoms[0]['x'] - atoms[1]['x']) ** 2 + (atoms[0]['y'] - atoms[1]['y']) ** 2) ** .5 - 1.5) < 1e-6


def test_argparser():
    args = argparser().parse_args(['layout', '--bond-length', '1.5', '-S'])
    assert args.bond_length == 1.5
    assert args.no_stereo
    assert not args.no_compact
    assert args.func is layout_core


def test_epilog():
    assert argparser().epilog == '(c) Smiles2D contributors'
