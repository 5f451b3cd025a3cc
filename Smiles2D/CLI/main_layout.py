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
from json import dumps
from sys import stderr
from traceback import format_exc
from ..algorithms.calculate2d import Calculate2D
from ..files import SMILESRead


def _serialize(graph, drawing):
    atoms = []
    for atom in drawing['atoms']:
        atom = atom._asdict()
        atom['pseudo_elements'] = [x._asdict() for x in atom['pseudo_elements']]
        atoms.append(atom)
    return dumps({'meta': graph.meta, 'atoms': atoms, 'bonds': [x._asdict() for x in drawing['bonds']],
                  'rings': [x._asdict() for x in drawing['rings']],
                  'diagnostics': [str(x) for x in graph.diagnostics]})


def layout_core(**kwargs):
    config = Calculate2D.layout_settings(bond_length=kwargs['bond_length'], isomeric=not kwargs['no_stereo'],
                                         compact=not kwargs['no_compact'])
    inputdata = SMILESRead(kwargs['input'])
    output = kwargs['output']

    err = 0
    num = 0
    for num, graph in enumerate(inputdata, start=1):
        if num % 100 == 1:
            print("molecule: %d" % num, file=stderr)
        try:
            output.write(_serialize(graph, graph.depict(config)))
            output.write('\n')
        except Exception:
            err += 1
            print('molecule %d consist errors: %s' % (num, format_exc()), file=stderr)

    err += inputdata.errors
    num += inputdata.errors
    print('%d from %d molecules processed' % (num - err, num), file=stderr)
    return 0 if num and not err else 1 if num - err else 2
