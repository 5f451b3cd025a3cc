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
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter, FileType
from importlib.util import find_spec
from .main_layout import layout_core
from ..version import version


def _layout(subparsers):
    parser = subparsers.add_parser('layout', help='2D coordinates of SMILES',
                                   formatter_class=ArgumentDefaultsHelpFormatter)
    parser.add_argument("--input", "-i", default="-", type=FileType(),
                        help="SMILES file. one molecule per line")
    parser.add_argument("--output", "-o", default="-", type=FileType('w'),
                        help="JSON lines outputfile. one drawing per line")
    parser.add_argument("--bond-length", "-b", type=float, default=.825, help="distance between bonded atoms")
    parser.add_argument("--no-stereo", "-S", action='store_true', help="don't draw wedge bonds")
    parser.add_argument("--no-compact", "-C", action='store_true',
                        help="draw all atoms without contraction of terminal groups")
    parser.set_defaults(func=layout_core)


def argparser():
    parser = ArgumentParser(description="Smiles2D", epilog="(c) Smiles2D contributors", prog='smiles2d')
    parser.add_argument("--version", "-v", action="version", version=version(), default=False)
    parser.add_argument("--verbose", "-V", action='store_true', help="log layout details")
    subparsers = parser.add_subparsers(title='subcommands', description='available utilities')

    _layout(subparsers)

    if find_spec('argcomplete'):
        from argcomplete import autocomplete
        autocomplete(parser)

    return parser
