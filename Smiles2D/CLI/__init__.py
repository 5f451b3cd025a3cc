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
from logging import basicConfig, INFO, WARNING
from sys import exit
from .parser import argparser


def launcher():
    parser = argparser()
    args = parser.parse_args()
    if 'func' in args:
        basicConfig(level=INFO if args.verbose else WARNING)
        exit(args.func(**vars(args)))
    else:
        parser.print_help()


__all__ = ['launcher', 'argparser']
