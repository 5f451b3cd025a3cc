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
"""
Smiles2D: SMILES parsing, ring perception and 2D coordinates generation for structure diagrams.
"""
from .containers import *
from .exceptions import *
from .files import *
from .vector import Vector2


__all__ = ['MoleculeGraph', 'Atom', 'Edge', 'Ring', 'BracketInfo', 'Vector2', 'SMILESRead', 'smiles', 'ParseError',
           'ChemistryWarning', 'LayoutDegenerate', 'ImplementationError']
