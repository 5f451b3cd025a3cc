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


class ParseError(ValueError):
    """
    SMILES string is malformed. position is offset of the offending character.
    """
    def __init__(self, message, position=None):
        if position is None:
            super().__init__(message)
        else:
            super().__init__(f'{message} (position {position})')
        self.message = message
        self.position = position


class ChemistryWarning(Warning):
    """
    chemically invalid input: unknown element or valence overflow.
    """
    def __init__(self, message, atom=None):
        super().__init__(message)
        self.message = message
        self.atom = atom


class LayoutDegenerate(Warning):
    """
    zero length or not finite vector found during layout. replaced by default offset.
    """
    def __init__(self, message, atom=None):
        super().__init__(message)
        self.message = message
        self.atom = atom


class ImplementationError(Exception):
    """
    layout stages called out of order.
    """


__all__ = ['ParseError', 'ChemistryWarning', 'LayoutDegenerate', 'ImplementationError']
