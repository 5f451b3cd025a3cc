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
from CachedMethods import cached_property
from logging import warning
from typing import Dict, Iterator, List, Optional, Tuple, Union
from .atom import Atom
from .edge import Edge
from .ring import Ring
from ..algorithms.calculate2d import Calculate2D, UNPLACED
from ..algorithms.components import GraphComponents
from ..algorithms.depict import Depict
from ..algorithms.pseudo import PseudoElements
from ..algorithms.rings import RingsResolver
from ..algorithms.stereo import Stereo
from ..exceptions import ChemistryWarning, LayoutDegenerate
from ..periodictable import elements_set, max_bonds
from ..vector import Vector2


class MoleculeGraph(Depict, PseudoElements, Stereo, Calculate2D, RingsResolver, GraphComponents):
    """
    Molecular graph in flat arenas. Atoms, edges and rings are stored by integer ids and refer each other by ids only.

    Atoms and edges are created by parser in source order and never deleted.
    """
    __slots__ = ('_atoms', '_edges', '_adjacency', '_parents', '_closures', '_stereo_order', '_rings',
                 '_ring_connections', '_positions', '_wedges', '_state', '_resolved', 'diagnostics', '_meta',
                 '__dict__')

    def __init__(self):
        self._atoms: Dict[int, Atom] = {}
        self._edges: Dict[int, Edge] = {}
        self._adjacency: Dict[int, Dict[int, int]] = {}
        self._parents: Dict[int, Optional[int]] = {}
        self._closures: List[Tuple[int, int, int, int]] = []
        self._stereo_order: Dict[int, List[Optional[int]]] = {}
        self._rings: Dict[int, Ring] = {}
        self._ring_connections: Dict[int, Dict[int, Tuple[int, ...]]] = {}
        self._positions: Dict[int, Vector2] = {}
        self._wedges: Dict[int, int] = {}
        self._state = UNPLACED
        self._resolved = False
        self.diagnostics: List[Union[ChemistryWarning, LayoutDegenerate]] = []
        self._meta = {}

    def __len__(self):
        return len(self._atoms)

    def __iter__(self):
        return iter(self._atoms)

    def __contains__(self, n: int):
        return n in self._atoms

    def __bool__(self):
        return bool(self._atoms)

    def __repr__(self):
        return f'{self.__class__.__name__}(atoms={len(self._atoms)}, edges={len(self._edges)})'

    @property
    def meta(self) -> dict:
        return self._meta

    @property
    def state(self) -> int:
        return self._state

    def atom(self, n: int) -> Atom:
        return self._atoms[n]

    def atoms(self) -> Iterator[Tuple[int, Atom]]:
        """
        iterate over all atoms
        """
        return iter(self._atoms.items())

    @cached_property
    def atoms_count(self) -> int:
        return len(self._atoms)

    @cached_property
    def edges_count(self) -> int:
        return len(self._edges)

    def edge(self, n: int, m: int) -> Edge:
        return self._edges[self._adjacency[n][m]]

    def edge_by_id(self, edge_id: int) -> Edge:
        return self._edges[edge_id]

    def has_edge(self, n: int, m: int) -> bool:
        return m in self._adjacency[n]

    def edges(self) -> Iterator[Edge]:
        """
        iterate over all edges in creation order
        """
        return iter(self._edges.values())

    def neighbors(self, n: int) -> Tuple[int, ...]:
        return tuple(self._adjacency[n])

    def ring(self, ring_id: int) -> Ring:
        return self._rings[ring_id]

    @property
    def rings(self) -> List[Ring]:
        """
        perceived cycles. synthetic bridged systems excluded
        """
        return [r for r in self._rings.values() if not r.is_bridged]

    @property
    def bridged_rings(self) -> List[Ring]:
        return [r for r in self._rings.values() if r.is_bridged]

    def position(self, n: int) -> Vector2:
        return self._positions[n]

    @property
    def positions(self) -> Dict[int, Vector2]:
        return self._positions

    @property
    def closures(self) -> List[Tuple[int, int, int, int]]:
        """
        ring closures table: (closure number, opening atom, closing atom, edge id)
        """
        return self._closures

    def add_atom(self, atom: Atom, parent: Optional[int] = None) -> int:
        """
        add atom to arena.

        :param parent: atom bonded to this one in parsing tree. None for first atom of component.
        """
        if not isinstance(atom, Atom):
            raise TypeError('Atom expected')
        n = len(self._atoms)
        self._atoms[n] = atom
        self._adjacency[n] = {}
        self._parents[n] = parent
        self._stereo_order[n] = []
        self.__dict__.clear()
        return n

    def add_edge(self, n: int, m: int, bond_type: str = '-') -> int:
        if n == m:
            raise KeyError('atom can not be bonded to itself')
        elif m in self._adjacency[n]:
            raise KeyError('atoms already bonded')
        edge_id = len(self._edges)
        self._edges[edge_id] = Edge(edge_id, n, m, bond_type)
        self._adjacency[n][m] = edge_id
        self._adjacency[m][n] = edge_id
        self.__dict__.clear()
        return edge_id

    def add_closure(self, number: int, opener: int, closer: int, edge_id: int):
        self._closures.append((number, opener, closer, edge_id))

    def finalize(self):
        """
        fill neighbors caches and check valences. problems recorded in diagnostics.
        """
        atoms = self._atoms
        edges = self._edges
        for n, atom in atoms.items():
            atom.neighbouring_elements = []
            bonds = 0
            for m, e in self._adjacency[n].items():
                atom.add_neighbouring_element(atoms[m].element)
                bonds += edges[e].weight
            atom.bond_count = bonds
            if atom.bracket is None:
                atom.has_hydrogen = atom.implicit_hydrogens(bonds) > 0

            if atom.element not in elements_set:
                self._chemistry_warning(f'unknown element {atom.element}', n)
            elif atom.element in max_bonds:
                valence = bonds + (atom.bracket.hydrogens if atom.bracket else 0)
                if valence > atom.max_bonds + abs(atom.charge):
                    self._chemistry_warning(f'valence of {atom.element} exceeded: {valence}', n)

    def _chemistry_warning(self, message: str, n: Optional[int] = None):
        warning(f'atom {n}: {message}')
        self.diagnostics.append(ChemistryWarning(message, n))

    def _layout_degenerate(self, message: str, n: Optional[int] = None):
        warning(f'atom {n}: {message}')
        self.diagnostics.append(LayoutDegenerate(message, n))

    def hydrogens(self, n: int) -> int:
        """
        implicit or bracket hydrogens count
        """
        atom = self._atoms[n]
        return atom.implicit_hydrogens(atom.bond_count)


__all__ = ['MoleculeGraph']
