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
from CachedMethods import FrozenDict, cached_property
from collections import deque
from itertools import combinations
from logging import info
from math import copysign, cos, isfinite, pi, radians, sin, tan
from typing import Dict, List, Optional, Set, Tuple
from ..exceptions import ImplementationError
from ..vector import Vector2


UNPLACED, TREE_POSITIONED, OVERLAP_RESOLVED, STEREO_ANNOTATED, DONE = range(5)


def _wrap(angle):
    """
    angle in (-pi, pi] range
    """
    while angle <= -pi:
        angle += 2 * pi
    while angle > pi:
        angle -= 2 * pi
    return angle


def _cross(a: Vector2, b: Vector2) -> float:
    return a.x * b.y - a.y * b.x


def _fused_bond(ring, placed):
    """
    first bond of ring shared with one of placed rings: (placed ring, atom, atom)
    """
    members = ring.members
    for current in placed:
        edges = current.edges
        for a, b in zip(members, members[1:] + members[:1]):
            if frozenset((a, b)) in edges:
                return current, a, b


def _project(points: Dict[int, Vector2], n: int, m: int, length: float, at_least: bool = False) -> float:
    """
    move pair of points symmetrically to given distance. returns distance error before move.
    """
    pn, pm = points[n], points[m]
    delta = pm - pn
    d = delta.length()
    if at_least and d >= length:
        return 0.
    if d < 1e-9:
        unit = Vector2(1., 0.).rotate(n + m)
    else:
        unit = delta * (1 / d)
    shift = unit * ((d - length) / 2)
    pn.add(shift)
    pm.add(-shift)
    return abs(d - length)


def _arc(start: Vector2, end: Vector2, count: int, bond_length: float, normal: Vector2) -> List[Vector2]:
    """
    count points between start and end on circular arc bulged to normal side. neighbors are bond length apart.
    too long chord gives straight line.
    """
    steps = count + 1
    chord = start.distance(end)
    if chord < 1e-9:
        return [start + normal * (bond_length * min(k, steps - k)) for k in range(1, steps)]
    elif chord >= steps * bond_length * (1 - 1e-6):
        return [start + (end - start) * (k / steps) for k in range(1, steps)]

    low, high = 0., 2 * pi  # chord of arc decreases with arc angle
    for _ in range(60):
        angle = (low + high) / 2
        if bond_length * sin(angle / 2) / sin(angle / (2 * steps)) > chord:
            low = angle
        else:
            high = angle
    angle = (low + high) / 2
    radius = bond_length / (2 * sin(angle / (2 * steps)))
    middle = Vector2.midpoint(start, end)
    center = middle - normal * (radius * cos(angle / 2))
    sign = max((1., -1.),
               key=lambda s: Vector2.dot(start.clone().rotate_around(s * angle / 2, center) - middle, normal))
    return [start.clone().rotate_around(sign * angle * k / steps, center) for k in range(1, steps)]


class Calculate2D:
    """
    Rule based 2D coordinates generation.

    Layout runs in stages: tree positioning, overlap resolution, stereo annotation and pseudo elements contraction.
    Each stage requires previous one. clean2d runs all of them.
    """
    __slots__ = ()

    @classmethod
    def layout_settings(cls, *, bond_length: float = .825, overlap_sensitivity: float = .42,
                        overlap_iterations: int = 1, min_separation: float = .5, rotate_away_angle: float = 20.,
                        isomeric: bool = True, compact: bool = True, terminal_carbons: bool = False,
                        cip_depth: int = 10, components_gap: float = 2.) -> FrozenDict:
        """
        Settings for 2D layout. Returns immutable config for clean2d.

        :param bond_length: distance between bonded atoms
        :param overlap_sensitivity: atoms with overlap score above are candidates for rotation
        :param overlap_iterations: count of rotatable bonds passes
        :param min_separation: minimal distance between not bonded atoms in bond lengths
        :param rotate_away_angle: rotation step of terminal atoms in degrees
        :param isomeric: if True, annotate stereo centers with wedges
        :param compact: if True, contract terminal groups into pseudo elements
        :param terminal_carbons: if True, terminal carbons labels are drawn
        :param cip_depth: depth of substituents digraph for priorities calculation
        :param components_gap: distance between disconnected components in bond lengths
        """
        if bond_length <= 0:
            raise ValueError('bond length should be positive')
        return FrozenDict({'bond_length': bond_length, 'overlap_sensitivity': overlap_sensitivity,
                           'overlap_iterations': overlap_iterations, 'min_separation': min_separation,
                           'rotate_away_angle': rotate_away_angle, 'isomeric': isomeric, 'compact': compact,
                           'terminal_carbons': terminal_carbons, 'cip_depth': cip_depth,
                           'components_gap': components_gap})

    _layout_config = FrozenDict({'bond_length': .825, 'overlap_sensitivity': .42, 'overlap_iterations': 1,
                                 'min_separation': .5, 'rotate_away_angle': 20., 'isomeric': True, 'compact': True,
                                 'terminal_carbons': False, 'cip_depth': 10, 'components_gap': 2.})

    def clean2d(self, config: Optional[dict] = None):
        """
        Calculate 2d layout of graph.

        :param config: settings from layout_settings. defaults used if omitted
        """
        config = self._layout_options(config)
        self.resolve_rings()
        self._reset_layout()
        self.position_tree(config)
        self.resolve_overlaps(config)
        self.annotate_stereo(config)
        self.contract_pseudo_elements(config)

    def _check_state(self, state: int):
        if self._state != state:
            raise ImplementationError(f'layout stage {state} expected, graph in stage {self._state}')

    def _layout_options(self, config):
        if config is None:
            return self._layout_config
        return FrozenDict({**self._layout_config, **config})

    def _reset_layout(self):
        self._positions = {}
        self._wedges = {}
        self._state = UNPLACED
        for atom in self._atoms.values():
            if atom.bridged_ring is not None:
                atom.rings = [atom.bridged_ring]
            atom.anchored_rings = []
            atom.plane = 0
            atom.chirality = ''
            atom.is_stereo_center = False
            atom.priority = 0
            atom.main_chain = False
            atom.hydrogen_direction = 'down'
            atom.is_drawn = True
            atom.draw_explicit = False
            atom.clear_pseudo_elements()
        for edge in self._edges.values():
            edge.wedge = ''
            edge.center = False
        for ring in self._rings.values():
            ring.positioned = False
            ring.center = Vector2()

    def position_tree(self, config: Optional[dict] = None):
        """
        Place atoms by walking over graph from first atom of each component.
        """
        self._check_state(UNPLACED)
        config = self._layout_options(config)
        if not self._resolved:
            self.resolve_rings()
        bond_length = config['bond_length']

        atoms = self._atoms
        depth = {n: 1 for n in atoms}
        for n in reversed(atoms):
            p = self._parents[n]
            if p is not None and depth[p] <= depth[n]:
                depth[p] = depth[n] + 1
        for n, atom in atoms.items():
            atom.subtree_depth = depth[n]

        for component in self.connected_components:
            self.__position_component(component[0], bond_length)

        self.__fix_degenerate(bond_length)
        self.__fix_cis_trans()
        for atom in atoms.values():
            atom.restore_rings()
        self.__set_centered_bonds()
        self.__arrange_components(config)
        self._state = TREE_POSITIONED

    def resolve_overlaps(self, config: Optional[dict] = None):
        """
        Rotate branches around single bonds and terminal atoms around their neighbors to decrease overlap score.
        """
        self._check_state(TREE_POSITIONED)
        config = self._layout_options(config)
        bond_length = config['bond_length']
        sensitivity = config['overlap_sensitivity']
        positions = self._positions
        adjacency = self._adjacency

        total, scores = self._overlap_score(bond_length)
        for _ in range(config['overlap_iterations']):
            for edge in self._edges.values():
                if not self._is_rotatable(edge):
                    continue
                n, m = edge.source, edge.target
                if len(self._branch(n, m)) >= len(self._branch(m, n)):
                    a, b = n, m
                else:
                    a, b = m, n
                if self.__subtree_overlap(b, a, scores, sensitivity) <= sensitivity:
                    continue

                neighbors = [x for x in adjacency[b] if x != a]
                center = positions[b].clone()
                if len(neighbors) == 1:
                    x = neighbors[0]
                    angle = positions[x].get_rotate_away_from_angle(positions[a], center, radians(120))
                    branch = self._branch(x, b)
                    self._rotate_atoms(branch, angle, center)
                    new_total, new_scores = self._overlap_score(bond_length)
                    if new_total > total:
                        self._rotate_atoms(branch, -angle, center)
                    else:
                        total, scores = new_total, new_scores
                elif len(neighbors) == 2:
                    if self._atoms[a].rings and self._atoms[b].rings:
                        continue
                    x, y = neighbors
                    if self.is_ring_edge(b, x) or self.is_ring_edge(b, y):
                        continue
                    angle_x = positions[x].get_rotate_away_from_angle(positions[a], center, radians(120))
                    angle_y = positions[y].get_rotate_away_from_angle(positions[a], center, radians(120))
                    branch_x = self._branch(x, b)
                    branch_y = self._branch(y, b)
                    self._rotate_atoms(branch_x, angle_x, center)
                    self._rotate_atoms(branch_y, angle_y, center)
                    new_total, new_scores = self._overlap_score(bond_length)
                    if new_total > total:
                        self._rotate_atoms(branch_y, -angle_y, center)
                        self._rotate_atoms(branch_x, -angle_x, center)
                    else:
                        total, scores = new_total, new_scores
            total, scores = self._overlap_score(bond_length)

        self.__resolve_terminal_overlaps(scores, config)
        self.__separate(config)
        self.__fix_degenerate(bond_length)
        self.__arrange_components(config)
        self._state = OVERLAP_RESOLVED

    @cached_property
    def _cis_trans_bonds(self) -> Tuple[Tuple[int, int, int, int, bool], ...]:
        """
        double bonds with defined geometry: (u, v, u substituent, v substituent, is cis)
        """
        adjacency = self._adjacency
        out = []
        for edge in self._edges.values():
            if edge.bond_type != '=':
                continue
            u, v = edge.source, edge.target
            if self.is_ring_edge(u, v):
                continue
            a = self.__directional_neighbor(u, v)
            b = self.__directional_neighbor(v, u)
            if a is None or b is None:
                continue
            out.append((u, v, a[0], b[0], a[1] == b[1]))
        return tuple(out)

    def _is_rotatable(self, edge) -> bool:
        n, m = edge.source, edge.target
        if edge.bond_type != '-':
            return False
        elif len(self._adjacency[n]) == 1 or len(self._adjacency[m]) == 1:
            return False
        elif self.is_ring_edge(n, m):
            return False
        for u, v, *_ in self._cis_trans_bonds:
            if n in (u, v) or m in (u, v):
                return False
        return True

    def _overlap_score(self, bond_length: float) -> Tuple[float, Dict[int, float]]:
        """
        total overlap and per atom scores. pairs closer than bond length weighted by (L - d) / L.
        """
        positions = self._positions
        scores = dict.fromkeys(positions, 0.)
        total = 0.
        for component in self.connected_components:
            for i, n in enumerate(component):
                pn = positions[n]
                for m in component[i + 1:]:
                    d = pn.distance(positions[m])
                    if d < bond_length:
                        weight = (bond_length - d) / bond_length
                        total += weight
                        scores[n] += weight
                        scores[m] += weight
        return total, scores

    def _rotate_atoms(self, atoms: Set[int], angle: float, center: Vector2):
        """
        rotate atoms with anchored rings centers
        """
        positions = self._positions
        rings = self._rings
        for n in atoms:
            positions[n].rotate_around(angle, center)
            for r in self._atoms[n].anchored_rings:
                rings[r].center.rotate_around(angle, center)

    def _layout_rings(self, n: int) -> List[int]:
        atom = self._atoms[n]
        if atom.bridged_ring is not None:
            cluster = self._rings[atom.bridged_ring].rings
            return [atom.bridged_ring, *(r for r in atom.original_rings if r not in cluster)]
        return atom.rings

    def _direction(self, start: Vector2, end: Vector2, n: Optional[int] = None) -> Vector2:
        """
        unit vector from start to end. zero or not finite vectors replaced by default offset.
        """
        vector = end - start
        length = vector.length()
        if not isfinite(length) or length < 1e-9:
            self._layout_degenerate('zero length direction replaced by default offset', n)
            return Vector2(1., 0.)
        return vector.divide(length)

    def __position_component(self, root: int, bond_length: float):
        positions = self._positions
        adjacency = self._adjacency
        rings = self._rings
        turns = {root: 0}
        back = {root: Vector2(bond_length, 0.).rotate(radians(-60))}
        positions[root] = Vector2(bond_length, 0.)
        stack = [(root, None)]
        while stack:
            n, previous = stack.pop()
            ring = next((r for r in self._layout_rings(n) if not rings[r].positioned), None)
            if ring is not None:
                system = self.__create_ring_system(ring, n, back[n], bond_length)
                for m in system:
                    children = [x for x in adjacency[m] if x not in positions]
                    if not children:
                        continue
                    self.__place_ring_substituents(m, children, bond_length)
                    for c in reversed(children):
                        turns[c] = 0
                        back[c] = positions[m]
                        stack.append((c, m))
            else:
                children = [x for x in adjacency[n] if x not in positions]
                if not children:
                    continue
                self.__place_chain_children(n, previous, back[n], children, turns, bond_length)
                for c in reversed(children):
                    back[c] = positions[n]
                    stack.append((c, n))

    def __place_chain_children(self, n, previous, back, children, turns, bond_length):
        atoms = self._atoms
        positions = self._positions
        center = positions[n]
        base = self._direction(back, center, n).angle()
        k = len(children)

        if k == 1:
            c = children[0]
            bond = self.edge(n, c).bond_type
            previous_bond = self.edge(n, previous).bond_type if previous is not None else None
            if previous is not None and (bond == '#' or previous_bond == '#' or bond == previous_bond == '='):
                slots = [0.]  # linear
            elif turns[n]:
                slots = [-copysign(60., turns[n])]
            else:
                slots = [self.__free_turn(n, center, base, bond_length)]
            order = children
        else:
            if previous is None and k > 2:
                slots = [_wrap(radians(360. * i / k)) * 180 / pi for i in range(k)]
            else:
                slots = [-180. + i * 360. / (k + 1) for i in range(1, k + 1)]
            prefer = -turns[n] or 1
            slots.sort(key=lambda t: (abs(t), t * prefer < 0))
            order = sorted(children, key=lambda x: (-atoms[x].subtree_depth, x))
            atoms[order[0]].main_chain = True

        for c, t in zip(order, slots):
            positions[c] = center + Vector2(bond_length, 0.).rotate(base + radians(t))
            turns[c] = copysign(1., t) if t else 0

    def __free_turn(self, n, center, base, bond_length) -> float:
        # zig-zag side with more free space
        positions = self._positions
        best = None
        for t in (60., -60.):
            candidate = center + Vector2(bond_length, 0.).rotate(base + radians(t))
            free = min((candidate.distance(p) for m, p in positions.items() if m != n), default=0.)
            if best is None or free > best[0] + 1e-9:
                best = (free, t)
        return best[1]

    def __place_ring_substituents(self, n, children, bond_length):
        positions = self._positions
        rings = self._rings
        center = positions[n]
        occupied = sorted(_wrap((positions[m] - center).angle()) for m in self._adjacency[n] if m in positions)
        centers = [_wrap((r.center - center).angle()) for r in rings.values()
                   if r.positioned and n in r.members]

        gaps = []
        for i, a in enumerate(occupied):
            if len(occupied) == 1:
                width = 2 * pi
            else:
                width = (occupied[(i + 1) % len(occupied)] - a) % (2 * pi)
            free = not any(0 < (c - a) % (2 * pi) < width for c in centers)
            gaps.append((free, width, a))
        free, width, start = max(gaps, key=lambda x: (x[0], x[1]))

        k = len(children)
        for i, c in enumerate(children, start=1):
            angle = start + width * i / (k + 1)
            positions[c] = center + Vector2(bond_length, 0.).rotate(angle)

    def __create_ring_system(self, ring_id, n, back, bond_length) -> List[int]:
        """
        place ring and all rings connected to it. returns atoms of rings system.
        """
        positions = self._positions
        rings = self._rings
        ring = rings[ring_id]
        polygon = ring.polygon
        radius = bond_length / (2 * sin(pi / len(polygon)))
        center = positions[n] + self._direction(back, positions[n], n) * radius
        self.__place_ring(ring, center, n, None, bond_length)
        self._atoms[n].add_anchored_ring(ring_id)

        queue = deque([ring_id])
        system = []
        seen = set()
        while queue:
            current = rings[queue.popleft()]
            for m in current.members:
                if m not in seen:
                    seen.add(m)
                    system.append(m)
            members = set(current.members)
            neighbors = sorted({r for m in current.members for r in self._layout_rings(m)} - {current.id})
            for r in neighbors:
                other = rings[r]
                if other.positioned:
                    continue
                shared = [m for m in other.polygon if m in members]
                pair = self.__shared_edge(other, shared)
                if pair is not None:
                    a, b = pair
                    self.__place_fused(current, other, a, b, bond_length)
                    self._atoms[a].add_anchored_ring(r)
                else:
                    s = shared[0] if shared else next(m for m in other.members if m in members)
                    self.__place_spiro(current, other, s, bond_length)
                    self._atoms[s].add_anchored_ring(r)
                queue.append(r)
        return system

    def __shared_edge(self, ring, shared) -> Optional[Tuple[int, int]]:
        if len(shared) < 2:
            return
        polygon = ring.polygon
        size = len(polygon)
        for i, a in enumerate(polygon):
            b = polygon[(i + 1) % size]
            if a in shared and b in shared:
                return a, b

    def __place_fused(self, current, ring, a, b, bond_length):
        positions = self._positions
        pa, pb = positions[a], positions[b]
        size = len(ring.polygon)
        apothem = bond_length / (2 * tan(pi / size))
        middle = Vector2.midpoint(pa, pb)
        if pa.distance(pb) < 1e-9:
            self._layout_degenerate('fused ring shared bond has zero length', a)
            normals = (Vector2(0., 1.), Vector2(0., -1.))
        else:
            normals = Vector2.normals(pa, pb)
        first, second = (middle + x * apothem for x in normals)
        if first.distance_sq(current.center) >= second.distance_sq(current.center):
            center = first
        else:
            center = second
        self.__place_ring(ring, center, a, b, bond_length)

    def __place_spiro(self, current, ring, s, bond_length):
        positions = self._positions
        size = len(ring.polygon)
        radius = bond_length / (2 * sin(pi / size))
        center = positions[s] + self._direction(current.center, positions[s], s) * radius
        self.__place_ring(ring, center, s, None, bond_length)

    def __place_ring(self, ring, center, start, away, bond_length):
        """
        place ring as regular polygon around center starting from start atom.
        walk goes away from `away` atom which should be polygon neighbor of start.
        """
        if ring.is_bridged:
            self.__place_bridged(ring, center, start, away, bond_length)
            return
        positions = self._positions
        size = len(ring.members)
        radius = bond_length / (2 * sin(pi / size))
        step = 2 * pi / size

        first = self._direction(center, positions[start], start).angle()
        if away is not None:
            delta = _wrap(self._direction(center, positions[away], away).angle() - first)
            step = -copysign(step, delta)
        for k, m in enumerate(ring.walk(start, away)):
            if m not in positions:
                positions[m] = center + Vector2(radius, 0.).rotate(first + k * step)
        ring.center = center
        ring.positioned = True

    def __place_bridged(self, ring, center, start, away, bond_length):
        """
        Place bridged system as rigid body.

        Local geometry is built first: cluster rings fused as regular polygons if they tile the plane,
        otherwise main polygon with bridges drawn as arcs and relaxed to bond length.
        Then geometry moved to start atom. For fused systems `away` atom direction is kept and system
        lies on the side of center, otherwise free side of start atom looks to center.
        """
        positions = self._positions
        rings = self._rings
        local = self.__lattice_geometry(ring, bond_length)
        if local is None:
            local = self.__relaxed_geometry(ring, bond_length)

        if away is not None:
            base = positions[start]
            axis = positions[away] - base
            points = self.__fit(local, start, away, axis)
            side = _cross(axis, center - base)
            if _cross(axis, Vector2.average(points.values()) - base) * side < 0:
                points = self.__fit({n: Vector2(p.x, -p.y) for n, p in local.items()}, start, away, axis)
        else:
            points = self.__fit(local, start, None, positions[start] - center)

        for n, p in points.items():
            if n not in positions:
                positions[n] = p
        ring.center = Vector2.average(positions[n] for n in ring.members)
        ring.positioned = True
        for r in ring.rings:
            member = rings[r]
            member.center = Vector2.average(positions[n] for n in member.members)
            member.positioned = True

    def __fit(self, local, start, target, direction) -> Dict[int, Vector2]:
        # rotate target atom or free side of start to direction and move start to its position
        origin = local[start]
        if target is not None:
            own = local[target] - origin
        else:
            own = self.__free_direction(start, local)
        angle = direction.angle() - own.angle()
        base = self._positions[start]
        return {n: (p - origin).rotate(angle).add(base) for n, p in local.items()}

    def __free_direction(self, n, local) -> Vector2:
        neighbors = [m for m in self._adjacency[n] if m in local]
        out = Vector2()
        for m in neighbors:
            out.add((local[n] - local[m]).normalize())
        if out.length() < 1e-6:
            delta = local[neighbors[0]] - local[n]
            out = Vector2(-delta.y, delta.x)
        return out

    def __lattice_geometry(self, ring, bond_length) -> Optional[Dict[int, Vector2]]:
        """
        cluster rings as regular polygons fused by shared bonds. None if rings can't be drawn this way.
        """
        rings = self._rings
        adjacency = self._adjacency
        tolerance = 1e-3 * bond_length
        first, *pending = (rings[r] for r in ring.rings)
        radius = first.circumradius(bond_length)
        local = {n: Vector2(radius, 0.).rotate(k * first.central_angle) for k, n in enumerate(first.members)}
        centers = {first.id: Vector2()}
        placed = [first]

        while pending:
            for other in pending:
                fused = _fused_bond(other, placed)
                if fused is not None:
                    break
            else:
                return
            pending.remove(other)
            current, a, b = fused
            pa, pb = local[a], local[b]
            middle = Vector2.midpoint(pa, pb)
            apothem = other.apothem(bond_length)
            one, two = (middle + x * apothem for x in Vector2.normals(pa, pb))
            c = one if one.distance_sq(centers[current.id]) >= two.distance_sq(centers[current.id]) else two

            first_angle = (pa - c).angle()
            step = -copysign(other.central_angle, _wrap((pb - c).angle() - first_angle))
            radius = other.circumradius(bond_length)
            for k, n in enumerate(other.walk(a, b)):
                p = c + Vector2(radius, 0.).rotate(first_angle + k * step)
                if n not in local:
                    local[n] = p
                elif local[n].distance(p) > tolerance:
                    return
            centers[other.id] = c
            placed.append(other)

        if len(local) != len(ring.members):
            return
        for n, m in combinations(local, 2):
            d = local[n].distance(local[m])
            if m in adjacency[n]:
                if abs(d - bond_length) > tolerance:
                    return
            elif d < .5 * bond_length:
                return
        return local

    def __relaxed_geometry(self, ring, bond_length) -> Dict[int, Vector2]:
        """
        main polygon with bridges as arcs. bonds relaxed to bond length, not bonded atoms pushed apart.
        """
        adjacency = self._adjacency
        polygon = ring.polygon
        size = len(polygon)
        radius = bond_length / (2 * sin(pi / size))
        local = {n: Vector2(radius, 0.).rotate(2 * pi * k / size) for k, n in enumerate(polygon)}
        members = set(ring.members)
        while len(local) < len(members):
            self.__place_arc(self.__bridge_path(members, local), local, bond_length)

        bonds = []
        pairs = []
        for n, m in combinations(ring.members, 2):
            if m in adjacency[n]:
                bonds.append((n, m))
            else:
                pairs.append((n, m))
        limit = .8 * bond_length
        for _ in range(300):
            for n, m in pairs:
                _project(local, n, m, limit, True)
            for n, m in bonds:
                _project(local, n, m, bond_length)
        for _ in range(2000):
            error = 0.
            for n, m in bonds:
                error = max(error, _project(local, n, m, bond_length))
            if error < 1e-6 * bond_length:
                break
        else:
            info(f'bridged ring {ring.id} bonds not relaxed to bond length')
        return local

    def __bridge_path(self, members, local) -> List[int]:
        """
        shortest chain of not placed atoms between two placed ones. ends included.
        """
        adjacency = self._adjacency
        for u in local:
            for x in adjacency[u]:
                if x not in members or x in local:
                    continue
                previous = {x: u}
                queue = deque([x])
                while queue:
                    y = queue.popleft()
                    for z in adjacency[y]:
                        if z == u or z not in members or z in previous:
                            continue
                        elif z in local:
                            path = [z, y]
                            while path[-1] != u:
                                path.append(previous[path[-1]])
                            return path[::-1]
                        previous[z] = y
                        queue.append(z)
                return [u, x]  # dead end

    def __place_arc(self, path, local, bond_length):
        u, *inner, v = path
        if v not in local:
            local[v] = local[u] + Vector2(bond_length, 0.).rotate(v)
            return
        pu, pv = local[u], local[v]
        if pu.distance(pv) < 1e-9:
            normals = (Vector2(0., 1.), Vector2(0., -1.))
        else:
            normals = Vector2.normals(pu, pv)
        others = [p for n, p in local.items() if n != u and n != v]
        best = None
        for normal in normals:
            points = _arc(pu, pv, len(inner), bond_length, normal)
            clearance = min((p.distance(o) for p in points for o in others), default=0.)
            if best is None or clearance > best[0] + 1e-9:
                best = (clearance, points)
        for n, p in zip(inner, best[1]):
            local[n] = p

    def __directional_neighbor(self, n: int, m: int) -> Optional[Tuple[int, bool]]:
        """
        neighbor of n (except m) bonded by / or \\ bond and its side: True if up relative to n
        """
        for x, e in self._adjacency[n].items():
            if x == m:
                continue
            edge = self._edges[e]
            if edge.is_directional:
                if edge.source == n:
                    return x, edge.bond_type == '/'
                return x, edge.bond_type != '/'

    def __fix_cis_trans(self):
        positions = self._positions
        for u, v, a, b, cis in self._cis_trans_bonds:
            pu, pv = positions[u], positions[v]
            axis = pv - pu
            side_a = _cross(axis, positions[a] - pu)
            side_b = _cross(axis, positions[b] - pu)
            if not side_a or not side_b:
                info(f'substituents of double bond {u}={v} collinear with it')
                continue
            if (side_a * side_b > 0) == cis:
                continue
            side_u = self._branch(u, v)
            side_v = self._branch(v, u)
            self.__reflect(side_v if len(side_v) <= len(side_u) else side_u, pu.clone(), pv.clone())

    def __reflect(self, atoms, start, end):
        positions = self._positions
        rings = self._rings
        direction = self._direction(start, end)

        def mirror(p):
            delta = p - start
            projection = direction * Vector2.dot(delta, direction)
            image = start + projection * 2 - delta
            p.x, p.y = image.x, image.y

        for n in atoms:
            mirror(positions[n])
            for r in self._atoms[n].anchored_rings:
                mirror(rings[r].center)

    def __set_centered_bonds(self):
        adjacency = self._adjacency
        edges = self._edges
        for edge in edges.values():
            if edge.bond_type != '=' or self.is_ring_edge(edge.source, edge.target):
                continue
            for n in (edge.source, edge.target):
                if len(adjacency[n]) == 1 or sum(edges[e].bond_type == '=' for e in adjacency[n].values()) > 1:
                    edge.center = True
                    break

    def __subtree_overlap(self, root, exclude, scores, sensitivity) -> float:
        total = 0.
        count = 0
        for n in self._branch(root, exclude):
            s = scores[n]
            if s > sensitivity:
                total += s
                count += 1
        return total / count if count else 0.

    def __closest_atom(self, n: int) -> Optional[int]:
        positions = self._positions
        adjacency = self._adjacency
        p = positions[n]
        component = next(c for c in self.connected_components if n in c)
        candidates = [m for m in component if m != n and m not in adjacency[n]]
        if not candidates:
            return
        return min(candidates, key=lambda m: p.distance_sq(positions[m]))

    def __resolve_terminal_overlaps(self, scores, config):
        positions = self._positions
        angle = radians(config['rotate_away_angle'])
        sensitivity = config['overlap_sensitivity']
        for n, s in sorted(scores.items(), key=lambda x: -x[1]):
            if s <= sensitivity or len(self._adjacency[n]) != 1:
                continue
            closest = self.__closest_atom(n)
            if closest is None:
                continue
            parent = next(iter(self._adjacency[n]))
            positions[n].rotate_away_from(positions[closest], positions[parent], angle)

    def __separate(self, config):
        """
        Push apart not bonded atoms closer than min separation.

        Closest pairs tried first. Moves are rotations of terminal atoms and branches around single bonds
        next to the pair in rotate_away_angle steps. Best move accepted if crowding decreases.
        """
        limit = config['min_separation'] * config['bond_length']
        count = max(2, round(360. / config['rotate_away_angle']))
        angles = [2 * pi * k / count for k in range(1, count)]
        for component in self.connected_components:
            component = set(component)
            for _ in range(50):
                close = self.__close_pairs(component, limit)
                if not close:
                    break
                for n, m in close:
                    move = self.__best_move(n, m, component, limit, angles)
                    if move is not None:
                        self._rotate_atoms(*move)
                        break
                else:
                    info(f'{len(close)} atom pairs closer than {limit:.3f} remain')
                    break

    def __close_pairs(self, component, limit) -> List[Tuple[int, int]]:
        positions = self._positions
        adjacency = self._adjacency
        close = []
        for n, m in combinations(sorted(component), 2):
            if m in adjacency[n]:
                continue
            d = positions[n].distance(positions[m])
            if d < limit:
                close.append((d, n, m))
        close.sort()
        return [(n, m) for _, n, m in close]

    def __best_move(self, n, m, component, limit, angles):
        positions = self._positions
        best = None
        for x, y in ((n, m), (m, n)):
            for atoms, pivot in self.__separation_moves(x, y):
                center = positions[pivot].clone()
                before = self.__crowding(atoms, component, limit)
                for angle in angles:
                    self._rotate_atoms(atoms, angle, center)
                    gain = before - self.__crowding(atoms, component, limit)
                    self._rotate_atoms(atoms, -angle, center)
                    if gain > 1e-9 and (best is None or gain > best[0] + 1e-9):
                        best = (gain, atoms, angle, center)
        if best is not None:
            return best[1:]

    def __separation_moves(self, x, other):
        """
        atoms to rotate with x and rotation center. other atom should not be moved with x.
        """
        adjacency = self._adjacency
        for y in (x, *adjacency[x]):
            for pivot in adjacency[y]:
                if not self.__is_pivot(pivot, y):
                    continue
                atoms = self._branch(y, pivot)
                if x in atoms and other not in atoms:
                    yield atoms, pivot

    def __is_pivot(self, pivot, n) -> bool:
        # branch of n can be rotated around pivot
        edge = self.edge(pivot, n)
        if self.is_ring_edge(pivot, n):
            return False
        elif edge.bond_type == '=':
            if len(self._adjacency[n]) != 1:
                return False
        elif edge.bond_type not in ('-', '/', '\\'):
            return False
        bonds = [self._edges[e].bond_type for e in self._adjacency[pivot].values()]
        if '#' in bonds or bonds.count('=') > 1:
            return False
        return not any(pivot in x[:4] or n in x[:4] for x in self._cis_trans_bonds)

    def __crowding(self, atoms, component, limit) -> float:
        # overlap of atoms with rest of component
        positions = self._positions
        adjacency = self._adjacency
        total = 0.
        for n in atoms:
            pn = positions[n]
            for m in component:
                if m in atoms or m in adjacency[n]:
                    continue
                d = pn.distance(positions[m])
                if d < limit:
                    total += limit - d
        return total

    def __fix_degenerate(self, bond_length):
        positions = self._positions
        for n, p in positions.items():
            if not (isfinite(p.x) and isfinite(p.y)):
                self._layout_degenerate('not finite coordinates replaced', n)
                anchor = next((positions[m] for m in self._adjacency[n]
                               if isfinite(positions[m].x) and isfinite(positions[m].y)), Vector2())
                positions[n] = anchor + Vector2(bond_length, 0.)
        for edge in self._edges.values():
            n, m = edge.source, edge.target
            if positions[n].distance(positions[m]) < 1e-9:
                self._layout_degenerate('bonded atoms coincide', m)
                positions[m].add(Vector2(bond_length, 0.))

    def __arrange_components(self, config):
        # components side by side from left to right
        positions = self._positions
        rings = self._rings
        gap = config['components_gap'] * config['bond_length']
        shift = 0.
        for component in self.connected_components:
            xs = [positions[n].x for n in component]
            ys = [positions[n].y for n in component]
            min_x, max_x = min(xs), max(xs)
            delta = Vector2(shift - min_x, -(max(ys) + min(ys)) / 2)
            for n in component:
                positions[n].add(delta)
            members = set(component)
            for ring in rings.values():
                if ring.positioned and ring.members[0] in members:
                    ring.center.add(delta)
            shift += max_x - min_x + gap


__all__ = ['Calculate2D', 'UNPLACED', 'TREE_POSITIONED', 'OVERLAP_RESOLVED', 'STEREO_ANNOTATED', 'DONE']
