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
from io import StringIO, TextIOWrapper
from itertools import takewhile
from logging import warning
from pathlib import Path
from re import match, split
from string import digits
from traceback import format_exc
from typing import List, Optional
from ..containers import Atom, BracketInfo, MoleculeGraph
from ..exceptions import ParseError
from ..periodictable import aromatic_symbols


# tokens structure:
# (type: int, value, position)
# types:
# 0: atom
# 1: bond
# 2: open chain (
# 3: close chain )
# 4: dot bond .
# 5: in bracket raw data []
# 6: closure number
# 7: raw closure number
# 8: aromatic atom
# 9: up down bond

replace_dict = {'-': '-', '=': '=', '#': '#', '$': '$', ':': '-', '(': 2, ')': 3}
charge_dict = {'+': 1, '++': 2, '+++': 3, '-': -1, '--': -2, '---': -3}
chirality_dict = {'@': '@', '@@': '@@', '@TH1': '@', '@TH2': '@@'}


class SMILESRead:
    """
    SMILES separated per lines files reader. works similar to opened file object. support `with` context manager.
    on initialization accept opened in text mode file, string path to file,
    pathlib.Path object or another buffered reader object.
    line should be start with SMILES string and
    optionally continues with space/tab separated list of key:value [or key=value] data if header=None.
        example:
            CC(=O)O id:123 key=value
    if header=True then first line of file should be space/tab separated list of keys including smiles column key.
        example:
            ignored_smi_key key1 key2
            CCN 1 2
    also possible to pass list of keys (without smiles_pseudo_key) for mapping space/tab separated list
    of SMILES and values: header=['key1', 'key2'] # order depended

    invalid lines are skipped with logged warning if ignore=True. otherwise ParseError raised.
    """
    def __init__(self, file, header=None, ignore=True):
        if isinstance(file, str):
            self.__file = open(file)
            self.__is_buffer = False
        elif isinstance(file, Path):
            self.__file = file.open()
            self.__is_buffer = False
        elif isinstance(file, (TextIOWrapper, StringIO)):
            self.__file = file
            self.__is_buffer = True
        else:
            raise TypeError('invalid file. TextIOWrapper, StringIO subclasses possible')

        if header is True:
            self.__header = next(self.__file).split()[1:]
        elif header:
            if not isinstance(header, (list, tuple)) or not all(isinstance(x, str) for x in header):
                raise TypeError('expected list (tuple) of strings')
            self.__header = header
        else:
            self.__header = None

        self.errors = 0
        self.__ignore = ignore
        self._data = (self.parse(line) for line in self.__file if line.strip())

    @classmethod
    def create_parser(cls):
        """
        Create SMILES parser function. Parser raises ParseError on invalid SMILES.
        """
        obj = object.__new__(cls)
        return obj._parse_smiles

    def close(self, force=False):
        """
        close opened file

        :param force: force closing of externally opened file or buffer
        """
        if not self.__is_buffer or force:
            self.__file.close()

    def __enter__(self):
        return self

    def __exit__(self, _type, value, traceback):
        self.close()

    def read(self) -> List[MoleculeGraph]:
        """
        parse whole file

        :return: list of parsed molecules
        """
        return list(iter(self))

    def __iter__(self):
        return (x for x in self._data if x is not None)

    def __next__(self):
        return next(iter(self))

    def parse(self, line: str) -> Optional[MoleculeGraph]:
        """
        parse line of file. invalid SMILES logged and skipped.
        """
        smi, *data = line.split()
        if self.__header is None:
            meta = {}
            for x in data:
                try:
                    k, v = split('[=:]', x, maxsplit=1)
                    meta[k] = v
                except ValueError:
                    warning(f'invalid metadata entry: {x}')
        else:
            meta = dict(zip(self.__header, data))

        try:
            graph = self._parse_smiles(smi)
        except ParseError:
            self.errors += 1
            if not self.__ignore:
                raise
            warning(f'line: {smi}\nconsist errors:\n{format_exc()}')
            return
        graph.meta.update(meta)
        return graph

    def _parse_smiles(self, smiles: str) -> MoleculeGraph:
        tokens = self._raw_tokenize(smiles)
        tokens = self._fix_tokens(tokens)
        return self._parse_tokens(tokens)

    @staticmethod
    def _raw_tokenize(smiles):
        token_type = token = start = None
        tokens = []
        for i, s in enumerate(smiles):
            if token_type == 7 and (s not in digits or len(token) == 2):  # %nn closure finished
                if len(token) != 2:
                    raise ParseError('invalid closure', start)
                tokens.append((6, int(''.join(token)), start))
                token_type = token = None

            if s == '[':  # open complex token
                if token_type == 5:  # two opened [
                    raise ParseError('[...[', i)
                elif token:
                    tokens.append((token_type, token, start))
                token = []
                token_type = 5
                start = i
            elif s == ']':  # close complex token
                if token_type != 5:
                    raise ParseError(']..]', i)
                elif not token:
                    raise ParseError('empty [] brackets', start)
                tokens.append((5, ''.join(token), start))
                token_type = token = None
            elif token_type == 5:  # grow token with brackets. validated later
                token.append(s)
            elif s in '()':
                if token:
                    tokens.append((token_type, token, start))
                    token = None
                elif token_type == 2:  # barely opened
                    raise ParseError('(( or ()', i)
                token_type = replace_dict[s]
                tokens.append((token_type, None, i))
            elif s in digits:  # closures
                if token_type == 7:  # % already found. collect number
                    token.append(s)
                    continue
                elif token:
                    tokens.append((token_type, token, start))
                    token = None
                token_type = 6
                tokens.append((6, int(s), i))
            elif s == '%':
                if token:
                    tokens.append((token_type, token, start))
                token_type = 7
                token = []
                start = i
            elif s in '=#:-$':  # bonds found
                if token:
                    tokens.append((token_type, token, start))
                    token = None
                token_type = 1
                tokens.append((1, replace_dict[s], i))
            elif s in r'\/':
                if token:
                    tokens.append((token_type, token, start))
                    token = None
                token_type = 9
                tokens.append((9, s, i))
            elif s == '.':
                if token:
                    tokens.append((token_type, token, start))
                    token = None
                token_type = 4
                tokens.append((4, None, i))
            elif s in 'NOPSFI*':  # organic atoms
                if token:
                    tokens.append((token_type, token, start))
                    token = None
                token_type = 0
                tokens.append((0, s, i))
            elif s in 'bcnops':  # aromatic ring atom
                if token:
                    tokens.append((token_type, token, start))
                    token = None
                token_type = 8
                tokens.append((8, s, i))
            elif s in 'CB':  # flag possible Cl or Br
                if token:
                    tokens.append((token_type, token, start))
                token_type = 0
                token = s
                start = i
            elif token_type == 0 and token:
                if s == 'l':
                    if token == 'C':
                        tokens.append((0, 'Cl', start))
                        token = None
                    else:
                        raise ParseError('invalid element Bl', start)
                elif s == 'r':
                    if token == 'B':
                        tokens.append((0, 'Br', start))
                        token = None
                    else:
                        raise ParseError('invalid element Cr', start)
                else:
                    raise ParseError(f'invalid symbol {s}', i)
            else:
                raise ParseError(f'invalid symbol {s}', i)

        if token_type == 5:
            raise ParseError('atom description has not finished', start)
        elif token_type == 7:
            if len(token) != 2:
                raise ParseError('invalid closure', start)
            tokens.append((6, int(''.join(token)), start))
        elif token_type == 2:
            raise ParseError('branch not closed', tokens[-1][2])
        elif token:
            tokens.append((token_type, token, start))  # C or B
        return tokens

    @classmethod
    def _fix_tokens(cls, tokens):
        out = []
        for token_type, token, position in tokens:
            if token_type == 0:  # simple atom
                out.append((0, (token, None), position))
            elif token_type == 8:
                out.append((8, (token, None), position))
            elif token_type == 5:
                out.append(cls.__atom_parse(token, position))
            else:  # as is types: 1, 2, 3, 4, 6, 9
                out.append((token_type, token, position))
        return out

    @staticmethod
    def __atom_parse(token, position):
        raw = token
        isotope = ''.join(takewhile(lambda x: x in digits, token))
        if isotope:
            token = token[len(isotope):]
            if not token:
                raise ParseError('atom token invalid', position + 1 + len(raw))
            isotope = int(isotope)
        else:
            isotope = None

        if token[0] == '*':
            element = '*'
        elif token[:2] in aromatic_symbols:
            element = token[:2]
        elif token[0] in aromatic_symbols:
            element = token[0]
        elif token[0].isupper():  # unknown symbols checked by graph
            element = token[:2] if token[1:2].islower() else token[0]
        else:
            raise ParseError('invalid atom token', position + 1 + len(raw) - len(token))
        token = token[len(element):]

        chirality = None
        if token.startswith('@'):
            stereo = '@@' if token.startswith('@@') else '@'
            token = token[len(stereo):]
            klass = match(r'(TH|AL|SP|TB|OH)\d\d?', token)
            if klass:
                klass = klass.group()
                token = token[len(klass):]
                stereo += klass
            try:
                chirality = chirality_dict[stereo]
            except KeyError:
                warning(f'unsupported chirality class {stereo} ignored')

        if token.startswith('H'):
            h = ''.join(takewhile(lambda x: x in digits, token[1:]))
            hydrogens = int(h) if h else 1
            token = token[1 + len(h):]
        else:
            hydrogens = 0

        atom_class = 0
        if ':' in token:
            i = token.index(':')
            try:
                atom_class = int(token[i + 1:])
            except ValueError:
                raise ParseError('invalid atom class', position + 1 + len(raw) - len(token) + i)
            token = token[:i]

        if token:  # charge
            try:
                charge = charge_dict[token]
            except KeyError:
                if token[0] not in '+-' or not token[1:].isdigit():
                    raise ParseError('charge token invalid', position + 1 + len(raw) - len(token))
                charge = int(token)
        else:
            charge = 0

        _type = 8 if element in aromatic_symbols else 0
        return _type, (element, BracketInfo(hydrogens, charge, isotope, chirality, atom_class)), position

    @staticmethod
    def _parse_tokens(tokens) -> MoleculeGraph:
        if not tokens:
            raise ParseError('empty SMILES', 0)
        elif tokens[0][0] not in (0, 8):
            raise ParseError('SMILES should start with atom', tokens[0][2])

        graph = MoleculeGraph()
        atoms = graph._atoms
        order = graph._stereo_order
        stack = []
        cycles = {}
        last = None
        previous = None
        branch = False
        dot = None

        for token_type, token, position in tokens:
            if token_type == 2:  # ((((((
                if previous:
                    raise ParseError('bond before side chain', previous[1])
                elif last is None:
                    raise ParseError('side chain without atom', position)
                stack.append((last, position))
                branch = True
            elif token_type == 3:  # ))))))
                if previous:
                    raise ParseError('bond before closure', previous[1])
                try:
                    last, _ = stack.pop()
                except IndexError:
                    raise ParseError('close chain more than open', position)
            elif token_type in (1, 9):  # bonds. only keeping for atoms connecting
                if previous:
                    raise ParseError('2 bonds in a row', position)
                elif last is None:
                    raise ParseError('bond without preceding atom', position)
                previous = (token, position)
            elif token_type == 4:  # disconnection
                if previous:
                    raise ParseError('bond before dot', previous[1])
                elif last is None:
                    raise ParseError('empty component', position)
                last = None
                dot = position
            elif token_type == 6:  # cycle
                if last is None:
                    raise ParseError('ring closure without atom', position)
                bond = previous[0] if previous else None
                if token not in cycles:
                    cycles[token] = (last, bond, position, len(order[last]))
                    order[last].append(-1)  # partner placeholder
                    atoms[last].add_ringbond(token, bond)
                else:
                    opener, opener_bond, _, slot = cycles.pop(token)
                    if opener == last:
                        raise ParseError('ring closure to itself', position)
                    elif graph.has_edge(opener, last):
                        raise ParseError('duplicate bond', position)
                    elif opener_bond and bond and opener_bond != bond and \
                            not (opener_bond in '/\\' and bond in '/\\'):
                        raise ParseError('not equal cycle bonds', position)

                    if opener_bond:
                        edge = graph.add_edge(opener, last, opener_bond)
                    elif bond:
                        edge = graph.add_edge(last, opener, bond)  # bond written on closing atom side
                    else:
                        edge = graph.add_edge(opener, last)
                    graph.add_closure(token, opener, last, edge)
                    atoms[last].add_ringbond(token, opener_bond or bond)
                    order[opener][slot] = last
                    order[last].append(opener)
                previous = None
            else:  # atom
                element, bracket = token
                if last is None:
                    bond = '-'
                    n = graph.add_atom(Atom(element, bracket=bracket))
                else:
                    bond = previous[0] if previous else '-'
                    atom = Atom(element, bond, bracket)
                    if branch and previous:
                        atom.branch_bond = bond
                    n = graph.add_atom(atom, last)
                    graph.add_edge(last, n, bond)
                    order[last].append(n)
                    order[n].append(last)
                if bracket and bracket.hydrogens:
                    order[n].append(None)  # implicit hydrogen
                last = n
                previous = None
                branch = False
                dot = None

        if stack:
            raise ParseError('number of ( does not equal to number of )', stack[-1][1])
        elif cycles:
            raise ParseError('cycle is not finished', min(x[2] for x in cycles.values()))
        elif previous:
            raise ParseError('bond on the end', previous[1])
        elif dot is not None:
            raise ParseError('dot on the end', dot)
        graph.finalize()
        return graph


def smiles(string: str) -> MoleculeGraph:
    """
    SMILES string parser. raise ParseError for invalid strings.
    """
    return SMILESRead.create_parser()(string)


__all__ = ['SMILESRead', 'smiles']
