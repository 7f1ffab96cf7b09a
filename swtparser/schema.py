'''
Loading of the structure files describing the layout of a part of the file.

A structure file of kind "fields" contains one line per field, with the
following values separated by a tabulator

    starting offset (hexadecimal)
    ending offset (hexadecimal, optional for one byte long fields)
    type (see TypeTag)
    label (optional)

while one of kind "replacements" maps a raw value (as hex dump) to its label.
Lines starting with '#' are comments.

Different versions of the file format can override single structure files:
they are searched first in the directories named after the version, from the
most specific one to the generic one, i.e. for version "801"

    structure-v801/
    structure-v80x/
    structure-v8xx/
    structure/
'''
import logging
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, NamedTuple, Optional, Tuple, Union

from .enum import SchemaKind, TypeTag
from .exceptions import (
    SchemaKindException,
    SchemaNotFoundException,
    SchemaSyntaxException,
)


COMMENT = '#'
SEPARATOR = '\t'
WILDCARD = 'x'

COLUMNS = {
    SchemaKind.FIELDS: 4,
    SchemaKind.REPLACEMENTS: 2,
}


class FieldSchema(NamedTuple):
    start: int
    end: Optional[int]
    type: TypeTag
    label: str
    constant: bool = False

    @property
    def last(self) -> int:
        '''Offset of the last byte of the field (a missing end means a single byte)'''
        return self.start if self.end is None else self.end

    @property
    def size(self) -> int:
        return self.last - self.start + 1


SchemaSet = Union[Tuple[FieldSchema, ...], Mapping[str, str]]


def is_constant_label(label: str) -> bool:
    '''All uppercase labels wrapped in underscores, like "_FILEVERSION_"'''
    return len(label) > 2 and label.upper() == label and label.startswith('_') and label.endswith('_')


def selection_name(label: str) -> str:
    '''Name of the replacements structure file used by a "sel" field'''
    area = label.lower()
    pos = area.find(' ')
    if pos > 0:
        area = area[:pos]

    return f'{area}-selection'


def candidate_dirs(prefix: str, version: Optional[str] = None) -> List[str]:
    dirs = []
    if version:
        length = len(version)
        for i in range(length):
            dirs.append('%s-v%s%s' % (prefix, version[:length - i], WILDCARD * i))

    dirs.append(prefix)

    return dirs


def read_text(path: Path) -> str:
    raw = path.read_bytes()
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        return raw.decode('latin-1')


def _parse_offset(value: str, path, lineno) -> int:
    try:
        return int(value, 16)
    except ValueError:
        raise SchemaSyntaxException(f'\'{value}\' is not an hexadecimal offset', path, lineno)


def parse_field(columns: List[str], path, lineno) -> FieldSchema:
    begin, end, type_, label = columns

    start = _parse_offset(begin, path, lineno)
    last = _parse_offset(end, path, lineno) if end else None

    if last is not None and last < start:
        raise SchemaSyntaxException(f'field ends (0x{last:x}) before it starts (0x{start:x})', path, lineno)

    try:
        tag = TypeTag(type_)
    except ValueError:
        raise SchemaSyntaxException(f'unknown type \'{type_}\'', path, lineno)

    if not label:
        label = 'BIN ' + begin + ('-' + end if last is not None and last != start else '')

    constant = is_constant_label(label)
    if constant:
        label = label[1:-1]

    return FieldSchema(start, last, tag, label, constant)


def parse_schema(text: str, kind: SchemaKind, path='<string>') -> SchemaSet:
    '''Parse the content of a structure file.'''
    elements = COLUMNS[kind]

    fields: List[FieldSchema] = []
    replacements: Dict[str, str] = {}

    for lineno, line in enumerate(text.splitlines(), start=1):
        if line.startswith(COMMENT):
            continue
        line = line.rstrip()
        if not line:
            continue

        columns = line.split(SEPARATOR)
        if len(columns) == elements - 1:
            columns.append('')
        if len(columns) != elements:
            raise SchemaSyntaxException(
                f'expected {elements} columns, found {len(columns)}', path, lineno)

        if kind == SchemaKind.FIELDS:
            fields.append(parse_field(columns, path, lineno))
        else:
            key, replacement = columns
            replacements[key] = replacement

    if kind == SchemaKind.FIELDS:
        return tuple(fields)

    return MappingProxyType(replacements)


class SchemaStore(object):
    '''Read-through cache of the structure files.

    Once loaded a structure is never read again from disk: the returned
    objects are immutable so they can be shared between all the records
    (and all the files) interpreted with this store.
    '''

    def __init__(self, root, prefix='structure'):
        self.logger = logging.getLogger(__name__)
        self.root = Path(root)
        self.prefix = prefix
        self._cache: Dict[Tuple[str, SchemaKind, Optional[str]], SchemaSet] = {}
        self._lock = threading.Lock()

    def __repr__(self):
        return '<%s(%s, %d cached)>' % (self.__class__.__name__, self.root / self.prefix, len(self._cache))

    def resolve(self, name: str, version: Optional[str] = None) -> Path:
        '''Find the most specific structure file for the given version.'''
        tried = []
        for directory in candidate_dirs(self.prefix, version):
            path = self.root / directory / f'{name}.txt'
            tried.append(path)
            if path.is_file():
                self.logger.debug('structure \'%s\' resolved at %s' % (name, path))
                return path

        raise SchemaNotFoundException(name, tried)

    def load(self, name: str, kind=SchemaKind.FIELDS, version: Optional[str] = None) -> SchemaSet:
        if not isinstance(kind, SchemaKind):
            try:
                kind = SchemaKind(kind)
            except ValueError:
                raise SchemaKindException(f'\'{kind}\' is not a valid kind for a structure file', chain=[name])

        key = (name, kind, version)

        schema = self._cache.get(key)
        if schema is not None:
            return schema

        with self._lock:
            # someone could have loaded it while we were waiting
            if key not in self._cache:
                path = self.resolve(name, version)
                self.logger.debug(f'parsing {kind.value} from {path}')
                self._cache[key] = parse_schema(read_text(path), kind, path=path)

            return self._cache[key]

    def clear(self):
        with self._lock:
            self._cache.clear()
