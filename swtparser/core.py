"""
Core module: interpretation of a region of binary data following a structure file.

"""
import logging
from typing import Dict, List, NamedTuple, Optional

from . import fields
from .enum import SchemaKind, TypeTag
from .exceptions import FormatException
from .schema import SchemaStore, selection_name


class AuditEntry(NamedTuple):
    '''Where a field has been read, with offsets relative to the whole file.
    It's useful only for marking up the binary data while developing.'''
    start: int
    end: int
    type: TypeTag
    label: str

    def __str__(self):
        return '%08x-%08x %s %s' % (self.start, self.end, self.type.value, self.label)


class DecodedRecord(object):
    '''The values of the fields (by label, in the order of the structure file)
    and where they have been read from.

    The fields marked as constants in the structure file are
    available also in the attribute "constants".'''

    def __init__(self, values=None, audit=None, constants=None):
        self.fields: Dict[str, fields.Value] = values if values is not None else {}
        self.audit: List[AuditEntry] = audit if audit is not None else []
        self.constants: Dict[str, fields.Value] = constants if constants is not None else {}

    def __getitem__(self, label):
        return self.fields[label]

    def __contains__(self, label):
        return label in self.fields

    def __eq__(self, other):
        if not isinstance(other, DecodedRecord):
            return NotImplemented

        return (self.fields, self.audit, self.constants) == (other.fields, other.audit, other.constants)

    def __repr__(self):
        msg = ['%s=%r' % (label, value) for label, value in self.fields.items()]
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def get(self, label, default=None):
        return self.fields.get(label, default)


class RecordInterpreter(object):
    """Apply a structure to a region of the data.

    The offsets in the structure are relative to the start of the region;
    when no length is given the region is the whole data, this is the case
    of the general data at the start of the file.
    """

    def __init__(self, store: SchemaStore, encoding='latin-1'):
        self.logger = logging.getLogger(__name__)
        self.store = store
        self.encoding = encoding

    def region(self, data: bytes, start=0, length=None) -> bytes:
        if length is None:
            return data

        if start < 0 or start >= len(data) or start + length > len(data):
            raise FormatException(
                f'region 0x{start:x}-0x{start + length:x} is outside of the data (0x{len(data):x} bytes)')

        return data[start:start + length]

    def selection(self, label: str, version: Optional[str] = None):
        return self.store.load(selection_name(label), SchemaKind.REPLACEMENTS, version=version)

    def interpret(self, data: bytes, name: str, start=0, length=None, version: Optional[str] = None) -> DecodedRecord:
        try:
            binary = self.region(data, start, length)
        except FormatException as e:
            e.chain.append(name)
            raise

        self.logger.debug(f'interpreting \'{name}\' at 0x{start:x}')

        record = DecodedRecord()

        for field in self.store.load(name, SchemaKind.FIELDS, version=version):
            raw = binary[field.start:field.last + 1]

            record.audit.append(AuditEntry(
                start + field.start,
                start + field.last,
                field.type,
                field.label,
            ))

            # the lookup table is loaded only when used
            selection = self.selection(field.label, version) if field.type == TypeTag.SEL else None

            value = fields.decode(field.type, raw, selection=selection, encoding=self.encoding)
            record.fields[field.label] = value

            if field.constant:
                record.constants[field.label] = value

        return record
