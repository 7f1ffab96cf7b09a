"""
Conversion of the raw bytes of a field into a value, depending on the type
indicated in the structure file.

The file is not always self-consistent so the conversion never fails: when
there is nothing to convert the "XX" placeholder is returned, unknown values
of a selection are returned as "UNKNOWN: <hex dump>" and booleans that are
neither 0xff nor 0x00 become None.
"""
import logging
from typing import Callable, Dict, Mapping, Optional, Union

from bitstring import Bits

from .enum import TypeTag


logger = logging.getLogger(__name__)

EMPTY = 'XX'
UNKNOWN = 'UNKNOWN: '

Value = Union[str, int, bool, None]


def hexdump(raw: bytes) -> str:
    '''Returns hex value for each byte, separated by spaces'''
    if not raw:
        return EMPTY

    return ' '.join('%02X' % _ for _ in raw)


def to_null_byte(raw: bytes) -> bytes:
    '''Returns the bytes up to the first null byte, the rest is junk data'''
    pos = raw.find(b'\x00')

    return raw if pos < 0 else raw[:pos]


def decode_asc(raw: bytes, encoding='latin-1', **kw) -> str:
    return to_null_byte(raw).decode(encoding)


def decode_bin(raw: bytes, **kw) -> str:
    return hexdump(raw)


def decode_b2a(raw: bytes, **kw) -> Union[int, str]:
    if not raw:
        return EMPTY

    return Bits(raw).uint


def decode_int(raw: bytes, **kw) -> Union[int, str]:
    if not raw:
        return EMPTY

    return Bits(raw).uintle


def decode_inb(raw: bytes, **kw) -> Union[int, str]:
    if not raw:
        return EMPTY

    return Bits(raw).uintbe


def decode_boo(raw: bytes, **kw) -> Optional[bool]:
    value = hexdump(raw)
    if value == 'FF':
        return True
    if value == '00':
        return False

    logger.debug(f'boolean with value {value} is undefined')

    return None


def decode_sel(raw: bytes, selection: Optional[Mapping[str, str]] = None, **kw) -> str:
    value = hexdump(raw)
    if selection is None or value not in selection:
        logger.debug(f'selection doesn\'t have element with value {value} in it')
        return UNKNOWN + value

    return selection[value]


DECODERS: Dict[TypeTag, Callable[..., Value]] = {
    TypeTag.ASC: decode_asc,
    TypeTag.BIN: decode_bin,
    TypeTag.B2A: decode_b2a,
    TypeTag.INT: decode_int,
    TypeTag.INB: decode_inb,
    TypeTag.BOO: decode_boo,
    TypeTag.SEL: decode_sel,
}


def decode(tag: TypeTag, raw: bytes, selection: Optional[Mapping[str, str]] = None, encoding='latin-1') -> Value:
    '''Convert the raw bytes of a field.

    The "selection" argument is the mapping used by the fields of
    type TypeTag.SEL and it's ignored by the others.'''
    return DECODERS[TypeTag(tag)](raw, selection=selection, encoding=encoding)
