"""ISO/IEC 7816-4 Command APDU model

A Command APDU is the 4-byte header CLA INS P1 P2 followed by an optional
body. The body carries no tag telling which of the four cases it is, so the
case and the length encoding are inferred from the total length and from the
byte at offset 4:

    Case 1:  CLA INS P1 P2
    Case 2:  CLA INS P1 P2 Le                        (standard)
             CLA INS P1 P2 00 Le1 Le2                (extended)
    Case 3:  CLA INS P1 P2 Lc Data                   (standard)
             CLA INS P1 P2 00 Lc1 Lc2 Data           (extended)
    Case 4:  CLA INS P1 P2 Lc Data Le                (standard)
             CLA INS P1 P2 00 Lc1 Lc2 Data Le1 Le2   (extended)

An explicit Le of zero stands for the largest value of the encoding: 256 for
standard and 65536 for extended APDUs.
"""

from collections import namedtuple
from .util import *
from .iso7816 import *

# Outcome of the structural classification
Layout = namedtuple('Layout', ['case', 'extended', 'lc'])
# Snapshot of all decoded fields, Le is LE_ABSENT if not present
APDUFields = namedtuple('APDUFields', ['cla', 'ins', 'p1', 'p2', 'lc', 'data',
                                       'le'])

_INVALID = Layout(Case.INVALID, False, 0)


def classify(data) -> Layout:
    """Determine case, encoding and Lc of a raw APDU.

    Never raises; returns a layout with `Case.INVALID` if the length fields
    disagree with the length of the byte sequence.
    """
    n = len(data)
    if n < HEADER_SIZE:
        return _INVALID
    if n == HEADER_SIZE:
        return Layout(Case.CASE_1, False, 0)
    if n == OFF_LC + 1:
        return Layout(Case.CASE_2, False, 0)

    if data[OFF_LC] == EXT_MARKER:
        if n < EXT_CASE2_SIZE:
            return _INVALID
        if n == EXT_CASE2_SIZE:
            return Layout(Case.CASE_2, True, 0)
        lc = bytes_to_int_big_endian(data[OFF_EXT_LC:OFF_EXT_DATA])
        if n == OFF_EXT_DATA + lc:
            return Layout(Case.CASE_3, True, lc)
        if n == OFF_EXT_DATA + lc + 2:
            return Layout(Case.CASE_4, True, lc)
        return _INVALID

    lc = data[OFF_LC]
    if n == OFF_DATA + lc:
        return Layout(Case.CASE_3, False, lc)
    if n == OFF_DATA + lc + 1:
        return Layout(Case.CASE_4, False, lc)
    return _INVALID


class CommandAPDU(bytes):
    """Immutable Command APDU.

    Construction copies the input and never validates it; call `is_valid()`
    before trusting any decoded field. On an invalid APDU the field
    accessors fall back to the plain length dispatch keyed on
    `is_extended()` and raise IndexError when the sequence is shorter than
    that dispatch or its Lc field requires; any other result is meaningless
    in that case.
    """

    __slots__ = ()

    def __new__(cls, data=None):
        return super(CommandAPDU, cls).__new__(cls, to_bytes(data))

    @classmethod
    def from_bytes(cls, data) -> 'CommandAPDU':
        """Create APDU from a bytes-like object or a list of integers."""
        return cls(data)

    @classmethod
    def from_hex(cls, text: str) -> 'CommandAPDU':
        """Create APDU from a hex string, whitespace is ignored."""
        return cls(to_bytes(text))

    def __str__(self):
        return hex_str(self)

    def __repr__(self):
        return "%s(%s)" % (type(self).__name__, str(self))

    def raw(self) -> bytes:
        """Returns a copy of the whole APDU as plain bytes."""
        return bytes(bytearray(self))

    def layout(self) -> Layout:
        return classify(self)

    @property
    def case(self) -> int:
        return classify(self).case

    def is_valid(self) -> bool:
        """Checks that length fields agree with the length of the APDU."""
        return classify(self).case != Case.INVALID

    def is_extended(self) -> bool:
        """Returns True if the APDU looks like one with extended length
        fields, i.e. it is at least 7 bytes long and the high byte of the
        extended length at offset 5 is zero.
        """
        return len(self) >= EXT_CASE2_SIZE and self[OFF_EXT_LC] == 0x00

    def _field_layout(self) -> Layout:
        layout = classify(self)
        if layout.case != Case.INVALID:
            return layout

        # Lengths 4 and 5 are always valid, anything else is decoded by
        # the byte at offset 5 only
        n = len(self)
        extended = self.is_extended()
        if extended and n == EXT_CASE2_SIZE:
            return Layout(Case.CASE_2, True, 0)
        if extended:
            lc = bytes_to_int_big_endian(self[OFF_EXT_LC:OFF_EXT_DATA])
            data_offset = OFF_EXT_DATA
        else:
            lc = self[OFF_LC]
            data_offset = OFF_DATA
        if n < data_offset + lc:
            raise IndexError("APDU shorter than its Lc field")
        if n == data_offset + lc:
            return Layout(Case.CASE_3, extended, lc)
        return Layout(Case.CASE_4, extended, lc)

    def _le_field(self, layout: Layout):
        """Returns raw value of the Le field or None if it is absent"""
        if layout.case == Case.CASE_2:
            if layout.extended:
                return bytes_to_int_big_endian(
                    self[OFF_EXT_LC:OFF_EXT_DATA])
            return self[OFF_LC]
        if layout.case == Case.CASE_4:
            if layout.extended:
                return bytes_to_int_big_endian(self[-2:])
            return self[-1]
        return None

    @property
    def cla(self) -> int:
        return self[OFF_CLA]

    @property
    def ins(self) -> int:
        return self[OFF_INS]

    @property
    def p1(self) -> int:
        return self[OFF_P1]

    @property
    def p2(self) -> int:
        return self[OFF_P2]

    @property
    def lc(self) -> int:
        """Value of the Lc field, 0 if there is no data field"""
        return self._field_layout().lc

    def has_data(self) -> bool:
        return self.lc != 0

    @property
    def le_or_zero(self) -> int:
        """Expected response length, 0 if there is no Le field.

        An explicit zero is returned as 256 (standard) or 65536 (extended).
        """
        layout = self._field_layout()
        le = self._le_field(layout)
        if le is None:
            return 0
        if le == 0:
            if layout.extended:
                return LE_MAX_EXTENDED
            return LE_MAX_STANDARD
        return le

    @property
    def le_or_absent(self) -> int:
        """Raw value of the Le field, LE_ABSENT if there is no Le field."""
        le = self._le_field(self._field_layout())
        return LE_ABSENT if le is None else le

    @property
    def argument_data(self) -> bytes:
        """Copy of the data field, empty if there is none."""
        layout = self._field_layout()
        if layout.lc == 0:
            return b''
        offset = OFF_EXT_DATA if layout.extended else OFF_DATA
        return bytes(self[offset: offset + layout.lc])

    def fields(self) -> APDUFields:
        return APDUFields(self.cla, self.ins, self.p1, self.p2, self.lc,
                          self.argument_data, self.le_or_absent)


def parse_apdu(apdu) -> CommandAPDU:
    """Parse and validate APDU given as object, bytes or hex string."""
    if not isinstance(apdu, CommandAPDU):
        apdu = CommandAPDU(apdu)
    if not apdu.is_valid():
        raise ValueError("Invalid APDU")
    return apdu


def code_apdu(cla: int, ins: int, p1: int, p2: int, data=b'', le=None,
              extended=None) -> CommandAPDU:
    """Encode APDU from its fields.

    :param data: command data, bytes or hex string
    :param le: expected response length, None if no response data is
        expected; 256 and 65536 are coded as zero
    :param extended: force extended (True) or standard (False) length
        fields, by default extended fields are used only if required
    :return: encoded APDU
    """
    for x in (cla, ins, p1, p2):
        if not 0 <= x <= 0xFF:
            raise ValueError("Invalid header byte")
    data = to_bytes(data)
    if len(data) > LC_MAX_EXTENDED:
        raise ValueError("Data too long")
    if le is not None and not 1 <= le <= LE_MAX_EXTENDED:
        raise ValueError("Invalid Le")

    need_extended = (len(data) > LC_MAX_STANDARD or
                     (le is not None and le > LE_MAX_STANDARD))
    if extended is None:
        extended = need_extended
    elif not extended and need_extended:
        raise ValueError("Fields do not fit standard APDU")

    apdu = bytearray([cla, ins, p1, p2])
    if extended:
        if data:
            apdu.append(EXT_MARKER)
            apdu += int_to_bytes_big_endian(len(data), 2) + data
        elif le is not None:
            apdu.append(EXT_MARKER)
        if le is not None:
            apdu += int_to_bytes_big_endian(le % LE_MAX_EXTENDED, 2)
    else:
        if data:
            apdu.append(len(data))
            apdu += data
        if le is not None:
            apdu.append(le % LE_MAX_STANDARD)
    return CommandAPDU(apdu)
