#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Tool for decoding, encoding and sending Command APDUs"""

__version__ = "0.1.0"

import click
from cmdapdu.apdu import CommandAPDU, code_apdu
from cmdapdu.iso7816 import Case, LE_ABSENT
from cmdapdu.util import hex_str

# Case names
_case_names = {
    Case.INVALID: 'invalid',
    Case.CASE_1: 'Case 1',
    Case.CASE_2: 'Case 2',
    Case.CASE_3: 'Case 3',
    Case.CASE_4: 'Case 4'
}


def _byte(text):
    """Parses a header byte given in hex"""
    value = int(text, 16)
    if not 0 <= value <= 0xff:
        raise click.BadParameter(f"'{text}' is not a byte")
    return value


@ click.group()
@ click.version_option(__version__, message="%(version)s")
def cli():
    """Tool for decoding, encoding and sending Command APDUs"""


@ cli.command()
@ click.argument(
    'apdu_hex',
    required=True,
    type=click.STRING,
    metavar='<apdu_hex>'
)
@ click.option(
    '--lenient',
    is_flag=True,
    default=False,
    help='Decode fields even if the APDU is invalid.'
)
def decode(apdu_hex, lenient):
    """Decodes APDU given in hex"""

    try:
        apdu = CommandAPDU.from_hex(apdu_hex)
    except ValueError as e:
        raise click.ClickException(str(e))
    layout = apdu.layout()
    print(f"APDU:     {hex_str(apdu, ' ')}")
    print(f"Case:     {_case_names[layout.case]}")
    if layout.case == Case.INVALID and not lenient:
        raise click.ClickException("Invalid APDU")
    if layout.case == Case.INVALID:
        extended = apdu.is_extended()
    else:
        extended = layout.extended
    try:
        dump_fields(apdu, extended)
    except IndexError:
        raise click.ClickException("APDU too short to decode")


def dump_fields(apdu, extended):
    """Dumps decoded APDU fields"""

    print(f"Encoding: {'extended' if extended else 'standard'}")
    print(f"CLA: {apdu.cla:02X}  INS: {apdu.ins:02X}  "
          f"P1: {apdu.p1:02X}  P2: {apdu.p2:02X}")
    print(f"Lc:       {apdu.lc}")
    if apdu.le_or_absent == LE_ABSENT:
        print("Le:       absent")
    else:
        print(f"Le:       {apdu.le_or_absent} (Ne={apdu.le_or_zero})")
    if apdu.has_data():
        print(f"Data:     {hex_str(apdu.argument_data)}")


@ cli.command()
@ click.option('--cla', required=True, type=click.STRING, help='CLA (hex).')
@ click.option('--ins', required=True, type=click.STRING, help='INS (hex).')
@ click.option('--p1', default='00', type=click.STRING, help='P1 (hex).')
@ click.option('--p2', default='00', type=click.STRING, help='P2 (hex).')
@ click.option('--data', default='', type=click.STRING,
               help='Command data (hex).')
@ click.option('--le', default=None, type=click.INT,
               help='Expected response length, 1 to 65536.')
@ click.option('--extended', is_flag=True, default=False,
               help='Force extended length fields.')
def encode(cla, ins, p1, p2, data, le, extended):
    """Encodes APDU from its fields"""

    try:
        apdu = code_apdu(_byte(cla), _byte(ins), _byte(p1), _byte(p2),
                         data, le, extended or None)
    except ValueError as e:
        raise click.ClickException(str(e))
    print(hex_str(apdu))


@ cli.command()
@ click.argument(
    'apdu_hex',
    required=True,
    type=click.STRING,
    metavar='<apdu_hex>'
)
@ click.option('--reader', default='', type=click.STRING,
               help='Part of the reader name, first reader by default.')
@ click.option('--debug', is_flag=True, default=False,
               help='Print exchanged APDUs.')
def send(apdu_hex, reader, debug):
    """Validates APDU and sends it to the card"""

    from cmdapdu.transport import CardTransport

    try:
        transport = CardTransport(reader=reader, debug=debug)
    except RuntimeError as e:
        raise click.ClickException(str(e))
    try:
        data, sw = transport.transmit(apdu_hex)
    except ValueError as e:
        raise click.ClickException(str(e))
    finally:
        transport.disconnect()
    if data:
        print(f"Data: {hex_str(data)}")
    print(f"SW:   {hex_str(sw)}")


if __name__ == '__main__':
    cli()
