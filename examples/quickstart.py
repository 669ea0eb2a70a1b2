import sys
from cmdapdu.apdu import CommandAPDU, code_apdu, parse_apdu
from cmdapdu.transport import CardTransport

# SELECT of the GlobalPlatform Card Manager, Le=256
SELECT_ISD = code_apdu(0x00, 0xA4, 0x04, 0x00, "A000000151000000", le=256)


def describe(apdu: CommandAPDU):
    """Print decoded fields of a Command APDU"""
    print(repr(apdu))
    if not apdu.is_valid():
        print("  invalid")
        return
    print("  case %d, %s" % (apdu.case,
                             "extended" if apdu.layout().extended
                             else "standard"))
    print("  CLA=%02X INS=%02X P1=%02X P2=%02X" % (apdu.cla, apdu.ins,
                                                 apdu.p1, apdu.p2))
    print("  Lc=%d Le=%d data=%s" % (apdu.lc, apdu.le_or_zero,
                                     apdu.argument_data.hex().upper()))


if __name__ == '__main__':
    describe(SELECT_ISD)
    for arg in [a for a in sys.argv[1:] if not a.startswith("--")]:
        describe(CommandAPDU.from_hex(arg))

    if "--send" in sys.argv:
        transport = CardTransport(debug=True)
        try:
            data, sw = transport.transmit(parse_apdu(SELECT_ISD))
        finally:
            transport.disconnect()
        print("SW:", sw.hex().upper())
