"""Sending validated Command APDUs to a card through pyscard"""

from smartcard.System import readers
from smartcard.CardConnection import CardConnection
from .apdu import parse_apdu
from .util import hex_str


def get_reader(name=""):
    """Return first found reader."""
    rarr = [r for r in readers() if name in str(r)]
    if len(rarr) == 0:
        raise RuntimeError("Reader not found")
    return rarr[0]


def get_connection(reader=None, protocol=CardConnection.T1_protocol):
    """Establish connection with a card."""
    if reader is None:
        reader = get_reader()
    elif isinstance(reader, str):
        reader = get_reader(reader)
    connection = reader.createConnection()
    connection.connect(protocol)
    return connection


class CardTransport:
    """Card connection accepting only well-formed Command APDUs"""

    def __init__(self, connection=None, reader=None, debug=False):
        if connection is None:
            connection = get_connection(reader)
        self.connection = connection
        self.debug = debug

    def transmit(self, apdu) -> tuple:
        """Validate and send APDU returning response data and status bytes.

        :param apdu: CommandAPDU, bytes or hex string
        :return: tuple (data, sw) of byte strings
        """
        apdu = parse_apdu(apdu)
        if self.debug:
            print(">>", hex_str(apdu))
        data, *sw = self.connection.transmit(list(apdu))
        data, sw = bytes(data), bytes(sw)
        if self.debug:
            print("<<", hex_str(data), hex_str(sw))
        return data, sw

    def disconnect(self):
        """Disconnect from smart card interface."""
        self.connection.disconnect()
