"""ISO/IEC 7816-4 Command APDU layout"""

# Offset of the CLA byte within APDU
OFF_CLA = 0
# Offset of the INS byte within APDU
OFF_INS = 1
# Offset of the P1 byte within APDU
OFF_P1 = 2
# Offset of the P2 byte within APDU
OFF_P2 = 3
# Offset of the Lc byte (standard) or of the extended length marker
OFF_LC = 4
# Offset of the two-byte Lc field of an extended APDU
OFF_EXT_LC = 5
# Offset of the Data field within a standard APDU
OFF_DATA = 5
# Offset of the Data field within an extended APDU
OFF_EXT_DATA = 7

# Length of the CLA INS P1 P2 header
HEADER_SIZE = 4
# Total length of a case 2 extended APDU: header, marker and two-byte Le
EXT_CASE2_SIZE = 7

# Byte at OFF_LC announcing extended length fields
EXT_MARKER = 0x00

# Largest data length for each encoding
LC_MAX_STANDARD = 255
LC_MAX_EXTENDED = 65535
# Largest expected response length, encoded as zero on the wire
LE_MAX_STANDARD = 256
LE_MAX_EXTENDED = 65536

# Value of le_or_absent when the APDU carries no Le field
LE_ABSENT = -1


class Case:
    """Structural case of a Command APDU."""

    # Not a well-formed APDU
    INVALID = 0
    # Header only
    CASE_1 = 1
    # Le only
    CASE_2 = 2
    # Lc and data
    CASE_3 = 3
    # Lc, data and Le
    CASE_4 = 4
