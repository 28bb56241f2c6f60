#!/usr/bin/env python3
"""
Raw ROM image loader and flash image writer

Copyright 2026 the rom2msx authors

Copying and distribution of this file, with or without modification,
are permitted in any medium without royalty provided the copyright
notice and this notice are preserved.  This file is offered as-is,
without any warranty.
"""

BANK_SIZE = 0x2000  # 8 KiB
ERASED = 0xFF

def load_rom(filename):
    """Load a raw ROM image (no header) as a bytes object.

The whole file is read at once.  An empty file is not an error; it
just has no banks.
"""
    with open(filename, 'rb') as infp:
        return infp.read()

def pad_to_banks(data, bank_size=BANK_SIZE, fill=ERASED):
    """Pad data at the end to a whole number of banks.

Return the data unchanged if its length is already a multiple of
bank_size (including zero length), otherwise a copy extended with
fill bytes up to the next multiple.
"""
    remainder = len(data) % bank_size
    if not remainder:
        return bytes(data)
    return bytes(data) + bytes([fill]) * (bank_size - remainder)

def num_banks(data, bank_size=BANK_SIZE):
    return -(-len(data) // bank_size)

def save_image(filename, data):
    with open(filename, 'wb') as outfp:
        outfp.write(data)

def read_back(filename):
    """Read a flash image that was just written, for verification."""
    with open(filename, 'rb') as infp:
        return infp.read()

def main(argv=None):
    import sys

    argv = argv or sys.argv
    for filename in argv[1:]:
        rom = load_rom(filename)
        print("%s: %d bytes, %d banks of %d KiB"
              % (filename, len(rom), num_banks(rom), BANK_SIZE // 1024))

if __name__ == '__main__':
    main()
