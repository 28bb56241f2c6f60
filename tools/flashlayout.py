#!/usr/bin/env python3
"""
MSX cartridge flash layout for MegaSCC, ESE-RC755, and Simple64K

Copyright 2026 the rom2msx authors

Copying and distribution of this file, with or without modification,
are permitted in any medium without royalty provided the copyright
notice and this notice are preserved.  This file is offered as-is,
without any warranty.

All three boards see the flash as a row of 8 KiB banks.  A ROM is
padded to whole banks and copied bank by bank into an image the size
of the chip, and whatever isn't covered by the ROM stays $FF, the
value an erased flash chip reads back.

MegaSCC (Konami SCC mapper) and RC755 always start at bank 0.
Simple64K exposes only the first 64 KiB of the chip, that is banks
0-7, mapped straight into the Z80 address space.  A ROM of 32 KiB or
less goes at bank 2 ($4000) unless the user picks a start bank;
anything larger starts at bank 0 ($0000).
"""
from romimage import BANK_SIZE, ERASED, pad_to_banks

MEGASCC = 'MegaSCC'
RC755 = 'RC755'
SIMPLE64K = 'Simple64K'

carttypes = {
    'mega': MEGASCC, 'scc': MEGASCC, 'megascc': MEGASCC,
    'rc755': RC755,
    's64k': SIMPLE64K, 'simple64k': SIMPLE64K,
}

# SST39SF0x0 parts by capacity in KiB
chipnames = {
    64: 'SST39SF512',
    128: 'SST39SF010',
    256: 'SST39SF020',
    512: 'SST39SF040',
}
DEFAULT_CHIP = 128

SIMPLE64K_BANKS = 8
SIMPLE64K_SMALL_ROM = 32 * 1024

class CapacityError(ValueError):
    """The ROM doesn't fit where it was asked to go."""
    pass

class VerifyError(ValueError):
    """A written image doesn't read back as the expected layout."""
    pass

def lookup_carttype(name):
    """Translate a type name or alias to MEGASCC, RC755, or SIMPLE64K."""
    if name in (MEGASCC, RC755, SIMPLE64K):
        return name
    try:
        return carttypes[name]
    except (KeyError, TypeError):
        raise ValueError("unknown cartridge type %s (use %s)"
                         % (repr(name), "|".join(carttypes)))

def check_chip(chip_kib):
    if chip_kib not in chipnames:
        raise ValueError("unsupported chip size %s (use %s)"
                         % (chip_kib, ", ".join(str(k) for k in chipnames)))
    return chip_kib * 1024

def start_bank(carttype, rom_len, addr=None):
    """Calculate the bank where the first 8 KiB of the ROM goes.

carttype -- MEGASCC, RC755, or SIMPLE64K
rom_len -- length in bytes of the ROM after padding to whole banks
addr -- for Simple64K only, the requested start bank (0-7), or None
    to choose based on rom_len; ignored for other types

Raise CapacityError if a Simple64K ROM won't fit in banks 0-7.
"""
    if carttype != SIMPLE64K:
        return 0
    banks = rom_len // BANK_SIZE
    if addr is not None:
        if addr + banks > SIMPLE64K_BANKS:
            raise CapacityError("Simple64K: --addr %d + %d banks exceeds %d banks"
                                % (addr, banks, SIMPLE64K_BANKS))
        return addr

    start = 2 if rom_len <= SIMPLE64K_SMALL_ROM else 0
    if start + banks > SIMPLE64K_BANKS:
        raise CapacityError("Simple64K: auto start doesn't fit; "
                            "try a smaller ROM or pass --addr")
    return start

def place_banks(image, rom, start):
    """Copy each bank of rom into image starting at bank start.

image -- a bytearray the size of the chip
rom -- ROM data already padded to whole banks
"""
    for bank in range(len(rom) // BANK_SIZE):
        dst_off = (start + bank) * BANK_SIZE
        src_off = bank * BANK_SIZE
        if dst_off + BANK_SIZE > len(image):
            raise CapacityError("output overflow: bank %d placement exceeds chip size"
                                % bank)
        image[dst_off:dst_off + BANK_SIZE] = rom[src_off:src_off + BANK_SIZE]

def convert(rom, chip_kib=DEFAULT_CHIP, carttype=MEGASCC, addr=None):
    """Lay out a ROM image for programming to a flash chip.

rom -- raw ROM data of any length
chip_kib -- flash capacity in KiB: 64, 128, 256, or 512
carttype -- MEGASCC, RC755, SIMPLE64K, or an alias from carttypes
addr -- Simple64K start bank (0-7), or None for automatic

Return (image, report), where image is a bytes object exactly the
size of the chip and report is a dictionary with these keys:
'type': display name of the cartridge type
'chip_size_kib': chip_kib
'bank_count': number of 8 KiB banks written
'start_bank': bank number in image where the ROM begins

Raise ValueError for a bad chip size, type, or addr, or
CapacityError if the ROM doesn't fit.
"""
    chip_bytes = check_chip(chip_kib)
    carttype = lookup_carttype(carttype)
    if addr is not None and not 0 <= addr < SIMPLE64K_BANKS:
        raise ValueError("--addr must be 0..7, not %s" % (addr,))

    rom = pad_to_banks(rom)
    bank_count = len(rom) // BANK_SIZE
    if carttype == SIMPLE64K and bank_count > SIMPLE64K_BANKS:
        raise CapacityError("ROM too large for Simple64K (max 64 KiB)")
    if len(rom) > chip_bytes:
        raise CapacityError("ROM (%d KiB after padding) is larger than %d KiB chip"
                            % (len(rom) // 1024, chip_kib))

    image = bytearray([ERASED]) * chip_bytes
    start = start_bank(carttype, len(rom), addr)
    place_banks(image, rom, start)
    report = {
        'type': carttype,
        'chip_size_kib': chip_kib,
        'bank_count': bank_count,
        'start_bank': start,
    }
    return bytes(image), report

def verify(image, rom, start, bank_count):
    """Check a flash image read back from disk against the padded ROM.

Every byte of the placed banks must match rom, and every other byte
must be $FF.  Raise VerifyError at the first difference.
"""
    placed_end = (start + bank_count) * BANK_SIZE
    if len(image) < placed_end:
        raise VerifyError("short read: image is %d bytes, need at least %d"
                          % (len(image), placed_end))
    for bank in range(bank_count):
        dst_off = (start + bank) * BANK_SIZE
        src_off = bank * BANK_SIZE
        if (image[dst_off:dst_off + BANK_SIZE]
            != rom[src_off:src_off + BANK_SIZE]):
            raise VerifyError("mismatch in bank %d" % bank)

    placed_start = start * BANK_SIZE
    for lo, hi in ((0, placed_start), (placed_end, len(image))):
        for offset in range(lo, hi):
            if image[offset] != ERASED:
                raise VerifyError("non-$FF byte $%02X at offset $%05X outside written area"
                                  % (image[offset], offset))

def format_report(report, verified=False):
    out = ("Type: %s, chip: %d KiB, banks written: %d, start bank: %d, bank size: %d KiB"
           % (report['type'], report['chip_size_kib'], report['bank_count'],
              report['start_bank'], BANK_SIZE // 1024))
    if verified:
        out += "; verify: OK"
    return out
