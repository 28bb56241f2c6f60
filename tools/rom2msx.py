#!/usr/bin/env python3
"""
Convert an MSX ROM to the on-flash layout of a MegaSCC, ESE-RC755, or
Simple64K cartridge, ready to program to an SST39SF0x0 flash chip

Copyright 2026 the rom2msx authors

Copying and distribution of this file, with or without modification,
are permitted in any medium without royalty provided the copyright
notice and this notice are preserved.  This file is offered as-is,
without any warranty.
"""
assert str is not bytes
import sys
import argparse
import romimage
import flashlayout

versionText = "rom2msx 1.0"

class ArgumentParser(argparse.ArgumentParser):
    """argparse exits with status 2 on usage errors; we want 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, "%s: error: %s\n" % (self.prog, message))

def parse_argv(argv):
    chiphelp = ", ".join("%d=%s" % row
                         for row in sorted(flashlayout.chipnames.items()))
    parser = ArgumentParser(
        prog="rom2msx",
        description="Convert an MSX ROM to a flash image for a MegaSCC, "
                    "RC755, or Simple64K cartridge."
    )
    parser.add_argument("input",
                        help="path to raw ROM image")
    parser.add_argument("output",
                        help="path of flash image to write")
    parser.add_argument("--chip", type=int,
                        choices=sorted(flashlayout.chipnames),
                        default=flashlayout.DEFAULT_CHIP,
                        help="flash size in KiB (%s; default %d)"
                        % (chiphelp, flashlayout.DEFAULT_CHIP))
    parser.add_argument("--type", dest="carttype",
                        choices=list(flashlayout.carttypes),
                        default="mega",
                        help="cartridge mapper (default mega)")
    parser.add_argument("--addr", type=int,
                        choices=range(flashlayout.SIMPLE64K_BANKS),
                        metavar="0..7",
                        help="Simple64K start bank; default 2 for ROMs "
                             "up to 32 KiB, otherwise 0")
    parser.add_argument("--verify", action="store_true",
                        help="read the image back and check the layout")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="show full exception")
    parser.add_argument("--version", action="version", version=versionText)
    return parser.parse_args(argv[1:])

def main(argv=None):
    args = parse_argv(argv or sys.argv)
    carttype = flashlayout.lookup_carttype(args.carttype)
    addr = args.addr
    if addr is not None and carttype != flashlayout.SIMPLE64K:
        print("warning: --addr applies only to --type s64k; ignoring",
              file=sys.stderr)
        addr = None

    filename = args.input
    try:
        rom = romimage.load_rom(filename)
        image, report = flashlayout.convert(rom, args.chip, carttype, addr)
        filename = args.output
        romimage.save_image(filename, image)
        if args.verify:
            flashlayout.verify(romimage.read_back(filename),
                               romimage.pad_to_banks(rom),
                               report['start_bank'], report['bank_count'])
    except (OSError, ValueError) as e:
        if args.verbose:
            from traceback import print_exc
            print_exc()
        print("%s: %s" % (filename, e), file=sys.stderr)
        return 1

    print(flashlayout.format_report(report, args.verify))
    return 0

if __name__ == '__main__':
    sys.exit(main())
