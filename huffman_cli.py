# filename: huffman_cli.py

import argparse
import sys

from huffman_core import HuffmanError, HuffmanLogic
from huffman_service import HuffmanService, frequency_table

SPECIAL_CHARS = {0: "NULL", 9: "TAB", 10: "LF", 13: "CR", 32: "SPC", 127: "DEL"}


def _read_file(path):
    with open(path, "rb") as f:
        return f.read()


def disp_char(symbol):
    if 32 < symbol < 127:
        return repr(chr(symbol))
    return SPECIAL_CHARS.get(symbol, "")


def cmd_compress(args):
    data = _read_file(args.infile)
    svc = HuffmanService()
    with open(args.outfile, "wb") as f:
        svc.compress_stream(data, f)
        size = f.tell()

    if data:
        print(f"[compress] wrote {args.outfile}: {len(data)} -> {size} bytes "
              f"({100.0 * size / len(data):.2f}%)")
    else:
        print(f"[compress] {args.infile} is empty, wrote empty {args.outfile}")
    return 0


def cmd_uncompress(args):
    with open(args.infile, "rb") as f:
        try:
            data = HuffmanService().decompress_stream(f)
        except HuffmanError as e:
            print(f"[uncompress] {args.infile}: {e}", file=sys.stderr)
            return 1
    with open(args.outfile, "wb") as f:
        f.write(data)
    print(f"[uncompress] wrote {args.outfile}: {len(data)} bytes")
    return 0


def cmd_codes(args):
    data = _read_file(args.infile)
    if not data:
        print(f"[codes] {args.infile} is empty, no code to show")
        return 0
    freqs = frequency_table(data)
    codes = HuffmanLogic().build_tree(freqs).generate_codes()

    print(" symbol   char    hex   frequency   code")
    print(60 * "-")
    for symbol in sorted(codes, key=lambda s: (-freqs[s], s)):
        print("%7d   %-5s  0x%02x  %10d   %s"
              % (symbol, disp_char(symbol), symbol, freqs[symbol], codes[symbol]))
    total_bits = sum(freqs[s] * len(codes[s]) for s in codes)
    print(f"[codes] {len(codes)} symbols, {total_bits / len(data):.3f} bits per byte")
    return 0


def build_parser():
    ap = argparse.ArgumentParser(
        prog="huffman", description="Compress files with a Huffman code built from their own bytes.")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("compress", help="compress INFILE into OUTFILE")
    p.add_argument("infile")
    p.add_argument("outfile")
    p.set_defaults(func=cmd_compress)

    p = sub.add_parser("uncompress", help="restore INFILE written by 'compress' into OUTFILE")
    p.add_argument("infile")
    p.add_argument("outfile")
    p.set_defaults(func=cmd_uncompress)

    p = sub.add_parser("codes", help="print the code table built for INFILE")
    p.add_argument("infile")
    p.set_defaults(func=cmd_codes)
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
