from __future__ import annotations
import argparse, json, logging, sys

from .models.ops import build_buffer
from .models.snapshot import BitSnapshot

log = logging.getLogger(__name__)


def cmd_show(args):
    buf = build_buffer(args.tokens)
    print(buf.describe())

def cmd_hex(args):
    buf = build_buffer(args.tokens)
    print(bytes(buf).hex())

def cmd_json(args):
    buf = build_buffer(args.tokens)
    print(json.dumps(BitSnapshot.from_buffer(buf).model_dump(mode="json"), indent=2))

def cmd_plot(args):
    from .viz import plot_bits
    buf = build_buffer(args.tokens)
    fig = plot_bits(buf, row_width=args.row_width, show=args.output is None)
    if args.output:
        fig.savefig(args.output)
        log.debug("wrote %s", args.output)


def build_parser():
    p = argparse.ArgumentParser(prog="bitstream", description="Build and inspect MSB-first bit buffers")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)
    tokens_help = "append ops: bits:1011, int:VALUE:WIDTH, run:BIT:COUNT"

    sp = sub.add_parser("show", help="print bits and bit count")
    sp.add_argument("tokens", nargs="*", help=tokens_help)
    sp.set_defaults(func=cmd_show)

    sp = sub.add_parser("hex", help="print packed bytes as hex")
    sp.add_argument("tokens", nargs="*", help=tokens_help)
    sp.set_defaults(func=cmd_hex)

    sp = sub.add_parser("json", help="print a JSON snapshot")
    sp.add_argument("tokens", nargs="*", help=tokens_help)
    sp.set_defaults(func=cmd_json)

    sp = sub.add_parser("plot", help="render the bits as a raster")
    sp.add_argument("tokens", nargs="*", help=tokens_help)
    sp.add_argument("--row-width", type=int, default=8)
    sp.add_argument("--output", default=None, help="save figure instead of showing it")
    sp.set_defaults(func=cmd_plot)

    return p


def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if ns.verbose else logging.WARNING)
    try:
        ns.func(ns)
    except ValueError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
