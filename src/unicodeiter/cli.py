from __future__ import annotations
import argparse, json, logging, sys

from pydantic import ValidationError

from .binary.codecs.errors import TranscodeError
from .binary.codecs.view import utf32_to_utf8
from .binary.reader import UnitLoadError, load_units, summarize, transcode
from .binary.writer import write_units
from .models.common import ByteOrder, Encoding
from .models.options import TranscodeOptions

logger = logging.getLogger("unicodeiter")

ENCODINGS = [e.value for e in Encoding]
BYTEORDERS = [b.value for b in ByteOrder]


def cmd_transcode(args):
    opts = TranscodeOptions(
        source=args.source,
        target=args.target,
        byteorder=args.byteorder,
        allow_overlong=args.allow_overlong,
    )
    data = write_units(transcode(args.input, opts), opts.byteorder)
    with open(args.output, "wb") as out:
        out.write(data)
    logger.info("wrote %d bytes of %s to %s", len(data), opts.target.value, args.output)
    return 0

def cmd_info(args):
    # Count through the decoding direction so malformed input is reported.
    source = Encoding(args.encoding)
    target = Encoding.UTF8 if source == Encoding.UTF32 else Encoding.UTF32
    opts = TranscodeOptions(source=source, target=target, byteorder=args.byteorder,
                            allow_overlong=args.allow_overlong)
    report = summarize(args.input, opts)
    print(json.dumps(report.model_dump(mode="json"), indent=2))
    return 0

def cmd_dump(args):
    source = Encoding(args.encoding)
    if source == Encoding.UTF32:
        units = load_units(args.input, source, ByteOrder(args.byteorder))
        # walking the encoder rejects out-of-range and surrogate values
        utf32_to_utf8(units).count()
        code_points = list(units)
    else:
        opts = TranscodeOptions(source=source, target=Encoding.UTF32, byteorder=args.byteorder,
                                allow_overlong=args.allow_overlong)
        code_points = transcode(args.input, opts)
    for cp in code_points:
        print(f"U+{cp:04X}")
    return 0

def build_parser():
    p = argparse.ArgumentParser(prog="unicodeiter", description="Lazy UTF-8/16/32 transcoding utilities")
    p.add_argument("-v", "--verbose", action="store_true", help="Log at DEBUG level")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("transcode", help="convert a file between encodings")
    sp.add_argument("input")
    sp.add_argument("output")
    sp.add_argument("--from", dest="source", required=True, choices=ENCODINGS)
    sp.add_argument("--to", dest="target", required=True, choices=ENCODINGS)
    sp.add_argument("--byteorder", default="little", choices=BYTEORDERS, help="Byte order of 16/32-bit storage")
    sp.add_argument("--allow-overlong", action="store_true", help="Accept overlong UTF-8 forms")
    sp.set_defaults(func=cmd_transcode)

    sp = sub.add_parser("info", help="print unit counts as JSON")
    sp.add_argument("input")
    sp.add_argument("--encoding", required=True, choices=ENCODINGS)
    sp.add_argument("--byteorder", default="little", choices=BYTEORDERS)
    sp.add_argument("--allow-overlong", action="store_true")
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("dump", help="print the code points of a file")
    sp.add_argument("input")
    sp.add_argument("--encoding", required=True, choices=ENCODINGS)
    sp.add_argument("--byteorder", default="little", choices=BYTEORDERS)
    sp.add_argument("--allow-overlong", action="store_true")
    sp.set_defaults(func=cmd_dump)

    return p

def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        return ns.func(ns)
    except (TranscodeError, UnitLoadError, ValidationError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
