import argparse
import json
import sys
from pathlib import Path
from typing import Any

from riskcheck.config.settings import Settings
from riskcheck.integrity.fingerprint import compute_fingerprint
from riskcheck.integrity.verifier import verify_report
from riskcheck.logging.logger import Log
from riskcheck.pdf.factory import PdfTextExtractorFactory
from riskcheck.processor.processor import build_generator
from riskcheck.processor.sink import FileSink


def _load_facts(path: Path) -> Any:
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


def _generate(args: argparse.Namespace, settings: Settings) -> int:
    generator = build_generator(settings)
    result = generator.generate(_load_facts(args.facts), sink=FileSink(args.output))
    print(f"fingerprint: {result.fingerprint}")
    print(f"score: {result.risk.score} / 12")
    print(f"level: {result.risk.level.value}")
    print(f"pages: {result.page_count}")
    return 0


def _verify(args: argparse.Namespace, settings: Settings) -> int:
    extractor = PdfTextExtractorFactory.create(settings)
    verification = verify_report(
        args.report.read_bytes(), _load_facts(args.facts), extractor
    )
    print(f"expected: {verification.expected}")
    print(f"embedded: {verification.embedded or 'not found'}")
    print("OK" if verification.matches else "MISMATCH")
    return 0 if verification.matches else 1


def _fingerprint(args: argparse.Namespace, settings: Settings) -> int:
    print(compute_fingerprint(_load_facts(args.facts)))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="riskcheck", description="Website compliance & risk snapshot reports"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Render a PDF report from scan facts")
    generate.add_argument("facts", type=Path)
    generate.add_argument("-o", "--output", type=Path, default=Path("report.pdf"))
    generate.set_defaults(handler=_generate)

    verify = commands.add_parser("verify", help="Check a report against stored scan facts")
    verify.add_argument("facts", type=Path)
    verify.add_argument("report", type=Path)
    verify.set_defaults(handler=_verify)

    fingerprint = commands.add_parser("fingerprint", help="Print the facts' SHA-256 fingerprint")
    fingerprint.add_argument("facts", type=Path)
    fingerprint.set_defaults(handler=_fingerprint)
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse arguments -> configure logging -> run the command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    return args.handler(args, settings)


if __name__ == "__main__":
    sys.exit(main())
